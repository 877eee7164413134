"""Tests for the figtokens CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

runner = CliRunner()


def _write_config(root: Path, outputs: str = "") -> Path:
    path = root / "figtokens.toml"
    path.write_text(
        '[project]\nname = "test"\n\n[tokens]\ndir = "tokens"\n\n[figma]\nfile_id = "FILE"\n' + outputs
    )
    return path


class TestInit:
    """Test `figtokens init`."""

    def test_creates_config(self, tmp_path: Path):
        from figtokens.cli import app
        from figtokens.config import load_config

        result = runner.invoke(app, ["init", "--project", str(tmp_path)])

        assert result.exit_code == 0
        config = load_config(tmp_path / "figtokens.toml")
        assert [o.kind for o in config.outputs] == ["colors", "shadows", "breakpoints"]

    def test_refuses_overwrite(self, tmp_path: Path):
        from figtokens.cli import app

        (tmp_path / "figtokens.toml").write_text("# mine\n")
        result = runner.invoke(app, ["init", "--project", str(tmp_path)])

        assert result.exit_code == 1
        assert "already exists" in result.output
        assert (tmp_path / "figtokens.toml").read_text() == "# mine\n"

    def test_overwrite_flag(self, tmp_path: Path):
        from figtokens.cli import app

        (tmp_path / "figtokens.toml").write_text("# mine\n")
        result = runner.invoke(app, ["init", "--project", str(tmp_path), "--overwrite"])

        assert result.exit_code == 0
        assert "[project]" in (tmp_path / "figtokens.toml").read_text()


class TestGenerate:
    """Test `figtokens generate`."""

    def test_runs_outputs(self, design_system: Path):
        from figtokens.cli import app

        root = design_system.parent
        config = _write_config(
            root,
            '\n[[outputs]]\nkind = "colors"\njson_dir = "out"\nstyles_dir = "out"\n'
            '\n[[outputs]]\nkind = "json"\njson_dir = "out"\n',
        )
        result = runner.invoke(app, ["generate", "--config", str(config)])

        assert result.exit_code == 0, result.output
        assert (root / "out" / "colors.css").exists()
        assert json.loads((root / "out" / "tokens.json").read_text())["variables"]["colors"]

    def test_failing_output_exits_after_others(self, design_system: Path):
        from figtokens.cli import app

        root = design_system.parent
        config = _write_config(
            root,
            '\n[[outputs]]\nkind = "breakpoints"\nnames = ["only"]\njson_dir = "out"\nstyles_dir = "out"\n'
            '\n[[outputs]]\nkind = "shadows"\njson_dir = "out"\nstyles_dir = "out"\n',
        )
        result = runner.invoke(app, ["generate", "--config", str(config)])

        assert result.exit_code == 1
        assert "1 output(s) failed" in result.output
        assert (root / "out" / "shadows.css").exists()

    def test_missing_config(self, tmp_path: Path):
        from figtokens.cli import app

        result = runner.invoke(app, ["generate", "--config", str(tmp_path / "figtokens.toml")])

        assert result.exit_code == 1
        assert "figtokens init" in result.output

    def test_missing_manifest(self, tmp_path: Path):
        from figtokens.cli import app

        config = _write_config(tmp_path, '\n[[outputs]]\nkind = "json"\n')
        result = runner.invoke(app, ["generate", "--config", str(config)])

        assert result.exit_code == 1
        assert "Failed to load manifest file" in result.output


class TestInspect:
    """Test `figtokens inspect`."""

    def test_prints_token(self, design_system: Path):
        from figtokens.cli import app

        config = _write_config(design_system.parent)
        result = runner.invoke(app, ["inspect", "colors.primary", "--config", str(config)])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {"type": "color", "value": {"light": "#ffffff", "dark": "#000000"}}

    def test_unknown_token(self, design_system: Path):
        from figtokens.cli import app

        config = _write_config(design_system.parent)
        result = runner.invoke(app, ["inspect", "colors.nothing", "--config", str(config)])

        assert result.exit_code == 1
        assert "Token not found" in result.output


class TestFetchStyles:
    """Test `figtokens fetch-styles`."""

    def test_writes_response(self, tmp_path: Path, monkeypatch):
        from figtokens.cli import app
        from figtokens.figma import FigmaApi

        async def fake_get_styles(self):
            return {"meta": {"styles": [{"key": "s1", "file_id": self.file_id}]}}

        monkeypatch.setenv("FIGMA_TOKEN", "secret")
        monkeypatch.setattr(FigmaApi, "get_styles", fake_get_styles)
        config = _write_config(tmp_path)
        output = tmp_path / "figma" / "styles.json"

        result = runner.invoke(app, ["fetch-styles", "--output", str(output), "--config", str(config)])

        assert result.exit_code == 0, result.output
        assert json.loads(output.read_text()) == {"meta": {"styles": [{"key": "s1", "file_id": "FILE"}]}}

    def test_missing_token_env(self, tmp_path: Path, monkeypatch):
        from figtokens.cli import app

        monkeypatch.delenv("FIGMA_TOKEN", raising=False)
        config = _write_config(tmp_path)
        result = runner.invoke(
            app, ["fetch-styles", "--output", str(tmp_path / "out.json"), "--config", str(config)]
        )

        assert result.exit_code == 1
        assert "FIGMA_TOKEN" in result.output


@pytest.mark.parametrize("flag", ["--version", "-v"])
def test_version(flag):
    from figtokens.cli import app

    result = runner.invoke(app, [flag])
    assert result.exit_code == 0
    assert "figtokens" in result.output
