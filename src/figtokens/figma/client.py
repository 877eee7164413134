"""
Figma REST API client.

Thin async wrapper over the file endpoints figtokens needs:

    async with FigmaApi(token, file_id) as api:
        styles = await api.get_styles()
        nodes = await api.get_nodes([style["node_id"] for style in styles["meta"]["styles"]])

Requests are not retried; any non-2xx or non-JSON response raises
FigmaApiError.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from typing import Any

import httpx

from figtokens.core.errors import FigmaApiError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.figma.com/v1"
NODE_CHUNK_SIZE = 50

# (endpoint, elapsed milliseconds)
TimeMeasureHandler = Callable[[str, float], None]


def chunk_ids(ids: list[str], size: int = NODE_CHUNK_SIZE) -> list[list[str]]:
    """Split ids into consecutive chunks of at most size."""
    return [ids[i : i + size] for i in range(0, len(ids), size)]


class FigmaApi:
    """Async client for one Figma file."""

    def __init__(
        self,
        token: str,
        file_id: str,
        *,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        client: httpx.AsyncClient | None = None,
        on_time_measure: TimeMeasureHandler | None = None,
    ):
        self.token = token
        self.file_id = file_id
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.on_time_measure = on_time_measure
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> FigmaApi:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    # -------------------------------------------------------------------------
    # Endpoints
    # -------------------------------------------------------------------------

    async def get_styles(self) -> dict[str, Any]:
        return await self._request(f"/files/{self.file_id}/styles")

    async def get_components(self) -> dict[str, Any]:
        return await self._request(f"/files/{self.file_id}/components")

    async def get_nodes(self, ids: list[str]) -> dict[str, Any]:
        """
        Fetch nodes by id, 50 ids per request, requests in parallel.

        Returns the first response with `nodes` replaced by the union of
        every chunk's nodes (chunk order).
        """
        if not ids:
            return {"nodes": {}}

        responses = await asyncio.gather(
            *(
                self._request(f"/files/{self.file_id}/nodes", params={"ids": ",".join(chunk)})
                for chunk in chunk_ids(ids)
            )
        )

        nodes: dict[str, Any] = {}
        for response in responses:
            nodes.update(response.get("nodes", {}))
        return {**responses[0], "nodes": nodes}

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    async def _request(self, endpoint: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        url = f"{self.base_url}{endpoint}"
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["X-Figma-Token"] = self.token

        started = time.perf_counter()
        try:
            response = await self.client.get(url, params=params, headers=headers, timeout=self.timeout)
        except httpx.HTTPError as e:
            raise FigmaApiError(f"Request to {endpoint} failed: {e}") from e
        elapsed_ms = (time.perf_counter() - started) * 1000

        logger.debug(f"GET {endpoint} -> {response.status_code} in {elapsed_ms:.0f}ms")
        if self.on_time_measure is not None:
            self.on_time_measure(endpoint, elapsed_ms)

        if not response.is_success:
            raise FigmaApiError(
                f"Figma API request {endpoint} failed with status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise FigmaApiError(
                f"Figma API returned a non-JSON response for {endpoint}",
                status_code=response.status_code,
            ) from e

        if not isinstance(data, dict):
            raise FigmaApiError(f"Unexpected response body for {endpoint}", status_code=response.status_code)
        return data
