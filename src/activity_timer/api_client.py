from __future__ import annotations

"""Authenticated client for the activity tracking REST API.

Thin wrapper over ``httpx``: resolves paths against the configured base URL,
attaches the bearer token and turns every transport or HTTP failure into an
``ApiError``. Retrying is left to the caller.
"""

from dataclasses import dataclass
import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


@dataclass(slots=True)
class ApiClientConfig:
    base_url: str
    token: Optional[str] = None
    timeout: float = 10.0


@dataclass(slots=True)
class ApiResponse:
    data: Any
    status_code: int = 200


class ApiClient:
    def __init__(self, config: ApiClientConfig, transport: httpx.BaseTransport | None = None):
        self._config = config
        headers = {"Accept": "application/json"}
        if config.token:
            headers["Authorization"] = f"Bearer {config.token}"
        self._client = httpx.Client(
            base_url=config.base_url,
            headers=headers,
            timeout=config.timeout,
            transport=transport,
        )

    def close(self):  # pragma: no cover simple
        self._client.close()

    # Public API ---------------------------------------------------------
    def request(
        self,
        url: str,
        method: str = "get",
        params: Optional[dict] = None,
        data: Any = None,
    ) -> ApiResponse:
        """Perform a call and return the parsed JSON body, or raise ApiError."""
        try:
            resp = self._client.request(
                method.upper(),
                url,
                params=params,
                json=data,
            )
        except httpx.HTTPError as e:
            logger.warning("request %s %s failed: %s", method.upper(), url, e)
            raise ApiError(str(e)) from e
        if resp.status_code >= 400:
            raise ApiError(f"HTTP {resp.status_code}: {resp.text[:200]}", resp.status_code)
        if not resp.content:
            return ApiResponse(data=None, status_code=resp.status_code)
        try:
            body = resp.json()
        except ValueError as e:
            raise ApiError(f"Invalid JSON response: {e}", resp.status_code) from e
        return ApiResponse(data=body, status_code=resp.status_code)


__all__ = [
    "ApiClient",
    "ApiClientConfig",
    "ApiError",
    "ApiResponse",
]
