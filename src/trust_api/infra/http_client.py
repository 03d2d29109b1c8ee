from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

logger = logging.getLogger(__name__)

USER_AGENT = "trust-api"


class HttpClient:
    """JSON-over-HTTP client shared by the Guac and Snyk adapters.

    Non-2xx responses raise ``httpx.HTTPStatusError``; bodies that are not a
    JSON object raise ``TypeError``.
    """

    def __init__(
        self,
        base_headers: Optional[Mapping[str, str]] = None,
        timeout_seconds: float = 20.0,
    ) -> None:
        headers = {"User-Agent": USER_AGENT}
        headers.update(base_headers or {})
        self._client = httpx.Client(
            timeout=timeout_seconds,
            headers=headers,
            follow_redirects=True,
            max_redirects=10,
        )

    def _send(self, method: str, url: str, **kwargs: Any) -> dict:
        resp = self._client.request(method, url, **kwargs)
        logger.debug("%s %s -> %d", method, resp.request.url, resp.status_code)
        resp.raise_for_status()
        data = resp.json()
        if not isinstance(data, dict):
            raise TypeError(f"Expected a JSON object from {method} {url}, got {type(data).__name__}")
        return data

    def get_json(self, url: str, params: Optional[Mapping[str, Any]] = None) -> dict:
        return self._send("GET", url, params=params)

    def post_json(self, url: str, payload: dict) -> dict:
        return self._send("POST", url, json=payload)

    def close(self) -> None:
        self._client.close()
