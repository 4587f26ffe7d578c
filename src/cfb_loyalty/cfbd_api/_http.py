"""HTTP plumbing for College Football Data API calls."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from cfb_loyalty.settings import settings

logger = logging.getLogger(__name__)

KEY_URL = "https://collegefootballdata.com/key"


class CfbdApiError(RuntimeError):
    """Raised when a College Football Data API call cannot produce data."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _get_headers() -> dict[str, str]:
    """Return authorization headers for the configured API key."""
    if not settings.has_api_key:
        raise CfbdApiError(
            "Missing CFBD API key. Add CFBD_API_KEY=your_key to a .env or key.env "
            f"file in the working directory. Get a free key at {KEY_URL}"
        )
    return {
        "Authorization": f"Bearer {settings.cfbd_api_key.strip()}",
        "Accept": "application/json",
    }


def _clean_params(params: dict[str, Any]) -> dict[str, str]:
    """Drop ``None`` / empty values and stringify the rest."""
    return {k: str(v) for k, v in params.items() if v is not None and v != ""}


def _build_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=settings.cfbd_api_base, timeout=settings.cfbd_timeout)


async def cfbd_get(path: str, params: dict[str, Any] | None = None) -> Any:
    """GET *path* from the API and return the decoded JSON body.

    Raises ``CfbdApiError`` for a missing key, any HTTP status >= 400 and
    transport failures.  No retries.
    """
    headers = _get_headers()
    query = _clean_params(params or {})
    logger.debug("CFBD GET %s %s", path, query)
    try:
        async with _build_client() as client:
            resp = await client.get(path, params=query, headers=headers)
    except httpx.HTTPError as exc:
        raise CfbdApiError(f"CFBD API request to {path} failed: {exc}") from exc

    if resp.status_code == 401:
        raise CfbdApiError(
            "CFBD API 401 Unauthorized. Check that CFBD_API_KEY (or API_KEY) is "
            f"correct in .env or key.env. Get or regenerate a key at {KEY_URL}",
            status_code=401,
        )
    if resp.status_code >= 400:
        body = resp.text[:500]
        raise CfbdApiError(
            f"CFBD API {resp.status_code}: {body or resp.reason_phrase}",
            status_code=resp.status_code,
        )
    try:
        return resp.json()
    except ValueError as exc:
        raise CfbdApiError(f"CFBD API returned invalid JSON for {path}") from exc
