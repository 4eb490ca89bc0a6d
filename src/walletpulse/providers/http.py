"""Shared HTTP plumbing for upstream price APIs."""

from typing import Any, Optional

import httpx

from walletpulse.config.settings import Settings
from walletpulse.core.exceptions import UpstreamUnavailableError


def build_http_client(settings: Settings) -> httpx.AsyncClient:
    """Create the AsyncClient shared by all upstream providers."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        headers={
            "Accept": "application/json",
            "User-Agent": settings.user_agent,
        },
        follow_redirects=True,
    )


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    source: str,
    params: Optional[dict[str, Any]] = None,
    timeout: Optional[float] = None,
) -> Any:
    """
    GET a JSON document from an upstream API.

    Transport errors, timeouts, non-2xx statuses and invalid JSON are all
    raised as UpstreamUnavailableError so callers handle a single type.
    """
    kwargs: dict[str, Any] = {"params": params}
    if timeout is not None:
        kwargs["timeout"] = timeout

    try:
        response = await client.get(url, **kwargs)
        response.raise_for_status()
    except httpx.TimeoutException as e:
        raise UpstreamUnavailableError(source, f"timeout ({e.__class__.__name__})") from e
    except httpx.HTTPStatusError as e:
        raise UpstreamUnavailableError(source, f"HTTP {e.response.status_code}") from e
    except httpx.HTTPError as e:
        raise UpstreamUnavailableError(source, str(e) or e.__class__.__name__) from e

    try:
        return response.json()
    except ValueError as e:
        raise UpstreamUnavailableError(source, "invalid JSON body") from e
