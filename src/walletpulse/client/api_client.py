"""Async HTTP client for the WalletPulse API, used by dashboard-side code."""

import logging
from typing import Any, Iterable, Optional

import httpx

from walletpulse.core.exceptions import ApiRequestError

logger = logging.getLogger(__name__)


class WalletPulseClient:
    """
    Thin wrapper over httpx.AsyncClient for the price and PnL endpoints.

    Every failure (transport error, timeout, non-2xx status, or a body with
    success=false) is raised as ApiRequestError. Task cancellation is not
    caught, so cancelling the awaiting task aborts the HTTP call.
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout_seconds: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=httpx.Timeout(timeout_seconds),
        )
        if client is not None and token:
            self._client.headers["Authorization"] = f"Bearer {token}"

    async def preload_prices(self, mints: Iterable[str]) -> int:
        """Ask the server to warm its price cache. Returns the accepted count."""
        data = await self._post("/preload-prices", {"mints": list(mints)})
        return int(data.get("accepted", 0))

    async def get_price_batch(self, mints: Iterable[str]) -> dict[str, Optional[dict[str, Any]]]:
        """Fetch cached market data for several mints; unknown mints map to None."""
        data = await self._post("/prices/batch", {"mints": list(mints)})
        return data.get("results") or {}

    async def fetch_token_pnl(
        self,
        mints: Iterable[str],
        group_id: Optional[str] = None,
    ) -> list[dict[str, Any]]:
        """Fetch per-token PnL rows for the given mints."""
        payload: dict[str, Any] = {"mints": list(mints)}
        if group_id is not None:
            payload["group_id"] = group_id
        data = await self._post("/tokens/pnl", payload)
        if not data.get("success"):
            raise ApiRequestError(data.get("message") or "PnL request was not successful")
        return list(data.get("pnl_data") or [])

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        try:
            response = await self._client.post(path, json=payload)
        except httpx.TimeoutException as e:
            raise ApiRequestError(f"POST {path} timed out") from e
        except httpx.HTTPError as e:
            raise ApiRequestError(f"POST {path} failed: {e}") from e

        if response.status_code >= 400:
            raise ApiRequestError(
                f"POST {path} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ApiRequestError(f"POST {path} returned invalid JSON") from e
        if not isinstance(data, dict):
            raise ApiRequestError(f"POST {path} returned an unexpected body")
        return data
