"""Minimal Sui JSON-RPC client for balance lookups."""

from __future__ import annotations

import asyncio
import itertools
import logging
from typing import Any

import requests

from ..constants import SUI_COIN_TYPE

logger = logging.getLogger(__name__)


class SuiRpcError(RuntimeError):
    """Raised when the fullnode answers with a JSON-RPC error object."""

    def __init__(self, method: str, code: Any, message: str):
        super().__init__(f"{method} failed ({code}): {message}")
        self.method = method
        self.code = code


class SuiBalanceClient:
    """Reads coin balances from a Sui fullnode."""

    def __init__(
        self,
        rpc_url: str,
        *,
        request_timeout: float = 10.0,
        session: requests.Session | None = None,
    ):
        self.rpc_url = rpc_url
        self.request_timeout = request_timeout
        self.session = session or requests.Session()
        self._ids = itertools.count(1)

    def _post(self, payload: dict[str, Any]) -> requests.Response:
        return self.session.post(
            self.rpc_url, json=payload, timeout=self.request_timeout
        )

    async def call(self, method: str, params: list[Any]) -> Any:
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params,
        }
        logger.debug("Calling %s on %s", method, self.rpc_url)
        response = await asyncio.to_thread(self._post, payload)
        response.raise_for_status()
        body = response.json()

        if not isinstance(body, dict):
            raise ValueError(f"Invalid JSON-RPC response for {method}: {body!r}")
        error = body.get("error")
        if error:
            raise SuiRpcError(method, error.get("code"), error.get("message", ""))
        if "result" not in body:
            raise ValueError(f"JSON-RPC response for {method} has no result")
        return body["result"]

    async def get_balance(self, owner: str, coin_type: str = SUI_COIN_TYPE) -> int:
        """Return ``owner``'s total balance of ``coin_type`` in its smallest unit.

        Raises:
            SuiRpcError: If the node rejects the request
            ValueError: If ``totalBalance`` is missing or not an integer
        """
        result = await self.call("suix_getBalance", [owner, coin_type])
        try:
            return int(result["totalBalance"])
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Invalid totalBalance in balance response: {result!r}") from e
