"""Minimal JSON-RPC client for airdrop-deployments library."""

import itertools
from typing import Any, List, Optional

import requests

from .constants import RPC_REQUEST_TIMEOUT
from .exceptions import RpcError


class JsonRpcClient:
    """Sends JSON-RPC 2.0 requests to an Ethereum node over HTTP."""

    def __init__(self, rpc_url: str, timeout: int = RPC_REQUEST_TIMEOUT):
        self.rpc_url = rpc_url
        self.timeout = timeout
        self._ids = itertools.count(1)
        self._session = requests.Session()

    def call(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """
        Make a JSON-RPC call.

        Args:
            method: RPC method name, e.g. "eth_chainId"
            params: Positional parameters

        Returns:
            The "result" member of the response (may be None)

        Raises:
            RpcError: On network errors, non-200 responses or RPC error objects
        """
        try:
            response = self._session.post(
                self.rpc_url,
                json={
                    "jsonrpc": "2.0",
                    "method": method,
                    "params": params or [],
                    "id": next(self._ids),
                },
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise RpcError(f"Network error during {method}: {e}") from e

        # Check for HTTP errors
        if response.status_code != 200:
            raise RpcError(f"{method} failed with HTTP status {response.status_code}")

        try:
            result = response.json()
        except ValueError as e:
            raise RpcError(f"{method} returned a non-JSON response") from e

        # Check for RPC errors
        if "error" in result:
            raise RpcError(f"{method} error: {result['error']}")

        return result.get("result")

    def call_int(self, method: str, params: Optional[List[Any]] = None) -> int:
        """Make a call whose result is a hex quantity."""
        result = self.call(method, params)
        if not isinstance(result, str):
            raise RpcError(f"{method} returned {result!r}, expected a hex quantity")
        return int(result, 16)
