"""Minimal JSON-RPC client for talking to an Ethereum node."""

from typing import Any, Dict, List, Optional

import requests

from .exceptions import RpcError


class JsonRpcClient:
    """JSON-RPC 2.0 over HTTP POST."""

    def __init__(self, url: str, timeout: float = 30):
        self.url = url
        self.timeout = timeout

    def call(self, method: str, params: Optional[List[Any]] = None) -> Any:
        """
        Make a single JSON-RPC call.

        Args:
            method: RPC method name, e.g. "eth_blockNumber"
            params: Positional parameters

        Returns:
            The "result" member of the response

        Raises:
            RpcError: On HTTP failure, transport failure, or an RPC error object
        """
        try:
            response = requests.post(
                self.url,
                json={
                    "jsonrpc": "2.0",
                    "method": method,
                    "params": params or [],
                    "id": 1,
                },
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise RpcError(f"Network error during RPC call {method}: {e}") from e

        # Check for HTTP errors
        if response.status_code != 200:
            raise RpcError(f"RPC request {method} failed with status {response.status_code}")

        try:
            result = response.json()
        except ValueError as e:
            raise RpcError(f"Invalid JSON in response to {method}: {e}") from e

        # Check for RPC errors
        if "error" in result:
            raise RpcError(f"RPC error from {method}: {result['error']}")

        return result.get("result")

    def accounts(self) -> List[str]:
        return self.call("eth_accounts") or []

    def chain_id(self) -> int:
        return int(self.call("eth_chainId"), 16)

    def block_number(self) -> int:
        return int(self.call("eth_blockNumber"), 16)

    def send_transaction(self, tx: Dict[str, Any]) -> str:
        """Submit a transaction for the node to sign with an unlocked account."""
        return self.call("eth_sendTransaction", [tx])

    def get_transaction_receipt(self, tx_hash: str) -> Optional[Dict[str, Any]]:
        """Return the receipt, or None while the transaction is pending."""
        return self.call("eth_getTransactionReceipt", [tx_hash])

    def get_code(self, address: str) -> str:
        """Return the runtime code at an address, "0x" when there is none."""
        return self.call("eth_getCode", [address, "latest"]) or "0x"
