"""Transaction construction, submission and confirmation."""

import logging
import time
from typing import Any, Dict, Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_utils import to_checksum_address

from .constants import (
    DEFAULT_POLL_INTERVAL,
    DEFAULT_RECEIPT_TIMEOUT,
    GAS_BUFFER_DENOMINATOR,
    GAS_BUFFER_NUMERATOR,
)
from .exceptions import RpcError, SubmissionError
from .rpc import JsonRpcClient
from .types import ConnectionSettings, DeploymentPayload, SubmissionReceipt

logger = logging.getLogger(__name__)


class TransactionSubmitter:
    """Signs transactions with a local account and sends them through JSON-RPC."""

    def __init__(
        self,
        client: JsonRpcClient,
        account: LocalAccount,
        receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ):
        self.client = client
        self.account = account
        self.receipt_timeout = receipt_timeout
        self.poll_interval = poll_interval

    @classmethod
    def from_settings(cls, settings: ConnectionSettings, **kwargs: Any) -> "TransactionSubmitter":
        """Build a submitter from validated connection settings."""
        return cls(JsonRpcClient(settings.rpc_url), Account.from_key(settings.private_key), **kwargs)

    @property
    def address(self) -> str:
        return self.account.address

    def _build_transaction(self, data: str, to: Optional[str] = None) -> Dict[str, Any]:
        call: Dict[str, Any] = {"from": self.address, "data": data}
        if to is not None:
            call["to"] = to

        estimated = self.client.call_int("eth_estimateGas", [call])
        tx: Dict[str, Any] = {
            "nonce": self.client.call_int("eth_getTransactionCount", [self.address, "pending"]),
            "gasPrice": self.client.call_int("eth_gasPrice"),
            "gas": estimated * GAS_BUFFER_NUMERATOR // GAS_BUFFER_DENOMINATOR,
            "chainId": self.client.call_int("eth_chainId"),
            "value": 0,
            "data": data,
        }
        if to is not None:
            tx["to"] = to
        return tx

    def _send(self, tx: Dict[str, Any]) -> str:
        signed = self.account.sign_transaction(tx)
        return self.client.call("eth_sendRawTransaction", ["0x" + bytes(signed.raw_transaction).hex()])

    def wait_for_receipt(self, tx_hash: str) -> Dict[str, Any]:
        """
        Poll for a transaction receipt.

        Raises:
            SubmissionError: If no receipt arrives within receipt_timeout
        """
        deadline = time.monotonic() + self.receipt_timeout
        while True:
            receipt = self.client.call("eth_getTransactionReceipt", [tx_hash])
            if receipt is not None:
                return receipt
            if time.monotonic() >= deadline:
                raise SubmissionError(
                    f"Transaction {tx_hash} not confirmed after {self.receipt_timeout}s"
                )
            time.sleep(self.poll_interval)

    def _send_and_confirm(self, data: str, to: Optional[str] = None) -> Dict[str, Any]:
        try:
            tx = self._build_transaction(data, to)
            tx_hash = self._send(tx)
            logger.info("Sent transaction %s", tx_hash)
            receipt = self.wait_for_receipt(tx_hash)
        except RpcError as e:
            raise SubmissionError(f"Transaction failed: {e}") from e

        if int(receipt.get("status", "0x0"), 16) != 1:
            raise SubmissionError(f"Transaction {tx_hash} reverted")
        receipt.setdefault("transactionHash", tx_hash)
        return receipt

    def submit(self, payload: DeploymentPayload) -> SubmissionReceipt:
        """
        Deploy a contract and wait for it to be confirmed.

        Args:
            payload: Linked bytecode and encoded constructor arguments

        Returns:
            SubmissionReceipt with the transaction hash and contract address

        Raises:
            SubmissionError: If sending fails, the transaction reverts or the
                             receipt carries no contract address
        """
        receipt = self._send_and_confirm(payload.data)
        address = receipt.get("contractAddress")
        if not address:
            raise SubmissionError(
                f"Receipt for {receipt['transactionHash']} has no contract address"
            )
        return SubmissionReceipt(
            tx_hash=receipt["transactionHash"], address=to_checksum_address(address)
        )

    def transact(self, to: str, data: str) -> str:
        """
        Send a call transaction and wait for it to succeed.

        Returns:
            Transaction hash

        Raises:
            SubmissionError: If sending fails or the transaction reverts
        """
        receipt = self._send_and_confirm(data, to=to_checksum_address(to))
        return receipt["transactionHash"]
