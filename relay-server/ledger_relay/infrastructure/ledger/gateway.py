"""web3.py implementation of the ledger gateway."""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from web3 import AsyncWeb3
from web3.exceptions import TimeExhausted

from ledger_relay.core.config import ChainSettings
from ledger_relay.modules.ledger.exceptions import ConfirmationTimeoutError, LedgerConfigurationError
from ledger_relay.modules.ledger.gateway import Receipt, normalize_tx_hash

from .abi import function_outputs, load_abi
from .account import SigningAccount

logger = logging.getLogger(__name__)


class Web3LedgerGateway:
    """Signs contract writes locally with the relayer key and broadcasts them raw."""

    def __init__(
        self,
        web3: AsyncWeb3,
        account: SigningAccount,
        contract_address: str,
        abi: list[dict[str, Any]],
        *,
        chain_id: int,
        confirmation_timeout: float = 120.0,
        poll_latency: float = 2.0,
    ) -> None:
        if not AsyncWeb3.is_address(contract_address):
            raise LedgerConfigurationError(f"Invalid contract address: {contract_address!r}")
        self._web3 = web3
        self._account = account
        self._abi = abi
        self._chain_id = chain_id
        self._confirmation_timeout = confirmation_timeout
        self._poll_latency = poll_latency
        self._contract = web3.eth.contract(address=AsyncWeb3.to_checksum_address(contract_address), abi=abi)

    @classmethod
    def from_settings(cls, settings: ChainSettings, account: Optional[SigningAccount] = None) -> "Web3LedgerGateway":
        if not settings.rpc_url:
            raise LedgerConfigurationError("CHAIN__RPC_URL is not set")
        if not settings.contract_address:
            raise LedgerConfigurationError("CHAIN__CONTRACT_ADDRESS is not set")
        account = account or SigningAccount.from_private_key(settings.private_key)
        web3 = AsyncWeb3(
            AsyncWeb3.AsyncHTTPProvider(
                settings.rpc_url,
                request_kwargs={"timeout": settings.request_timeout},
            )
        )
        return cls(
            web3,
            account,
            settings.contract_address,
            load_abi(settings.abi_path),
            chain_id=settings.chain_id,
            confirmation_timeout=settings.confirmation_timeout,
            poll_latency=settings.poll_latency,
        )

    @property
    def signer_address(self) -> str:
        return self._account.address

    async def submit(self, function_name: str, args: Sequence[Any]) -> str:
        function = self._contract.get_function_by_name(function_name)(*args)
        nonce = await self._web3.eth.get_transaction_count(self._account.address, "pending")
        transaction = await function.build_transaction(
            {
                "from": self._account.address,
                "nonce": nonce,
                "chainId": self._chain_id,
            }
        )
        raw_transaction = self._account.sign_transaction(transaction)
        tx_hash = await self._web3.eth.send_raw_transaction(raw_transaction)
        logger.debug("Broadcast %s nonce=%s", function_name, nonce)
        return normalize_tx_hash(tx_hash)

    async def confirm(self, transaction_id: str) -> Receipt:
        try:
            receipt = await self._web3.eth.wait_for_transaction_receipt(
                transaction_id,
                timeout=self._confirmation_timeout,
                poll_latency=self._poll_latency,
            )
        except TimeExhausted as exc:
            raise ConfirmationTimeoutError(transaction_id) from exc
        return Receipt.from_web3(receipt)

    async def call(self, function_name: str, args: Sequence[Any] = ()) -> Any:
        return await self._contract.get_function_by_name(function_name)(*args).call()

    def output_types(self, function_name: str) -> list[dict[str, Any]]:
        return function_outputs(self._abi, function_name)


__all__ = ["Web3LedgerGateway"]
