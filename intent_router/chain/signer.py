"""EIP-712 signer backed by an eth-account LocalAccount."""

from __future__ import annotations

from typing import Any

import structlog
from eth_account import Account
from eth_account.signers.local import LocalAccount

logger = structlog.get_logger()


class LocalAccountSigner:
    """Signs typed data with a local private key.

    Keys never leave the process and are never logged.
    """

    def __init__(self, account: LocalAccount) -> None:
        self.account = account
        self.address: str = account.address

    @classmethod
    def from_key(cls, private_key: str) -> LocalAccountSigner:
        return cls(Account.from_key(private_key))

    async def sign_typed_data(
        self,
        domain: dict[str, Any],
        types: dict[str, list[dict[str, str]]],
        primary_type: str,
        message: dict[str, Any],
    ) -> str:
        message_types = {name: fields for name, fields in types.items() if name != "EIP712Domain"}
        signed = self.account.sign_typed_data(
            domain_data=domain,
            message_types=message_types,
            message_data=message,
        )
        logger.debug("typed_data_signed", signer=self.address, primary_type=primary_type)
        return "0x" + bytes(signed.signature).hex()
