"""IntentChannel / ExecutionCommitter client.

Wraps the chain client and a typed-data signer with the two settlement
flows:

Public flow:
    sign intent -> route -> commitIntent(intent, sig, plan) -> execute(plan)

Private (commit-reveal) flow:
    route -> prepare commitment -> commitIntentPrivate(...)
    ... wait until notBefore ...
    revealIntent(...) or executeWithReveal(...)
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import structlog

from intent_router.chain.abi import EXECUTION_COMMITTER_ABI, INTENT_CHANNEL_ABI
from intent_router.chain.client import ChainClient
from intent_router.errors import ConfigurationError
from intent_router.hashing.eip712 import Eip712Signer, sign_commitment_authorization, sign_intent
from intent_router.models.commitment import CommitmentAuthorization, CommitmentRecord
from intent_router.models.intent import IntentDomain, TradingIntent
from intent_router.models.plan import ExecutionPlan
from intent_router.models.types import EMPTY_BYTES, checksum, hex_to_bytes
from intent_router.rfq.aggregator import MakerEndpoint
from intent_router.routing.plan_builder import RoutedPlan
from intent_router.routing.router import SettlementRouter

logger = structlog.get_logger()


@dataclass(frozen=True)
class SubmittedIntent:
    """Result of a public commit + execute."""

    intent_hash: str
    plan_hash: str
    commit_tx: str
    exec_tx: str


class IntentChannelClient:
    """High-level settlement client.

    Args:
        client: Chain client with a sending account
        channel_address: IntentChannel contract
        committer_address: ExecutionCommitter contract
        domain: Signing domain of the channel deployment
        signer: Trader signer for intents and commitment authorizations
        router: Settlement router used to build plans
    """

    def __init__(
        self,
        client: ChainClient | None,
        channel_address: str,
        committer_address: str,
        domain: IntentDomain,
        signer: Eip712Signer | None = None,
        router: SettlementRouter | None = None,
    ) -> None:
        if client is None:
            raise ConfigurationError("IntentChannelClient requires a chain client")
        self.client = client
        self.channel_address = channel_address
        self.committer_address = committer_address
        self.domain = domain
        self.signer = signer
        self.router = router

    def _require_signer(self) -> Eip712Signer:
        if self.signer is None:
            raise ConfigurationError("A signer is required to sign intents")
        return self.signer

    def _require_router(self) -> SettlementRouter:
        if self.router is None:
            raise ConfigurationError("A settlement router is required to build plans")
        return self.router

    async def route(self, intent: TradingIntent, makers: Sequence[MakerEndpoint] = ()) -> RoutedPlan:
        return await self._require_router().route_intent(intent, self.domain, makers)

    async def submit_intent(self, intent: TradingIntent, makers: Sequence[MakerEndpoint] = ()) -> SubmittedIntent:
        """Sign, route, commit and execute ``intent`` in one go."""
        trader_sig = await sign_intent(intent, self._require_signer(), self.domain)
        routed = await self.route(intent, makers)

        commit_tx = await self.client.write_contract(
            self.channel_address,
            INTENT_CHANNEL_ABI,
            "commitIntent",
            [intent.as_abi_tuple(), hex_to_bytes(trader_sig), routed.plan.as_abi_tuple()],
        )
        exec_tx = await self.execute(routed.plan)

        logger.info(
            "intent_submitted",
            intent_hash=routed.intent_hash,
            plan_hash=routed.plan_hash,
            commit_tx=commit_tx,
            exec_tx=exec_tx,
        )
        return SubmittedIntent(
            intent_hash=routed.intent_hash,
            plan_hash=routed.plan_hash,
            commit_tx=commit_tx,
            exec_tx=exec_tx,
        )

    async def execute(self, plan: ExecutionPlan) -> str:
        return await self.client.write_contract(
            self.committer_address, EXECUTION_COMMITTER_ABI, "execute", [plan.as_abi_tuple()]
        )

    async def commit_private_intent(
        self,
        record: CommitmentRecord,
        intent: TradingIntent,
        sign: bool = True,
        value: int | None = None,
    ) -> str:
        """Lock the input amount behind a commitment.

        With ``sign=False`` the transaction sender is treated as the trader
        and an empty signature is sent.
        """
        trader_sig = EMPTY_BYTES
        if sign:
            authorization = CommitmentAuthorization(
                commitment=record.commitment,
                trader=intent.trader,
                input_token=intent.input_token,
                amount_in=intent.amount_in,
                deadline=intent.deadline,
                not_before=record.not_before,
            )
            trader_sig = await sign_commitment_authorization(authorization, self._require_signer(), self.domain)

        tx_hash = await self.client.write_contract(
            self.channel_address,
            INTENT_CHANNEL_ABI,
            "commitIntentPrivate",
            [
                hex_to_bytes(record.commitment),
                checksum(intent.input_token),
                intent.amount_in,
                intent.deadline,
                record.not_before,
                checksum(intent.trader),
                hex_to_bytes(trader_sig),
            ],
            value=value,
        )
        logger.info("private_intent_committed", commitment=record.commitment, not_before=record.not_before, tx=tx_hash)
        return tx_hash

    def _reveal_args(self, record: CommitmentRecord, intent: TradingIntent, trader_sig: str, plan: ExecutionPlan) -> list:
        return [
            hex_to_bytes(record.commitment),
            intent.as_abi_tuple(),
            hex_to_bytes(trader_sig),
            plan.as_abi_tuple(),
            hex_to_bytes(record.salt),
        ]

    async def reveal_intent(
        self,
        record: CommitmentRecord,
        intent: TradingIntent,
        plan: ExecutionPlan,
        trader_sig: str | None = None,
    ) -> str:
        """Reveal a committed intent without executing it."""
        if trader_sig is None:
            trader_sig = await sign_intent(intent, self._require_signer(), self.domain)
        tx_hash = await self.client.write_contract(
            self.channel_address,
            INTENT_CHANNEL_ABI,
            "revealIntent",
            self._reveal_args(record, intent, trader_sig, plan),
        )
        logger.info("intent_revealed", commitment=record.commitment, tx=tx_hash)
        return tx_hash

    async def execute_with_reveal(
        self,
        record: CommitmentRecord,
        intent: TradingIntent,
        plan: ExecutionPlan,
        trader_sig: str | None = None,
    ) -> str:
        """Reveal and execute in a single ExecutionCommitter call."""
        if trader_sig is None:
            trader_sig = await sign_intent(intent, self._require_signer(), self.domain)
        tx_hash = await self.client.write_contract(
            self.committer_address,
            EXECUTION_COMMITTER_ABI,
            "executeWithReveal",
            self._reveal_args(record, intent, trader_sig, plan),
        )
        logger.info("intent_executed_with_reveal", commitment=record.commitment, tx=tx_hash)
        return tx_hash


__all__ = ["IntentChannelClient", "SubmittedIntent"]
