"""Execution plan assembly.

Pure and synchronous: the router computes the concrete steps, the builder
only fills unused paths with canonical zero sentinels and hashes.
"""

from dataclasses import dataclass

from intent_router.hashing.eip712 import hash_intent
from intent_router.hashing.plan import hash_execution_plan
from intent_router.models.intent import IntentDomain, TradingIntent
from intent_router.models.plan import AmmStep, ExecutionPlan, LifiStep, Quote, RfqStep


@dataclass(frozen=True)
class RoutedPlan:
    """A built plan together with its commitment hashes."""

    plan: ExecutionPlan
    plan_hash: str

    @property
    def intent_hash(self) -> str:
        return self.plan.intent_hash


def build_plan(
    intent: TradingIntent,
    domain: IntentDomain,
    rfq_quote: Quote | None = None,
    amm: AmmStep | None = None,
    lifi: LifiStep | None = None,
) -> ExecutionPlan:
    """Assemble the fixed-shape plan for ``intent``.

    Args:
        intent: The signed trading intent
        domain: Signing domain used for the intent hash
        rfq_quote: Best maker quote, or None for the RFQ sentinel
        amm: AMM fallback step, or None for the AMM sentinel
        lifi: Bridge step, or None for the LI.FI sentinel
    """
    return ExecutionPlan(
        intent_hash=hash_intent(intent, domain),
        primary=RfqStep.from_quote(rfq_quote) if rfq_quote is not None else RfqStep.sentinel(),
        amm=amm if amm is not None else AmmStep.sentinel(),
        lifi=lifi if lifi is not None else LifiStep.sentinel(),
        deadline=intent.deadline,
    )


def build_routed_plan(
    intent: TradingIntent,
    domain: IntentDomain,
    rfq_quote: Quote | None = None,
    amm: AmmStep | None = None,
    lifi: LifiStep | None = None,
) -> RoutedPlan:
    plan = build_plan(intent, domain, rfq_quote=rfq_quote, amm=amm, lifi=lifi)
    return RoutedPlan(plan=plan, plan_hash=hash_execution_plan(plan))


__all__ = ["RoutedPlan", "build_plan", "build_routed_plan"]
