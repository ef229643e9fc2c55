"""Canonical ABI encoding and hashing of execution plans.

The plan hash is keccak256(abi.encode(plan)) with the struct members in
declared order, matching the IntentChannel/ExecutionCommitter contracts.
"""

from eth_abi import encode  # type: ignore[attr-defined]
from eth_utils import keccak

from intent_router.models.plan import ExecutionPlan

RFQ_STEP_ABI_TYPE = "(address,address,uint256,uint256,bytes)"
AMM_STEP_ABI_TYPE = "(address,address,bytes)"
LIFI_STEP_ABI_TYPE = "(address,address,bytes,uint256,uint256,uint256)"

# (intentHash, primary, amm, lifi, deadline)
EXECUTION_PLAN_ABI_TYPE = f"(bytes32,{RFQ_STEP_ABI_TYPE},{AMM_STEP_ABI_TYPE},{LIFI_STEP_ABI_TYPE},uint256)"


def encode_execution_plan(plan: ExecutionPlan) -> bytes:
    return encode([EXECUTION_PLAN_ABI_TYPE], [plan.as_abi_tuple()])


def hash_execution_plan(plan: ExecutionPlan) -> str:
    """Return the plan commitment hash as a 0x-prefixed hex string."""
    return "0x" + keccak(encode_execution_plan(plan)).hex()


__all__ = [
    "EXECUTION_PLAN_ABI_TYPE",
    "encode_execution_plan",
    "hash_execution_plan",
]
