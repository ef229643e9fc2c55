"""Fee viability gate for cross-chain routes."""

from intent_router.constants import BRIDGE_FEE_SAFETY_MULTIPLIER


def bridge_fees_viable(total_cost: int, amount_in: int) -> bool:
    """True unless a nonzero cost exceeds half of the input amount.

    Args:
        total_cost: Eligible fee + gas costs in input token units
        amount_in: Intent input amount
    """
    if total_cost == 0:
        return True
    return total_cost * BRIDGE_FEE_SAFETY_MULTIPLIER <= amount_in
