"""Minimal ABIs for the IntentChannel, ExecutionCommitter and Uniswap v4 adapter."""

TRADING_INTENT_COMPONENTS = [
    {"name": "trader", "type": "address"},
    {"name": "inputToken", "type": "address"},
    {"name": "outputToken", "type": "address"},
    {"name": "amountIn", "type": "uint256"},
    {"name": "minOut", "type": "uint256"},
    {"name": "deadline", "type": "uint256"},
    {"name": "nonce", "type": "uint256"},
    {"name": "sourceChainId", "type": "uint256"},
    {"name": "destChainId", "type": "uint256"},
]

EXECUTION_PLAN_COMPONENTS = [
    {"name": "intentHash", "type": "bytes32"},
    {
        "name": "primary",
        "type": "tuple",
        "components": [
            {"name": "makerFill", "type": "address"},
            {"name": "maker", "type": "address"},
            {"name": "amountOut", "type": "uint256"},
            {"name": "expiry", "type": "uint256"},
            {"name": "makerSig", "type": "bytes"},
        ],
    },
    {
        "name": "amm",
        "type": "tuple",
        "components": [
            {"name": "poolManager", "type": "address"},
            {"name": "adapter", "type": "address"},
            {"name": "fallbackData", "type": "bytes"},
        ],
    },
    {
        "name": "lifi",
        "type": "tuple",
        "components": [
            {"name": "lifiDiamond", "type": "address"},
            {"name": "approvalAddress", "type": "address"},
            {"name": "callData", "type": "bytes"},
            {"name": "value", "type": "uint256"},
            {"name": "minAmountOut", "type": "uint256"},
            {"name": "toChainId", "type": "uint256"},
        ],
    },
    {"name": "deadline", "type": "uint256"},
]

_INTENT_INPUT = {"name": "intent", "type": "tuple", "components": TRADING_INTENT_COMPONENTS}
_PLAN_INPUT = {"name": "plan", "type": "tuple", "components": EXECUTION_PLAN_COMPONENTS}


def _event(name: str, *inputs: tuple[str, str, bool]) -> dict:
    return {
        "type": "event",
        "name": name,
        "anonymous": False,
        "inputs": [{"name": n, "type": t, "indexed": indexed} for n, t, indexed in inputs],
    }


def _view(name: str, inputs: list[dict], output_type: str) -> dict:
    return {
        "type": "function",
        "name": name,
        "stateMutability": "view",
        "inputs": inputs,
        "outputs": [{"name": "", "type": output_type}],
    }


INTENT_CHANNEL_ABI = [
    _event(
        "IntentCommitted",
        ("intentHash", "bytes32", True),
        ("trader", "address", True),
        ("planHash", "bytes32", False),
        ("amountIn", "uint256", False),
        ("minOut", "uint256", False),
        ("deadline", "uint256", False),
    ),
    _event(
        "IntentCommittedPrivate",
        ("commitment", "bytes32", True),
        ("trader", "address", True),
        ("inputToken", "address", False),
        ("amountIn", "uint256", False),
        ("notBefore", "uint256", False),
        ("deadline", "uint256", False),
    ),
    _event(
        "IntentRevealed",
        ("commitment", "bytes32", True),
        ("intentHash", "bytes32", True),
        ("planHash", "bytes32", True),
        ("trader", "address", False),
    ),
    _event(
        "IntentReleased",
        ("intentHash", "bytes32", True),
        ("to", "address", True),
        ("amountIn", "uint256", False),
    ),
    _event(
        "IntentExecuted",
        ("intentHash", "bytes32", True),
        ("usedFallback", "bool", False),
        ("amountOut", "uint256", False),
    ),
    _event("IntentCancelled", ("intentHash", "bytes32", True)),
    _event("IntentRefunded", ("intentHash", "bytes32", True)),
    _event(
        "CommitmentCancelled",
        ("commitment", "bytes32", True),
        ("trader", "address", True),
        ("refundAmount", "uint256", False),
    ),
    _event("BatchWindowUpdated", ("oldWindow", "uint256", False), ("newWindow", "uint256", False)),
    _event("MinDelayUpdated", ("oldDelay", "uint256", False), ("newDelay", "uint256", False)),
    _view("status", [{"name": "intentHash", "type": "bytes32"}], "uint8"),
    _view("destChainIdOf", [{"name": "intentHash", "type": "bytes32"}], "uint256"),
    _view("notBeforeOf", [{"name": "intentHash", "type": "bytes32"}], "uint256"),
    {
        "type": "function",
        "name": "commitIntent",
        "stateMutability": "nonpayable",
        "inputs": [_INTENT_INPUT, {"name": "traderSig", "type": "bytes"}, _PLAN_INPUT],
        "outputs": [
            {"name": "intentHash", "type": "bytes32"},
            {"name": "planHash", "type": "bytes32"},
        ],
    },
    {
        "type": "function",
        "name": "commitIntentPrivate",
        "stateMutability": "payable",
        "inputs": [
            {"name": "commitment", "type": "bytes32"},
            {"name": "inputToken", "type": "address"},
            {"name": "amountIn", "type": "uint256"},
            {"name": "deadline", "type": "uint256"},
            {"name": "notBefore", "type": "uint256"},
            {"name": "trader", "type": "address"},
            {"name": "traderSig", "type": "bytes"},
        ],
        "outputs": [],
    },
    {
        "type": "function",
        "name": "revealIntent",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "commitment", "type": "bytes32"},
            _INTENT_INPUT,
            {"name": "traderSig", "type": "bytes"},
            _PLAN_INPUT,
            {"name": "salt", "type": "bytes32"},
        ],
        "outputs": [
            {"name": "intentHash", "type": "bytes32"},
            {"name": "planHash", "type": "bytes32"},
        ],
    },
]

EXECUTION_COMMITTER_ABI = [
    {
        "type": "function",
        "name": "execute",
        "stateMutability": "nonpayable",
        "inputs": [_PLAN_INPUT],
        "outputs": [
            {"name": "amountOut", "type": "uint256"},
            {"name": "usedFallback", "type": "bool"},
        ],
    },
    {
        "type": "function",
        "name": "executeWithReveal",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "commitment", "type": "bytes32"},
            _INTENT_INPUT,
            {"name": "traderSig", "type": "bytes"},
            _PLAN_INPUT,
            {"name": "salt", "type": "bytes32"},
        ],
        "outputs": [
            {"name": "amountOut", "type": "uint256"},
            {"name": "usedFallback", "type": "bool"},
        ],
    },
]

UNISWAP_V4_ADAPTER_ABI = [
    {
        "type": "function",
        "name": "buildFallbackData",
        "stateMutability": "view",
        "inputs": [
            {"name": "intentHash", "type": "bytes32"},
            {"name": "inputToken", "type": "address"},
            {"name": "outputToken", "type": "address"},
            {"name": "amountIn", "type": "uint256"},
            {"name": "minOut", "type": "uint256"},
            {"name": "deadline", "type": "uint256"},
        ],
        "outputs": [{"name": "fallbackData", "type": "bytes"}],
    }
]

__all__ = [
    "EXECUTION_COMMITTER_ABI",
    "EXECUTION_PLAN_COMPONENTS",
    "INTENT_CHANNEL_ABI",
    "TRADING_INTENT_COMPONENTS",
    "UNISWAP_V4_ADAPTER_ABI",
]
