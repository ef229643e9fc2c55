"""Chain read/write client interface and its web3 implementation.

Core logic only depends on the ``ChainClient`` protocol; tests supply
in-memory fakes and production uses ``Web3ChainClient``.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

import structlog
from eth_utils import keccak

logger = structlog.get_logger()


@dataclass(frozen=True)
class EventLog:
    """A decoded contract event.

    Attributes:
        event_name: ABI event name (e.g. "IntentExecuted")
        args: Decoded arguments; bytes values are 0x-prefixed hex strings
        block_number: Block the log was mined in
        transaction_hash: 0x-prefixed transaction hash
        log_index: Position of the log within the block
    """

    event_name: str
    args: dict[str, Any]
    block_number: int
    transaction_hash: str
    log_index: int

    @property
    def key(self) -> tuple[str, int]:
        """Uniqueness key; one transaction may emit several logs."""
        return (self.transaction_hash.lower(), int(self.log_index))


LogsHandler = Callable[[list[EventLog]], Awaitable[None]]
Unsubscribe = Callable[[], None]


class ChainClient(Protocol):
    """Narrow chain interface consumed by routing and reconciliation."""

    async def get_chain_id(self) -> int: ...

    async def read_contract(self, address: str, abi: list[dict], function_name: str, args: Sequence[Any]) -> Any: ...

    async def write_contract(
        self,
        address: str,
        abi: list[dict],
        function_name: str,
        args: Sequence[Any],
        value: int | None = None,
    ) -> str: ...

    async def watch_events(
        self,
        address: str,
        abi: list[dict],
        from_block: int | None,
        on_logs: LogsHandler,
    ) -> Unsubscribe: ...


def event_signature(event_abi: dict) -> str:
    types = ",".join(_canonical_type(item) for item in event_abi["inputs"])
    return f"{event_abi['name']}({types})"


def _canonical_type(item: dict) -> str:
    if item["type"].startswith("tuple"):
        inner = ",".join(_canonical_type(c) for c in item["components"])
        return f"({inner}){item['type'][len('tuple'):]}"
    return item["type"]


def event_topics(abi: list[dict]) -> dict[str, str]:
    """Map topic0 (0x-hex) to event name for every event in ``abi``."""
    return {
        "0x" + keccak(text=event_signature(item)).hex(): item["name"] for item in abi if item.get("type") == "event"
    }


def _to_plain(value: Any) -> Any:
    if isinstance(value, bytes | bytearray):
        return "0x" + bytes(value).hex()
    return value


def _topic_hex(topic: Any) -> str:
    if isinstance(topic, bytes | bytearray):
        return "0x" + bytes(topic).hex()
    text = str(topic).lower()
    return text if text.startswith("0x") else "0x" + text


@dataclass
class Web3ChainClient:
    """ChainClient backed by web3's AsyncWeb3 over HTTP.

    Event watching polls eth_getLogs every ``poll_interval_seconds``.

    Args:
        rpc_url: HTTP RPC endpoint
        account: Optional eth_account LocalAccount used for writes
        poll_interval_seconds: Log polling cadence
    """

    rpc_url: str
    account: Any | None = None
    poll_interval_seconds: float = 4.0
    _w3: Any = field(init=False, repr=False)

    def __post_init__(self) -> None:
        from web3 import AsyncHTTPProvider, AsyncWeb3

        self._w3 = AsyncWeb3(AsyncHTTPProvider(self.rpc_url, request_kwargs={"timeout": 30}))

    def _contract(self, address: str, abi: list[dict]) -> Any:
        from web3 import Web3

        return self._w3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)

    async def get_chain_id(self) -> int:
        return int(await self._w3.eth.chain_id)

    async def read_contract(self, address: str, abi: list[dict], function_name: str, args: Sequence[Any]) -> Any:
        contract = self._contract(address, abi)
        result = await getattr(contract.functions, function_name)(*args).call()
        return _to_plain(result)

    async def write_contract(
        self,
        address: str,
        abi: list[dict],
        function_name: str,
        args: Sequence[Any],
        value: int | None = None,
    ) -> str:
        from web3 import Web3

        if self.account is None:
            raise RuntimeError("Web3ChainClient needs an account to send transactions")

        contract = self._contract(address, abi)
        nonce = await self._w3.eth.get_transaction_count(self.account.address)
        tx = await getattr(contract.functions, function_name)(*args).build_transaction(
            {
                "from": self.account.address,
                "nonce": nonce,
                "value": int(value or 0),
                "chainId": await self.get_chain_id(),
            }
        )
        signed = self.account.sign_transaction(tx)
        tx_hash = Web3.to_hex(await self._w3.eth.send_raw_transaction(signed.raw_transaction))
        logger.info("transaction_sent", function=function_name, to=address, tx_hash=tx_hash)
        return tx_hash

    def _decode(self, contract: Any, topics: dict[str, str], raw_log: Any) -> EventLog | None:
        from web3 import Web3

        if not raw_log["topics"]:
            return None
        name = topics.get(_topic_hex(raw_log["topics"][0]))
        if name is None:
            return None
        decoded = getattr(contract.events, name)().process_log(raw_log)
        return EventLog(
            event_name=name,
            args={k: _to_plain(v) for k, v in dict(decoded["args"]).items()},
            block_number=int(decoded["blockNumber"]),
            transaction_hash=Web3.to_hex(decoded["transactionHash"]),
            log_index=int(decoded["logIndex"]),
        )

    async def watch_events(
        self,
        address: str,
        abi: list[dict],
        from_block: int | None,
        on_logs: LogsHandler,
    ) -> Unsubscribe:
        contract = self._contract(address, abi)
        topics = event_topics(abi)
        next_block = from_block if from_block is not None else int(await self._w3.eth.block_number)

        async def poll() -> None:
            nonlocal next_block
            while True:
                try:
                    head = int(await self._w3.eth.block_number)
                    if head >= next_block:
                        raw_logs = await self._w3.eth.get_logs(
                            {"address": contract.address, "fromBlock": next_block, "toBlock": head}
                        )
                        logs = [log for log in (self._decode(contract, topics, raw) for raw in raw_logs) if log]
                        if logs:
                            await on_logs(logs)
                        next_block = head + 1
                except asyncio.CancelledError:
                    raise
                except Exception as e:
                    logger.warning("log_poll_failed", address=address, from_block=next_block, error=str(e))
                await asyncio.sleep(self.poll_interval_seconds)

        task = asyncio.create_task(poll())
        logger.info("watching_events", address=address, from_block=next_block)

        def unsubscribe() -> None:
            task.cancel()

        return unsubscribe


__all__ = [
    "ChainClient",
    "EventLog",
    "LogsHandler",
    "Unsubscribe",
    "Web3ChainClient",
    "event_signature",
    "event_topics",
]
