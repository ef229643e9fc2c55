"""Settlement event reconciler.

Watches IntentChannel logs and turns them into settlement events. Logs are
deduplicated by (txHash, logIndex) because one transaction can emit several
relevant logs, and the subscription may redeliver a range after a poll
error.

When an ``IntentExecuted`` log reports that the AMM/bridge fallback was
used and the intent's destination chain differs from the chain the log was
observed on, the source transaction is handed to the bridge status monitor,
at most once per transaction hash.
"""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

import structlog

from intent_router.bridge.monitor import BridgeOutcome, BridgeStatusMonitor, MonitorHandle
from intent_router.chain.abi import INTENT_CHANNEL_ABI
from intent_router.chain.client import ChainClient, EventLog, Unsubscribe
from intent_router.config import ReconcilerConfig
from intent_router.models.commitment import CommitmentRecord, CommitmentStatus
from intent_router.models.types import hex_to_bytes

logger = structlog.get_logger()

INTENT_EXECUTED = "IntentExecuted"

EVENT_STATUS: dict[str, CommitmentStatus] = {
    "IntentCommittedPrivate": CommitmentStatus.PENDING,
    "IntentRevealed": CommitmentStatus.REVEALED,
    "IntentExecuted": CommitmentStatus.EXECUTED,
    "CommitmentCancelled": CommitmentStatus.CANCELLED,
    "IntentCancelled": CommitmentStatus.CANCELLED,
    "IntentRefunded": CommitmentStatus.REFUNDED,
}


def status_for_event(event_name: str) -> CommitmentStatus | None:
    """Commitment status implied by an IntentChannel event, if any."""
    return EVENT_STATUS.get(event_name)


def apply_event(record: CommitmentRecord, event: EventLog) -> CommitmentRecord:
    """Advance ``record`` if ``event`` refers to it.

    Events are matched on the commitment hash or the intent hash, whichever
    the event carries.

    Raises:
        InvalidStatusTransition: If the event would move the record backwards
    """
    status = status_for_event(event.event_name)
    if status is None:
        return record
    args = event.args
    refs = {str(args[k]).lower() for k in ("commitment", "intentHash") if k in args}
    if record.commitment not in refs and record.intent_hash not in refs:
        return record
    return record.advance(status)


class RecentKeys:
    """Bounded set of recently seen keys; oldest entries are evicted first."""

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._keys: OrderedDict[Any, None] = OrderedDict()

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    def __len__(self) -> int:
        return len(self._keys)

    def add(self, key: Any) -> bool:
        """Record ``key``. Returns False if it was already present."""
        if key in self._keys:
            self._keys.move_to_end(key)
            return False
        self._keys[key] = None
        if len(self._keys) > self.capacity:
            self._keys.popitem(last=False)
        return True

    def discard(self, key: Any) -> None:
        self._keys.pop(key, None)


@dataclass(frozen=True)
class SettlementEvent:
    """A deduplicated IntentChannel log."""

    event_name: str
    args: dict[str, Any]
    transaction_hash: str
    log_index: int
    block_number: int
    status: CommitmentStatus | None = None


@dataclass(frozen=True)
class ExecutionEvent:
    """An observed intent execution.

    ``dest_chain_id`` is None when the on-chain lookup failed.
    """

    transaction_hash: str
    intent_hash: str
    used_fallback: bool
    chain_id: int
    dest_chain_id: int | None
    block_number: int

    @property
    def needs_bridge_monitor(self) -> bool:
        return self.used_fallback and self.dest_chain_id is not None and self.dest_chain_id != self.chain_id


class SettlementEventReconciler:
    """Reconciles IntentChannel events with local state.

    Args:
        client: Chain client used for subscriptions and destChainIdOf reads
        channel_address: IntentChannel contract address
        monitor: Bridge status monitor for cross-chain fallback fills
        config: Dedup capacity and monitoring switch
        on_event: Called for every new settlement event
        on_execution: Called for every IntentExecuted event
        on_bridge_result: Called when a monitored bridge reaches a terminal status
    """

    def __init__(
        self,
        client: ChainClient,
        channel_address: str,
        monitor: BridgeStatusMonitor | None = None,
        config: ReconcilerConfig | None = None,
        on_event: Callable[[SettlementEvent], None] | None = None,
        on_execution: Callable[[ExecutionEvent], None] | None = None,
        on_bridge_result: Callable[[BridgeOutcome], None] | None = None,
    ) -> None:
        self.client = client
        self.channel_address = channel_address
        self.monitor = monitor
        self.config = config or ReconcilerConfig()
        self.on_event = on_event
        self.on_execution = on_execution
        self.on_bridge_result = on_bridge_result

        self._seen = RecentKeys(self.config.dedup_capacity)
        self._monitored = RecentKeys(self.config.dedup_capacity)
        self._handles: dict[str, MonitorHandle] = {}
        self._chain_id: int | None = None
        self._unsubscribe: Unsubscribe | None = None

    @property
    def monitors(self) -> dict[str, MonitorHandle]:
        return dict(self._handles)

    async def start(self, from_block: int | None = None) -> None:
        """Subscribe to IntentChannel logs from ``from_block`` (default: head)."""
        if self._unsubscribe is not None:
            return
        self._chain_id = await self.client.get_chain_id()
        self._unsubscribe = await self.client.watch_events(
            self.channel_address, INTENT_CHANNEL_ABI, from_block, self.handle_logs
        )
        logger.info("reconciler_started", channel=self.channel_address, chain_id=self._chain_id, from_block=from_block)

    def stop(self) -> None:
        """Unsubscribe and cancel every running bridge monitor."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        for handle in self._handles.values():
            handle.cancel()
        logger.info("reconciler_stopped", channel=self.channel_address, monitors=len(self._handles))

    async def handle_logs(self, logs: Sequence[EventLog]) -> None:
        """Process one delivered batch in order."""
        for log in logs:
            if not self._seen.add(log.key):
                logger.debug("duplicate_log_skipped", tx_hash=log.transaction_hash, log_index=log.log_index)
                continue
            try:
                await self._handle_log(log)
            except Exception:
                # Left unseen so a redelivery is processed again
                self._seen.discard(log.key)
                raise

    async def _handle_log(self, log: EventLog) -> None:
        event = SettlementEvent(
            event_name=log.event_name,
            args=log.args,
            transaction_hash=log.transaction_hash,
            log_index=log.log_index,
            block_number=log.block_number,
            status=status_for_event(log.event_name),
        )
        logger.info(
            "settlement_event",
            event_name=log.event_name,
            tx_hash=log.transaction_hash,
            log_index=log.log_index,
            block=log.block_number,
        )
        if self.on_event is not None:
            self.on_event(event)

        if log.event_name == INTENT_EXECUTED:
            await self._handle_execution(log)

    async def _handle_execution(self, log: EventLog) -> None:
        chain_id = self._chain_id
        if chain_id is None:
            chain_id = self._chain_id = await self.client.get_chain_id()

        intent_hash = str(log.args["intentHash"])
        execution = ExecutionEvent(
            transaction_hash=log.transaction_hash,
            intent_hash=intent_hash,
            used_fallback=bool(log.args.get("usedFallback", False)),
            chain_id=chain_id,
            dest_chain_id=await self._dest_chain_id(intent_hash),
            block_number=log.block_number,
        )
        logger.info(
            "intent_executed",
            intent_hash=intent_hash,
            tx_hash=execution.transaction_hash,
            used_fallback=execution.used_fallback,
            dest_chain_id=execution.dest_chain_id,
        )
        if self.on_execution is not None:
            self.on_execution(execution)

        if execution.needs_bridge_monitor:
            self._start_monitor(execution)

    async def _dest_chain_id(self, intent_hash: str) -> int | None:
        try:
            value = await self.client.read_contract(
                self.channel_address, INTENT_CHANNEL_ABI, "destChainIdOf", [hex_to_bytes(intent_hash)]
            )
        except Exception as e:
            logger.warning("dest_chain_lookup_failed", intent_hash=intent_hash, error=str(e))
            return None
        dest = int(value)
        # Zero means the channel has no record of the intent
        return dest or None

    def _start_monitor(self, execution: ExecutionEvent) -> None:
        if self.monitor is None or not self.config.monitor_bridges:
            return
        tx_hash = execution.transaction_hash.lower()
        if not self._monitored.add(tx_hash):
            return
        self._handles[tx_hash] = self.monitor.monitor(
            execution.transaction_hash,
            execution.chain_id,
            on_result=self._bridge_finished,
        )

    def _bridge_finished(self, outcome: BridgeOutcome) -> None:
        self._handles.pop(outcome.source_tx_hash.lower(), None)
        if self.on_bridge_result is not None:
            self.on_bridge_result(outcome)


__all__ = [
    "EVENT_STATUS",
    "ExecutionEvent",
    "RecentKeys",
    "SettlementEvent",
    "SettlementEventReconciler",
    "apply_event",
    "status_for_event",
]
