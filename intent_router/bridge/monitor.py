"""Bridge status monitor.

Polls LI.FI /v1/status for one source transaction until it reaches a
terminal status or the caller cancels. Each monitored transaction runs
its own independent polling task.

Terminal statuses:
- DONE: bridge settled on the destination chain
- FAILED / INVALID: bridge failed; substatus message is reported

Anything else (PENDING, NOT_FOUND, ...) and any transient request failure
means "poll again next interval".
"""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Callable
from dataclasses import dataclass

import structlog

from intent_router.bridge.lifi import LifiClient, LifiStatus
from intent_router.config import MonitorConfig
from intent_router.constants import BRIDGE_FAILURE_STATUSES, BRIDGE_STATUS_DONE
from intent_router.result import Found

logger = structlog.get_logger()

UNKNOWN_FAILURE_MESSAGE = "Unknown error"


@dataclass(frozen=True)
class BridgeOutcome:
    """Terminal result of a monitored bridge transfer."""

    source_tx_hash: str
    source_chain_id: int
    success: bool
    status: str
    dest_chain_id: int | None = None
    dest_tx_hash: str | None = None
    message: str | None = None


def outcome_from_status(status: LifiStatus, source_tx_hash: str, source_chain_id: int) -> BridgeOutcome | None:
    """Map a status response to a terminal outcome, or None to keep polling."""
    normalized = status.normalized_status
    if normalized == BRIDGE_STATUS_DONE:
        receiving = status.receiving
        return BridgeOutcome(
            source_tx_hash=source_tx_hash,
            source_chain_id=source_chain_id,
            success=True,
            status=normalized,
            dest_chain_id=receiving.chain_id if receiving else None,
            dest_tx_hash=receiving.tx_hash if receiving else None,
        )
    if normalized in BRIDGE_FAILURE_STATUSES:
        return BridgeOutcome(
            source_tx_hash=source_tx_hash,
            source_chain_id=source_chain_id,
            success=False,
            status=normalized,
            message=status.substatus_message or status.substatus or UNKNOWN_FAILURE_MESSAGE,
        )
    return None


class MonitorHandle:
    """Controls one polling loop.

    ``cancel()`` is idempotent and safe to call after the loop finished.
    """

    def __init__(self, source_tx_hash: str) -> None:
        self.source_tx_hash = source_tx_hash
        self._stop = asyncio.Event()
        self._task: asyncio.Task[BridgeOutcome | None] | None = None

    @property
    def cancelled(self) -> bool:
        return self._stop.is_set()

    @property
    def done(self) -> bool:
        return self._task is not None and self._task.done()

    def cancel(self) -> None:
        if self._stop.is_set():
            return
        self._stop.set()
        logger.debug("bridge_monitor_cancelled", tx_hash=self.source_tx_hash)

    async def wait(self) -> BridgeOutcome | None:
        """Wait for the loop to end; None if it was cancelled first."""
        if self._task is None:
            return None
        return await self._task

    async def _sleep(self, seconds: float) -> None:
        # Wakes early on cancel()
        with contextlib.suppress(TimeoutError):
            await asyncio.wait_for(self._stop.wait(), timeout=seconds)


class BridgeStatusMonitor:
    """Starts polling loops for cross-chain settlements.

    Args:
        lifi: LI.FI client used for status lookups
        config: Poll interval settings
    """

    def __init__(self, lifi: LifiClient, config: MonitorConfig | None = None) -> None:
        self.lifi = lifi
        self.config = config or MonitorConfig()

    def monitor(
        self,
        source_tx_hash: str,
        source_chain_id: int,
        on_update: Callable[[LifiStatus], None] | None = None,
        on_result: Callable[[BridgeOutcome], None] | None = None,
    ) -> MonitorHandle:
        """Start polling in the background and return the handle.

        The first poll happens immediately, then every ``poll_interval_seconds``.
        Must be called from within a running event loop.
        """
        handle = MonitorHandle(source_tx_hash)
        logger.info("bridge_monitor_started", tx_hash=source_tx_hash, source_chain_id=source_chain_id)
        handle._task = asyncio.create_task(self._poll(handle, source_chain_id, on_update, on_result))
        return handle

    async def _poll(
        self,
        handle: MonitorHandle,
        source_chain_id: int,
        on_update: Callable[[LifiStatus], None] | None,
        on_result: Callable[[BridgeOutcome], None] | None,
    ) -> BridgeOutcome | None:
        tx_hash = handle.source_tx_hash
        while not handle.cancelled:
            result = await self.lifi.get_status(tx_hash, source_chain_id)
            if isinstance(result, Found) and not handle.cancelled:
                status = result.value
                if on_update is not None:
                    on_update(status)
                outcome = outcome_from_status(status, tx_hash, source_chain_id)
                if outcome is not None:
                    self._log_outcome(outcome)
                    handle.cancel()
                    if on_result is not None:
                        on_result(outcome)
                    return outcome
                logger.debug("bridge_monitor_pending", tx_hash=tx_hash, status=status.normalized_status)

            await handle._sleep(self.config.poll_interval_seconds)
        return None

    @staticmethod
    def _log_outcome(outcome: BridgeOutcome) -> None:
        if outcome.success:
            logger.info(
                "bridge_settled",
                tx_hash=outcome.source_tx_hash,
                dest_chain_id=outcome.dest_chain_id,
                dest_tx_hash=outcome.dest_tx_hash,
            )
        else:
            logger.warning(
                "bridge_failed",
                tx_hash=outcome.source_tx_hash,
                status=outcome.status,
                message=outcome.message,
            )


__all__ = [
    "BridgeOutcome",
    "BridgeStatusMonitor",
    "MonitorHandle",
    "outcome_from_status",
]
