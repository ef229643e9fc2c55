"""Reveal-time batching for private intents.

Reveals are grouped into discrete windows so that intents committed close
together become indistinguishable by reveal time.
"""

import time


def align_to_batch_window(timestamp: int, batch_window: int) -> int:
    """Round ``timestamp`` up to the next multiple of ``batch_window``.

    Exact multiples are returned unchanged, and a window of 0 disables
    batching.

    Examples:
        >>> align_to_batch_window(101, 60)
        120
        >>> align_to_batch_window(120, 60)
        120
        >>> align_to_batch_window(101, 0)
        101
    """
    if batch_window < 0:
        raise ValueError(f"batch_window must be non-negative, got {batch_window}")
    if batch_window == 0:
        return timestamp
    remainder = timestamp % batch_window
    if remainder == 0:
        return timestamp
    return timestamp + (batch_window - remainder)


def calculate_not_before(
    min_delay: int,
    batch_window: int,
    desired_time: int | None = None,
    now: int | None = None,
) -> int:
    """Earliest reveal time for a new commitment.

    The desired time is first clamped up to ``now + min_delay``, then
    aligned to the batch window. Aligning first could yield a time before
    the minimum delay.

    Args:
        min_delay: Minimum seconds between commit and reveal
        batch_window: Batch window length in seconds (0 disables batching)
        desired_time: Optional requested reveal time (unix seconds)
        now: Current unix time; defaults to the wall clock
    """
    if min_delay < 0:
        raise ValueError(f"min_delay must be non-negative, got {min_delay}")
    current = int(time.time()) if now is None else now
    earliest = current + min_delay
    target = earliest if desired_time is None or desired_time < earliest else desired_time
    return align_to_batch_window(target, batch_window)


__all__ = ["align_to_batch_window", "calculate_not_before"]
