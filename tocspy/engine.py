"""
Partition engine.

Keeps the chain table split into ``done`` (scrolled past) and ``next``
(not reached yet) as the scroll position and header threshold change.

Instead of rescanning the table on every tick, the boundary between the
two halves is moved from where it was:

- Look forward: upcoming entries that are now above the threshold line
  move from the front of ``next`` to the end of ``done``
- Look backward: passed entries that are below the line again move from
  the end of ``done`` to the front of ``next``

Scanning costs O(k) for the k entries that cross the boundary, whether
the viewer scrolls a few pixels or jumps to a distant heading. When no
entry crosses, the previous state object is kept as is, which lets
consumers detect "no change" by identity.

Offsets are assumed non-decreasing in document order. Tables that break
this are not rejected; the partition is then merely imprecise.
"""

from __future__ import annotations

import logging

from tocspy.models import ChainTable, PartitionState
from tocspy.streams import Stream, distinct_until_changed, scan

logger = logging.getLogger(__name__)


def sweep(state: PartitionState, y: float, adjust: float) -> PartitionState:
    """Move the done/next boundary to match scroll position ``y``.

    An entry is done when ``offset - adjust < y``.

    Returns:
        A new state if any entry crossed the boundary, otherwise ``state``
        itself.
    """
    done, upcoming = state.done, state.next

    # Look forward
    count = 0
    while count < len(upcoming) and upcoming[count].offset - adjust < y:
        count += 1
    if count:
        done = done + upcoming[:count]
        upcoming = upcoming[count:]

    # Look backward
    count = 0
    while count < len(done) and done[-1 - count].offset - adjust >= y:
        count += 1
    if count:
        split = len(done) - count
        upcoming = done[split:] + upcoming
        done = done[:split]

    if done is state.done and upcoming is state.next:
        return state
    return PartitionState(done=done, next=upcoming)


def unchanged(previous: PartitionState, current: PartitionState) -> bool:
    """True when no entry crossed the boundary between two states."""
    return previous.done is current.done and previous.next is current.next


class PartitionEngine:
    """Stateful partition of a chain table.

    For callers that drive ticks themselves; partition_stream() wraps
    the same sweep for streams.

    Example:
        >>> engine = PartitionEngine(table)
        >>> engine.advance(y=250, adjust=0)
        True
        >>> engine.advance(y=250, adjust=0)
        False
    """

    def __init__(self, table: ChainTable):
        self.table = table
        self.state = PartitionState.seed(table)

    def reset(self) -> None:
        """Return to the seeded state (nothing passed)."""
        logger.debug("Resetting partition of %d entries", len(self.table))
        self.state = PartitionState.seed(self.table)

    def advance(self, y: float, adjust: float) -> bool:
        """Process one tick. Returns whether the partition changed."""
        previous = self.state
        self.state = sweep(previous, y, adjust)
        return not unchanged(previous, self.state)


def partition_stream(table: ChainTable, ticks: Stream[tuple[float, float]]) -> Stream[PartitionState]:
    """Partition states for a stream of (y, adjust) ticks.

    Every subscription starts from the seeded state. The first tick is
    always emitted; later ticks are emitted only when an entry crossed
    the boundary.
    """
    return ticks.pipe(
        scan(lambda state, tick: sweep(state, *tick), PartitionState.seed(table)),
        distinct_until_changed(unchanged),
    )
