"""
Anchor watching orchestrator.

This module provides the main `watch_anchors()` function that turns a list
of table-of-contents anchors into a live done/next partition by wiring
together:
- HierarchyIndexer (anchors -> chain table, once)
- ThresholdAdjuster (header geometry -> threshold)
- combine_latest (scroll offset + threshold -> tick)
- partition_stream (tick -> partition state)
- SharedStream (one computation shared by all observers)

The chain table is built once per call. The anchor list is assumed fixed
for the lifetime of the returned stream; when the page structure changes,
call watch_anchors() again.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from tocspy.config import SpyConfig
from tocspy.engine import partition_stream
from tocspy.hierarchy import HierarchyIndexer
from tocspy.models import Anchor, Anchors, ChainTable, Header, PartitionState, ViewportOffset
from tocspy.resolvers.base import TargetResolver
from tocspy.streams import SharedStream, Stream, combine_latest, map_values, share_replay
from tocspy.threshold import ThresholdAdjuster
from tocspy.validators import validate_table

logger = logging.getLogger(__name__)


def project(state: PartitionState) -> Anchors:
    """Drop offsets, keeping only the chains of each half."""
    return Anchors(
        done=tuple(entry.chain for entry in state.done),
        next=tuple(entry.chain for entry in state.next),
    )


def watch_table(
    table: ChainTable,
    offsets: Stream[ViewportOffset],
    headers: Stream[Header],
    config: SpyConfig | None = None,
) -> SharedStream[Anchors]:
    """Watch an already built chain table.

    Args:
        table: Chain table owned by the caller.
        offsets: Viewport scroll positions.
        headers: Header geometry.
        config: Threshold margin.

    Returns:
        Shared stream of Anchors, replaying the latest value.
    """
    config = config or SpyConfig()

    adjust = ThresholdAdjuster(config.margin).watch(headers)
    ticks = combine_latest(offsets.pipe(map_values(lambda offset: offset.y)), adjust)

    return partition_stream(table, ticks).pipe(
        map_values(project),
        share_replay(),
    )


def watch_anchors(
    anchors: Iterable[Anchor],
    resolver: TargetResolver,
    offsets: Stream[ViewportOffset],
    headers: Stream[Header],
    config: SpyConfig | None = None,
) -> SharedStream[Anchors]:
    """
    Watch which anchors have been scrolled past.

    Args:
        anchors: Table-of-contents anchors in document order.
        resolver: Maps anchor fragments to headings; unresolved anchors
                  are left out.
        offsets: Viewport scroll positions.
        headers: Header geometry.
        config: Optional configuration (uses defaults if None).

    Returns:
        Shared stream of Anchors. Subscribers joining late receive the
        current partition immediately.

    Example:
        >>> spy = watch_anchors(anchors, resolver, offsets, headers)
        >>> sub = spy.subscribe(lambda a: highlight(a.active))
        >>> offsets.emit(ViewportOffset(y=1200))
        >>> sub.unsubscribe()
    """
    config = config or SpyConfig()
    table = HierarchyIndexer(resolver, config).build(anchors)

    if config.validate:
        for issue in validate_table(table):
            level = logging.WARNING if issue.severity == "warning" else logging.INFO
            logger.log(level, "%s", issue.message)

    return watch_table(table, offsets, headers, config)
