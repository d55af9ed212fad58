"""
Hierarchy reconstruction for table-of-contents anchors.

Anchors arrive as a flat list in document order. Their nesting is
recovered from the depth (heading level) of the targets they point to,
using a stack of the currently open sections:

    h1 A        chain: (A,)
      h2 B      chain: (B, A)
        h3 C    chain: (C, B, A)
      h2 D      chain: (D, A)      <- C and B closed by a same-or-shallower heading
    h1 E        chain: (E,)

Each anchor is pushed once and popped at most once, so building the
table is linear in the number of anchors.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from tocspy.config import SpyConfig
from tocspy.models import Anchor, Chain, ChainEntry, ChainTable, Target
from tocspy.resolvers.base import TargetResolver

logger = logging.getLogger(__name__)


def index_targets(
    anchors: Iterable[Anchor],
    resolver: TargetResolver,
    config: SpyConfig | None = None,
) -> list[tuple[Anchor, Target]]:
    """Pair each anchor with its target, dropping unresolvable ones.

    Args:
        anchors: Anchors in document order.
        resolver: Looks up the target of each anchor.
        config: Controls fragment decoding and how drops are logged.

    Returns:
        (anchor, target) pairs in document order.
    """
    config = config or SpyConfig()
    level = logging.WARNING if config.unresolved_policy == "warn" else logging.DEBUG

    pairs = []
    for anchor in anchors:
        target_id = anchor.target_id(decode=config.decode_fragments)
        target = resolver.resolve(target_id)
        if target is None:
            logger.log(level, "Skipping anchor %s: no target %r", anchor.href, target_id)
            continue
        pairs.append((anchor, target))

    return pairs


def build_chain_table(pairs: Iterable[tuple[Anchor, Target]]) -> ChainTable:
    """Build the chain table from (anchor, target) pairs in document order.

    Each entry maps the anchor's chain (itself plus enclosing headings,
    innermost first) to its target's offset.
    """
    stack: list[tuple[Anchor, Target]] = []
    entries: list[ChainEntry] = []

    for anchor, target in pairs:
        # A same-or-shallower heading closes the open section(s)
        while stack and stack[-1][1].depth >= target.depth:
            stack.pop()

        stack.append((anchor, target))
        chain = Chain(anchors=tuple(a for a, _ in reversed(stack)))
        entries.append(ChainEntry(chain=chain, offset=target.offset))

    return ChainTable(entries)


class HierarchyIndexer:
    """Builds a chain table from anchors and a resolver.

    The table is built once and never changes; if the page structure
    changes, build a new one.

    Example:
        >>> indexer = HierarchyIndexer(MappingResolver(targets))
        >>> table = indexer.build(anchors)
        >>> [len(chain) for chain in table.chains()]
        [1, 2, 3, 2, 1]
    """

    def __init__(self, resolver: TargetResolver, config: SpyConfig | None = None):
        self.resolver = resolver
        self.config = config or SpyConfig()

    def index(self, anchors: Iterable[Anchor]) -> list[tuple[Anchor, Target]]:
        """Resolve anchors to (anchor, target) pairs."""
        return index_targets(anchors, self.resolver, self.config)

    def build(self, anchors: Iterable[Anchor]) -> ChainTable:
        """Resolve anchors and build their chain table."""
        anchors = list(anchors)
        table = build_chain_table(self.index(anchors))
        logger.debug(
            "Indexed %d of %d anchors via %s", len(table), len(anchors), self.resolver.name
        )
        return table
