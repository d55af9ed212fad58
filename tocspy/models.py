"""
Data models for tocspy.

These models describe the table of contents being watched (anchors,
their targets and the nesting chains built from them), the partition
maintained while scrolling, and the viewport/header events that drive it.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from urllib.parse import unquote

# ═══════════════════════════════════════════════════════════════════════════════
# Anchors and targets
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class Anchor:
    """A navigable link in a table of contents.

    Identified by the fragment of its href, which is unique within a page.

    Example:
        >>> Anchor("#caf%C3%A9").target_id()
        'café'
    """

    href: str
    title: str | None = None

    @property
    def fragment(self) -> str:
        """Raw fragment identifier (everything after '#')."""
        _, _, fragment = self.href.partition("#")
        return fragment

    def target_id(self, decode: bool = True) -> str:
        """Identifier of the element this anchor points to."""
        return unquote(self.fragment) if decode else self.fragment


@dataclass(frozen=True)
class Target:
    """The heading an anchor scrolls to."""

    offset: float  # Vertical distance from document top
    depth: int  # Heading level: 1 = outermost, 6 = innermost
    id: str | None = None
    title: str | None = None


# ═══════════════════════════════════════════════════════════════════════════════
# Chains and the chain table
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True, eq=False)
class Chain:
    """A heading together with all of its ancestor headings.

    Ordered from the heading itself outward to its outermost ancestor.
    Chains are created once per table and compared by identity, so two
    chains with the same anchors are still distinct table keys.
    """

    anchors: tuple[Anchor, ...]

    def __post_init__(self):
        if not self.anchors:
            raise ValueError("Chain must contain at least one anchor")

    @property
    def anchor(self) -> Anchor:
        """The heading's own anchor (innermost)."""
        return self.anchors[0]

    @property
    def ancestors(self) -> tuple[Anchor, ...]:
        """Enclosing headings, innermost first."""
        return self.anchors[1:]

    @property
    def nesting(self) -> int:
        """Number of anchors in the chain.

        Not the heading level: an h3 directly under an h1 has a
        ``Target.depth`` of 3 but a nesting of 2.
        """
        return len(self.anchors)

    def __len__(self) -> int:
        return len(self.anchors)

    def __iter__(self) -> Iterator[Anchor]:
        return iter(self.anchors)

    def __getitem__(self, index):
        return self.anchors[index]

    def __contains__(self, anchor: object) -> bool:
        return anchor in self.anchors

    def __repr__(self) -> str:
        return f"Chain({' < '.join(a.href for a in self.anchors)})"


@dataclass(frozen=True)
class ChainEntry:
    """A chain and the offset of the heading it originates from."""

    chain: Chain
    offset: float


class ChainTable:
    """Ordered, immutable mapping of chains to target offsets.

    Entries keep the document order of their originating anchors.
    Lookups by chain use identity, not content.
    """

    def __init__(self, entries=()):
        self._entries: tuple[ChainEntry, ...] = tuple(entries)

    @property
    def entries(self) -> tuple[ChainEntry, ...]:
        return self._entries

    def chains(self) -> list[Chain]:
        """Chains in document order."""
        return [entry.chain for entry in self._entries]

    def offsets(self) -> list[float]:
        """Offsets in document order."""
        return [entry.offset for entry in self._entries]

    def offset_of(self, chain: Chain) -> float | None:
        """Offset recorded for exactly this chain object, if any."""
        for entry in self._entries:
            if entry.chain is chain:
                return entry.offset
        return None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ChainEntry]:
        return iter(self._entries)

    def __getitem__(self, index: int) -> ChainEntry:
        return self._entries[index]

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __repr__(self) -> str:
        return f"ChainTable({len(self._entries)} entries)"


# ═══════════════════════════════════════════════════════════════════════════════
# Partition
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class PartitionState:
    """Split of the chain table into passed and upcoming entries.

    ``done`` is a prefix of the table in document order and ``next`` the
    matching suffix. Both are tuples and are replaced, never mutated, when
    the boundary moves.
    """

    done: tuple[ChainEntry, ...] = ()
    next: tuple[ChainEntry, ...] = ()

    @classmethod
    def seed(cls, table: ChainTable) -> PartitionState:
        """Initial state: nothing passed yet."""
        return cls(done=(), next=table.entries)

    @property
    def boundary(self) -> int:
        """Index of the first upcoming entry."""
        return len(self.done)


@dataclass(frozen=True)
class Anchors:
    """Public view of a partition: chains only, offsets dropped.

    One instance is shared by every observer of a watch, so both halves
    are tuples.
    """

    done: tuple[Chain, ...] = ()
    next: tuple[Chain, ...] = ()

    @property
    def active(self) -> Chain | None:
        """The chain of the section currently being read, if any."""
        return self.done[-1] if self.done else None


# ═══════════════════════════════════════════════════════════════════════════════
# Viewport events
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class ViewportOffset:
    """Scroll position of the viewport."""

    y: float
    x: float = 0.0


@dataclass(frozen=True)
class Header:
    """Geometry of the sticky header overlapping the viewport."""

    height: float
