"""
Target resolution.

A resolver maps the identifier an anchor points to (its decoded fragment)
onto the heading it scrolls to. Resolution is allowed to fail: returning
None means the page has no such element, and the anchor is dropped from
the index without error.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping

from tocspy.models import Target


class TargetResolver(ABC):
    """Abstract base for target resolvers."""

    name: str = "base"

    @abstractmethod
    def resolve(self, target_id: str) -> Target | None:
        """Find the target for an identifier.

        Should return None (not raise) when nothing matches.
        """
        pass


class MappingResolver(TargetResolver):
    """Resolve targets from an in-memory lookup.

    Accepts either a mapping of identifiers to targets, or an iterable of
    targets carrying their own ``id`` (targets without one are ignored).

    Example:
        >>> resolver = MappingResolver([Target(offset=0, depth=1, id="intro")])
        >>> resolver.resolve("intro").depth
        1
    """

    name = "mapping"

    def __init__(self, targets: Mapping[str, Target] | Iterable[Target]):
        if isinstance(targets, Mapping):
            self._targets = dict(targets)
        else:
            self._targets = {t.id: t for t in targets if t.id is not None}

    def resolve(self, target_id: str) -> Target | None:
        return self._targets.get(target_id)

    def __len__(self) -> int:
        return len(self._targets)
