"""
Validation rules for chain tables.

The partition engine assumes offsets grow in document order. Validators
check a table against that and other structural expectations; issues are
reported but never block watching (graceful degradation).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tocspy.models import ChainTable


@dataclass
class TableIssue:
    """A problem found in a chain table."""

    type: str  # "non_monotonic", "duplicate_anchor"
    message: str
    severity: str  # "warning", "info"
    anchors: list[str]  # Affected anchor hrefs


class ValidationRule(ABC):
    """Abstract base for table validation rules."""

    name: str = "base"

    @abstractmethod
    def check(self, table: ChainTable) -> list[TableIssue]:
        """Check a table for issues.

        Returns list of issues found (empty if all good).
        """
        pass


class MonotonicOffsetValidator(ValidationRule):
    """Offsets should not decrease in document order.

    A heading placed above its predecessor (e.g. inside a floated or
    reordered element) can make the partition skip or repeat entries.
    """

    name = "monotonic"

    def check(self, table: ChainTable) -> list[TableIssue]:
        issues = []

        entries = table.entries
        for prev, entry in zip(entries, entries[1:]):
            if entry.offset < prev.offset:
                issues.append(
                    TableIssue(
                        type="non_monotonic",
                        message=f"Offset decreases: '{entry.chain.anchor.href}' at "
                        f"{entry.offset} follows '{prev.chain.anchor.href}' at {prev.offset}",
                        severity="warning",
                        anchors=[prev.chain.anchor.href, entry.chain.anchor.href],
                    )
                )

        return issues


class DuplicateAnchorValidator(ValidationRule):
    """Fragment identifiers should be unique within a page.

    Two anchors pointing at the same fragment highlight together, which
    usually means a heading id was generated twice.
    """

    name = "duplicate"

    def check(self, table: ChainTable) -> list[TableIssue]:
        issues = []
        seen: set[str] = set()

        for entry in table:
            href = entry.chain.anchor.href
            if href in seen:
                issues.append(
                    TableIssue(
                        type="duplicate_anchor",
                        message=f"Anchor '{href}' appears more than once",
                        severity="info",
                        anchors=[href],
                    )
                )
            seen.add(href)

        return issues


DEFAULT_RULES: tuple[ValidationRule, ...] = (MonotonicOffsetValidator(), DuplicateAnchorValidator())


def validate_table(
    table: ChainTable, rules: tuple[ValidationRule, ...] | None = None
) -> list[TableIssue]:
    """Run validation rules over a table and collect their issues."""
    issues = []
    for rule in rules if rules is not None else DEFAULT_RULES:
        issues.extend(rule.check(table))
    return issues
