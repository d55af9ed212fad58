"""Header compensation for the scroll threshold.

A heading counts as passed once it scrolls under the sticky header, not
once it leaves the viewport, so the header height plus a small margin is
subtracted from every target offset before comparing it with the scroll
position.
"""

from __future__ import annotations

from tocspy.config import HEADER_MARGIN
from tocspy.models import Header
from tocspy.streams import Stream, map_values


class ThresholdAdjuster:
    """Maps header geometry to a pixel threshold.

    Example:
        >>> ThresholdAdjuster()(Header(height=48))
        66.0
    """

    def __init__(self, margin: float = HEADER_MARGIN):
        self.margin = margin

    def __call__(self, header: Header) -> float:
        return self.margin + header.height

    def watch(self, headers: Stream[Header]) -> Stream[float]:
        """Threshold stream, recomputed on every header change."""
        return headers.pipe(map_values(self))
