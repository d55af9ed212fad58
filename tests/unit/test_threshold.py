"""
Unit tests for header threshold computation.
"""

from tocspy.config import HEADER_MARGIN
from tocspy.models import Header
from tocspy.streams import Signal
from tocspy.threshold import ThresholdAdjuster


class TestThresholdAdjuster:
    """Test threshold = margin + header height."""

    def test_default_margin(self):
        """Default margin is the reference 18 units."""
        assert ThresholdAdjuster().margin == HEADER_MARGIN == 18
        assert ThresholdAdjuster()(Header(height=48)) == 66

    def test_custom_margin(self):
        """Margin is configurable."""
        assert ThresholdAdjuster(margin=0)(Header(height=48)) == 48

    def test_no_header(self):
        """Without a header only the margin remains."""
        assert ThresholdAdjuster()(Header(height=0)) == 18

    def test_watch_follows_header(self):
        """The threshold stream follows header geometry changes."""
        headers = Signal(Header(height=48))
        received = []
        ThresholdAdjuster().watch(headers).subscribe(received.append)

        headers.emit(Header(height=0))
        headers.emit(Header(height=64))

        assert received == [66, 18, 82]
