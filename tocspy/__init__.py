"""
tocspy: Track which table-of-contents entries have been scrolled past.

As a reader scrolls, tocspy keeps the anchors of a navigation list split
into those already passed ("done") and those still ahead ("next"), so the
section being read can be highlighted. Nested headings are tracked as
chains, so a subsection and all of its parents light up together.

Example:
    >>> import tocspy
    >>> offsets = tocspy.Signal(tocspy.ViewportOffset(y=0))
    >>> headers = tocspy.Signal(tocspy.Header(height=48))
    >>> spy = tocspy.watch_anchors(anchors, resolver, offsets, headers)
    >>> sub = spy.subscribe(lambda a: print(a.active))
    >>> offsets.emit(tocspy.ViewportOffset(y=900))

    >>> # Outline of a PDF as the navigation list
    >>> resolver = tocspy.PDFOutlineResolver.open("book.pdf")
    >>> spy = tocspy.watch_anchors(resolver.anchors(), resolver, offsets, headers)
"""

from tocspy.config import HEADER_MARGIN, SpyConfig
from tocspy.engine import PartitionEngine, partition_stream, sweep
from tocspy.exceptions import (
    ConfigurationError,
    OutlineError,
    TocSpyError,
)
from tocspy.hierarchy import HierarchyIndexer, build_chain_table, index_targets
from tocspy.models import (
    # Table of contents
    Anchor,
    Target,
    Chain,
    ChainEntry,
    ChainTable,
    # Partition
    PartitionState,
    # Events
    ViewportOffset,
    Header,
    # Output
    Anchors,
)
from tocspy.resolvers import MappingResolver, PDFOutlineResolver, TargetResolver
from tocspy.streams import (
    SharedStream,
    Signal,
    Stream,
    Subscription,
    combine_latest,
)
from tocspy.threshold import ThresholdAdjuster
from tocspy.validators import TableIssue, validate_table
from tocspy.watch import project, watch_anchors, watch_table

__version__ = "0.1.0"
__all__ = [
    # Main API
    "watch_anchors",
    "watch_table",
    "project",
    # Configuration
    "SpyConfig",
    "HEADER_MARGIN",
    # Table of contents
    "Anchor",
    "Target",
    "Chain",
    "ChainEntry",
    "ChainTable",
    "HierarchyIndexer",
    "index_targets",
    "build_chain_table",
    # Resolvers
    "TargetResolver",
    "MappingResolver",
    "PDFOutlineResolver",
    # Partition
    "PartitionState",
    "PartitionEngine",
    "sweep",
    "partition_stream",
    "ThresholdAdjuster",
    # Events
    "ViewportOffset",
    "Header",
    # Output
    "Anchors",
    # Streams
    "Stream",
    "Signal",
    "SharedStream",
    "Subscription",
    "combine_latest",
    # Validation
    "TableIssue",
    "validate_table",
    # Exceptions
    "TocSpyError",
    "ConfigurationError",
    "OutlineError",
]
