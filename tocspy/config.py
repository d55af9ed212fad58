"""
Configuration for tocspy anchor watching.

All options have sensible defaults. The defaults reproduce the reference
navigation behaviour: an 18 unit margin below the sticky header, silent
skipping of anchors whose target is missing.
"""

import math
from dataclasses import dataclass
from typing import Literal

from tocspy.exceptions import ConfigurationError

# Visual breathing room added to the header height, matching the
# link/line spacing of the reference navigation.
HEADER_MARGIN = 18.0


@dataclass
class SpyConfig:
    """
    Configuration for watching a table of contents.

    Example:
        >>> config = SpyConfig(margin=24, unresolved_policy="warn")
        >>> spy = tocspy.watch_anchors(anchors, resolver, offsets, headers, config)
    """

    # Threshold options
    margin: float = HEADER_MARGIN  # Added to header height

    # Resolution options
    unresolved_policy: Literal["skip", "warn"] = "skip"  # Log level for dropped anchors
    decode_fragments: bool = True  # URL-decode "#caf%C3%A9" -> "café"

    # Diagnostics
    validate: bool = True  # Log table validation issues on watch

    def __post_init__(self):
        """Validate configuration."""
        if isinstance(self.margin, bool) or not isinstance(self.margin, (int, float)):
            raise ConfigurationError(f"margin must be a number, got {self.margin!r}")
        if not math.isfinite(self.margin) or self.margin < 0:
            raise ConfigurationError(f"margin must be a finite number >= 0, got {self.margin}")

        valid_policies = ("skip", "warn")
        if self.unresolved_policy not in valid_policies:
            raise ConfigurationError(
                f"unresolved_policy must be one of {valid_policies}, "
                f"got {self.unresolved_policy!r}"
            )
