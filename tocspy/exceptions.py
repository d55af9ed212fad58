"""
Exception classes for tocspy.

All tocspy exceptions inherit from TocSpyError,
making it easy to catch all library errors.

The partition core itself never raises: unresolved anchors are skipped
and malformed offset tables are reported by the validators, not rejected.
Exceptions only come from configuration and from opening outline sources.

Example:
    >>> try:
    ...     resolver = PDFOutlineResolver.open("notes.txt")
    ... except tocspy.OutlineError as e:
    ...     print(f"Cannot read outline: {e}")
    ... except tocspy.TocSpyError as e:
    ...     print(f"tocspy error: {e}")
"""


class TocSpyError(Exception):
    """
    Base exception for all tocspy errors.

    Catch this to handle any tocspy-specific error.
    """

    pass


class ConfigurationError(TocSpyError):
    """
    Raised for invalid configuration.

    Example:
        >>> SpyConfig(unresolved_policy="raise")
        ConfigurationError: unresolved_policy must be one of ('skip', 'warn'), got 'raise'
    """

    pass


class OutlineError(TocSpyError):
    """
    Raised when a document outline cannot be read.

    A missing file raises FileNotFoundError instead; this covers files
    that exist but are not readable as a document.
    """

    pass
