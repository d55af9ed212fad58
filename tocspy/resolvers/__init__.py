"""Target resolution module.

Resolvers map anchor fragments to the headings they point at:
- MappingResolver: in-memory lookup (DOM snapshots, tests)
- PDFOutlineResolver: document outlines via PyMuPDF
"""

from tocspy.resolvers.base import MappingResolver, TargetResolver
from tocspy.resolvers.pdf_outline import OutlineItem, PDFOutlineResolver, slugify

__all__ = [
    # Base
    "TargetResolver",
    "MappingResolver",
    # Outlines
    "PDFOutlineResolver",
    "OutlineItem",
    "slugify",
]
