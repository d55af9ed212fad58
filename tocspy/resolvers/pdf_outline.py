"""
Outline resolver using PyMuPDF (fitz).

Turns a document outline (PDF bookmarks, EPUB navigation) into anchors
and targets so a viewer can highlight the bookmark being read. Pages are
laid out as one continuous vertical strip, the way scrolling viewers
render them: a target's offset is the top of its page in that strip plus
the destination's y position within the page.
"""

from __future__ import annotations

import logging
import re
import unicodedata
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote

import fitz  # PyMuPDF

from tocspy.exceptions import OutlineError
from tocspy.models import Anchor, Target
from tocspy.resolvers.base import TargetResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutlineItem:
    """An outline entry placed in the continuous page layout.

    From PyMuPDF's doc.get_toc(simple=False), which returns
    [level, title, page_num, dest] with a 1-based page_num.
    """

    level: int  # 1=chapter, 2=section, etc.
    title: str
    target_id: str
    page_index: int | None  # None when the entry points nowhere
    offset: float | None


def slugify(title: str) -> str:
    """Make an ASCII fragment identifier from a heading title."""
    value = unicodedata.normalize("NFKD", title).encode("ascii", "ignore").decode("ascii")
    value = re.sub(r"[^\w\s-]", "", value).strip().lower()
    return re.sub(r"[-\s]+", "-", value) or "section"


def _unique(slug: str, seen: set[str]) -> str:
    candidate = slug
    counter = 0
    while candidate in seen:
        counter += 1
        candidate = f"{slug}_{counter}"
    seen.add(candidate)
    return candidate


class PDFOutlineResolver(TargetResolver):
    """Resolve outline anchors to positions in a paged document.

    Usage:
        resolver = PDFOutlineResolver.open("/path/to/book.pdf")
        anchors = resolver.anchors()
        table = HierarchyIndexer(resolver).build(anchors)
    """

    name = "pdf_outline"

    def __init__(self, items: list[OutlineItem]):
        self.items = list(items)
        self._targets = {
            item.target_id: Target(
                offset=item.offset,
                depth=item.level,
                id=item.target_id,
                title=item.title,
            )
            for item in self.items
            if item.offset is not None
        }

    @classmethod
    def open(cls, path: str | Path, *, page_gap: float = 0.0) -> PDFOutlineResolver:
        """Read the outline of a document file.

        Args:
            path: Path to a PDF (or any format PyMuPDF opens).
            page_gap: Vertical space between consecutive pages.

        Raises:
            FileNotFoundError: If file doesn't exist.
            OutlineError: If file cannot be opened as a document.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Document not found: {path}")

        try:
            doc = fitz.open(path)
        except Exception as e:
            raise OutlineError(f"Failed to open document: {e}") from e

        try:
            return cls.from_document(doc, page_gap=page_gap)
        finally:
            doc.close()

    @classmethod
    def from_document(cls, doc: fitz.Document, *, page_gap: float = 0.0) -> PDFOutlineResolver:
        """Build a resolver from an already opened document."""
        heights = [doc[i].rect.height for i in range(len(doc))]
        page_tops = []
        top = 0.0
        for height in heights:
            page_tops.append(top)
            top += height + page_gap

        try:
            toc = doc.get_toc(simple=False)
        except Exception as e:
            # Some PDFs have malformed outlines
            logger.warning("Could not read outline: %s", e)
            toc = []

        items = []
        seen: set[str] = set()
        for level, title, page_num, *rest in toc:
            dest = rest[0] if rest and isinstance(rest[0], dict) else {}
            title = (title or "").strip()
            target_id = _unique(dest.get("nameddest") or slugify(title), seen)

            page_index = page_num - 1 if 1 <= page_num <= len(heights) else None
            offset = None
            if page_index is not None:
                point = dest.get("to")
                y = float(point.y) if point is not None else 0.0
                offset = page_tops[page_index] + min(max(y, 0.0), heights[page_index])

            items.append(
                OutlineItem(
                    level=level,
                    title=title,
                    target_id=target_id,
                    page_index=page_index,
                    offset=offset,
                )
            )

        logger.debug("Read %d outline entries over %d pages", len(items), len(heights))
        return cls(items)

    def anchors(self) -> list[Anchor]:
        """Anchors for every outline entry, in outline order."""
        return [
            Anchor(href=f"#{quote(item.target_id, safe='')}", title=item.title)
            for item in self.items
        ]

    def resolve(self, target_id: str) -> Target | None:
        return self._targets.get(target_id)
