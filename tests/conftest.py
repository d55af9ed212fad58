"""
Pytest configuration and fixtures for tocspy tests.
"""

from pathlib import Path

import pytest

from tocspy.hierarchy import build_chain_table
from tocspy.models import Anchor, Target
from tocspy.resolvers import MappingResolver

# Outline used by the PDF fixtures: [level, title, 1-based page]
SAMPLE_OUTLINE = [
    [1, "Introduction", 1],
    [2, "Background", 1],
    [2, "Scope", 2],
    [1, "Methods", 3],
    [2, "Data Collection", 3],
    [3, "Interviews", 4],
    [1, "Results", 5],
]


@pytest.fixture
def make_page():
    """Build anchors and a resolver from (id, offset, depth) headings."""

    def build(headings):
        anchors = [Anchor(href=f"#{hid}", title=hid) for hid, _, _ in headings]
        resolver = MappingResolver(
            [Target(offset=offset, depth=depth, id=hid) for hid, offset, depth in headings]
        )
        return anchors, resolver

    return build


@pytest.fixture
def nested_page(make_page):
    """Page with headings h1 h2 h3 h2 h1, 100px apart."""
    return make_page(
        [
            ("intro", 0, 1),
            ("setup", 100, 2),
            ("install", 200, 3),
            ("usage", 300, 2),
            ("api", 400, 1),
        ]
    )


@pytest.fixture
def flat_table():
    """Four sibling headings at offsets 0, 100, 200, 300."""
    return build_chain_table(
        [(Anchor(href=f"#s{offset}"), Target(offset=offset, depth=2)) for offset in (0, 100, 200, 300)]
    )


@pytest.fixture
def make_pdf(tmp_path):
    """Write a PDF with the given outline and return its path."""
    import fitz

    def build(outline=None, pages: int = 5, width: float = 595, height: float = 842) -> Path:
        doc = fitz.open()
        for i in range(pages):
            page = doc.new_page(width=width, height=height)
            page.insert_text((72, 72), f"Page {i + 1}")
        doc.set_toc(SAMPLE_OUTLINE if outline is None else outline)
        path = tmp_path / "outline.pdf"
        doc.save(str(path))
        doc.close()
        return path

    return build
