#!/usr/bin/env python3
"""
Basic tocspy Usage Example

This example demonstrates the core workflow:
1. Describe a page's table of contents and headings
2. Watch the anchors while scrolling
3. Share the partition between several consumers
4. Drive the engine by hand
5. Follow the outline of a PDF
"""

import logging
import sys

from tocspy import (
    Anchor,
    Header,
    HierarchyIndexer,
    MappingResolver,
    PartitionEngine,
    PDFOutlineResolver,
    Signal,
    SpyConfig,
    Target,
    ViewportOffset,
    watch_anchors,
)


def describe(anchors) -> str:
    if anchors.active is None:
        return "(top of page)"
    return " > ".join(a.title or a.href for a in reversed(anchors.active.anchors))


def main():
    logging.basicConfig(level=logging.INFO)

    # ─────────────────────────────────────────────────────────────────────────
    # 1. Table of contents
    # ─────────────────────────────────────────────────────────────────────────

    headings = [
        ("getting-started", "Getting started", 0, 1),
        ("installation", "Installation", 400, 2),
        ("from-source", "From source", 900, 3),
        ("configuration", "Configuration", 1500, 2),
        ("reference", "Reference", 2400, 1),
    ]
    anchors = [Anchor(href=f"#{hid}", title=title) for hid, title, _, _ in headings]
    resolver = MappingResolver(
        [Target(offset=offset, depth=depth, id=hid) for hid, _, offset, depth in headings]
    )

    # ─────────────────────────────────────────────────────────────────────────
    # 2. Watch while scrolling
    # ─────────────────────────────────────────────────────────────────────────

    offsets = Signal(ViewportOffset(y=0))
    headers = Signal(Header(height=48))

    spy = watch_anchors(anchors, resolver, offsets, headers, SpyConfig(unresolved_policy="warn"))
    sub = spy.subscribe(lambda a: print(f"  reading: {describe(a)}"))

    for y in (100, 350, 360, 1000, 2500, 200):
        print(f"scroll to {y}")
        offsets.emit(ViewportOffset(y=y))

    # Header collapses: the threshold line moves up
    headers.emit(Header(height=0))

    # ─────────────────────────────────────────────────────────────────────────
    # 3. Several consumers share one computation
    # ─────────────────────────────────────────────────────────────────────────

    late = spy.subscribe(lambda a: print(f"  sidebar: {len(a.done)} done, {len(a.next)} next"))
    offsets.emit(ViewportOffset(y=1600))

    late.unsubscribe()
    sub.unsubscribe()  # last one out stops the pipeline

    # ─────────────────────────────────────────────────────────────────────────
    # 4. Manual ticks
    # ─────────────────────────────────────────────────────────────────────────

    table = HierarchyIndexer(resolver).build(anchors)
    engine = PartitionEngine(table)
    for y in (0, 500, 520, 2000):
        changed = engine.advance(y, adjust=66)
        print(f"tick y={y}: changed={changed}, done={len(engine.state.done)}")

    # ─────────────────────────────────────────────────────────────────────────
    # 5. PDF outline
    # ─────────────────────────────────────────────────────────────────────────

    if len(sys.argv) > 1:
        outline = PDFOutlineResolver.open(sys.argv[1], page_gap=8)
        pages = Signal(ViewportOffset(y=0))
        spy = watch_anchors(outline.anchors(), outline, pages, Signal(Header(height=0)))
        with spy.subscribe(lambda a: print(f"  bookmark: {describe(a)}")):
            for item in outline.items:
                if item.offset is not None:
                    pages.emit(ViewportOffset(y=item.offset + 1))


if __name__ == "__main__":
    main()
