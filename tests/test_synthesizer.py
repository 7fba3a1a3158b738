# File: tests/test_synthesizer.py
import json
import random

import pytest
from reportlab.platypus import XPreformatted
from site_binder.crawler.models import CodeBlockRef, Heading, ListItems, PageRecord, Paragraph
from site_binder.exceptions import RenderError
from site_binder.report.json_report import render_json
from site_binder.report.pdf_report import build_story, render_pdf
from site_binder.synthesizer import (
    BulletBlock,
    CodeBlock,
    TextBlock,
    TocEntry,
    build_toc,
    order_pages,
    synthesize,
)


@pytest.fixture()
def records():
    return [
        PageRecord(
            title="Second",
            url="https://example.com/docs/b",
            headings=("Install", "Use"),
            segments=(
                Paragraph("Intro"),
                Heading("Install"),
                CodeBlockRef(1),
                Heading("Use"),
                ListItems(("a", "b")),
            ),
            code_blocks=("fn main() {}",),
        ),
        PageRecord(title="Root", url="https://example.com/docs"),
        PageRecord(title="First", url="https://example.com/docs/a", headings=("Only",), segments=(Heading("Only"),)),
    ]


def test_order_pages_by_url(records):
    assert [r.url for r in order_pages(records)] == [
        "https://example.com/docs",
        "https://example.com/docs/a",
        "https://example.com/docs/b",
    ]


def test_ordering_independent_of_arrival(records):
    expected = synthesize(records, "Doc")
    for seed in range(5):
        shuffled = records[:]
        random.Random(seed).shuffle(shuffled)
        again = synthesize(shuffled, "Doc")
        assert again.toc == expected.toc
        assert again.chapters == expected.chapters


def test_build_toc(records):
    assert build_toc(order_pages(records)) == [
        TocEntry("1. Root", 0),
        TocEntry("2. First", 0),
        TocEntry("2.1. Only", 1),
        TocEntry("3. Second", 0),
        TocEntry("3.1. Install", 1),
        TocEntry("3.2. Use", 1),
    ]


def test_chapters_expand_code_blocks(records):
    document = synthesize(records, "Doc")
    assert len(document) == 3
    chapter = document.chapters[2]
    assert chapter.heading == "3. Second"
    assert chapter.source_line == "Source: https://example.com/docs/b"
    assert chapter.blocks == (
        TextBlock("Intro", "body"),
        TextBlock("Install", "subheading"),
        CodeBlock("fn main() {}"),
        TextBlock("Use", "subheading"),
        BulletBlock(("a", "b")),
    )


def test_story_keeps_code_verbatim(records):
    story = build_story(synthesize(records, "Doc"))
    code = [f for f in story if isinstance(f, XPreformatted)]
    assert len(code) == 1
    assert "fn main() {}" in code[0].getPlainText()


def test_render_pdf_creates_parent_dirs(tmp_path, records):
    out = tmp_path / "nested" / "dir" / "book.pdf"
    saved = render_pdf(synthesize(records, "Doc"), out)
    assert saved == out
    assert out.read_bytes().startswith(b"%PDF")


def test_render_pdf_with_markup_characters(tmp_path):
    record = PageRecord(
        title="<Tags> & ampersands",
        url="https://example.com/?a=1&b=2",
        segments=(Paragraph("x < y & z > w"), CodeBlockRef(1)),
        code_blocks=("if a < b && c > d {\n    return\n}",),
    )
    out = render_pdf(synthesize([record], "Doc"), tmp_path / "markup.pdf")
    assert out.stat().st_size > 0


def test_render_pdf_unwritable_parent(tmp_path, records):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    with pytest.raises(RenderError):
        render_pdf(synthesize(records, "Doc"), blocker / "out.pdf")


def test_render_json_sorted(tmp_path, records):
    out = render_json(records, tmp_path / "pages" / "pages.json")
    data = json.loads(out.read_text(encoding="utf-8"))
    assert [item["url"] for item in data] == [
        "https://example.com/docs",
        "https://example.com/docs/a",
        "https://example.com/docs/b",
    ]
    assert data[2]["segments"][2] == {"index": 1, "kind": "code"}
    assert data[2]["code_blocks"] == ["fn main() {}"]
