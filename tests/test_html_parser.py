# File: tests/test_html_parser.py
import pytest
from site_binder.crawler.models import CodeBlockRef, FetchedPage, Heading, ListItems, Paragraph
from site_binder.parser.html_parser import UNTITLED, extract_page, parse_document


def extract(html: str, url: str = "http://example.com/a"):
    return extract_page(parse_document(FetchedPage(url, html)), url)


def test_extract_full_article(mock_page):
    record = extract_page(parse_document(mock_page), mock_page.url)
    assert record is not None
    assert record.title == "Hello"
    assert record.url == "http://example.com/docs"
    assert record.headings == ("Setup",)
    assert record.segments == (
        Paragraph("Intro text."),
        Heading("Setup"),
        CodeBlockRef(1),
        ListItems(("one", "two")),
    )
    assert record.code_blocks == ("fn main() {}",)


def test_single_pre_becomes_placeholder():
    record = extract("<article><h1>T</h1><pre>fn main() {}</pre></article>")
    refs = [s for s in record.segments if isinstance(s, CodeBlockRef)]
    assert refs == [CodeBlockRef(1)]
    assert refs[0].placeholder == "[Code Block 1]"
    assert record.code_for(refs[0]) == "fn main() {}"
    assert "[Code Block 1]" in record.content_text()


def test_code_is_kept_verbatim_and_numbered_per_record():
    html = (
        "<article><h1>T</h1>"
        "<pre>  indented\n\tline &lt;tag&gt;\n</pre>"
        "<p>between</p>"
        "<pre><code>second()</code></pre>"
        "<pre>   \n </pre>"
        "</article>"
    )
    record = extract(html)
    assert record.code_blocks == ("  indented\n\tline <tag>\n", "second()")
    assert [s.index for s in record.segments if isinstance(s, CodeBlockRef)] == [1, 2]

    other = extract("<article><pre>x = 1</pre></article>", "http://example.com/b")
    assert [s.index for s in other.segments if isinstance(s, CodeBlockRef)] == [1]


@pytest.mark.parametrize(
    "html,expected",
    [
        ("<article><div class='Header'><h1>Primary</h1></div><h1>Other</h1></article>", "Primary"),
        ("<article><div class='Header'><h2>Secondary</h2></div><h1>Loose</h1></article>", "Secondary"),
        ("<article><h2>Sub</h2><h1>Loose H1</h1></article>", "Loose H1"),
        ("<article><h2>Only   h2\n</h2></article>", "Only h2"),
        ("<article><p>no headings</p></article>", UNTITLED),
        ("<div class='Article'><h1>Div article</h1></div>", "Div article"),
    ],
)
def test_title_fallbacks(html, expected):
    assert extract(html).title == expected


def test_not_an_article():
    assert extract("<html><body><h1>Landing</h1><p>x</p></body></html>") is None


def test_headings_follow_heading_segments():
    html = "<article><h2>A</h2><p>x</p><h3>B</h3><h2></h2><h4>ignored</h4><ol><li>1</li><li> </li></ol></article>"
    record = extract(html)
    assert record.headings == ("A", "B")
    assert [s.text for s in record.segments if isinstance(s, Heading)] == ["A", "B"]
    assert ListItems(("1",)) in record.segments


def test_empty_article_still_recorded():
    record = extract("<article></article>")
    assert record is not None
    assert record.title == UNTITLED
    assert record.segments == ()
    assert record.content_text() == ""
