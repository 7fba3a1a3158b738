# File: site_binder/synthesizer.py
"""site_binder.synthesizer: сборка упорядоченного документа из собранных страниц.

Everything here is a pure function of the page records: sort by URL, build
the table of contents, and turn each record into a chapter whose code block
references are expanded back into the verbatim code text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Union

from site_binder.crawler.models import CodeBlockRef, Heading, ListItems, PageRecord, Paragraph

__all__: Sequence[str] = (
    "TocEntry",
    "TextBlock",
    "CodeBlock",
    "BulletBlock",
    "Chapter",
    "BoundDocument",
    "order_pages",
    "build_toc",
    "build_chapter",
    "synthesize",
)


@dataclass(frozen=True, slots=True)
class TocEntry:
    """Строка оглавления: level 0 глава, level 1 подраздел."""

    label: str
    level: int = 0


@dataclass(frozen=True, slots=True)
class TextBlock:
    text: str
    style: str = "body"


@dataclass(frozen=True, slots=True)
class CodeBlock:
    text: str


@dataclass(frozen=True, slots=True)
class BulletBlock:
    items: tuple[str, ...]


Block = Union[TextBlock, CodeBlock, BulletBlock]


@dataclass(frozen=True, slots=True)
class Chapter:
    number: int
    title: str
    url: str
    blocks: tuple[Block, ...] = ()

    @property
    def heading(self) -> str:
        return f"{self.number}. {self.title}"

    @property
    def source_line(self) -> str:
        return f"Source: {self.url}"


@dataclass(slots=True)
class BoundDocument:
    """Готовая к рендерингу структура: заголовок, оглавление, главы."""

    title: str
    toc: List[TocEntry] = field(default_factory=list)
    chapters: List[Chapter] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.chapters)


def order_pages(records: Iterable[PageRecord]) -> List[PageRecord]:
    """Сортирует страницы по URL (по возрастанию), независимо от порядка прихода."""
    return sorted(records, key=lambda r: r.url)


def build_toc(records: Sequence[PageRecord]) -> List[TocEntry]:
    """Builds TOC entries for already ordered *records*."""
    toc: List[TocEntry] = []
    for number, record in enumerate(records, start=1):
        toc.append(TocEntry(f"{number}. {record.title}", 0))
        for sub, heading in enumerate(record.headings, start=1):
            toc.append(TocEntry(f"{number}.{sub}. {heading}", 1))
    return toc


def build_chapter(number: int, record: PageRecord) -> Chapter:
    blocks: List[Block] = []
    for seg in record.segments:
        if isinstance(seg, Paragraph):
            blocks.append(TextBlock(seg.text, "body"))
        elif isinstance(seg, Heading):
            blocks.append(TextBlock(seg.text, "subheading"))
        elif isinstance(seg, CodeBlockRef):
            if 1 <= seg.index <= len(record.code_blocks):
                blocks.append(CodeBlock(record.code_for(seg)))
        elif isinstance(seg, ListItems):
            blocks.append(BulletBlock(tuple(seg.items)))
    return Chapter(number=number, title=record.title, url=record.url, blocks=tuple(blocks))


def synthesize(records: Iterable[PageRecord], title: str) -> BoundDocument:
    """Сортирует записи и собирает оглавление и главы документа."""
    ordered = order_pages(records)
    return BoundDocument(
        title=title,
        toc=build_toc(ordered),
        chapters=[build_chapter(n, rec) for n, rec in enumerate(ordered, start=1)],
    )
