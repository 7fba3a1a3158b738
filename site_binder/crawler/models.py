"""
Data models for the SiteBinder crawler: fetched pages and extracted records.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Tuple, Union


@dataclass(slots=True)
class FetchedPage:
    """Holds the URL and raw HTML of one successful fetch."""

    url: str
    content: str


@dataclass(frozen=True, slots=True)
class Paragraph:
    text: str
    kind: str = field(default="paragraph", init=False)


@dataclass(frozen=True, slots=True)
class Heading:
    text: str
    kind: str = field(default="heading", init=False)


@dataclass(frozen=True, slots=True)
class CodeBlockRef:
    """Points at ``PageRecord.code_blocks[index - 1]``."""

    index: int
    kind: str = field(default="code", init=False)

    @property
    def placeholder(self) -> str:
        return f"[Code Block {self.index}]"


@dataclass(frozen=True, slots=True)
class ListItems:
    items: Tuple[str, ...]
    kind: str = field(default="list", init=False)


Segment = Union[Paragraph, Heading, CodeBlockRef, ListItems]


@dataclass(frozen=True, slots=True)
class PageRecord:
    """One extracted article. Built completely before it is shared."""

    title: str
    url: str
    headings: Tuple[str, ...] = ()
    segments: Tuple[Segment, ...] = ()
    code_blocks: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.title:
            raise ValueError("PageRecord.title must not be empty")
        for seg in self.segments:
            if isinstance(seg, CodeBlockRef) and not 1 <= seg.index <= len(self.code_blocks):
                raise ValueError(f"dangling code block reference {seg.index} in {self.url}")

    def code_for(self, ref: CodeBlockRef) -> str:
        return self.code_blocks[ref.index - 1]

    def content_text(self) -> str:
        """Flattened text form with ``[Code Block N]`` markers in place of code."""
        parts = []
        for seg in self.segments:
            if isinstance(seg, CodeBlockRef):
                parts.append(seg.placeholder)
            elif isinstance(seg, ListItems):
                parts.append("\n".join(f"• {item}" for item in seg.items))
            else:
                parts.append(seg.text)
        return "\n\n".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
