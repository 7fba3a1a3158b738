# site_binder/report/pdf_report.py

"""
Генерация PDF-документа для проекта SiteBinder.

Рендерит :class:`~site_binder.synthesizer.BoundDocument` через reportlab
platypus: оглавление на первой странице, затем по одной главе на страницу.
"""
from __future__ import annotations

from pathlib import Path
from typing import Dict, List
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer, XPreformatted
from reportlab.platypus.doctemplate import LayoutError
from reportlab.platypus.flowables import Flowable

from site_binder.exceptions import RenderError
from site_binder.logger import logger
from site_binder.synthesizer import BoundDocument, BulletBlock, CodeBlock, TextBlock

AUTHOR = "SiteBinder"
CODE_BACKGROUND = colors.Color(240 / 255, 240 / 255, 240 / 255)
BULLET = "•"


def build_styles() -> Dict[str, ParagraphStyle]:
    base = getSampleStyleSheet()["Normal"]
    return {
        "toc_title": ParagraphStyle("TocTitle", parent=base, fontName="Helvetica-Bold", fontSize=24, leading=28, spaceAfter=12 * mm),
        "toc_chapter": ParagraphStyle("TocChapter", parent=base, fontName="Helvetica-Bold", fontSize=12, leading=16, spaceBefore=3 * mm),
        "toc_sub": ParagraphStyle("TocSub", parent=base, fontName="Helvetica", fontSize=10, leading=13, leftIndent=10 * mm),
        "chapter": ParagraphStyle("Chapter", parent=base, fontName="Helvetica-Bold", fontSize=20, leading=24, spaceAfter=5 * mm),
        "source": ParagraphStyle("Source", parent=base, fontName="Helvetica-Oblique", fontSize=10, leading=12, spaceAfter=8 * mm),
        "body": ParagraphStyle("Body", parent=base, fontName="Helvetica", fontSize=12, leading=15, spaceAfter=3 * mm),
        "subheading": ParagraphStyle("SubHeading", parent=base, fontName="Helvetica-Bold", fontSize=14, leading=18, spaceBefore=4 * mm, spaceAfter=3 * mm),
        "bullet": ParagraphStyle("Bullet", parent=base, fontName="Helvetica", fontSize=12, leading=15, leftIndent=6 * mm, bulletIndent=1 * mm),
        "code": ParagraphStyle("Code", parent=base, fontName="Courier", fontSize=10, leading=12, backColor=CODE_BACKGROUND, borderPadding=2 * mm, spaceBefore=2 * mm, spaceAfter=5 * mm),
    }


def build_story(document: BoundDocument, styles: Dict[str, ParagraphStyle] | None = None) -> List[Flowable]:
    """Превращает документ в список flowables reportlab (без записи на диск)."""
    st = styles or build_styles()
    story: List[Flowable] = [Paragraph("Table of Contents", st["toc_title"])]
    for entry in document.toc:
        style = st["toc_chapter"] if entry.level == 0 else st["toc_sub"]
        story.append(Paragraph(escape(entry.label), style))

    for chapter in document.chapters:
        story.append(PageBreak())
        story.append(Paragraph(escape(chapter.heading), st["chapter"]))
        story.append(Paragraph(escape(chapter.source_line), st["source"]))
        for block in chapter.blocks:
            if isinstance(block, CodeBlock):
                # line breaks and spacing are kept; only markup characters are escaped
                story.append(XPreformatted(escape(block.text), st["code"]))
            elif isinstance(block, BulletBlock):
                for item in block.items:
                    story.append(Paragraph(escape(item), st["bullet"], bulletText=BULLET))
                story.append(Spacer(1, 3 * mm))
            elif isinstance(block, TextBlock):
                story.append(Paragraph(escape(block.text), st[block.style]))
    return story


def render_pdf(document: BoundDocument, output_path: Path | str) -> Path:
    """
    Сохраняет документ в PDF по указанному пути.

    :param document: собранный BoundDocument
    :param output_path: путь к PDF-файлу; родительские каталоги создаются
    :return: Path сохранённого файла
    :raises RenderError: если каталог не создать или файл не записать

    Пример:
    ```python
    from site_binder.report.pdf_report import render_pdf
    pdf_path = render_pdf(synthesize(pages, "Docs"), "out/docs.pdf")
    ```
    """
    output = Path(output_path)
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise RenderError(f"Failed to create output directory: {exc}", {"path": str(output.parent)}) from exc

    doc = SimpleDocTemplate(
        str(output),
        pagesize=A4,
        leftMargin=10 * mm,
        rightMargin=10 * mm,
        topMargin=10 * mm,
        bottomMargin=10 * mm,
        title=document.title,
        author=AUTHOR,
        creator=AUTHOR,
    )
    try:
        doc.build(build_story(document))
    except (OSError, LayoutError) as exc:
        raise RenderError(f"Failed to write PDF {output}: {exc}", {"path": str(output)}) from exc

    logger.debug("PDF written: %s (%d chapters)", output, len(document.chapters))
    return output
