"""Serialize document nodes to a right-to-left DOCX with python-docx.

Every Hebrew paragraph carries ``w:bidi`` and every run carries the
complex-script font, size and ``he-IL`` bidi language, otherwise Word falls
back to a Latin font and left-to-right punctuation.
"""

from __future__ import annotations

import logging
from io import BytesIO

from docx import Document
from docx.document import Document as DocxDocument
from docx.enum.table import WD_TABLE_ALIGNMENT
from docx.enum.text import WD_ALIGN_PARAGRAPH, WD_BREAK
from docx.image.exceptions import UnrecognizedImageError
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Emu, Inches, Pt, Twips

from document_engine.nodes import (
    Alignment,
    DocumentNode,
    Heading,
    HeadingLevel,
    Image,
    PageBreak,
    Paragraph,
    Run,
    Table,
)
from document_engine.styles import StyleConfig

logger = logging.getLogger("claims.renderers.docx")

EMU_PER_PIXEL = 9525
TABLE_WIDTH_TWIPS = 9026

_ALIGNMENTS = {
    Alignment.START: WD_ALIGN_PARAGRAPH.JUSTIFY,
    Alignment.CENTER: WD_ALIGN_PARAGRAPH.CENTER,
    Alignment.LEFT: WD_ALIGN_PARAGRAPH.LEFT,
    Alignment.RIGHT: WD_ALIGN_PARAGRAPH.RIGHT,
}


# Schema successors, so inserted elements keep the order Word validates.
_BIDI_SUCCESSORS = (
    "w:adjustRightInd", "w:snapToGrid", "w:spacing", "w:ind", "w:contextualSpacing",
    "w:mirrorIndents", "w:suppressOverlap", "w:jc", "w:textDirection", "w:textAlignment",
    "w:textboxTightWrap", "w:outlineLvl", "w:divId", "w:cnfStyle", "w:rPr", "w:sectPr",
    "w:pPrChange",
)
_BIDI_VISUAL_SUCCESSORS = (
    "w:tblStyleRowBandSize", "w:tblStyleColBandSize", "w:tblW", "w:jc", "w:tblCellSpacing",
    "w:tblInd", "w:tblBorders", "w:shd", "w:tblLayout", "w:tblCellMar", "w:tblLook",
    "w:tblCaption", "w:tblDescription", "w:tblPrChange",
)


def _child(parent, tag: str, successors: tuple[str, ...] = ()):
    element = parent.find(qn(tag))
    if element is None:
        element = OxmlElement(tag)
        parent.insert_element_before(element, *successors)
    return element


def _set_bidi(paragraph) -> None:
    _child(paragraph._p.get_or_add_pPr(), "w:bidi", _BIDI_SUCCESSORS)


def _shade(cell, fill: str) -> None:
    shading = OxmlElement("w:shd")
    shading.set(qn("w:val"), "clear")
    shading.set(qn("w:color"), "auto")
    shading.set(qn("w:fill"), fill)
    cell._tc.get_or_add_tcPr().append(shading)


def _set_complex_size(r_pr, size: float) -> None:
    sz_cs = r_pr.find(qn("w:szCs"))
    if sz_cs is None:
        sz_cs = OxmlElement("w:szCs")
        r_pr.get_or_add_sz().addnext(sz_cs)
    sz_cs.set(qn("w:val"), str(int(size * 2)))


class DocxRenderer:
    """Render a node sequence into DOCX bytes using one :class:`StyleConfig`."""

    media_type = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    extension = "docx"

    def __init__(self, style: StyleConfig | None = None) -> None:
        self.style = style or StyleConfig()

    def render(self, nodes: list[DocumentNode]) -> bytes:
        document = Document()
        self._setup_document(document)

        for node in nodes:
            if isinstance(node, Heading):
                self._heading(document, node)
            elif isinstance(node, Paragraph):
                self._paragraph(document, node)
            elif isinstance(node, Table):
                self._table(document, node)
            elif isinstance(node, Image):
                self._image(document, node)
            elif isinstance(node, PageBreak):
                document.add_paragraph().add_run().add_break(WD_BREAK.PAGE)

        buffer = BytesIO()
        document.save(buffer)
        logger.debug(f"Rendered {len(nodes)} nodes to {buffer.tell()} bytes of DOCX")
        return buffer.getvalue()

    # Document setup -----------------------------------------------------

    def _setup_document(self, document: DocxDocument) -> None:
        style = self.style
        normal = document.styles["Normal"]
        normal.font.name = style.font
        normal.font.size = Pt(style.sizes.body)
        r_pr = normal.element.get_or_add_rPr()
        fonts = r_pr.get_or_add_rFonts()
        fonts.set(qn("w:cs"), style.font)
        fonts.set(qn("w:eastAsia"), style.font)
        _child(r_pr, "w:lang").set(qn("w:bidi"), style.language)

        for section in document.sections:
            margin = Inches(style.margin_inches)
            section.top_margin = margin
            section.bottom_margin = margin
            section.left_margin = margin
            section.right_margin = margin
            self._page_number_footer(section.footer.paragraphs[0])

    def _page_number_footer(self, paragraph) -> None:
        paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
        _set_bidi(paragraph)
        self._format_run(paragraph.add_run("עמוד "), Run("עמוד ", size=self.style.sizes.small))

        field_run = paragraph.add_run()
        self._format_run(field_run, Run("", size=self.style.sizes.small))
        begin = OxmlElement("w:fldChar")
        begin.set(qn("w:fldCharType"), "begin")
        instruction = OxmlElement("w:instrText")
        instruction.set(qn("xml:space"), "preserve")
        instruction.text = "PAGE"
        end = OxmlElement("w:fldChar")
        end.set(qn("w:fldCharType"), "end")
        field_run._r.append(begin)
        field_run._r.append(instruction)
        field_run._r.append(end)

    # Nodes --------------------------------------------------------------

    def _heading(self, document: DocxDocument, heading: Heading) -> None:
        sizes = self.style.sizes
        spacing = self.style.spacing
        layout = {
            HeadingLevel.MAIN_TITLE: (sizes.main_title, Alignment.CENTER, True, spacing.paragraph, spacing.section),
            HeadingLevel.SECTION: (sizes.section, Alignment.START, True, spacing.section, spacing.paragraph),
            HeadingLevel.SUBSECTION: (sizes.subsection, Alignment.START, False, spacing.paragraph, spacing.line),
            HeadingLevel.NUMBERED: (sizes.heading_2, Alignment.START, False, spacing.line, spacing.minimal),
        }
        size, alignment, underline, before, after = layout[heading.level]
        self._paragraph(
            document,
            Paragraph(
                runs=(Run(heading.text, bold=True, underline=underline, size=size),),
                alignment=alignment,
                space_before=before,
                space_after=after,
            ),
        )

    def _paragraph(self, document: DocxDocument, node: Paragraph) -> None:
        paragraph = document.add_paragraph()
        self._paragraph_format(paragraph, node.alignment, node.bidi, node.space_before, node.space_after)
        if node.line_spacing:
            # A float is a multiple of single spacing (240 twips).
            paragraph.paragraph_format.line_spacing = node.line_spacing / 240
        if node.indent_inches:
            # Hebrew text starts on the right, so the leading indent is the right one.
            paragraph.paragraph_format.right_indent = Inches(node.indent_inches)
        for run in node.runs:
            if not run.text:
                continue
            self._format_run(paragraph.add_run(run.text), run)

    def _paragraph_format(self, paragraph, alignment: Alignment, bidi: bool, before: int, after: int) -> None:
        paragraph.alignment = _ALIGNMENTS[alignment]
        paragraph_format = paragraph.paragraph_format
        paragraph_format.space_before = Twips(before)
        paragraph_format.space_after = Twips(after)
        if bidi:
            _set_bidi(paragraph)

    def _format_run(self, docx_run, run: Run) -> None:
        size = run.size or self.style.sizes.body
        font = docx_run.font
        font.name = self.style.font
        font.size = Pt(size)
        font.bold = run.bold
        font.underline = run.underline

        r_pr = docx_run._r.get_or_add_rPr()
        fonts = r_pr.get_or_add_rFonts()
        for attribute in ("w:ascii", "w:hAnsi", "w:cs", "w:eastAsia"):
            fonts.set(qn(attribute), self.style.font)
        if run.bold:
            r_pr.get_or_add_bCs()
        _set_complex_size(r_pr, size)
        if run.rtl:
            r_pr.get_or_add_rtl()
        _child(r_pr, "w:lang").set(qn("w:bidi"), self.style.language)

    def _table(self, document: DocxDocument, node: Table) -> None:
        table = document.add_table(rows=0, cols=len(node.column_widths))
        table.style = "Table Grid"
        table.alignment = WD_TABLE_ALIGNMENT.CENTER
        # Logical column order; Word mirrors it so the first column sits on the right.
        _child(table._tbl.tblPr, "w:bidiVisual", _BIDI_VISUAL_SUCCESSORS)

        total = sum(node.column_widths)
        widths = [Twips(TABLE_WIDTH_TWIPS * share // total) for share in node.column_widths]
        cell_spacing = self.style.table_cell_spacing
        last_row = len(node.rows) - 1
        for row_index, row in enumerate(node.rows):
            shading = None
            if node.header and row_index == 0:
                shading = self.style.table_header_shading
            elif node.totals and row_index == last_row:
                shading = self.style.table_total_shading

            cells = table.add_row().cells
            for column, (cell, width, text) in enumerate(zip(cells, widths, row)):
                cell.width = width
                if shading:
                    _shade(cell, shading)
                if node.is_data_table:
                    bold = shading is not None
                    centered = column > 0 or (node.header and row_index == 0)
                else:
                    bold = column == 0
                    centered = False
                paragraph = cell.paragraphs[0]
                alignment = Alignment.CENTER if centered else Alignment.START
                self._paragraph_format(paragraph, alignment, True, cell_spacing, cell_spacing)
                for index, line in enumerate(text.split("\n")):
                    if index:
                        paragraph.add_run().add_break()
                    self._format_run(paragraph.add_run(line), Run(line, bold=bold))

    def _image(self, document: DocxDocument, node: Image) -> None:
        paragraph = document.add_paragraph()
        self._paragraph_format(
            paragraph,
            node.alignment,
            node.alignment in (Alignment.START, Alignment.CENTER),
            node.space_before,
            node.space_after,
        )
        try:
            paragraph.add_run().add_picture(
                BytesIO(node.data),
                width=Emu(node.width * EMU_PER_PIXEL),
                height=Emu(node.height * EMU_PER_PIXEL),
            )
        except UnrecognizedImageError:
            logger.warning(f"Skipping unreadable image ({len(node.data)} bytes)")


def render_docx(nodes: list[DocumentNode], style: StyleConfig | None = None) -> bytes:
    return DocxRenderer(style).render(nodes)
