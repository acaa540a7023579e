"""Tests for the DOCX and plain-text renderers."""

from __future__ import annotations

from io import BytesIO

import docx
import pytest
from docx.oxml.ns import qn

from document_engine.builders import NodeFactory
from document_engine.nodes import Heading, HeadingLevel, PageBreak
from document_engine.renderers import OutputFormat, get_renderer, render
from document_engine.renderers.docx_renderer import DocxRenderer
from document_engine.renderers.text_renderer import PAGE_SEPARATOR, render_text
from document_engine.styles import StyleConfig


@pytest.fixture
def factory() -> NodeFactory:
    return NodeFactory(StyleConfig())


@pytest.fixture
def nodes(factory: NodeFactory, png_bytes: bytes) -> list:
    return [
        factory.main_title("כתב תביעה"),
        factory.section_header("הצדדים"),
        factory.body("הצדדים נישאו ביום 01/06/2010."),
        factory.table([("שם מלא", "דנה כהן"), ("ילדים", "1. נועה\n2. איתי")]),
        factory.page_break(),
        factory.signature_image(png_bytes),
    ]


def reopen(content: bytes) -> docx.document.Document:
    return docx.Document(BytesIO(content))


class TestDocxRenderer:
    def test_produces_a_readable_document(self, nodes) -> None:
        document = reopen(DocxRenderer().render(nodes))
        texts = [paragraph.text for paragraph in document.paragraphs]

        assert "כתב תביעה" in texts
        assert "הצדדים נישאו ביום 01/06/2010." in texts

    def test_paragraphs_are_right_to_left(self, nodes) -> None:
        document = reopen(DocxRenderer().render(nodes))
        body = next(p for p in document.paragraphs if p.text.startswith("הצדדים נישאו"))

        assert body._p.pPr.find(qn("w:bidi")) is not None
        run_properties = body.runs[0]._r.rPr
        assert run_properties.find(qn("w:rtl")) is not None
        assert run_properties.find(qn("w:lang")).get(qn("w:bidi")) == "he-IL"

    def test_table_is_bidi_with_bold_questions(self, nodes) -> None:
        document = reopen(DocxRenderer().render(nodes))

        assert len(document.tables) == 1
        table = document.tables[0]
        assert table._tbl.tblPr.find(qn("w:bidiVisual")) is not None
        assert table.cell(0, 0).text == "שם מלא"
        assert table.cell(0, 0).paragraphs[0].runs[0].bold
        assert not table.cell(0, 1).paragraphs[0].runs[0].bold
        assert "2. איתי" in table.cell(1, 1).text

    def test_data_table_shades_header_and_totals(self, factory) -> None:
        rows = [
            ("קטגוריה", "נועה", "איתי", 'סה"כ'),
            ("מזון", "1,000", "1,000", "2,000"),
            ('סה"כ', "1,000", "1,000", "2,000"),
        ]
        document = reopen(DocxRenderer().render([factory.data_table(rows, (33, 26, 26, 15))]))
        table = document.tables[0]

        assert len(table.columns) == 4
        header_fill = table.cell(0, 0)._tc.tcPr.find(qn("w:shd")).get(qn("w:fill"))
        total_fill = table.cell(2, 3)._tc.tcPr.find(qn("w:shd")).get(qn("w:fill"))
        assert header_fill == StyleConfig().table_header_shading
        assert total_fill == StyleConfig().table_total_shading
        assert table.cell(1, 1)._tc.tcPr.find(qn("w:shd")) is None
        assert table.cell(0, 1).paragraphs[0].runs[0].bold
        assert not table.cell(1, 0).paragraphs[0].runs[0].bold

    def test_embeds_signature_image(self, nodes) -> None:
        document = reopen(DocxRenderer().render(nodes))
        assert len(document.inline_shapes) == 1

    def test_unreadable_image_is_skipped(self, factory) -> None:
        content = DocxRenderer().render([factory.signature_image(b"not an image")])
        assert len(reopen(content).inline_shapes) == 0

    def test_footer_has_page_number_field(self, nodes) -> None:
        document = reopen(DocxRenderer().render(nodes))
        footer = document.sections[0].footer.paragraphs[0]

        assert footer.text.startswith("עמוד")
        assert "PAGE" in footer._p.xml

    def test_is_a_zip_package(self, nodes) -> None:
        assert render(nodes, OutputFormat.DOCX).startswith(b"PK")


class TestTextRenderer:
    def test_renders_headings_tables_and_breaks(self, nodes) -> None:
        text = render_text(nodes)
        lines = text.split("\n")

        assert lines[0] == "כתב תביעה"
        assert lines[1] == "=" * len("כתב תביעה")
        assert "שם מלא: דנה כהן" in lines
        assert PAGE_SEPARATOR in lines
        assert "[תמונה 200x100]" in lines

    def test_render_encodes_utf8(self) -> None:
        content = render([Heading("סעיף", HeadingLevel.SECTION), PageBreak()], "text")
        assert content.decode("utf-8") == f"סעיף\n{PAGE_SEPARATOR}"


class TestGetRenderer:
    def test_unknown_format_raises(self) -> None:
        with pytest.raises(ValueError):
            get_renderer("pdf")

    def test_extensions(self) -> None:
        assert get_renderer(OutputFormat.DOCX).extension == "docx"
        assert get_renderer(OutputFormat.TEXT).extension == "txt"


class TestDataTableText:
    def test_wide_rows_are_joined_with_bars(self, factory) -> None:
        table = factory.data_table([("קטגוריה", "נועה", 'סה"כ'), ("מזון", "500", "500")], (40, 30, 30))
        assert render_text([table]).split("\n") == ['קטגוריה | נועה | סה"כ', "מזון | 500 | 500"]
