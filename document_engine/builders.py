"""Node builders shared by every composer.

:class:`NodeFactory` wraps a :class:`~document_engine.styles.StyleConfig` and
turns plain strings into styled :mod:`document_engine.nodes` values, so
composers only decide *what* goes into a document.
"""

from __future__ import annotations

from document_engine.formatting import RLM, SIGNATURE_PLACEHOLDER
from document_engine.nodes import (
    Alignment,
    Heading,
    HeadingLevel,
    Image,
    PageBreak,
    Paragraph,
    Run,
    Table,
)
from document_engine.styles import StyleConfig


class NodeFactory:
    """Build document nodes using one style configuration."""

    def __init__(self, style: StyleConfig) -> None:
        self.style = style

    # Headings -----------------------------------------------------------

    def main_title(self, text: str) -> Heading:
        return Heading(text, HeadingLevel.MAIN_TITLE)

    def section_header(self, text: str) -> Heading:
        return Heading(text, HeadingLevel.SECTION)

    def subsection_header(self, text: str) -> Heading:
        return Heading(text, HeadingLevel.SUBSECTION)

    def numbered_header(self, text: str) -> Heading:
        return Heading(text, HeadingLevel.NUMBERED)

    # Paragraphs ---------------------------------------------------------

    def body(self, text: str, *, before: int = 0, after: int | None = None) -> Paragraph:
        """Regular 1.5-spaced body paragraph."""
        return Paragraph(
            runs=(Run(text, size=self.style.sizes.body),),
            space_before=before,
            space_after=self.style.spacing.line if after is None else after,
            line_spacing=self.style.line_spacing,
        )

    def spacer(self, after: int | None = None) -> Paragraph:
        return self.body("", after=self.style.spacing.section if after is None else after)

    def bold_line(self, text: str, *, after: int | None = None) -> Paragraph:
        return Paragraph(
            runs=(Run(text, bold=True, size=self.style.sizes.body),),
            space_after=self.style.spacing.minimal if after is None else after,
            line_spacing=self.style.line_spacing,
        )

    def bullet(self, text: str) -> Paragraph:
        return self._list_item(f"• {text}")

    def numbered_item(self, number: int, text: str) -> Paragraph:
        return self._list_item(f"{number}. {text}")

    def _list_item(self, text: str) -> Paragraph:
        return Paragraph(
            runs=(Run(text, size=self.style.sizes.body),),
            space_after=self.style.spacing.minimal,
            indent_inches=self.style.list_indent_inches,
        )

    def indented(self, text: str) -> Paragraph:
        """Body line indented as a block, used for addresses under a party name."""
        return Paragraph(
            runs=(Run(text, size=self.style.sizes.body),),
            space_after=self.style.spacing.line,
            indent_inches=self.style.block_indent_inches,
        )

    def centered_title(self, text: str, size: float | None = None) -> Paragraph:
        return Paragraph(
            runs=(Run(text, bold=True, size=size or self.style.sizes.body),),
            alignment=Alignment.CENTER,
            space_after=self.style.spacing.line,
        )

    def info_line(self, label: str, value: str, *, after: int | None = None) -> Paragraph:
        """Bold ``label:`` followed by a plain value.

        An RLM after the colon keeps the punctuation attached to the Hebrew
        label when the value starts with digits or Latin text.
        """
        runs: list[Run] = []
        if label:
            runs.append(Run(f"{label}:{RLM} ", bold=True, size=self.style.sizes.body))
        runs.append(Run(value, size=self.style.sizes.body))
        return Paragraph(
            runs=tuple(runs),
            space_after=self.style.spacing.minimal if after is None else after,
        )

    def labeled_line(self, label: str, value: str, *, after: int | None = None) -> Paragraph:
        """Bold underlined ``label:`` followed by a plain value (claim preamble lines)."""
        return Paragraph(
            runs=(
                Run(f"{label}:{RLM}", bold=True, underline=True, size=self.style.sizes.body),
                Run(f" {value}", size=self.style.sizes.body),
            ),
            space_after=self.style.spacing.line if after is None else after,
            line_spacing=self.style.line_spacing,
        )

    def left_line(self, text: str, *, before: int = 0, after: int | None = None) -> Paragraph:
        """Physically left-aligned line, outside the RTL flow."""
        return Paragraph(
            runs=(Run(text, size=self.style.sizes.body, rtl=False),),
            alignment=Alignment.LEFT,
            space_before=before,
            space_after=self.style.spacing.minimal if after is None else after,
            bidi=False,
        )

    def toc_entry(self, label: str, pages: str) -> Paragraph:
        return Paragraph(
            runs=(
                Run(label, size=self.style.sizes.body),
                Run(" " * 5 + "....... ", size=self.style.sizes.body, rtl=False),
                Run(pages, bold=True, size=self.style.sizes.body),
            ),
            space_after=self.style.spacing.line,
        )

    # Other nodes --------------------------------------------------------

    def page_break(self) -> PageBreak:
        return PageBreak()

    def table(self, rows: list[tuple[str, str]]) -> Table:
        return Table(rows=tuple(rows))

    def data_table(self, rows: list[tuple[str, ...]], column_widths: tuple[int, ...]) -> Table:
        """Table whose first row is a header and last row holds the totals."""
        return Table(rows=tuple(rows), column_widths=column_widths, header=True, totals=True)

    def image(
        self,
        data: bytes,
        width: int,
        height: int,
        alignment: Alignment = Alignment.CENTER,
    ) -> Image:
        return Image(
            data=data,
            width=width,
            height=height,
            alignment=alignment,
            space_before=self.style.spacing.paragraph,
            space_after=self.style.spacing.paragraph,
        )

    def signature_image(
        self,
        data: bytes,
        width: int = 200,
        height: int = 100,
        alignment: Alignment = Alignment.LEFT,
    ) -> Image:
        return Image(
            data=data,
            width=width,
            height=height,
            alignment=alignment,
            space_before=self.style.spacing.paragraph,
            space_after=self.style.spacing.minimal,
        )

    def signature_or_placeholder(
        self,
        data: bytes | None,
        width: int = 250,
        height: int = 125,
        alignment: Alignment = Alignment.LEFT,
    ) -> Image | Paragraph:
        """Embed a signature when present, otherwise an underscore line."""
        if data:
            return self.signature_image(data, width, height, alignment)
        if alignment is Alignment.LEFT:
            return self.left_line(SIGNATURE_PLACEHOLDER, before=self.style.spacing.section)
        return Paragraph(
            runs=(Run(SIGNATURE_PLACEHOLDER, size=self.style.sizes.body),),
            alignment=alignment,
            space_before=self.style.spacing.section,
            space_after=self.style.spacing.minimal,
        )
