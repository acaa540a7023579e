"""Document node algebra produced by composers and consumed by renderers.

Composers never talk to a concrete file format. They emit a flat, ordered
sequence of the nodes below; a renderer (see :mod:`document_engine.renderers`)
turns that sequence into bytes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Alignment(str, Enum):
    """Paragraph alignment.

    ``START`` follows the writing direction (right for Hebrew). ``LEFT`` and
    ``RIGHT`` are physical and are used for signature blocks.
    """

    START = "start"
    CENTER = "center"
    LEFT = "left"
    RIGHT = "right"


class HeadingLevel(str, Enum):
    MAIN_TITLE = "main_title"
    SECTION = "section"
    SUBSECTION = "subsection"
    NUMBERED = "numbered"


@dataclass(frozen=True, slots=True)
class Run:
    """A span of text sharing one character format."""

    text: str
    bold: bool = False
    underline: bool = False
    size: float | None = None
    rtl: bool = True


@dataclass(frozen=True, slots=True)
class Heading:
    text: str
    level: HeadingLevel = HeadingLevel.SECTION


@dataclass(frozen=True, slots=True)
class Paragraph:
    """A block of runs with paragraph-level layout."""

    runs: tuple[Run, ...] = ()
    alignment: Alignment = Alignment.START
    space_before: int = 0
    space_after: int = 0
    line_spacing: int | None = None
    indent_inches: float = 0.0
    bidi: bool = True

    @property
    def text(self) -> str:
        return "".join(run.text for run in self.runs)


@dataclass(frozen=True, slots=True)
class Table:
    """Grid of text cells; ``column_widths`` are relative shares.

    Question/answer tables have two columns with the questions in bold. Data
    tables set ``header``/``totals`` so that the first and last rows are
    bolded and shaded instead.
    """

    rows: tuple[tuple[str, ...], ...]
    column_widths: tuple[int, ...] = (40, 60)
    header: bool = False
    totals: bool = False

    @property
    def is_data_table(self) -> bool:
        return self.header or self.totals


def row_text(row: tuple[str, ...]) -> str:
    if len(row) == 2:
        return f"{row[0]}: {row[1]}"
    return " | ".join(row)


@dataclass(frozen=True, slots=True)
class Image:
    """Embedded raster image; width and height are in pixels."""

    data: bytes = field(repr=False)
    width: int
    height: int
    alignment: Alignment = Alignment.LEFT
    space_before: int = 0
    space_after: int = 0


@dataclass(frozen=True, slots=True)
class PageBreak:
    pass


DocumentNode = Heading | Paragraph | Table | Image | PageBreak


def node_text(node: DocumentNode) -> str:
    """Return the visible text of a node (empty for images and breaks)."""
    if isinstance(node, Heading):
        return node.text
    if isinstance(node, Paragraph):
        return node.text
    if isinstance(node, Table):
        return "\n".join(row_text(row) for row in node.rows)
    return ""


def document_text(nodes: list[DocumentNode]) -> str:
    """Concatenate the visible text of a node sequence, one node per line."""
    return "\n".join(node_text(node) for node in nodes)
