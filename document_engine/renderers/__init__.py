"""Serializers from document nodes to bytes."""

from __future__ import annotations

from enum import Enum

from document_engine.nodes import DocumentNode
from document_engine.renderers.docx_renderer import DocxRenderer, render_docx
from document_engine.renderers.text_renderer import TextRenderer, render_text
from document_engine.styles import StyleConfig


class OutputFormat(str, Enum):
    DOCX = "docx"
    TEXT = "text"


def get_renderer(output_format: OutputFormat | str = OutputFormat.DOCX, style: StyleConfig | None = None):
    """Return the renderer for a format.

    Raises:
        ValueError: If the format is unknown.
    """
    fmt = OutputFormat(output_format)
    if fmt is OutputFormat.TEXT:
        return TextRenderer()
    return DocxRenderer(style)


def render(
    nodes: list[DocumentNode],
    output_format: OutputFormat | str = OutputFormat.DOCX,
    style: StyleConfig | None = None,
) -> bytes:
    return get_renderer(output_format, style).render(nodes)


__all__ = [
    "DocxRenderer",
    "OutputFormat",
    "TextRenderer",
    "get_renderer",
    "render",
    "render_docx",
    "render_text",
]
