"""Plain-text rendering of a node sequence, for previews and the CLI."""

from __future__ import annotations

from document_engine.nodes import DocumentNode, Heading, HeadingLevel, Image, PageBreak, Paragraph, Table, row_text

PAGE_SEPARATOR = "\f"


class TextRenderer:
    media_type = "text/plain; charset=utf-8"
    extension = "txt"

    def render(self, nodes: list[DocumentNode]) -> bytes:
        return self.render_text(nodes).encode("utf-8")

    def render_text(self, nodes: list[DocumentNode]) -> str:
        lines: list[str] = []
        for node in nodes:
            if isinstance(node, Heading):
                lines.append(node.text)
                if node.level is HeadingLevel.MAIN_TITLE:
                    lines.append("=" * len(node.text))
            elif isinstance(node, Paragraph):
                indent = "    " if node.indent_inches else ""
                lines.append(f"{indent}{node.text}")
            elif isinstance(node, Table):
                lines.extend(row_text(row) for row in node.rows)
            elif isinstance(node, Image):
                lines.append(f"[תמונה {node.width}x{node.height}]")
            elif isinstance(node, PageBreak):
                lines.append(PAGE_SEPARATOR)
        return "\n".join(lines)


def render_text(nodes: list[DocumentNode]) -> str:
    return TextRenderer().render_text(nodes)
