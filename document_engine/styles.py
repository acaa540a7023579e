"""Typography and spacing configuration shared by node builders and renderers.

A single :class:`StyleConfig` value is created per composition and passed to
every builder and to the renderer, so two requests can use different styles
without touching shared state.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class FontSizes:
    """Font sizes in points."""

    main_title: float = 20
    section: float = 16
    title: float = 16
    subsection: float = 14
    heading_2: float = 13
    body: float = 12
    small: float = 11


@dataclass(frozen=True, slots=True)
class Spacing:
    """Paragraph spacing in twips (1/20 of a point)."""

    section: int = 600
    subsection: int = 400
    paragraph: int = 240
    line: int = 120
    minimal: int = 60


@dataclass(frozen=True, slots=True)
class StyleConfig:
    """Complete visual configuration for one document."""

    font: str = "David"
    language: str = "he-IL"
    sizes: FontSizes = field(default_factory=FontSizes)
    spacing: Spacing = field(default_factory=Spacing)
    line_spacing: int = 360  # 1.5 lines
    margin_inches: float = 1.0
    list_indent_inches: float = 0.25
    block_indent_inches: float = 0.5
    table_cell_spacing: int = 100
    table_header_shading: str = "E3E6E8"
    table_total_shading: str = "F9FAFB"
