"""SVG and PNG rendering for starglyph.

The static scene holds everything that only changes with the layout: the
canvas background, one translucent cell per glyph and each glyph's
outline.  It is serialized once per layout and reused for every frame;
animated stars are appended on top when a frame is composed.

Styling:
- Canvas: solid background color
- Cells: white fill at ~3% alpha, white stroke at ~50% alpha, width 0.2
- Outlines: closed polygon, amber stroke, width 0.75, no fill
- Stars: filled circles, diameter = star size, opacity = pulse alpha
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

import structlog

from .animation import StarPoint
from .colors import hex_to_rgba
from .geometry import Glyph
from .layout import Layout

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class SceneStyle:
    """Stroke and fill styling of the static layer."""

    cell_fill: str = "#ffffff08"
    cell_stroke: str = "#ffffff80"
    cell_stroke_width: float = 0.2
    outline_stroke: str = "#fdc700"
    outline_stroke_width: float = 0.75


DEFAULT_STYLE = SceneStyle()


@dataclass(frozen=True)
class StaticScene:
    """Cached background layer for one layout generation.

    Attributes:
        width: Canvas width in pixels.
        height: Canvas height in pixels.
        body: Serialized SVG elements (without the enclosing <svg> tag).
        cell_count: Number of cells drawn.
    """

    width: float
    height: float
    body: str
    cell_count: int = 0

    def to_svg(self) -> str:
        """Complete SVG document containing only the static layer."""
        return compose_frame_svg(self, [])


def _paint(attr: str, hex_color: str) -> str:
    """SVG paint attributes for a color that may carry an alpha channel."""
    color = hex_to_rgba(hex_color)
    return f'{attr}="{color.hex}" {attr}-opacity="{color.opacity:.3f}"'


def _svg_open(width: float, height: float) -> str:
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'viewBox="0 0 {width:g} {height:g}" '
        f'width="{width:g}" height="{height:g}">'
    )


def build_static_scene(
    layout: Layout,
    glyphs: Sequence[Glyph],
    style: SceneStyle = DEFAULT_STYLE,
) -> StaticScene:
    """Build the static layer for a layout.

    Args:
        layout: Computed grid layout.
        glyphs: One glyph per data row, in layout order.
        style: Cell and outline styling.

    Returns:
        StaticScene ready to be drawn under every frame.
    """
    size = layout.diameter
    parts: list[str] = [
        f'  <rect width="{layout.canvas_width:g}" height="{layout.canvas_height:g}" '
        f'fill="{layout.config.background}"/>'
    ]

    cell_fill = _paint("fill", style.cell_fill)
    cell_stroke = _paint("stroke", style.cell_stroke)
    for i in range(len(glyphs)):
        cell_x, cell_y = layout.cell_origin(i)
        parts.append(
            f'  <rect x="{cell_x:.2f}" y="{cell_y:.2f}" width="{size:g}" height="{size:g}" '
            f'{cell_fill} {cell_stroke} stroke-width="{style.cell_stroke_width:g}" '
            f'class="cell"/>'
        )

    for glyph in glyphs:
        # outline() repeats the first point; <polygon> closes itself
        points = glyph.outline()[:-1]
        points_str = " ".join(f"{x:.2f},{y:.2f}" for x, y in points)
        parts.append(
            f'  <polygon points="{points_str}" fill="none" '
            f'stroke="{style.outline_stroke}" '
            f'stroke-width="{style.outline_stroke_width:g}" '
            f'class="glyph"/>'
        )

    logger.debug("static_scene_built", cells=len(glyphs), elements=len(parts))

    return StaticScene(
        width=layout.canvas_width,
        height=layout.canvas_height,
        body="\n".join(parts),
        cell_count=len(glyphs),
    )


def render_star(point: StarPoint) -> str:
    """SVG element for one animated star."""
    return (
        f'  <circle cx="{point.x:.2f}" cy="{point.y:.2f}" r="{point.size / 2:.2f}" '
        f'fill="{point.color.hex}" fill-opacity="{point.color.opacity:.3f}" '
        f'class="star"/>'
    )


def compose_frame_svg(scene: StaticScene, points: Iterable[StarPoint]) -> str:
    """Draw the static layer, then every animated star on top of it.

    Args:
        scene: Cached static layer (not modified).
        points: Animated stars for this frame.

    Returns:
        Complete SVG document.
    """
    svg_parts = [_svg_open(scene.width, scene.height), scene.body]
    svg_parts.extend(render_star(p) for p in points)
    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


def render_png(svg: str, width: float, height: float) -> bytes:
    """Rasterize an SVG document to PNG bytes via CairoSVG.

    Args:
        svg: SVG document, usually from StaticScene.to_svg() or
            compose_frame_svg().
        width: Output width in pixels.
        height: Output height in pixels.

    Returns:
        PNG image bytes.
    """
    import cairosvg

    png_bytes = cairosvg.svg2png(
        bytestring=svg.encode("utf-8"),
        output_width=int(round(width)),
        output_height=int(round(height)),
    )

    logger.debug("png_rendered", width=width, height=height, bytes=len(png_bytes))
    return png_bytes
