"""Layout generations and the drawing host for starglyph.

A generation is everything derived from one viewport width: the grid
layout, one glyph per row, the flat vertex list and the static scene.
It is built in one go and never modified.  On resize a new generation
is built and replaces the old one with a single reference assignment,
so a frame always sees one complete generation.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Callable, Sequence

import structlog

from .animation import StarPoint, animate_vertices
from .geometry import Glyph, Vertex, build_glyph
from .layout import DEFAULT_CONFIG, Layout, LayoutConfig, compute_layout
from .scene import DEFAULT_STYLE, SceneStyle, StaticScene, build_static_scene, compose_frame_svg

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Generation:
    """One complete, immutable layout snapshot.

    Attributes:
        layout: Grid layout for the viewport.
        glyphs: One glyph per data row.
        vertices: All vertices of all glyphs, row by row.
        scene: Cached static layer.
    """

    layout: Layout
    glyphs: tuple[Glyph, ...]
    vertices: tuple[Vertex, ...]
    scene: StaticScene


@dataclass(frozen=True)
class Frame:
    """What to draw for one tick: the static layer, then the stars."""

    scene: StaticScene
    points: list[StarPoint]

    def to_svg(self) -> str:
        return compose_frame_svg(self.scene, self.points)


def validate_rows(rows: Sequence[Sequence[float]]) -> None:
    """Reject rows the geometry builder cannot handle.

    Raises:
        ValueError: If any row is empty or holds a NaN or infinite value.
    """
    for i, row in enumerate(rows):
        if len(row) == 0:
            raise ValueError(f"Row {i} has no values")
        if not all(math.isfinite(v) for v in row):
            raise ValueError(f"Row {i} has non-finite values")


def build_generation(
    rows: Sequence[Sequence[float]],
    viewport_width: float,
    config: LayoutConfig = DEFAULT_CONFIG,
    style: SceneStyle = DEFAULT_STYLE,
) -> Generation:
    """Build layout, glyphs, vertices and static scene for a viewport.

    Args:
        rows: Dataset rows, each with at least one value.
        viewport_width: Width of the drawing surface in pixels.
        config: Grid dimensions.
        style: Static layer styling.

    Returns:
        A fully built Generation.

    Raises:
        ValueError: If a row is empty or non-finite, or the viewport width is not positive.
    """
    validate_rows(rows)
    layout = compute_layout(viewport_width, len(rows), config)

    glyphs = tuple(
        build_glyph(row, center, config.max_radius, row_index=i)
        for i, (row, center) in enumerate(zip(rows, layout.centers))
    )
    vertices = tuple(v for glyph in glyphs for v in glyph.vertices)
    scene = build_static_scene(layout, glyphs, style)

    logger.debug(
        "generation_built",
        viewport_width=viewport_width,
        glyphs=len(glyphs),
        vertices=len(vertices),
    )

    return Generation(layout=layout, glyphs=glyphs, vertices=vertices, scene=scene)


class Sketch:
    """Holds the dataset and the current generation, and draws frames.

    The host calls resize() whenever the viewport changes and frame() (or
    draw_svg()) once per tick, both from the same thread.

    Args:
        rows: Dataset rows, copied into immutable tuples.
        viewport_width: Initial viewport width.
        config: Grid dimensions.
        style: Static layer styling.
        clock: Monotonic clock in seconds, used for elapsed time.
    """

    def __init__(
        self,
        rows: Sequence[Sequence[float]],
        viewport_width: float,
        config: LayoutConfig = DEFAULT_CONFIG,
        style: SceneStyle = DEFAULT_STYLE,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.rows: tuple[tuple[float, ...], ...] = tuple(
            tuple(float(v) for v in row) for row in rows
        )
        self.config = config
        self.style = style
        self._clock = clock
        self._started = clock()
        self.generation = build_generation(self.rows, viewport_width, config, style)

    @property
    def layout(self) -> Layout:
        return self.generation.layout

    def resize(self, viewport_width: float) -> Generation:
        """Rebuild everything for a new viewport width and swap it in."""
        generation = build_generation(self.rows, viewport_width, self.config, self.style)
        self.generation = generation
        logger.info(
            "sketch_resized",
            viewport_width=viewport_width,
            columns=generation.layout.columns,
            rows=generation.layout.rows,
        )
        return generation

    def elapsed_ms(self) -> float:
        """Milliseconds since the sketch was created."""
        return (self._clock() - self._started) * 1000.0

    def frame(self, elapsed_ms: float | None = None) -> Frame:
        """Compute the frame for the given time (default: now)."""
        generation = self.generation
        if elapsed_ms is None:
            elapsed_ms = self.elapsed_ms()
        return Frame(
            scene=generation.scene,
            points=animate_vertices(generation.vertices, elapsed_ms),
        )

    def draw_svg(self, elapsed_ms: float | None = None) -> str:
        return self.frame(elapsed_ms).to_svg()
