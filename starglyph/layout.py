"""Responsive grid layout for starglyph.

Packs a variable number of fixed-size glyph cells into a viewport of
variable width.  The column count is whatever fits after the outer
padding; the grid is then centered horizontally by recomputing the side
padding from the space that is actually used.

Layout algorithm:
1. available = viewport_width - 2 * outer_padding_x
2. columns = floor(available / (diameter + padding)), at least 1
3. rows = ceil(row_count / columns)
4. outer_padding_x = (viewport_width - grid_width) / 2
5. canvas_height = 2 * outer_padding_y + rows * diameter + (rows - 1) * padding
6. Cells are filled row-major; each glyph sits at its cell center.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace

import structlog

from .geometry import GlyphCenter

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class LayoutConfig:
    """Fixed grid dimensions and canvas styling.

    Attributes:
        outer_padding_x: Minimum horizontal margin around the grid.
        outer_padding_y: Vertical margin above and below the grid.
        padding: Gap between neighbouring cells.
        diameter: Side length of a cell (twice the glyph radius).
        background: Canvas background color.
    """

    outer_padding_x: float = 50.0
    outer_padding_y: float = 50.0
    padding: float = 25.0
    diameter: float = 100.0
    background: str = "#162556"

    @property
    def max_radius(self) -> float:
        """Glyph radius reached by a row's largest magnitude."""
        return self.diameter / 2


DEFAULT_CONFIG = LayoutConfig()


@dataclass(frozen=True)
class Layout:
    """Computed grid for one viewport width.

    Attributes:
        canvas_width: Canvas width (equals the viewport width).
        canvas_height: Canvas height needed to fit every row.
        columns: Cells per grid row.
        rows: Number of grid rows.
        outer_padding_x: Centered horizontal margin.
        outer_padding_y: Vertical margin.
        padding: Gap between cells.
        diameter: Cell side length.
        centers: One glyph center per data row, row-major.
        config: Configuration the layout was computed from.
    """

    canvas_width: float
    canvas_height: float
    columns: int
    rows: int
    outer_padding_x: float
    outer_padding_y: float
    padding: float
    diameter: float
    centers: tuple[GlyphCenter, ...] = ()
    config: LayoutConfig = field(default=DEFAULT_CONFIG)

    @property
    def radius(self) -> float:
        """Half the cell diameter."""
        return self.diameter / 2

    @property
    def cell_count(self) -> int:
        """Number of occupied cells."""
        return len(self.centers)

    def cell_origin(self, index: int) -> tuple[float, float]:
        """Top-left corner of the cell holding data row ``index``."""
        column = index % self.columns
        row_in_grid = index // self.columns
        step = self.diameter + self.padding
        return (
            self.outer_padding_x + column * step,
            self.outer_padding_y + row_in_grid * step,
        )


def column_count(viewport_width: float, config: LayoutConfig = DEFAULT_CONFIG) -> int:
    """Number of cells that fit across the viewport, clamped to at least 1."""
    available = viewport_width - config.outer_padding_x * 2
    return max(1, math.floor(available / (config.diameter + config.padding)))


def compute_layout(
    viewport_width: float,
    row_count: int,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> Layout:
    """Compute the grid layout and glyph centers for a viewport.

    Args:
        viewport_width: Width of the drawing surface in pixels.
        row_count: Number of data rows (one glyph each).
        config: Grid dimensions.

    Returns:
        Layout with one center per data row.

    Raises:
        ValueError: If viewport_width is not positive or row_count is negative.
    """
    if viewport_width <= 0:
        raise ValueError(f"viewport_width must be positive, got {viewport_width}")
    if row_count < 0:
        raise ValueError(f"row_count must be non-negative, got {row_count}")

    columns = column_count(viewport_width, config)
    rows = math.ceil(row_count / columns)

    total_grid_width = columns * config.diameter + (columns - 1) * config.padding
    outer_padding_x = (viewport_width - total_grid_width) / 2

    canvas_height = (
        config.outer_padding_y * 2 + rows * config.diameter + max(rows - 1, 0) * config.padding
    )

    layout = Layout(
        canvas_width=viewport_width,
        canvas_height=canvas_height,
        columns=columns,
        rows=rows,
        outer_padding_x=outer_padding_x,
        outer_padding_y=config.outer_padding_y,
        padding=config.padding,
        diameter=config.diameter,
        config=config,
    )

    radius = config.diameter / 2
    centers = []
    for i in range(row_count):
        cell_x, cell_y = layout.cell_origin(i)
        centers.append(GlyphCenter(cell_x + radius, cell_y + radius))

    logger.debug(
        "grid_computed",
        rows=rows,
        columns=columns,
        elements=rows * columns,
        canvas_height=canvas_height,
    )

    return replace(layout, centers=tuple(centers))
