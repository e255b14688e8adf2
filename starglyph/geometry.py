"""Radial glyph geometry for starglyph.

Converts a numeric row into a star glyph: one vertex per value, placed at
evenly spaced angles around a center, with a radius proportional to the
value relative to the row's largest magnitude.

Geometry algorithm:
1. Compute the row's magnitude scale (largest absolute value)
2. angle_step = 360 / row length (degrees)
3. radius = value / scale * max_radius (0 when scale is 0)
4. offset = (radius * cos(i * angle_step), radius * sin(i * angle_step))

Angles start at the positive x-axis and grow toward positive y, so on
screen (y down) the glyph is laid out clockwise.  Negative values put the
vertex on the opposite side of the center.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

# Default glyph radius in pixels (half of the grid cell diameter)
MAX_RADIUS = 50.0


def remap(value: float, start1: float, stop1: float, start2: float, stop2: float) -> float:
    """Linearly map value from [start1, stop1] onto [start2, stop2].

    The result is not clamped, so inputs outside the source range land
    outside the target range.
    """
    return start2 + (stop2 - start2) * ((value - start1) / (stop1 - start1))


@dataclass(frozen=True)
class GlyphCenter:
    """Anchor point of one glyph on the canvas.

    Attributes:
        x: Horizontal position in pixels.
        y: Vertical position in pixels.
    """

    x: float
    y: float


@dataclass(frozen=True)
class Vertex:
    """One value of a row, placed relative to its glyph center.

    Attributes:
        offset_x: Horizontal offset from the center.
        offset_y: Vertical offset from the center.
        value: Raw data value.
        scale: Magnitude scale of the owning row.
        center: Center of the owning glyph.
        index: Position of the value within its row.
        row_index: Position of the row within the dataset.
    """

    offset_x: float
    offset_y: float
    value: float
    scale: float
    center: GlyphCenter
    index: int = 0
    row_index: int = 0

    @property
    def x(self) -> float:
        """Absolute horizontal position."""
        return self.center.x + self.offset_x

    @property
    def y(self) -> float:
        """Absolute vertical position."""
        return self.center.y + self.offset_y

    @property
    def position(self) -> tuple[float, float]:
        """Absolute (x, y) position."""
        return (self.x, self.y)


@dataclass(frozen=True)
class Glyph:
    """A star glyph built from a single row.

    Attributes:
        center: Glyph anchor point.
        scale: Magnitude scale used to normalize the row.
        vertices: Vertices in row order.
    """

    center: GlyphCenter
    scale: float
    vertices: tuple[Vertex, ...]

    def outline(self) -> list[tuple[float, float]]:
        """Closed polyline through the vertices (first point repeated last)."""
        points = [v.position for v in self.vertices]
        if points:
            points.append(points[0])
        return points


def magnitude_scale(row: Sequence[float]) -> float:
    """Compute the symmetric normalization scale of a row.

    Args:
        row: Numeric values.

    Returns:
        max(|max(row)|, |min(row)|). Zero for an all-zero row.

    Raises:
        ValueError: If the row is empty.
    """
    if len(row) == 0:
        raise ValueError("Row must contain at least one value")
    return float(max(abs(max(row)), abs(min(row))))


def vertex_radius(value: float, scale: float, max_radius: float = MAX_RADIUS) -> float:
    """Radius for a value, mapping [-scale, scale] onto [-max_radius, max_radius]."""
    if scale == 0:
        return 0.0
    return value / scale * max_radius


def build_glyph(
    row: Sequence[float],
    center: GlyphCenter,
    max_radius: float = MAX_RADIUS,
    row_index: int = 0,
) -> Glyph:
    """Build the radial glyph for one row.

    Args:
        row: Numeric values, at least one.
        center: Where the glyph is anchored on the canvas.
        max_radius: Radius reached by the row's largest magnitude.
        row_index: Dataset position of the row, recorded on each vertex.

    Returns:
        Glyph with one vertex per value, in row order.

    Raises:
        ValueError: If the row is empty.
    """
    scale = magnitude_scale(row)
    angle_step = 360.0 / len(row)

    vertices = []
    for i, value in enumerate(row):
        r = vertex_radius(value, scale, max_radius)
        angle = math.radians(i * angle_step)
        vertices.append(
            Vertex(
                offset_x=r * math.cos(angle),
                offset_y=r * math.sin(angle),
                value=float(value),
                scale=scale,
                center=center,
                index=i,
                row_index=row_index,
            )
        )

    return Glyph(center=center, scale=scale, vertices=tuple(vertices))
