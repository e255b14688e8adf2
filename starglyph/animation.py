"""Per-frame star animation for starglyph.

Every vertex is drawn as a pulsing "star".  Its size and hue encode the
value's magnitude and sign; its opacity follows a sine wave whose period
depends on the value and whose phase depends on the glyph position.

Nothing is stored between frames: each attribute is recomputed from the
vertex and the elapsed time, so two calls with the same inputs always
agree and frames can be rendered in any order.

Mapping summary:
- size: |value| in [0, scale] -> [5, 10] px (5 when scale is 0)
- color: white -> yellow for positive values, white -> blue for negative
- cycle: value in [-scale, scale] -> [1000, 3000] ms (2000 when scale is 0)
- alpha: sin(elapsed * 2pi / cycle + phase) in [-1, 1] -> [50, 255]
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from .colors import RGBA, hex_to_rgba, lerp_color
from .geometry import Vertex, remap

MIN_STAR_SIZE = 5.0
MAX_STAR_SIZE = 10.0

MIN_CYCLE_MS = 1000.0  # Fast
MAX_CYCLE_MS = 3000.0  # Slow
DEFAULT_CYCLE_MS = 2000.0

MIN_ALPHA = 50.0
MAX_ALPHA = 255.0

NEUTRAL_COLOR = hex_to_rgba("#ffffff")
POSITIVE_COLOR = hex_to_rgba("#ffdf20")
NEGATIVE_COLOR = hex_to_rgba("#51a2ff")

TWO_PI = 2 * math.pi


@dataclass(frozen=True)
class StarPoint:
    """Drawable state of one vertex at one instant.

    Attributes:
        x: Absolute horizontal position.
        y: Absolute vertical position.
        size: Point diameter in pixels.
        color: Fill color, alpha carrying the pulse.
    """

    x: float
    y: float
    size: float
    color: RGBA


def star_size(value: float, scale: float) -> float:
    if scale > 0:
        return remap(abs(value), 0, scale, MIN_STAR_SIZE, MAX_STAR_SIZE)
    return MIN_STAR_SIZE


def star_color(value: float, scale: float) -> RGBA:
    """Base color of a star before the pulse alpha is applied."""
    if scale > 0:
        if value > 0:
            return lerp_color(NEUTRAL_COLOR, POSITIVE_COLOR, remap(value, 0, scale, 0, 1))
        if value < 0:
            return lerp_color(NEUTRAL_COLOR, NEGATIVE_COLOR, remap(value, 0, -scale, 0, 1))
    return NEUTRAL_COLOR


def cycle_length(value: float, scale: float) -> float:
    """Pulse period in milliseconds.

    Negative values pulse faster and positive values slower, so speed
    follows the same axis as color polarity.
    """
    if scale > 0:
        return remap(value, -scale, scale, MIN_CYCLE_MS, MAX_CYCLE_MS)
    return DEFAULT_CYCLE_MS


def phase_offset(center_x: float, center_y: float) -> float:
    """Phase shift shared by every star of the glyph centered at (x, y)."""
    return remap((center_x * center_y) % 100, 0, 100, 0, TWO_PI)


def pulse_alpha(elapsed_ms: float, cycle_ms: float, phase: float) -> float:
    """Pulse alpha at a given time.

    Time is reduced to its position within the cycle before scaling, so
    very large elapsed times neither overflow nor lose precision.
    """
    angle = math.fmod(elapsed_ms, cycle_ms) / cycle_ms * TWO_PI + phase
    return remap(math.sin(angle), -1, 1, MIN_ALPHA, MAX_ALPHA)


def animate_vertex(vertex: Vertex, elapsed_ms: float) -> StarPoint:
    """Compute the drawable state of a vertex at a given time.

    Args:
        vertex: Vertex produced by the geometry builder.
        elapsed_ms: Milliseconds since the animation clock started.

    Returns:
        StarPoint at the vertex's absolute position.
    """
    value, scale = vertex.value, vertex.scale
    phase = phase_offset(vertex.center.x, vertex.center.y)
    alpha = pulse_alpha(elapsed_ms, cycle_length(value, scale), phase)

    return StarPoint(
        x=vertex.x,
        y=vertex.y,
        size=star_size(value, scale),
        color=star_color(value, scale).with_alpha(alpha),
    )


def animate_vertices(vertices: Iterable[Vertex], elapsed_ms: float) -> list[StarPoint]:
    """Compute one frame for a list of vertices."""
    return [animate_vertex(v, elapsed_ms) for v in vertices]
