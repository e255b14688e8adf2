"""Color helpers for starglyph.

Colors are kept as float RGBA channels in [0, 255] so interpolation does
not accumulate rounding.  Rounding happens only when a color is written
out as SVG.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class RGBA:
    """An RGB color with alpha, channels in [0, 255]."""

    r: float
    g: float
    b: float
    a: float = 255.0

    def with_alpha(self, alpha: float) -> RGBA:
        """Copy of the color with a different alpha."""
        return replace(self, a=alpha)

    @property
    def hex(self) -> str:
        """Opaque part of the color as #rrggbb."""
        return _rgb_to_hex(*(_channel(c) for c in (self.r, self.g, self.b)))

    @property
    def opacity(self) -> float:
        """Alpha as a fraction in [0, 1]."""
        return max(0.0, min(1.0, self.a / 255.0))


def _channel(value: float) -> int:
    return max(0, min(255, int(round(value))))


def _rgb_to_hex(r: int, g: int, b: int) -> str:
    """Convert (r, g, b) to hex color string."""
    return f"#{r:02x}{g:02x}{b:02x}"


def hex_to_rgba(hex_color: str) -> RGBA:
    """Parse #rgb, #rrggbb or #rrggbbaa into an RGBA color.

    Raises:
        ValueError: If the string is not a valid hex color.
    """
    h = hex_color.lstrip("#")
    if len(h) == 3:
        h = "".join(c * 2 for c in h)
    if len(h) not in (6, 8):
        raise ValueError(f"Invalid hex color '{hex_color}'")
    try:
        channels = [int(h[i : i + 2], 16) for i in range(0, len(h), 2)]
    except ValueError:
        raise ValueError(f"Invalid hex color '{hex_color}'") from None
    return RGBA(*(float(c) for c in channels))


def lerp_color(start: RGBA, stop: RGBA, amount: float) -> RGBA:
    """Linearly interpolate every channel from start to stop.

    Args:
        start: Color at amount 0.
        stop: Color at amount 1.
        amount: Interpolation factor, clamped to [0, 1].

    Returns:
        Interpolated color.
    """
    t = max(0.0, min(1.0, amount))
    return RGBA(
        r=start.r + (stop.r - start.r) * t,
        g=start.g + (stop.g - start.g) * t,
        b=start.b + (stop.b - start.b) * t,
        a=start.a + (stop.a - start.a) * t,
    )
