#!/usr/bin/env python3
"""Basic usage example for starglyph.

Loads the sample dataset, lays it out for two viewport widths and writes
a few animation frames as SVG (plus the static layer as PNG).

Usage:
    python examples/basic_usage.py [output_dir]
"""

import os
import sys
from pathlib import Path

# Add parent directory to path for direct script execution
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from starglyph.dataset import load_rows
from starglyph.generation import Sketch
from starglyph.scene import render_png

DATASET = Path(__file__).with_name("dataset.csv")


def example_layout(sketch: Sketch):
    """Show how the grid reacts to the viewport width."""
    print("=" * 60)
    print("Example 1: Responsive Grid")
    print("=" * 60)

    for width in (640, 1280):
        layout = sketch.resize(width).layout
        print(f"  Viewport:    {width}px")
        print(f"  Grid:        {layout.columns} cols x {layout.rows} rows")
        print(f"  Canvas:      {layout.canvas_width:g} x {layout.canvas_height:g}")
        print(f"  Side margin: {layout.outer_padding_x:g}px")
    print()


def example_frames(sketch: Sketch, out_dir: Path):
    """Write a short sequence of frames to disk."""
    print("=" * 60)
    print("Example 2: Animation Frames")
    print("=" * 60)

    out_dir.mkdir(parents=True, exist_ok=True)
    for t in (0, 250, 500, 750, 1000):
        path = out_dir / f"frame_{t:04d}.svg"
        path.write_text(sketch.draw_svg(elapsed_ms=t), encoding="utf-8")
        print(f"  t={t:4d}ms -> {path}")

    scene = sketch.generation.scene
    png_path = out_dir / "static.png"
    png_path.write_bytes(render_png(scene.to_svg(), scene.width, scene.height))
    print(f"  static layer -> {png_path}")
    print()


if __name__ == "__main__":
    out = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("frames")
    rows = load_rows(DATASET)
    print(f"Loaded {len(rows)} rows from {DATASET.name}\n")

    sketch = Sketch(rows, viewport_width=1024)
    example_layout(sketch)
    example_frames(sketch, out)
