"""starglyph -- animated radial star glyphs for numeric datasets.

Each dataset row becomes a closed radial polygon whose vertices sit at
evenly spaced angles around a center, with radius proportional to the
value.  Glyphs are packed into a responsive grid, and every vertex is
drawn as a pulsing star whose color and pulse speed encode the value's
sign and magnitude.
"""
