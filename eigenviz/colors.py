"""Color helpers for labelling SVD components by the color axis they carry."""
from __future__ import annotations

import math
from typing import Sequence, Tuple

RGB = Tuple[int, int, int]


def component_color(vt_row: Sequence[float]) -> RGB:
    """|v| / max|v| scaled to 0-255 per channel; gray-free color of a VT row."""
    r_val, g_val, b_val = (abs(float(v)) for v in vt_row)
    max_val = max(r_val, g_val, b_val)
    if max_val == 0:
        return (0, 0, 0)
    return (math.floor(r_val / max_val * 255),
            math.floor(g_val / max_val * 255),
            math.floor(b_val / max_val * 255))


def dominant_color_name(vt_row: Sequence[float]) -> str:
    r_val, g_val, b_val = (abs(float(v)) for v in vt_row)
    if r_val > g_val and r_val > b_val:
        return "Red"
    if g_val > r_val and g_val > b_val:
        return "Green"
    # ties fall through to Blue
    return "Blue"


def label_color(rgb: RGB, darken_factor: float = 0.7) -> RGB:
    """Darken light colors (luminance > 127) so text stays readable on white."""
    r, g, b = rgb
    luminance = 0.299 * r + 0.587 * g + 0.114 * b
    if luminance > 127:
        return (math.floor(r * darken_factor),
                math.floor(g * darken_factor),
                math.floor(b * darken_factor))
    return (r, g, b)


def rgb_to_hex(rgb: RGB) -> str:
    return "#{:02x}{:02x}{:02x}".format(*(int(c) for c in rgb))


def rgb_css(rgb: RGB) -> str:
    return f"rgb({rgb[0]}, {rgb[1]}, {rgb[2]})"
