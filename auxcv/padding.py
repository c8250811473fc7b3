"""Letterbox geometry: the scale and padding that fit an image into a target size."""

from __future__ import annotations

import numpy as np

_F32 = np.float32


def _fit(src_w: int, src_h: int, width: int, height: int) -> tuple[np.float32, int, int]:
    if width <= 0 or height <= 0:
        raise ValueError(f"target size must be positive, got {width}x{height}")
    scale_w = _F32(src_w) / _F32(width)
    scale_h = _F32(src_h) / _F32(height)
    if scale_w > scale_h:
        return scale_w, width, int(_F32(src_h) / scale_w)
    if scale_h == 0:
        raise ValueError(f"source size must be positive, got {src_w}x{src_h}")
    return scale_h, int(_F32(src_w) / scale_h), height


def _split(delta: int) -> tuple[int, int]:
    first = int(_F32(delta) * _F32(0.5))
    return first, delta - first


def get_auto_resize(src_w: int, src_h: int, width: int, height: int) -> tuple[float, int, int]:
    """Return (scale, new_w, new_h) that fit a src_w x src_h image inside width x height."""
    scale, new_w, new_h = _fit(src_w, src_h, width, height)
    return float(scale), new_w, new_h


def get_padding(
    src_w: int, src_h: int, width: int, height: int
) -> tuple[float, int, int, int, int]:
    """Return (scale, pad_left, pad_top, pad_right, pad_bottom) for a centred letterbox."""
    scale, new_w, new_h = _fit(src_w, src_h, width, height)
    pad_left, pad_right = _split(width - new_w)
    pad_top, pad_bottom = _split(height - new_h)
    return float(scale), pad_left, pad_top, pad_right, pad_bottom