"""Letterbox resize and normalisation of BGR uint8 images into CHW float32 RGB tensors."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

_F32 = np.float32

_ZERO_MEAN = (0.0, 0.0, 0.0)
_UNIT_RANGE = (255.0, 255.0, 255.0)
_IMAGENET_MEAN = (103.530, 123.675, 116.280)
_IMAGENET_STD = (57.375, 58.395, 57.120)


def _check(src: np.ndarray, dst: np.ndarray) -> np.ndarray:
    src = np.asarray(src)
    if src.dtype != np.uint8:
        raise TypeError(f"src must be uint8, got {src.dtype}")
    if src.ndim != 3 or src.shape[2] < 3:
        raise ValueError(f"src must have shape (H, W, 3), got {src.shape}")
    if not isinstance(dst, np.ndarray) or dst.dtype != np.float32:
        raise TypeError("dst must be a float32 numpy array")
    if dst.ndim != 3 or dst.shape[0] < 3:
        raise ValueError(f"dst must have shape (3, H, W), got {dst.shape}")
    if not dst.flags.writeable:
        raise ValueError("dst must be writeable")
    if 0 in src.shape[:2] or 0 in dst.shape[1:]:
        raise ValueError("src and dst must not be empty")
    return src


def _fit_scale(width: int, height: int, dst: np.ndarray) -> np.float32:
    dst_h, dst_w = dst.shape[1:3]
    return max(_F32(width) / _F32(dst_w), _F32(height) / _F32(dst_h))


def _letterbox(
    src: np.ndarray,
    dst: np.ndarray,
    scale: np.float32,
    mean: Sequence[float],
    std: Sequence[float],
) -> tuple[float, int, int]:
    src_h, src_w = src.shape[:2]
    dst_h, dst_w = dst.shape[1:3]
    new_w = int(_F32(src_w) / scale)
    new_h = int(_F32(src_h) / scale)
    if new_w > dst_w or new_h > dst_h:
        raise ValueError("resized image does not fit into dst")
    pad_left = (dst_w - new_w) // 2
    pad_top = (dst_h - new_h) // 2

    ys = np.minimum((np.arange(new_h, dtype=_F32) * scale).astype(np.intp), src_h - 1)
    xs = np.minimum((np.arange(new_w, dtype=_F32) * scale).astype(np.intp), src_w - 1)
    patch = src[ys[:, None], xs[None, :], :3].astype(_F32)

    mean_arr = np.asarray(mean, dtype=_F32).reshape(3)
    std_arr = np.asarray(std, dtype=_F32).reshape(3)
    normalized = (patch - mean_arr) / std_arr

    region = dst[:, pad_top : pad_top + new_h, pad_left : pad_left + new_w]
    # Source is BGR; destination planes are RGB.
    region[2] = normalized[..., 0]
    region[1] = normalized[..., 1]
    region[0] = normalized[..., 2]
    return float(scale), pad_left, pad_top


def std_preprocess(
    src: np.ndarray,
    dst: np.ndarray,
    mean_val: Sequence[float],
    std_val: Sequence[float],
) -> tuple[float, int, int]:
    """Letterbox src into dst with per-channel (x - mean) / std in BGR order.

    Only the resized region of dst is written. Returns (scale, pad_left, pad_top).
    """
    src = _check(src, dst)
    scale = _fit_scale(src.shape[1], src.shape[0], dst)
    return _letterbox(src, dst, scale, mean_val, std_val)


def yolov5_det_preprocess(src: np.ndarray, dst: np.ndarray) -> tuple[float, int, int]:
    """Letterbox src into dst scaled to [0, 1]. Returns (scale, pad_left, pad_top)."""
    return std_preprocess(src, dst, _ZERO_MEAN, _UNIT_RANGE)


def yolov5_cls_preprocess(src: np.ndarray, dst: np.ndarray) -> tuple[float, int, int]:
    """Letterbox src into dst with ImageNet normalisation. Returns (scale, pad_left, pad_top)."""
    return std_preprocess(src, dst, _IMAGENET_MEAN, _IMAGENET_STD)


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def rtmpose_preprocess(
    src: np.ndarray, dst: np.ndarray, padding_rate: float
) -> tuple[float, int, int]:
    """Letterbox src with an extra border of padding_rate on each side, ImageNet-normalised.

    Returns (scale, pad_left, pad_top).
    """
    src = _check(src, dst)
    src_h, src_w = src.shape[:2]
    pad_w = max(_round_half_away(float(_F32(src_w) * _F32(padding_rate))), 0)
    pad_h = max(_round_half_away(float(_F32(src_h) * _F32(padding_rate))), 0)
    scale = _fit_scale(src_w + 2 * pad_w, src_h + 2 * pad_h, dst)
    return _letterbox(src, dst, scale, _IMAGENET_MEAN, _IMAGENET_STD)