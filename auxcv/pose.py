"""Keypoint decoding for AlphaPose and RTMPose (SimCC) heads."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np

_F32 = np.float32
_F32_MIN = np.finfo(np.float32).min

NUM_KEYPOINTS = 17

Keypoint = tuple[float, float, float]
"""(x, y, probability)."""


def alphapose_postprocess(pred: Any, scale: float) -> list[Keypoint]:
    """Read 17 (x, y, prob) triples from pred and scale the coordinates."""
    flat = np.asarray(pred, dtype=_F32).reshape(-1)
    needed = 3 * NUM_KEYPOINTS
    if flat.size < needed:
        raise ValueError(f"pred needs at least {needed} values, got {flat.size}")
    kps = flat[:needed].reshape(NUM_KEYPOINTS, 3)
    factor = _F32(scale)
    xs = (kps[:, 0] * factor).tolist()
    ys = (kps[:, 1] * factor).tolist()
    return list(zip(xs, ys, kps[:, 2].tolist()))


def _argmax_rows(rows: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Per row, the first index whose value exceeds the float32 minimum, and that value."""
    count = rows.shape[0]
    if rows.shape[1] == 0:
        return np.zeros(count, dtype=np.intp), np.full(count, _F32_MIN, dtype=_F32)
    clean = np.where(np.isnan(rows), -np.inf, rows).astype(_F32, copy=False)
    idx = clean.argmax(axis=1)
    val = clean[np.arange(count), idx]
    found = val > _F32_MIN
    return np.where(found, idx, 0), np.where(found, val, _F32_MIN).astype(_F32)


def _as_simcc(arr: Any, name: str) -> np.ndarray:
    out = np.asarray(arr, dtype=_F32)
    if out.ndim != 3:
        raise ValueError(f"{name} must be 3-dimensional, got shape {out.shape}")
    if out.shape[1] < NUM_KEYPOINTS:
        raise ValueError(f"{name} needs {NUM_KEYPOINTS} keypoint rows, got {out.shape[1]}")
    return out


def rtmpose_postprocess(
    batch_pred_x: Any,
    batch_pred_y: Any,
    batch_scale_pad: Sequence[tuple[float, int, int]],
) -> list[list[Keypoint]]:
    """Decode SimCC x/y distributions into keypoints in source-image coordinates.

    One result per (scale, pad_left, pad_top) entry of batch_scale_pad; the bins
    are at half-pixel resolution.
    """
    xs = _as_simcc(batch_pred_x, "batch_pred_x")
    ys = _as_simcc(batch_pred_y, "batch_pred_y")
    entries = list(batch_scale_pad)
    if len(entries) > min(xs.shape[0], ys.shape[0]):
        raise ValueError("batch_scale_pad has more entries than the predictions")

    results = []
    for pred_x, pred_y, (scale, pad_left, pad_top) in zip(xs, ys, entries):
        if pad_left < 0 or pad_top < 0:
            raise ValueError("padding must not be negative")
        pos_x, prob_x = _argmax_rows(pred_x[:NUM_KEYPOINTS])
        pos_y, prob_y = _argmax_rows(pred_y[:NUM_KEYPOINTS])
        factor = _F32(scale)
        half = _F32(0.5)
        prob = half * (prob_x + prob_y)
        img_x = (pos_x.astype(_F32) * half - _F32(pad_left)) * factor
        img_y = (pos_y.astype(_F32) * half - _F32(pad_top)) * factor
        results.append(list(zip(img_x.tolist(), img_y.tolist(), prob.tolist())))
    return results