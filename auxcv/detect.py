"""Decoding and class-wise NMS for YOLOv5 and YOLOv8 detection/segmentation heads."""

from __future__ import annotations

from typing import Any

import numpy as np

from .nms import DetResult, class_wise_nms

_F32 = np.float32
_BOX_CHANNELS = 4


def _as_batch(batch_pred: Any) -> np.ndarray:
    arr = np.asarray(batch_pred, dtype=_F32)
    if arr.ndim != 3:
        raise ValueError(f"batch_pred must be 3-dimensional, got shape {arr.shape}")
    return arr


def _best_class(scores: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Per row, the index and value of the first strictly positive maximum, or (0, 0.0)."""
    rows = scores.shape[0]
    if scores.shape[1] == 0:
        return np.zeros(rows, dtype=np.intp), np.zeros(rows, dtype=_F32)
    clean = np.where(np.isnan(scores), _F32(0), scores).astype(_F32, copy=False)
    idx = clean.argmax(axis=1)
    val = clean[np.arange(rows), idx]
    positive = val > 0
    return np.where(positive, idx, 0), np.where(positive, val, _F32(0)).astype(_F32)


def _corners(centres: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Convert (cx, cy, w, h) rows into xmin, ymin, xmax, ymax columns."""
    cx, cy, w, h = (centres[:, i].astype(_F32, copy=False) for i in range(4))
    half_w = w * _F32(0.5)
    half_h = h * _F32(0.5)
    return cx - half_w, cy - half_h, cx + half_w, cy + half_h


def _group_by_class(
    centres: np.ndarray,
    classes: np.ndarray,
    scores: np.ndarray,
    keep: np.ndarray,
    num_classes: int,
) -> list[list[DetResult]]:
    x1, y1, x2, y2 = _corners(centres)
    groups: list[list[DetResult]] = [[] for _ in range(num_classes)]
    for grid in np.flatnonzero(keep).tolist():
        cls = int(classes[grid])
        groups[cls].append(
            (
                float(x1[grid]),
                float(y1[grid]),
                float(x2[grid]),
                float(y2[grid]),
                cls,
                float(scores[grid]),
                grid,
            )
        )
    return groups


def yolov5_postprocess(
    batch_pred: Any, iou_threshold: float, conf_threshold: float
) -> list[list[DetResult]]:
    """Decode a (batch, grids, 5 + classes) YOLOv5 output and apply class-wise NMS.

    A grid cell is kept when its objectness and its best objectness * class score
    both reach conf_threshold.
    """
    batch = _as_batch(batch_pred)
    num_classes = batch.shape[2] - 5
    if num_classes < 1:
        raise ValueError(f"need at least 6 channels, got {batch.shape[2]}")
    threshold = _F32(conf_threshold)
    results = []
    for pred in batch:
        obj = pred[:, 4]
        classes, scores = _best_class(obj[:, None] * pred[:, 5:])
        keep = ~(obj < threshold) & ~(scores < threshold)
        groups = _group_by_class(pred[:, :_BOX_CHANNELS], classes, scores, keep, num_classes)
        results.append(class_wise_nms(float(iou_threshold), groups))
    return results


def _yolov8(
    batch: np.ndarray, iou_threshold: float, conf_threshold: float, cls_end: int
) -> list[list[DetResult]]:
    num_classes = cls_end - _BOX_CHANNELS
    if num_classes < 1:
        raise ValueError("prediction has no class channels")
    threshold = _F32(conf_threshold)
    results = []
    for pred in batch:
        classes, scores = _best_class(pred[_BOX_CHANNELS:cls_end].T)
        keep = ~(scores < threshold)
        groups = _group_by_class(pred[:_BOX_CHANNELS].T, classes, scores, keep, num_classes)
        results.append(class_wise_nms(float(iou_threshold), groups))
    return results


def yolov8_det_postprocess(
    batch_pred: Any, iou_threshold: float, conf_threshold: float
) -> list[list[DetResult]]:
    """Decode a (batch, 4 + classes, grids) YOLOv8 output and apply class-wise NMS."""
    batch = _as_batch(batch_pred)
    return _yolov8(batch, iou_threshold, conf_threshold, batch.shape[1])


def yolov8_seg_postprocess(
    batch_pred: Any, iou_threshold: float, conf_threshold: float, vec_dims: int
) -> list[list[DetResult]]:
    """Decode a YOLOv8 segmentation output whose last vec_dims channels are mask coefficients."""
    batch = _as_batch(batch_pred)
    if vec_dims < 0:
        raise ValueError(f"vec_dims must not be negative, got {vec_dims}")
    return _yolov8(batch, iou_threshold, conf_threshold, batch.shape[1] - int(vec_dims))