"""Decoding of YOLOv8 outputs that carry per-box property groups, with class-wise NMS."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np

from .detect import _as_batch, _best_class, _corners
from .nms import PropsResult, class_wise_nms_props

_F32 = np.float32

UNKNOWN_PROPERTY = 2**64 - 1
"""Property class reported when no class in a group has a positive probability."""


def yolov8_property_postprocess(
    batch_pred: Any,
    iou_threshold: float,
    conf_threshold: float,
    num_cls: int,
    has_property: Sequence[bool],
    property_groups: Sequence[int],
) -> list[list[PropsResult]]:
    """Decode a (batch, 4 + num_cls + sum(property_groups), grids) output.

    Each detection whose class has has_property set carries, for every property
    group, the (index within the group, probability) of its best property class.
    """
    batch = _as_batch(batch_pred)
    num_cls = int(num_cls)
    if num_cls < 1:
        raise ValueError(f"num_cls must be positive, got {num_cls}")
    flags = [bool(flag) for flag in has_property]
    if len(flags) < num_cls:
        raise ValueError(f"has_property needs {num_cls} entries, got {len(flags)}")
    sizes = [int(n) for n in property_groups]
    if any(n < 0 for n in sizes):
        raise ValueError("property group sizes must not be negative")
    cls_end = 4 + num_cls
    channels = batch.shape[1]
    needed = cls_end + sum(sizes) if any(flags[:num_cls]) else cls_end
    if channels < needed:
        raise ValueError(f"prediction needs at least {needed} channels, got {channels}")

    threshold = _F32(conf_threshold)
    results = []
    for pred in batch:
        classes, scores = _best_class(pred[4:cls_end].T)
        keep = ~(scores < threshold)

        tables = []
        start = cls_end
        for size in sizes:
            if needed > cls_end:
                tables.append(_best_class(pred[start : start + size].T))
            start += size

        x1, y1, x2, y2 = _corners(pred[:4].T)
        groups: list[list[PropsResult]] = [[] for _ in range(num_cls)]
        for grid in np.flatnonzero(keep).tolist():
            cls = int(classes[grid])
            props = (
                [
                    (int(idx[grid]) if prob[grid] > 0 else UNKNOWN_PROPERTY, float(prob[grid]))
                    for idx, prob in tables
                ]
                if flags[cls]
                else []
            )
            box = (
                float(x1[grid]),
                float(y1[grid]),
                float(x2[grid]),
                float(y2[grid]),
                cls,
                float(scores[grid]),
            )
            groups[cls].append((box, props))
        results.append(class_wise_nms_props(float(iou_threshold), groups))
    return results