"""Greedy non-maximum suppression for detection boxes."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Any, TypeVar

DetResult = tuple[float, float, float, float, int, float, int]
"""(xmin, ymin, xmax, ymax, class id, score, grid index)."""

PropsResult = tuple[tuple[float, float, float, float, int, float], list[tuple[int, float]]]
"""((xmin, ymin, xmax, ymax, class id, score), [(property class, probability), ...])."""

_EPSILON = 0.00001

T = TypeVar("T")
Corners = tuple[float, float, float, float]


def _iou(a: Corners, b: Corners) -> float:
    ax1, ay1, ax2, ay2 = a
    bx1, by1, bx2, by2 = b
    w = max(min(ax2, bx2) - max(ax1, bx1), 0.0)
    h = max(min(ay2, by2) - max(ay1, by1), 0.0)
    inter = w * h
    area_a = (ax2 - ax1) * (ay2 - ay1)
    area_b = (bx2 - bx1) * (by2 - by1)
    return inter / (area_a + area_b - inter + _EPSILON)


def _greedy(
    items: Iterable[T],
    corners: Callable[[T], Corners],
    score: Callable[[T], float],
    iou_threshold: float,
) -> list[T]:
    # sorted(reverse=True) is stable, so equal scores keep their input order.
    remaining = sorted(items, key=score, reverse=True)
    kept: list[T] = []
    while remaining:
        best, *rest = remaining
        kept.append(best)
        best_corners = corners(best)
        remaining = [c for c in rest if _iou(best_corners, corners(c)) <= iou_threshold]
    return kept


def _det_corners(box: Sequence[Any]) -> Corners:
    return (box[0], box[1], box[2], box[3])


def _props_corners(item: Sequence[Any]) -> Corners:
    return _det_corners(item[0])


def nms(boxes: Iterable[DetResult], iou_threshold: float) -> list[DetResult]:
    """Keep the highest-scoring boxes, dropping any whose IoU with a kept box exceeds the threshold."""
    return _greedy(boxes, _det_corners, lambda b: b[5], iou_threshold)


def nms_props(boxes: Iterable[PropsResult], iou_threshold: float) -> list[PropsResult]:
    """Like :func:`nms` for boxes that carry a list of property predictions."""
    return _greedy(boxes, _props_corners, lambda b: b[0][5], iou_threshold)


def class_wise_nms(
    iou_threshold: float, groups: Iterable[Iterable[DetResult]]
) -> list[DetResult]:
    """Run :func:`nms` on each group independently and concatenate the survivors in group order."""
    return [box for group in groups for box in nms(group, iou_threshold)]


def class_wise_nms_props(
    iou_threshold: float, groups: Iterable[Iterable[PropsResult]]
) -> list[PropsResult]:
    """Run :func:`nms_props` on each group independently and concatenate the survivors."""
    return [box for group in groups for box in nms_props(group, iou_threshold)]