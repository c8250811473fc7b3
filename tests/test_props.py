import numpy as np
import pytest

from auxcv.props import UNKNOWN_PROPERTY, yolov8_property_postprocess


def _pred(grids, num_cls, groups, batch=1):
    return np.zeros((batch, 4 + num_cls + sum(groups), grids), dtype=np.float32)


def test_property_groups_pick_best_class_per_group():
    groups = [3, 2]
    pred = _pred(grids=2, num_cls=2, groups=groups)
    pred[0, :4, 0] = (10, 10, 4, 4)
    pred[0, 4 + 0, 0] = 0.9
    base = 4 + 2
    pred[0, base + 0, 0] = 0.1
    pred[0, base + 2, 0] = 0.7
    [dets] = yolov8_property_postprocess(pred, 0.5, 0.25, 2, [True, True], groups)
    assert len(dets) == 1
    box, props = dets[0]
    assert box[4] == 0
    assert box[5] == pytest.approx(0.9)
    assert props[0] == (2, pytest.approx(0.7))
    assert props[1] == (UNKNOWN_PROPERTY, 0.0)


def test_class_without_property_has_empty_list():
    groups = [2]
    pred = _pred(grids=1, num_cls=2, groups=groups)
    pred[0, :4, 0] = (10, 10, 4, 4)
    pred[0, 4 + 1, 0] = 0.8
    pred[0, 4 + 2 + 1, 0] = 0.9
    [dets] = yolov8_property_postprocess(pred, 0.5, 0.25, 2, [True, False], groups)
    assert len(dets) == 1
    assert dets[0][0][4] == 1
    assert dets[0][1] == []


def test_property_ties_take_first_index():
    groups = [3]
    pred = _pred(grids=1, num_cls=1, groups=groups)
    pred[0, :4, 0] = (10, 10, 4, 4)
    pred[0, 4, 0] = 0.9
    pred[0, 5 + 1, 0] = 0.6
    pred[0, 5 + 2, 0] = 0.6
    [dets] = yolov8_property_postprocess(pred, 0.5, 0.25, 1, [True], groups)
    assert dets[0][1] == [(1, pytest.approx(0.6))]


def test_overlapping_boxes_suppressed_and_props_follow_survivor():
    groups = [2]
    pred = _pred(grids=2, num_cls=1, groups=groups)
    pred[0, :4, :] = np.array([[10, 10], [10, 10], [4, 4], [4, 4]], dtype=np.float32)
    pred[0, 4, 0] = 0.6
    pred[0, 4, 1] = 0.9
    pred[0, 5 + 0, 0] = 0.8
    pred[0, 5 + 1, 1] = 0.8
    [dets] = yolov8_property_postprocess(pred, 0.5, 0.25, 1, [True], groups)
    assert len(dets) == 1
    assert dets[0][0][5] == pytest.approx(0.9)
    assert dets[0][1] == [(1, pytest.approx(0.8))]


def test_below_threshold_and_batch_length():
    groups = [1]
    pred = _pred(grids=2, num_cls=1, groups=groups, batch=2)
    pred[1, :4, 0] = (10, 10, 4, 4)
    pred[1, 4, 0] = 0.1
    results = yolov8_property_postprocess(pred, 0.5, 0.25, 1, [True], groups)
    assert results == [[], []]


def test_box_geometry():
    groups = []
    pred = _pred(grids=1, num_cls=1, groups=groups)
    pred[0, :4, 0] = (30, 40, 10, 20)
    pred[0, 4, 0] = 0.9
    [dets] = yolov8_property_postprocess(pred, 0.5, 0.25, 1, [False], groups)
    x1, y1, x2, y2, _, _ = dets[0][0]
    assert x2 - x1 == pytest.approx(10)
    assert y2 - y1 == pytest.approx(20)
    assert (y1 + y2) / 2 == pytest.approx(40)


def test_too_few_channels_for_properties():
    pred = np.zeros((1, 4 + 2 + 1, 3), dtype=np.float32)
    with pytest.raises(ValueError):
        yolov8_property_postprocess(pred, 0.5, 0.25, 2, [True, False], [3])


def test_has_property_too_short():
    pred = _pred(grids=1, num_cls=2, groups=[])
    with pytest.raises(ValueError):
        yolov8_property_postprocess(pred, 0.5, 0.25, 2, [True], [])


def test_num_cls_must_be_positive():
    pred = _pred(grids=1, num_cls=1, groups=[])
    with pytest.raises(ValueError):
        yolov8_property_postprocess(pred, 0.5, 0.25, 0, [], [])