import numpy as np
import pytest

from auxcv.pose import NUM_KEYPOINTS, alphapose_postprocess, rtmpose_postprocess


def test_alphapose_unit_scale_returns_inputs():
    pred = np.arange(51, dtype=np.float32).reshape(1, 17, 3) / 100
    kps = alphapose_postprocess(pred, 1.0)
    assert len(kps) == NUM_KEYPOINTS
    flat = pred.reshape(-1)
    for i, (x, y, p) in enumerate(kps):
        assert x == pytest.approx(float(flat[3 * i]))
        assert y == pytest.approx(float(flat[3 * i + 1]))
        assert p == pytest.approx(float(flat[3 * i + 2]))


def test_alphapose_scales_coordinates_not_probability():
    pred = np.full(51, 0.5, dtype=np.float32)
    kps = alphapose_postprocess(pred, 4.0)
    assert all(x == pytest.approx(2.0) and y == pytest.approx(2.0) for x, y, _ in kps)
    assert all(p == pytest.approx(0.5) for _, _, p in kps)


def test_alphapose_too_short():
    with pytest.raises(ValueError):
        alphapose_postprocess(np.zeros(50, dtype=np.float32), 1.0)


def _simcc(batch, width):
    return np.zeros((batch, 17, width), dtype=np.float32)


def test_rtmpose_peak_positions():
    xs = _simcc(1, 40)
    ys = _simcc(1, 40)
    for j in range(17):
        xs[0, j, j] = 0.8
        ys[0, j, 2 * j] = 0.8
    [kps] = rtmpose_postprocess(xs, ys, [(2.0, 0, 0)])
    assert len(kps) == 17
    for j, (x, y, p) in enumerate(kps):
        assert x == pytest.approx(j)
        assert y == pytest.approx(2 * j)
        assert p == pytest.approx(0.8)


def test_rtmpose_padding_cancels_offset():
    xs = _simcc(1, 20)
    ys = _simcc(1, 20)
    xs[0, :, 10] = 1.0
    ys[0, :, 6] = 1.0
    [kps] = rtmpose_postprocess(xs, ys, [(3.0, 5, 3)])
    assert all(x == pytest.approx(0.0) and y == pytest.approx(0.0) for x, y, _ in kps)


def test_rtmpose_ties_take_first_bin():
    xs = _simcc(1, 10)
    ys = _simcc(1, 10)
    xs[0, 0, 4] = 0.5
    xs[0, 0, 8] = 0.5
    [kps] = rtmpose_postprocess(xs, ys, [(2.0, 0, 0)])
    assert kps[0][0] == pytest.approx(4)
    assert kps[1][0] == pytest.approx(0.0)


def test_rtmpose_result_count_follows_scale_pad():
    xs = _simcc(3, 8)
    ys = _simcc(3, 8)
    xs[1, :, 6] = 1.0
    results = rtmpose_postprocess(xs, ys, [(2.0, 0, 0), (2.0, 0, 0)])
    assert len(results) == 2
    assert results[0][0][0] == pytest.approx(0.0)
    assert results[1][0][0] == pytest.approx(6)


def test_rtmpose_rejects_too_many_entries():
    xs = _simcc(1, 8)
    ys = _simcc(1, 8)
    with pytest.raises(ValueError):
        rtmpose_postprocess(xs, ys, [(1.0, 0, 0), (1.0, 0, 0)])


def test_rtmpose_rejects_too_few_keypoints():
    xs = np.zeros((1, 16, 8), dtype=np.float32)
    ys = np.zeros((1, 16, 8), dtype=np.float32)
    with pytest.raises(ValueError):
        rtmpose_postprocess(xs, ys, [(1.0, 0, 0)])