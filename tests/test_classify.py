import numpy as np
import pytest

from hanzicut.segmentation import (
    Box, BoxType, LineSegmentation, classify, is_ideograph_shape,
    is_similar_shape, label_residual, propagate_ideographs,
)

I = BoxType.IDEOGRAPH
U = BoxType.UNCLASSIFIED


def _line(*boxes, mean_height=29, mean_width=30):
    return LineSegmentation(bitmap=np.full((40, 300), 255, dtype=np.uint8),
                            mean_height=mean_height, mean_width=mean_width, boxes=boxes)


def test_ideograph_shape(params):
    assert is_ideograph_shape(Box(0, 30, 0, 30), 30, params)
    assert is_ideograph_shape(Box(0, 30, 0, 28), 30, params)
    assert not is_ideograph_shape(Box(0, 30, 0, 20), 30, params)   # too flat
    assert not is_ideograph_shape(Box(0, 20, 0, 20), 30, params)   # too small
    assert not is_ideograph_shape(Box(0, 40, 0, 40), 30, params)   # too large


def test_ideograph_thresholds_are_configurable(params):
    box = Box(0, 30, 0, 24)
    assert not is_ideograph_shape(box, 30, params)
    assert is_ideograph_shape(box, 30, dict(params, min_aspect_ratio=0.75))


def test_similar_shape_is_symmetric(params):
    a = Box(0, 10, 10, 25)
    b = Box(12, 21, 11, 24)
    c = Box(30, 40, 0, 15)
    d = Box(50, 70, 10, 25)
    for x, y in ((a, b), (a, c), (a, d), (b, c)):
        assert is_similar_shape(x, y, params) == is_similar_shape(y, x, params)
    assert is_similar_shape(a, b, params)
    assert not is_similar_shape(a, c, params)   # different baseline
    assert not is_similar_shape(a, d, params)   # different width


def test_neighbour_propagation(params):
    seg = _line(Box(0, 30, 5, 34, I),
                Box(35, 52, 5, 34, U),     # tall and thin, like "目"
                Box(60, 65, 28, 32, U))    # a dot
    out = propagate_ideographs(seg, params)
    assert [b.box_type for b in out.boxes] == [I, I, U]


def test_propagation_needs_an_ideograph_neighbour(params):
    seg = _line(Box(0, 17, 5, 34, U), Box(35, 62, 18, 22, U))
    out = propagate_ideographs(seg, params)
    assert [b.box_type for b in out.boxes] == [U, U]


def test_propagation_runs_left_to_right(params):
    seg = _line(Box(0, 30, 5, 34, U),
                Box(35, 62, 18, 22, U),    # flat, like "一"
                Box(70, 100, 5, 34, I))
    out = propagate_ideographs(seg, params)
    # boxes already passed are not revisited after a later promotion
    assert [b.box_type for b in out.boxes] == [U, I, I]

    seg = _line(Box(0, 30, 5, 34, I), Box(35, 62, 18, 22, U), Box(70, 95, 5, 34, U))
    out = propagate_ideographs(seg, params)
    assert [b.box_type for b in out.boxes] == [I, I, I]


def test_residual_labels(params):
    seg = _line(Box(0, 3, 20, 22, U),
                Box(10, 20, 20, 30, U),
                Box(30, 50, 5, 30, U),
                Box(60, 90, 5, 34, I))
    out = label_residual(seg, params)
    assert [b.box_type for b in out.boxes] == [
        BoxType.NOISE, BoxType.SMALL_PUNCT, BoxType.ALNUM_PUNCT, I]


def test_residual_labelling_can_be_disabled(params):
    seg = _line(Box(10, 20, 20, 30, U))
    out = classify(seg, dict(params, label_residual=False))
    assert out.boxes[0].box_type == U


def test_union_requires_resolved_heights():
    assert Box(10, 20, 5, 30).union(Box(22, 30, 8, 34)) == Box(10, 30, 5, 34)
    with pytest.raises(ValueError):
        Box(10, 20).union(Box(22, 30, 8, 34))
    with pytest.raises(ValueError):
        Box(10, 20, 5, 30).union(Box(22, 30))
