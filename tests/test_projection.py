import numpy as np

from hanzicut.segmentation import (
    Box, BoxType, column_profile, cut, cut_columns, find_runs,
    resolve_box_height, estimate_line_scale, is_reference_sample,
)

from conftest import blank_line, ink


def test_two_blocks_yield_exact_column_ranges(two_blocks, params):
    seg = cut(two_blocks, params)
    assert [(b.start, b.end) for b in seg.boxes] == [(5, 25), (40, 60)]
    assert all(b.box_type == BoxType.UNCLASSIFIED for b in seg.boxes)
    assert [(b.top, b.bottom) for b in seg.boxes] == [(5, 24), (5, 24)]


def test_cut_is_deterministic(two_blocks, params):
    assert cut_columns(two_blocks, params) == cut_columns(two_blocks, params)
    assert cut(two_blocks, params) == cut(two_blocks, params)


def test_blank_bitmap_has_no_boxes(params):
    seg = cut(blank_line(rows=30, cols=80), params)
    assert seg.boxes == ()
    assert (seg.mean_height, seg.mean_width) == (26, 76)


def test_runs_touching_the_edges_are_kept(params):
    bitmap = blank_line(rows=30, cols=50)
    ink(bitmap, (2, 20), (0, 10))
    ink(bitmap, (2, 20), (40, 50))
    assert [(b.start, b.end) for b in cut_columns(bitmap, params)] == [(0, 10), (40, 50)]


def test_thin_runs_are_noise(params):
    bitmap = blank_line(rows=30, cols=50)
    ink(bitmap, (2, 20), (5, 7))     # 2 columns, dropped
    ink(bitmap, (2, 20), (20, 23))   # 3 columns, kept
    assert [(b.start, b.end) for b in cut_columns(bitmap, params)] == [(20, 23)]


def test_find_runs_threshold():
    profile = np.array([0, 3, 3, 1, 3, 0, 2])
    assert find_runs(profile, 1) == [(1, 5), (6, 7)]
    assert find_runs(profile, 2) == [(1, 3), (4, 5), (6, 7)]


def test_column_profile_counts_ink():
    bitmap = blank_line(rows=10, cols=6)
    ink(bitmap, (0, 4), (1, 2))
    ink(bitmap, (3, 10), (4, 6))
    mask = bitmap != 255
    assert column_profile(mask).tolist() == [0, 4, 0, 0, 7, 7]
    assert column_profile(mask, 3, 5).tolist() == [0, 7]


def test_single_row_box_gets_minimum_height():
    bitmap = blank_line(rows=20, cols=20)
    ink(bitmap, (7, 8), (2, 12))
    box = resolve_box_height(bitmap != 255, Box(2, 12))
    assert (box.top, box.bottom) == (7, 8)


def test_inkless_range_resolves_to_one_row():
    box = resolve_box_height(blank_line(rows=20, cols=20) != 255, Box(2, 12))
    assert (box.top, box.bottom) == (0, 1)


def test_reference_sample_exclusions(params):
    rows = 40
    assert not is_reference_sample(Box(0, 10, 0, 10), rows, params)    # punctuation
    assert not is_reference_sample(Box(0, 10, 0, 38), rows, params)    # "|"
    assert not is_reference_sample(Box(0, 20, 0, 30), rows, params)    # too narrow
    assert is_reference_sample(Box(0, 30, 2, 32), rows, params)


def test_line_scale_uses_only_typical_glyphs(params):
    boxes = [Box(0, 10, 0, 10), Box(20, 30, 0, 38), Box(40, 60, 0, 30),
             Box(70, 100, 2, 32), Box(110, 136, 4, 30)]
    assert estimate_line_scale(boxes, 40, 200, params) == (28, 28)


def test_line_scale_falls_back_to_bitmap_size(params):
    assert estimate_line_scale([], 40, 200, params) == (36, 196)
    assert estimate_line_scale([], 3, 3, params) == (1, 1)
