from hanzicut.segmentation import Box, check_invariants, cut, recut, recut_box

from conftest import blank_line, ink


def _bridged_pair(bitmap):
    ink(bitmap, (5, 35), (10, 40))
    ink(bitmap, (20, 21), (40, 45))   # one-pixel ink bridge
    ink(bitmap, (5, 35), (45, 75))
    return bitmap


def test_thin_bridge_is_cut(params):
    mask = _bridged_pair(blank_line()) != 255
    pieces = recut_box(mask, Box(10, 75), 30, 1, params)
    assert [(b.start, b.end) for b in pieces] == [(10, 40), (45, 75)]
    assert all(b.width <= 30 * 5 / 4 for b in pieces)


def test_solid_region_stays_unsplit(params):
    bitmap = blank_line()
    ink(bitmap, (5, 35), (10, 100))   # 3x the reference, constant density
    pieces = recut_box(bitmap != 255, Box(10, 100), 30, 1, params)
    assert [(b.start, b.end) for b in pieces] == [(10, 100)]


def test_threshold_cap_returns_box_unchanged(params):
    mask = _bridged_pair(blank_line()) != 255
    box = Box(10, 75)
    assert recut_box(mask, box, 30, 10, params) == (box,)
    assert recut_box(mask, box, 30, 1, dict(params, max_threshold=2)) == (box,)


def test_box_is_kept_when_no_run_survives(params):
    bitmap = blank_line()
    ink(bitmap, (20, 21), (10, 70))   # a flat one-pixel stroke
    pieces = recut_box(bitmap != 255, Box(10, 70), 30, 1, params)
    assert [(b.start, b.end) for b in pieces] == [(10, 70)]


def test_recut_splits_wide_boxes_and_refreshes_scale(params):
    bitmap = _bridged_pair(blank_line())
    ink(bitmap, (5, 35), (100, 130))
    seg = cut(bitmap, params)
    assert [(b.start, b.end) for b in seg.boxes] == [(10, 75), (100, 130)]
    assert (seg.mean_height, seg.mean_width) == (29, 47)

    out = recut(seg, params)
    assert [(b.start, b.end) for b in out.boxes] == [(10, 40), (45, 75), (100, 130)]
    assert [(b.top, b.bottom) for b in out.boxes] == [(5, 34)] * 3
    assert (out.mean_height, out.mean_width) == (29, 30)
    check_invariants(out)
    # the input snapshot is untouched
    assert len(seg.boxes) == 2


def test_narrow_boxes_pass_through(two_blocks, params):
    seg = cut(two_blocks, params)
    assert recut(seg, params).boxes == seg.boxes
