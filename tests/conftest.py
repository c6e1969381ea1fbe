import numpy as np
import pytest

from hanzicut import config


def blank_line(rows=40, cols=200):
    return np.full((rows, cols), 255, dtype=np.uint8)


def ink(bitmap, rows, cols):
    """Paint ink over bitmap[rows[0]:rows[1], cols[0]:cols[1]]."""
    bitmap[rows[0]:rows[1], cols[0]:cols[1]] = 0
    return bitmap


@pytest.fixture
def params():
    return config.segment_params()


@pytest.fixture
def two_blocks():
    """Two separated 20x20 ink blocks at columns [5, 25) and [40, 60)."""
    bitmap = blank_line(rows=30, cols=80)
    ink(bitmap, (5, 25), (5, 25))
    ink(bitmap, (5, 25), (40, 60))
    return bitmap


@pytest.fixture
def reference_glyphs():
    """A line holding two full-size glyphs near the right edge (mean height 29)."""
    bitmap = blank_line()
    ink(bitmap, (5, 35), (120, 150))
    ink(bitmap, (5, 35), (160, 190))
    return bitmap
