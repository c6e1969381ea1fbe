"""
单行汉字分割模块
提供投影切分、粘连重切分、偏旁合并、类型标注及输出功能
"""

from .types import (
    Box,
    BoxType,
    LineSegmentation,
    SegmentationInvariantError,
    check_invariants,
    ink_mask
)
from .projection import column_profile, find_runs, cut_columns, cut
from .heights import resolve_box_height, resolve_heights
from .stats import is_reference_sample, estimate_line_scale, refresh
from .recut import recut_box, recut
from .merger import merge_decision, merge
from .classify import (
    is_ideograph_shape,
    is_similar_shape,
    propagate_ideographs,
    label_residual,
    classify
)
from .io import load_line_bitmap, binarize_line
from .visualization import draw_boxes, save_stage_overlay
from .crops import crop_glyph, save_glyph_crops
from .record import (
    RecordFormatError,
    RecordRow,
    format_line_record,
    append_line_record,
    reset_record_file,
    parse_line_records,
    read_line_records
)

__all__ = [
    # 数据模型
    'Box',
    'BoxType',
    'LineSegmentation',
    'SegmentationInvariantError',
    'check_invariants',
    'ink_mask',

    # 各阶段
    'column_profile',
    'find_runs',
    'cut_columns',
    'cut',
    'resolve_box_height',
    'resolve_heights',
    'is_reference_sample',
    'estimate_line_scale',
    'refresh',
    'recut_box',
    'recut',
    'merge_decision',
    'merge',

    # 形状判定
    'is_ideograph_shape',
    'is_similar_shape',
    'propagate_ideographs',
    'label_residual',
    'classify',

    # 输入输出
    'load_line_bitmap',
    'binarize_line',
    'draw_boxes',
    'save_stage_overlay',
    'crop_glyph',
    'save_glyph_crops',
    'RecordFormatError',
    'RecordRow',
    'format_line_record',
    'append_line_record',
    'reset_record_file',
    'parse_line_records',
    'read_line_records'
]
