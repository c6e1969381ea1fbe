from __future__ import annotations

"""Unified project configuration

按流水线阶段划分：
1. 路径 / 目录
2. 环境变量辅助
3. CUT (垂直投影切分)
4. STATS (行尺度估计)
5. RECUT (粘连重切分)
6. SHAPE / MERGE / CLASSIFY (形状判定、偏旁合并、类型标注)
7. OUTPUT (调试图 / 单字图 / 记录文件)
8. 校验与摘要工具
"""

import os
from typing import Dict, Any

# ==================== 1. 路径 / 目录 ====================
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


# ==================== 2. 环境变量辅助 ====================
def _env(name: str, default: str | None = None) -> str | None:
    return os.environ.get(name, default)

def _env_int(name: str, default: int) -> int:
    try:
        return int(os.environ.get(name, str(default)))
    except Exception:
        return default


RESULTS_DIR = _env('HANZICUT_RESULTS_DIR', os.path.join(PROJECT_ROOT, 'results'))
RECORD_FILENAME = 'region.txt'                 # 给识别器读取的行记录文件

# ==================== 3. CUT (垂直投影切分) ====================
PROJECTION_CONFIG = {
    'background_value': 255,    # 背景像素值，非此值即视为墨迹
    'min_run_width': 2,         # 宽度 <= 此值的列段视为噪点丢弃
}

# ==================== 4. STATS (行尺度估计) ====================
STATS_CONFIG = {
    'min_patch_width': 15,      # 标点/特殊符号宽度上限
    'min_patch_height': 15,     # 标点/特殊符号高度上限
    'bar_height_ratio': 0.9,    # 窄且高于行高此比例的视为 "|" 类竖线
    'narrow_width_ratio': 0.6,  # 宽度 <= 行高 * 此比例的不计入平均
    'fallback_margin': 4,       # 无有效样本时：行高/行宽减去此值
}

# ==================== 5. RECUT (粘连重切分) ====================
RECUT_CONFIG = {
    'trigger_ratio': 4 / 3,     # 宽度 > 平均高度 * 此值才重切分
    'target_ratio': 5 / 4,      # 子段宽度 > 平均高度 * 此值继续递归
    'start_threshold': 1,       # 初始连通像素阈值
    'max_threshold': 10,        # 阈值上限，达到后保留原块
    'min_run_width': 2,         # 子段宽度 <= 此值丢弃
}

# ==================== 6. SHAPE / MERGE / CLASSIFY ====================
SHAPE_CONFIG = {
    'min_aspect_ratio': 0.83,   # 汉字长宽比下限
    'min_width_ratio': 0.8,     # 宽度与平均高度之比下限
    'min_height_ratio': 0.8,    # 高度与平均高度之比下限
    'min_similarity': 0.8,      # 两块长宽相似度下限
    'similar_margin': 6,        # 两块上下边界允许的偏差（像素）
}

MERGE_CONFIG = {
    'min_margin': 6,            # 两块间距 >= 此值不合并
    'short_height_ratio': 0.9,  # 相似且矮于平均高度此比例时不合并（数字/字母）
    'punct_width': 15,          # 小标点宽度上限
    'punct_height': 15,         # 小标点高度上限
    'punct_gap_ratio': 1 / 3,   # 标点后间距 > 平均高度 * 此值视为独立标点
}

CLASSIFY_CONFIG = {
    'propagate_width_ratio': 0.8,        # 宽度比 > 此值即可借邻居判为汉字
    'propagate_height_ratio': 0.8,       # 或 高度比 > 此值
    'propagate_loose_width_ratio': 0.5,  # 且 宽度比 > 此值
    'label_residual': True,              # 是否为剩余块标注 标点/字母/噪点
    'noise_max_size': 4,                 # 长宽均 <= 此值视为噪点
    'small_punct_size': 15,              # 长宽均 <= 此值视为小标点
}

# ==================== 7. OUTPUT ====================
OUTPUT_CONFIG = {
    'overlays': True,           # 是否输出每阶段调试图 (cut / recut / merge)
    'crops': False,             # 是否输出单字图
    'crop_padding': 7,          # 单字图四周留白像素
    'crops_dirname': 'results', # 单字图目录名称
    'binarize': None,           # 读入时的二值化方式：None / 'otsu' / 'adaptive'
    'adaptive_block': 31,       # 自适应阈值块大小
    'adaptive_C': 3,            # 自适应阈值常数
}

PIPELINE_CONFIG = {
    'workers': _env_int('HANZICUT_WORKERS', 1),  # 并行切分的行数
    'validate_stages': False,                    # 每阶段后检查不变量
}

_ENGINE_CONFIGS = (
    PROJECTION_CONFIG, STATS_CONFIG, RECUT_CONFIG,
    SHAPE_CONFIG, MERGE_CONFIG, CLASSIFY_CONFIG,
)


def segment_params(overrides: Dict[str, Any] | None = None) -> Dict[str, Any]:
    """把各阶段配置合并为引擎使用的扁平参数字典。

    RECUT/PROJECTION 中同名的 ``min_run_width`` 取值一致，后者覆盖前者无影响。
    """
    params: Dict[str, Any] = {}
    for cfg in _ENGINE_CONFIGS:
        params.update(cfg)
    if overrides:
        params.update(overrides)
    return params


# ==================== 8. 校验与摘要工具 ====================
def validate_config() -> None:
    for key in ('min_aspect_ratio', 'min_width_ratio', 'min_height_ratio', 'min_similarity'):
        val = SHAPE_CONFIG.get(key, 0.8)
        if val <= 0 or val > 1:
            raise ValueError(f'SHAPE_CONFIG.{key} 必须在(0, 1]之间')

    for key in ('propagate_width_ratio', 'propagate_height_ratio', 'propagate_loose_width_ratio'):
        val = CLASSIFY_CONFIG.get(key, 0.8)
        if val < 0 or val > 1:
            raise ValueError(f'CLASSIFY_CONFIG.{key} 必须在0-1之间')

    start = int(RECUT_CONFIG.get('start_threshold', 1))
    cap = int(RECUT_CONFIG.get('max_threshold', 10))
    if start < 1 or cap < start:
        raise ValueError('RECUT_CONFIG 阈值需满足 1 <= start_threshold <= max_threshold')
    if RECUT_CONFIG.get('target_ratio', 1.25) <= 0 or RECUT_CONFIG.get('trigger_ratio', 1.33) <= 0:
        raise ValueError('RECUT_CONFIG 比例必须为正数')

    if OUTPUT_CONFIG.get('crop_padding', 0) < 0:
        raise ValueError('OUTPUT_CONFIG.crop_padding 不能为负数')
    if OUTPUT_CONFIG.get('binarize') not in (None, 'otsu', 'adaptive'):
        raise ValueError("OUTPUT_CONFIG.binarize 只能是 None / 'otsu' / 'adaptive'")
    if PIPELINE_CONFIG.get('workers', 1) < 1:
        raise ValueError('PIPELINE_CONFIG.workers 至少为 1')


def config_summary(compact: bool = True) -> Dict[str, Any]:
    summary = {
        'paths': {
            'PROJECT_ROOT': PROJECT_ROOT,
            'RESULTS_DIR': RESULTS_DIR,
            'RECORD_FILENAME': RECORD_FILENAME,
        },
        'segment': segment_params(),
        'output': OUTPUT_CONFIG,
        'pipeline': PIPELINE_CONFIG,
    }
    if compact:
        return summary
    return {
        'PROJECTION_CONFIG': PROJECTION_CONFIG,
        'STATS_CONFIG': STATS_CONFIG,
        'RECUT_CONFIG': RECUT_CONFIG,
        'SHAPE_CONFIG': SHAPE_CONFIG,
        'MERGE_CONFIG': MERGE_CONFIG,
        'CLASSIFY_CONFIG': CLASSIFY_CONFIG,
        'OUTPUT_CONFIG': OUTPUT_CONFIG,
        'PIPELINE_CONFIG': PIPELINE_CONFIG,
    }

__all__ = [
    'PROJECT_ROOT', 'RESULTS_DIR', 'RECORD_FILENAME',
    'PROJECTION_CONFIG', 'STATS_CONFIG', 'RECUT_CONFIG',
    'SHAPE_CONFIG', 'MERGE_CONFIG', 'CLASSIFY_CONFIG',
    'OUTPUT_CONFIG', 'PIPELINE_CONFIG',
    'segment_params', 'validate_config', 'config_summary'
]
