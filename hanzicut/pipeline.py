#!/usr/bin/env python3
"""
单行汉字分割管线：切分 (cut) -> 重切分 (recut) -> 合并 (merge) -> 类型标注

输入为行检测/二值化阶段产出的单行图，可以是一张图或一个目录（按文件名
自然排序，顺序即行号）。每行输出：
  - <output>/cut|recut|merge/<行号>.png   各阶段调试图
  - <output>/results/<行号>/<n>.png        单字图（可选）
  - <output>/region.txt                    给识别器读取的行记录

用法示例:
   python -m hanzicut.pipeline lines/ --output out --crops
   hanzicut line_0.png --no-overlays --binarize otsu
"""
from __future__ import annotations
import os
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import click
import numpy as np

from . import config
from .segmentation import (
    LineSegmentation,
    check_invariants,
    cut,
    recut,
    merge,
    classify,
    load_line_bitmap,
    save_stage_overlay,
    save_glyph_crops,
    append_line_record,
    reset_record_file,
)
from .utils.path import ensure_dir, is_image, list_line_images

logger = logging.getLogger(__name__)

STAGES = ('cut', 'recut', 'merge')


@dataclass(frozen=True)
class LineResult:
    cut: LineSegmentation
    recut: LineSegmentation
    merge: LineSegmentation
    final: LineSegmentation

    def stage(self, name: str) -> LineSegmentation:
        return getattr(self, name)


def segment_line(bitmap: np.ndarray, params: Dict[str, Any] | None = None,
                 validate: bool = False) -> LineResult:
    """
    对单行图执行完整分割

    :param bitmap: 单行二值图（墨迹低值，背景 255）
    :param params: 引擎参数，默认取 config.segment_params()
    :param validate: 每阶段后检查不变量
    :return: 各阶段快照与最终结果
    """
    if params is None:
        params = config.segment_params()
    cut_seg = cut(bitmap, params)
    recut_seg = recut(cut_seg, params)
    merge_seg = merge(recut_seg, params)
    final = classify(merge_seg, params)
    if validate:
        for seg in (cut_seg, recut_seg, merge_seg, final):
            check_invariants(seg)
    return LineResult(cut=cut_seg, recut=recut_seg, merge=merge_seg, final=final)


def _segment_path(path: str, params: Dict[str, Any], output_cfg: Dict[str, Any],
                  validate: bool) -> Optional[LineResult]:
    try:
        bitmap = load_line_bitmap(path, binarize=output_cfg.get('binarize'),
                                  adaptive_block=int(output_cfg.get('adaptive_block', 31)),
                                  adaptive_C=int(output_cfg.get('adaptive_C', 3)))
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"跳过 {path}: {e}")
        return None
    return segment_line(bitmap, params, validate=validate)


def write_line_outputs(result: LineResult, line_index: int, output_dir: str,
                       params: Dict[str, Any], output_cfg: Dict[str, Any],
                       record_path: str) -> Dict[str, Any]:
    info: Dict[str, Any] = {'line': line_index, 'boxes': len(result.final)}
    if output_cfg.get('overlays', True):
        info['overlays'] = [save_stage_overlay(result.stage(name), line_index, os.path.join(output_dir, name))
                            for name in STAGES]
    if output_cfg.get('crops', False):
        crops_dir = os.path.join(output_dir, output_cfg.get('crops_dirname', 'results'))
        info['crops'] = save_glyph_crops(result.final, line_index, crops_dir, params,
                                         padding=int(output_cfg.get('crop_padding', 7)))
    append_line_record(record_path, line_index, result.final)
    return info


def process_lines(paths: List[str], output_dir: str,
                  params: Dict[str, Any] | None = None,
                  output_cfg: Dict[str, Any] | None = None,
                  workers: int = 1, validate: bool = False) -> Dict[str, Any]:
    """
    批量处理行图。各行互不依赖，可并行分割；输出由调用线程按行号顺序写出。

    :param paths: 行图路径，下标即行号
    :param output_dir: 输出根目录
    :param workers: 并行分割的线程数
    :return: 处理摘要
    """
    if params is None:
        params = config.segment_params()
    if output_cfg is None:
        output_cfg = dict(config.OUTPUT_CONFIG)
    ensure_dir(output_dir)
    record_path = os.path.join(output_dir, config.RECORD_FILENAME)
    reset_record_file(record_path)

    summary: Dict[str, Any] = {'inputs': len(paths), 'record': record_path, 'lines': [], 'skipped': []}

    def _task(path: str) -> Optional[LineResult]:
        return _segment_path(path, params, output_cfg, validate)

    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            results = list(executor.map(_task, paths))
    else:
        results = [_task(p) for p in paths]

    for line_index, (path, result) in enumerate(zip(paths, results)):
        if result is None:
            summary['skipped'].append(path)
            continue
        info = write_line_outputs(result, line_index, output_dir, params, output_cfg, record_path)
        info['image'] = path
        summary['lines'].append(info)
        logger.info(f"第 {line_index} 行: {info['boxes']} 个字块 ({os.path.basename(path)})")

    logger.info(f"处理完成: {len(summary['lines'])}/{len(paths)} 行, 记录文件 {record_path}")
    return summary


@click.command()
@click.argument("input_path", type=click.Path(exists=True))
@click.option("--output", "-o", "output_dir", default=None, help="输出目录，默认 config.RESULTS_DIR")
@click.option("--overlays/--no-overlays", default=bool(config.OUTPUT_CONFIG.get("overlays", True)), help="是否输出每阶段调试图")
@click.option("--crops/--no-crops", default=bool(config.OUTPUT_CONFIG.get("crops", False)), help="是否输出单字图")
@click.option("--binarize", type=click.Choice(['otsu', 'adaptive']), default=None,
              help="读入灰度图时先做二值化")
@click.option("--workers", "-j", type=int, default=None, help="并行分割的行数")
@click.option("--validate", is_flag=True, default=False, help="每阶段后检查不变量")
@click.option("--verbose", "-v", is_flag=True, default=False)
def main(input_path, output_dir, overlays, crops, binarize, workers, validate, verbose):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO,
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    try:
        config.validate_config()
    except ValueError as e:
        raise click.ClickException(f"配置错误: {e}")

    if os.path.isdir(input_path):
        paths = list_line_images(input_path)
    elif is_image(input_path):
        paths = [input_path]
    else:
        raise click.ClickException('输入既不是图片也不是目录')
    if not paths:
        raise click.ClickException(f'在目录 {input_path} 中未找到图像文件')

    output_cfg = dict(config.OUTPUT_CONFIG, overlays=overlays, crops=crops)
    if binarize is not None:
        output_cfg['binarize'] = binarize

    summary = process_lines(
        paths,
        output_dir or config.RESULTS_DIR,
        output_cfg=output_cfg,
        workers=workers or int(config.PIPELINE_CONFIG.get('workers', 1)),
        validate=validate or bool(config.PIPELINE_CONFIG.get('validate_stages', False)),
    )
    click.echo(f"{len(summary['lines'])} 行已分割, 记录文件: {summary['record']}")


if __name__ == "__main__":
    main()
