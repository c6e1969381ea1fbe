"""
行记录文件模块

每行追加一个文本块，供下游识别器读取：

    <行号>
    <start> <top> <end> <bottom> <typeCode>
    ...
    <空行>
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List
import logging

from .types import BoxType, LineSegmentation

logger = logging.getLogger(__name__)


class RecordFormatError(ValueError):
    """The record file does not follow the line-block layout."""


@dataclass(frozen=True)
class RecordRow:
    start: int
    top: int
    end: int
    bottom: int
    box_type: BoxType


def format_line_record(line_index: int, seg: LineSegmentation) -> str:
    lines = [str(line_index)]
    for box in seg.boxes:
        lines.append(f"{box.start} {box.top} {box.end} {box.bottom} {int(box.box_type)}")
    return "\n".join(lines) + "\n\n"


def reset_record_file(path: str) -> None:
    with open(path, 'w', encoding='utf-8'):
        pass


def append_line_record(path: str, line_index: int, seg: LineSegmentation) -> None:
    with open(path, 'a', encoding='utf-8') as f:
        f.write(format_line_record(line_index, seg))


def _parse_row(text: str, lineno: int) -> RecordRow:
    fields = text.split()
    if len(fields) != 5:
        raise RecordFormatError(f"第 {lineno} 行应有 5 个字段: {text!r}")
    try:
        start, top, end, bottom, code = (int(v) for v in fields)
        box_type = BoxType(code)
    except ValueError as e:
        raise RecordFormatError(f"第 {lineno} 行无法解析: {text!r} ({e})") from e
    return RecordRow(start, top, end, bottom, box_type)


def parse_line_records(text: str) -> Dict[int, List[RecordRow]]:
    """Parse a whole record file back into ``{line_index: rows}``."""
    records: Dict[int, List[RecordRow]] = {}
    current = None
    for lineno, raw in enumerate(text.splitlines(), 1):
        line = raw.strip()
        if not line:
            current = None
            continue
        if current is None:
            try:
                current = int(line)
            except ValueError as e:
                raise RecordFormatError(f"第 {lineno} 行应为行号: {line!r}") from e
            if current in records:
                logger.warning(f"行号 {current} 重复出现，后者覆盖前者")
            records[current] = []
            continue
        records[current].append(_parse_row(line, lineno))
    return records


def read_line_records(path: str) -> Dict[int, List[RecordRow]]:
    with open(path, 'r', encoding='utf-8') as f:
        return parse_line_records(f.read())
