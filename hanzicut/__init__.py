"""hanzicut: 单行中文文本的字块切分"""

__version__ = "0.1.0"
