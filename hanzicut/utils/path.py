import os
import re

IMG_EXT = {'.jpg', '.jpeg', '.png', '.bmp', '.tiff', '.tif'}


def ensure_dir(path):
    """确保目录存在，如果不存在则创建"""
    os.makedirs(path, exist_ok=True)
    return path


def is_image(path):
    return os.path.isfile(path) and os.path.splitext(path.lower())[1] in IMG_EXT


def _natural_key(path):
    name = os.path.basename(path)
    return [int(part) if part.isdigit() else part.lower() for part in re.split(r'(\d+)', name)]


def list_line_images(folder):
    """列出目录下所有行图片，按文件名自然排序（2.png 在 10.png 之前，顺序即行号）"""
    files = [os.path.join(folder, name) for name in os.listdir(folder)
             if is_image(os.path.join(folder, name))]
    files.sort(key=_natural_key)
    return files
