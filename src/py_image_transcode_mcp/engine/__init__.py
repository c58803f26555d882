"""图像转码处理引擎模块。

包含批量处理和任务构建等核心处理逻辑。
"""

from .batch import BatchProcessor
from .config import JobBuilder


__all__ = [
    "BatchProcessor",
    "JobBuilder",
]
