"""Python 图像批量转码库。

基于 Pillow 的缩放与重新编码流水线，支持 PNG、JPEG、WebP 和保持原格式输出。
"""

__version__ = "0.1.0"
__author__ = "crper"
__description__ = "图像批量缩放转码库，基于 Pillow 11"

# 核心功能导出
from .core.image_info import probe_image
from .exceptions import (
    BatchAbortedError,
    ConfigError,
    DecodeError,
    EncodeError,
    TranscodeError,
    TranscodeIOError,
)
from .models import BatchResult, ImageMetadata, OutputFormat, TranscodeJob
from .transcoder import ImageTranscoder, save_images


__all__ = [
    "BatchAbortedError",
    "BatchResult",
    "ConfigError",
    "DecodeError",
    "EncodeError",
    "ImageMetadata",
    "ImageTranscoder",
    "OutputFormat",
    "TranscodeError",
    "TranscodeIOError",
    "TranscodeJob",
    "get_version",
    "probe_image",
    "save_images",
]


def get_version() -> str:
    """获取版本号。"""
    return __version__
