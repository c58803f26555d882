"""核心模块包。

单任务转码流水线、格式编码器和图片信息读取。
"""

from .formats import FormatEncoder, get_save_parameters
from .image_info import ImageInfoExtractor, probe_image
from .transcode_engine import (
    DecodedImage,
    decode_image,
    process_job,
    resize_image,
)


__all__ = [
    "DecodedImage",
    "FormatEncoder",
    "ImageInfoExtractor",
    "decode_image",
    "get_save_parameters",
    "probe_image",
    "process_job",
    "resize_image",
]
