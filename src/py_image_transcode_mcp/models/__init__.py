"""数据模型包。

定义图片转码相关的数据结构和模型。
"""

from .constants import (
    ImageFormats,
    QualityDefaults,
    ValidationLimits,
    get_extension,
    get_format_alias,
    has_alpha_channel,
)
from .image_metadata import ImageMetadata
from .transcode_job import OutputFormat, TranscodeJob
from .transcode_result import BatchResult, ErrorResponse


__all__ = [
    "BatchResult",
    "ErrorResponse",
    "ImageFormats",
    "ImageMetadata",
    "OutputFormat",
    "QualityDefaults",
    "TranscodeJob",
    "ValidationLimits",
    "get_extension",
    "get_format_alias",
    "has_alpha_channel",
]
