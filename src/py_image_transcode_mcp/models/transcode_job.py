"""转码任务模型。

定义单个图片转码任务的参数和输出格式枚举。
"""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..config import get_config
from .constants import QualityDefaults, ValidationLimits


class OutputFormat(str, Enum):
    """输出格式枚举"""

    KEEP_ORIGINAL = "keep_original"
    PNG = "png"
    JPEG = "jpeg"
    WEBP = "webp"

    @classmethod
    def parse(cls, value: "str | OutputFormat") -> "OutputFormat":
        """解析格式标签，大小写不敏感，兼容 keeporiginal 与 jpg 写法

        Raises:
            ValueError: 未知的格式标签
        """
        if isinstance(value, OutputFormat):
            return value

        tag = str(value).strip().lower().replace("-", "_")
        tag = _FORMAT_ALIASES.get(tag, tag)
        try:
            return cls(tag)
        except ValueError:
            available = ", ".join(f.value for f in cls)
            raise ValueError(f"不支持的输出格式: {value}，可用格式: {available}") from None

    @property
    def pillow_format(self) -> str | None:
        """对应的 Pillow 格式名，保持原格式时为 None"""
        return _PILLOW_FORMATS.get(self)


_FORMAT_ALIASES = {
    "keeporiginal": "keep_original",
    "original": "keep_original",
    "jpg": "jpeg",
}

_PILLOW_FORMATS = {
    OutputFormat.PNG: "PNG",
    OutputFormat.JPEG: "JPEG",
    OutputFormat.WEBP: "WEBP",
}


def _default_quality() -> int:
    return get_config().transcode.DEFAULT_QUALITY


class TranscodeJob(BaseModel):
    """单个转码任务，构建后不可变"""

    model_config = ConfigDict(frozen=True)

    source_path: Path = Field(description="源图片路径")
    destination_path: Path = Field(description="输出文件的绝对路径（含文件名）")
    target_width: int = Field(
        gt=0, le=ValidationLimits.MAX_DIMENSION, description="目标宽度"
    )
    target_height: int = Field(
        gt=0, le=ValidationLimits.MAX_DIMENSION, description="目标高度"
    )
    output_format: OutputFormat = Field(
        OutputFormat.KEEP_ORIGINAL, description="输出格式"
    )
    quality: int = Field(
        default_factory=_default_quality,
        ge=QualityDefaults.MIN_QUALITY,
        le=QualityDefaults.MAX_QUALITY,
        description="质量值 1-100",
    )

    @field_validator("source_path")
    @classmethod
    def validate_source_path(cls, v: Path) -> Path:
        if not str(v).strip() or str(v) == ".":
            raise ValueError("源路径不能为空")
        return v

    @field_validator("destination_path")
    @classmethod
    def validate_destination_path(cls, v: Path) -> Path:
        if not v.is_absolute():
            raise ValueError(f"输出路径必须是绝对路径: {v}")
        if not v.name:
            raise ValueError(f"输出路径缺少文件名: {v}")
        return v

    @field_validator("output_format", mode="before")
    @classmethod
    def validate_output_format(cls, v: object) -> OutputFormat:
        if not isinstance(v, str | OutputFormat):
            raise ValueError(f"输出格式必须是字符串，得到: {v!r}")
        return OutputFormat.parse(v)

    @property
    def target_size(self) -> tuple[int, int]:
        """目标尺寸 (宽, 高)"""
        return self.target_width, self.target_height
