"""转码引擎模块。

单个任务的处理流水线：解码 → 缩放 → 准备输出目录 → 编码并原子写入。
任何一步失败都会抛出带描述信息的 TranscodeError，不做重试。
"""

from dataclasses import dataclass
from pathlib import Path

from humanize import naturalsize
from PIL import Image, ImageOps

from ..config import get_config
from ..exceptions import (
    ConfigError,
    DecodeError,
    EncodeError,
    TranscodeIOError,
    handle_stage_errors,
)
from ..models.constants import has_alpha_channel
from ..models.transcode_job import TranscodeJob
from ..utils.file_helpers import atomic_write_bytes, ensure_parent_dir
from ..utils.logging_helpers import get_logger
from .formats import FormatEncoder


logger = get_logger()

# 16 位 PNG 等高位深整数模式，取值范围 0-65535
HIGH_BIT_DEPTH_MODES = ("I;16", "I;16B", "I;16L", "I;16N", "I")


@dataclass
class DecodedImage:
    """解码后的内存图像，像素格式为 8 位 RGB 或 RGBA"""

    image: Image.Image
    source_format: str | None = None

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def mode(self) -> str:
        return self.image.mode


def process_job(job: TranscodeJob, encoder: FormatEncoder | None = None) -> int:
    """处理单个转码任务。

    Args:
        job: 转码任务
        encoder: 格式编码器，默认新建

    Returns:
        int: 写入的字节数

    Raises:
        ConfigError: 目标尺寸不合法
        DecodeError: 源图片无法读取
        EncodeError: 缩放或编码失败
        TranscodeIOError: 建目录或写入失败
    """
    encoder = encoder or FormatEncoder()

    # 尺寸校验先于任何 I/O
    _ensure_valid_size(job.target_width, job.target_height, job.source_path)

    decoded = decode_image(job.source_path)
    resized = resize_image(decoded, *job.target_size)

    prepare_destination(job.destination_path)

    format_name = encoder.resolve_format(
        job.output_format, job.destination_path, decoded.source_format
    )
    data = encoder.encode(resized.image, format_name, job.quality)
    written = write_output(job.destination_path, data)

    logger.info(
        f"已保存 {job.destination_path} ({format_name}, "
        f"{job.target_width}x{job.target_height}, {naturalsize(written, binary=True)})"
    )
    return written


@handle_stage_errors("图像解码", DecodeError)
def decode_image(source_path: Path) -> DecodedImage:
    """读取源图片并统一为 8 位 RGB/RGBA

    Args:
        source_path: 源图片路径

    Returns:
        DecodedImage: 解码后的图像

    Raises:
        DecodeError: 路径不存在、不可读或无法解析
    """
    source_path = Path(source_path)
    if not source_path.is_file():
        raise DecodeError(f"源文件不存在或不是文件: {source_path}", source_path)

    with Image.open(source_path) as img:
        source_format = img.format
        # 强制完整解码，截断或损坏的数据在这里暴露
        img.load()

        if get_config().processing.APPLY_EXIF_ORIENTATION:
            img = ImageOps.exif_transpose(img)

        target_mode = "RGBA" if has_alpha_channel(img) else "RGB"
        # convert 总是返回新对象，关闭文件后仍可使用
        pixels = _to_8bit(img).convert(target_mode)

    logger.debug(
        f"已解码 {source_path}: {source_format} {pixels.mode} {pixels.width}x{pixels.height}"
    )
    return DecodedImage(image=pixels, source_format=source_format)


@handle_stage_errors("图像缩放", EncodeError)
def resize_image(decoded: DecodedImage, width: int, height: int) -> DecodedImage:
    """按目标尺寸非等比缩放，使用 Lanczos 重采样

    Raises:
        ConfigError: 宽或高不是正整数
        EncodeError: 重采样失败，如目标尺寸过大导致内存不足
    """
    _ensure_valid_size(width, height)

    if decoded.image.size == (width, height):
        return decoded

    resized = decoded.image.resize((width, height), Image.Resampling.LANCZOS)
    return DecodedImage(image=resized, source_format=decoded.source_format)


@handle_stage_errors("创建输出目录", TranscodeIOError)
def prepare_destination(destination_path: Path) -> Path:
    """确保输出路径的父目录存在"""
    return ensure_parent_dir(destination_path)


@handle_stage_errors("写入文件", TranscodeIOError)
def write_output(destination_path: Path, data: bytes) -> int:
    """原子写入编码结果，完整替换已有文件"""
    return atomic_write_bytes(
        destination_path, data, get_config().processing.TEMP_FILE_SUFFIX
    )


def _ensure_valid_size(width: int, height: int, path: Path | None = None) -> None:
    if width <= 0 or height <= 0:
        raise ConfigError(f"目标尺寸必须为正整数，当前值: {width}x{height}", path)


def _to_8bit(img: Image.Image) -> Image.Image:
    """把高位深灰度图按比例缩到 8 位

    直接 convert("RGB") 会把超过 255 的值截断成白色。
    """
    if img.mode not in HIGH_BIT_DEPTH_MODES:
        return img
    return img.convert("I").point(lambda v: v * (1 / 256)).convert("L")
