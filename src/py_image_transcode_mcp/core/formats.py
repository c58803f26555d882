"""格式编码器模块。

把缩放后的像素数据按目标格式序列化为字节，各格式有各自的质量语义：

- WEBP: 质量 100 走无损模式，1-99 走有损模式
- JPEG: 质量直接作用于编码器
- PNG: 无损格式，忽略质量
- 保持原格式: 由输出路径扩展名决定容器，再套用上面对应格式的参数
"""

import logging
from io import BytesIO
from pathlib import Path
from typing import Any

from PIL import Image

from ..config import get_config
from ..exceptions import EncodeError, handle_stage_errors
from ..models.constants import ImageFormats, has_alpha_channel
from ..models.transcode_job import OutputFormat


logger = logging.getLogger(__name__)


class FormatEncoder:
    """格式编码器 - 按输出格式选择编码策略"""

    def __init__(self) -> None:
        """初始化格式编码器"""
        self.transcode_config = get_config().transcode

    def resolve_format(
        self,
        output_format: OutputFormat,
        destination: Path,
        source_format: str | None = None,
    ) -> str:
        """确定实际写入的容器格式

        显式格式标签优先；扩展名与标签不一致时只记录警告。保持原格式时
        使用输出路径扩展名对应的格式，扩展名未注册则回退到源图片格式。

        Args:
            output_format: 任务的输出格式
            destination: 输出路径
            source_format: 解码时识别出的源格式

        Returns:
            str: Pillow 格式名，如 "PNG"
        """
        ext_format = ImageFormats.format_for_extension(destination.suffix)

        if output_format.pillow_format:
            if ext_format and ext_format != output_format.pillow_format:
                logger.warning(
                    f"输出路径扩展名 {destination.suffix} 与格式 "
                    f"{output_format.value} 不一致，按 {output_format.pillow_format} 编码"
                )
            return output_format.pillow_format

        if ext_format:
            return ext_format

        fallback = (source_format or "PNG").upper()
        logger.debug(f"扩展名 {destination.suffix!r} 未注册，沿用源格式 {fallback}")
        return fallback

    @handle_stage_errors("图像编码", EncodeError)
    def encode(self, img: Image.Image, format_name: str, quality: int) -> bytes:
        """把图片编码为目标格式的字节

        Args:
            img: 已缩放的图片
            format_name: Pillow 格式名
            quality: 质量值 1-100

        Returns:
            bytes: 编码后的数据

        Raises:
            EncodeError: 编码失败
        """
        prepared = self.prepare_for_format(img, format_name)
        params = get_save_parameters(format_name, quality)

        buffer = BytesIO()
        prepared.save(buffer, format=format_name, **params)
        data = buffer.getvalue()

        if not data:
            raise EncodeError(f"{format_name} 编码结果为空")

        logger.debug(f"{format_name} 编码完成: {len(data)} bytes, 参数 {params}")
        return data

    def prepare_for_format(self, img: Image.Image, format_name: str) -> Image.Image:
        """为目标格式准备图片

        Args:
            img: PIL图片对象
            format_name: 目标格式

        Returns:
            Image.Image: 处理后的图片对象
        """
        match format_name:
            case "JPEG":
                return self._prepare_for_jpeg(img)
            case "PNG":
                return self._prepare_for_png(img)
            case "WEBP":
                return self._prepare_for_webp(img)
            case _:
                return img

    def _prepare_for_jpeg(self, img: Image.Image) -> Image.Image:
        """JPEG不支持透明度，把透明通道合成到背景色上"""
        if has_alpha_channel(img):
            rgba = img.convert("RGBA")
            background = Image.new(
                "RGB", rgba.size, self.transcode_config.JPEG_BACKGROUND
            )
            background.paste(rgba, mask=rgba.getchannel("A"))
            return background

        if img.mode != "RGB":
            return img.convert("RGB")

        return img

    def _prepare_for_png(self, img: Image.Image) -> Image.Image:
        """PNG支持RGB和RGBA，其他模式统一到这两种"""
        if img.mode in ("RGB", "RGBA"):
            return img
        return img.convert("RGBA" if has_alpha_channel(img) else "RGB")

    def _prepare_for_webp(self, img: Image.Image) -> Image.Image:
        """WebP统一转换为8位RGBA"""
        if img.mode != "RGBA":
            return img.convert("RGBA")
        return img


def get_save_parameters(format_name: str, quality: int) -> dict[str, Any]:
    """获取保存参数

    Returns:
        dict: 保存参数字典，不包含 format，由调用方处理
    """
    params: dict[str, Any] = {}

    match format_name:
        case "JPEG":
            params.update(get_jpeg_params(quality))
        case "PNG":
            params.update(get_png_params(quality))
        case "WEBP":
            params.update(get_webp_params(quality))

    return params


def get_jpeg_params(quality: int) -> dict[str, Any]:
    """获取JPEG压缩参数

    - quality: 直接使用任务指定的质量值
    - optimize: 额外处理以找到最优编码设置
    - subsampling: 高质量使用 4:2:2，其余使用 4:2:0
    """
    transcode_config = get_config().transcode
    jpeg_quality = max(1, min(100, quality))

    params = dict(transcode_config.get_format_defaults("JPEG"))
    params["quality"] = jpeg_quality

    if jpeg_quality >= transcode_config.JPEG_HIGH_QUALITY_THRESHOLD:
        params["subsampling"] = 1  # "4:2:2"
    else:
        params["subsampling"] = 2  # "4:2:0"

    return params


def get_png_params(quality: int) -> dict[str, Any]:
    """获取PNG压缩参数

    PNG 是无损格式，质量值不参与编码。
    """
    logger.debug(f"PNG 为无损格式，忽略质量 {quality}")
    return dict(get_config().transcode.get_format_defaults("PNG"))


def get_webp_params(quality: int) -> dict[str, Any]:
    """获取WebP压缩参数

    - 质量 100: 无损模式，quality 表示压缩努力程度，exact 保留透明区域的 RGB 值
    - 质量 1-99: 有损模式，quality 控制图像质量
    - alpha_quality: 控制透明通道质量，100为无损
    """
    transcode_config = get_config().transcode

    if quality >= transcode_config.WEBP_LOSSLESS_QUALITY:
        return {
            "lossless": True,
            "quality": transcode_config.WEBP_LOSSLESS_EFFORT,
            "method": transcode_config.WEBP_METHOD,
            "exact": True,
        }

    # 有损 WebP
    webp_quality = max(1, min(99, quality))
    params = dict(transcode_config.get_format_defaults("WEBP"))
    params["quality"] = webp_quality
    params["lossless"] = False

    # 高质量时保持透明通道无损或接近无损
    if webp_quality >= 85:
        params["alpha_quality"] = 100
    elif webp_quality >= 70:
        params["alpha_quality"] = min(100, webp_quality + 10)
    else:
        params["alpha_quality"] = webp_quality

    return params
