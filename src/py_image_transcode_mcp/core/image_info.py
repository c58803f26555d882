"""图片信息提取模块。

读取图片尺寸和文件大小，不解码像素数据。
"""

from pathlib import Path

from PIL import Image

from ..exceptions import DecodeError, handle_stage_errors
from ..models.image_metadata import ImageMetadata
from ..utils.logging_helpers import get_logger


logger = get_logger()


class ImageInfoExtractor:
    """图片信息提取器"""

    @handle_stage_errors("读取图片信息", DecodeError)
    def extract(self, file_path: Path) -> ImageMetadata:
        """提取图片元数据

        Args:
            file_path: 图片文件路径

        Returns:
            ImageMetadata: 宽、高和文件大小

        Raises:
            DecodeError: 文件不存在或无法识别
        """
        file_path = Path(file_path)
        if not file_path.is_file():
            raise DecodeError(f"文件不存在或不是文件: {file_path}", file_path)

        # Image.open 只解析文件头
        with Image.open(file_path) as img:
            width, height = img.size
            image_format = img.format

        metadata = ImageMetadata(
            file_path=file_path,
            width=width,
            height=height,
            size=file_path.stat().st_size,
            format=image_format,
        )
        logger.debug(
            f"图片信息 {file_path}: {width}x{height}, {metadata.get_file_size_human()}"
        )
        return metadata


def probe_image(file_path: str | Path) -> ImageMetadata:
    """便捷函数：读取单张图片的尺寸和大小"""
    return ImageInfoExtractor().extract(Path(file_path))
