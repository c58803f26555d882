"""文件命名工具模块。

提供统一的输出文件命名策略。
"""

from functools import lru_cache
from pathlib import Path

from ..config import get_config
from ..models.constants import get_extension
from ..models.transcode_job import OutputFormat


class FileNamingStrategy:
    """文件命名策略类"""

    @staticmethod
    def generate_output_name(
        source_path: Path,
        width: int,
        height: int,
        output_format: OutputFormat | str = OutputFormat.KEEP_ORIGINAL,
    ) -> str:
        """生成输出文件名

        Args:
            source_path: 源文件路径
            width: 目标宽度
            height: 目标高度
            output_format: 输出格式

        Returns:
            str: 生成的文件名（不含路径），如 photo_resized_800x600.webp
        """
        pattern = get_config().processing.OUTPUT_PATTERN
        ext = FileNamingStrategy._get_extension(
            source_path.suffix, OutputFormat.parse(output_format)
        )
        return pattern.format(
            stem=source_path.stem or "image", width=width, height=height, ext=ext
        )

    @staticmethod
    @lru_cache(maxsize=128)
    def _get_extension(source_suffix: str, output_format: OutputFormat) -> str:
        """获取文件扩展名

        保持原格式时沿用源文件扩展名，源文件没有扩展名时使用 .png。
        """
        if output_format.pillow_format:
            return get_extension(output_format.pillow_format)
        return source_suffix or ".png"


class PathResolver:
    """路径解析器"""

    @staticmethod
    def default_destination(
        source_path: str | Path,
        target_dir: str | Path,
        width: int,
        height: int,
        output_format: OutputFormat | str = OutputFormat.KEEP_ORIGINAL,
    ) -> Path:
        """生成默认输出路径: target_dir / {stem}_resized_{W}x{H}.{ext}

        Args:
            source_path: 源文件路径
            target_dir: 输出目录
            width: 目标宽度
            height: 目标高度
            output_format: 输出格式

        Returns:
            Path: 解析后的输出路径
        """
        filename = FileNamingStrategy.generate_output_name(
            Path(source_path), width, height, output_format
        )
        return Path(target_dir) / filename
