"""图像批量转码器接口。

基于转码引擎的简洁用户接口：构建任务、顺序执行、汇总结果。
"""

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from .core.formats import FormatEncoder
from .core.image_info import ImageInfoExtractor
from .engine.batch import BatchProcessor
from .engine.config import JobBuilder
from .models import BatchResult, ImageMetadata, OutputFormat, TranscodeJob
from .utils.file_helpers import destination_exists
from .utils.logging_helpers import get_logger
from .utils.naming_helpers import PathResolver


logger = get_logger()

JobDescriptor = Mapping[str, Any] | TranscodeJob


class ImageTranscoder:
    """图像批量转码器。

    把一组任务描述转换为缩放、重新编码后的图片文件。任务按顺序执行，
    第一个失败的任务会中止整批。
    """

    def __init__(self, target_dir: str | Path | None = None):
        """初始化转码器。

        Args:
            target_dir: 任务未给出 destination_path 时使用的输出目录
        """
        self.job_builder = JobBuilder(target_dir=target_dir)
        self.encoder = FormatEncoder()
        self.batch_processor = BatchProcessor(encoder=self.encoder)
        self.info_extractor = ImageInfoExtractor()

        logger.debug("初始化图像转码器")

    def save_images(self, images: Iterable[JobDescriptor]) -> BatchResult:
        """批量缩放并保存图片。

        整批任务先全部校验，任何一项配置无效时不会写入任何文件。

        Args:
            images: 任务描述列表，每项包含 source_path、destination_path、
                target_width、target_height、output_format、quality

        Returns:
            BatchResult: 全部成功时的结果

        Raises:
            ConfigError: 任务配置无效
            BatchAbortedError: 执行过程中某个任务失败

        Examples:
            >>> transcoder = ImageTranscoder()
            >>> result = transcoder.save_images([{
            ...     "source_path": "photo.jpg",
            ...     "destination_path": "/tmp/out/photo_800x600.webp",
            ...     "target_width": 800,
            ...     "target_height": 600,
            ...     "output_format": "webp",
            ...     "quality": 90,
            ... }])
            >>> print(result.saved_count)
        """
        jobs = self.job_builder.build_all(images)
        return self.batch_processor.run(jobs)

    def get_image_metadata(self, path: str | Path) -> ImageMetadata:
        """读取图片的宽、高和文件大小"""
        return self.info_extractor.extract(Path(path))

    @staticmethod
    def check_file_exists(path: str | Path) -> bool:
        """检查输出路径是否已存在"""
        return destination_exists(path)

    @staticmethod
    def default_destination(
        source_path: str | Path,
        target_dir: str | Path,
        width: int,
        height: int,
        output_format: OutputFormat | str = OutputFormat.KEEP_ORIGINAL,
    ) -> Path:
        """生成默认输出路径，如 photo_resized_800x600.webp"""
        return PathResolver.default_destination(
            source_path, target_dir, width, height, output_format
        )


# 便捷函数


def save_images(
    images: Iterable[JobDescriptor], target_dir: str | Path | None = None
) -> BatchResult:
    """便捷的批量转码函数

    Args:
        images: 任务描述列表
        target_dir: 默认输出目录

    Returns:
        BatchResult: 全部成功时的结果

    Raises:
        TranscodeError: 配置无效或任一任务失败
    """
    return ImageTranscoder(target_dir=target_dir).save_images(images)
