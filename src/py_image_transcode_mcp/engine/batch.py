"""批量处理器模块。

按顺序逐个执行转码任务，第一个失败的任务会中止整个批次。
"""

from collections.abc import Sequence

from ..core.formats import FormatEncoder
from ..core.transcode_engine import process_job
from ..exceptions import BatchAbortedError, TranscodeError
from ..models.transcode_job import TranscodeJob
from ..models.transcode_result import BatchResult
from ..utils.logging_helpers import get_logger
from ..utils.message_formatter import MessageFormatter


logger = get_logger()


class BatchProcessor:
    """批量图像处理器

    单线程顺序执行，不做重试，也不回滚已写入的文件。
    """

    def __init__(self, encoder: FormatEncoder | None = None):
        """初始化批量处理器

        Args:
            encoder: 格式编码器实例
        """
        self.encoder = encoder or FormatEncoder()

    def run(self, jobs: Sequence[TranscodeJob]) -> BatchResult:
        """执行一批转码任务

        Args:
            jobs: 按顺序执行的任务列表

        Returns:
            BatchResult: 全部成功时的结果，saved_count 等于任务数

        Raises:
            BatchAbortedError: 某个任务失败，携带失败序号和已保存数量
        """
        total = len(jobs)
        saved_count = 0
        total_bytes = 0

        logger.info(f"开始批量转码，共 {total} 项")

        for index, job in enumerate(jobs, start=1):
            try:
                total_bytes += process_job(job, self.encoder)
            except TranscodeError as e:
                message = MessageFormatter.job_failed(
                    index, job.source_path, job.destination_path, e.message
                )
                logger.error(f"{message}，已保存 {saved_count}/{total} 项，批次中止")
                raise BatchAbortedError(
                    message, job_index=index, saved_count=saved_count, cause=e
                ) from e

            saved_count += 1
            logger.debug(f"进度 {saved_count}/{total}")

        result = BatchResult(success=True, saved_count=saved_count)
        logger.info(
            f"批量转码完成: {result.get_summary()}，"
            f"共写入 {BatchResult.format_size(total_bytes)}"
        )
        return result
