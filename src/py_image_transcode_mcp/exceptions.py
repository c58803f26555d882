"""图像转码异常处理模块。

定义统一的异常类和错误处理机制，包含按处理阶段转换异常的装饰器。
"""

from collections.abc import Callable
from functools import wraps
from pathlib import Path
from typing import TypeVar

from PIL.Image import DecompressionBombError, UnidentifiedImageError

from .models.transcode_result import ErrorResponse
from .utils.logging_helpers import get_logger
from .utils.message_formatter import MessageFormatter


logger = get_logger()
T = TypeVar("T")


# 统一的异常类型
class TranscodeError(Exception):
    """转码相关错误基类"""

    error_type = "processing"

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.message = message
        self.path = path


class ConfigError(TranscodeError):
    """任务配置错误 - 尺寸、格式、质量或路径不合法"""

    error_type = "config"


class DecodeError(TranscodeError):
    """源图片无法读取或解析"""

    error_type = "decode"


class EncodeError(TranscodeError):
    """缩放或编码器序列化失败"""

    error_type = "encode"


class TranscodeIOError(TranscodeError):
    """文件系统读写或建目录失败"""

    error_type = "io"


class BatchAbortedError(TranscodeError):
    """批量任务因某一项失败而中止

    Attributes:
        job_index: 失败任务的序号（从 1 开始）
        saved_count: 失败前已写入的任务数
        cause: 导致中止的原始异常
    """

    def __init__(
        self,
        message: str,
        job_index: int,
        saved_count: int,
        cause: TranscodeError,
    ):
        super().__init__(message, cause.path)
        self.job_index = job_index
        self.saved_count = saved_count
        self.cause = cause
        self.error_type = cause.error_type


# 按阶段的异常转换装饰器
def handle_stage_errors(stage_name: str, error_cls: type[TranscodeError]):
    """把某个处理阶段抛出的底层异常统一转换为该阶段的错误类型

    已经是 TranscodeError 的异常原样抛出。第一个位置参数若是路径，
    会被记录到异常的 path 属性上。

    Args:
        stage_name: 阶段名称，用于日志和错误消息
        error_cls: 该阶段对应的错误类型
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            path = next((a for a in args if isinstance(a, Path)), None)
            try:
                return func(*args, **kwargs)
            except TranscodeError:
                raise
            except FileNotFoundError as e:
                logger.warning(f"{stage_name} - 文件不存在: {e}")
                raise error_cls(
                    MessageFormatter.file_not_found(e.filename or path), path
                ) from e
            except PermissionError as e:
                logger.error(f"{stage_name} - 权限错误: {e}")
                raise error_cls(
                    MessageFormatter.permission_error(e.filename or path, stage_name),
                    path,
                ) from e
            except UnidentifiedImageError as e:
                logger.error(f"{stage_name} - 无法识别图像格式: {e}")
                raise error_cls(f"不支持的图像格式: {e}", path) from e
            except DecompressionBombError as e:
                logger.error(f"{stage_name} - 图像过大: {e}")
                raise error_cls(f"图像文件过大，可能存在安全风险: {e}", path) from e
            except (OSError, ValueError, KeyError, TypeError, MemoryError) as e:
                logger.error(f"{stage_name} - 处理失败: {e}")
                raise error_cls(
                    MessageFormatter.format_error(stage_name, path or "-", e), path
                ) from e

        return wrapper

    return decorator


class ErrorHandler:
    """统一错误处理器

    提供标准化的错误日志和边界层错误响应。
    """

    @staticmethod
    def _log_error(
        operation: str, path: Path | str, error: Exception, level: str = "error"
    ) -> None:
        """标准化的错误日志记录

        Args:
            operation: 操作名称（如"批量转码"、"文件读取"等）
            path: 相关文件路径
            error: 异常对象
            level: 日志级别 ("error", "warning", "debug")
        """
        log_msg = MessageFormatter.format_error(operation, path, error)
        getattr(logger, level, logger.error)(log_msg)

    @staticmethod
    def describe(error: Exception) -> str:
        """生成返回给调用方的可读错误消息"""
        match error:
            case TranscodeError() as te:
                return te.message
            case FileNotFoundError() as fnfe:
                return MessageFormatter.file_not_found(fnfe.filename or fnfe)
            case _:
                return str(error) or error.__class__.__name__

    @staticmethod
    def error_type(error: Exception) -> str:
        """把异常映射为边界层的错误类别"""
        match error:
            case TranscodeError() as te:
                return te.error_type
            case OSError():
                return "io"
            case ValueError() | TypeError():
                return "config"
            case _:
                return "processing"

    @staticmethod
    def to_response(
        error: Exception, operation: str = "批量转码", path: Path | str = "-"
    ) -> ErrorResponse:
        """记录日志并构建标准化的错误响应"""
        level = "warning" if isinstance(error, ConfigError) else "error"
        ErrorHandler._log_error(operation, path, error, level)
        return {
            "success": False,
            "error": ErrorHandler.describe(error),
            "error_type": ErrorHandler.error_type(error),
        }
