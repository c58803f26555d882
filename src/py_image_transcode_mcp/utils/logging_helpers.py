"""日志工具模块。

提供统一的日志记录功能，标准化日志格式和配置。
"""

import inspect
import logging
from logging.handlers import RotatingFileHandler


PACKAGE_LOGGER_NAME = "py_image_transcode_mcp"


def get_logger(name: str | None = None) -> logging.Logger:
    """获取标准化配置的日志记录器。

    Args:
        name: 日志记录器名称，默认使用调用模块的 __name__

    Returns:
        logging.Logger: 配置好的日志记录器
    """
    if name is None:
        # 获取调用者的模块名
        frame = inspect.currentframe()
        if frame and frame.f_back:
            name = frame.f_back.f_globals.get("__name__", "unknown")
        else:
            name = "unknown"

    return logging.getLogger(name)


def configure_logging(level: str | None = None) -> logging.Logger:
    """按全局配置初始化包日志。

    重复调用不会叠加处理器。

    Args:
        level: 覆盖配置中的日志级别

    Returns:
        logging.Logger: 包根日志记录器
    """
    from ..config import get_config

    log_config = get_config().logging
    package_logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    package_logger.setLevel((level or log_config.LOG_LEVEL).upper())

    if not package_logger.handlers:
        formatter = logging.Formatter(log_config.LOG_FORMAT)

        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        package_logger.addHandler(stream_handler)

        if log_config.ENABLE_FILE_LOGGING:
            file_handler = RotatingFileHandler(
                log_config.LOG_FILE_PATH,
                maxBytes=log_config.LOG_FILE_MAX_SIZE,
                backupCount=log_config.LOG_FILE_BACKUP_COUNT,
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)

    return package_logger
