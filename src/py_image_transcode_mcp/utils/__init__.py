"""工具模块包。

提供纯工具函数，不包含业务逻辑。
"""

# 从文件助手模块导入
from .cleanup_helpers import TempFileManager
from .file_helpers import (
    atomic_write_bytes,
    destination_exists,
    ensure_parent_dir,
)

# 从日志工具模块导入
from .logging_helpers import configure_logging, get_logger

# 从消息格式化模块导入
from .message_formatter import MessageFormatter

# 从命名助手模块导入
from .naming_helpers import FileNamingStrategy, PathResolver


__all__ = [
    "FileNamingStrategy",
    "MessageFormatter",
    "PathResolver",
    "TempFileManager",
    "atomic_write_bytes",
    "configure_logging",
    "destination_exists",
    "ensure_parent_dir",
    "get_logger",
]
