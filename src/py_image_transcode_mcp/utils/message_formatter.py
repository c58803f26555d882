"""消息格式化工具模块。

提供统一的错误消息、成功消息格式化功能。
"""

from pathlib import Path
from typing import Any


class MessageFormatter:
    """统一的消息格式化器"""

    @staticmethod
    def file_not_found(file_path: str | Path) -> str:
        """文件不存在错误消息"""
        return f"文件不存在: {file_path}"

    @staticmethod
    def permission_error(path: str | Path, operation: str = "访问") -> str:
        """权限错误消息"""
        return f"权限错误，无法{operation}: {path}"

    @staticmethod
    def operation_failed(
        operation: str, target: str | Path, error: Exception | None = None
    ) -> str:
        """操作失败消息"""
        msg = f"{operation}失败: {target}"
        if error:
            msg += f" - {error}"
        return msg

    @staticmethod
    def format_error(operation: str, path: str | Path, error: Exception) -> str:
        """格式化通用错误消息"""
        return f"{operation}失败 [{path}]: {error}"

    @staticmethod
    def job_failed(
        index: int,
        source: str | Path,
        destination: str | Path,
        error: Exception | str,
    ) -> str:
        """批量任务中单项失败的消息，index 从 1 开始"""
        return f"第 {index} 项转码失败 [{source} -> {destination}]: {error}"
