"""转码结果模型。

定义批量转码操作的结果数据结构。
"""

from typing import Any, TypedDict

from humanize import naturalsize
from pydantic import BaseModel, Field


class BaseResult(BaseModel):
    """结果基类，包含通用字段和方法"""

    success: bool = Field(description="是否成功")

    @staticmethod
    def format_size(size_bytes: int) -> str:
        """格式化文件大小为人类可读格式"""
        return naturalsize(size_bytes, binary=True)


class BatchResult(BaseResult):
    """批量转码结果

    仅在全部任务成功时返回，不保留逐项明细。
    """

    saved_count: int = Field(0, ge=0, description="已成功写入的任务数")

    def get_summary(self) -> str:
        """批量处理摘要"""
        return f"已保存 {self.saved_count} 张图片"

    def to_response(self) -> dict[str, Any]:
        """转换为边界层响应格式"""
        return {"success": self.success, "saved_count": self.saved_count}


class ErrorResponse(TypedDict):
    """边界层错误响应类型定义"""

    success: bool
    error: str
    error_type: str
