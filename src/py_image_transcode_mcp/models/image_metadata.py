"""图像元数据模型。

只保留尺寸与文件大小，供保存前的预览和尺寸设置使用。
"""

from pathlib import Path
from typing import Any

from humanize import naturalsize
from pydantic import BaseModel, Field


class ImageMetadata(BaseModel):
    """基础图片信息"""

    file_path: Path
    width: int = Field(description="图片宽度")
    height: int = Field(description="图片高度")
    size: int = Field(description="文件大小（字节）")
    format: str | None = Field(None, description="图片格式")

    def get_file_size_human(self) -> str:
        """人性化显示文件大小"""
        return naturalsize(self.size, binary=True)

    def to_response(self) -> dict[str, Any]:
        """转换为边界层响应格式"""
        return {
            "success": True,
            "width": self.width,
            "height": self.height,
            "size": self.size,
            "size_human": self.get_file_size_human(),
        }
