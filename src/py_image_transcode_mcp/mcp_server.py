"""图像批量转码 MCP 服务器。

对外提供批量保存、图片信息读取和输出路径检查三个工具。
"""

from pathlib import Path
from typing import Any

from fastmcp import FastMCP

from .exceptions import ErrorHandler
from .transcoder import ImageTranscoder
from .utils.logging_helpers import configure_logging, get_logger
from .utils.message_formatter import MessageFormatter


# MCP 服务器响应类型定义
MCPSaveResponse = dict[str, Any]
MCPImageInfoResponse = dict[str, Any]


class MCPResponseBuilder:
    """MCP 服务器响应构建器，专门用于构建符合 MCP 协议的响应格式。"""

    @staticmethod
    def error(
        message: str,
        error_type: str = "general",
        details: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """构建错误结果。

        Args:
            message: 错误消息
            error_type: 错误类型
            details: 额外的错误详情

        Returns:
            dict: 标准化的错误响应
        """
        result: dict[str, Any] = {
            "success": False,
            "error": message,
            "error_type": error_type,
        }

        if details:
            result["details"] = details

        return result

    @staticmethod
    def from_exception(
        error: Exception, operation: str, path: str | Path = "-"
    ) -> dict[str, Any]:
        """根据异常构建错误结果，批量中止时附带失败序号和已保存数量"""
        response: dict[str, Any] = dict(ErrorHandler.to_response(error, operation, path))

        job_index = getattr(error, "job_index", None)
        if job_index is not None:
            response["details"] = {
                "job_index": job_index,
                "saved_count": getattr(error, "saved_count", 0),
            }

        return response


# 配置日志
configure_logging()
logger = get_logger(__name__)

# 创建MCP应用
mcp: FastMCP[Any] = FastMCP("图像批量转码服务")

# 全局转码器实例
transcoder = ImageTranscoder()


def run_save_images(images: list[dict[str, Any]]) -> MCPSaveResponse:
    """执行批量保存并转换为 MCP 响应"""
    try:
        result = transcoder.save_images(images)
        return result.to_response()
    except Exception as e:
        return MCPResponseBuilder.from_exception(e, "批量转码")


def run_get_image_metadata(path: str) -> MCPImageInfoResponse:
    """读取图片信息并转换为 MCP 响应"""
    try:
        return transcoder.get_image_metadata(path).to_response()
    except Exception as e:
        return MCPResponseBuilder.from_exception(e, "获取图片信息", path)


def run_check_file_exists(path: str) -> dict[str, Any]:
    """检查路径是否存在并转换为 MCP 响应"""
    try:
        return {"success": True, "exists": transcoder.check_file_exists(path)}
    except (OSError, ValueError) as e:
        logger.error(MessageFormatter.operation_failed("检查文件", path, e))
        return MCPResponseBuilder.error(
            MessageFormatter.operation_failed("检查文件", path, e), "io"
        )


# ============================================================================
# 核心工具
# ============================================================================


@mcp.tool()
def save_images(images: list[dict[str, Any]]) -> MCPSaveResponse:
    """批量缩放并保存图片。

    按顺序处理每一项：解码 → 缩放到目标尺寸 → 按格式编码 → 写入目标路径。
    任一项失败时立即停止，已写入的文件不会回滚。

    Args:
        images: 任务列表，每项包含：
            - source_path（或 path）: 源图片路径
            - destination_path: 输出文件绝对路径（含文件名）
            - target_width / target_height: 目标宽高（正整数）
            - output_format: keep_original / png / jpeg / webp
            - quality: 1-100，WebP 取 100 时为无损

    Returns:
        dict: 成功时为 {"success": True, "saved_count": n}，
            失败时为 {"success": False, "error": "...", "error_type": "..."}
    """
    return run_save_images(images)


@mcp.tool()
def get_image_metadata(path: str) -> MCPImageInfoResponse:
    """获取图片的宽、高和文件大小。

    Args:
        path: 图片文件路径

    Returns:
        dict: 图片信息，包含 width、height、size、size_human
    """
    return run_get_image_metadata(path)


@mcp.tool()
def check_file_exists(path: str) -> dict[str, Any]:
    """检查输出路径是否已经存在，用于保存前提示覆盖。

    Args:
        path: 待检查的路径

    Returns:
        dict: {"success": True, "exists": bool}
    """
    return run_check_file_exists(path)


# ============================================================================
# 应用入口
# ============================================================================


def main() -> None:
    """启动 MCP 服务器"""
    logger.info("启动图像批量转码 MCP 服务器")
    mcp.run()


if __name__ == "__main__":
    main()
