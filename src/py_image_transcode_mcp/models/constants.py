"""图像转码相关常量定义。

基于 Pillow 动态能力的图像格式管理，避免硬编码重复。
"""

from typing import Final

from PIL import Image


class ImageFormats:
    """基于 Pillow 的动态图像格式管理"""

    # 只定义必要的别名映射（用户友好的别名）
    ALIASES: Final[dict[str, str]] = {
        "JPG": "JPEG",  # 最常见的别名
    }

    # 只定义首选扩展名（当 Pillow 有多个选择时）
    PREFERRED_EXTENSIONS: Final[dict[str, str]] = {
        "JPEG": ".jpg",  # 而不是 .jpeg
        "TIFF": ".tiff",  # 而不是 .tif
    }

    # 带透明通道的色彩模式
    ALPHA_MODES: Final[set[str]] = {"RGBA", "LA", "PA", "RGBa", "La"}

    @classmethod
    def get_extension(cls, format_name: str) -> str:
        """动态获取扩展名，优先使用首选扩展名"""
        format_upper = get_format_alias(format_name)

        # 先检查首选扩展名
        if format_upper in cls.PREFERRED_EXTENSIONS:
            return cls.PREFERRED_EXTENSIONS[format_upper]

        # 从 Pillow 动态获取
        for ext, fmt in Image.registered_extensions().items():
            if fmt and fmt.upper() == format_upper:
                return ext.lower()

        # 后备选择
        return f".{format_upper.lower()}"

    @classmethod
    def format_for_extension(cls, suffix: str) -> str | None:
        """根据扩展名查找 Pillow 注册的格式，未注册时返回 None"""
        if not suffix:
            return None
        fmt = Image.registered_extensions().get(suffix.lower())
        return fmt.upper() if fmt else None


class QualityDefaults:
    """质量相关默认值"""

    # 质量范围
    MIN_QUALITY: Final[int] = 1
    MAX_QUALITY: Final[int] = 100


class ValidationLimits:
    """验证相关限制"""

    # 图像尺寸限制
    MAX_DIMENSION: Final[int] = 50000  # 50000像素


# 便捷访问函数
def get_format_alias(format_str: str) -> str:
    """获取格式的标准名称"""
    format_upper = format_str.upper()
    return ImageFormats.ALIASES.get(format_upper, format_upper)


def get_extension(format_str: str) -> str:
    """获取格式的首选扩展名"""
    return ImageFormats.get_extension(format_str)


def has_alpha_channel(img: Image.Image) -> bool:
    """检查图片是否带透明信息"""
    return img.mode in ImageFormats.ALPHA_MODES or "transparency" in img.info
