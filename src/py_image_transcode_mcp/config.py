"""统一配置管理模块。

提供应用程序的全局配置管理，包括默认值、环境变量支持等。
"""

import os
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class TranscodeDefaults:
    """转码相关的默认配置"""

    # 质量设置，与桌面端滑块的初始值一致
    DEFAULT_QUALITY: int = 75
    WEBP_LOSSLESS_QUALITY: int = 100  # 仅此值触发 WebP 无损模式

    # 编码器参数
    PNG_COMPRESS_LEVEL: int = 6
    WEBP_METHOD: int = 4  # 0=最快，6=最慢但压缩最好
    WEBP_LOSSLESS_EFFORT: int = 80
    JPEG_HIGH_QUALITY_THRESHOLD: int = 85  # 达到该质量后使用 4:2:2 子采样
    JPEG_BACKGROUND: tuple[int, int, int] = (255, 255, 255)

    def get_format_defaults(self, format_name: str) -> dict[str, Any]:
        """获取格式特定的默认参数"""
        defaults = {
            "JPEG": {
                "optimize": True,
                "progressive": False,
            },
            "WEBP": {
                "method": self.WEBP_METHOD,
            },
            "PNG": {
                "compress_level": self.PNG_COMPRESS_LEVEL,
                "optimize": False,
            },
        }
        return defaults.get(format_name, {})


@dataclass(frozen=True)
class ProcessingDefaults:
    """处理相关的默认配置"""

    # 解码设置
    APPLY_EXIF_ORIENTATION: bool = True

    # 写入设置
    TEMP_FILE_SUFFIX: str = ".part"

    # 默认输出文件名模式
    OUTPUT_PATTERN: str = "{stem}_resized_{width}x{height}{ext}"


@dataclass(frozen=True)
class LoggingDefaults:
    """日志相关的默认配置"""

    # 日志级别
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # 文件日志
    ENABLE_FILE_LOGGING: bool = False
    LOG_FILE_PATH: str = "py_image_transcode.log"
    LOG_FILE_MAX_SIZE: int = 10 * 1024 * 1024  # 10MB
    LOG_FILE_BACKUP_COUNT: int = 5


def _env_flag(value: str) -> bool:
    return value.lower() in ("true", "1", "yes")


class AppConfig:
    """应用程序配置管理器

    支持环境变量覆盖默认配置
    """

    def __init__(self):
        self.transcode = TranscodeDefaults()
        self.processing = ProcessingDefaults()
        self.logging = LoggingDefaults()

        # 从环境变量加载配置
        self._load_from_env()

    def _load_from_env(self):
        """从环境变量加载配置"""
        # 转码配置
        if default_quality := os.getenv("PIT_DEFAULT_QUALITY"):
            object.__setattr__(
                self.transcode, "DEFAULT_QUALITY", max(1, min(100, int(default_quality)))
            )

        if png_level := os.getenv("PIT_PNG_COMPRESS_LEVEL"):
            object.__setattr__(self.transcode, "PNG_COMPRESS_LEVEL", int(png_level))

        if webp_method := os.getenv("PIT_WEBP_METHOD"):
            object.__setattr__(self.transcode, "WEBP_METHOD", int(webp_method))

        # 处理配置
        if exif_orientation := os.getenv("PIT_APPLY_EXIF_ORIENTATION"):
            object.__setattr__(
                self.processing,
                "APPLY_EXIF_ORIENTATION",
                _env_flag(exif_orientation),
            )

        # 日志配置
        if log_level := os.getenv("PIT_LOG_LEVEL"):
            object.__setattr__(self.logging, "LOG_LEVEL", log_level.upper())

        if enable_file_log := os.getenv("PIT_ENABLE_FILE_LOGGING"):
            object.__setattr__(
                self.logging,
                "ENABLE_FILE_LOGGING",
                _env_flag(enable_file_log),
            )


# 全局配置实例
config = AppConfig()


def get_config() -> AppConfig:
    """获取全局配置实例"""
    return config


def reset_config():
    """重置配置（主要用于测试）"""
    global config
    config = AppConfig()
