"""任务构建器模块。

把边界层传入的任务描述（字典）转换为经过校验的 TranscodeJob。
"""

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ConfigError
from ..models.transcode_job import OutputFormat, TranscodeJob
from ..utils.naming_helpers import PathResolver


logger = logging.getLogger(__name__)

# 桌面端传入的字段名 -> 模型字段名
FIELD_ALIASES = {
    "path": "source_path",
}


class JobBuilder:
    """转码任务构建器

    提供统一的任务构建接口和参数验证。
    """

    def __init__(self, target_dir: str | Path | None = None):
        """初始化任务构建器

        Args:
            target_dir: 任务未给出输出路径时使用的默认输出目录
        """
        self.target_dir = Path(target_dir) if target_dir else None

    def build(self, descriptor: Mapping[str, Any] | TranscodeJob) -> TranscodeJob:
        """构建单个转码任务

        Args:
            descriptor: 任务描述字典，或已构建的任务

        Returns:
            TranscodeJob: 构建的任务对象

        Raises:
            ConfigError: 描述不完整或参数不合法
        """
        if isinstance(descriptor, TranscodeJob):
            return descriptor

        if not isinstance(descriptor, Mapping):
            raise ConfigError(f"任务描述必须是字典，得到: {type(descriptor).__name__}")

        fields = self._normalize_fields(descriptor)
        source_path = fields.get("source_path")

        try:
            if not fields.get("destination_path"):
                fields["destination_path"] = self._default_destination(fields)
            return TranscodeJob(**fields)
        except PydanticValidationError as e:
            raise ConfigError(
                self._format_validation_error(e),
                Path(source_path) if source_path else None,
            ) from e
        except KeyError as e:
            raise ConfigError(
                f"任务描述缺少字段: {e.args[0]}", Path(source_path) if source_path else None
            ) from e
        except (TypeError, ValueError) as e:
            raise ConfigError(
                f"任务构建失败: {e!s}", Path(source_path) if source_path else None
            ) from e

    def build_all(
        self, descriptors: Iterable[Mapping[str, Any] | TranscodeJob]
    ) -> list[TranscodeJob]:
        """构建整个批次，任何一项不合法时整批拒绝

        Raises:
            ConfigError: 消息中带有出错任务的序号（从 1 开始）
        """
        if isinstance(descriptors, Mapping | str | bytes):
            raise ConfigError("任务列表必须是序列")

        jobs = []
        for index, descriptor in enumerate(descriptors, start=1):
            try:
                jobs.append(self.build(descriptor))
            except ConfigError as e:
                logger.warning(f"第 {index} 项任务配置无效: {e.message}")
                raise ConfigError(f"第 {index} 项任务配置无效: {e.message}", e.path) from e
        return jobs

    def _normalize_fields(self, descriptor: Mapping[str, Any]) -> dict[str, Any]:
        """统一字段名并去掉空值"""
        fields: dict[str, Any] = {}
        for key, value in descriptor.items():
            name = FIELD_ALIASES.get(key, key)
            if value is None or name in fields:
                continue
            fields[name] = value
        return fields

    def _default_destination(self, fields: dict[str, Any]) -> Path:
        """根据默认输出目录生成输出路径"""
        target_dir = fields.pop("target_dir", None) or self.target_dir
        if target_dir is None:
            raise ValueError("缺少 destination_path，且未指定默认输出目录 target_dir")

        return PathResolver.default_destination(
            source_path=fields["source_path"],
            target_dir=target_dir,
            width=int(fields["target_width"]),
            height=int(fields["target_height"]),
            output_format=OutputFormat.parse(
                fields.get("output_format", OutputFormat.KEEP_ORIGINAL)
            ),
        )

    def _format_validation_error(self, error: PydanticValidationError) -> str:
        """格式化验证错误"""
        messages = []
        for err in error.errors():
            field = ".".join(str(loc) for loc in err["loc"])
            msg = err["msg"]
            if field:
                messages.append(f"{field}: {msg}")
            else:
                messages.append(msg)
        return "; ".join(messages)
