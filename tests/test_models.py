"""模型、任务构建器与配置测试。"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from py_image_transcode_mcp.config import get_config, reset_config
from py_image_transcode_mcp.engine.config import JobBuilder
from py_image_transcode_mcp.exceptions import ConfigError
from py_image_transcode_mcp.models import BatchResult, OutputFormat, TranscodeJob


def _job_fields(**kwargs) -> dict:
    fields = {
        "source_path": "in.png",
        "destination_path": "/tmp/out/in.png",
        "target_width": 100,
        "target_height": 50,
        "output_format": "png",
        "quality": 80,
    }
    fields.update(kwargs)
    return fields


class TestOutputFormat:
    """输出格式解析测试"""

    @pytest.mark.parametrize(
        ("tag", "expected"),
        [
            ("png", OutputFormat.PNG),
            ("JPEG", OutputFormat.JPEG),
            ("jpg", OutputFormat.JPEG),
            ("WebP", OutputFormat.WEBP),
            ("keeporiginal", OutputFormat.KEEP_ORIGINAL),
            ("keep_original", OutputFormat.KEEP_ORIGINAL),
        ],
    )
    def test_parse(self, tag: str, expected: OutputFormat):
        """测试大小写不敏感和别名"""
        assert OutputFormat.parse(tag) is expected

    def test_parse_unknown(self):
        """测试未知格式"""
        with pytest.raises(ValueError):
            OutputFormat.parse("bmp")

    def test_pillow_format(self):
        """测试对应的 Pillow 格式名"""
        assert OutputFormat.WEBP.pillow_format == "WEBP"
        assert OutputFormat.KEEP_ORIGINAL.pillow_format is None


class TestTranscodeJob:
    """任务模型测试"""

    def test_valid_job(self):
        """测试合法任务"""
        job = TranscodeJob(**_job_fields(output_format="WEBP"))

        assert job.output_format is OutputFormat.WEBP
        assert job.target_size == (100, 50)
        assert job.source_path == Path("in.png")

    def test_job_is_immutable(self):
        """测试任务构建后不可修改"""
        job = TranscodeJob(**_job_fields())

        with pytest.raises(ValidationError):
            job.quality = 10

    @pytest.mark.parametrize(
        "overrides",
        [
            {"target_width": 0},
            {"target_height": -1},
            {"quality": 0},
            {"quality": 101},
            {"destination_path": "relative/out.png"},
            {"source_path": ""},
            {"output_format": "gif"},
        ],
    )
    def test_invalid_job(self, overrides: dict):
        """测试非法参数被拒绝"""
        with pytest.raises(ValidationError):
            TranscodeJob(**_job_fields(**overrides))

    def test_default_quality_from_config(self, monkeypatch):
        """测试默认质量来自配置"""
        fields = _job_fields()
        del fields["quality"]
        assert TranscodeJob(**fields).quality == 75

        monkeypatch.setenv("PIT_DEFAULT_QUALITY", "90")
        reset_config()
        assert TranscodeJob(**fields).quality == 90


class TestJobBuilder:
    """任务构建器测试"""

    @pytest.fixture
    def builder(self):
        return JobBuilder()

    def test_build_accepts_path_alias(self, builder):
        """测试兼容桌面端的 path 字段"""
        fields = _job_fields()
        fields["path"] = fields.pop("source_path")

        job = builder.build(fields)
        assert job.source_path == Path("in.png")

    def test_build_passes_through_job(self, builder):
        """测试已构建的任务原样返回"""
        job = TranscodeJob(**_job_fields())
        assert builder.build(job) is job

    def test_build_invalid_reports_field(self, builder):
        """测试错误消息包含字段名"""
        with pytest.raises(ConfigError) as exc_info:
            builder.build(_job_fields(target_height=0))

        assert "target_height" in exc_info.value.message

    def test_build_missing_destination_without_target_dir(self, builder):
        """测试缺少输出路径且没有默认目录"""
        fields = _job_fields()
        del fields["destination_path"]

        with pytest.raises(ConfigError):
            builder.build(fields)

    def test_build_missing_field(self):
        """测试缺少必需字段"""
        with pytest.raises(ConfigError) as exc_info:
            JobBuilder(target_dir="/tmp/out").build({"source_path": "a.png"})

        assert "target_width" in exc_info.value.message

    def test_build_rejects_non_mapping(self, builder):
        """测试任务描述必须是字典"""
        with pytest.raises(ConfigError):
            builder.build(["not", "a", "dict"])

    def test_build_all_rejects_mapping(self, builder):
        """测试任务列表不能是单个字典"""
        with pytest.raises(ConfigError):
            builder.build_all(_job_fields())

    def test_build_all_reports_index(self, builder):
        """测试批次错误带序号"""
        with pytest.raises(ConfigError) as exc_info:
            builder.build_all([_job_fields(), _job_fields(), _job_fields(quality=500)])

        assert "第 3 项" in exc_info.value.message


class TestBatchResult:
    """批量结果测试"""

    def test_to_response(self):
        """测试边界层响应格式"""
        result = BatchResult(success=True, saved_count=4)

        assert result.to_response() == {"success": True, "saved_count": 4}
        assert "4" in result.get_summary()

    def test_negative_count_rejected(self):
        """测试保存数量不能为负"""
        with pytest.raises(ValidationError):
            BatchResult(success=True, saved_count=-1)


class TestAppConfig:
    """配置测试"""

    def test_defaults(self):
        """测试默认值"""
        config = get_config()

        assert config.transcode.DEFAULT_QUALITY == 75
        assert config.transcode.WEBP_LOSSLESS_QUALITY == 100
        assert config.processing.APPLY_EXIF_ORIENTATION is True
        assert config.logging.LOG_LEVEL == "INFO"

    def test_env_overrides(self, monkeypatch):
        """测试环境变量覆盖"""
        monkeypatch.setenv("PIT_PNG_COMPRESS_LEVEL", "9")
        monkeypatch.setenv("PIT_LOG_LEVEL", "debug")
        monkeypatch.setenv("PIT_APPLY_EXIF_ORIENTATION", "no")
        reset_config()

        config = get_config()
        assert config.transcode.PNG_COMPRESS_LEVEL == 9
        assert config.transcode.get_format_defaults("PNG")["compress_level"] == 9
        assert config.logging.LOG_LEVEL == "DEBUG"
        assert config.processing.APPLY_EXIF_ORIENTATION is False
