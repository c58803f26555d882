"""工具模块测试。"""

import logging
import os
from pathlib import Path

import pytest

from py_image_transcode_mcp.models import OutputFormat
from py_image_transcode_mcp.utils import (
    FileNamingStrategy,
    TempFileManager,
    atomic_write_bytes,
    configure_logging,
    destination_exists,
    ensure_parent_dir,
)
from py_image_transcode_mcp.utils.logging_helpers import PACKAGE_LOGGER_NAME


class TestAtomicWrite:
    """原子写入测试"""

    def test_write_new_file(self, temp_dir: Path):
        """测试写入新文件"""
        target = temp_dir / "out.bin"

        written = atomic_write_bytes(target, b"hello")

        assert written == 5
        assert target.read_bytes() == b"hello"
        assert oct(target.stat().st_mode & 0o777) == oct(0o644)

    def test_replace_existing_file(self, temp_dir: Path):
        """测试完整替换已有文件，不残留旧内容"""
        target = temp_dir / "out.bin"
        target.write_bytes(b"x" * 1024)

        atomic_write_bytes(target, b"new")

        assert target.read_bytes() == b"new"
        assert sorted(p.name for p in temp_dir.iterdir()) == ["out.bin"]

    def test_keeps_existing_file_mode(self, temp_dir: Path):
        """测试覆盖已有文件时沿用其权限位"""
        target = temp_dir / "private.bin"
        target.write_bytes(b"old")
        target.chmod(0o600)

        atomic_write_bytes(target, b"new")

        assert target.read_bytes() == b"new"
        assert oct(target.stat().st_mode & 0o777) == oct(0o600)

    def test_symlink_destination_replaced(self, temp_dir: Path):
        """测试目标为符号链接时替换链接本身，不改动链接指向的文件"""
        real = temp_dir / "real.bin"
        real.write_bytes(b"real")
        link = temp_dir / "link.bin"
        link.symlink_to(real)

        atomic_write_bytes(link, b"new")

        assert not link.is_symlink()
        assert link.read_bytes() == b"new"
        assert real.read_bytes() == b"real"

    def test_failure_removes_temp_file(self, temp_dir: Path):
        """测试替换失败时删除临时文件"""
        target = temp_dir / "occupied"
        target.mkdir()
        (target / "keep.txt").write_text("keep")

        with pytest.raises(OSError):
            atomic_write_bytes(target, b"data")

        assert sorted(p.name for p in temp_dir.iterdir()) == ["occupied"]
        assert (target / "keep.txt").read_text() == "keep"

    def test_ensure_parent_dir(self, temp_dir: Path):
        """测试递归创建父目录"""
        target = temp_dir / "x" / "y" / "file.png"

        assert ensure_parent_dir(target) == target.parent
        assert target.parent.is_dir()
        # 已存在时不报错
        ensure_parent_dir(target)

    def test_destination_exists(self, temp_dir: Path):
        """测试存在性检查"""
        assert destination_exists(temp_dir)
        assert not destination_exists(temp_dir / "nothing")


class TestTempFileManager:
    """临时文件管理器测试"""

    def test_cleanup_on_exit(self, temp_dir: Path):
        """测试退出上下文时删除已注册文件"""
        leftover = temp_dir / "leftover.part"
        leftover.write_bytes(b"1")

        with TempFileManager() as manager:
            manager.register_temp_file(leftover)

        assert not leftover.exists()

    def test_released_file_kept(self, temp_dir: Path):
        """测试取消注册的文件保留"""
        kept = temp_dir / "kept.part"
        kept.write_bytes(b"1")

        with TempFileManager() as manager:
            manager.register_temp_file(kept)
            manager.release(kept)

        assert kept.exists()

    def test_cleanup_count(self, temp_dir: Path):
        """测试返回清理数量，已不存在的文件不计入"""
        manager = TempFileManager()
        existing = temp_dir / "a.part"
        existing.write_bytes(b"1")
        manager.register_temp_file(existing)
        manager.register_temp_file(temp_dir / "gone.part")

        assert manager.cleanup_temp_files() == 1
        assert manager.temp_files == set()


class TestFileNamingStrategy:
    """默认命名测试"""

    @pytest.mark.parametrize(
        ("source", "output_format", "expected"),
        [
            ("photo.png", OutputFormat.WEBP, "photo_resized_800x600.webp"),
            ("photo.png", OutputFormat.JPEG, "photo_resized_800x600.jpg"),
            ("photo.JPG", OutputFormat.KEEP_ORIGINAL, "photo_resized_800x600.JPG"),
            ("photo.gif", "png", "photo_resized_800x600.png"),
        ],
    )
    def test_generate_output_name(self, source, output_format, expected):
        """测试文件名模式与扩展名"""
        name = FileNamingStrategy.generate_output_name(
            Path(source), 800, 600, output_format
        )
        assert name == expected


class TestConfigureLogging:
    """日志初始化测试"""

    @pytest.fixture
    def package_logger(self):
        logger = logging.getLogger(PACKAGE_LOGGER_NAME)
        saved_handlers = list(logger.handlers)
        saved_level = logger.level
        logger.handlers.clear()
        yield logger
        for handler in logger.handlers:
            handler.close()
        logger.handlers[:] = saved_handlers
        logger.setLevel(saved_level)

    def test_no_duplicate_handlers(self, package_logger):
        """测试重复调用不叠加处理器"""
        configure_logging()
        configure_logging()

        assert len(package_logger.handlers) == 1

    def test_level_override(self, package_logger):
        """测试显式日志级别"""
        configure_logging("debug")
        assert package_logger.level == logging.DEBUG

    def test_file_logging(self, package_logger, temp_dir: Path, monkeypatch):
        """测试开启文件日志"""
        from py_image_transcode_mcp.config import reset_config

        monkeypatch.chdir(temp_dir)
        monkeypatch.setenv("PIT_ENABLE_FILE_LOGGING", "true")
        reset_config()

        configure_logging()
        package_logger.info("file logging on")
        for handler in package_logger.handlers:
            handler.flush()

        log_file = temp_dir / "py_image_transcode.log"
        assert log_file.exists()
        assert "file logging on" in log_file.read_text(encoding="utf-8")
        assert os.path.getsize(log_file) > 0
