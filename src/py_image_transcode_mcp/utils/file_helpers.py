"""文件工具模块。

提供目录创建、原子写入和存在性检查等纯文件操作。
"""

import os
import stat
import tempfile
from pathlib import Path

from .cleanup_helpers import TempFileManager
from .logging_helpers import get_logger


logger = get_logger()

# 新文件的权限，mkstemp 默认创建 0600
DEFAULT_FILE_MODE = 0o644


def ensure_parent_dir(file_path: str | Path) -> Path:
    """确保文件的父目录存在，必要时递归创建。

    Args:
        file_path: 目标文件路径

    Returns:
        Path: 父目录路径

    Raises:
        OSError: 权限不足或路径被同名文件占用
    """
    parent = Path(file_path).parent
    if not parent.is_dir():
        logger.debug(f"创建输出目录: {parent}")
    parent.mkdir(parents=True, exist_ok=True)
    return parent


def atomic_write_bytes(
    file_path: str | Path, data: bytes, temp_suffix: str = ".part"
) -> int:
    """原子地写入字节数据，完整替换已有文件。

    先写入同目录下的临时文件并刷盘，再用 os.replace 覆盖目标，
    读者永远不会看到写了一半的文件。失败时临时文件会被删除。

    目标已存在时沿用其权限位，新文件使用 DEFAULT_FILE_MODE（不受 umask
    影响）。目标是符号链接时，链接本身被替换为普通文件，不会写入链接指向
    的文件。

    Args:
        file_path: 目标文件路径
        data: 要写入的数据
        temp_suffix: 临时文件后缀

    Returns:
        int: 写入的字节数

    Raises:
        OSError: 写入或替换失败
    """
    target = Path(file_path)
    file_mode = _existing_mode(target)
    if file_mode is None:
        file_mode = DEFAULT_FILE_MODE

    with TempFileManager() as temp_manager:
        fd, temp_name = tempfile.mkstemp(
            prefix=f".{target.name}.", suffix=temp_suffix, dir=target.parent
        )
        temp_path = Path(temp_name)
        temp_manager.register_temp_file(temp_path)

        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())

        os.chmod(temp_path, file_mode)
        os.replace(temp_path, target)
        temp_manager.release(temp_path)

    return len(data)


def _existing_mode(target: Path) -> int | None:
    """已有普通文件的权限位，不存在或不是普通文件时返回 None"""
    try:
        st = target.lstat()
    except FileNotFoundError:
        return None
    if not stat.S_ISREG(st.st_mode):
        return None
    return stat.S_IMODE(st.st_mode)


def destination_exists(file_path: str | Path) -> bool:
    """检查目标路径是否已存在

    Args:
        file_path: 目标路径

    Returns:
        bool: 路径存在时为 True
    """
    return Path(file_path).exists()
