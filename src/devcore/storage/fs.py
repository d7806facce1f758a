"""檔案系統存取：唯讀查詢（Prober）與生命週期操作所需的變更。"""

import logging
import os
import shutil
import subprocess
from collections.abc import Callable
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

GIT_DIR = ".git"

IgnoreFn = Callable[[str, list[str]], set[str]]


class Prober(Protocol):
    def exists(self, path: Path) -> bool: ...

    def is_empty_dir(self, path: Path) -> bool: ...

    def dir_size(self, path: Path) -> int: ...

    def uses_git(self, path: Path) -> bool: ...

    def list_subdirs(self, path: Path) -> set[str]: ...


class Filesystem(Prober, Protocol):
    def make_dirs(self, path: Path) -> None: ...

    def remove_empty_dir(self, path: Path) -> None: ...

    def remove_tree(self, path: Path) -> None: ...

    def copy_tree(self, src: Path, dst: Path, ignore: IgnoreFn | None = None) -> None: ...

    def init_git(self, path: Path) -> None: ...


class LocalFilesystem:
    """實際磁碟上的實作。不追蹤 symlink；每次呼叫都重新讀取磁碟。"""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_empty_dir(self, path: Path) -> bool:
        if not path.is_dir():
            raise NotADirectoryError(f"Not a directory: {path}")
        with os.scandir(path) as it:
            return next(it, None) is None

    def dir_size(self, path: Path) -> int:
        if not path.is_dir():
            return 0
        total = 0
        stack = [path]
        while stack:
            current = stack.pop()
            with os.scandir(current) as it:
                for entry in it:
                    # 跳過 symlinks（避免循環與重複計算）
                    if entry.is_symlink():
                        continue
                    if entry.is_dir(follow_symlinks=False):
                        stack.append(Path(entry.path))
                    elif entry.is_file(follow_symlinks=False):
                        total += entry.stat(follow_symlinks=False).st_size
        return total

    def uses_git(self, path: Path) -> bool:
        return (path / GIT_DIR).is_dir()

    def list_subdirs(self, path: Path) -> set[str]:
        if not path.is_dir():
            return set()
        with os.scandir(path) as it:
            return {
                entry.name for entry in it
                if entry.is_dir(follow_symlinks=False)
            }

    def make_dirs(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)
        logger.info("Created directory: %s", path)

    def remove_empty_dir(self, path: Path) -> None:
        path.rmdir()
        logger.info("Deleted directory: %s", path)

    def remove_tree(self, path: Path) -> None:
        if path.is_symlink():
            path.unlink()
        else:
            shutil.rmtree(path)
        logger.info("Deleted directory tree: %s", path)

    def copy_tree(self, src: Path, dst: Path, ignore: IgnoreFn | None = None) -> None:
        """將 src 的內容（而非 src 本身）遞迴複製到 dst。"""
        shutil.copytree(src, dst, symlinks=True, ignore=ignore, dirs_exist_ok=True)
        logger.info("Copied %s -> %s", src, dst)

    def init_git(self, path: Path) -> None:
        try:
            subprocess.run(
                ["git", "init"],
                cwd=path,
                check=True,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError as e:
            raise OSError(f"git executable not found: {e}") from e
        except subprocess.CalledProcessError as e:
            raise OSError(f"git init failed: {e.stderr.strip()}") from e
        logger.info("Initialized git repository in %s", path)
