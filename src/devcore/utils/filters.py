"""建立範本時，決定來源目錄中哪些檔案不複製。"""

import logging
import os
from pathlib import Path

import pathspec

from devcore.storage.fs import GIT_DIR, IgnoreFn

logger = logging.getLogger(__name__)

# 總是排除
EXCLUDED_NAMES: set[str] = {
    GIT_DIR,
    ".DS_Store",
    "Thumbs.db",
}


def load_gitignore(source: Path) -> pathspec.PathSpec | None:
    gitignore = source / ".gitignore"
    if gitignore.is_file():
        try:
            patterns = gitignore.read_text(encoding="utf-8", errors="ignore").splitlines()
            return pathspec.PathSpec.from_lines("gitwildmatch", patterns)
        except OSError:
            logger.warning("Failed to read .gitignore at %s", gitignore)
    return None


def template_ignore(source: Path) -> IgnoreFn:
    """回傳給 shutil.copytree 使用的 ignore callable。"""
    spec = load_gitignore(source)

    def _ignore(directory: str, names: list[str]) -> set[str]:
        ignored = {n for n in names if n in EXCLUDED_NAMES}
        if spec is None:
            return ignored
        rel_dir = Path(directory).relative_to(source)
        for name in names:
            rel = (rel_dir / name).as_posix()
            if os.path.isdir(os.path.join(directory, name)):
                rel += "/"
            if spec.match_file(rel):
                ignored.add(name)
        return ignored

    return _ignore
