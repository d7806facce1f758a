from pathlib import Path

import pytest

from devcore.indexer.workspace import Workspace
from devcore.storage.state import IndexStore


class MemoryProber:
    """記憶體中的 Prober，用於不碰磁碟的對帳測試。"""

    def __init__(self, dirs=(), files=None, failing=()):
        self.files = {Path(p): size for p, size in (files or {}).items()}
        self.dirs: set[Path] = set()
        for d in [*map(Path, dirs), *(p.parent for p in self.files)]:
            self.dirs.add(d)
            self.dirs.update(d.parents)
        self.failing = {Path(p) for p in failing}

    def exists(self, path: Path) -> bool:
        return path in self.dirs or path in self.files

    def is_empty_dir(self, path: Path) -> bool:
        if path not in self.dirs:
            raise NotADirectoryError(str(path))
        return not any(p.parent == path for p in self.dirs | set(self.files))

    def dir_size(self, path: Path) -> int:
        if path in self.failing:
            raise PermissionError(f"Permission denied: '{path}'")
        return sum(size for p, size in self.files.items() if path in p.parents)

    def uses_git(self, path: Path) -> bool:
        return path / ".git" in self.dirs

    def list_subdirs(self, path: Path) -> set[str]:
        return {p.name for p in self.dirs if p.parent == path}


@pytest.fixture
def ws(tmp_path: Path) -> Workspace:
    workspace = Workspace(
        projects_root=tmp_path / "projects",
        templates_root=tmp_path / "templates",
        store=IndexStore(tmp_path / "config" / "devmap.json"),
        user="tester",
    )
    workspace.ensure_roots()
    return workspace


def write_file(path: Path, data: bytes = b"x") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path
