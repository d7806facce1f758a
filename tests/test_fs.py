from pathlib import Path

import pytest

from conftest import write_file
from devcore.storage.fs import LocalFilesystem

fs = LocalFilesystem()


def test_dir_size_of_missing_path_is_zero(tmp_path: Path):
    assert fs.dir_size(tmp_path / "missing") == 0


def test_dir_size_sums_regular_files(tmp_path: Path):
    write_file(tmp_path / "a", b"123")
    write_file(tmp_path / "b" / "c" / "d", b"4567")
    (tmp_path / "empty").mkdir()
    assert fs.dir_size(tmp_path) == 7


def test_is_empty_dir(tmp_path: Path):
    assert fs.is_empty_dir(tmp_path) is True
    f = write_file(tmp_path / "f")
    assert fs.is_empty_dir(tmp_path) is False
    with pytest.raises(NotADirectoryError):
        fs.is_empty_dir(f)


def test_uses_git_needs_directory(tmp_path: Path):
    assert fs.uses_git(tmp_path) is False
    write_file(tmp_path / ".git", b"gitdir: ../elsewhere\n")
    assert fs.uses_git(tmp_path) is False
    (tmp_path / ".git").unlink()
    (tmp_path / ".git").mkdir()
    assert fs.uses_git(tmp_path) is True


def test_list_subdirs_ignores_files(tmp_path: Path):
    (tmp_path / "Go").mkdir()
    (tmp_path / "Rust").mkdir()
    write_file(tmp_path / "README.md")
    assert fs.list_subdirs(tmp_path) == {"Go", "Rust"}
    assert fs.list_subdirs(tmp_path / "missing") == set()


def test_copy_tree_merges_into_existing_dir(tmp_path: Path):
    src = tmp_path / "src"
    write_file(src / "x" / "y.txt", b"y")
    dst = tmp_path / "dst"
    dst.mkdir()
    fs.copy_tree(src, dst)
    assert (dst / "x" / "y.txt").read_bytes() == b"y"
    assert not (dst / "src").exists()


def test_remove_tree_does_not_follow_symlink(tmp_path: Path):
    target = write_file(tmp_path / "real" / "keep.txt").parent
    link = tmp_path / "link"
    link.symlink_to(target)
    fs.remove_tree(link)
    assert not link.exists()
    assert (target / "keep.txt").exists()
