import logging
from pathlib import Path

from devcore.errors import ConflictError, DevCoreError, IOFailure, NotFoundError
from devcore.indexer.workspace import Workspace
from devcore.models.project import Index
from devcore.models.sync import OperationResult
from devcore.utils.naming import validate_component

logger = logging.getLogger(__name__)


def list_languages(ws: Workspace) -> list[str]:
    return list(ws.index.languages)


def add_language(ws: Workspace, index: Index, name: str) -> list[Path]:
    """在交易中的索引加入語言，並建立缺少的目錄。

    回傳本次新建的目錄，供呼叫端在後續步驟失敗時移除；
    本函式自己失敗時會先移除已建的目錄。
    """
    created: list[Path] = []
    for path in (ws.language_dir(name), ws.template_lang_dir(name)):
        if ws.fs.exists(path):
            logger.info("Directory already exists: %s", path)
            continue
        try:
            ws.fs.make_dirs(path)
        except OSError as e:
            remove_created(ws, created)
            raise IOFailure(f"Failed to create directory {path}: {e}") from e
        created.append(path)

    index.languages.append(name)
    return created


def remove_created(ws: Workspace, paths: list[Path]):
    """依建立的相反順序移除目錄，失敗只記錄。"""
    for path in reversed(paths):
        try:
            ws.fs.remove_tree(path)
        except OSError as e:
            logger.warning("Could not roll back %s: %s", path, e)
        else:
            logger.info("Rolled back %s", path)


def create_language(ws: Workspace, name: str) -> OperationResult:
    """建立語言：專案目錄與範本目錄（已存在則略過），再寫入索引。"""
    validate_component(name, "language")
    lang_path = ws.language_dir(name)
    created: list[Path] = []

    try:
        with ws.store.transaction() as index:
            if index.has_language(name):
                logger.info("Language already exists: %s", name)
                return OperationResult(
                    status="unchanged",
                    message=f"Language already exists: {name}",
                    path=str(lang_path),
                )
            created = add_language(ws, index, name)
    except DevCoreError:
        remove_created(ws, created)
        raise

    logger.info("Added language to index: %s", name)
    return OperationResult(
        status="created",
        message=f"Language '{name}' created",
        path=str(lang_path),
    )


def delete_language(ws: Workspace, name: str) -> OperationResult:
    """只有在專案目錄與範本目錄都不存在或為空時才刪除。"""
    validate_component(name, "language")
    lang_path = ws.language_dir(name)
    template_path = ws.template_lang_dir(name)

    with ws.store.transaction() as index:
        blocking = []
        for path in (lang_path, template_path):
            try:
                if ws.fs.exists(path) and not ws.fs.is_empty_dir(path):
                    blocking.append(str(path))
            except OSError as e:
                raise IOFailure(f"Cannot inspect {path}: {e}") from e
        if blocking:
            raise ConflictError(
                "Cannot delete language '%s': directory is not empty: %s. Delete its "
                "projects and templates first." % (name, ", ".join(blocking))
            )
        if not index.has_language(name):
            raise NotFoundError(f"Language '{name}' does not exist")

        for path in (lang_path, template_path):
            if not ws.fs.exists(path):
                continue
            try:
                ws.fs.remove_empty_dir(path)
            except OSError as e:
                raise IOFailure(f"Failed to delete directory {path}: {e}") from e

        index.languages = [lang for lang in index.languages if lang != name]

    logger.info("Removed language from index: %s", name)
    return OperationResult(
        status="deleted",
        message=f"Language '{name}' deleted",
        path=str(lang_path),
    )
