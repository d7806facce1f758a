"""範本只存在於檔案系統，不寫入索引。"""

import logging
from pathlib import Path

from devcore.errors import ConflictError, DevCoreError, IOFailure, NotFoundError
from devcore.indexer.confirm import Confirm, double_confirm
from devcore.indexer.languages import add_language, remove_created
from devcore.indexer.workspace import Workspace
from devcore.models.requests import AddTemplateRequest, TemplateInfo
from devcore.models.sync import OperationResult
from devcore.utils.filters import template_ignore
from devcore.utils.naming import validate_component

logger = logging.getLogger(__name__)


def list_templates(ws: Workspace, language: str | None = None) -> list[TemplateInfo]:
    if language:
        validate_component(language, "language")
    langs = [language] if language else sorted(ws.fs.list_subdirs(ws.templates_root))
    return [
        TemplateInfo(language=lang, name=name, path=str(ws.template_dir(lang, name)))
        for lang in langs
        for name in sorted(ws.fs.list_subdirs(ws.template_lang_dir(lang)))
    ]


def add_template(ws: Workspace, req: AddTemplateRequest) -> OperationResult:
    """把來源目錄的內容複製成 templates_root/<語言>/<名稱>。"""
    lang = validate_component(req.language, "language")
    name = validate_component(req.name, "template")
    source = Path(req.source).expanduser().resolve()
    if not source.is_dir():
        raise NotFoundError(f"Template source folder does not exist: {source}")

    target = ws.template_dir(lang, name)
    if target.resolve().is_relative_to(source):
        raise ConflictError(f"Template target {target} is inside its source {source}")
    created: list[Path] = []

    try:
        with ws.store.transaction() as index:
            if ws.fs.exists(target) and not ws.fs.is_empty_dir(target):
                raise ConflictError(f"Template '{lang}/{name}' already exists: {target}")
            if not index.has_language(lang):
                if not req.create_language:
                    raise NotFoundError(f"Language '{lang}' does not exist")
                created = add_language(ws, index, lang)

            try:
                if not ws.fs.exists(target):
                    ws.fs.make_dirs(target)
                    created.append(target)
                ws.fs.copy_tree(source, target, ignore=template_ignore(source))
            except OSError as e:
                raise IOFailure(f"Failed to copy template from {source} to {target}: {e}") from e
    except DevCoreError:
        remove_created(ws, created)
        raise

    logger.info("Added template %s/%s from %s", lang, name, source)
    return OperationResult(
        status="created",
        message=f"Template '{lang}/{name}' added",
        path=str(target),
    )


def remove_template(ws: Workspace, language: str, name: str, confirm: Confirm) -> OperationResult:
    validate_component(language, "language")
    validate_component(name, "template")
    path = ws.template_dir(language, name)
    if not ws.fs.exists(path):
        raise NotFoundError(f"Template '{language}/{name}' does not exist")

    if not double_confirm(confirm, f"template '{language}/{name}'", path):
        logger.info("Template deletion aborted: %s", path)
        return OperationResult(status="aborted", message="Template deletion aborted", path=str(path))

    try:
        with ws.store.locked():
            ws.fs.remove_tree(path)
    except OSError as e:
        raise IOFailure(f"Failed to delete template directory {path}: {e}") from e

    logger.info("Template '%s/%s' deleted", language, name)
    return OperationResult(
        status="deleted",
        message=f"Template '{language}/{name}' deleted",
        path=str(path),
    )
