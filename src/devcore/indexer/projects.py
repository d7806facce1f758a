import logging
from pathlib import Path

from devcore.errors import ConflictError, DevCoreError, IOFailure, NotFoundError
from devcore.indexer.confirm import Confirm, double_confirm
from devcore.indexer.languages import add_language, remove_created
from devcore.indexer.workspace import Workspace
from devcore.models.project import Index, Project, now_minute
from devcore.models.requests import CreateProjectRequest
from devcore.models.sync import OperationResult
from devcore.utils.naming import derive_folder_name, validate_component

logger = logging.getLogger(__name__)


def list_projects(
    ws: Workspace,
    user: str | None = None,
    language: str | None = None,
    name: str | None = None,
) -> list[Project]:
    return [
        p for p in ws.index.projects
        if (user is None or p.created_by == user)
        and (language is None or p.lang == language)
        and (name is None or p.name == name)
    ]


def list_users(ws: Workspace) -> list[str]:
    return list(ws.index.users)


def find_projects(index: Index, name: str, language: str | None = None) -> list[Project]:
    """以顯示名稱查詢；名稱不唯一，回傳所有符合者由呼叫端決定。"""
    return [
        p for p in index.projects
        if p.name == name and (language is None or p.lang == language)
    ]


def create_project(ws: Workspace, req: CreateProjectRequest) -> OperationResult:
    """所有檢查都在任何寫入之前完成；之後的失敗會移除本次建立的目錄。"""
    lang = validate_component(req.language, "language")
    folder_name = req.folder_name if req.folder_name else derive_folder_name(req.name)
    validate_component(folder_name, "project folder")
    if req.template:
        validate_component(req.template, "template")

    project_path = ws.project_dir(lang, folder_name)
    warnings: list[str] = []
    created: list[Path] = []

    try:
        with ws.store.transaction() as index:
            new_language = not index.has_language(lang)
            if new_language and not req.create_language:
                raise NotFoundError(f"Language '{lang}' does not exist")

            template_path = None
            if req.template:
                template_path = ws.template_dir(lang, req.template)
                if not ws.fs.exists(template_path):
                    raise NotFoundError(f"Template '{lang}/{req.template}' does not exist")

            if index.find_project(lang, folder_name) is not None or ws.fs.exists(project_path):
                raise ConflictError(f"Project directory already exists: {project_path}")

            if new_language:
                created = add_language(ws, index, lang)

            try:
                ws.fs.make_dirs(project_path)
            except OSError as e:
                raise IOFailure(f"Error creating project directory {project_path}: {e}") from e
            created.append(project_path)

            if template_path is not None:
                try:
                    ws.fs.copy_tree(template_path, project_path)
                except OSError as e:
                    raise IOFailure(f"Error copying template '{req.template}': {e}") from e

            if req.init_git:
                try:
                    ws.fs.init_git(project_path)
                except OSError as e:
                    logger.warning("Failed to initialize git in %s: %s", project_path, e)
                    warnings.append(f"Failed to initialize git repository: {e}")

            try:
                size, git = ws.fs.dir_size(project_path), ws.fs.uses_git(project_path)
            except OSError as e:
                logger.warning("Could not measure %s: %s", project_path, e)
                warnings.append(f"Could not measure project directory: {e}")
                size, git = 0, False

            project = Project(
                name=req.name,
                folder_name=folder_name,
                lang=lang,
                created_by=ws.user,
                created_at=now_minute(),
                size=size,
                git=git,
            )
            index.projects.append(project)
            if ws.user not in index.users:
                index.users = sorted([*index.users, ws.user])
    except DevCoreError:
        remove_created(ws, created)
        raise

    logger.info("Project '%s' created at %s", req.name, project_path)
    return OperationResult(
        status="created",
        message=f"Project '{req.name}' created",
        path=str(project_path),
        warnings=warnings,
        project=project,
    )


def delete_project(
    ws: Workspace, language: str, folder_name: str, confirm: Confirm
) -> OperationResult:
    """以 (語言, 資料夾名) 刪除專案，需兩次確認。"""
    validate_component(language, "language")
    validate_component(folder_name, "project folder")
    path = ws.project_dir(language, folder_name)

    with ws.store.transaction() as index:
        project = index.find_project(language, folder_name)
        if project is None or not ws.fs.exists(path):
            raise NotFoundError(f"No such project exists: {language}/{folder_name}")

        if not double_confirm(confirm, f"'{project.name}'", path):
            logger.info("Project deletion aborted: %s", path)
            return OperationResult(
                status="aborted", message="Project deletion aborted", path=str(path)
            )

        try:
            ws.fs.remove_tree(path)
        except OSError as e:
            raise IOFailure(f"Failed to delete project directory {path}: {e}") from e

        index.projects = [p for p in index.projects if p.key != project.key]

    logger.info("Project '%s' deleted: %s", project.name, path)
    return OperationResult(
        status="deleted",
        message=f"Project '{project.name}' deleted",
        path=str(path),
        project=project,
    )
