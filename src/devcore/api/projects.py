import asyncio

from fastapi import APIRouter, Query

from devcore.errors import ConflictError, NotFoundError
from devcore.indexer.confirm import answers
from devcore.indexer.projects import create_project, delete_project, find_projects, list_projects
from devcore.models.project import Project
from devcore.models.requests import CreateProjectRequest
from devcore.models.sync import OperationResult

router = APIRouter()


@router.get("/projects", response_model=list[Project])
async def get_projects(
    user: str | None = Query(None, description="限定建立者"),
    language: str | None = Query(None, description="限定語言"),
    name: str | None = Query(None, description="限定顯示名稱"),
):
    from devcore.main import get_workspace

    return list_projects(get_workspace(), user=user, language=language, name=name)


@router.post("/projects", response_model=OperationResult)
async def post_project(req: CreateProjectRequest):
    """建立專案，可選擇套用範本與初始化 git。"""
    from devcore.main import get_workspace

    return await asyncio.to_thread(create_project, get_workspace(), req)


@router.delete("/projects/{language}/{folder_name}", response_model=OperationResult)
async def remove_project(
    language: str,
    folder_name: str,
    confirm: bool = Query(False, description="第一次確認"),
    confirm_again: bool = Query(False, description="第二次確認"),
):
    from devcore.main import get_workspace

    return await asyncio.to_thread(
        delete_project, get_workspace(), language, folder_name, answers(confirm, confirm_again)
    )


@router.delete("/projects", response_model=OperationResult)
async def remove_project_by_name(
    name: str = Query(..., description="專案顯示名稱"),
    language: str | None = Query(None, description="限定語言"),
    confirm: bool = Query(False, description="第一次確認"),
    confirm_again: bool = Query(False, description="第二次確認"),
):
    """以顯示名稱刪除；名稱對應多個專案時拒絕執行。"""
    from devcore.main import get_workspace

    ws = get_workspace()
    matches = find_projects(ws.index, name, language)
    if not matches:
        raise NotFoundError(f"No such project exists: {name}")
    if len(matches) > 1:
        candidates = ", ".join(f"{p.lang}/{p.folder_name}" for p in matches)
        raise ConflictError(f"Project name '{name}' is ambiguous: {candidates}")

    project = matches[0]
    return await asyncio.to_thread(
        delete_project, ws, project.lang, project.folder_name, answers(confirm, confirm_again)
    )
