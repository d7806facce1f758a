import asyncio

from fastapi import APIRouter

from devcore.indexer.projects import list_users
from devcore.models.project import Index
from devcore.models.sync import SyncReport

router = APIRouter()


@router.get("/index", response_model=Index)
async def get_index():
    """回傳目前記憶體中的完整索引。"""
    from devcore.main import get_workspace

    return get_workspace().index


@router.post("/sync", response_model=SyncReport)
async def trigger_sync():
    """重新對帳索引與檔案系統。"""
    from devcore.main import get_workspace

    return await asyncio.to_thread(get_workspace().sync)


@router.get("/users", response_model=list[str])
async def get_users():
    from devcore.main import get_workspace

    return list_users(get_workspace())
