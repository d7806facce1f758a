import asyncio

from fastapi import APIRouter

from devcore.indexer.languages import create_language, delete_language, list_languages
from devcore.models.requests import CreateLanguageRequest
from devcore.models.sync import OperationResult

router = APIRouter()


@router.get("/languages", response_model=list[str])
async def get_languages():
    from devcore.main import get_workspace

    return list_languages(get_workspace())


@router.post("/languages", response_model=OperationResult)
async def post_language(req: CreateLanguageRequest):
    """建立語言（已存在時回傳 unchanged）。"""
    from devcore.main import get_workspace

    return await asyncio.to_thread(create_language, get_workspace(), req.name)


@router.delete("/languages/{name}", response_model=OperationResult)
async def remove_language(name: str):
    """刪除語言；目錄非空時回傳 409。"""
    from devcore.main import get_workspace

    return await asyncio.to_thread(delete_language, get_workspace(), name)
