import asyncio

from fastapi import APIRouter, Query

from devcore.indexer.confirm import answers
from devcore.indexer.templates import add_template, list_templates, remove_template
from devcore.models.requests import AddTemplateRequest, TemplateInfo
from devcore.models.sync import OperationResult

router = APIRouter()


@router.get("/templates", response_model=list[TemplateInfo])
async def get_templates(language: str | None = Query(None, description="限定語言")):
    from devcore.main import get_workspace

    return list_templates(get_workspace(), language)


@router.post("/templates", response_model=OperationResult)
async def post_template(req: AddTemplateRequest):
    """從來源目錄建立範本。"""
    from devcore.main import get_workspace

    return await asyncio.to_thread(add_template, get_workspace(), req)


@router.delete("/templates/{language}/{name}", response_model=OperationResult)
async def delete_template(
    language: str,
    name: str,
    confirm: bool = Query(False, description="第一次確認"),
    confirm_again: bool = Query(False, description="第二次確認"),
):
    from devcore.main import get_workspace

    return await asyncio.to_thread(
        remove_template, get_workspace(), language, name, answers(confirm, confirm_again)
    )
