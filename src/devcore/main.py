import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from devcore.api.router import api_router
from devcore.config import settings
from devcore.errors import DevCoreError
from devcore.indexer.workspace import Workspace

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# 全域資源
_workspace: Workspace | None = None


def get_workspace() -> Workspace:
    assert _workspace is not None
    return _workspace


def set_workspace(ws: Workspace | None):
    global _workspace
    _workspace = ws


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting DevCore API...")
    if _workspace is None:
        set_workspace(Workspace.from_settings(settings))
    ws = get_workspace()
    logger.info("Projects root: %s", ws.projects_root)
    logger.info("Templates root: %s", ws.templates_root)
    logger.info("Index file: %s", ws.store.path)

    # 任何讀寫之前先對帳一次；解析失敗直接中止啟動
    ws.sync()

    yield

    logger.info("Shutting down...")


app = FastAPI(title="DevCore", version="0.1.0", lifespan=lifespan)
app.include_router(api_router)


@app.exception_handler(DevCoreError)
async def devcore_error_handler(request: Request, exc: DevCoreError):
    logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.get("/api/v1/health")
async def health():
    ws = get_workspace()
    return {
        "status": "ok",
        "projects_root": str(ws.projects_root),
        "templates_root": str(ws.templates_root),
        "index_path": str(ws.store.path),
    }
