"""健康检查路由

GET /health: Liveness 检查，永远返回 200。
GET /ready: Readiness 检查，包含 workspace 目录、磁盘空间、git 可执行文件。
"""

import asyncio
import shutil

import structlog
from fastapi import APIRouter, Request
from starlette.responses import JSONResponse

log = structlog.get_logger()

router = APIRouter()


@router.get("/health")
async def health():
    """Liveness 检查 -- 永远返回 200"""
    return {"status": "ok"}


@router.get("/ready")
async def ready(request: Request):
    """Readiness 检查

    检查项：
    1. workspace: workspace 根目录存在（缺失时 503）
    2. disk_space_mb: workspace 所在磁盘剩余空间
    3. git: git 可执行文件可用性（不可用只影响活动视图，不影响 ready）
    """
    checks: dict = {}
    all_ok = True

    store = request.app.state.workspace_store
    workspace_ok = await asyncio.to_thread(store.root.is_dir)
    if workspace_ok:
        checks["workspace"] = "ok"
    else:
        checks["workspace"] = "error: directory does not exist"
        all_ok = False

    try:
        disk_usage = await asyncio.to_thread(
            shutil.disk_usage, store.root if workspace_ok else "/"
        )
        checks["disk_space_mb"] = disk_usage.free // (1024 * 1024)
    except OSError as e:
        log.warning("ready_disk_check_failed", error_type=type(e).__name__)
        checks["disk_space_mb"] = 0
        all_ok = False

    git_provider = request.app.state.git_provider
    checks["git"] = "ok" if git_provider.is_available() else "unavailable"

    status_code = 200 if all_ok else 503
    return JSONResponse(
        status_code=status_code,
        content={
            "status": "ready" if all_ok else "not_ready",
            "checks": checks,
        },
    )
