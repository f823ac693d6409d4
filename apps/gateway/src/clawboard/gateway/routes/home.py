"""首页路由

GET /api/home: 项目卡片 + 跨项目评审队列 + standup，一次请求返回。
"""

from clawboard.core.store import WorkspaceStore
from fastapi import APIRouter, Depends

from ..deps import get_workspace_store
from ..services.dashboard_service import DashboardService

router = APIRouter()


@router.get("/api/home")
async def get_home(store: WorkspaceStore = Depends(get_workspace_store)):
    return await DashboardService(store).get_home()
