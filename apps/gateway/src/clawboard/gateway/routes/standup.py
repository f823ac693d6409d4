"""standup 路由

GET /api/standup: 最新 standup 原文与分区解析结果；缺失时为空。
"""

from clawboard.core.store import WorkspaceStore
from fastapi import APIRouter, Depends

from ..deps import get_workspace_store
from ..services.dashboard_service import DashboardService

router = APIRouter()


@router.get("/api/standup")
async def get_standup(store: WorkspaceStore = Depends(get_workspace_store)):
    content, sections = await DashboardService(store).get_standup()
    return {"content": content, "sections": sections.to_payload()}
