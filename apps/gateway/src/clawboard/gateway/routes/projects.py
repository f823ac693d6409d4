"""项目列表路由

GET /api/projects: state/projects.json 原样结构；缺失时为空列表。
"""

from clawboard.core.store import WorkspaceStore
from fastapi import APIRouter, Depends

from ..deps import get_workspace_store
from ..services.dashboard_service import DashboardService

router = APIRouter()


@router.get("/api/projects")
async def list_projects(store: WorkspaceStore = Depends(get_workspace_store)):
    """项目列表 {projects, archived}"""
    project_list = await DashboardService(store).list_projects()
    return project_list.to_document()
