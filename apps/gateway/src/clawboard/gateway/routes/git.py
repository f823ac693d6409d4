"""git 活动路由

GET /api/git-log/{project_id}: 最近提交 + 日期分组；git 失败时空列表 + warning
GET /api/git-diff/{project_id}/{commit_hash}: 单个提交 diff；失败时 "Diff not available"

非法项目 ID / commit hash 返回 400，且不会启动任何子进程。
"""

from clawboard.activity import GitActivityProvider
from clawboard.core.exceptions import InvalidIdentifierError
from fastapi import APIRouter, Depends

from ..deps import get_git_provider
from ..errors import board_error_response
from ..services.activity_service import ActivityService

router = APIRouter()


@router.get("/api/git-log/{project_id}")
async def git_log(
    project_id: str,
    provider: GitActivityProvider = Depends(get_git_provider),
):
    """最近触及项目目录的提交"""
    try:
        return await ActivityService(provider).list_commits(project_id)
    except InvalidIdentifierError as e:
        return board_error_response(e)


@router.get("/api/git-diff/{project_id}/{commit_hash}")
async def git_diff(
    project_id: str,
    commit_hash: str,
    provider: GitActivityProvider = Depends(get_git_provider),
):
    """单个提交的 stat + patch"""
    try:
        return await ActivityService(provider).get_diff(project_id, commit_hash)
    except InvalidIdentifierError as e:
        return board_error_response(e)
