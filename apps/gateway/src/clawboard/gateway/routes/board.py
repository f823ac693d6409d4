"""看板路由

GET  /api/board/{project_id}: 看板文档（缺失时为空看板）
GET  /api/board/{project_id}/columns: Kanban 列视图
POST /api/board/{project_id}/move: 移动任务到新状态
POST /api/board/{project_id}/tasks/{task_id}/comments: 追加评论
PUT  /api/board/{project_id}/tasks/{task_id}/review-notes: 覆盖评审备注

错误响应：
- 400 INVALID_IDENTIFIER: 项目 ID 不合法（未读写任何文件）
- 404 TASK_NOT_FOUND: 看板中没有该任务（未写入）
- 500 WRITE_FAILED: 写入失败（原看板不变）
"""

from clawboard.core.exceptions import BoardError
from clawboard.core.models import AuthorType
from clawboard.core.store import WorkspaceStore
from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..deps import get_workspace_store
from ..errors import board_error_response
from ..services.board_service import BoardService

router = APIRouter()


class BoardRequest(BaseModel):
    """请求体基类（camelCase 字段）"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MoveTaskRequest(BoardRequest):
    """移动任务请求体"""

    task_id: str = Field(min_length=1, description="任务 ID")
    new_state: str = Field(min_length=1, description="目标状态（自由字符串）")


class AddCommentRequest(BoardRequest):
    """追加评论请求体"""

    author: str = Field(min_length=1, description="作者")
    author_type: AuthorType = Field(default=AuthorType.HUMAN, description="作者类型")
    content: str = Field(min_length=1, description="评论内容")


class ReviewNotesRequest(BoardRequest):
    """评审备注请求体"""

    content: str = Field(description="备注内容（空字符串表示清空）")
    updated_by: str = Field(min_length=1, description="更新人")


@router.get("/api/board/{project_id}")
async def get_board(
    project_id: str,
    store: WorkspaceStore = Depends(get_workspace_store),
):
    """看板文档"""
    try:
        board = await BoardService(store).get_board(project_id)
    except BoardError as e:
        return board_error_response(e)
    return board.to_document()


@router.get("/api/board/{project_id}/columns")
async def get_columns(
    project_id: str,
    show_all_done: bool = Query(default=False, alias="showAllDone"),
    show_all_backlog: bool = Query(default=False, alias="showAllBacklog"),
    store: WorkspaceStore = Depends(get_workspace_store),
):
    """Kanban 列视图，totals 为过滤前每列任务数"""
    try:
        view = await BoardService(store).get_kanban(
            project_id,
            show_all_done=show_all_done,
            show_all_backlog=show_all_backlog,
        )
    except BoardError as e:
        return board_error_response(e)
    return view.to_payload()


@router.post("/api/board/{project_id}/move")
async def move_task(
    project_id: str,
    body: MoveTaskRequest,
    store: WorkspaceStore = Depends(get_workspace_store),
):
    """移动任务，返回写入后的完整看板"""
    try:
        board = await BoardService(store).move_task(project_id, body.task_id, body.new_state)
    except BoardError as e:
        return board_error_response(e)
    return board.to_document()


@router.post("/api/board/{project_id}/tasks/{task_id}/comments")
async def add_comment(
    project_id: str,
    task_id: str,
    body: AddCommentRequest,
    store: WorkspaceStore = Depends(get_workspace_store),
):
    """追加评论，返回写入后的完整看板"""
    try:
        board = await BoardService(store).add_comment(
            project_id,
            task_id,
            author=body.author,
            content=body.content,
            author_type=body.author_type,
        )
    except BoardError as e:
        return board_error_response(e)
    return board.to_document()


@router.put("/api/board/{project_id}/tasks/{task_id}/review-notes")
async def update_review_notes(
    project_id: str,
    task_id: str,
    body: ReviewNotesRequest,
    store: WorkspaceStore = Depends(get_workspace_store),
):
    """覆盖评审备注，返回写入后的完整看板"""
    try:
        board = await BoardService(store).update_review_notes(
            project_id,
            task_id,
            content=body.content,
            updated_by=body.updated_by,
        )
    except BoardError as e:
        return board_error_response(e)
    return board.to_document()
