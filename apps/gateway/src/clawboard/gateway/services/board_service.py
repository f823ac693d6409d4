"""BoardService -- 看板读取与任务变更业务逻辑

所有变更都是完整的 read-modify-write 周期：
1. 校验 project_id（在任何读写之前）
2. 读取整个看板并定位任务
3. 生成修改后的任务副本
4. 原子写回整个看板（刷新 lastUpdated）

不同请求之间不加锁：并发写入同一看板时后到者胜出，
但任何读者都不会看到写到一半的文件。
"""

from collections.abc import Callable
from datetime import datetime

import structlog
from clawboard.core.aggregation import kanban_view
from clawboard.core.exceptions import TaskNotFoundError
from clawboard.core.models import (
    COMPLETED_STATES,
    AuthorType,
    Board,
    Comment,
    KanbanView,
    ReviewNotes,
    Task,
)
from clawboard.core.store import WorkspaceStore
from clawboard.core.timestamps import advance_timestamp, now_iso
from clawboard.core.validation import validate_project_id
from ulid import ULID

log = structlog.get_logger()


class BoardService:
    """看板业务服务"""

    def __init__(self, store: WorkspaceStore) -> None:
        self._store = store

    async def get_board(self, project_id: str) -> Board:
        """读取看板；缺失或损坏时为空看板"""
        project_id = validate_project_id(project_id)
        return await self._store.read_board(project_id)

    async def get_kanban(
        self,
        project_id: str,
        show_all_done: bool = False,
        show_all_backlog: bool = False,
        now: datetime | None = None,
    ) -> KanbanView:
        """看板列视图"""
        board = await self.get_board(project_id)
        view = kanban_view(board, show_all_done, show_all_backlog, now=now)
        if not view.project_id:
            view = view.model_copy(update={"project_id": project_id})
        return view

    async def move_task(self, project_id: str, task_id: str, new_state: str) -> Board:
        """把任务移动到 new_state

        不校验状态流转合法性；进入完成态且尚无 completed 时间时记录完成时间。

        Raises:
            InvalidIdentifierError: project_id 不合法
            TaskNotFoundError: 看板中没有该任务（未写入）
            WriteFailureError: 写入失败（原看板不变）
        """

        def _move(task: Task) -> Task:
            updated = advance_timestamp(task.updated)
            changes: dict = {"state": new_state, "updated": updated}
            if new_state in COMPLETED_STATES and not task.completed:
                changes["completed"] = updated
            return task.model_copy(update=changes)

        board = await self._mutate_task(project_id, task_id, _move)
        log.info(
            "task_moved",
            project_id=project_id,
            task_id=task_id,
            new_state=new_state,
        )
        return board

    async def add_comment(
        self,
        project_id: str,
        task_id: str,
        author: str,
        content: str,
        author_type: AuthorType = AuthorType.HUMAN,
    ) -> Board:
        """在任务末尾追加一条评论（append-only）"""
        comment = Comment(
            id=f"c-{ULID()}",
            author=author,
            author_type=author_type,
            content=content,
            timestamp=now_iso(),
        )

        def _append(task: Task) -> Task:
            return task.model_copy(update={"comments": [*task.comments, comment]})

        board = await self._mutate_task(project_id, task_id, _append)
        log.info(
            "task_comment_added",
            project_id=project_id,
            task_id=task_id,
            comment_id=comment.id,
            author_type=str(author_type),
        )
        return board

    async def update_review_notes(
        self,
        project_id: str,
        task_id: str,
        content: str,
        updated_by: str,
    ) -> Board:
        """覆盖任务的评审备注（单槽位，不保留历史），同时推进任务 updated"""

        def _set_notes(task: Task) -> Task:
            updated = advance_timestamp(task.updated)
            notes = ReviewNotes(content=content, updated_by=updated_by, updated_at=updated)
            return task.model_copy(update={"review_notes": notes, "updated": updated})

        board = await self._mutate_task(project_id, task_id, _set_notes)
        log.info(
            "task_review_notes_updated",
            project_id=project_id,
            task_id=task_id,
            content_length=len(content),
        )
        return board

    async def _mutate_task(
        self,
        project_id: str,
        task_id: str,
        mutate: Callable[[Task], Task],
    ) -> Board:
        project_id = validate_project_id(project_id)
        board = await self._store.read_board(project_id)

        # 重复 ID 时只修改第一个匹配项
        index = next((i for i, t in enumerate(board.tasks) if t.id == task_id), None)
        if index is None:
            log.info("task_not_found", project_id=project_id, task_id=task_id)
            raise TaskNotFoundError(project_id, task_id)

        tasks = list(board.tasks)
        tasks[index] = mutate(tasks[index])
        return await self._store.write_board(
            project_id, board.model_copy(update={"tasks": tasks})
        )
