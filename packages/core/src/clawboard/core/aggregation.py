"""看板派生视图 -- 纯函数

把原始的 Board / Project 文档转换为前端需要的形状：
Kanban 列、跨项目评审队列、首页项目卡片。所有函数无 I/O、无副作用，
相同输入总是得到相同输出（排序均为稳定排序）。
"""

from collections.abc import Iterable
from datetime import UTC, datetime, timedelta

from .config import BACKLOG_LIMIT, DONE_WINDOW_DAYS, REVIEW_NOTES_PREVIEW_LENGTH
from .models.board import Board, Task
from .models.enums import (
    COMPLETED_STATES,
    IN_PROGRESS_STATES,
    PLANNED_STATES,
    PRIORITY_RANK,
    REVIEW_STATES,
    SAM_REQUIRED_REVIEW,
    UNSPECIFIED_PRIORITY_RANK,
    ColumnKey,
)
from .models.project import Project
from .models.views import KanbanView, ProjectCard, ReviewQueueItem
from .timestamps import parse_timestamp


def classify(task: Task) -> ColumnKey:
    """state -> Kanban 列（全函数，未知或缺失的 state 归入 backlog）"""
    state = task.state
    if state in COMPLETED_STATES:
        return ColumnKey.DONE
    if state in IN_PROGRESS_STATES:
        return ColumnKey.IN_PROGRESS
    if state in REVIEW_STATES:
        return ColumnKey.REVIEW
    if state in PLANNED_STATES:
        return ColumnKey.PLANNED
    return ColumnKey.BACKLOG


def priority_rank(priority: str | None) -> int:
    """p0 < p1 < p2 < p3 < 未指定（大小写不敏感）"""
    if not priority:
        return UNSPECIFIED_PRIORITY_RANK
    return PRIORITY_RANK.get(priority.lower(), UNSPECIFIED_PRIORITY_RANK)


def is_completed(task: Task) -> bool:
    return task.state in COMPLETED_STATES


def needs_review(task: Task) -> bool:
    """处于 review 列，或要求 sam 评审且尚未完成"""
    if classify(task) == ColumnKey.REVIEW:
        return True
    return task.review_type == SAM_REQUIRED_REVIEW and not is_completed(task)


def effective_date(task: Task) -> str | None:
    """Done 列窗口判断使用的日期：completed -> updated -> created"""
    return task.completed or task.updated or task.created


def _column_sort_key(task: Task) -> tuple[int, str]:
    # 创建时间按 ISO-8601 字典序比较；缺失的排在最前
    return priority_rank(task.priority), task.created or ""


def _empty_columns() -> dict[ColumnKey, list[Task]]:
    return {key: [] for key in ColumnKey}


def group_by_column(
    tasks: Iterable[Task],
    show_all_done: bool = False,
    show_all_backlog: bool = False,
    now: datetime | None = None,
) -> dict[ColumnKey, list[Task]]:
    """按列分组并排序

    - done: 有效日期早于 now - DONE_WINDOW_DAYS 的任务被排除（show_all_done 时保留）；
      有效日期缺失或无法解析的任务保留
    - 每列按 (优先级, 创建时间) 稳定排序
    - backlog: 排序后截断为前 BACKLOG_LIMIT 条（show_all_backlog 时不截断）
    """
    now = now or datetime.now(UTC)
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    cutoff = now - timedelta(days=DONE_WINDOW_DAYS)
    groups = _empty_columns()

    for task in tasks:
        column = classify(task)
        if column == ColumnKey.DONE and not show_all_done:
            done_at = parse_timestamp(effective_date(task))
            if done_at is not None and done_at < cutoff:
                continue
        groups[column].append(task)

    for column in groups:
        groups[column].sort(key=_column_sort_key)

    if not show_all_backlog:
        groups[ColumnKey.BACKLOG] = groups[ColumnKey.BACKLOG][:BACKLOG_LIMIT]

    return groups


def column_totals(tasks: Iterable[Task]) -> dict[ColumnKey, int]:
    """每列任务总数（过滤/截断之前）"""
    totals = {key: 0 for key in ColumnKey}
    for task in tasks:
        totals[classify(task)] += 1
    return totals


def kanban_view(
    board: Board,
    show_all_done: bool = False,
    show_all_backlog: bool = False,
    now: datetime | None = None,
) -> KanbanView:
    """构建单个项目的看板列视图"""
    return KanbanView(
        project_id=board.project_id,
        last_updated=board.last_updated,
        columns=group_by_column(board.tasks, show_all_done, show_all_backlog, now=now),
        totals=column_totals(board.tasks),
        show_all_done=show_all_done,
        show_all_backlog=show_all_backlog,
    )


def _preview(text: str | None) -> str | None:
    if not text or len(text) <= REVIEW_NOTES_PREVIEW_LENGTH:
        return text or None
    return text[:REVIEW_NOTES_PREVIEW_LENGTH] + "\u2026"


def _review_item(project: Project, task: Task) -> ReviewQueueItem:
    notes = task.review_notes.content if task.review_notes else None
    return ReviewQueueItem(
        task_id=task.id,
        title=task.title,
        project_name=project.name,
        project_id=project.id,
        assignee=task.assignee or "unassigned",
        priority=task.priority or "p3",
        updated=task.updated or task.created or "",
        review_notes=notes,
        review_notes_preview=_preview(notes),
    )


def review_queue(entries: Iterable[tuple[Project, Board | None]]) -> list[ReviewQueueItem]:
    """跨项目评审队列

    按优先级升序，同优先级按 updated 降序（最近更新在前）。
    两次稳定排序：先按次要键，再按主要键。
    """
    items = [
        _review_item(project, task)
        for project, board in entries
        if board is not None
        for task in board.tasks
        if needs_review(task)
    ]
    items.sort(key=lambda item: item.updated, reverse=True)
    items.sort(key=lambda item: priority_rank(item.priority))
    return items


def project_card(project: Project, board: Board | None) -> ProjectCard:
    """首页项目卡片：进行中数量、待评审数量、最后更新时间"""
    tasks = board.tasks if board is not None else []
    return ProjectCard(
        project=project,
        board=board,
        tasks_in_progress=sum(1 for t in tasks if classify(t) == ColumnKey.IN_PROGRESS),
        tasks_needing_review=sum(1 for t in tasks if needs_review(t)),
        last_update=board.last_updated if board is not None else None,
    )
