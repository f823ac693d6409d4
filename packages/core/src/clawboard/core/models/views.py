"""派生视图模型 -- 每次读取时重新计算，从不持久化"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .board import Board, Task
from .enums import ColumnKey
from .project import Project


class ViewModel(BaseModel):
    """派生视图基类（响应体使用 camelCase）"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class ProjectCard(ViewModel):
    """首页项目卡片"""

    project: Project
    board: Board | None = None
    tasks_in_progress: int = 0
    tasks_needing_review: int = 0
    last_update: str | None = None


class ReviewQueueItem(ViewModel):
    """跨项目评审队列条目"""

    task_id: str
    title: str
    project_name: str
    project_id: str
    assignee: str = "unassigned"
    priority: str = "p3"
    updated: str = ""
    review_notes: str | None = None
    review_notes_preview: str | None = None


class StandupSections(ViewModel):
    """standup 文本解析结果"""

    completed: list[str] = Field(default_factory=list)
    in_progress: list[str] = Field(default_factory=list)
    needs_attention: list[str] = Field(default_factory=list)


class KanbanView(ViewModel):
    """看板列视图

    columns 为过滤/截断后的结果，totals 为过滤前每列的任务数，
    前端据此渲染 "View all (N total)"。
    """

    project_id: str
    last_updated: str | None = None
    columns: dict[ColumnKey, list[Task]]
    totals: dict[ColumnKey, int]
    show_all_done: bool = False
    show_all_backlog: bool = False
