"""Board / Task Domain Model

Board 与 Project 一一对应，每次变更都是整文档替换；
Task 只能通过 Board 的 read-modify-write 周期修改。
"""

from typing import Any

from pydantic import Field, PrivateAttr, ValidationError

from .base import WorkspaceDocument
from .enums import AuthorType


class Comment(WorkspaceDocument):
    """任务评论 -- append-only，写入后不再修改或删除"""

    id: str = Field(description="评论 ID")
    author: str = Field(default="", description="作者")
    # 新评论只接受 AuthorType；磁盘上的其他取值原样保留
    author_type: AuthorType | str = Field(default=AuthorType.HUMAN, description="作者类型")
    content: str = Field(default="", description="评论内容")
    timestamp: str = Field(default="", description="评论时间（ISO-8601）")


class ReviewNotes(WorkspaceDocument):
    """评审备注 -- 每个任务单槽位，覆盖写入，不保留历史"""

    content: str = Field(default="", description="备注内容")
    updated_by: str = Field(default="", description="最后更新人")
    updated_at: str = Field(default="", description="最后更新时间（ISO-8601）")


class Task(WorkspaceDocument):
    """看板任务

    state 为自由字符串，不做状态机约束。
    """

    id: str = Field(description="看板内唯一")
    title: str = Field(default="", description="任务标题")
    state: str | None = Field(default=None, description="任务状态（自由字符串）")
    assignee: str | None = Field(default=None, description="负责人")
    priority: str | None = Field(default=None, description="优先级 p0..p3")
    created: str | None = Field(default=None, description="创建时间")
    updated: str | None = Field(default=None, description="最后更新时间")
    completed: str | None = Field(default=None, description="完成时间")
    review_type: str | None = Field(default=None, description="评审类型")
    labels: list[str] = Field(default_factory=list, description="标签")
    description: str | None = Field(default=None, description="任务描述")
    comments: list[Comment] = Field(default_factory=list, description="评论（按时间追加）")
    review_notes: ReviewNotes | None = Field(default=None, description="评审备注")


class Board(WorkspaceDocument):
    """项目看板文档（projects/<id>/board.json）"""

    project_id: str = Field(default="", description="所属项目 ID")
    last_updated: str | None = Field(default=None, description="最后写入时间")
    tasks: list[Task] = Field(default_factory=list, description="任务（按存储顺序）")

    # 无法解析的任务：(原位置, 原始 JSON)，不参与视图，写回时原样放回
    _unparsed_tasks: list[tuple[int, Any]] = PrivateAttr(default_factory=list)

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> "Board":
        """逐个任务解析看板文档

        单个任务不合法时跳过该任务，其余任务照常读取。

        Raises:
            ValidationError: 看板级字段不合法（如 tasks 不是数组）
        """
        raw_tasks = data.get("tasks")
        if not isinstance(raw_tasks, list):
            return cls.model_validate(data)

        tasks: list[Task] = []
        unparsed: list[tuple[int, Any]] = []
        for index, raw in enumerate(raw_tasks):
            try:
                tasks.append(Task.model_validate(raw))
            except ValidationError:
                unparsed.append((index, raw))

        board = cls.model_validate({**data, "tasks": tasks})
        board._unparsed_tasks = unparsed
        return board

    @property
    def unparsed_tasks(self) -> list[Any]:
        return [raw for _, raw in self._unparsed_tasks]

    def to_disk_document(self) -> dict[str, Any]:
        """写回磁盘的文档：不补默认值，未解析的任务放回原位置"""
        doc = self.to_document(exclude_unset=True)
        tasks = doc.setdefault("tasks", [])
        for index, raw in self._unparsed_tasks:
            tasks.insert(min(index, len(tasks)), raw)
        return doc

    def find_task(self, task_id: str) -> Task | None:
        """按 ID 查找任务，不存在返回 None"""
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def duplicate_task_ids(self) -> list[str]:
        """返回重复出现的任务 ID（正常情况下为空）"""
        seen: set[str] = set()
        duplicates: list[str] = []
        for task in self.tasks:
            if task.id in seen and task.id not in duplicates:
                duplicates.append(task.id)
            seen.add(task.id)
        return duplicates
