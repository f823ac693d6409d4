"""clawboard Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .base import WorkspaceDocument
from .board import Board, Comment, ReviewNotes, Task
from .enums import (
    COMPLETED_STATES,
    IN_PROGRESS_STATES,
    PLANNED_STATES,
    PRIORITY_RANK,
    REVIEW_STATES,
    SAM_REQUIRED_REVIEW,
    UNSPECIFIED_PRIORITY_RANK,
    AuthorType,
    ColumnKey,
)
from .project import Project, ProjectList
from .views import KanbanView, ProjectCard, ReviewQueueItem, StandupSections, ViewModel

__all__ = [
    # 枚举与常量
    "ColumnKey",
    "AuthorType",
    "COMPLETED_STATES",
    "IN_PROGRESS_STATES",
    "REVIEW_STATES",
    "PLANNED_STATES",
    "SAM_REQUIRED_REVIEW",
    "PRIORITY_RANK",
    "UNSPECIFIED_PRIORITY_RANK",
    # 文档
    "WorkspaceDocument",
    "Project",
    "ProjectList",
    "Board",
    "Task",
    "Comment",
    "ReviewNotes",
    # 派生视图
    "ViewModel",
    "ProjectCard",
    "ReviewQueueItem",
    "StandupSections",
    "KanbanView",
]
