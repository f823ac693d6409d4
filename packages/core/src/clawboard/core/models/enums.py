"""枚举与状态常量

Task.state 是自由字符串（驱动状态的工作流在外部演进），
这里只定义看板列的归类规则和优先级排序，不做状态流转合法性校验。
"""

from enum import StrEnum


class ColumnKey(StrEnum):
    """Kanban 列（固定五列，展示顺序即定义顺序）"""

    BACKLOG = "backlog"
    PLANNED = "planned"
    IN_PROGRESS = "in-progress"
    REVIEW = "review"
    DONE = "done"


class AuthorType(StrEnum):
    """评论作者类型"""

    HUMAN = "human"
    AGENT = "agent"


# state -> 列 的归类集合；不在任何集合中的 state（含缺失）归入 backlog
COMPLETED_STATES: frozenset[str] = frozenset({"done", "completed"})
IN_PROGRESS_STATES: frozenset[str] = frozenset({"in-progress", "active"})
REVIEW_STATES: frozenset[str] = frozenset({"review", "in-review"})
PLANNED_STATES: frozenset[str] = frozenset({"planned"})

# 需要指定评审人签字的 reviewType
SAM_REQUIRED_REVIEW = "sam-required"

# 优先级排序：p0 < p1 < p2 < p3 < 未指定
PRIORITY_RANK: dict[str, int] = {"p0": 0, "p1": 1, "p2": 2, "p3": 3}
UNSPECIFIED_PRIORITY_RANK = 9
