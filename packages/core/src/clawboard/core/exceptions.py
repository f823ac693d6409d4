"""Core 异常体系

InvalidIdentifierError 在任何 I/O 之前抛出；文档缺失不是错误，因此没有 NotFound 异常。
"""


class BoardError(Exception):
    """clawboard core 基础异常"""


class InvalidIdentifierError(BoardError, ValueError):
    """外部传入的标识符（项目 ID、commit hash）不合法

    此异常保证在任何文件路径拼接或子进程启动之前抛出，无副作用。
    """

    def __init__(self, kind: str, value: object, reason: str) -> None:
        """
        Args:
            kind: 标识符类型（"project_id" / "commit_hash"）
            value: 被拒绝的原始值
            reason: 拒绝原因
        """
        super().__init__(f"Invalid {kind}: {reason}")
        self.kind = kind
        self.value = value
        self.reason = reason


class TaskNotFoundError(BoardError):
    """看板中不存在指定 task_id"""

    def __init__(self, project_id: str, task_id: str) -> None:
        super().__init__(f"Task {task_id} not found in project {project_id}")
        self.project_id = project_id
        self.task_id = task_id


class WriteFailureError(BoardError):
    """原子写入失败（磁盘错误、权限不足等）

    写入失败必须显式上报给调用方，静默丢弃会破坏用户意图。
    """

    def __init__(self, path: str, original_error: Exception) -> None:
        super().__init__(f"Failed to write {path}: {original_error}")
        self.path = path
        self.original_error = original_error
