"""clawboard Core Store -- workspace 文件存储实现

提供工厂函数创建指向某个 workspace 根目录的 Store 实例。
"""

from pathlib import Path

from .atomic import atomic_write_text
from .workspace_store import WorkspaceStore


def create_workspace_store(workspace_dir: str | Path) -> WorkspaceStore:
    """创建 WorkspaceStore

    workspace 目录不存在时不创建：缺失的 workspace 等价于空 workspace，
    首次写入看板时才会创建所需目录。
    """
    return WorkspaceStore(Path(workspace_dir).expanduser())


__all__ = [
    "WorkspaceStore",
    "create_workspace_store",
    "atomic_write_text",
]
