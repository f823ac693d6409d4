"""依赖注入模块 -- 通过 FastAPI Depends 注入 Store / Provider 实例

实例通过 app.state 管理，在 lifespan 中初始化。
"""

from clawboard.activity import GitActivityProvider
from clawboard.core.store import WorkspaceStore
from fastapi import Request


def get_workspace_store(request: Request) -> WorkspaceStore:
    """从 app.state 获取 WorkspaceStore 实例"""
    return request.app.state.workspace_store


def get_git_provider(request: Request) -> GitActivityProvider:
    """从 app.state 获取 GitActivityProvider 实例"""
    return request.app.state.git_provider
