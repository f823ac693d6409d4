"""FastAPI 应用主文件

app 创建 + lifespan 管理：WorkspaceStore / GitActivityProvider 初始化 + 路由注册。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from clawboard.activity import GitActivityProvider, load_git_config
from clawboard.core.config import get_workspace_dir
from clawboard.core.store import create_workspace_store
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .middleware.logging_config import setup_logfire, setup_logging
from .middleware.logging_mw import LoggingMiddleware
from .middleware.trace_mw import TraceMiddleware
from .routes import board, git, health, home, projects, standup

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """应用生命周期管理：启动时创建 Store 与 git Provider

    workspace 目录缺失不阻塞启动：读取全部返回空默认值，/ready 报告 503。
    """
    store = create_workspace_store(get_workspace_dir())
    app.state.workspace_store = store

    git_config = load_git_config()
    git_provider = GitActivityProvider(store.root, git_config)
    app.state.git_config = git_config
    app.state.git_provider = git_provider

    log.info(
        "workspace_initialized",
        workspace=str(store.root),
        workspace_exists=store.root.is_dir(),
        git_binary=git_config.git_binary,
        git_available=git_provider.is_available(),
    )

    yield


def create_app() -> FastAPI:
    """创建 FastAPI 应用实例"""
    app = FastAPI(
        title="clawboard Gateway",
        version="0.1.0",
        description="workspace 项目看板 API",
        lifespan=lifespan,
    )

    # 注册中间件（顺序：先 Trace 后 Logging，Logging 在最外层）
    app.add_middleware(TraceMiddleware)
    app.add_middleware(LoggingMiddleware)
    # 面板可能由其他端口的开发服务器加载，允许任意来源
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    setup_logging(workspace=get_workspace_dir())
    setup_logfire()

    app.include_router(projects.router, tags=["projects"])
    app.include_router(board.router, tags=["board"])
    app.include_router(git.router, tags=["git"])
    app.include_router(standup.router, tags=["standup"])
    app.include_router(home.router, tags=["home"])
    app.include_router(health.router, tags=["health"])

    return app


# 默认 app 实例（uvicorn 入口）
app = create_app()
