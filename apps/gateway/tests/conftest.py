"""apps/gateway 测试配置 -- 临时 workspace + httpx AsyncClient"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest_asyncio
from clawboard.activity import GitActivityProvider, GitConfig
from clawboard.core.store import create_workspace_store
from httpx import ASGITransport, AsyncClient


@pytest_asyncio.fixture
async def app(workspace_dir: Path, monkeypatch):
    """创建测试用 FastAPI app 实例

    ASGITransport 不触发 lifespan，这里手动初始化 app.state。
    """
    monkeypatch.setenv("CLAWBOARD_WORKSPACE", str(workspace_dir))
    monkeypatch.setenv("LOGFIRE_SEND_TO_LOGFIRE", "false")

    from clawboard.gateway.main import create_app

    application = create_app()
    store = create_workspace_store(workspace_dir)
    application.state.workspace_store = store
    application.state.git_provider = GitActivityProvider(store.root, GitConfig())
    return application


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient 用于测试"""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
