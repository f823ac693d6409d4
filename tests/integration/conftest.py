"""集成测试共享 fixture"""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest_asyncio
from clawboard.activity import GitActivityProvider, load_git_config
from clawboard.core.store import create_workspace_store
from httpx import ASGITransport, AsyncClient


@pytest_asyncio.fixture
async def integration_app(workspace_dir: Path, monkeypatch):
    """集成测试用 FastAPI app"""
    monkeypatch.setenv("CLAWBOARD_WORKSPACE", str(workspace_dir))
    monkeypatch.setenv("LOGFIRE_SEND_TO_LOGFIRE", "false")

    from clawboard.gateway.main import create_app

    app = create_app()
    store = create_workspace_store(workspace_dir)
    app.state.workspace_store = store
    app.state.git_provider = GitActivityProvider(store.root, load_git_config())
    return app


@pytest_asyncio.fixture
async def client(integration_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=integration_app),
        base_url="http://test",
    ) as ac:
        yield ac
