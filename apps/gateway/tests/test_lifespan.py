"""FastAPI lifespan 测试

测试内容：
1. 启动时根据环境变量创建 WorkspaceStore 与 GitActivityProvider
2. workspace 目录缺失不阻塞启动
"""

from pathlib import Path

from clawboard.activity import GitActivityProvider
from clawboard.core.store import WorkspaceStore
from clawboard.gateway.main import create_app, lifespan


class TestLifespan:
    async def test_state_initialized(self, monkeypatch, workspace_dir: Path):
        monkeypatch.setenv("CLAWBOARD_WORKSPACE", str(workspace_dir))
        monkeypatch.setenv("CLAWBOARD_GIT_COMMIT_LIMIT", "5")
        app = create_app()

        async with lifespan(app):
            assert isinstance(app.state.workspace_store, WorkspaceStore)
            assert app.state.workspace_store.root == workspace_dir
            assert isinstance(app.state.git_provider, GitActivityProvider)
            assert app.state.git_config.commit_limit == 5

    async def test_missing_workspace_does_not_block(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("CLAWBOARD_WORKSPACE", str(tmp_path / "nowhere"))
        app = create_app()

        async with lifespan(app):
            assert app.state.workspace_store.root == tmp_path / "nowhere"
        assert not (tmp_path / "nowhere").exists()

    def test_routes_registered(self):
        paths = {route.path for route in create_app().routes}
        for path in (
            "/api/projects",
            "/api/board/{project_id}",
            "/api/board/{project_id}/columns",
            "/api/board/{project_id}/move",
            "/api/board/{project_id}/tasks/{task_id}/comments",
            "/api/board/{project_id}/tasks/{task_id}/review-notes",
            "/api/git-log/{project_id}",
            "/api/git-diff/{project_id}/{commit_hash}",
            "/api/standup",
            "/api/home",
            "/health",
            "/ready",
        ):
            assert path in paths
