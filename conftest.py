"""全局 pytest 配置 -- 临时 workspace + 文档构造 + git 仓库 fixture"""

import json
import os
import shutil
import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest
import structlog


@pytest.fixture(autouse=True)
def _reset_structlog():
    """测试间隔离：还原被 CLI main() 等改写的全局 structlog 配置"""
    yield
    structlog.reset_defaults()


def _write_json(path: Path, data: object) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def workspace_dir(tmp_path: Path) -> Path:
    """提供空的临时 workspace 根目录"""
    workspace = tmp_path / "workspace"
    workspace.mkdir(parents=True, exist_ok=True)
    return workspace


@pytest.fixture
def write_projects(workspace_dir: Path) -> Callable[..., Path]:
    """写入 state/projects.json"""

    def _write(projects: list[dict], archived: list | None = None) -> Path:
        return _write_json(
            workspace_dir / "state" / "projects.json",
            {"projects": projects, "archived": archived or []},
        )

    return _write


@pytest.fixture
def write_board(workspace_dir: Path) -> Callable[..., Path]:
    """写入 projects/<id>/board.json"""

    def _write(project_id: str, tasks: list[dict], **extra) -> Path:
        return _write_json(
            workspace_dir / "projects" / project_id / "board.json",
            {"projectId": project_id, "tasks": tasks, **extra},
        )

    return _write


@pytest.fixture
def git_commit(workspace_dir: Path) -> Callable[..., str]:
    """把 workspace 初始化为 git 仓库，返回提交函数

    提交函数签名：(相对路径, 文件内容, 提交信息, date=None) -> commit hash
    没有 git 可执行文件时跳过测试。
    """
    if shutil.which("git") is None:
        pytest.skip("git 不可用")

    env = {
        **os.environ,
        "GIT_CONFIG_NOSYSTEM": "1",
        "GIT_AUTHOR_NAME": "Board Tester",
        "GIT_AUTHOR_EMAIL": "tester@example.com",
        "GIT_COMMITTER_NAME": "Board Tester",
        "GIT_COMMITTER_EMAIL": "tester@example.com",
    }

    def _git(*args: str, extra_env: dict | None = None) -> str:
        result = subprocess.run(
            ["git", *args],
            cwd=workspace_dir,
            env={**env, **(extra_env or {})},
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout.strip()

    _git("init", "-q")
    _git("config", "commit.gpgsign", "false")

    def _commit(rel_path: str, content: str, message: str, date: str | None = None) -> str:
        target = workspace_dir / rel_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        _git("add", rel_path)
        dates = {"GIT_AUTHOR_DATE": date, "GIT_COMMITTER_DATE": date} if date else None
        _git("commit", "-q", "-m", message, extra_env=dates)
        return _git("rev-parse", "HEAD")

    return _commit
