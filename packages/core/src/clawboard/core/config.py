"""配置常量模块 -- 可通过环境变量覆盖

包含 workspace 根目录、各文档的相对路径、看板视图的窗口/截断阈值等可配置常量。
"""

import os
from pathlib import Path


def get_workspace_dir() -> Path:
    """获取 workspace 根目录（所有项目/看板/standup 文档的唯一持久化位置）"""
    return Path(
        os.environ.get(
            "CLAWBOARD_WORKSPACE",
            str(Path.home() / ".openclaw" / "workspace"),
        )
    )


# workspace 内的固定相对路径
PROJECTS_FILE: str = "state/projects.json"
PROJECTS_DIR: str = "projects"
BOARD_FILE_NAME: str = "board.json"
STANDUP_FILE: str = "standup-latest.md"

# Done 列默认只展示最近 N 天完成的任务
DONE_WINDOW_DAYS: int = int(os.environ.get("CLAWBOARD_DONE_WINDOW_DAYS", "7"))

# Backlog 列默认截断条数
BACKLOG_LIMIT: int = int(os.environ.get("CLAWBOARD_BACKLOG_LIMIT", "10"))

# Review 队列中评审备注预览截断长度
REVIEW_NOTES_PREVIEW_LENGTH: int = 100
