"""clawboard Activity -- workspace git 活动读取层

packages/activity 的公开接口导出。
"""

# 核心组件
from .client import DIFF_NOT_AVAILABLE, GitActivityProvider

# 配置
from .config import GitConfig, load_git_config

# 异常
from .exceptions import GitCommandError, GitError, GitTimeoutError, GitUnavailableError

# 数据模型
from .models import CommitGroup, GitCommit
from .runner import run_git
from .timeline import group_commits_by_date

__all__ = [
    "GitCommit",
    "CommitGroup",
    "GitActivityProvider",
    "DIFF_NOT_AVAILABLE",
    "run_git",
    "group_commits_by_date",
    "GitConfig",
    "load_git_config",
    "GitError",
    "GitCommandError",
    "GitTimeoutError",
    "GitUnavailableError",
]
