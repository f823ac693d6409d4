"""ActivityService -- git 活动的降级包装

git 不可用、非仓库、超时等情况对前端来说都是"暂无历史"，
这里把 GitError 转换为带 warning 的空结果，只有非法标识符向上抛出。
"""

import structlog
from clawboard.activity import (
    DIFF_NOT_AVAILABLE,
    GitActivityProvider,
    GitError,
    group_commits_by_date,
)

log = structlog.get_logger()

NO_GIT_HISTORY_WARNING = "No git history available"


class ActivityService:
    """git 活动服务"""

    def __init__(self, provider: GitActivityProvider) -> None:
        self._provider = provider

    async def list_commits(self, project_id: str) -> dict:
        """{commits, groups}；git 失败时 {commits: [], groups: [], warning}

        Raises:
            InvalidIdentifierError: project_id 不合法（未启动子进程）
        """
        try:
            commits = await self._provider.list_commits(project_id)
        except GitError as e:
            log.info(
                "git_log_unavailable",
                project_id=project_id,
                error_type=type(e).__name__,
                recoverable=e.recoverable,
            )
            return {"commits": [], "groups": [], "warning": NO_GIT_HISTORY_WARNING}

        return {
            "commits": [c.model_dump(mode="json", by_alias=True) for c in commits],
            "groups": [
                g.model_dump(mode="json", by_alias=True)
                for g in group_commits_by_date(commits)
            ],
        }

    async def get_diff(self, project_id: str, commit_hash: str) -> dict:
        """{diff}；任何 git 失败时为 "Diff not available" """
        diff = await self._provider.get_diff(project_id, commit_hash)
        if diff == DIFF_NOT_AVAILABLE:
            log.debug("git_diff_sentinel_returned", project_id=project_id)
        return {"diff": diff}
