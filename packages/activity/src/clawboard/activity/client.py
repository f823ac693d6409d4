"""GitActivityProvider -- 项目目录的提交历史与单个提交的 diff

所有命令都以 workspace 根目录为 cwd，并用 `-- projects/<id>` 限定路径。
项目 ID 与 commit hash 在启动任何子进程之前校验；校验失败直接抛出
InvalidIdentifierError，不会产生任何子进程。
"""

import asyncio
import shutil
from pathlib import Path

import structlog

from clawboard.core.config import PROJECTS_DIR
from clawboard.core.exceptions import InvalidIdentifierError
from clawboard.core.validation import validate_commit_hash, validate_project_id

from .config import GitConfig
from .exceptions import GitError
from .models import GitCommit
from .runner import run_git

log = structlog.get_logger()

# 字段分隔符：三个控制字符，不会出现在作者名或提交标题中
FIELD_SEPARATOR = "\x1e\x1f\x1e"
_FORMAT_SEPARATOR = "%x1e%x1f%x1e"
LOG_FORMAT = _FORMAT_SEPARATOR.join(("%H", "%an", "%aI", "%s"))

DIFF_NOT_AVAILABLE = "Diff not available"
DIFF_TRUNCATED_MARKER = "\n... diff truncated ({omitted} bytes omitted) ...\n"


def parse_log_output(output: str) -> list[GitCommit]:
    """解析 `git log --format=LOG_FORMAT` 的输出

    每行一个提交；字段不足的行被跳过，标题部分为第三个分隔符之后的全部内容。
    """
    commits: list[GitCommit] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        parts = line.split(FIELD_SEPARATOR, 3)
        if len(parts) < 3:
            log.debug("git_log_line_skipped", line=line[:80])
            continue
        commit_hash, author, timestamp = parts[0], parts[1], parts[2]
        message = parts[3] if len(parts) == 4 else ""
        commits.append(
            GitCommit(
                hash=commit_hash.strip(),
                author=author,
                timestamp=timestamp,
                message=message,
            )
        )
    return commits


class GitActivityProvider:
    """workspace git 仓库的只读活动视图"""

    def __init__(self, workspace_root: Path, config: GitConfig | None = None) -> None:
        """
        Args:
            workspace_root: workspace 根目录（git 命令的 cwd）
            config: Git 配置，None 时使用默认值
        """
        self._workspace_root = Path(workspace_root)
        self._config = config or GitConfig()

    @property
    def config(self) -> GitConfig:
        return self._config

    def _pathspec(self, project_id: str) -> str:
        return f"{PROJECTS_DIR}/{project_id}"

    async def _run(self, args: list[str], timeout_s: float) -> str:
        return await run_git(
            args,
            cwd=self._workspace_root,
            timeout_s=timeout_s,
            git_binary=self._config.git_binary,
        )

    async def list_commits(self, project_id: str, limit: int | None = None) -> list[GitCommit]:
        """最近触及项目目录的提交，最新在前

        Args:
            project_id: 项目 ID（先校验）
            limit: 最大返回数量，None 时使用配置值，0 及负数返回空列表

        Returns:
            GitCommit 列表；目录无提交时为空列表

        Raises:
            InvalidIdentifierError: project_id 不合法（未启动子进程）
            GitError: git log 本身失败（非仓库、超时、git 不可用）
        """
        project_id = validate_project_id(project_id)
        if limit is None:
            limit = self._config.commit_limit
        if limit <= 0:
            return []
        pathspec = self._pathspec(project_id)

        output = await self._run(
            ["log", "-n", str(limit), f"--format={LOG_FORMAT}", "--", pathspec],
            timeout_s=self._config.log_timeout_s,
        )
        commits = parse_log_output(output)

        semaphore = asyncio.Semaphore(self._config.max_parallel)

        async def _with_count(commit: GitCommit) -> GitCommit:
            async with semaphore:
                count = await self._count_files(commit.hash, pathspec)
            return commit.model_copy(update={"files_changed": count})

        commits = list(await asyncio.gather(*(_with_count(c) for c in commits)))
        log.info(
            "git_log_loaded",
            project_id=project_id,
            commit_count=len(commits),
        )
        return commits

    async def _count_files(self, commit_hash: str, pathspec: str) -> int:
        """统计单个提交在项目目录内改动的文件数；任何失败记为 0"""
        try:
            commit_hash = validate_commit_hash(commit_hash)
        except InvalidIdentifierError:
            log.warning("git_log_hash_rejected", commit_hash=commit_hash[:80])
            return 0
        try:
            output = await self._run(
                [
                    "diff-tree",
                    "--no-commit-id",
                    "--name-only",
                    "-r",
                    "--root",
                    commit_hash,
                    "--",
                    pathspec,
                ],
                timeout_s=self._config.files_timeout_s,
            )
        except GitError as e:
            log.debug(
                "git_files_changed_unavailable",
                commit_hash=commit_hash,
                error_type=type(e).__name__,
            )
            return 0
        return sum(1 for line in output.splitlines() if line.strip())

    async def get_diff(self, project_id: str, commit_hash: str) -> str:
        """单个提交的 stat + patch 文本

        Returns:
            diff 文本；失败或输出为空时返回 DIFF_NOT_AVAILABLE，
            超出 max_diff_bytes 的部分被截断并追加标记行

        Raises:
            InvalidIdentifierError: project_id 或 commit_hash 不合法（未启动子进程）
        """
        project_id = validate_project_id(project_id)
        commit_hash = validate_commit_hash(commit_hash)

        try:
            output = await self._run(
                ["show", "--stat", "--patch", "--no-color", commit_hash],
                timeout_s=self._config.diff_timeout_s,
            )
        except GitError as e:
            log.info(
                "git_diff_unavailable",
                project_id=project_id,
                commit_hash=commit_hash,
                error_type=type(e).__name__,
            )
            return DIFF_NOT_AVAILABLE

        if not output.strip():
            return DIFF_NOT_AVAILABLE
        return self._truncate(output)

    def _truncate(self, diff: str) -> str:
        encoded = diff.encode("utf-8")
        limit = self._config.max_diff_bytes
        if len(encoded) <= limit:
            return diff
        head = encoded[:limit].decode("utf-8", errors="ignore")
        return head + DIFF_TRUNCATED_MARKER.format(omitted=len(encoded) - limit)

    def is_available(self) -> bool:
        """配置的 git 可执行文件能否在 PATH 上解析"""
        return shutil.which(self._config.git_binary) is not None
