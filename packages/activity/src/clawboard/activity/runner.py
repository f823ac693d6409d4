"""git 子进程执行

只接受参数列表，从不经过 shell；调用方传入的标识符必须在此之前完成校验。
阻塞的 subprocess.run 在工作线程执行，超时由 subprocess.run 负责终止子进程。
"""

import asyncio
import os
import subprocess
import time
from pathlib import Path

import structlog

from .exceptions import GitCommandError, GitTimeoutError, GitUnavailableError

log = structlog.get_logger()

# 禁止 git 在无终端环境下等待凭据输入
_GIT_ENV_OVERRIDES = {"GIT_TERMINAL_PROMPT": "0", "GIT_PAGER": "cat"}


def _run_sync(
    cmd: list[str], cwd: Path, timeout_s: float
) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        cmd,
        cwd=cwd,
        stdin=subprocess.DEVNULL,
        capture_output=True,
        text=True,
        encoding="utf-8",
        errors="replace",
        timeout=timeout_s,
        check=False,
        env={**os.environ, **_GIT_ENV_OVERRIDES},
    )


async def run_git(
    args: list[str],
    cwd: Path,
    timeout_s: float,
    git_binary: str = "git",
) -> str:
    """执行 git 子命令并返回 stdout

    Args:
        args: git 子命令参数（不含可执行文件）
        cwd: 工作目录（workspace 根目录）
        timeout_s: 超时秒数，超时后子进程被终止
        git_binary: git 可执行文件

    Returns:
        标准输出文本

    Raises:
        GitUnavailableError: 可执行文件不存在或工作目录无效
        GitTimeoutError: 执行超时
        GitCommandError: 非零退出码
    """
    cmd = [git_binary, *args]
    start_time = time.monotonic()
    try:
        result = await asyncio.to_thread(_run_sync, cmd, Path(cwd), timeout_s)
    except subprocess.TimeoutExpired as e:
        log.warning(
            "git_command_timeout",
            subcommand=args[0] if args else "",
            timeout_s=timeout_s,
        )
        raise GitTimeoutError(args, timeout_s) from e
    except OSError as e:
        log.warning(
            "git_command_unavailable",
            git_binary=git_binary,
            cwd=str(cwd),
            error_type=type(e).__name__,
        )
        raise GitUnavailableError(git_binary, e) from e

    duration_ms = int((time.monotonic() - start_time) * 1000)
    if result.returncode != 0:
        log.debug(
            "git_command_failed",
            subcommand=args[0] if args else "",
            returncode=result.returncode,
            duration_ms=duration_ms,
        )
        raise GitCommandError(args, result.returncode, result.stderr.strip())

    log.debug(
        "git_command_completed",
        subcommand=args[0] if args else "",
        duration_ms=duration_ms,
    )
    return result.stdout
