"""Activity 异常体系

git 读取失败对用户来说是"没有历史可看"，而不是服务故障，
因此所有异常默认 recoverable=True，由上层降级为空结果。
"""


class GitError(Exception):
    """Activity 包基础异常"""

    def __init__(self, message: str, recoverable: bool = True) -> None:
        """
        Args:
            message: 错误描述
            recoverable: 是否可通过降级（返回空结果）恢复
        """
        super().__init__(message)
        self.recoverable = recoverable


class GitUnavailableError(GitError):
    """git 可执行文件不存在或无法启动"""

    def __init__(self, git_binary: str, original_error: Exception) -> None:
        super().__init__(f"git 不可用: {git_binary} -- {original_error}")
        self.git_binary = git_binary
        self.original_error = original_error


class GitCommandError(GitError):
    """git 命令以非零状态退出（非仓库、未知 revision 等）"""

    def __init__(self, args: list[str], returncode: int, stderr: str = "") -> None:
        """
        Args:
            args: git 子命令参数（不含可执行文件）
            returncode: 退出码
            stderr: 标准错误输出（截断后）
        """
        super().__init__(f"git {' '.join(args[:2])} 退出码 {returncode}: {stderr[:200]}")
        self.git_args = args
        self.returncode = returncode
        self.stderr = stderr


class GitTimeoutError(GitError):
    """git 命令超时，子进程已被终止"""

    def __init__(self, args: list[str], timeout_s: float) -> None:
        super().__init__(f"git {' '.join(args[:2])} 超时（{timeout_s}s）")
        self.git_args = args
        self.timeout_s = timeout_s
