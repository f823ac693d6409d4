"""GitConfig -- Git 活动读取配置加载

从环境变量加载 git 可执行文件、各类子进程超时与输出上限。
无效数值只记录警告并回退默认值，不阻塞启动。
"""

import os

import structlog
from pydantic import BaseModel, Field

log = structlog.get_logger()


class GitConfig(BaseModel):
    """Activity 包配置 -- 从环境变量加载

    环境变量:
        CLAWBOARD_GIT_BINARY: git 可执行文件（默认 git）
        CLAWBOARD_GIT_LOG_TIMEOUT_S: git log 超时（秒，默认 5）
        CLAWBOARD_GIT_FILES_TIMEOUT_S: 单个 commit 文件统计超时（秒，默认 3）
        CLAWBOARD_GIT_DIFF_TIMEOUT_S: git show 超时（秒，默认 5）
        CLAWBOARD_GIT_COMMIT_LIMIT: 返回的最大 commit 数（默认 20）
        CLAWBOARD_GIT_MAX_PARALLEL: 文件统计子进程并发上限（默认 4）
        CLAWBOARD_GIT_MAX_DIFF_BYTES: diff 输出上限（字节，默认 512 KiB）
    """

    git_binary: str = Field(default="git", min_length=1, description="git 可执行文件")
    log_timeout_s: float = Field(default=5, gt=0, description="git log 超时（秒）")
    files_timeout_s: float = Field(default=3, gt=0, description="diff-tree 超时（秒）")
    diff_timeout_s: float = Field(default=5, gt=0, description="git show 超时（秒）")
    commit_limit: int = Field(default=20, ge=1, description="最多返回的 commit 数")
    max_parallel: int = Field(default=4, ge=1, description="文件统计并发上限")
    max_diff_bytes: int = Field(
        default=512 * 1024,
        ge=1024,
        description="diff 文本上限，超出部分截断",
    )


# 数值型环境变量 -> (字段名, 类型)
_NUMERIC_ENV: dict[str, tuple[str, type]] = {
    "CLAWBOARD_GIT_LOG_TIMEOUT_S": ("log_timeout_s", float),
    "CLAWBOARD_GIT_FILES_TIMEOUT_S": ("files_timeout_s", float),
    "CLAWBOARD_GIT_DIFF_TIMEOUT_S": ("diff_timeout_s", float),
    "CLAWBOARD_GIT_COMMIT_LIMIT": ("commit_limit", int),
    "CLAWBOARD_GIT_MAX_PARALLEL": ("max_parallel", int),
    "CLAWBOARD_GIT_MAX_DIFF_BYTES": ("max_diff_bytes", int),
}


def load_git_config() -> GitConfig:
    """从环境变量加载 Git 配置

    Returns:
        GitConfig 实例
    """
    kwargs: dict = {}

    if val := os.environ.get("CLAWBOARD_GIT_BINARY"):
        kwargs["git_binary"] = val

    for env_var, (field_name, cast) in _NUMERIC_ENV.items():
        if not (val := os.environ.get(env_var)):
            continue
        field = GitConfig.model_fields[field_name]
        try:
            value = cast(val)
            # 单字段校验，越界同样回退默认值
            GitConfig(**{field_name: value})
        except ValueError:
            log.warning(
                "invalid_git_config",
                env_var=env_var,
                value=val,
                fallback=field.default,
            )
            continue
        kwargs[field_name] = value

    return GitConfig(**kwargs)
