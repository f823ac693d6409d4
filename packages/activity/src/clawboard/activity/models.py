"""数据模型 -- GitCommit + CommitGroup

字段在 JSON 中使用 camelCase（filesChanged），与前端约定一致。
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class GitCommit(BaseModel):
    """触及某个项目目录的一次提交"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    hash: str = Field(description="完整 commit hash")
    author: str = Field(default="", description="作者名")
    timestamp: str = Field(default="", description="作者时间（ISO-8601，带偏移）")
    message: str = Field(default="", description="提交标题行")
    files_changed: int = Field(
        default=0,
        ge=0,
        description="该提交在项目目录内改动的文件数；统计失败时为 0",
    )


class CommitGroup(BaseModel):
    """按日期分组的提交（Today / Yesterday / This Week / Older）"""

    label: str
    commits: list[GitCommit] = Field(default_factory=list)
