"""Workspace 文档模型基类

磁盘上的 JSON 使用 camelCase，Python 侧使用 snake_case；
extra="allow" 保证外部 agent 写入的未知字段在 read-modify-write 后不丢失。

文档由外部 agent 手写或脚本生成，结构松散：
- 可选字段写成 null 时按缺失处理（回退为字段默认值）
- 数字写进字符串字段时转成字符串（如 "id": 7）
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


class WorkspaceDocument(BaseModel):
    """所有 workspace 文档模型的基类"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
        coerce_numbers_to_str=True,
    )

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is not None or info.field_name is None:
            return value
        field = cls.model_fields[info.field_name]
        # 必填字段保持 None，交给类型校验报错
        if field.is_required():
            return value
        return field.get_default(call_default_factory=True)

    def to_document(self, *, exclude_unset: bool = False) -> dict[str, Any]:
        """序列化为磁盘/响应格式（camelCase，省略 None）

        exclude_unset=True 时只输出读入或显式修改过的字段，
        写回磁盘时不给外部文档补默认值。
        """
        return self.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
            exclude_unset=exclude_unset,
        )
