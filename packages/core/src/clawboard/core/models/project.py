"""Project Domain Model

项目由外部创建和维护，本服务只读。
"""

from typing import Any

from pydantic import Field, PrivateAttr, ValidationError, model_validator

from .base import WorkspaceDocument


class Project(WorkspaceDocument):
    """项目元信息（state/projects.json 中的一项）"""

    id: str = Field(description="稳定 slug")
    name: str = Field(default="", description="展示名称，缺失时回退为 id")
    status: str = Field(default="", description="项目状态")
    description: str | None = Field(default=None, description="项目描述")
    priority: str | None = Field(default=None, description="项目优先级")
    created: str | None = Field(default=None, description="创建时间（ISO-8601）")

    @model_validator(mode="after")
    def _default_name(self) -> "Project":
        if not self.name:
            self.name = self.id
        return self


class ProjectList(WorkspaceDocument):
    """项目列表文档

    archived 的结构由外部决定且从不参与派生视图，原样透传。
    """

    projects: list[Project] = Field(default_factory=list)
    archived: list[Any] = Field(default_factory=list)

    _invalid_entries: list[Any] = PrivateAttr(default_factory=list)

    @classmethod
    def from_document(cls, data: dict[str, Any]) -> "ProjectList":
        """逐项解析项目列表，跳过不合法的项目

        Raises:
            ValidationError: 文档级字段不合法（如 projects 不是数组）
        """
        raw_projects = data.get("projects")
        if not isinstance(raw_projects, list):
            return cls.model_validate(data)

        projects: list[Project] = []
        invalid: list[Any] = []
        for raw in raw_projects:
            try:
                projects.append(Project.model_validate(raw))
            except ValidationError:
                invalid.append(raw)

        project_list = cls.model_validate({**data, "projects": projects})
        project_list._invalid_entries = invalid
        return project_list

    @property
    def invalid_entries(self) -> list[Any]:
        return list(self._invalid_entries)
