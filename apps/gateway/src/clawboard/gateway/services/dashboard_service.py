"""DashboardService -- 项目列表、standup 与首页聚合"""

import asyncio

import structlog
from clawboard.core.aggregation import project_card, review_queue
from clawboard.core.models import Board, ProjectList, StandupSections
from clawboard.core.standup import parse_standup
from clawboard.core.store import WorkspaceStore

log = structlog.get_logger()


class DashboardService:
    """首页数据服务"""

    def __init__(self, store: WorkspaceStore) -> None:
        self._store = store

    async def list_projects(self) -> ProjectList:
        return await self._store.read_projects()

    async def get_standup(self) -> tuple[str, StandupSections]:
        """最新 standup 原文及解析结果；缺失时为空"""
        content = await self._store.read_standup()
        return content, parse_standup(content)

    async def get_home(self) -> dict:
        """首页：项目卡片、跨项目评审队列、standup

        各项目看板并发读取；单个看板读取失败（含非法项目 ID）只影响该卡片，
        其 board 为 null，不影响其他项目。
        """
        project_list = await self._store.read_projects()
        projects = project_list.projects

        results = await asyncio.gather(
            *(self._store.read_board(p.id) for p in projects),
            return_exceptions=True,
        )

        entries: list[tuple] = []
        for project, result in zip(projects, results, strict=True):
            board: Board | None
            if isinstance(result, Exception):
                log.warning(
                    "home_board_unavailable",
                    project_id=project.id[:128],
                    error_type=type(result).__name__,
                )
                board = None
            else:
                board = result
            entries.append((project, board))

        content, sections = await self.get_standup()
        return {
            "projects": [project_card(p, b).to_payload() for p, b in entries],
            "reviewQueue": [item.to_payload() for item in review_queue(entries)],
            "standup": {"content": content, "sections": sections.to_payload()},
        }
