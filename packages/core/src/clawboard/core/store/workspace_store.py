"""WorkspaceStore -- 基于文件的最小文档存储

每个文档以路径为键、整文档替换为值；从不做文件内的局部修改。
读取语义：文档缺失是正常结果（新 workspace），返回空默认值而不是抛异常。
写入语义：原子替换，不跨写入方加锁，并发写入同一看板时后到者胜出。
"""

import asyncio
import json
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from ..config import BOARD_FILE_NAME, PROJECTS_DIR, PROJECTS_FILE, STANDUP_FILE
from ..models.board import Board
from ..models.project import ProjectList
from ..timestamps import advance_timestamp
from ..validation import validate_project_id
from .atomic import atomic_write_text

log = structlog.get_logger()


def _read_text(path: Path) -> str | None:
    """读取文本文件，缺失或不可读时返回 None"""
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError) as e:
        log.warning(
            "workspace_document_unreadable",
            path=str(path),
            error_type=type(e).__name__,
        )
        return None


def _read_json(path: Path) -> dict[str, Any] | None:
    """读取 JSON 对象文档，缺失/损坏/非对象时返回 None"""
    text = _read_text(path)
    if text is None:
        return None
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        log.warning("workspace_document_malformed", path=str(path), error=str(e))
        return None
    if not isinstance(data, dict):
        log.warning(
            "workspace_document_malformed",
            path=str(path),
            error=f"expected object, got {type(data).__name__}",
        )
        return None
    return data


class WorkspaceStore:
    """workspace 文档存储

    阻塞的文件 I/O 通过 asyncio.to_thread 在工作线程执行，不占用事件循环。
    """

    def __init__(self, root: Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    @property
    def projects_path(self) -> Path:
        return self._root / PROJECTS_FILE

    @property
    def standup_path(self) -> Path:
        return self._root / STANDUP_FILE

    def project_dir(self, project_id: str) -> Path:
        """项目目录（project_id 在拼接路径前校验）"""
        return self._root / PROJECTS_DIR / validate_project_id(project_id)

    def board_path(self, project_id: str) -> Path:
        return self.project_dir(project_id) / BOARD_FILE_NAME

    async def read_projects(self) -> ProjectList:
        """读取项目列表；缺失或损坏时返回空列表，单个不合法的项目被跳过"""
        raw = await asyncio.to_thread(_read_json, self.projects_path)
        if raw is None:
            return ProjectList()
        try:
            project_list = ProjectList.from_document(raw)
        except ValidationError as e:
            log.warning(
                "projects_document_invalid",
                path=str(self.projects_path),
                error_count=e.error_count(),
            )
            return ProjectList()

        if project_list.invalid_entries:
            log.warning(
                "project_entries_skipped",
                path=str(self.projects_path),
                skipped=len(project_list.invalid_entries),
            )
        return project_list

    async def read_board(self, project_id: str) -> Board:
        """读取项目看板；缺失或损坏时返回空看板，单个不合法的任务被跳过"""
        path = self.board_path(project_id)
        raw = await asyncio.to_thread(_read_json, path)
        if raw is None:
            return Board(project_id=project_id)
        try:
            board = Board.from_document(raw)
        except ValidationError as e:
            log.warning(
                "board_document_invalid",
                project_id=project_id,
                error_count=e.error_count(),
            )
            return Board(project_id=project_id)

        if board.unparsed_tasks:
            log.warning(
                "board_tasks_skipped",
                project_id=project_id,
                skipped=len(board.unparsed_tasks),
            )
        duplicates = board.duplicate_task_ids()
        if duplicates:
            log.warning(
                "board_duplicate_task_ids",
                project_id=project_id,
                task_ids=duplicates,
            )
        return board

    async def board_exists(self, project_id: str) -> bool:
        path = self.board_path(project_id)
        return await asyncio.to_thread(path.is_file)

    async def write_board(self, project_id: str, board: Board) -> Board:
        """整文档原子写入看板，并刷新 lastUpdated

        只写出读入或修改过的字段；读取时跳过的任务按原样放回。

        Returns:
            实际写入的 Board（lastUpdated / projectId 已填充）

        Raises:
            InvalidIdentifierError: project_id 不合法（未写入）
            WriteFailureError: 磁盘写入失败（旧文档保持不变）
        """
        path = self.board_path(project_id)
        stamped = board.model_copy(
            update={
                "project_id": board.project_id or project_id,
                "last_updated": advance_timestamp(board.last_updated),
                "tasks": list(board.tasks),
            }
        )
        text = json.dumps(stamped.to_disk_document(), indent=2, ensure_ascii=False) + "\n"
        await asyncio.to_thread(atomic_write_text, path, text)

        log.info(
            "board_written",
            project_id=project_id,
            task_count=len(stamped.tasks),
            last_updated=stamped.last_updated,
        )
        return stamped

    async def read_standup(self) -> str:
        """读取最新 standup 文本；缺失时返回空字符串"""
        text = await asyncio.to_thread(_read_text, self.standup_path)
        return text or ""

    async def list_project_dirs(self) -> list[str]:
        """列出 projects/ 下的子目录名（未校验，供一致性检查使用）"""
        projects_root = self._root / PROJECTS_DIR

        def _scan() -> list[str]:
            if not projects_root.is_dir():
                return []
            return sorted(p.name for p in projects_root.iterdir() if p.is_dir())

        return await asyncio.to_thread(_scan)
