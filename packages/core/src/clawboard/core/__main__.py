"""CLI 入口模块 -- python -m clawboard.core <command>

支持的命令：
  summary  输出项目卡片与评审队列（JSON）
  check    校验 workspace 中的项目 ID 与看板文档
"""

import asyncio
import json
import sys

import structlog

from .config import get_workspace_dir


def main() -> None:
    """CLI 主入口"""
    if len(sys.argv) < 2:
        print("用法: python -m clawboard.core <command>")
        print("命令:")
        print("  summary  输出项目卡片与评审队列（JSON）")
        print("  check    校验 workspace 中的项目 ID 与看板文档")
        sys.exit(1)

    # stdout 留给命令输出，日志写到 stderr
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.BoundLogger,
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=False,
    )

    command = sys.argv[1]

    if command == "summary":
        asyncio.run(print_summary())
    elif command == "check":
        problems = asyncio.run(check_workspace())
        sys.exit(1 if problems else 0)
    else:
        print(f"未知命令: {command}")
        print("可用命令: summary, check")
        sys.exit(1)


async def print_summary() -> None:
    """输出所有项目的卡片和跨项目评审队列"""
    from .aggregation import project_card, review_queue
    from .exceptions import InvalidIdentifierError
    from .store import create_workspace_store

    store = create_workspace_store(get_workspace_dir())
    project_list = await store.read_projects()

    entries = []
    for project in project_list.projects:
        try:
            board = await store.read_board(project.id)
        except InvalidIdentifierError:
            board = None
        entries.append((project, board))

    summary = {
        "workspace": str(store.root),
        "projects": [
            project_card(project, board).model_dump(
                mode="json", by_alias=True, exclude={"board"}
            )
            for project, board in entries
        ],
        "reviewQueue": [item.to_payload() for item in review_queue(entries)],
    }
    print(json.dumps(summary, indent=2, ensure_ascii=False))


async def check_workspace() -> list[str]:
    """校验 workspace，返回问题列表（同时打印）"""
    from pydantic import ValidationError

    from .exceptions import InvalidIdentifierError
    from .models.board import Board
    from .store import create_workspace_store
    from .validation import validate_project_id

    store = create_workspace_store(get_workspace_dir())
    print(f"Workspace 路径: {store.root}")

    problems: list[str] = []
    project_list = await store.read_projects()
    if project_list.invalid_entries:
        problems.append(
            f"projects.json: {len(project_list.invalid_entries)} 个项目条目无法解析"
        )
    known_ids = {p.id for p in project_list.projects}
    candidate_ids = sorted(known_ids | set(await store.list_project_dirs()))

    for project_id in candidate_ids:
        try:
            validate_project_id(project_id)
        except InvalidIdentifierError as e:
            problems.append(f"{project_id!r}: {e}")
            continue

        if not await store.board_exists(project_id):
            if project_id in known_ids:
                print(f"  {project_id}: 无 board.json（视为空看板）")
            continue

        # read_board 对损坏文档返回空看板，这里直接校验原文以区分
        try:
            raw = json.loads(store.board_path(project_id).read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            problems.append(f"{project_id}: board.json 无法读取 ({type(e).__name__})")
            continue
        except json.JSONDecodeError as e:
            problems.append(f"{project_id}: board.json 无法解析 ({e.msg})")
            continue
        if not isinstance(raw, dict):
            problems.append(f"{project_id}: board.json 顶层不是对象")
            continue

        try:
            board = Board.from_document(raw)
        except ValidationError as e:
            problems.append(f"{project_id}: board.json 无法解析 ({e.error_count()} 处错误)")
            continue

        if board.unparsed_tasks:
            problems.append(f"{project_id}: {len(board.unparsed_tasks)} 个任务无法解析")
        duplicates = board.duplicate_task_ids()
        if duplicates:
            problems.append(f"{project_id}: 重复的任务 ID {', '.join(duplicates)}")
        print(f"  {project_id}: {len(board.tasks)} 个任务")

    for problem in problems:
        print(f"问题: {problem}")
    print("检查通过" if not problems else f"发现 {len(problems)} 个问题")
    return problems


if __name__ == "__main__":
    main()
