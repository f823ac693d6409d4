"""并发读写集成测试

写入为整文档原子替换：并发读者只会看到某个完整版本，
并发写入者之间后到者胜出，但文件始终是合法 JSON。
"""

import asyncio
import json
from pathlib import Path

from clawboard.core.models import Board, Task
from clawboard.core.store import create_workspace_store
from httpx import AsyncClient

TASKS_PER_VERSION = 50


def _board(version: int) -> Board:
    return Board(
        tasks=[
            Task(id=f"t{i}", title=f"v{version}", description="x" * 200)
            for i in range(TASKS_PER_VERSION)
        ]
    )


class TestConcurrentAccess:
    async def test_readers_never_see_partial_writes(self, workspace_dir: Path):
        store = create_workspace_store(workspace_dir)
        await store.write_board("alpha", _board(0))

        async def writer():
            for version in range(1, 21):
                await store.write_board("alpha", _board(version))

        async def reader() -> list[int]:
            counts = []
            for _ in range(40):
                board = await store.read_board("alpha")
                counts.append(len(board.tasks))
                # 同一版本内所有任务标题一致
                assert len({t.title for t in board.tasks}) == 1
            return counts

        results = await asyncio.gather(writer(), reader(), reader())
        for counts in results[1:]:
            assert all(count == TASKS_PER_VERSION for count in counts)

    async def test_concurrent_moves_leave_valid_board(
        self, client: AsyncClient, write_board, workspace_dir: Path
    ):
        write_board("alpha", [{"id": f"t{i}", "state": "planned"} for i in range(5)])

        responses = await asyncio.gather(
            *(
                client.post("/api/board/alpha/move", json={"taskId": f"t{i}", "newState": "done"})
                for i in range(5)
            )
        )
        assert all(r.status_code == 200 for r in responses)

        raw = (workspace_dir / "projects" / "alpha" / "board.json").read_text(encoding="utf-8")
        board = json.loads(raw)
        assert len(board["tasks"]) == 5
        # 后到者胜出：至少最后一次写入的移动生效
        assert any(t["state"] == "done" for t in board["tasks"])
        leftovers = [p.name for p in (workspace_dir / "projects" / "alpha").iterdir()]
        assert leftovers == ["board.json"]
