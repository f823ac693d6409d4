"""看板派生视图单元测试

测试内容：
1. state -> 列归类（含未知/缺失 state）
2. 列内排序：优先级 + 创建时间，稳定排序
3. Done 窗口过滤与 Backlog 截断
4. 评审队列：筛选、默认值、排序、幂等
5. 项目卡片计数
"""

from datetime import UTC, datetime, timedelta

import pytest
from clawboard.core.aggregation import (
    classify,
    column_totals,
    group_by_column,
    kanban_view,
    needs_review,
    priority_rank,
    project_card,
    review_queue,
)
from clawboard.core.config import BACKLOG_LIMIT
from clawboard.core.models import Board, ColumnKey, Project, ReviewNotes, Task

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=UTC)


def _iso(dt: datetime) -> str:
    return dt.isoformat().replace("+00:00", "Z")


def _days_ago(days: int) -> str:
    return _iso(NOW - timedelta(days=days))


class TestClassify:
    @pytest.mark.parametrize(
        ("state", "column"),
        [
            ("done", ColumnKey.DONE),
            ("completed", ColumnKey.DONE),
            ("in-progress", ColumnKey.IN_PROGRESS),
            ("active", ColumnKey.IN_PROGRESS),
            ("review", ColumnKey.REVIEW),
            ("in-review", ColumnKey.REVIEW),
            ("planned", ColumnKey.PLANNED),
            ("backlog", ColumnKey.BACKLOG),
            ("blocked", ColumnKey.BACKLOG),
            ("", ColumnKey.BACKLOG),
            (None, ColumnKey.BACKLOG),
        ],
    )
    def test_state_to_column(self, state, column):
        assert classify(Task(id="t", state=state)) == column


class TestPriorityRank:
    def test_known_priorities(self):
        assert [priority_rank(p) for p in ("p0", "p1", "p2", "p3")] == [0, 1, 2, 3]

    def test_case_insensitive(self):
        assert priority_rank("P0") == 0

    @pytest.mark.parametrize("priority", [None, "", "urgent", "p4"])
    def test_unspecified_sorts_last(self, priority):
        assert priority_rank(priority) > priority_rank("p3")


class TestGroupByColumn:
    def test_p0_before_p1_with_same_created(self):
        """同一列、相同创建时间：p0 排在 p1 之前"""
        tasks = [
            Task(id="b", state="planned", priority="p1", created="2026-03-01T00:00:00Z"),
            Task(id="a", state="planned", priority="p0", created="2026-03-01T00:00:00Z"),
        ]
        groups = group_by_column(tasks, now=NOW)
        assert [t.id for t in groups[ColumnKey.PLANNED]] == ["a", "b"]

    def test_created_ascending_within_priority(self):
        tasks = [
            Task(id="late", state="planned", priority="p2", created="2026-03-05"),
            Task(id="early", state="planned", priority="p2", created="2026-03-01"),
            Task(id="none", state="planned", priority="p2"),
        ]
        groups = group_by_column(tasks, now=NOW)
        assert [t.id for t in groups[ColumnKey.PLANNED]] == ["none", "early", "late"]

    def test_stable_for_equal_keys(self):
        """优先级与创建时间都相同的任务保持输入顺序"""
        tasks = [
            Task(id=f"t{i}", state="in-progress", priority="p1", created="2026-03-01")
            for i in range(6)
        ]
        groups = group_by_column(tasks, now=NOW)
        assert [t.id for t in groups[ColumnKey.IN_PROGRESS]] == [f"t{i}" for i in range(6)]

    def test_done_older_than_window_excluded(self):
        """10 天前完成的任务默认不显示，showAllDone 时显示"""
        tasks = [
            Task(id="old", state="done", completed=_days_ago(10)),
            Task(id="recent", state="done", completed=_days_ago(2)),
        ]
        default = group_by_column(tasks, now=NOW)
        assert [t.id for t in default[ColumnKey.DONE]] == ["recent"]

        show_all = group_by_column(tasks, show_all_done=True, now=NOW)
        assert {t.id for t in show_all[ColumnKey.DONE]} == {"old", "recent"}

    def test_done_window_falls_back_to_updated_then_created(self):
        tasks = [
            Task(id="by-updated", state="done", updated=_days_ago(20), created=_days_ago(1)),
            Task(id="by-created", state="done", created=_days_ago(20)),
            Task(id="recent-created", state="completed", created=_days_ago(1)),
        ]
        groups = group_by_column(tasks, now=NOW)
        assert [t.id for t in groups[ColumnKey.DONE]] == ["recent-created"]

    def test_done_without_parseable_date_kept(self):
        tasks = [
            Task(id="no-date", state="done"),
            Task(id="garbage", state="done", completed="sometime last week"),
        ]
        groups = group_by_column(tasks, now=NOW)
        assert {t.id for t in groups[ColumnKey.DONE]} == {"no-date", "garbage"}

    def test_backlog_truncated(self):
        tasks = [Task(id=f"b{i:02d}", created=f"2026-01-{i + 1:02d}") for i in range(15)]
        groups = group_by_column(tasks, now=NOW)
        assert len(groups[ColumnKey.BACKLOG]) == BACKLOG_LIMIT
        assert groups[ColumnKey.BACKLOG][0].id == "b00"

        full = group_by_column(tasks, show_all_backlog=True, now=NOW)
        assert len(full[ColumnKey.BACKLOG]) == 15

    def test_backlog_truncation_after_sort(self):
        """截断保留排序后优先级最高的任务"""
        tasks = [Task(id=f"low{i}", priority="p3") for i in range(BACKLOG_LIMIT)]
        tasks.append(Task(id="urgent", priority="p0"))
        groups = group_by_column(tasks, now=NOW)
        assert groups[ColumnKey.BACKLOG][0].id == "urgent"

    def test_every_task_lands_in_one_column(self):
        """全函数：除窗口过滤/截断外，每个任务恰好出现在一列中"""
        states = ["done", "completed", "active", "review", "planned", "weird", None]
        tasks = [
            Task(id=f"t{i}", state=states[i % len(states)], completed=_days_ago(1))
            for i in range(21)
        ]
        groups = group_by_column(tasks, show_all_done=True, show_all_backlog=True, now=NOW)
        placed = [t.id for column in groups.values() for t in column]
        assert sorted(placed) == sorted(t.id for t in tasks)
        assert len(placed) == len(set(placed))

    def test_counts_sum_after_filtering(self):
        tasks = [
            Task(id="old-done", state="done", completed=_days_ago(30)),
            Task(id="new-done", state="done", completed=_days_ago(1)),
            Task(id="wip", state="in-progress"),
            *[Task(id=f"b{i}") for i in range(BACKLOG_LIMIT + 3)],
        ]
        groups = group_by_column(tasks, now=NOW)
        expected = len(tasks) - 1 - 3
        assert sum(len(column) for column in groups.values()) == expected

    def test_all_columns_present(self):
        groups = group_by_column([], now=NOW)
        assert list(groups) == list(ColumnKey)
        assert all(column == [] for column in groups.values())

    def test_naive_now_accepted(self):
        tasks = [Task(id="old", state="done", completed=_days_ago(10))]
        groups = group_by_column(tasks, now=NOW.replace(tzinfo=None))
        assert groups[ColumnKey.DONE] == []


class TestKanbanView:
    def test_totals_count_before_filtering(self):
        board = Board(
            project_id="alpha",
            last_updated="2026-03-15T00:00:00.000Z",
            tasks=[
                Task(id="old", state="done", completed=_days_ago(30)),
                Task(id="new", state="done", completed=_days_ago(1)),
                *[Task(id=f"b{i}") for i in range(12)],
            ],
        )
        view = kanban_view(board, now=NOW)
        assert view.project_id == "alpha"
        assert view.totals[ColumnKey.DONE] == 2
        assert len(view.columns[ColumnKey.DONE]) == 1
        assert view.totals[ColumnKey.BACKLOG] == 12
        assert len(view.columns[ColumnKey.BACKLOG]) == BACKLOG_LIMIT

    def test_column_totals(self):
        totals = column_totals([Task(id="a", state="review"), Task(id="b")])
        assert totals[ColumnKey.REVIEW] == 1
        assert totals[ColumnKey.BACKLOG] == 1
        assert totals[ColumnKey.DONE] == 0


class TestNeedsReview:
    def test_review_state(self):
        assert needs_review(Task(id="t", state="in-review"))

    def test_sam_required_not_completed(self):
        assert needs_review(Task(id="t", state="in-progress", review_type="sam-required"))

    def test_sam_required_completed(self):
        assert not needs_review(Task(id="t", state="done", review_type="sam-required"))

    def test_other_review_type(self):
        assert not needs_review(Task(id="t", state="in-progress", review_type="peer-qa"))


def _review_board() -> list[tuple[Project, Board]]:
    alpha = Project(id="alpha", name="Alpha")
    beta = Project(id="beta")
    alpha_board = Board(
        project_id="alpha",
        tasks=[
            Task(id="a1", title="A1", state="review", priority="p1", updated="2026-03-10T00:00:00Z"),
            Task(id="a2", title="A2", state="review", priority="p1", updated="2026-03-12T00:00:00Z"),
            Task(id="a3", title="A3", state="in-progress"),
            Task(
                id="a4",
                title="A4",
                state="active",
                review_type="sam-required",
                priority="p0",
                created="2026-03-01T00:00:00Z",
                review_notes=ReviewNotes(content="x" * 150),
            ),
        ],
    )
    beta_board = Board(
        project_id="beta",
        tasks=[
            Task(id="b1", title="B1", state="review", updated="2026-03-14T00:00:00Z"),
            Task(id="b2", title="B2", state="done", review_type="sam-required"),
        ],
    )
    return [(alpha, alpha_board), (beta, beta_board)]


class TestReviewQueue:
    def test_filters_and_orders(self):
        """按优先级升序，同优先级 updated 降序"""
        items = review_queue(_review_board())
        assert [i.task_id for i in items] == ["a4", "a2", "a1", "b1"]

    def test_defaults(self):
        items = {i.task_id: i for i in review_queue(_review_board())}
        b1 = items["b1"]
        assert b1.assignee == "unassigned"
        assert b1.priority == "p3"
        assert b1.project_name == "beta"
        # updated 缺失时回退到 created
        assert items["a4"].updated == "2026-03-01T00:00:00Z"

    def test_review_notes_preview(self):
        a4 = next(i for i in review_queue(_review_board()) if i.task_id == "a4")
        assert a4.review_notes == "x" * 150
        assert a4.review_notes_preview == "x" * 100 + "…"

    def test_idempotent(self):
        entries = _review_board()
        first = [i.to_payload() for i in review_queue(entries)]
        second = [i.to_payload() for i in review_queue(entries)]
        assert first == second

    def test_skips_missing_boards(self):
        assert review_queue([(Project(id="ghost"), None)]) == []


class TestProjectCard:
    def test_counts(self):
        project, board = _review_board()[0]
        card = project_card(project, board)
        assert card.tasks_in_progress == 2
        assert card.tasks_needing_review == 3
        assert card.board == board

    def test_without_board(self):
        card = project_card(Project(id="ghost"), None)
        assert card.tasks_in_progress == 0
        assert card.last_update is None
        assert card.to_payload()["board"] is None
