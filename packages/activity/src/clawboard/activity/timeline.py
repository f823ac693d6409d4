"""提交时间线分组"""

from collections.abc import Iterable
from datetime import datetime, timedelta

from clawboard.core.timestamps import parse_timestamp

from .models import CommitGroup, GitCommit

TODAY = "Today"
YESTERDAY = "Yesterday"
THIS_WEEK = "This Week"
OLDER = "Older"

GROUP_LABELS: tuple[str, ...] = (TODAY, YESTERDAY, THIS_WEEK, OLDER)


def group_commits_by_date(
    commits: Iterable[GitCommit],
    now: datetime | None = None,
) -> list[CommitGroup]:
    """按 now 所在时区的自然日把提交分入 Today / Yesterday / This Week / Older

    This Week 指今天零点往前 7 天内；无法解析的时间戳归入 Older。
    组内保持输入顺序，空组省略。
    """
    now = now or datetime.now().astimezone()
    if now.tzinfo is None:
        now = now.astimezone()
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    yesterday = today - timedelta(days=1)
    week_ago = today - timedelta(days=7)

    buckets: dict[str, list[GitCommit]] = {label: [] for label in GROUP_LABELS}
    for commit in commits:
        committed_at = parse_timestamp(commit.timestamp)
        if committed_at is None:
            buckets[OLDER].append(commit)
        elif committed_at >= today:
            buckets[TODAY].append(commit)
        elif committed_at >= yesterday:
            buckets[YESTERDAY].append(commit)
        elif committed_at >= week_ago:
            buckets[THIS_WEEK].append(commit)
        else:
            buckets[OLDER].append(commit)

    return [
        CommitGroup(label=label, commits=items)
        for label, items in buckets.items()
        if items
    ]
