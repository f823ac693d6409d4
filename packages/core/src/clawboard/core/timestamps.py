"""时间戳工具 -- ISO-8601 字符串的生成与解析

workspace 文档中的时间戳由外部 agent 写入，格式不完全统一（带 Z、带偏移、仅日期），
这里统一解析为 aware datetime；本服务写入的格式固定为毫秒精度 + "Z"。
"""

from datetime import UTC, datetime, timedelta

_ONE_MS = timedelta(milliseconds=1)


def format_timestamp(dt: datetime) -> str:
    """格式化为 YYYY-MM-DDTHH:MM:SS.mmmZ"""
    return dt.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str | None) -> datetime | None:
    """解析 ISO-8601 字符串，无法解析返回 None；无时区信息按 UTC 处理"""
    if not value:
        return None
    try:
        dt = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


def _truncate_ms(dt: datetime) -> datetime:
    return dt.replace(microsecond=dt.microsecond // 1000 * 1000)


def now_iso() -> str:
    """当前 UTC 时间"""
    return format_timestamp(datetime.now(UTC))


def advance_timestamp(previous: str | None) -> str:
    """生成一个严格晚于 previous 的"当前"时间戳

    同一毫秒内连续写入、或 previous 来自时钟略快的写入方时，
    结果为 previous + 1ms，保证单个写入序列观察到的时间戳不会回退或重复。
    """
    now = _truncate_ms(datetime.now(UTC))
    prev = parse_timestamp(previous)
    if prev is not None:
        floor = _truncate_ms(prev.astimezone(UTC))
        if now <= floor:
            now = floor + _ONE_MS
    return format_timestamp(now)
