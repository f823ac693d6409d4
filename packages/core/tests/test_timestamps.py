"""时间戳工具单元测试"""

from datetime import UTC, datetime, timedelta, timezone

from clawboard.core.timestamps import (
    advance_timestamp,
    format_timestamp,
    now_iso,
    parse_timestamp,
)


class TestFormatAndParse:
    def test_format_uses_millis_and_z(self):
        dt = datetime(2026, 3, 1, 12, 30, 45, 123456, tzinfo=UTC)
        assert format_timestamp(dt) == "2026-03-01T12:30:45.123Z"

    def test_format_converts_offset_to_utc(self):
        dt = datetime(2026, 3, 1, 20, 0, tzinfo=timezone(timedelta(hours=8)))
        assert format_timestamp(dt) == "2026-03-01T12:00:00.000Z"

    def test_parse_z_suffix(self):
        assert parse_timestamp("2026-03-01T12:00:00.000Z") == datetime(
            2026, 3, 1, 12, tzinfo=UTC
        )

    def test_parse_naive_as_utc(self):
        parsed = parse_timestamp("2026-03-01T12:00:00")
        assert parsed is not None
        assert parsed.tzinfo is not None
        assert parsed == datetime(2026, 3, 1, 12, tzinfo=UTC)

    def test_parse_date_only(self):
        assert parse_timestamp("2026-03-01") == datetime(2026, 3, 1, tzinfo=UTC)

    def test_parse_garbage_returns_none(self):
        assert parse_timestamp("yesterday-ish") is None
        assert parse_timestamp("") is None
        assert parse_timestamp(None) is None

    def test_now_iso_is_parseable(self):
        assert parse_timestamp(now_iso()) is not None


class TestAdvanceTimestamp:
    def test_without_previous(self):
        assert parse_timestamp(advance_timestamp(None)) is not None

    def test_strictly_later_than_future_previous(self):
        """previous 在未来（时钟偏差）时，结果仍严格晚于 previous"""
        future = format_timestamp(datetime.now(UTC) + timedelta(hours=1))
        advanced = advance_timestamp(future)
        assert parse_timestamp(advanced) > parse_timestamp(future)

    def test_repeated_calls_never_repeat(self):
        """连续推进的时间戳严格递增（同一毫秒内也是）"""
        stamps = []
        previous = None
        for _ in range(50):
            previous = advance_timestamp(previous)
            stamps.append(parse_timestamp(previous))
        assert all(a < b for a, b in zip(stamps, stamps[1:], strict=False))

    def test_unparseable_previous_ignored(self):
        assert parse_timestamp(advance_timestamp("not a date")) is not None
