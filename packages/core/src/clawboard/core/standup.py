"""standup 文本解析

逐行状态机，只有一个 "当前分区" 变量：
- 以 "- " 开头的行是条目，去掉加粗标记后追加到当前分区
- 其他包含分区关键字/标记的行切换当前分区
- 其余行（以及第一个分区标记之前的条目）丢弃

每次调用从头解析，不保留跨调用状态，任何输入都不会失败。
"""

from .models.views import StandupSections

# (分区字段名, 触发关键字)；按顺序匹配，先命中者生效
SECTION_MARKERS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("completed", ("Completed", "✅")),
    ("in_progress", ("In Progress", "🔨")),
    ("needs_attention", ("Needs Attention", "🚨")),
)

BULLET_PREFIX = "- "


def _match_section(line: str) -> str | None:
    for section, markers in SECTION_MARKERS:
        if any(marker in line for marker in markers):
            return section
    return None


def parse_standup(text: str | None) -> StandupSections:
    """把 standup markdown 解析为 completed / inProgress / needsAttention 三个列表"""
    sections: dict[str, list[str]] = {name: [] for name, _ in SECTION_MARKERS}
    current: str | None = None

    for raw_line in (text or "").splitlines():
        line = raw_line.strip()
        if line.startswith(BULLET_PREFIX):
            if current is not None:
                item = line[len(BULLET_PREFIX):].replace("**", "").strip()
                if item:
                    sections[current].append(item)
            continue
        matched = _match_section(line)
        if matched is not None:
            current = matched

    return StandupSections(**sections)
