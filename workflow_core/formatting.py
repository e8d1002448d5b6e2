"""标签与时间格式化工具"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Optional

# 驼峰边界：小写/数字后紧跟大写，或连续大写后接大写+小写
_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_SEPARATOR_RE = re.compile(r"[_\-\s]+")

_UNITS = (
    ("year", 365 * 24 * 3600),
    ("month", 30 * 24 * 3600),
    ("day", 24 * 3600),
    ("hour", 3600),
    ("minute", 60),
)


def generate_label(value: str) -> str:
    """
    将枚举值或字段名转换为展示标签

    示例: "InProgress" -> "In Progress", "created_at" -> "Created At"
    """
    if not value:
        return ""
    words = []
    for chunk in _SEPARATOR_RE.split(str(value).strip()):
        if not chunk:
            continue
        words.extend(w for w in _CAMEL_BOUNDARY_RE.split(chunk) if w)
    return " ".join(w[:1].upper() + w[1:] for w in words)


def _as_utc(dt: datetime) -> datetime:
    # naive 时间按 UTC 处理
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_date_time(dt: Optional[datetime]) -> Optional[str]:
    """格式化为 "Oct 19, 2026, 9:41 AM" 形式"""
    if dt is None:
        return None
    dt = _as_utc(dt)
    hour = dt.hour % 12 or 12
    suffix = "AM" if dt.hour < 12 else "PM"
    return f"{dt.strftime('%b')} {dt.day}, {dt.year}, {hour}:{dt.minute:02d} {suffix}"


def times_ago(dt: Optional[datetime], now: Optional[datetime] = None) -> Optional[str]:
    """
    返回相对时间描述

    Args:
        dt: 目标时间
        now: 参考时间（默认当前 UTC 时间）

    Returns:
        如 "just now"、"5 minutes ago"、"1 day ago"
    """
    if dt is None:
        return None
    reference = _as_utc(now) if now is not None else datetime.now(timezone.utc)
    seconds = int((reference - _as_utc(dt)).total_seconds())

    if seconds < 45:
        return "just now"

    for unit, size in _UNITS:
        count = seconds // size
        if count >= 1:
            return f"{count} {unit}{'' if count == 1 else 's'} ago"

    return "1 minute ago"
