from __future__ import annotations
import re
from typing import Optional

from .models import ParsedLimits

LIMITS_SEPARATOR = " - "

_NON_DIGIT = re.compile(r"\D")


def _digits_to_int(s: str) -> Optional[int]:
    digits = _NON_DIGIT.sub("", s or "")
    if not digits:
        return None
    return int(digits)


def parse_limits(limits: Optional[str]) -> ParsedLimits:
    """解析 limits 字段："100 - 200" 得到门牌号区间，"Main St - Oak St" 保留交叉街道名。
    任何格式问题都只体现在 valid=False，不抛异常。"""
    if not limits:
        return ParsedLimits()

    parts = limits.split(LIMITS_SEPARATOR)
    if len(parts) != 2:
        return ParsedLimits()

    start_str = parts[0].strip()
    end_str = parts[1].strip()
    start = _digits_to_int(start_str)
    end = _digits_to_int(end_str)

    has_numbers = start is not None and end is not None
    return ParsedLimits(
        start_str=start_str,
        end_str=end_str,
        start=start,
        end=end,
        valid=has_numbers or bool(start_str and end_str),
    )


def contains(number: int, start: int, end: int) -> bool:
    return min(start, end) <= number <= max(start, end)


def block_distance(number: int, start: int, end: int) -> int:
    lo, hi = min(start, end), max(start, end)
    if lo <= number <= hi:
        return 0
    if number < lo:
        return lo - number
    return number - hi
