from __future__ import annotations
import math
from typing import Any, Dict, List, Optional, Sequence

from .models import LEFT, RIGHT, EnrichedRecord
from .utils import parse_int

WEEKDAY_NAMES: Dict[str, str] = {
    "Mon": "Monday",
    "Tue": "Tuesday",
    "Wed": "Wednesday",
    "Thu": "Thursday",
    "Fri": "Friday",
    "Sat": "Saturday",
    "Sun": "Sunday",
}

WEEK_ORDINALS = ("1st", "2nd", "3rd", "4th", "5th")
EVERY_WEEK = "Every week"
HOUR_PLACEHOLDER = "—"

def format_weekday(code: Optional[str]) -> str:
    if not code:
        return ""
    return WEEKDAY_NAMES.get(code, code)

def format_hour(hour: Optional[str]) -> str:
    """24 小时制转 12 小时制："0" -> "12 AM"，"13" -> "1 PM"；无法解析时原样返回。"""
    if not hour:
        return HOUR_PLACEHOLDER
    h = parse_int(hour)
    if h is None:
        return hour
    ampm = "PM" if h >= 12 else "AM"
    display = 12 if h % 12 == 0 else h % 12
    return f"{display} {ampm}"

def week_labels(weeks: Sequence[bool]) -> List[str]:
    return [label for label, on in zip(WEEK_ORDINALS, weeks) if on]

def week_display(labels: Sequence[str]) -> str:
    if all(o in labels for o in WEEK_ORDINALS):
        return EVERY_WEEK
    return ", ".join(labels)

def side_label(side: Optional[str]) -> str:
    if side == LEFT:
        return "Left side of street"
    if side == RIGHT:
        return "Right side of street"
    return ""

def sign_text(weekday: str, from_hour: str, to_hour: str) -> List[str]:
    # 路边"禁止停车"标牌的四行文字
    return ["NO PARKING", f"{from_hour} TO {to_hour}", weekday, "STREET CLEANING"]

def format_schedule(e: EnrichedRecord) -> Dict[str, Any]:
    rec = e.record
    weekday = format_weekday(rec.weekday)
    from_hour = format_hour(rec.from_hour)
    to_hour = format_hour(rec.to_hour)
    weeks = week_labels(rec.weeks)

    out: Dict[str, Any] = dict(rec.extra)
    out.update({
        "cnn": rec.cnn,
        "corridor": rec.corridor,
        "limits": rec.limits,
        "cnnrightleft": rec.side,
        "weekday": weekday,
        "fromhour": from_hour,
        "tohour": to_hour,
        "weeks": weeks,
        "weeksDisplay": week_display(weeks) if weeks else "",
        "addrSide": e.side,
        "sideLabel": side_label(e.side),
        "start": e.limits.start,
        "end": e.limits.end,
        "startStr": e.limits.start_str,
        "endStr": e.limits.end_str,
        "inRange": e.in_range,
        "sideMatches": e.side_matches,
        "sideIsCompatible": e.side_compatible,
        "blockDistance": e.block_distance if math.isfinite(e.block_distance) else None,
        "hasLineData": e.has_geometry,
        "hasNumericLimits": e.limits.numeric,
        "isCrossStreet": not e.limits.numeric,
        "sign": sign_text(weekday, from_hour, to_hour),
    })
    return out
