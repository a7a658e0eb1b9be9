from __future__ import annotations
import json
import math
import re
from dataclasses import asdict, is_dataclass
from typing import Any, Optional

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

def parse_int(value: Any) -> Optional[int]:
    """宽松的整数解析：只读取开头的整数部分（"13:00" -> 13，"12A" -> 12），失败返回 None。"""
    if value is None:
        return None
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    m = _LEADING_INT.match(str(value))
    if not m:
        return None
    return int(m.group(1))

def normalize_text(text: Optional[str]) -> str:
    """压缩空白字符并去除首尾空格"""
    if text is None:
        return ""
    return re.sub(r"\s+", " ", text).strip()

class EnhancedJSONEncoder(json.JSONEncoder):
    def default(self, obj: Any) -> Any:
        if is_dataclass(obj):
            return asdict(obj)
        if isinstance(obj, (set, frozenset)):
            return list(obj)
        return super().default(obj)
