from __future__ import annotations
import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

@dataclass(frozen=True)
class VariantRule:
    name: str
    replace: Tuple[Tuple[str, str], ...] = field(default_factory=tuple)
    append_type: bool = False

    def apply(self, street_name: str, street_type: str) -> str:
        out = street_name
        for pattern, repl in self.replace:
            # 只替换第一次出现，"25TH" -> "25th"
            out = re.sub(pattern, repl, out, count=1)
        if self.append_type:
            out = f"{out} {street_type}"
        return out.strip()

DEFAULT_VARIANT_RULES: Tuple[VariantRule, ...] = (
    VariantRule("raw"),
    VariantRule("with_type", append_type=True),
    VariantRule("lower_ordinal", replace=(("TH", "th"),)),
    VariantRule("lower_ordinal_with_type", replace=(("TH", "th"),), append_type=True),
)

def rules_from_raw(raw: Sequence[Dict[str, Any]]) -> Tuple[VariantRule, ...]:
    rules: List[VariantRule] = []
    for item in raw:
        pairs = tuple((str(a), str(b)) for a, b in item.get("replace", []))
        rules.append(VariantRule(name=str(item["name"]), replace=pairs, append_type=bool(item.get("append_type", False))))
    return tuple(rules)

def load_variant_rules(path: Optional[str | Path]) -> Tuple[VariantRule, ...]:
    """
    读取 corridor 名称变换规则（JSON 数组）；未配置路径时使用内置的四条规则。
    """
    if not path:
        return DEFAULT_VARIANT_RULES
    p = Path(path)
    return rules_from_raw(json.loads(p.read_text(encoding="utf-8")))

def corridor_variants(street_name: str, street_type: str = "",
                      rules: Sequence[VariantRule] = DEFAULT_VARIANT_RULES) -> List[str]:
    """按规则顺序生成 corridor 查询变体，去重并丢弃空串。"""
    out: List[str] = []
    for rule in rules:
        v = rule.apply(street_name or "", street_type or "")
        if v and v not in out:
            out.append(v)
    return out
