from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Callable, List, NamedTuple, Optional, Sequence

from .models import EnrichedRecord

Selector = Callable[[List[EnrichedRecord]], List[EnrichedRecord]]


class RankStage(NamedTuple):
    name: str
    select: Selector


def select_exact(items: List[EnrichedRecord]) -> List[EnrichedRecord]:
    return [e for e in items if e.in_range and e.side_compatible and e.side_matches]


def select_range_compatible(items: List[EnrichedRecord]) -> List[EnrichedRecord]:
    return [e for e in items if e.in_range and e.side_compatible]


def select_nearest_block(items: List[EnrichedRecord]) -> List[EnrichedRecord]:
    """最近街区：同侧兼容且距离可计算的记录中取距离最小者；并列时优先左右侧一致的，最终只保留一条。"""
    finite = [e for e in items if e.side_compatible and math.isfinite(e.block_distance)]
    if not finite:
        return []
    closest = min(e.block_distance for e in finite)
    tied = [e for e in finite if e.block_distance == closest]
    with_side = [e for e in tied if e.side_matches]
    return (with_side or tied)[:1]


def select_last_resort(items: List[EnrichedRecord]) -> List[EnrichedRecord]:
    return [e for e in items if e.side_compatible][:1]


DEFAULT_STAGES = (
    RankStage("exact", select_exact),
    RankStage("range_compatible_side", select_range_compatible),
    RankStage("nearest_block", select_nearest_block),
    RankStage("last_resort", select_last_resort),
)


@dataclass
class RankOutcome:
    tier: Optional[str] = None
    records: List[EnrichedRecord] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return bool(self.records)


class MatchRanker:
    """按阶段顺序筛选，命中第一个非空阶段即停止。"""

    def __init__(self, stages: Sequence[RankStage] = DEFAULT_STAGES):
        self.stages = tuple(stages)

    def rank(self, enriched: Sequence[EnrichedRecord]) -> RankOutcome:
        items = list(enriched)
        for stage in self.stages:
            selected = stage.select(items)
            if selected:
                return RankOutcome(tier=stage.name, records=selected)
        return RankOutcome()
