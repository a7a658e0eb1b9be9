from __future__ import annotations
import logging
import math
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from .cross_streets import CrossStreetResolver
from .geometry import side_of_line
from .limits import block_distance, contains, parse_limits
from .models import LEFT, RIGHT, Address, BlockFaceRecord, EnrichedRecord


logger = logging.getLogger(__name__)

SIDE_CODES = {LEFT: "L", RIGHT: "R"}


def side_matches(side: Optional[str], indicator: Optional[str]) -> bool:
    return side is not None and SIDE_CODES.get(side) == indicator


def cross_street_in_range(number: int, start_ref: Optional[int], end_ref: Optional[int], tolerance: int) -> bool:
    """交叉街道启发式：两端参考门牌号都查到，且目标门牌号与两者的差都小于 tolerance。
    这是近似判断，不是几何意义上的包含。"""
    if start_ref is None or end_ref is None:
        return False
    lo, hi = min(start_ref, end_ref), max(start_ref, end_ref)
    return abs(number - lo) < tolerance and abs(number - hi) < tolerance


def enrich_record(record: BlockFaceRecord, address: Address,
                  resolver: Optional[CrossStreetResolver], tolerance: int) -> EnrichedRecord:
    limits = parse_limits(record.limits)
    line = record.line or ()
    side = side_of_line(line, address.lon, address.lat)
    has_geometry = len(line) > 0

    numeric = limits.valid and limits.numeric
    in_numeric_range = numeric and contains(address.number, limits.start, limits.end)
    distance = block_distance(address.number, limits.start, limits.end) if numeric else math.inf

    cross_ok = False
    if not numeric and limits.start_str and limits.end_str and resolver is not None:
        start_ref = resolver.resolve(limits.start_str)
        end_ref = resolver.resolve(limits.end_str)
        cross_ok = cross_street_in_range(address.number, start_ref, end_ref, tolerance)

    matches = side_matches(side, record.side)
    return EnrichedRecord(
        record=record,
        limits=limits,
        side=side,
        in_range=bool(in_numeric_range or cross_ok),
        side_matches=matches,
        # 没有几何信息的记录无法按左右侧排除；点恰好落在线上时同样视为兼容
        side_compatible=(not has_geometry) or matches or side is None,
        block_distance=distance,
        has_geometry=has_geometry,
        cross_street_in_range=cross_ok,
    )


class RecordEnricher:
    """对候选记录并发做几何/区间/交叉街道计算；结果按输入顺序返回，
    所有任务完成（线程池退出）之后才交给排序。"""

    def __init__(self, max_workers: int, tolerance: int):
        self.max_workers = max(1, int(max_workers))
        self.tolerance = tolerance

    def enrich_all(self, records: Sequence[BlockFaceRecord], address: Address,
                   resolver: Optional[CrossStreetResolver],
                   cancel_event: Optional[threading.Event] = None) -> List[EnrichedRecord]:
        if not records:
            return []
        cancel_event = cancel_event or threading.Event()

        def _one(rec: BlockFaceRecord) -> Optional[EnrichedRecord]:
            # 请求已取消时，排队中的任务直接跳过
            if cancel_event.is_set():
                return None
            return enrich_record(rec, address, resolver, self.tolerance)

        results: List[Optional[EnrichedRecord]] = [None] * len(records)
        with ThreadPoolExecutor(max_workers=min(self.max_workers, len(records))) as pool:
            futures = {pool.submit(_one, rec): idx for idx, rec in enumerate(records)}
            for fut, idx in futures.items():
                results[idx] = fut.result()
        if cancel_event.is_set():
            logger.debug("Enrichment cancelled after %d of %d records",
                         sum(r is not None for r in results), len(records))
        else:
            logger.debug("Enriched %d candidate records", len(records))
        return [r for r in results if r is not None]
