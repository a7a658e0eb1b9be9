from __future__ import annotations
import logging
import threading
from typing import Any, Dict, List, Optional

from .config import Config
from .cross_streets import CrossStreetResolver
from .enrichment import RecordEnricher
from .errors import AddressNotFound, MissingParameter, NoScheduleData, RequestCancelled, UpstreamFailure
from .formatting import format_schedule
from .models import Address, BlockFaceRecord, MatchResult
from .ranking import MatchRanker
from .snapshot import SnapshotSource
from .sources import FetchResult, SocrataSource
from .utils import normalize_text, parse_int
from .variants import corridor_variants, load_variant_rules


logger = logging.getLogger(__name__)


class StreetCleaningPipeline:
    """街道清扫日程查询主流程：地址解析 -> 候选日程召回（三级策略）-> 并发补充几何/区间信息 -> 分级筛选 -> 格式化输出。"""

    def __init__(self, cfg: Config, source=None):
        self.cfg = cfg
        if source is None:
            source = SnapshotSource(cfg.snapshot_path) if cfg.snapshot_path else SocrataSource(cfg)
        self.source = source
        self.variant_rules = load_variant_rules(cfg.variants_path)
        self.enricher = RecordEnricher(cfg.max_workers, cfg.cross_street_tolerance)
        self.ranker = MatchRanker()

    def lookup(self, text: Optional[str], cancel_event: Optional[threading.Event] = None) -> MatchResult:
        query = normalize_text(text)
        if not query:
            raise MissingParameter()

        logger.info("Looking up address: %s", query)
        address = self.resolve_address(query)

        records = self.fetch_candidates(address)
        if not records:
            raise NoScheduleData()

        cancel_event = cancel_event or threading.Event()
        resolver = CrossStreetResolver(self.source, cancel_event)
        enriched = self.enricher.enrich_all(records, address, resolver, cancel_event)
        if cancel_event.is_set():
            logger.info("Lookup for %s cancelled by caller", query)
            raise RequestCancelled()

        outcome = self.ranker.rank(enriched)
        if not outcome.found:
            raise NoScheduleData(NoScheduleData.NOT_COVERED)
        logger.info("Matched %d schedule(s) for %s via %s", len(outcome.records), query, outcome.tier)

        schedules = [format_schedule(e) for e in outcome.records]
        return MatchResult(address=address, schedules=schedules, tier=outcome.tier)

    def lookup_json(self, text: Optional[str], cancel_event: Optional[threading.Event] = None) -> Dict[str, Any]:
        return self.lookup(text, cancel_event).to_response()

    def resolve_address(self, query: str) -> Address:
        res = self.source.search_addresses(query, self.cfg.address_limit)
        if not res.ok:
            raise UpstreamFailure()
        if res.empty:
            raise AddressNotFound()
        try:
            return address_from_row(res.rows[0])
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Malformed address record for %s: %s", query, exc)
            raise UpstreamFailure() from exc

    def fetch_candidates(self, address: Address) -> List[BlockFaceRecord]:
        """依次尝试 cnn、corridor 名称变体、全文检索，取第一个非空结果。"""
        if address.cnn:
            res = self.source.schedules_by_cnn(address.cnn, self.cfg.cnn_limit)
            if _usable(res, "cnn", address.cnn):
                return _to_records(res)

        for variant in corridor_variants(address.street_name, address.street_type, self.variant_rules):
            res = self.source.schedules_by_corridor(variant, self.cfg.corridor_limit)
            if _usable(res, "corridor", variant):
                return _to_records(res)

        term = f"{address.street_name} {address.street_type}".strip()
        if term:
            res = self.source.search_schedules(term, self.cfg.search_limit)
            if _usable(res, "search", term):
                return _to_records(res)
        return []


def address_from_row(row: Dict[str, Any]) -> Address:
    number = parse_int(row.get("address_number"))
    if number is None:
        raise ValueError(f"unparsable address_number: {row.get('address_number')!r}")
    lon, lat = row["point"]["coordinates"][:2]
    return Address(
        number=number,
        lon=float(lon),
        lat=float(lat),
        street_name=row.get("street_name") or "",
        street_type=row.get("street_type") or "",
        cnn=str(row["cnn"]) if row.get("cnn") not in (None, "") else None,
        label=row.get("address") or "",
    )


def _usable(res: FetchResult, strategy: str, key: str) -> bool:
    if not res.ok:
        logger.info("Schedule fetch by %s=%s failed: %s", strategy, key, res.error)
        return False
    if res.empty:
        logger.debug("Schedule fetch by %s=%s returned nothing", strategy, key)
        return False
    logger.debug("Schedule fetch by %s=%s returned %d rows", strategy, key, len(res.rows))
    return True


def _to_records(res: FetchResult) -> List[BlockFaceRecord]:
    return [BlockFaceRecord.from_row(row) for row in res.rows]
