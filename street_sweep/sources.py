from __future__ import annotations
import json
import logging
import urllib.parse
import urllib.request
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .config import Config


logger = logging.getLogger(__name__)


@dataclass
class FetchResult:
    """一次外部查询的结果：成功时 rows 为记录列表，失败时 error 记录原因。"""
    rows: List[Dict[str, Any]] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def empty(self) -> bool:
        return not self.rows

    @classmethod
    def failure(cls, error: str) -> "FetchResult":
        return cls(rows=[], error=error)


class SocrataSource:
    """旧金山开放数据（Socrata SODA 接口）：地址点数据集 + 街道清扫日程数据集。"""

    def __init__(self, cfg: Config) -> None:
        self.address_url = cfg.address_url
        self.schedule_url = cfg.schedule_url
        self.timeout = cfg.http_timeout
        self.app_token = cfg.app_token

    def search_addresses(self, text: str, limit: int) -> FetchResult:
        return self._get(self.address_url, {"$q": text, "$limit": limit})

    def addresses_on_street(self, street_name: str, limit: int) -> FetchResult:
        return self._get(self.address_url, {"street_name": street_name, "$limit": limit})

    def schedules_by_cnn(self, cnn: str, limit: int) -> FetchResult:
        return self._get(self.schedule_url, {"cnn": cnn, "$limit": limit})

    def schedules_by_corridor(self, corridor: str, limit: int) -> FetchResult:
        return self._get(self.schedule_url, {"corridor": corridor, "$limit": limit})

    def search_schedules(self, text: str, limit: int) -> FetchResult:
        return self._get(self.schedule_url, {"$q": text, "$limit": limit})

    def _get(self, base_url: str, params: Dict[str, Any]) -> FetchResult:
        url = f"{base_url}?{urllib.parse.urlencode(params)}"
        req = urllib.request.Request(url, method="GET")
        req.add_header("Accept", "application/json")
        if self.app_token:
            req.add_header("X-App-Token", self.app_token)
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp:
                data = json.loads(resp.read().decode("utf-8"))
        except Exception as exc:
            logger.warning("Request to %s failed: %s", base_url, exc)
            return FetchResult.failure(str(exc))

        if not isinstance(data, list):
            logger.warning("Unexpected payload from %s: %r", base_url, type(data).__name__)
            return FetchResult.failure("response is not a JSON array")
        return FetchResult(rows=[row for row in data if isinstance(row, dict)])
