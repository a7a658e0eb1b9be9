from __future__ import annotations
import logging
import threading
from concurrent.futures import Future
from typing import Dict, Optional

from .utils import parse_int


logger = logging.getLogger(__name__)


class CrossStreetResolver:
    """为交叉街道名查找一个代表性门牌号（该街道上的任意一条地址记录）。
    查询失败、超时、无结果、门牌号无法解析都返回 None，不向上抛出。
    每个请求新建一个实例；同名街道在本次请求内只查询一次。"""

    def __init__(self, source, cancel_event: Optional[threading.Event] = None):
        self.source = source
        self.cancel_event = cancel_event or threading.Event()
        # 同一街道的并发查询共享同一个 Future，后到者等待首个结果
        self._inflight: Dict[str, Future] = {}
        self._lock = threading.Lock()

    def resolve(self, street_name: str) -> Optional[int]:
        key = (street_name or "").strip().upper()
        if not key:
            return None
        with self._lock:
            fut = self._inflight.get(key)
            owner = fut is None
            if owner:
                if self.cancel_event.is_set():
                    logger.debug("Request cancelled, skipping cross street lookup for %s", key)
                    return None
                fut = Future()
                self._inflight[key] = fut
        if not owner:
            return fut.result()

        number = None
        try:
            number = self._lookup(key)
        finally:
            fut.set_result(number)
        return number

    def _lookup(self, key: str) -> Optional[int]:
        try:
            res = self.source.addresses_on_street(key, 1)
        except Exception as exc:
            logger.debug("Cross street lookup for %s raised: %s", key, exc)
            return None
        if not res.ok:
            logger.debug("Cross street lookup for %s failed: %s", key, res.error)
            return None
        if res.empty:
            logger.debug("No address found on cross street %s", key)
            return None
        number = parse_int(res.rows[0].get("address_number"))
        if number is None:
            logger.debug("Unparsable address number on cross street %s: %r", key, res.rows[0].get("address_number"))
        return number
