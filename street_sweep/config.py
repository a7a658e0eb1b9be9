from __future__ import annotations
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

@dataclass
class Config:
    address_url: str
    schedule_url: str
    address_limit: int
    cnn_limit: int
    corridor_limit: int
    search_limit: int
    http_timeout: float
    max_workers: int
    cross_street_tolerance: int
    variants_path: Optional[str] = None
    snapshot_path: Optional[str] = None
    app_token: Optional[str] = None

def load_config(path: str | Path) -> Config:
    """读取 JSON 配置，再用环境变量（可由 .env 提供）覆盖部分字段。
    variants_path / snapshot_path 为相对路径时，相对于配置文件所在目录。"""
    p = Path(path)
    raw = json.loads(p.read_text(encoding="utf-8"))
    cfg = Config(
        address_url=raw["address_url"],
        schedule_url=raw["schedule_url"],
        address_limit=int(raw["address_limit"]),
        cnn_limit=int(raw["cnn_limit"]),
        corridor_limit=int(raw["corridor_limit"]),
        search_limit=int(raw["search_limit"]),
        http_timeout=float(raw["http_timeout"]),
        max_workers=int(raw["max_workers"]),
        cross_street_tolerance=int(raw["cross_street_tolerance"]),
        variants_path=_resolve(p.parent, raw.get("variants_path")),
        snapshot_path=_resolve(p.parent, raw.get("snapshot_path")),
    )

    if os.getenv("SWEEP_SNAPSHOT_PATH"):
        cfg.snapshot_path = os.environ["SWEEP_SNAPSHOT_PATH"]
    if os.getenv("SWEEP_HTTP_TIMEOUT"):
        cfg.http_timeout = float(os.environ["SWEEP_HTTP_TIMEOUT"])
    cfg.app_token = os.getenv("SOCRATA_APP_TOKEN") or None
    return cfg

def _resolve(base: Path, value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    vp = Path(value)
    if not vp.is_absolute():
        vp = base / vp
    return str(vp)
