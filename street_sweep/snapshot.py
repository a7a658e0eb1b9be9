from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from .sources import FetchResult

SHEET_SCHEMAS: Dict[str, List[str]] = {
    "addresses": ["address", "address_number", "street_name", "street_type", "cnn", "lon", "lat"],
    "schedules": [
        "cnn", "corridor", "limits", "cnnrightleft", "blockside", "fullname",
        "weekday", "fromhour", "tohour",
        "week1", "week2", "week3", "week4", "week5",
        "line_json",
    ],
}

def _ensure_columns(df: pd.DataFrame, columns: List[str]) -> pd.DataFrame:
    result = df.copy()
    for col in columns:
        if col not in result.columns:
            result[col] = None
    return result[columns]

def _clean_value(val: Any) -> Any:
    if val is None:
        return None
    try:
        if pd.isna(val):
            return None
    except (TypeError, ValueError):
        pass
    return val

def _as_text(val: Any) -> Optional[str]:
    """Excel 读回的整数列可能变成 float（如 cnn=1234000.0），统一转为字符串。"""
    val = _clean_value(val)
    if val is None:
        return None
    if isinstance(val, float) and val.is_integer():
        val = int(val)
    return str(val)

def _address_row(row: pd.Series) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "address": _as_text(row["address"]),
        "address_number": _as_text(row["address_number"]),
        "street_name": _as_text(row["street_name"]),
        "street_type": _as_text(row["street_type"]),
        "cnn": _as_text(row["cnn"]),
    }
    lon, lat = _clean_value(row["lon"]), _clean_value(row["lat"])
    if lon is not None and lat is not None:
        out["point"] = {"type": "Point", "coordinates": [float(lon), float(lat)]}
    return {k: v for k, v in out.items() if v is not None}

def _schedule_row(row: pd.Series) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for col in SHEET_SCHEMAS["schedules"]:
        if col == "line_json":
            continue
        val = _as_text(row[col])
        if val is not None:
            out[col] = val
    line_json = _clean_value(row["line_json"])
    if line_json:
        out["line"] = {"type": "LineString", "coordinates": json.loads(line_json)}
    return out

SEARCH_COLUMNS: Dict[str, List[str]] = {
    "addresses": ["address", "street_name", "street_type"],
    "schedules": ["corridor", "limits", "fullname", "blockside"],
}

def _text_match(df: pd.DataFrame, columns: List[str], text: str) -> pd.DataFrame:
    """粗略模拟 $q 全文检索：查询中的每个词（不区分大小写）都要作为完整单词出现在文本字段中。"""
    tokens = [t for t in (text or "").lower().split() if t]
    if not tokens or df.empty:
        return df.iloc[0:0]
    haystack = df[columns].fillna("").astype(str).agg(" ".join, axis=1).str.lower()
    mask = haystack.map(lambda s: set(tokens) <= set(s.split()))
    return df[mask.astype(bool)]

def _equals(df: pd.DataFrame, column: str, value: str) -> pd.DataFrame:
    col = df[column].map(_as_text)
    return df[col == str(value)]

class SnapshotSource:
    """离线数据快照：Excel 工作簿（addresses / schedules 两个工作表），与 SocrataSource 接口一致。"""
    def __init__(self, path: str | Path):
        self.path = Path(path)
        xls = pd.read_excel(self.path, sheet_name=None)
        self.tables: Dict[str, pd.DataFrame] = {}
        for name, cols in SHEET_SCHEMAS.items():
            if name in xls:
                self.tables[name] = _ensure_columns(xls[name], cols)
            else:
                self.tables[name] = pd.DataFrame(columns=cols)

    def search_addresses(self, text: str, limit: int) -> FetchResult:
        return self._rows("addresses", _text_match(self.tables["addresses"], SEARCH_COLUMNS["addresses"], text), limit)

    def addresses_on_street(self, street_name: str, limit: int) -> FetchResult:
        df = self.tables["addresses"]
        names = df["street_name"].fillna("").astype(str).str.upper()
        return self._rows("addresses", df[names == (street_name or "").upper()], limit)

    def schedules_by_cnn(self, cnn: str, limit: int) -> FetchResult:
        return self._rows("schedules", _equals(self.tables["schedules"], "cnn", cnn), limit)

    def schedules_by_corridor(self, corridor: str, limit: int) -> FetchResult:
        df = self.tables["schedules"]
        return self._rows("schedules", df[df["corridor"].map(_as_text) == corridor], limit)

    def search_schedules(self, text: str, limit: int) -> FetchResult:
        return self._rows("schedules", _text_match(self.tables["schedules"], SEARCH_COLUMNS["schedules"], text), limit)

    def _rows(self, table: str, df: pd.DataFrame, limit: int) -> FetchResult:
        to_row = _address_row if table == "addresses" else _schedule_row
        return FetchResult(rows=[to_row(row) for _, row in df.head(limit).iterrows()])

def write_snapshot(path: str | Path, addresses: List[Dict[str, Any]], schedules: List[Dict[str, Any]]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    sched_rows = []
    for s in schedules:
        row = {k: v for k, v in s.items() if k != "line"}
        line = s.get("line")
        row["line_json"] = json.dumps(line["coordinates"]) if line else None
        sched_rows.append(row)
    with pd.ExcelWriter(p, engine="openpyxl") as writer:
        pd.DataFrame(addresses, columns=SHEET_SCHEMAS["addresses"]).to_excel(writer, sheet_name="addresses", index=False)
        pd.DataFrame(sched_rows, columns=SHEET_SCHEMAS["schedules"]).to_excel(writer, sheet_name="schedules", index=False)
