import json
from pathlib import Path

import pytest

from street_sweep.config import Config
from street_sweep.sources import FetchResult

ROOT = Path(__file__).resolve().parent.parent


class FakeSource:
    """In-memory stand-in for the open-data endpoints; records every call."""

    def __init__(self, addresses=None, by_cnn=None, by_corridor=None, by_search=None,
                 streets=None, failing=()):
        self.addresses = addresses or []
        self.by_cnn = by_cnn or {}
        self.by_corridor = by_corridor or {}
        self.by_search = by_search or {}
        self.streets = streets or {}
        self.failing = set(failing)
        self.calls = []

    def _result(self, kind, rows):
        self.calls.append(kind)
        if kind[0] in self.failing:
            return FetchResult.failure("boom")
        return FetchResult(rows=list(rows))

    def search_addresses(self, text, limit):
        return self._result(("search_addresses", text), self.addresses[:limit])

    def addresses_on_street(self, street_name, limit):
        rows = self.streets.get(street_name, [])
        return self._result(("addresses_on_street", street_name), rows[:limit])

    def schedules_by_cnn(self, cnn, limit):
        return self._result(("schedules_by_cnn", cnn), self.by_cnn.get(cnn, [])[:limit])

    def schedules_by_corridor(self, corridor, limit):
        return self._result(("schedules_by_corridor", corridor), self.by_corridor.get(corridor, [])[:limit])

    def search_schedules(self, text, limit):
        return self._result(("search_schedules", text), self.by_search.get(text, [])[:limit])


def address_row(number=150, lon=0.0001, lat=0.5, street="25TH", stype="AVE", cnn="123"):
    return {
        "address": f"{number} {street} {stype}",
        "address_number": str(number),
        "street_name": street,
        "street_type": stype,
        "cnn": cnn,
        "point": {"type": "Point", "coordinates": [lon, lat]},
    }


def schedule_row(limits="100 - 200", side="R", weekday="Tue", line=((0.0, 0.0), (0.0, 1.0)), **extra):
    row = {
        "cnn": "123",
        "corridor": "25th Ave",
        "limits": limits,
        "cnnrightleft": side,
        "weekday": weekday,
        "fromhour": "8",
        "tohour": "10",
        "week1": "1", "week2": "1", "week3": "1", "week4": "1", "week5": "1",
    }
    if line is not None:
        row["line"] = {"type": "LineString", "coordinates": [list(p) for p in line]}
    row.update(extra)
    return row


@pytest.fixture
def cfg():
    return Config(
        address_url="http://addresses.invalid/resource.json",
        schedule_url="http://schedules.invalid/resource.json",
        address_limit=1,
        cnn_limit=100,
        corridor_limit=300,
        search_limit=300,
        http_timeout=1.0,
        max_workers=4,
        cross_street_tolerance=500,
        variants_path=str(ROOT / "data" / "corridor_variants.json"),
    )


@pytest.fixture
def default_config_path(tmp_path):
    raw = json.loads((ROOT / "data" / "config.default.json").read_text(encoding="utf-8"))
    p = tmp_path / "config.json"
    p.write_text(json.dumps(raw), encoding="utf-8")
    return p
