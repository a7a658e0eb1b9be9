"""
Tests for the offline snapshot workbook source.
"""

import pytest

from street_sweep.pipeline import StreetCleaningPipeline
from street_sweep.simulate import seed_snapshot
from street_sweep.snapshot import SnapshotSource, write_snapshot


@pytest.fixture(scope="module")
def snapshot_path(tmp_path_factory):
    path = tmp_path_factory.mktemp("snap") / "snapshot.xlsx"
    addresses, schedules = seed_snapshot(n_blocks=4, seed=7)
    write_snapshot(path, addresses, schedules)
    return path


@pytest.fixture(scope="module")
def source(snapshot_path):
    return SnapshotSource(snapshot_path)


def test_search_addresses(source):
    res = source.search_addresses("301 25TH AVE", 1)
    assert res.ok
    row = res.rows[0]
    assert row["address"] == "301 25TH AVE"
    assert row["address_number"] == "301"
    assert len(row["point"]["coordinates"]) == 2


def test_schedules_by_cnn_round_trip_geometry(source):
    cnn = source.search_addresses("301 25TH AVE", 1).rows[0]["cnn"]
    res = source.schedules_by_cnn(cnn, 100)
    assert len(res.rows) == 2
    assert {r["cnnrightleft"] for r in res.rows} == {"L", "R"}
    assert res.rows[0]["line"]["type"] == "LineString"
    assert res.rows[0]["week1"] in ("0", "1")


def test_addresses_on_street(source):
    res = source.addresses_on_street("CLEMENT", 1)
    assert res.rows[0]["address_number"] == "2420"


def test_schedules_by_corridor_and_limit(source):
    assert len(source.schedules_by_corridor("25th Ave", 3).rows) == 3
    assert source.schedules_by_corridor("Nowhere", 3).empty


def test_search_with_no_tokens_is_empty(source):
    assert source.search_schedules("   ", 10).empty


def test_pipeline_against_snapshot(cfg, snapshot_path):
    cfg.snapshot_path = str(snapshot_path)
    pipe = StreetCleaningPipeline(cfg)
    assert isinstance(pipe.source, SnapshotSource)

    east = pipe.lookup("301 25TH AVE")
    assert east.tier == "exact"
    assert [s["cnnrightleft"] for s in east.schedules] == ["R"]
    assert east.schedules[0]["addrSide"] == "right"

    west = pipe.lookup("300 25TH AVE")
    assert [s["cnnrightleft"] for s in west.schedules] == ["L"]
