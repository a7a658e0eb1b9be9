"""
Tests for the HTTP surface.
"""

import asyncio
import threading

import pytest
from fastapi.testclient import TestClient

import app as app_module
from street_sweep.pipeline import StreetCleaningPipeline

from conftest import FakeSource, address_row, schedule_row


@pytest.fixture
def client(cfg, monkeypatch):
    source = FakeSource(
        addresses=[address_row(number=150, lon=0.001, lat=0.5)],
        by_cnn={"123": [schedule_row(side="R", weekday="Tue")]},
    )
    monkeypatch.setattr(app_module, "pipeline", StreetCleaningPipeline(cfg, source=source))
    return TestClient(app_module.app)


def test_lookup_success(client):
    resp = client.get("/api/street-cleaning", params={"address": "150 25th Ave"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["address"] == "150 25TH AVE"
    assert body["addrCoords"] == [0.001, 0.5]
    assert body["schedules"][0]["weekday"] == "Tuesday"


def test_missing_address(client):
    resp = client.get("/api/street-cleaning")
    assert resp.status_code == 400
    assert resp.json() == {"error": "Address parameter is required"}


def test_not_found(cfg, monkeypatch):
    monkeypatch.setattr(app_module, "pipeline", StreetCleaningPipeline(cfg, source=FakeSource()))
    resp = TestClient(app_module.app).get("/api/street-cleaning", params={"address": "1 Nowhere"})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Address not found."}


def test_unexpected_error_is_generic_500(cfg, monkeypatch):
    class Broken(FakeSource):
        def search_addresses(self, text, limit):
            raise RuntimeError("kaboom")

    monkeypatch.setattr(app_module, "pipeline", StreetCleaningPipeline(cfg, source=Broken()))
    resp = TestClient(app_module.app).get("/api/street-cleaning", params={"address": "150 25th Ave"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to fetch street cleaning data."}


def test_healthz(client):
    assert client.get("/healthz").json() == {"status": "ok"}


def test_client_disconnect_sets_cancel_event(monkeypatch):
    monkeypatch.setattr(app_module, "DISCONNECT_POLL_SECONDS", 0.01)

    class GoneRequest:
        async def is_disconnected(self):
            return True

    cancel = threading.Event()
    # blocks until cancelled; returns whether the event fired
    result = asyncio.run(app_module.run_until_disconnect(GoneRequest(), lambda ev: ev.wait(5), cancel))
    assert result is True
    assert cancel.is_set()


def test_connected_client_is_not_cancelled(monkeypatch):
    monkeypatch.setattr(app_module, "DISCONNECT_POLL_SECONDS", 0.01)

    class LiveRequest:
        async def is_disconnected(self):
            return False

    cancel = threading.Event()
    result = asyncio.run(app_module.run_until_disconnect(LiveRequest(), lambda ev: ev.wait(0.05), cancel))
    assert result is False
    assert not cancel.is_set()
