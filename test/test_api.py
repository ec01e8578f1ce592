"""Tests for the gateway endpoints (TestClient with mocked RailDataClient)."""

from contextlib import asynccontextmanager
from datetime import datetime
from unittest.mock import AsyncMock
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient

from raildata.catalog import line_catalog, station_catalog
from raildata.errors import ApiError, BadCredentialsError
from raildata.models import (
    MsgType,
    StationMsg,
    StationPosition,
    TrainSchedule,
    TrainScheduleEntry,
    TrainStop,
    TrainStopList,
)

NY_TZ = ZoneInfo("America/New_York")


def _make_schedule():
    ny = station_catalog().by_code("NY")
    return TrainSchedule(
        station=ny,
        entries=[
            TrainScheduleEntry(
                departure_time=datetime(2025, 1, 17, 21, 6, tzinfo=NY_TZ),
                destination="Trenton",
                track="3",
                line=line_catalog().by_code("NE"),
                line_name="Northeast Corrdr",
                train_id="3887",
                station_position=StationPosition(code="0", description="First station"),
            )
        ],
    )


def _make_stop_list():
    return TrainStopList(
        train_id="3737",
        line=line_catalog().by_code("NE"),
        destination="Jersey Avenue",
        stops=[TrainStop(station=station_catalog().by_code("NY"))],
    )


@pytest.fixture()
def mock_raildata():
    """Create a mocked RailData client."""
    mock = AsyncMock()
    mock.get_train_schedule_19_records.return_value = _make_schedule()
    mock.get_station_msg.return_value = [
        StationMsg(type=MsgType.banner, text="Delays on the NEC")
    ]
    mock.get_train_stop_list.return_value = _make_stop_list()
    return mock


def _test_client(mock_raildata, api_key):
    import raildata.app as app_module

    # Patch lifespan to skip real startup
    @asynccontextmanager
    async def noop_lifespan(app):
        yield

    original_lifespan = app_module.app.router.lifespan_context
    app_module.app.router.lifespan_context = noop_lifespan
    app_module._client = mock_raildata
    app_module._config = type("C", (), {"api_key": api_key})()
    try:
        with TestClient(app_module.app, raise_server_exceptions=False) as c:
            yield c
    finally:
        app_module._client = None
        app_module._config = None
        app_module.app.router.lifespan_context = original_lifespan


@pytest.fixture()
def client(mock_raildata):
    """TestClient with mocked RailData client and no auth."""
    yield from _test_client(mock_raildata, None)


@pytest.fixture()
def auth_client(mock_raildata):
    """TestClient with mocked RailData client and API key auth enabled."""
    yield from _test_client(mock_raildata, "test-secret")


class TestHealthEndpoint:
    def test_returns_200(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "healthy"}

    def test_no_auth_needed(self, auth_client):
        resp = auth_client.get("/health")
        assert resp.status_code == 200


class TestResolveEndpoints:
    def test_station_by_code(self, client):
        resp = client.get("/v1/stations/resolve", params={"code": "NY"})
        assert resp.status_code == 200
        assert resp.json() == {
            "code": "NY",
            "name": "New York Penn Station",
            "short_name": "New York",
        }

    def test_station_by_misspelled_name(self, client):
        resp = client.get("/v1/stations/resolve", params={"name": "HO-HO-KUS"})
        assert resp.status_code == 200
        assert resp.json()["code"] == "UF"

    def test_station_not_found(self, client):
        resp = client.get("/v1/stations/resolve", params={"name": "12345678901234567890"})
        assert resp.status_code == 404

    def test_line_by_abbreviation(self, client):
        resp = client.get("/v1/lines/resolve", params={"name": "MOBO"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["code"] == "MC"
        assert data["color"] == {"r": 0xE6, "g": 0x68, "b": 0x59}

    def test_line_without_query(self, client):
        resp = client.get("/v1/lines/resolve")
        assert resp.status_code == 404


class TestDeparturesEndpoint:
    def test_returns_schedule(self, client, mock_raildata):
        resp = client.get("/v1/stations/New York Penn Station/departures", params={"line": "NEC"})
        assert resp.status_code == 200
        mock_raildata.get_train_schedule_19_records.assert_awaited_once_with("NY", "NE")
        data = resp.json()
        assert data["station"]["code"] == "NY"
        assert data["entries"][0]["train_id"] == "3887"
        assert data["entries"][0]["departure_time"] == "2025-01-17T21:06:00-05:00"

    def test_without_line(self, client, mock_raildata):
        resp = client.get("/v1/stations/NP/departures")
        assert resp.status_code == 200
        mock_raildata.get_train_schedule_19_records.assert_awaited_once_with("NP", None)

    def test_unknown_station(self, client, mock_raildata):
        resp = client.get("/v1/stations/12345678901234567890/departures")
        assert resp.status_code == 404
        mock_raildata.get_train_schedule_19_records.assert_not_awaited()

    def test_raildata_error_is_502(self, client, mock_raildata):
        mock_raildata.get_train_schedule_19_records.side_effect = ApiError(
            "Daily usage limit:10. Your current daily usage: 11"
        )
        resp = client.get("/v1/stations/NY/departures")
        assert resp.status_code == 502
        assert "Daily usage limit" in resp.json()["detail"]

    def test_credentials_error_is_502(self, client, mock_raildata):
        mock_raildata.get_train_schedule_19_records.side_effect = BadCredentialsError()
        resp = client.get("/v1/stations/NY/departures")
        assert resp.status_code == 502
        assert "credentials" in resp.json()["detail"]


class TestMessagesEndpoint:
    def test_all_messages(self, client, mock_raildata):
        resp = client.get("/v1/messages")
        assert resp.status_code == 200
        mock_raildata.get_station_msg.assert_awaited_once_with(None, None)
        assert resp.json()[0]["text"] == "Delays on the NEC"

    def test_filters_resolved(self, client, mock_raildata):
        resp = client.get("/v1/messages", params={"station": "Newark Penn Station", "line": "MC"})
        assert resp.status_code == 200
        mock_raildata.get_station_msg.assert_awaited_once_with("NP", "MC")


class TestTrainStopsEndpoint:
    def test_returns_stops(self, client, mock_raildata):
        resp = client.get("/v1/trains/3737/stops")
        assert resp.status_code == 200
        mock_raildata.get_train_stop_list.assert_awaited_once_with("3737")
        assert resp.json()["stops"][0]["station"]["code"] == "NY"

    def test_unknown_train(self, client, mock_raildata):
        mock_raildata.get_train_stop_list.return_value = None
        resp = client.get("/v1/trains/9999/stops")
        assert resp.status_code == 404
        assert "9999" in resp.json()["detail"]


class TestAuthentication:
    def test_rejects_without_key(self, auth_client):
        resp = auth_client.get("/v1/stations/resolve", params={"code": "NY"})
        assert resp.status_code == 401

    def test_rejects_wrong_key(self, auth_client):
        resp = auth_client.get(
            "/v1/messages", headers={"X-API-Key": "wrong"}
        )
        assert resp.status_code == 401

    def test_accepts_correct_key(self, auth_client):
        resp = auth_client.get(
            "/v1/trains/3737/stops", headers={"X-API-Key": "test-secret"}
        )
        assert resp.status_code == 200
