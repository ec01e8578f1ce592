"""Tests for the low-level request executor and wire models."""

from unittest.mock import Mock

import httpx
import pytest

from raildata import api
from raildata.errors import (
    ApiError,
    DecodeError,
    HttpStatusError,
    InvalidTokenError,
    MissingCredentialsError,
    RequestTimeoutError,
    TransportError,
)


async def _execute(base_url, method, request):
    async with httpx.AsyncClient() as http_client:
        executor = api.RequestExecutor(http_client, base_url=base_url, timeout=5.0)
        return await executor.execute(method, request)


class TestMethodDefinitions:
    def test_token_methods(self):
        assert api.IS_VALID_TOKEN.wants_token
        assert api.GET_TRAIN_STOP_LIST.wants_token
        assert not api.GET_TOKEN.wants_token

    def test_with_token_replaces_token(self):
        request = api.GetTrainStopListRequest(train="3737", token="old")
        updated = api.GET_TRAIN_STOP_LIST.with_token(request, "new")
        assert updated.token == "new"
        assert updated.train == "3737"
        assert request.token == "old"

    def test_with_token_leaves_get_token_alone(self):
        request = api.GetTokenRequest(username="u", password="p")
        assert api.GET_TOKEN.with_token(request, "tok") is request

    def test_station_schedule_field_alias(self):
        request = api.GetStationScheduleRequest(station="NY", njt_only="true", token="t")
        assert request.model_dump(by_alias=True, exclude_none=True) == {
            "token": "t",
            "station": "NY",
            "NJTOnly": "true",
        }

    def test_unset_optional_fields_not_sent(self):
        request = api.GetStationMsgRequest(token="t")
        assert request.model_dump(by_alias=True, exclude_none=True) == {"token": "t"}


class TestWireModels:
    def test_nulls_become_empty(self):
        stops = api.Stops.model_validate_json(
            '{"TRAIN_ID": null, "LINECODE": null, "STOPS": [], "CAPACITY": []}'
        )
        assert stops.train_id == ""
        assert stops.linecode == ""

    def test_null_lists_become_empty(self):
        info = api.StationInfo.model_validate_json(
            '{"STATION_2CHAR": "NY", "STATIONMSGS": null, "ITEMS": ['
            '{"TRAIN_ID": "3887", "STOPS": null, "CAPACITY": null}]}'
        )
        assert info.stationmsgs == []
        (item,) = info.items
        assert item.stops == []
        assert item.capacity == []

    def test_null_nested_lists_become_empty(self):
        capacity = api.CapacityList.model_validate_json(
            '{"VEHICLE_NO": "1234", "SECTIONS": [{"CARS": null}]}'
        )
        assert capacity.sections[0].cars == []

    def test_missing_keys_default(self):
        info = api.StationInfo.model_validate_json('{"STATION_2CHAR": "NY"}')
        assert info.station_2char == "NY"
        assert info.items == []

    def test_valid_token_response(self):
        response = api.ValidTokenResponse.model_validate_json(
            '{"validToken": false, "userID": null}'
        )
        assert response.valid_token is False
        assert response.user_id == ""


class TestExecute:
    @pytest.mark.asyncio
    async def test_sends_multipart_form(self, fake_raildata):
        fake_raildata.on(
            "getTrainStopList", fake_raildata.json({"TRAIN_ID": "3737", "STOPS": []})
        )
        output = await _execute(
            fake_raildata.base_url,
            api.GET_TRAIN_STOP_LIST,
            api.GetTrainStopListRequest(train="3737", token="the-token"),
        )
        assert output.train_id == "3737"
        assert fake_raildata.calls_to("getTrainStopList") == [
            {"token": "the-token", "train": "3737"}
        ]

    @pytest.mark.asyncio
    async def test_sends_accept_text_plain(self, fake_raildata):
        seen = []
        fake_raildata.on("getVehicleData", fake_raildata.json([]))
        async with httpx.AsyncClient(event_hooks={"request": [_capture(seen)]}) as client:
            executor = api.RequestExecutor(client, base_url=fake_raildata.base_url)
            await executor.execute(api.GET_VEHICLE_DATA, api.TokenRequest(token="t"))
        assert seen[0].headers["accept"] == "text/plain"
        assert seen[0].method == "POST"
        assert seen[0].headers["content-type"].startswith("multipart/form-data")

    @pytest.mark.asyncio
    async def test_empty_success_body_is_missing_credentials(self, fake_raildata):
        fake_raildata.on("isValidToken", fake_raildata.empty())
        with pytest.raises(MissingCredentialsError) as exc_info:
            await _execute(
                fake_raildata.base_url, api.IS_VALID_TOKEN, api.TokenRequest()
            )
        assert exc_info.value.method == "isValidToken"

    @pytest.mark.asyncio
    async def test_invalid_token_message(self, fake_raildata):
        fake_raildata.on("isValidToken", fake_raildata.error("Invalid token."))
        with pytest.raises(InvalidTokenError) as exc_info:
            await _execute(
                fake_raildata.base_url, api.IS_VALID_TOKEN, api.TokenRequest(token="x")
            )
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_other_error_message_verbatim(self, fake_raildata):
        fake_raildata.on("isValidToken", fake_raildata.error("some error message"))
        with pytest.raises(ApiError) as exc_info:
            await _execute(
                fake_raildata.base_url, api.IS_VALID_TOKEN, api.TokenRequest(token="x")
            )
        assert str(exc_info.value) == "some error message"

    @pytest.mark.asyncio
    async def test_unrecognized_error_body(self, fake_raildata):
        fake_raildata.on(
            "isValidToken",
            fake_raildata.json({"errorMessage": "x", "extra": 1}, status=503),
        )
        with pytest.raises(HttpStatusError) as exc_info:
            await _execute(
                fake_raildata.base_url, api.IS_VALID_TOKEN, api.TokenRequest(token="x")
            )
        assert exc_info.value.status_code == 503
        assert str(exc_info.value).startswith(
            "received error status code for isValidToken: 503"
        )

    @pytest.mark.asyncio
    async def test_error_envelope_without_message(self, fake_raildata):
        fake_raildata.on("isValidToken", fake_raildata.json({}, status=500))
        with pytest.raises(ApiError) as exc_info:
            await _execute(
                fake_raildata.base_url, api.IS_VALID_TOKEN, api.TokenRequest(token="x")
            )
        assert str(exc_info.value) == ""
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_null_list_body_is_empty(self, fake_raildata):
        fake_raildata.on("getVehicleData", fake_raildata.json("null"))
        result = await _execute(
            fake_raildata.base_url, api.GET_VEHICLE_DATA, api.TokenRequest(token="x")
        )
        assert result == []

    @pytest.mark.asyncio
    async def test_undecodable_success_body(self, fake_raildata):
        fake_raildata.on("getVehicleData", fake_raildata.json("not json at all"))
        with pytest.raises(DecodeError):
            await _execute(
                fake_raildata.base_url, api.GET_VEHICLE_DATA, api.TokenRequest(token="x")
            )

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            executor = api.RequestExecutor(client, base_url="http://raildata.test")
            with pytest.raises(RequestTimeoutError) as exc_info:
                await executor.execute(api.GET_VEHICLE_DATA, api.TokenRequest(token="x"))
        assert exc_info.value.method == "getVehicleData"

    @pytest.mark.asyncio
    async def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            executor = api.RequestExecutor(client, base_url="http://raildata.test")
            with pytest.raises(TransportError) as exc_info:
                await executor.execute(api.GET_VEHICLE_DATA, api.TokenRequest(token="x"))
        assert not isinstance(exc_info.value, RequestTimeoutError)

    def test_base_url_trailing_slash_removed(self):
        executor = api.RequestExecutor(Mock(), base_url="http://x/api/")
        assert executor.base_url == "http://x/api"


def _capture(seen):
    async def hook(request):
        seen.append(request)

    return hook
