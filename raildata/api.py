"""
Low-level RailData API access: wire models, method descriptors and the
request executor.

Every method is a POST of a multipart form to {base_url}/{method name},
answered with JSON. Callers should use RailDataClient rather than this module.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cached_property
from typing import Annotated, Any, Generic, Optional, TypeVar

import httpx
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, TypeAdapter, ValidationError

from raildata.errors import (
    ApiError,
    DecodeError,
    HttpStatusError,
    InvalidTokenError,
    MissingCredentialsError,
    RailDataError,
    RequestTimeoutError,
    TransportError,
)

logger = logging.getLogger(__name__)

PRODUCTION_BASE_URL = "https://raildata.njtransit.com/api/TrainData"
TEST_BASE_URL = "https://testraildata.njtransit.com/api/TrainData"

INVALID_TOKEN_MESSAGE = "Invalid token."

T = TypeVar("T")

# The API sends null where it means an empty value
WireStr = Annotated[str, BeforeValidator(lambda v: "" if v is None else v)]
WireBool = Annotated[bool, BeforeValidator(lambda v: False if v is None else v)]
WireList = Annotated[list[T], BeforeValidator(lambda v: [] if v is None else v)]


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class RequestModel(BaseModel):
    """Form fields of a request. Fields left as None are not sent."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class GetTokenRequest(RequestModel):
    username: str
    password: str


class TokenRequest(RequestModel):
    """Base for every request that must carry the user token."""

    token: str = ""


class GetStationMsgRequest(TokenRequest):
    station: Optional[str] = None
    line: Optional[str] = None


class GetStationScheduleRequest(TokenRequest):
    station: Optional[str] = None
    njt_only: Optional[str] = Field(default=None, alias="NJTOnly")


class GetTrainScheduleRequest(TokenRequest):
    station: str


class GetTrainSchedule19RecRequest(TokenRequest):
    station: str
    line: Optional[str] = None


class GetTrainStopListRequest(TokenRequest):
    train: str


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class WireModel(BaseModel):
    """A JSON object as sent by the API; keys are the upper-cased field names."""

    model_config = ConfigDict(alias_generator=str.upper, populate_by_name=True)


class GetTokenResponse(BaseModel):
    authenticated: WireStr = Field(default="", alias="Authenticated")
    user_token: WireStr = Field(default="", alias="UserToken")


class ValidTokenResponse(BaseModel):
    valid_token: WireBool = Field(default=False, alias="validToken")
    user_id: WireStr = Field(default="", alias="userID")


class GetStations(WireModel):
    station_2char: WireStr = ""
    stationname: WireStr = ""
    station_14char: WireStr = ""


class StationMsgs(WireModel):
    msg_type: WireStr = ""
    msg_text: WireStr = ""
    msg_pubdate: WireStr = ""
    msg_id: WireStr = ""
    msg_agency: WireStr = ""
    msg_source: WireStr = ""
    msg_station_scope: WireStr = ""
    msg_line_scope: WireStr = ""
    msg_pubdate_utc: WireStr = ""


class DailyScheduleInfo(WireModel):
    sched_dep_date: WireStr = ""
    destination: WireStr = ""
    track: WireStr = ""
    line: WireStr = ""
    train_id: WireStr = ""
    connecting_train_id: WireStr = ""
    station_position: WireStr = ""
    direction: WireStr = ""
    dwell_time: WireStr = ""
    perm_pickup: WireStr = ""
    perm_dropoff: WireStr = ""
    stop_code: WireStr = ""


class DailyStationInfo(WireModel):
    station_2char: WireStr = ""
    stationname: WireStr = ""
    items: WireList[DailyScheduleInfo] = Field(default_factory=list)


class CarList(WireModel):
    car_no: WireStr = ""
    car_position: WireStr = ""
    car_rest: WireBool = False
    cur_percentage: WireStr = ""
    cur_capacity_color: WireStr = ""
    cur_passenger_count: WireStr = ""


class SectionList(WireModel):
    section_position: WireStr = ""
    cur_percentage: WireStr = ""
    cur_capacity_color: WireStr = ""
    cur_passenger_count: WireStr = ""
    cars: WireList[CarList] = Field(default_factory=list)


class CapacityList(WireModel):
    vehicle_no: WireStr = ""
    latitude: WireStr = ""
    longitude: WireStr = ""
    created_time: WireStr = ""
    vehicle_type: WireStr = ""
    cur_percentage: WireStr = ""
    cur_capacity_color: WireStr = ""
    cur_passenger_count: WireStr = ""
    prev_percentage: WireStr = ""
    prev_capacity_color: WireStr = ""
    prev_passenger_count: WireStr = ""
    sections: WireList[SectionList] = Field(default_factory=list)


class StopLines(WireModel):
    line_code: WireStr = ""
    line_name: WireStr = ""
    line_color: WireStr = ""


class StopList(WireModel):
    station_2char: WireStr = ""
    stationname: WireStr = ""
    time: WireStr = ""
    pickup: WireStr = ""
    dropoff: WireStr = ""
    departed: WireStr = ""
    stop_status: WireStr = ""
    dep_time: WireStr = ""
    time_utc_format: WireStr = ""
    stop_lines: WireList[StopLines] = Field(default_factory=list)


class ScheduleInfo(WireModel):
    sched_dep_date: WireStr = ""
    destination: WireStr = ""
    track: WireStr = ""
    line: WireStr = ""
    train_id: WireStr = ""
    connecting_train_id: WireStr = ""
    status: WireStr = ""
    sec_late: WireStr = ""
    last_modified: WireStr = ""
    backcolor: WireStr = ""
    forecolor: WireStr = ""
    shadowcolor: WireStr = ""
    gpslatitude: WireStr = ""
    gpslongitude: WireStr = ""
    gpstime: WireStr = ""
    station_position: WireStr = ""
    linecode: WireStr = ""
    lineabbreviation: WireStr = ""
    inlinemsg: WireStr = ""
    capacity: WireList[CapacityList] = Field(default_factory=list)
    stops: WireList[StopList] = Field(default_factory=list)


class StationInfo(WireModel):
    station_2char: WireStr = ""
    stationname: WireStr = ""
    stationmsgs: WireList[StationMsgs] = Field(default_factory=list)
    items: WireList[ScheduleInfo] = Field(default_factory=list)


class Stops(WireModel):
    train_id: WireStr = ""
    linecode: WireStr = ""
    backcolor: WireStr = ""
    forecolor: WireStr = ""
    shadowcolor: WireStr = ""
    destination: WireStr = ""
    transferat: WireStr = ""
    stops: WireList[StopList] = Field(default_factory=list)
    capacity: WireList[CapacityList] = Field(default_factory=list)


class VehicleDataInfo(WireModel):
    id: WireStr = ""
    train_line: WireStr = ""
    direction: WireStr = ""
    ics_track_ckt: WireStr = ""
    last_modified: WireStr = ""
    sched_dep_time: WireStr = ""
    sec_late: WireStr = ""
    next_stop: WireStr = ""
    longitude: WireStr = ""
    latitude: WireStr = ""


class ErrorEnvelope(BaseModel):
    model_config = ConfigDict(extra="forbid")

    error_message: str = Field(default="", alias="errorMessage")


# ---------------------------------------------------------------------------
# Methods
# ---------------------------------------------------------------------------

RequestT = TypeVar("RequestT", bound=RequestModel)
ResponseT = TypeVar("ResponseT")


@dataclass(frozen=True)
class MethodDefinition(Generic[RequestT, ResponseT]):
    """An API method: endpoint name, request model and response shape."""

    name: str
    request_type: type[RequestT]
    response_type: Any

    @property
    def wants_token(self) -> bool:
        return issubclass(self.request_type, TokenRequest)

    def with_token(self, request: RequestT, token: str) -> RequestT:
        """Return the request with its token set, if this method carries one."""
        if not self.wants_token:
            return request
        return request.model_copy(update={"token": token})

    @cached_property
    def _adapter(self) -> TypeAdapter:
        return TypeAdapter(self.response_type)

    def parse_response(self, response: httpx.Response) -> ResponseT:
        if not response.is_success:
            raise self._parse_error_response(response)

        body = response.content
        if not body:
            raise MissingCredentialsError(self.name)

        try:
            return self._adapter.validate_json(body)
        except ValidationError as exc:
            raise DecodeError(
                f"could not decode response for {self.name}: {exc}", method=self.name
            ) from exc

    def _parse_error_response(self, response: httpx.Response) -> RailDataError:
        status_line = f"{response.status_code} {response.reason_phrase}".strip()
        try:
            envelope = ErrorEnvelope.model_validate_json(response.content)
        except ValidationError:
            return HttpStatusError(
                f"received error status code for {self.name}: {status_line}",
                method=self.name,
                status_code=response.status_code,
            )
        if envelope.error_message == INVALID_TOKEN_MESSAGE:
            return InvalidTokenError(self.name, status_code=response.status_code)
        return ApiError(
            envelope.error_message, method=self.name, status_code=response.status_code
        )


GET_TOKEN = MethodDefinition("getToken", GetTokenRequest, GetTokenResponse)
IS_VALID_TOKEN = MethodDefinition("isValidToken", TokenRequest, ValidTokenResponse)
GET_STATION_LIST = MethodDefinition("getStationList", TokenRequest, WireList[GetStations])
GET_STATION_MSG = MethodDefinition(
    "getStationMSG", GetStationMsgRequest, WireList[StationMsgs]
)
GET_STATION_SCHEDULE = MethodDefinition(
    "getStationSchedule", GetStationScheduleRequest, WireList[DailyStationInfo]
)
GET_TRAIN_SCHEDULE = MethodDefinition("getTrainSchedule", GetTrainScheduleRequest, StationInfo)
GET_TRAIN_SCHEDULE_19_REC = MethodDefinition(
    "getTrainSchedule19Rec", GetTrainSchedule19RecRequest, StationInfo
)
GET_TRAIN_STOP_LIST = MethodDefinition("getTrainStopList", GetTrainStopListRequest, Stops)
GET_VEHICLE_DATA = MethodDefinition(
    "getVehicleData", TokenRequest, WireList[VehicleDataInfo]
)


# ---------------------------------------------------------------------------
# Executor
# ---------------------------------------------------------------------------


class RequestExecutor:
    """Performs exactly one HTTP exchange per call. Never retries."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str = PRODUCTION_BASE_URL,
        timeout: float = 10.0,
    ) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        return self._base_url

    async def execute(
        self, method: MethodDefinition[RequestT, ResponseT], request: RequestT
    ) -> ResponseT:
        """
        Send the request and decode the response.

        Raises InvalidTokenError when the server rejects the token, and the
        other RailDataError subclasses for every other failure.
        """
        url = f"{self._base_url}/{method.name}"
        fields = request.model_dump(by_alias=True, exclude_none=True)
        # (None, value) parts make httpx send plain form fields as multipart
        parts = {name: (None, str(value).encode("utf-8")) for name, value in fields.items()}

        logger.debug("RailData request: POST %s", url)
        try:
            response = await self._http.post(
                url,
                files=parts,
                headers={"Accept": "text/plain"},
                timeout=self._timeout,
            )
        except httpx.TimeoutException as exc:
            logger.error("RailData request timed out: POST %s -> %s", url, exc)
            raise RequestTimeoutError(
                f"request for method '{method.name}' timed out: {exc}", method=method.name
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("RailData request failed: POST %s -> %s", url, exc)
            raise TransportError(
                f"error issuing request for method '{method.name}': {exc}",
                method=method.name,
            ) from exc

        return method.parse_response(response)
