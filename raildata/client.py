"""
Async RailData client.

Wraps the request executor with token management: every call carries the
current token, and a call rejected with "Invalid token." triggers one token
refresh and exactly one retry. Results are normalized into the domain
model, with stations and lines resolved against the catalogs.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Optional

import httpx

from raildata import api
from raildata.api import MethodDefinition, RequestExecutor, RequestT, ResponseT
from raildata.catalog import LineCatalog, StationCatalog, line_catalog, station_catalog
from raildata.errors import InvalidTokenError
from raildata.models import (
    IsValidTokenResponse,
    Line,
    LineCode,
    Station,
    StationCode,
    StationMsg,
    StationSchedule,
    TrainSchedule,
    TrainStopList,
    VehicleData,
)
from raildata.parse import Parser
from raildata.resolution import SearchQuery, resolve
from raildata.token_store import Credentials, TokenStore, TokenUpdateListener

if TYPE_CHECKING:
    from raildata.config import Config

logger = logging.getLogger(__name__)


class RailDataClient:
    """
    Async client for the NJ Transit RailData API.

    Pass `token` to reuse a previously issued token, and `username` and
    `password` so the client can get a new one when it expires. Only a few
    tokens are issued per day, so save the token from a listener and pass it
    back in next time.

    If `http_client` is given, the caller owns it; otherwise the client
    creates one and closes it in aclose().
    """

    def __init__(
        self,
        http_client: Optional[httpx.AsyncClient] = None,
        *,
        token: str = "",
        username: Optional[str] = None,
        password: Optional[str] = None,
        listeners: Iterable[TokenUpdateListener] = (),
        use_test_endpoint: bool = False,
        base_url: Optional[str] = None,
        timeout: float = 10.0,
    ) -> None:
        if (username is None) != (password is None):
            raise ValueError("username and password must be given together")

        if base_url is None:
            base_url = api.TEST_BASE_URL if use_test_endpoint else api.PRODUCTION_BASE_URL

        self._owns_http = http_client is None
        self._http = http_client if http_client is not None else httpx.AsyncClient()
        self._executor = RequestExecutor(self._http, base_url=base_url, timeout=timeout)

        credentials = None
        if username is not None and password is not None:
            credentials = Credentials(username=username, password=password)
        self._tokens = TokenStore(
            self._executor, token=token, credentials=credentials, listeners=listeners
        )
        self._parser = Parser()
        self.rate_limited = RateLimitedMethods(self)

    @classmethod
    def from_config(
        cls,
        config: "Config",
        http_client: Optional[httpx.AsyncClient] = None,
        listeners: Iterable[TokenUpdateListener] = (),
    ) -> "RailDataClient":
        """
        Build a client from loaded configuration.

        With a token file configured, the initial token is read from it
        (unless RAILDATA_TOKEN is set) and refreshed tokens are written back.
        """
        from raildata.token_file import TokenFileUpdater, read_token_file

        token = config.token or ""
        all_listeners = list(listeners)
        if config.token_file:
            if not token:
                token = read_token_file(config.token_file)
            all_listeners.append(TokenFileUpdater(config.token_file))

        return cls(
            http_client,
            token=token,
            username=config.username,
            password=config.password,
            listeners=all_listeners,
            base_url=config.effective_base_url,
            timeout=config.timeout,
        )

    async def __aenter__(self) -> "RailDataClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Wait for pending token listeners, then close the owned HTTP client."""
        await self._tokens.wait_for_listeners()
        if self._owns_http:
            await self._http.aclose()

    @property
    def base_url(self) -> str:
        return self._executor.base_url

    @property
    def stations(self) -> StationCatalog:
        return self._parser.stations

    @property
    def lines(self) -> LineCatalog:
        return self._parser.lines

    def get_token(self) -> str:
        """The token currently in use (empty if none yet)."""
        return self._tokens.current_token()

    async def wait_for_listeners(self) -> None:
        await self._tokens.wait_for_listeners()

    def find_station(
        self, code: Optional[str] = None, name: Optional[str] = None
    ) -> Optional[Station]:
        return resolve(SearchQuery(code=code, name=name), self.stations)

    def find_line(
        self, code: Optional[str] = None, name: Optional[str] = None
    ) -> Optional[Line]:
        return resolve(SearchQuery(code=code, name=name), self.lines)

    async def call(
        self, method: MethodDefinition[RequestT, ResponseT], request: RequestT
    ) -> ResponseT:
        """
        Run one API method with the current token.

        If the server rejects the token, it is refreshed and the call is
        repeated once; whatever the second attempt produces is final.
        """
        token = self._tokens.current_token()
        try:
            return await self._executor.execute(method, method.with_token(request, token))
        except InvalidTokenError:
            logger.info("RailData rejected the token for %s, refreshing", method.name)

        await self._tokens.refresh(token)

        token = self._tokens.current_token()
        return await self._executor.execute(method, method.with_token(request, token))

    async def get_station_list(self) -> list[Station]:
        """All stations as reported by the API."""
        output = await self.call(api.GET_STATION_LIST, api.TokenRequest())
        return self._parser.station_list(output)

    async def get_station_msg(
        self,
        station_code: Optional[StationCode] = None,
        line_code: Optional[LineCode] = None,
    ) -> list[StationMsg]:
        """Messages for a station or line; all messages if neither is given."""
        request = api.GetStationMsgRequest(station=station_code, line=line_code)
        output = await self.call(api.GET_STATION_MSG, request)
        return self._parser.station_msgs(output)

    async def get_train_schedule(self, station_code: StationCode) -> TrainSchedule:
        """Departures from a station over the next hour, with their stops."""
        request = api.GetTrainScheduleRequest(station=station_code)
        output = await self.call(api.GET_TRAIN_SCHEDULE, request)
        return self._parser.train_schedule(output)

    async def get_train_schedule_19_records(
        self, station_code: StationCode, line_code: Optional[LineCode] = None
    ) -> TrainSchedule:
        """The next 19 departures from a station, optionally for one line."""
        request = api.GetTrainSchedule19RecRequest(station=station_code, line=line_code)
        output = await self.call(api.GET_TRAIN_SCHEDULE_19_REC, request)
        return self._parser.train_schedule(output)

    async def get_train_stop_list(self, train_id: str) -> Optional[TrainStopList]:
        """Stops for a train, or None if the API does not know the train."""
        request = api.GetTrainStopListRequest(train=train_id)
        output = await self.call(api.GET_TRAIN_STOP_LIST, request)
        return self._parser.train_stop_list(output)

    async def get_vehicle_data(self) -> list[VehicleData]:
        """Trains that have reported a position in the last five minutes."""
        output = await self.call(api.GET_VEHICLE_DATA, api.TokenRequest())
        return self._parser.vehicle_data(output)


class RateLimitedMethods:
    """Methods the API allows only a few times per day."""

    def __init__(self, client: RailDataClient) -> None:
        self._client = client

    async def is_valid_token(self) -> IsValidTokenResponse:
        output = await self._client.call(api.IS_VALID_TOKEN, api.TokenRequest())
        return self._client._parser.valid_token(output)

    async def get_station_schedule(
        self, station_code: Optional[StationCode] = None, njt_only: bool = False
    ) -> list[StationSchedule]:
        """
        The 27-hour schedule for a station, or for every station if no
        code is given.
        """
        request = api.GetStationScheduleRequest(
            station=station_code, njt_only="true" if njt_only else "false"
        )
        output = await self._client.call(api.GET_STATION_SCHEDULE, request)
        return self._client._parser.station_schedules(output)
