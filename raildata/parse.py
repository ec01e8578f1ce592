"""
Conversion of RailData wire payloads into the typed domain model.

The API sends every value as a string, identifies stations and lines
inconsistently, and uses local New York time without an offset. Station
and line identifiers are resolved against the catalogs; anything
unrecognized becomes a synthesized placeholder.
"""

from __future__ import annotations

import html
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

from raildata import api, reference
from raildata.catalog import LineCatalog, StationCatalog, line_catalog, station_catalog
from raildata.models import (
    Color,
    ColorSet,
    Direction,
    IsValidTokenResponse,
    Line,
    Location,
    MsgType,
    ScheduleEntry,
    SectionPosition,
    Station,
    StationMsg,
    StationPosition,
    StationSchedule,
    StopCode,
    StopLine,
    TrainCapacity,
    TrainCar,
    TrainIdPrefix,
    TrainSchedule,
    TrainScheduleEntry,
    TrainSection,
    TrainStop,
    TrainStopList,
    VehicleData,
)
from raildata.resolution import SearchQuery, resolve_or_synthesize

NJ_TIMEZONE = ZoneInfo("America/New_York")

MSG_DATETIME_FORMAT = "%m/%d/%Y %I:%M:%S %p"
DATETIME_FORMAT = "%d-%b-%Y %I:%M:%S %p"


# ---------------------------------------------------------------------------
# Scalar helpers
# ---------------------------------------------------------------------------


def str_to_optional(s: str) -> Optional[str]:
    """Trimmed string, or None if empty."""
    s = s.strip()
    return s or None


def str_to_bool(s: str) -> bool:
    return s.lower() in ("true", "yes")


def str_to_int(s: str) -> Optional[int]:
    try:
        return int(s)
    except ValueError:
        return None


def str_to_float(s: str) -> Optional[float]:
    try:
        return float(s)
    except ValueError:
        return None


def str_to_local_time(s: str, fmt: str = DATETIME_FORMAT) -> Optional[datetime]:
    try:
        return datetime.strptime(s, fmt).replace(tzinfo=NJ_TIMEZONE)
    except ValueError:
        return None


def str_to_duration_seconds(s: str) -> Optional[timedelta]:
    seconds = str_to_int(s)
    if seconds is None:
        return None
    return timedelta(seconds=seconds)


def str_to_color(s: str) -> Optional[Color]:
    s = s.strip()
    if not s:
        return None
    try:
        return Color.parse_html(s)
    except ValueError:
        return None


def strs_to_color_set(fg: str, bg: str, shadow: str) -> Optional[ColorSet]:
    """Foreground and background are required; shadow defaults to black."""
    foreground = str_to_color(fg)
    background = str_to_color(bg)
    if foreground is None or background is None:
        return None
    return ColorSet(
        foreground=foreground,
        background=background,
        shadow=str_to_color(shadow) or Color(),
    )


def strs_to_location(lon: str, lat: str) -> Optional[Location]:
    longitude = str_to_float(lon)
    latitude = str_to_float(lat)
    if longitude is None or latitude is None:
        return None
    return Location(longitude=longitude, latitude=latitude)


def str_to_msg_type(s: str) -> MsgType:
    return MsgType.fullscreen if s == "fullscreen" else MsgType.banner


def str_to_direction(s: str) -> Direction:
    return Direction.eastbound if s == "Eastbound" else Direction.westbound


def str_to_section_position(s: str) -> SectionPosition:
    if s == "Front":
        return SectionPosition.front
    if s == "Back":
        return SectionPosition.back
    return SectionPosition.middle


def decode_scope(s: str) -> list[str]:
    """Split a scope list like "*Newark Penn Station,*New York Penn Station"."""
    out = []
    for part in s.split(","):
        for piece in part.split("*"):
            piece = piece.strip()
            if piece:
                out.append(piece)
    return out


# ---------------------------------------------------------------------------
# Code tables
# ---------------------------------------------------------------------------


def translate_track_number(track_id: str, station_code: str) -> str:
    """The track name used on site for a track id reported by the API."""
    for track in reference.SPECIAL_TRACKS:
        if track.id == track_id and track.station_code == station_code:
            return track.translation
    return track_id


def get_station_position(code: str) -> StationPosition:
    for position in reference.STATION_POSITIONS:
        if position.code == code:
            return position
    return StationPosition(code=code, description=f'Unknown station position "{code}"')


def get_stop_code(code: str) -> StopCode:
    for stop_code in reference.STOP_CODES:
        if stop_code.code == code:
            return stop_code
    return StopCode(code=code, description=f'Unknown stop code "{code}"')


def get_train_id_prefix(train_id: str) -> Optional[TrainIdPrefix]:
    """The special prefix of a train number (Amtrak, SEPTA, ...), if any."""
    for prefix in reference.TRAIN_ID_PREFIXES:
        if train_id.startswith(prefix.prefix):
            return prefix
    return None


# ---------------------------------------------------------------------------
# Payload parser
# ---------------------------------------------------------------------------


@dataclass
class Parser:
    """Turns wire payloads into domain objects using the given catalogs."""

    stations: StationCatalog = field(default_factory=station_catalog)
    lines: LineCatalog = field(default_factory=line_catalog)

    def station(self, code: str, name: str) -> Station:
        query = SearchQuery(code=str_to_optional(code), name=str_to_optional(name))
        return resolve_or_synthesize(query, self.stations)

    def line(self, code: str, name: str) -> Line:
        query = SearchQuery(code=str_to_optional(code), name=str_to_optional(name))
        return resolve_or_synthesize(query, self.lines)

    def track_name(self, track: str, station: Optional[Station]) -> Optional[str]:
        track_name = str_to_optional(track)
        if track_name is None or station is None:
            return track_name
        return translate_track_number(track_name, station.code)

    def station_scope(self, s: str) -> list[Station]:
        return [
            resolve_or_synthesize(SearchQuery(name=name), self.stations)
            for name in decode_scope(s)
        ]

    def line_scope(self, s: str) -> list[Line]:
        """Only exact names and abbreviations count; unknown lines are dropped."""
        out = []
        for name in decode_scope(s):
            found = self.lines.by_name(name) or self.lines.by_abbreviation(name)
            if found is not None:
                out.append(found)
        return out

    def valid_token(self, wire: api.ValidTokenResponse) -> IsValidTokenResponse:
        return IsValidTokenResponse(
            valid_token=wire.valid_token, user_id=str_to_optional(wire.user_id)
        )

    def station_list(self, wire: list[api.GetStations]) -> list[Station]:
        return [
            Station(
                code=item.station_2char,
                name=item.stationname,
                short_name=item.station_14char,
            )
            for item in wire
        ]

    def station_msg(self, wire: api.StationMsgs) -> StationMsg:
        return StationMsg(
            type=str_to_msg_type(wire.msg_type),
            text=wire.msg_text,
            pub_date=str_to_local_time(wire.msg_pubdate, MSG_DATETIME_FORMAT),
            id=str_to_optional(wire.msg_id),
            agency=str_to_optional(wire.msg_agency),
            source=str_to_optional(wire.msg_source),
            station_scope=self.station_scope(wire.msg_station_scope),
            line_scope=self.line_scope(wire.msg_line_scope),
        )

    def station_msgs(self, wire: list[api.StationMsgs]) -> list[StationMsg]:
        return [self.station_msg(item) for item in wire]

    def station_schedules(self, wire: list[api.DailyStationInfo]) -> list[StationSchedule]:
        return [
            StationSchedule(
                station=self.station(item.station_2char, item.stationname),
                entries=[self.schedule_entry(entry) for entry in item.items],
            )
            for item in wire
        ]

    def schedule_entry(self, wire: api.DailyScheduleInfo) -> ScheduleEntry:
        destination = html.unescape(wire.destination)
        return ScheduleEntry(
            departure_time=str_to_local_time(wire.sched_dep_date),
            destination=destination,
            destination_station=self.station("", destination),
            line=self.line("", wire.line),
            train_id=wire.train_id,
            connecting_train_id=str_to_optional(wire.connecting_train_id),
            station_position=get_station_position(wire.station_position),
            direction=str_to_direction(wire.direction),
            dwell_time=str_to_duration_seconds(wire.dwell_time),
            pickup_only=str_to_bool(wire.perm_pickup),
            dropoff_only=str_to_bool(wire.perm_dropoff),
            stop_code=self.stop_code(wire.stop_code),
        )

    def stop_code(self, s: str) -> Optional[StopCode]:
        code = str_to_optional(s)
        if code is None:
            return None
        return get_stop_code(code)

    def train_schedule(self, wire: api.StationInfo) -> TrainSchedule:
        station = self.station(wire.station_2char, wire.stationname)
        return TrainSchedule(
            station=station,
            messages=self.station_msgs(wire.stationmsgs),
            entries=[self.train_schedule_entry(item, station) for item in wire.items],
        )

    def train_schedule_entry(
        self, wire: api.ScheduleInfo, station: Station
    ) -> TrainScheduleEntry:
        return TrainScheduleEntry(
            departure_time=str_to_local_time(wire.sched_dep_date),
            destination=html.unescape(wire.destination),
            track=self.track_name(wire.track, station),
            line=self.line(wire.linecode, wire.line),
            line_name=wire.line,
            train_id=wire.train_id,
            connecting_train_id=str_to_optional(wire.connecting_train_id),
            status=str_to_optional(wire.status),
            delay=str_to_duration_seconds(wire.sec_late),
            last_updated=str_to_local_time(wire.last_modified),
            color=strs_to_color_set(wire.forecolor, wire.backcolor, wire.shadowcolor),
            gps_location=strs_to_location(wire.gpslongitude, wire.gpslatitude),
            gps_time=str_to_local_time(wire.gpstime),
            station_position=get_station_position(wire.station_position),
            inline_message=str_to_optional(wire.inlinemsg),
            capacity=[self.capacity(item) for item in wire.capacity],
            stops=[self.stop(item) for item in wire.stops],
        )

    def capacity(self, wire: api.CapacityList) -> TrainCapacity:
        return TrainCapacity(
            number=str_to_optional(wire.vehicle_no),
            location=strs_to_location(wire.longitude, wire.latitude),
            created_time=str_to_local_time(wire.created_time),
            type=str_to_optional(wire.vehicle_type),
            capacity_percent=str_to_int(wire.cur_percentage),
            capacity_color=str_to_color(wire.cur_capacity_color),
            passenger_count=str_to_int(wire.cur_passenger_count),
            sections=[self.section(item) for item in wire.sections],
        )

    def section(self, wire: api.SectionList) -> TrainSection:
        return TrainSection(
            position=str_to_section_position(wire.section_position),
            capacity_percent=str_to_int(wire.cur_percentage),
            capacity_color=str_to_color(wire.cur_capacity_color),
            passenger_count=str_to_int(wire.cur_passenger_count),
            cars=[self.car(item) for item in wire.cars],
        )

    def car(self, wire: api.CarList) -> TrainCar:
        return TrainCar(
            train_id=str_to_optional(wire.car_no),
            position=str_to_int(wire.car_position),
            restroom=wire.car_rest,
            capacity_percent=str_to_int(wire.cur_percentage),
            capacity_color=str_to_color(wire.cur_capacity_color),
            passenger_count=str_to_int(wire.cur_passenger_count),
        )

    def stop(self, wire: api.StopList) -> TrainStop:
        return TrainStop(
            station=self.station(wire.station_2char, wire.stationname),
            arrival_time=str_to_local_time(wire.time),
            pickup_only=str_to_bool(wire.pickup),
            dropoff_only=str_to_bool(wire.dropoff),
            departed=str_to_bool(wire.departed),
            stop_status=str_to_optional(wire.stop_status),
            departure_time=str_to_local_time(wire.dep_time),
            stop_lines=[
                StopLine(
                    line=self.line(item.line_code, item.line_name),
                    color=str_to_color(item.line_color),
                )
                for item in wire.stop_lines
            ],
        )

    def train_stop_list(self, wire: api.Stops) -> Optional[TrainStopList]:
        """None when the API did not recognize the train id."""
        train_id = str_to_optional(wire.train_id)
        if train_id is None:
            return None
        destination = html.unescape(wire.destination)
        return TrainStopList(
            train_id=train_id,
            line=self.line(wire.linecode, ""),
            color=strs_to_color_set(wire.forecolor, wire.backcolor, wire.shadowcolor),
            destination=destination,
            destination_station=self.station("", destination),
            transfer_at=str_to_optional(wire.transferat),
            stops=[self.stop(item) for item in wire.stops],
            capacity=[self.capacity(item) for item in wire.capacity],
        )

    def vehicle_data(self, wire: list[api.VehicleDataInfo]) -> list[VehicleData]:
        return [
            VehicleData(
                train_id=item.id,
                line=self.line("", item.train_line),
                direction=str_to_direction(item.direction),
                track_circuit_id=item.ics_track_ckt,
                last_updated=str_to_local_time(item.last_modified),
                departure_time=str_to_local_time(item.sched_dep_time),
                delay=str_to_duration_seconds(item.sec_late),
                next_stop=self.station("", item.next_stop),
                location=strs_to_location(item.longitude, item.latitude),
            )
            for item in wire
        ]
