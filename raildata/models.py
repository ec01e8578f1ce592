"""
Typed domain model for RailData results.

Stations and lines are canonical entities resolved through a catalog; the
rest are the normalized forms of the API's schedule, message, stop and
vehicle payloads.
"""

from __future__ import annotations

import string
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

StationCode = str
LineCode = str


class Color(BaseModel):
    """An RGB color, as used by the API to render line names."""

    model_config = ConfigDict(frozen=True)

    r: int = Field(default=0, ge=0, le=255)
    g: int = Field(default=0, ge=0, le=255)
    b: int = Field(default=0, ge=0, le=255)

    @classmethod
    def parse_html(cls, spec: str) -> "Color":
        """Parse "#RGB" or "#RRGGBB". Raises ValueError on anything else."""
        if not spec.startswith("#"):
            raise ValueError("color specification does not start with #")
        digits = spec[1:]
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        elif len(digits) != 6:
            raise ValueError("color specification does not have the correct length")
        if not all(c in string.hexdigits for c in digits):
            raise ValueError("color specification is not hexadecimal")
        raw = bytes.fromhex(digits)
        return cls(r=raw[0], g=raw[1], b=raw[2])

    @property
    def html(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"


class ColorSet(BaseModel):
    """Colors used to render a line name."""

    foreground: Color
    background: Color
    shadow: Color = Field(default_factory=Color)


class Station(BaseModel):
    """A station, identified by its 2-character code."""

    model_config = ConfigDict(frozen=True)

    code: StationCode
    name: str
    short_name: str
    # True for placeholders built from unrecognized API data
    synthesized: bool = Field(default=False, exclude=True, repr=False)


class Line(BaseModel):
    """A rail line, identified by its 2-character code."""

    model_config = ConfigDict(frozen=True)

    code: LineCode
    name: str
    abbreviation: str
    color: Color = Field(default_factory=Color)
    other_abbrs: tuple[str, ...] = ()
    synthesized: bool = Field(default=False, exclude=True, repr=False)


class TrainIdPrefix(BaseModel):
    model_config = ConfigDict(frozen=True)

    prefix: str
    description: str


class SpecialTrack(BaseModel):
    """A track id reported by the API that is signed differently on site."""

    model_config = ConfigDict(frozen=True)

    id: str
    station_code: StationCode
    translation: str


class StationPosition(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    description: str


class StopCode(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: str
    description: str


class MsgType(str, Enum):
    banner = "banner"
    fullscreen = "fullscreen"


class Direction(str, Enum):
    eastbound = "eastbound"
    westbound = "westbound"


class SectionPosition(str, Enum):
    front = "front"
    middle = "middle"
    back = "back"


class Location(BaseModel):
    """GPS position in degrees."""

    longitude: float
    latitude: float


class IsValidTokenResponse(BaseModel):
    valid_token: bool
    user_id: Optional[str] = None


class StationMsg(BaseModel):
    """A message or alert, optionally scoped to stations and lines."""

    type: MsgType
    text: str = Field(description="May contain HTML markup and escapes")
    pub_date: Optional[datetime] = None
    id: Optional[str] = None
    agency: Optional[str] = None
    source: Optional[str] = None
    station_scope: list[Station] = Field(default_factory=list)
    line_scope: list[Line] = Field(default_factory=list)


class ScheduleEntry(BaseModel):
    """An entry in a station's 27-hour schedule."""

    departure_time: Optional[datetime] = None
    destination: str
    destination_station: Optional[Station] = None
    line: Line
    train_id: str
    connecting_train_id: Optional[str] = None
    station_position: StationPosition
    direction: Direction
    dwell_time: Optional[timedelta] = None
    pickup_only: bool = False
    dropoff_only: bool = False
    stop_code: Optional[StopCode] = None


class StationSchedule(BaseModel):
    station: Optional[Station] = None
    entries: list[ScheduleEntry] = Field(default_factory=list)


class TrainCar(BaseModel):
    train_id: Optional[str] = None
    position: Optional[int] = None
    restroom: bool = False
    capacity_percent: Optional[int] = None
    capacity_color: Optional[Color] = None
    passenger_count: Optional[int] = None


class TrainSection(BaseModel):
    position: SectionPosition
    capacity_percent: Optional[int] = None
    capacity_color: Optional[Color] = None
    passenger_count: Optional[int] = None
    cars: list[TrainCar] = Field(default_factory=list)


class TrainCapacity(BaseModel):
    """How full a train is, overall and per section."""

    number: Optional[str] = None
    location: Optional[Location] = None
    created_time: Optional[datetime] = None
    type: Optional[str] = None
    capacity_percent: Optional[int] = None
    capacity_color: Optional[Color] = None
    passenger_count: Optional[int] = None
    sections: list[TrainSection] = Field(default_factory=list)


class StopLine(BaseModel):
    """A line connecting at a stop."""

    line: Line
    color: Optional[Color] = None


class TrainStop(BaseModel):
    station: Station
    arrival_time: Optional[datetime] = None
    pickup_only: bool = False
    dropoff_only: bool = False
    departed: bool = False
    stop_status: Optional[str] = None
    departure_time: Optional[datetime] = None
    stop_lines: list[StopLine] = Field(default_factory=list)


class TrainScheduleEntry(BaseModel):
    """A train departing from a station."""

    departure_time: Optional[datetime] = None
    destination: str
    track: Optional[str] = None
    line: Line
    line_name: str = Field(description="Display name, e.g. 'Acela Express' on the Amtrak line")
    train_id: str
    connecting_train_id: Optional[str] = None
    status: Optional[str] = None
    delay: Optional[timedelta] = None
    last_updated: Optional[datetime] = None
    color: Optional[ColorSet] = None
    gps_location: Optional[Location] = None
    gps_time: Optional[datetime] = None
    station_position: StationPosition
    inline_message: Optional[str] = None
    capacity: list[TrainCapacity] = Field(default_factory=list)
    stops: list[TrainStop] = Field(default_factory=list)


class TrainSchedule(BaseModel):
    """Result of getTrainSchedule and getTrainSchedule19Rec."""

    station: Station
    messages: list[StationMsg] = Field(default_factory=list)
    entries: list[TrainScheduleEntry] = Field(default_factory=list)


class TrainStopList(BaseModel):
    """Result of getTrainStopList."""

    train_id: str
    line: Line
    color: Optional[ColorSet] = None
    destination: str
    destination_station: Optional[Station] = None
    transfer_at: Optional[str] = None
    stops: list[TrainStop] = Field(default_factory=list)
    capacity: list[TrainCapacity] = Field(default_factory=list)


class VehicleData(BaseModel):
    """An active train; listed if it moved in the last 5 minutes."""

    train_id: str
    line: Line
    direction: Direction
    track_circuit_id: str
    last_updated: Optional[datetime] = None
    departure_time: Optional[datetime] = None
    delay: Optional[timedelta] = None
    next_stop: Optional[Station] = None
    location: Optional[Location] = None
