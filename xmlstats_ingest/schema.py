"""Typed domain model for xmlstats event and roster payloads.

Models mirror the JSON documents returned by the xmlstats API:
- events.json returns an EventCollection (a dated batch of Event records)
- <sport>/roster/<team>.json returns a Roster (a Team plus its Player records)

Every record carries provenance fields (`extracted_at`, `extraction_source`).
Only the top-level record is stamped after decoding; nested records keep
the defaults.

Timestamps on the event collection arrive as RFC3339 strings and go through
`XmlstatsTime`. Other date fields use pydantic's standard decoders.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, PlainSerializer


_RFC3339_RE = re.compile(
    r"^(?P<datetime>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<offset>[Zz]|[+-]\d{2}:\d{2})$"
)


def parse_rfc3339(value: Any) -> datetime:
    """Parse a JSON string strictly as an RFC3339 timestamp.

    Raises:
        ValueError: if the value is not a string or not RFC3339
    """
    if not isinstance(value, str):
        raise ValueError(f"expected an RFC3339 string, got {type(value).__name__}")
    match = _RFC3339_RE.match(value)
    if match is None:
        raise ValueError(f"'{value}' is not an RFC3339 timestamp")

    text = match.group("datetime")
    fraction = match.group("fraction")
    if fraction:
        # datetime resolution is microseconds
        text += "." + fraction[:6].ljust(6, "0")
    offset = match.group("offset")
    text += "+00:00" if offset in ("Z", "z") else offset
    return datetime.fromisoformat(text)


def format_rfc3339(value: datetime) -> str:
    return value.isoformat()


XmlstatsTime = Annotated[
    datetime,
    BeforeValidator(parse_rfc3339),
    PlainSerializer(format_rfc3339, return_type=str),
]


class Record(BaseModel):
    """Base for all xmlstats records: provenance fields and shared config."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    extracted_at: Optional[datetime] = None
    extraction_source: str = ""


class Team(Record):
    """A team as embedded in events and rosters."""

    # "team_id":"memphis-grizzlies","abbreviation":"MEM","active":true,"first_name":"Memphis",
    # "last_name":"Grizzlies","conference":"West","division":"Southwest","site_name":"FedExForum",
    # "city":"Memphis","state":"Tennessee","full_name":"Memphis Grizzlies"
    team_id: str
    abbreviation: str = ""
    active: bool = False
    first_name: str = ""
    last_name: str = ""
    conference: str = ""
    division: str = ""
    site_name: str = ""
    city: str = ""
    state: str = ""
    full_name: str = ""


class Site(Record):
    """Venue where a game was played."""

    site_id: str = ""
    capacity: int = 0
    surface: str = ""
    name: str = ""
    city: str = ""
    state: str = ""


class Event(Record):
    """A single game on the xmlstats schedule."""

    event_id: str
    event_status: str = ""
    sport: str = ""
    season_type: str = ""
    away_team: Optional[Team] = None
    home_team: Optional[Team] = None
    site: Optional[Site] = None
    away_period_scores: Optional[List[int]] = None
    home_period_scores: Optional[List[int]] = None
    away_points_scored: int = 0
    home_points_scored: int = 0


class EventCollection(Record):
    """Events for one date, as returned by events.json."""

    events_date: Optional[XmlstatsTime] = None
    count: int = 0
    events: List[Event] = Field(default_factory=list, alias="event")
    last_updated: Optional[XmlstatsTime] = None


class Player(Record):
    """A player on a team roster."""

    # Universal player identifier; not assigned by the API
    upid: str = ""
    last_name: str = ""
    first_name: str = ""
    display_name: str = ""
    birthdate: Optional[date] = None
    age: int = 0
    birthplace: str = ""
    height_in: int = 0
    height_cm: float = 0.0
    height_m: float = 0.0
    height_formatted: str = ""
    weight_lb: int = 0
    weight_kg: float = 0.0
    position: str = ""
    uniform_number: str = ""
    roster_status: str = ""


class Roster(Record):
    """Current players of a team, as returned by <sport>/roster/<team>.json."""

    team: Team
    players: List[Player] = Field(default_factory=list)


__all__ = [
    "XmlstatsTime",
    "parse_rfc3339",
    "format_rfc3339",
    "Record",
    "Team",
    "Site",
    "Event",
    "EventCollection",
    "Player",
    "Roster",
]
