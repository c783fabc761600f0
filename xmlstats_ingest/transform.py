from __future__ import annotations

from datetime import datetime
from typing import IO, Any, Dict, List, Optional, TypeVar, Union

import logging
import pandas as pd
from pydantic import ValidationError

from xmlstats_ingest.config import EXTRACTION_SOURCE
from xmlstats_ingest.errors import DecodeError
from xmlstats_ingest.schema import EventCollection, Record, Roster, Team

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=Record)

Body = Union[bytes, str, IO[bytes]]

EVENT_COLUMNS = [
	"event_id",
	"event_status",
	"sport",
	"season_type",
	"away_team",
	"home_team",
	"site",
	"away_points_scored",
	"home_points_scored",
	"extracted_at",
	"extraction_source",
]

PLAYER_COLUMNS = [
	"team_id",
	"display_name",
	"position",
	"uniform_number",
	"height_formatted",
	"weight_lb",
	"birthdate",
	"roster_status",
	"extracted_at",
	"extraction_source",
]


def _read(body: Body) -> Union[bytes, str]:
	if isinstance(body, (bytes, str)):
		return body
	return body.read()


def _decode(model: type[RecordT], body: Body) -> RecordT:
	try:
		return model.model_validate_json(_read(body))
	except ValidationError as e:
		raise DecodeError(f"Failed to decode {model.__name__}: {e}") from e


def stamp(record: RecordT, extracted_at: datetime, source: str = EXTRACTION_SOURCE) -> RecordT:
	"""Attach extraction provenance to a top-level record.

	Nested records (teams, sites, players) are not stamped.
	"""
	record.extracted_at = extracted_at
	record.extraction_source = source
	return record


def decode_events(body: Body, extracted_at: datetime, source: str = EXTRACTION_SOURCE) -> EventCollection:
	"""Decode an events.json body and stamp the collection with provenance.

	Raises DecodeError on malformed JSON or when an event lacks `event_id`.
	"""
	events = stamp(_decode(EventCollection, body), extracted_at, source)
	if events.count != len(events.events):
		logger.warning(
			f"Event count mismatch: payload says {events.count}, decoded {len(events.events)}"
		)
	logger.info(f"Decoded {len(events.events)} events")
	return events


def decode_roster(body: Body, extracted_at: datetime, source: str = EXTRACTION_SOURCE) -> Roster:
	"""Decode a roster body and stamp the roster with provenance.

	Raises DecodeError on malformed JSON or when the team lacks `team_id`.
	"""
	roster = stamp(_decode(Roster, body), extracted_at, source)
	logger.info(f"Decoded roster for {roster.team.team_id} with {len(roster.players)} players")
	return roster


def _team_name(team: Optional[Team]) -> Optional[str]:
	if team is None:
		return None
	return team.full_name or team.team_id


def events_frame(collection: EventCollection) -> pd.DataFrame:
	"""Flatten an event collection into one row per event.

	Columns: event_id, event_status, sport, season_type, away_team, home_team,
	site, away_points_scored, home_points_scored, extracted_at, extraction_source.
	Provenance columns come from the collection since events are not stamped.
	"""
	rows: List[Dict[str, Any]] = []
	for ev in collection.events:
		rows.append(
			{
				"event_id": ev.event_id,
				"event_status": ev.event_status,
				"sport": ev.sport,
				"season_type": ev.season_type,
				"away_team": _team_name(ev.away_team),
				"home_team": _team_name(ev.home_team),
				"site": ev.site.name if ev.site else None,
				"away_points_scored": ev.away_points_scored,
				"home_points_scored": ev.home_points_scored,
				"extracted_at": collection.extracted_at,
				"extraction_source": collection.extraction_source,
			}
		)
	df = pd.DataFrame(rows)
	for c in EVENT_COLUMNS:
		if c not in df.columns:
			df[c] = None
	return df[EVENT_COLUMNS]


def roster_frame(roster: Roster) -> pd.DataFrame:
	"""Flatten a roster into one row per player."""
	rows: List[Dict[str, Any]] = []
	for player in roster.players:
		rows.append(
			{
				"team_id": roster.team.team_id,
				"display_name": player.display_name or f"{player.first_name} {player.last_name}".strip(),
				"position": player.position,
				"uniform_number": player.uniform_number,
				"height_formatted": player.height_formatted,
				"weight_lb": player.weight_lb,
				"birthdate": player.birthdate.isoformat() if player.birthdate else None,
				"roster_status": player.roster_status,
				"extracted_at": roster.extracted_at,
				"extraction_source": roster.extraction_source,
			}
		)
	df = pd.DataFrame(rows)
	for c in PLAYER_COLUMNS:
		if c not in df.columns:
			df[c] = None
	return df[PLAYER_COLUMNS]


__all__ = [
	"stamp",
	"decode_events",
	"decode_roster",
	"events_frame",
	"roster_frame",
]
