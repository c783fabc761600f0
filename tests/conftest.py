"""Test configuration and fixtures for the xmlstats ingestion client."""

from __future__ import annotations

import gzip
import io
import json
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional
from unittest.mock import Mock

import pytest
import requests


@pytest.fixture
def extracted_at() -> datetime:
    """Fixed extraction time injected into the decoders."""
    return datetime(2013, 2, 1, 12, 30, tzinfo=timezone.utc)


@pytest.fixture
def sample_events() -> dict[str, Any]:
    """Sample xmlstats events.json payload for testing."""
    return {
        "events_date": "2013-01-31T00:00:00-05:00",
        "count": 1,
        "event": [
            {
                "event_id": "20130131-memphis-grizzlies-at-oklahoma-city-thunder",
                "event_status": "completed",
                "sport": "NBA",
                "season_type": "regular",
                "away_team": {
                    "team_id": "memphis-grizzlies",
                    "abbreviation": "MEM",
                    "active": True,
                    "first_name": "Memphis",
                    "last_name": "Grizzlies",
                    "conference": "West",
                    "division": "Southwest",
                    "site_name": "FedExForum",
                    "city": "Memphis",
                    "state": "Tennessee",
                    "full_name": "Memphis Grizzlies",
                },
                "home_team": {
                    "team_id": "oklahoma-city-thunder",
                    "abbreviation": "OKC",
                    "active": True,
                    "first_name": "Oklahoma City",
                    "last_name": "Thunder",
                    "conference": "West",
                    "division": "Northwest",
                    "site_name": "Chesapeake Energy Arena",
                    "city": "Oklahoma City",
                    "state": "Oklahoma",
                    "full_name": "Oklahoma City Thunder",
                },
                "site": {
                    "capacity": 19599,
                    "surface": "Hardwood",
                    "name": "Chesapeake Energy Arena",
                    "city": "Oklahoma City",
                    "state": "Oklahoma",
                },
                "away_period_scores": [21, 22, 20, 26],
                "home_period_scores": [24, 25, 27, 24],
                "away_points_scored": 89,
                "home_points_scored": 100,
            }
        ],
        "last_updated": "2013-02-01T07:12:19-05:00",
    }


@pytest.fixture
def sample_roster() -> dict[str, Any]:
    """Sample xmlstats roster payload for testing."""
    return {
        "team": {
            "team_id": "memphis-grizzlies",
            "abbreviation": "MEM",
            "full_name": "Memphis Grizzlies",
        },
        "players": [
            {
                "last_name": "Gasol",
                "first_name": "Marc",
                "display_name": "Marc Gasol",
                "birthdate": "1985-01-29",
                "age": 28,
                "birthplace": "Barcelona, Spain",
                "height_in": 85,
                "height_cm": 215.9,
                "height_m": 2.16,
                "height_formatted": "7-1",
                "weight_lb": 265,
                "weight_kg": 120.2,
                "position": "C",
                "uniform_number": "33",
                "roster_status": "A",
            },
            {
                "last_name": "Conley",
                "first_name": "Mike",
                "position": "PG",
            },
        ],
    }


def gzip_bytes(data: bytes) -> bytes:
    buf = io.BytesIO()
    with gzip.GzipFile(fileobj=buf, mode="wb") as gz:
        gz.write(data)
    return buf.getvalue()


@pytest.fixture
def make_response() -> Callable[..., requests.Response]:
    """Build a `requests.Response` served from memory.

    `close` is wrapped in a Mock so tests can count calls.
    """

    def _make(
        status_code: int = 200,
        body: Any = b"",
        headers: Optional[Dict[str, str]] = None,
        gzipped: bool = False,
    ) -> requests.Response:
        if isinstance(body, (dict, list)):
            body = json.dumps(body).encode("utf-8")
        elif isinstance(body, str):
            body = body.encode("utf-8")
        if gzipped:
            body = gzip_bytes(body)

        resp = requests.Response()
        resp.status_code = status_code
        resp.encoding = "utf-8"
        resp.raw = io.BytesIO(body)
        resp.headers["Content-Length"] = str(len(body))
        if gzipped:
            resp.headers["Content-Encoding"] = "gzip"
        resp.headers.update(headers or {})
        resp.close = Mock(wraps=resp.close)  # type: ignore[method-assign]
        return resp

    return _make


@pytest.fixture
def session_for() -> Callable[[requests.Response], Mock]:
    """Mock session whose `send` returns the given response."""

    def _session(response: requests.Response) -> Mock:
        session = Mock(spec=requests.Session)
        session.send.return_value = response
        return session

    return _session
