"""xmlstats API ingestion over plain HTTP.

This module builds authenticated requests against the xmlstats API, sends
them with `requests`, and hands the response body to the decoders in
`transform`. Gzip-encoded responses are decompressed transparently.

Every request is a single blocking GET: no retries, no rate limiting, no
caching. The response is always closed when the caller's `with` block exits,
whichever way it exits.
"""

from __future__ import annotations

from contextlib import ExitStack, contextmanager
from datetime import date, datetime
from typing import IO, Any, Iterator, Optional
from urllib.parse import urlencode, urljoin

import gzip
import io
import logging
import requests
import zlib

from .config import get_base_url, get_bearer_token, get_user_agent
from .errors import DecompressionError, HTTPStatusError, IngestionError
from .schema import EventCollection, Roster
from .transform import decode_events, decode_roster

logger = logging.getLogger(__name__)


class GzipReadCloser(io.RawIOBase):
    """Binary reader that decompresses `raw` and closes `closer` once.

    The gzip header and first block are read on construction, so an invalid
    stream fails here rather than on the first read. Corruption found while
    reading is raised as DecompressionError.

    Args:
        raw: compressed byte stream (e.g. the urllib3 response)
        closer: object whose `close()` releases the network resource
    """

    def __init__(self, raw: IO[bytes], closer: Any) -> None:
        super().__init__()
        self._closer: Any = None
        self._reader = gzip.GzipFile(fileobj=raw, mode="rb")
        self._reader.peek(1)
        self._closer = closer

    def readable(self) -> bool:
        return True

    def readinto(self, buffer: Any) -> int:
        try:
            data = self._reader.read(len(buffer))
        except (OSError, EOFError, zlib.error) as e:
            raise DecompressionError(f"Error in gzip response decoding: {e}") from e
        n = len(data)
        buffer[:n] = data
        return n

    def close(self) -> None:
        if self.closed:
            return
        try:
            self._reader.close()
            if self._closer is not None:
                self._closer.close()
        finally:
            super().close()


def events_url(base_url: str, event_date: date, sport: str) -> str:
    """URL of the events listing for one date and sport."""
    query = urlencode({"date": event_date.strftime("%Y%m%d"), "sport": sport})
    return urljoin(base_url, f"events.json?{query}")


def roster_url(base_url: str, sport: str, team_id: str) -> str:
    """URL of the current roster for a team slug (e.g. 'memphis-grizzlies')."""
    return urljoin(base_url, f"{sport}/roster/{team_id}.json")


def build_request(url: str) -> requests.PreparedRequest:
    """Build an authenticated GET request for an xmlstats URL.

    A missing token or user agent is logged and sent empty; the request is
    still built.

    Raises:
        IngestionError: if the URL is malformed
    """
    headers = {
        "Accept-Encoding": "gzip",
        "Authorization": "Bearer " + get_bearer_token(),
        # xmlstats blocks robots that do not identify themselves
        "User-Agent": get_user_agent(),
    }
    try:
        return requests.Request("GET", url, headers=headers).prepare()
    except requests.exceptions.RequestException as e:
        raise IngestionError(f"Invalid request URL {url!r}: {e}") from e


@contextmanager
def open_body(
    request: requests.PreparedRequest,
    session: Optional[requests.Session] = None,
) -> Iterator[IO[bytes]]:
    """Send `request` and yield the (decompressed) response body.

    Raises:
        requests.RequestException: on transport failure
        HTTPStatusError: on a non-200 status, carrying the body text
        DecompressionError: if a gzip-encoded body is not valid gzip
    """
    with ExitStack() as stack:
        if session is None:
            session = stack.enter_context(requests.Session())
        logger.info(f"doing HTTP GET {request.url}")
        response = session.send(request, stream=True)

        closer: Any = response
        try:
            if response.status_code != 200:
                raise HTTPStatusError(response.status_code, response.text)

            if response.headers.get("Content-Encoding") == "gzip":
                logger.info("parsing HTTP GZIP-response")
                response.headers.pop("Content-Length", None)
                try:
                    body: IO[bytes] = GzipReadCloser(response.raw, response)
                except (OSError, EOFError, zlib.error) as e:
                    raise DecompressionError(f"Error in gzip response decoding: {e}") from e
                closer = body
            else:
                logger.info("parsing HTTP nonGZIP-response")
                body = response.raw

            yield body
        finally:
            closer.close()


def fetch_events(
    event_date: date,
    sport: str,
    *,
    extracted_at: datetime,
    base_url: Optional[str] = None,
    session: Optional[requests.Session] = None,
) -> EventCollection:
    """Fetch and decode the events for one date and sport.

    Args:
        event_date: date of the games
        sport: xmlstats sport code (e.g. 'nba', 'nhl')
        extracted_at: extraction time stamped on the collection
        base_url: API base URL; read from XMLSTATS_URL when omitted
        session: requests session to send with

    Returns:
        Decoded event collection
    """
    url = events_url(base_url or get_base_url(), event_date, sport)
    request = build_request(url)
    with open_body(request, session=session) as body:
        return decode_events(body, extracted_at)


def fetch_roster(
    sport: str,
    team_id: str,
    *,
    extracted_at: datetime,
    base_url: Optional[str] = None,
    session: Optional[requests.Session] = None,
) -> Roster:
    """Fetch and decode the current roster of a team."""
    url = roster_url(base_url or get_base_url(), sport, team_id)
    request = build_request(url)
    with open_body(request, session=session) as body:
        return decode_roster(body, extracted_at)


__all__ = [
    "GzipReadCloser",
    "events_url",
    "roster_url",
    "build_request",
    "open_body",
    "fetch_events",
    "fetch_roster",
]
