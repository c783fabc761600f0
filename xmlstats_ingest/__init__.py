"""xmlstats_ingest package.

Typed event and roster ingestion from the xmlstats API.
"""

from .errors import (
    DecodeError,
    DecompressionError,
    HTTPStatusError,
    IngestionError,
)
from .ingest import (
    build_request,
    fetch_events,
    fetch_roster,
    open_body,
)
from .transform import (
    decode_events,
    decode_roster,
)

__all__ = [
    "build_request",
    "open_body",
    "fetch_events",
    "fetch_roster",
    "decode_events",
    "decode_roster",
    "IngestionError",
    "HTTPStatusError",
    "DecompressionError",
    "DecodeError",
]
