"""Exceptions raised while fetching and decoding xmlstats documents."""


class IngestionError(Exception):
    """Custom exception for ingestion-related errors."""

    pass


class HTTPStatusError(IngestionError):
    """Non-200 response; the message is the response body text."""

    def __init__(self, status_code: int, text: str) -> None:
        super().__init__(text)
        self.status_code = status_code
        self.text = text


class DecompressionError(IngestionError):
    """The response claimed gzip encoding but the body is not a gzip stream."""

    pass


class DecodeError(IngestionError):
    """Raised when a response body is not a valid xmlstats document."""

    pass
