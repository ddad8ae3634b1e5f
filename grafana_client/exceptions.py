from __future__ import annotations

from typing import Optional


class GrafanaError(Exception):
    """Base class for every error raised by grafana_client."""


class ParseError(GrafanaError):
    """The server base URL could not be parsed."""

    def __init__(self, message: str, url: str):
        super().__init__(message)
        self.message = message
        self.url = url


class RequestBuildError(GrafanaError):
    """The HTTP request could not be prepared (bad characters, bad header...)."""


class TransportError(GrafanaError):
    """The request never produced a response.

    Covers DNS, connection and TLS failures as well as a cancelled context
    or an expired deadline.
    """


class ResponseReadError(GrafanaError):
    """The response arrived but its body could not be read completely."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class HTTPStatusError(GrafanaError):
    def __init__(self, status_code: int, body: bytes, message: Optional[str] = None):
        text = message or body[:200].decode("utf-8", errors="replace")
        super().__init__(f"HTTP error code={status_code} message={text}")
        self.status_code = status_code
        self.body = body
        self.message = message


class DecodeError(GrafanaError):
    """The response body does not match the expected JSON shape."""

    def __init__(self, message: str, body: bytes):
        super().__init__(message)
        self.message = message
        self.body = body
