"""Client library for the Grafana REST API."""

from .api_client import GrafanaClient
from .context import Context
from .exceptions import (
    DecodeError,
    GrafanaError,
    HTTPStatusError,
    ParseError,
    RequestBuildError,
    ResponseReadError,
    TransportError,
)
from .models import (
    BoardProperties,
    DashboardWithMeta,
    Datasource,
    Folder,
    FoundBoard,
    Health,
    Org,
    StatusMessage,
)
from .rest_request import ORG_ID_HEADER, USER_AGENT, Client, HeaderStrategy

__version__ = "0.1.0"

__all__ = [
    "BoardProperties",
    "Client",
    "Context",
    "DashboardWithMeta",
    "Datasource",
    "DecodeError",
    "Folder",
    "FoundBoard",
    "GrafanaClient",
    "GrafanaError",
    "HTTPStatusError",
    "HeaderStrategy",
    "Health",
    "ORG_ID_HEADER",
    "Org",
    "ParseError",
    "RequestBuildError",
    "ResponseReadError",
    "StatusMessage",
    "TransportError",
    "USER_AGENT",
]
