"""Shared fixtures: a requests.Session that never touches the network."""

from __future__ import annotations

import json
import threading
from typing import List, Optional, Tuple, Union

import pytest
import requests

from grafana_client import GrafanaClient

BASE_URL = "http://grafana.local:3000"


class FakeSession(requests.Session):
    """Records prepared requests and answers them from a queue."""

    def __init__(self) -> None:
        super().__init__()
        self.trust_env = False
        self.sent: List[requests.PreparedRequest] = []
        self.replies: List[Tuple[int, bytes]] = []
        self.default: Tuple[int, bytes] = (200, b"{}")
        self.error: Optional[Exception] = None
        self.gate: Optional[threading.Event] = None
        self.raw = None

    def reply(self, status: int, body: Union[bytes, str, dict, list]) -> None:
        if isinstance(body, (dict, list)):
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.replies.append((status, body))

    @property
    def last(self) -> requests.PreparedRequest:
        return self.sent[-1]

    def send(self, request, **kwargs):
        self.sent.append(request)
        if self.gate is not None:
            self.gate.wait(5)
        if self.error is not None:
            raise self.error
        status, body = self.replies.pop(0) if self.replies else self.default
        response = requests.Response()
        response.status_code = status
        response.request = request
        response.url = request.url
        if self.raw is not None:
            response.raw = self.raw
        else:
            response._content = body
            response._content_consumed = True
        return response


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def client(session: FakeSession) -> GrafanaClient:
    return GrafanaClient(BASE_URL, "secret-token", session=session)


@pytest.fixture
def basic_client(session: FakeSession) -> GrafanaClient:
    return GrafanaClient(BASE_URL, "admin:admin", session=session)
