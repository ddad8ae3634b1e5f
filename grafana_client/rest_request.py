"""
HTTP plumbing shared by every Grafana API call.

``Client`` knows the server base URL, how to authenticate and which extra
headers to send. Typed operations (dashboards, data sources, ...) live in
mixins that call the ``_get``/``_post``/... helpers defined here and decode
the result with ``_decode``.
"""

from __future__ import annotations

import copy
import enum
import functools
import json
import logging
import threading
from concurrent.futures import Future
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import quote, unquote, urlencode, urlsplit, urlunsplit

import requests
from pydantic import TypeAdapter, ValidationError
from requests.auth import AuthBase, HTTPBasicAuth
from requests.structures import CaseInsensitiveDict

from .context import DEADLINE_EXCEEDED, Context
from .exceptions import (
    DecodeError,
    HTTPStatusError,
    ParseError,
    RequestBuildError,
    ResponseReadError,
    TransportError,
)

logger = logging.getLogger(__name__)

USER_AGENT = "autograf"
ORG_ID_HEADER = "X-Grafana-Org-Id"

# characters left as-is when escaping a URL path
_PATH_SAFE = "/:@!$&'()*+,;=~"

QueryParams = Union[Mapping[str, Union[str, int, Sequence[Union[str, int]]]], None]


class HeaderStrategy(enum.Enum):
    """How ``with_org_id_header`` treats the custom headers of the source client."""

    REPLACE = "replace"  # derived client only carries the org-ID header
    MERGE = "merge"  # derived client keeps the other custom headers too


def join_path(*elems: str) -> str:
    """Join path segments and clean the result.

    Duplicate slashes collapse, ``.`` segments vanish and ``..`` removes the
    previous segment. A leading slash on the first non-empty element is kept,
    trailing slashes are dropped. Joining only empty strings gives "".
    """
    joined = "/".join(e for e in elems if e)
    if not joined:
        return ""
    rooted = joined.startswith("/")
    parts = []
    for seg in joined.split("/"):
        if seg in ("", "."):
            continue
        if seg == "..":
            if parts and parts[-1] != "..":
                parts.pop()
            elif not rooted:
                parts.append("..")
            continue
        parts.append(seg)
    cleaned = "/".join(parts)
    if rooted:
        return "/" + cleaned
    return cleaned or "."


def encode_params(params: QueryParams) -> str:
    """Form-encode query parameters sorted by key; sequence values repeat the key."""
    if not params:
        return ""
    pairs = []
    for key in sorted(params):
        value = params[key]
        if isinstance(value, (list, tuple)):
            pairs.extend((key, str(v)) for v in value)
        else:
            pairs.append((key, str(value)))
    return urlencode(pairs)


@functools.lru_cache(maxsize=None)
def _adapter(shape: Any) -> TypeAdapter:
    return TypeAdapter(shape)


class _BearerAuth(AuthBase):
    """Bearer token auth. An Authorization custom header takes precedence."""

    def __init__(self, value: str):
        self.value = value

    def __call__(self, r: requests.PreparedRequest) -> requests.PreparedRequest:
        r.headers.setdefault("Authorization", self.value)
        return r


class _BasicAuth(HTTPBasicAuth):
    """Basic auth from the URL userinfo. An Authorization custom header takes precedence."""

    def __call__(self, r: requests.PreparedRequest) -> requests.PreparedRequest:
        if "Authorization" in r.headers:
            return r
        return super().__call__(r)


def _server_message(data: bytes) -> Optional[str]:
    try:
        payload = json.loads(data)
    except ValueError:
        return None
    if isinstance(payload, dict) and isinstance(payload.get("message"), str):
        return payload["message"]
    return None


class Client:
    """Grafana REST API client.

    Args:
        api_url: Base URL of the Grafana server, e.g. ``http://grafana:3000``
            or ``https://example.com/grafana`` when served under a sub path.
        api_key_or_basic_auth: Either ``user:password`` (HTTP basic auth,
            split on the first colon) or an API key / service account token
            sent as a Bearer token.
        session: Transport used to send requests. Defaults to a new
            ``requests.Session`` owned (and closed) by this client. Pass your
            own to control TLS, proxies, adapters or connection pooling.
        header_strategy: Default strategy used by ``with_org_id_header``.
    """

    def __init__(
        self,
        api_url: str,
        api_key_or_basic_auth: str,
        session: Optional[requests.Session] = None,
        header_strategy: HeaderStrategy = HeaderStrategy.REPLACE,
    ):
        try:
            parts = urlsplit(api_url)
            parts.port  # raises ValueError on an invalid port
        except ValueError as exc:
            raise ParseError(f"invalid server URL {api_url!r}: {exc}", api_url) from exc
        if not parts.scheme or not parts.hostname:
            raise ParseError(f"invalid server URL {api_url!r}: scheme and host are required", api_url)

        self.basic_auth = ":" in api_key_or_basic_auth
        self.key = ""
        netloc = parts.netloc.rpartition("@")[2]
        if self.basic_auth:
            user, _, password = api_key_or_basic_auth.partition(":")
            netloc = f"{quote(user, safe='')}:{quote(password, safe='')}@{netloc}"
            self._auth: AuthBase = _BasicAuth(user, password)
        else:
            self.key = f"Bearer {api_key_or_basic_auth}"
            self._auth = _BearerAuth(self.key)

        self._scheme = parts.scheme
        self._netloc = netloc
        self._base_path = unquote(parts.path)
        self._base_query = parts.query
        self.base_url = urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))

        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()
        self.header_strategy = header_strategy
        self.custom_headers: Optional[Dict[str, str]] = None

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_session:
            self.session.close()

    def __repr__(self) -> str:
        mode = "basic" if self.basic_auth else "token"
        return f"<{type(self).__name__} {self._scheme}://{self._netloc.rpartition('@')[2]}{self._base_path} auth={mode}>"

    # headers

    def set_custom_headers(self, headers: Optional[Mapping[str, str]]) -> None:
        """Replace every additional header sent with each request."""
        self.custom_headers = dict(headers) if headers is not None else None

    def set_custom_header(self, key: str, value: str) -> None:
        """Add or overwrite one additional header sent with each request."""
        if self.custom_headers is None:
            self.custom_headers = {}
        self.custom_headers[key] = value

    def set_org_id_header(self, org_id: int) -> None:
        """Scope every following request to organization ``org_id``."""
        if org_id < 0:
            raise ValueError(f"organization id must not be negative, got {org_id}")
        self.set_custom_header(ORG_ID_HEADER, str(int(org_id)))

    def with_org_id_header(self, org_id: int, strategy: Optional[HeaderStrategy] = None) -> "Client":
        """Return a client for organization ``org_id`` sharing this client's transport.

        With ``HeaderStrategy.REPLACE`` the new client sends no custom header
        except the org-ID one. With ``HeaderStrategy.MERGE`` it starts from a
        copy of this client's custom headers. When ``strategy`` is None the
        client's ``header_strategy`` applies.
        """
        strategy = strategy or self.header_strategy
        derived = copy.copy(self)
        derived._owns_session = False
        if strategy is HeaderStrategy.MERGE and self.custom_headers is not None:
            derived.custom_headers = dict(self.custom_headers)
        else:
            derived.custom_headers = None
        derived.set_org_id_header(org_id)
        return derived

    # request execution

    def _get(self, ctx: Optional[Context], query: str, params: QueryParams = None) -> Tuple[bytes, int]:
        return self._do_request(ctx, "GET", query, "", params, None)

    def _get_with_raw_path(
        self, ctx: Optional[Context], query: str, raw_path: str, params: QueryParams = None
    ) -> Tuple[bytes, int]:
        return self._do_request(ctx, "GET", query, raw_path, params, None)

    def _patch(self, ctx: Optional[Context], query: str, params: QueryParams, body: bytes) -> Tuple[bytes, int]:
        return self._do_request(ctx, "PATCH", query, "", params, body)

    def _put(self, ctx: Optional[Context], query: str, params: QueryParams, body: bytes) -> Tuple[bytes, int]:
        return self._do_request(ctx, "PUT", query, "", params, body)

    def _post(self, ctx: Optional[Context], query: str, params: QueryParams, body: bytes) -> Tuple[bytes, int]:
        return self._do_request(ctx, "POST", query, "", params, body)

    def _delete(self, ctx: Optional[Context], query: str, raw_path: str = "") -> Tuple[bytes, int]:
        return self._do_request(ctx, "DELETE", query, raw_path, None, None)

    def _build_url(self, query: str, raw_path: str = "", params: QueryParams = None) -> str:
        if raw_path:
            escaped = join_path(quote(self._base_path, safe=_PATH_SAFE), raw_path)
        else:
            escaped = quote(join_path(self._base_path, query), safe=_PATH_SAFE)
        if escaped in ("", "."):
            escaped = "/"
        elif not escaped.startswith("/"):
            escaped = "/" + escaped
        # without params the base URL query string is kept
        query_string = self._base_query if params is None else encode_params(params)
        return urlunsplit((self._scheme, self._netloc, escaped, query_string, ""))

    def _request_headers(self) -> CaseInsensitiveDict:
        headers = CaseInsensitiveDict()
        if not self.basic_auth:
            headers["Authorization"] = self.key
        if self.custom_headers:
            headers.update(self.custom_headers)
        headers["Accept"] = "application/json"
        headers["Content-Type"] = "application/json"
        headers["User-Agent"] = USER_AGENT
        return headers

    def _do_request(
        self,
        ctx: Optional[Context],
        method: str,
        query: str,
        raw_path: str,
        params: QueryParams,
        body: Optional[bytes],
    ) -> Tuple[bytes, int]:
        """Send one request and return ``(body, status_code)``.

        The status code is not interpreted here. Raises RequestBuildError,
        TransportError (including cancellation and deadline expiry) or
        ResponseReadError.
        """
        if ctx is None:
            ctx = Context.background()
        url = self._build_url(query, raw_path, params)
        path = urlsplit(url).path
        try:
            request = requests.Request(method, url, headers=self._request_headers(), data=body, auth=self._auth)
            prepared = self.session.prepare_request(request)
        except (requests.RequestException, ValueError) as exc:
            raise RequestBuildError(f"cannot build {method} {path}: {exc}") from exc

        reason = ctx.err()
        if reason is not None:
            raise TransportError(f"{method} {path}: {reason}")

        logger.debug("HTTP %s %s", method, path)
        future: Future = Future()
        worker = threading.Thread(
            target=self._send, args=(prepared, future), name=f"grafana-{method.lower()}", daemon=True
        )
        worker.start()
        data, status = self._wait(ctx, future, method, path)
        logger.debug("HTTP %s %s -> %d (%d bytes)", method, path, status, len(data))
        return data, status

    def _send(self, prepared: requests.PreparedRequest, future: Future) -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            future.set_result(self._roundtrip(prepared))
        except Exception as exc:
            future.set_exception(exc)

    def _roundtrip(self, prepared: requests.PreparedRequest) -> Tuple[bytes, int]:
        path = urlsplit(prepared.url).path
        settings = self.session.merge_environment_settings(prepared.url, {}, True, None, None)
        try:
            response = self.session.send(prepared, **settings)
        except requests.RequestException as exc:
            raise TransportError(f"{prepared.method} {path}: {exc}") from exc
        try:
            return response.content, response.status_code
        except (requests.RequestException, OSError) as exc:
            raise ResponseReadError(f"reading {prepared.method} {path} response: {exc}", response.status_code) from exc
        finally:
            response.close()

    @staticmethod
    def _wait(ctx: Context, future: Future, method: str, path: str) -> Tuple[bytes, int]:
        wakeup = threading.Event()
        future.add_done_callback(lambda _f: wakeup.set())
        unsubscribe = ctx.on_cancel(wakeup.set)
        try:
            wakeup.wait(ctx.remaining())
        finally:
            unsubscribe()
        if future.done():
            return future.result()
        reason = ctx.err() or DEADLINE_EXCEEDED
        logger.debug("HTTP %s %s abandoned: %s", method, path, reason)
        raise TransportError(f"{method} {path}: {reason}")

    # response decoding

    def _decode(self, data: bytes, status: int, shape: Any) -> Any:
        """Fail on a non-2xx status, otherwise validate ``data`` as ``shape``."""
        if not 200 <= status < 300:
            raise HTTPStatusError(status, data, _server_message(data))
        try:
            return _adapter(shape).validate_json(data)
        except ValidationError as exc:
            name = getattr(shape, "__name__", str(shape))
            raise DecodeError(f"unexpected response shape for {name}: {exc}", data) from exc

    @staticmethod
    def _encode(payload: Any) -> bytes:
        return json.dumps(payload).encode("utf-8")
