"""HTTP connection helpers.

Every client built here gets its own :class:`ssl.SSLContext`.  The
process-wide default context is never touched, so other libraries that
assume the stock TLS configuration keep working.  Requests default to a
15 second connect timeout and a 20 second read timeout, both adjustable
through :mod:`androidutils.env_settings`.

Typical use::

    from androidutils.http_client import download_url
    from androidutils.stream import copy

    stream = download_url("https://example.com/data.bin")
    try:
        with open("data.bin", "wb") as fh:
            copy(stream, fh)
    finally:
        stream.close()
"""

from __future__ import annotations

import logging
from typing import Any, BinaryIO, Optional
from urllib.parse import urlsplit

import requests
from requests.adapters import HTTPAdapter
from requests.exceptions import InvalidSchema

from .env_settings import Settings, get_settings
from .exceptions import TLSUnavailableError

logger = logging.getLogger(__name__)

SUPPORTED_SCHEMES = ("http", "https")


def create_ssl_context():
    """Return a new TLS client context owned by the caller.

    Raises :class:`TLSUnavailableError` if the interpreter was built
    without TLS support.  There is nothing a caller can do about that at
    runtime, so it is not reported as an I/O error.
    """
    try:
        import ssl
    except ImportError as exc:
        raise TLSUnavailableError("The system has no TLS support.") from exc

    try:
        context = ssl.create_default_context(ssl.Purpose.SERVER_AUTH)
    except (ssl.SSLError, ValueError) as exc:
        raise TLSUnavailableError(f"Could not create a TLS context: {exc}") from exc
    logger.debug("Created private TLS context (%s)", ssl.OPENSSL_VERSION)
    return context


class TimeoutHTTPAdapter(HTTPAdapter):
    """HTTPAdapter that applies a default timeout and an optional TLS context.

    Parameters
    ----------
    timeout:
        ``(connect, read)`` seconds used when a request passes no
        ``timeout`` of its own.
    ssl_context:
        Context handed to the underlying urllib3 pool manager.  ``None``
        keeps urllib3's behaviour, which is what plain ``http://``
        mounts want.
    """

    def __init__(self, timeout, ssl_context=None, **kwargs: Any):
        self.timeout = timeout
        self.ssl_context = ssl_context
        super().__init__(**kwargs)

    def init_poolmanager(self, *args: Any, **kwargs: Any) -> None:
        if self.ssl_context is not None:
            kwargs["ssl_context"] = self.ssl_context
        super().init_poolmanager(*args, **kwargs)

    def proxy_manager_for(self, *args: Any, **kwargs: Any):
        if self.ssl_context is not None:
            kwargs["ssl_context"] = self.ssl_context
        return super().proxy_manager_for(*args, **kwargs)

    def send(self, request, **kwargs: Any):
        if kwargs.get("timeout") is None:
            kwargs["timeout"] = self.timeout
        return super().send(request, **kwargs)


def create_http_client(settings: Optional[Settings] = None) -> requests.Session:
    """Create a requests Session with its own TLS context and default timeouts.

    The session respects ``HTTP(S)_PROXY`` environment variables.
    """
    settings = settings or get_settings()
    ssl_context = create_ssl_context()

    session = requests.Session()
    session.trust_env = True
    session.mount("https://", TimeoutHTTPAdapter(settings.timeout, ssl_context=ssl_context))
    session.mount("http://", TimeoutHTTPAdapter(settings.timeout))
    return session


class HttpConnection:
    """A lazily opened GET connection to a single URL.

    Mirrors the usual connect / read / disconnect lifecycle: nothing
    touches the network until :meth:`connect` or
    :meth:`get_input_stream` is called.
    """

    def __init__(self, url: str, session: requests.Session, timeout):
        self.url = url
        self.session = session
        self.timeout = timeout
        self.response: Optional[requests.Response] = None

    @property
    def connected(self) -> bool:
        return self.response is not None

    def connect(self) -> requests.Response:
        """Send the request; the body is left unread on the socket."""
        if self.response is None:
            logger.debug("Opening connection to %s", self.url)
            self.response = self.session.get(self.url, stream=True, timeout=self.timeout)
        return self.response

    def get_input_stream(self) -> BinaryIO:
        """Return the response body as a readable binary stream.

        Raises ``requests.HTTPError`` for 4xx and 5xx statuses.  The
        stream transparently undoes gzip/deflate transfer encoding.
        """
        response = self.connect()
        response.raise_for_status()
        response.raw.decode_content = True
        return response.raw

    def disconnect(self) -> None:
        """Release the response and the session behind it."""
        if self.response is not None:
            self.response.close()
            self.response = None
        self.session.close()

    def __enter__(self) -> "HttpConnection":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.disconnect()

    def __repr__(self) -> str:
        return f"HttpConnection(url={self.url!r}, connected={self.connected})"


def build_http_connection(url: str, settings: Optional[Settings] = None) -> HttpConnection:
    """Return an unopened :class:`HttpConnection` for ``url``.

    Malformed URLs raise a ``requests.RequestException`` subclass, which
    is an :class:`OSError`: ``MissingSchema`` without a scheme,
    ``InvalidURL`` without a host, and ``InvalidSchema`` for anything but
    http and https.
    """
    requests.Request("GET", url).prepare()
    if urlsplit(url).scheme.lower() not in SUPPORTED_SCHEMES:
        raise InvalidSchema(f"Unsupported URL scheme in {url!r}")
    settings = settings or get_settings()
    return HttpConnection(url, create_http_client(settings), settings.timeout)


class ConnectionStream:
    """Response body stream that disconnects its connection on close.

    Reads go to the underlying urllib3 response; :meth:`close` also
    closes the per-call session so no pooled socket outlives the stream.
    """

    def __init__(self, raw, connection: HttpConnection):
        self.raw = raw
        self.connection = connection

    def read(self, amt: Optional[int] = None) -> bytes:
        return self.raw.read(amt)

    @property
    def closed(self) -> bool:
        return self.raw.closed

    def close(self) -> None:
        try:
            self.raw.close()
        finally:
            self.connection.disconnect()

    def __enter__(self) -> "ConnectionStream":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __getattr__(self, name: str) -> Any:
        return getattr(self.raw, name)


def download_url(url: str) -> ConnectionStream:
    """Connect to ``url`` and return the response body stream.

    The caller owns the returned stream and must close it; closing also
    releases the connection and the session created for this call.
    """
    conn = build_http_connection(url)
    try:
        return ConnectionStream(conn.get_input_stream(), conn)
    except Exception:
        conn.disconnect()
        raise


__all__ = [
    "create_ssl_context",
    "TimeoutHTTPAdapter",
    "create_http_client",
    "HttpConnection",
    "build_http_connection",
    "ConnectionStream",
    "download_url",
]
