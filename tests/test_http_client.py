import io
import ssl
import sys
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from types import SimpleNamespace

import pytest
import requests
from requests.adapters import HTTPAdapter

import androidutils.http_client as hc
from androidutils.env_settings import Settings
from androidutils.exceptions import ConfigurationError, TLSUnavailableError
from androidutils.http_client import (
    ConnectionStream,
    HttpConnection,
    TimeoutHTTPAdapter,
    build_http_connection,
    create_http_client,
    create_ssl_context,
    download_url,
)
from androidutils.stream import copy


class DummyResponse:
    def __init__(self, status_code=200, body=b"payload"):
        self.status_code = status_code
        self.raw = io.BytesIO(body)
        self.closed = False

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def close(self):
        self.closed = True


class DummySession:
    def __init__(self, response):
        self.response = response
        self.calls = []
        self.closed = False

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        return self.response

    def close(self):
        self.closed = True


def test_create_ssl_context_is_private():
    first = create_ssl_context()
    second = create_ssl_context()
    assert isinstance(first, ssl.SSLContext)
    assert first is not second
    assert first.verify_mode == ssl.CERT_REQUIRED
    assert first.check_hostname is True


def test_create_ssl_context_without_ssl_module(monkeypatch):
    monkeypatch.setitem(sys.modules, "ssl", None)
    with pytest.raises(TLSUnavailableError):
        create_ssl_context()


def test_create_ssl_context_failure_is_configuration_error(monkeypatch):
    def broken(*args, **kwargs):
        raise ssl.SSLError("no provider")

    monkeypatch.setattr(ssl, "create_default_context", broken)
    with pytest.raises(ConfigurationError) as excinfo:
        create_ssl_context()
    assert isinstance(excinfo.value, TLSUnavailableError)
    assert not isinstance(excinfo.value, OSError)


def test_create_http_client_mounts_private_tls_adapter():
    session = create_http_client()
    https = session.get_adapter("https://example.com")
    http = session.get_adapter("http://example.com")

    assert session.trust_env is True
    assert isinstance(https, TimeoutHTTPAdapter)
    assert isinstance(http, TimeoutHTTPAdapter)
    assert https.timeout == (15.0, 20.0)
    assert isinstance(https.ssl_context, ssl.SSLContext)
    assert https.poolmanager.connection_pool_kw["ssl_context"] is https.ssl_context
    assert http.ssl_context is None


def test_each_client_gets_its_own_context():
    a = create_http_client().get_adapter("https://example.com")
    b = create_http_client().get_adapter("https://example.com")
    assert a.ssl_context is not b.ssl_context


def test_timeouts_follow_settings():
    session = create_http_client(Settings(connect_timeout=3, read_timeout=7))
    assert session.get_adapter("https://example.com").timeout == (3.0, 7.0)


def test_adapter_applies_default_timeout_only_when_missing(monkeypatch):
    captured = []

    def fake_send(self, request, **kwargs):
        captured.append(kwargs.get("timeout"))
        return SimpleNamespace()

    monkeypatch.setattr(HTTPAdapter, "send", fake_send)
    adapter = TimeoutHTTPAdapter((15.0, 20.0))
    adapter.send(object(), timeout=None)
    adapter.send(object(), timeout=5)

    assert captured == [(15.0, 20.0), 5]


@pytest.mark.parametrize(
    "url", ["not a url", "example.com/path", "http://", "ftp://example.com/file", "file:///etc/hosts"]
)
def test_build_http_connection_rejects_malformed_urls(url):
    with pytest.raises(requests.RequestException) as excinfo:
        build_http_connection(url)
    assert isinstance(excinfo.value, OSError)


def test_build_http_connection_does_not_connect():
    conn = build_http_connection("https://example.com/file")
    try:
        assert conn.connected is False
        assert conn.timeout == (15.0, 20.0)
        assert isinstance(conn.session, requests.Session)
    finally:
        conn.disconnect()


def test_connection_streams_body_with_timeout():
    session = DummySession(DummyResponse(body=b"hello"))
    conn = HttpConnection("https://example.com/a", session, (15.0, 20.0))

    stream = conn.get_input_stream()

    assert stream.read() == b"hello"
    assert session.calls == [("https://example.com/a", {"stream": True, "timeout": (15.0, 20.0)})]
    assert conn.connected


def test_connection_http_error_raises():
    conn = HttpConnection("https://example.com/missing", DummySession(DummyResponse(404)), (1, 1))
    with pytest.raises(requests.HTTPError):
        conn.get_input_stream()


def test_connection_context_manager_releases_resources():
    response = DummyResponse()
    session = DummySession(response)
    with HttpConnection("https://example.com", session, (1, 1)) as conn:
        conn.connect()
    assert response.closed
    assert session.closed
    assert conn.connected is False


def test_download_url_disconnects_on_http_error(monkeypatch):
    response = DummyResponse(500)
    session = DummySession(response)
    conn = HttpConnection("https://example.com", session, (1, 1))
    monkeypatch.setattr(hc, "build_http_connection", lambda url: conn)

    with pytest.raises(requests.HTTPError):
        download_url("https://example.com")
    assert response.closed
    assert session.closed


class _PayloadHandler(BaseHTTPRequestHandler):
    payload = bytes(range(256)) * 100

    def do_GET(self):
        if self.path != "/data":
            self.send_error(404)
            return
        self.send_response(200)
        self.send_header("Content-Length", str(len(self.payload)))
        self.end_headers()
        self.wfile.write(self.payload)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def local_server(monkeypatch):
    for var in ("HTTP_PROXY", "http_proxy", "HTTPS_PROXY", "https_proxy", "ALL_PROXY", "all_proxy"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")
    monkeypatch.setenv("no_proxy", "127.0.0.1,localhost")
    server = ThreadingHTTPServer(("127.0.0.1", 0), _PayloadHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_address[1]}"
    server.shutdown()
    server.server_close()


def test_download_url_against_local_server(local_server):
    stream = download_url(local_server + "/data")
    sink = io.BytesIO()
    try:
        count = copy(stream, sink)
    finally:
        stream.close()
    assert count == len(_PayloadHandler.payload)
    assert sink.getvalue() == _PayloadHandler.payload


def test_download_url_not_found_against_local_server(local_server):
    with pytest.raises(requests.HTTPError):
        download_url(local_server + "/missing")


def test_unsupported_scheme_is_invalid_schema():
    with pytest.raises(requests.exceptions.InvalidSchema):
        build_http_connection("ftp://example.com/file")


def test_download_url_stream_close_releases_session(monkeypatch):
    response = DummyResponse(body=b"body bytes")
    session = DummySession(response)
    conn = HttpConnection("https://example.com", session, (1, 1))
    monkeypatch.setattr(hc, "build_http_connection", lambda url: conn)

    stream = download_url("https://example.com")
    assert isinstance(stream, ConnectionStream)
    assert stream.read() == b"body bytes"
    assert session.closed is False

    stream.close()
    assert stream.closed
    assert response.closed
    assert session.closed
    assert conn.connected is False


def test_download_url_stream_as_context_manager(monkeypatch):
    session = DummySession(DummyResponse(body=b"abc"))
    conn = HttpConnection("https://example.com", session, (1, 1))
    monkeypatch.setattr(hc, "build_http_connection", lambda url: conn)

    with download_url("https://example.com") as stream:
        sink = io.BytesIO()
        assert copy(stream, sink) == 3
    assert session.closed
