"""Tests for RemoteFetcher: auth header precedence, error mapping, no request on empty URL."""

import base64

import httpx
import pytest

from bvdb_installer.provision.errors import ConfigError, FetchError
from bvdb_installer.provision.remote_fetcher import RemoteFetcher, build_auth_headers


def _recording_transport(status_code=200, content=b"body"):
    """Return (transport, requests) where requests collects every request sent."""
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(status_code, content=content)

    return httpx.MockTransport(handler), requests


@pytest.mark.unit
class TestBuildAuthHeaders:

    def test_no_credentials_sends_no_header(self):
        assert build_auth_headers({}) == {}

    def test_pre_encoded_token_is_used_verbatim(self):
        headers = build_auth_headers({"BVDB_SETUP_BASIC_AUTH": "dXNlcjpwYXNz"})
        assert headers == {"Authorization": "Basic dXNlcjpwYXNz"}

    def test_user_and_password_are_base64_encoded(self):
        headers = build_auth_headers({"BVDB_SETUP_USER": "deploy", "BVDB_SETUP_PASSWORD": "s3cret"})
        expected = base64.b64encode(b"deploy:s3cret").decode("ascii")
        assert headers == {"Authorization": f"Basic {expected}"}

    def test_pre_encoded_token_wins_over_user_and_password(self):
        headers = build_auth_headers({
            "BVDB_SETUP_BASIC_AUTH": "token",
            "BVDB_SETUP_USER": "deploy",
            "BVDB_SETUP_PASSWORD": "s3cret",
        })
        assert headers == {"Authorization": "Basic token"}

    def test_empty_token_falls_back_to_user_and_password(self):
        headers = build_auth_headers({
            "BVDB_SETUP_BASIC_AUTH": "",
            "BVDB_SETUP_USER": "deploy",
            "BVDB_SETUP_PASSWORD": "s3cret",
        })
        assert headers["Authorization"].startswith("Basic ")
        assert headers["Authorization"] != "Basic "

    def test_user_without_password_sends_no_header(self):
        assert build_auth_headers({"BVDB_SETUP_USER": "deploy", "BVDB_SETUP_PASSWORD": ""}) == {}


@pytest.mark.unit
class TestFetch:

    def test_returns_response_body(self):
        transport, _ = _recording_transport(content=b"archive-bytes")
        fetcher = RemoteFetcher(environ={}, transport=transport)
        assert fetcher.fetch("https://example.test/setup.tar.gz") == b"archive-bytes"

    def test_sends_authorization_header(self):
        transport, requests = _recording_transport()
        fetcher = RemoteFetcher(environ={"BVDB_SETUP_BASIC_AUTH": "abc"}, transport=transport)
        fetcher.fetch("https://example.test/salts")
        assert requests[0].headers["Authorization"] == "Basic abc"

    def test_omits_authorization_header_without_credentials(self):
        transport, requests = _recording_transport()
        RemoteFetcher(environ={}, transport=transport).fetch("https://example.test/salts")
        assert "Authorization" not in requests[0].headers

    def test_reads_credentials_at_fetch_time(self):
        transport, requests = _recording_transport()
        environ = {}
        fetcher = RemoteFetcher(environ=environ, transport=transport)
        environ["BVDB_SETUP_BASIC_AUTH"] = "late"
        fetcher.fetch("https://example.test/salts")
        assert requests[0].headers["Authorization"] == "Basic late"

    def test_empty_url_raises_config_error_without_request(self):
        transport, requests = _recording_transport()
        with pytest.raises(ConfigError):
            RemoteFetcher(environ={}, transport=transport).fetch("")
        assert requests == []

    def test_error_status_raises_fetch_error(self):
        transport, _ = _recording_transport(status_code=404)
        with pytest.raises(FetchError):
            RemoteFetcher(environ={}, transport=transport).fetch("https://example.test/missing")

    def test_connection_error_raises_fetch_error_with_cause(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        fetcher = RemoteFetcher(environ={}, transport=httpx.MockTransport(handler))
        with pytest.raises(FetchError) as excinfo:
            fetcher.fetch("https://example.test/setup.tar.gz")
        assert isinstance(excinfo.value.__cause__, httpx.ConnectError)
