"""FakeRemoteFetcher: test double for RemoteFetcher.

Returns canned bodies per URL and records every fetch() call.
"""

from bvdb_installer.provision.errors import ConfigError, FetchError


class FakeRemoteFetcher:
    """Test double for RemoteFetcher.

    Usage:
        fake = FakeRemoteFetcher()
        fake.set_response("https://example.test/salts", b"SALT=1\\n")
        fake.set_failure("https://example.test/licenses")
        assert fake.fetch("https://example.test/salts") == b"SALT=1\\n"
        assert fake.calls == ["https://example.test/salts"]
    """

    def __init__(self):
        self._responses = {}
        self.calls = []

    def set_response(self, url, body):
        self._responses[url] = body

    def set_failure(self, url, message="connection refused"):
        self._responses[url] = FetchError(f"Failed to download {url}: {message}")

    def fetch(self, url):
        if not url:
            raise ConfigError("Missing URL: nothing to download.")
        self.calls.append(url)
        response = self._responses.get(url)
        if response is None:
            raise FetchError(f"Failed to download {url}: 404 Not Found")
        if isinstance(response, Exception):
            raise response
        return response
