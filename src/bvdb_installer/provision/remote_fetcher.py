"""RemoteFetcher: HTTP GET with optional Basic-Auth, used for the setup archive and .env blocks."""

import base64
import os

import httpx

from bvdb_installer.provision.errors import ConfigError, FetchError

AUTH_USER_ENV = "BVDB_SETUP_USER"
AUTH_PASS_ENV = "BVDB_SETUP_PASSWORD"
AUTH_BASIC_ENV = "BVDB_SETUP_BASIC_AUTH"

DEFAULT_TIMEOUT_SECONDS = 60.0


def build_auth_headers(environ=None):
    """Return the Authorization header dict derived from the environment.

    A pre-encoded token in BVDB_SETUP_BASIC_AUTH wins. Otherwise both
    BVDB_SETUP_USER and BVDB_SETUP_PASSWORD must be non-empty.
    """
    if environ is None:
        environ = os.environ

    basic = environ.get(AUTH_BASIC_ENV, "")
    if basic:
        return {"Authorization": f"Basic {basic}"}

    user = environ.get(AUTH_USER_ENV, "")
    password = environ.get(AUTH_PASS_ENV, "")
    if user and password:
        token = base64.b64encode(f"{user}:{password}".encode("utf-8")).decode("ascii")
        return {"Authorization": f"Basic {token}"}

    return {}


class RemoteFetcher:
    """Downloads a URL into memory.

    Credentials are read on every fetch so that changes to the environment
    between calls are honoured.
    """

    def __init__(self, environ=None, transport=None, timeout=DEFAULT_TIMEOUT_SECONDS):
        self._environ = environ
        self._transport = transport
        self._timeout = timeout

    def fetch(self, url: str) -> bytes:
        """GET url and return the response body.

        Raises:
            ConfigError: If url is empty (no request is made)
            FetchError: On connection errors or a non-success status
        """
        if not url:
            raise ConfigError("Missing URL: nothing to download.")

        headers = build_auth_headers(self._environ)
        try:
            with httpx.Client(
                timeout=self._timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = client.get(url, headers=headers)
                response.raise_for_status()
                return response.content
        except httpx.HTTPError as err:
            raise FetchError(f"Failed to download {url}: {err}") from err
