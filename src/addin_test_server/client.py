"""``requests`` helper for talking to a running test server."""
from __future__ import annotations

import json
import logging
import time
from typing import TYPE_CHECKING, Any

import requests

from addin_test_server.config import DEFAULT_HOST

if TYPE_CHECKING:
    from addin_test_server.test_server import TestServer

LOGGER = logging.getLogger("addin_test_server.client")
LOGGER.addHandler(logging.NullHandler())

_BACKOFF_SCHEDULE = (0.5, 1.0, 2.0)
_REQUEST_TIMEOUT = 20


class TestServerClient:
    __test__ = False  # not a pytest test class

    def __init__(
        self,
        port: int,
        host: str = DEFAULT_HOST,
        *,
        verify: bool | str = True,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = f"https://{host}:{port}"
        self.verify = verify
        self._session = session or requests.Session()

    @classmethod
    def for_server(cls, server: "TestServer", **kwargs: Any) -> "TestServerClient":
        address = server.server_address
        port = address[1] if address else server.get_port()
        kwargs.setdefault("verify", _verify_for(server))
        return cls(port, server.config.host, **kwargs)

    def ping(self) -> str:
        resp = self._request("GET", "/ping")
        resp.raise_for_status()
        return resp.text

    def post_results(self, data: Any) -> requests.Response:
        return self._request("POST", "/results", params={"data": json.dumps(data)})

    def close(self) -> None:
        self._session.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        url = f"{self.base_url}{path}"
        for attempt, backoff in enumerate(_BACKOFF_SCHEDULE, start=1):
            try:
                return self._session.request(
                    method, url, verify=self.verify, timeout=_REQUEST_TIMEOUT, **kwargs
                )
            except requests.exceptions.SSLError:
                raise
            except requests.ConnectionError as exc:
                LOGGER.warning(
                    "Connection to %s failed (%s), retry %s/%s in %.1fs",
                    url,
                    exc,
                    attempt,
                    len(_BACKOFF_SCHEDULE),
                    backoff,
                )
                time.sleep(backoff)
        return self._session.request(
            method, url, verify=self.verify, timeout=_REQUEST_TIMEOUT, **kwargs
        )


def _verify_for(server: "TestServer") -> bool | str:
    """Trust the dev CA when it is on disk, unless the server relaxed TLS."""
    if not server.verify_tls:
        return False
    ca_cert_path = server.config.ca_cert_path
    return str(ca_cert_path) if ca_cert_path.exists() else True
