"""Best-effort usage data events for server lifecycle operations."""
from __future__ import annotations

import logging
import sys
from typing import Any

import requests

from addin_test_server.config import ServerConfig, load_config

LOGGER = logging.getLogger("addin_test_server.usage_data")
LOGGER.addHandler(logging.NullHandler())

PROJECT_NAME = "office-addin-test-server"
_REQUEST_TIMEOUT = 5


class UsageDataReporter:
    """Sends success/exception events; never raises to the caller."""

    def __init__(
        self,
        enabled: bool = False,
        endpoint: str | None = None,
        *,
        session: requests.Session | None = None,
    ) -> None:
        self.enabled = enabled
        self.endpoint = endpoint
        self._session = session

    @classmethod
    def from_config(cls, config: ServerConfig) -> "UsageDataReporter":
        return cls(config.usage_data_enabled, config.usage_data_endpoint)

    def report_success(self, method: str) -> None:
        self._send(self._event(method, "success"))

    def report_exception(self, method: str, message: str) -> None:
        self._send(self._event(method, "exception", message=message))

    def _event(self, method: str, outcome: str, *, message: str | None = None) -> dict[str, Any]:
        event: dict[str, Any] = {
            "project": PROJECT_NAME,
            "method": method,
            "outcome": outcome,
            "platform": sys.platform,
        }
        if message is not None:
            event["message"] = message
        return event

    def _send(self, event: dict[str, Any]) -> None:
        LOGGER.debug("usage data %s %s", event["method"], event["outcome"])
        if not self.enabled or not self.endpoint:
            return
        try:
            poster = self._session.post if self._session is not None else requests.post
            resp = poster(self.endpoint, json=event, timeout=_REQUEST_TIMEOUT)
            if resp.status_code >= 400:
                LOGGER.warning(
                    "Usage data endpoint rejected %s event (status=%s)",
                    event["method"],
                    resp.status_code,
                )
        except Exception as exc:  # telemetry must never fail the caller
            LOGGER.warning("Failed to send usage data for %s: %s", event["method"], exc)


_DEFAULT_REPORTER: UsageDataReporter | None = None


def default_reporter() -> UsageDataReporter:
    global _DEFAULT_REPORTER
    if _DEFAULT_REPORTER is None:
        _DEFAULT_REPORTER = UsageDataReporter.from_config(load_config())
    return _DEFAULT_REPORTER


def send_usage_data_success_event(method: str) -> None:
    default_reporter().report_success(method)


def send_usage_data_exception(method: str, message: str) -> None:
    default_reporter().report_exception(method, message)
