"""Exception types raised by the test server lifecycle."""
from __future__ import annotations

START_ERROR_PREFIX = "Unable to start test server."
STOP_ERROR_PREFIX = "Unable to stop test server."


class TestServerError(RuntimeError):
    """Base class for lifecycle failures; keeps the original cause around."""

    __test__ = False  # not a pytest test class
    prefix = "Test server error."

    def __init__(self, cause: BaseException | str | None = None) -> None:
        self.cause = cause
        detail = f"\n{cause}" if cause is not None else ""
        super().__init__(f"{self.prefix}{detail}")


class StartError(TestServerError):
    prefix = START_ERROR_PREFIX


class CertificateUnavailable(StartError):
    """TLS server options could not be obtained from the certificate files."""


class BindFailed(StartError):
    """The listener could not bind to the configured host and port."""


class StopError(TestServerError):
    prefix = STOP_ERROR_PREFIX
