"""TLS server options built from the Office Add-in dev certificate files."""
from __future__ import annotations

import logging
import ssl
from pathlib import Path

from addin_test_server.config import ServerConfig
from addin_test_server.errors import CertificateUnavailable

LOGGER = logging.getLogger("addin_test_server.certificates")
LOGGER.addHandler(logging.NullHandler())


def default_certificate_paths() -> dict[str, Path]:
    config = ServerConfig()
    return {
        "cert": config.cert_path,
        "key": config.key_path,
        "ca": config.ca_cert_path,
    }


def get_https_server_options(config: ServerConfig | None = None) -> ssl.SSLContext:
    """Return a server-side SSL context for the configured cert and key.

    Generating or installing the certificates is left to the dev-certs
    tooling; this only loads what is already on disk.
    """
    config = config or ServerConfig()
    missing = [str(path) for path in (config.cert_path, config.key_path) if not path.exists()]
    if missing:
        raise CertificateUnavailable(
            f"Dev certificate files not found: {', '.join(missing)}"
        )

    context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
    try:
        context.load_cert_chain(certfile=str(config.cert_path), keyfile=str(config.key_path))
    except (OSError, ssl.SSLError) as exc:
        raise CertificateUnavailable(exc) from exc
    LOGGER.debug("Loaded TLS certificate %s", config.cert_path)
    return context
