"""Environment-driven configuration for the test server."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

LOGGER = logging.getLogger("addin_test_server.config")
LOGGER.addHandler(logging.NullHandler())

DEFAULT_PORT = 4201
DEFAULT_HOST = "localhost"
DEV_CERTS_DIR = Path("~/.office-addin-dev-certs").expanduser()

_REPO_ROOT = Path(__file__).resolve().parents[2]
_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class ServerConfig:
    port: int = DEFAULT_PORT
    host: str = DEFAULT_HOST
    cert_path: Path = DEV_CERTS_DIR / "localhost.crt"
    key_path: Path = DEV_CERTS_DIR / "localhost.key"
    ca_cert_path: Path = DEV_CERTS_DIR / "ca.crt"
    usage_data_enabled: bool = False
    usage_data_endpoint: str | None = None


def load_env_file(env_file: str | Path | None = None) -> Path | None:
    """Load the first ``.env`` candidate that exists and return its path."""
    candidates = (env_file, os.getenv("ENV_FILE"), _REPO_ROOT / ".env")
    for candidate in candidates:
        if not candidate:
            continue
        candidate_path = Path(candidate).expanduser()
        if candidate_path.exists():
            load_dotenv(candidate_path)
            LOGGER.debug("Loaded environment from %s", candidate_path)
            return candidate_path
    return None


def parse_port(raw: str | int) -> int:
    try:
        value = int(str(raw).strip())
    except ValueError as exc:
        raise ValueError(f"TEST_SERVER_PORT must be an integer, got {raw!r}") from exc
    if value < 0 or value > 65535:
        raise ValueError("TEST_SERVER_PORT must be between 0 and 65535")
    return value


def _path_from_env(name: str, default: Path) -> Path:
    raw = os.getenv(name, "").strip()
    return Path(raw).expanduser() if raw else default


def load_config(env_file: str | Path | None = None) -> ServerConfig:
    load_env_file(env_file)
    defaults = ServerConfig()
    endpoint = os.getenv("OFFICE_ADDIN_USAGE_DATA_ENDPOINT", "").strip() or None
    return ServerConfig(
        port=parse_port(os.getenv("TEST_SERVER_PORT", str(DEFAULT_PORT))),
        host=os.getenv("TEST_SERVER_HOST", DEFAULT_HOST).strip() or DEFAULT_HOST,
        cert_path=_path_from_env("TEST_SERVER_CERT", defaults.cert_path),
        key_path=_path_from_env("TEST_SERVER_KEY", defaults.key_path),
        ca_cert_path=_path_from_env("TEST_SERVER_CA_CERT", defaults.ca_cert_path),
        usage_data_enabled=os.getenv("OFFICE_ADDIN_USAGE_DATA", "off").strip().lower() in _TRUTHY,
        usage_data_endpoint=endpoint,
    )
