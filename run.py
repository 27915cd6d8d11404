"""Local entry point that serves one Office Add-in test run over HTTPS."""

import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parent / "src"
if SRC_DIR.exists():
    sys.path.insert(0, str(SRC_DIR))

from addin_test_server.cli import main  # noqa: E402


if __name__ == "__main__":  # pragma: no cover - manual execution
    sys.exit(main(sys.argv[1:]))
