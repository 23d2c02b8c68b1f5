"""
Run the wiki server.

Uso:
    python -m wiki [--host 0.0.0.0] [--port 3000]

PORT (default 3000) selects the port. When TLS_CERT_FILE/TLS_KEY_FILE are set
both files are read once before binding; a missing or unreadable file aborts
startup.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import uvicorn

from wiki.core.config import Settings, get_settings
from wiki.core.log import configure_logging

logger = logging.getLogger("wiki")


class StartupError(RuntimeError):
    pass


def load_tls_pair(settings: Settings) -> Optional[tuple[str, str]]:
    """Return (cert, key) paths after checking both are readable, or None for plain HTTP."""
    if not settings.tls_enabled:
        return None
    if not (settings.tls_cert_file and settings.tls_key_file):
        raise StartupError("TLS_CERT_FILE and TLS_KEY_FILE must be set together")
    for label, path in (("certificate", settings.tls_cert_file), ("key", settings.tls_key_file)):
        try:
            Path(path).read_bytes()
        except OSError as exc:
            raise StartupError(f"Could not read TLS {label} file {path}: {exc}") from exc
    logger.info("TLS enabled (cert=%s)", settings.tls_cert_file)
    return settings.tls_cert_file, settings.tls_key_file


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Run the wiki server.")
    parser.add_argument("--host", default=settings.host)
    parser.add_argument("--port", type=int, default=settings.port)
    args = parser.parse_args(argv)

    configure_logging()
    try:
        tls = load_tls_pair(settings)
    except StartupError as exc:
        logger.error("%s", exc)
        return 1

    cert, key = tls if tls else (None, None)
    logger.info("Server listening on port %s", args.port)
    uvicorn.run(
        "wiki.app:app",
        host=args.host,
        port=args.port,
        ssl_certfile=cert,
        ssl_keyfile=key,
        log_level=settings.log_level.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
