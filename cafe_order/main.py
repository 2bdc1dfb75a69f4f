"""Entry point for the cafe-order Textual app."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from cafe_order.cafe_app import CafeOrderApp
from cafe_order.config import resolve_debug_log_path

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_debug_log(path: str | None = None) -> Path:
    """Send package logs to a file; the terminal is owned by the app."""
    log_path = Path(path or resolve_debug_log_path())
    log_path.parent.mkdir(parents=True, exist_ok=True)

    package_logger = logging.getLogger("cafe_order")
    package_logger.setLevel(logging.DEBUG)
    target = os.path.abspath(log_path)
    for existing in package_logger.handlers:
        if isinstance(existing, logging.FileHandler) and existing.baseFilename == target:
            return log_path

    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    package_logger.addHandler(handler)
    return log_path


def main() -> None:
    """Run the Textual application."""
    load_dotenv()
    configure_debug_log()
    CafeOrderApp().run()


if __name__ == "__main__":
    main()
