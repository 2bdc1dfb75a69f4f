from __future__ import annotations

import logging

from cafe_order.config import (
    API_BASE_URL,
    HTTP_TIMEOUT_SECONDS,
    resolve_api_base_url,
    resolve_debug_log_path,
    resolve_http_timeout,
)
from cafe_order.main import configure_debug_log


def test_api_base_url_override(monkeypatch):
    monkeypatch.delenv("CAFE_API_BASE_URL", raising=False)
    assert resolve_api_base_url() == API_BASE_URL

    monkeypatch.setenv("CAFE_API_BASE_URL", " https://api.example.com/ ")
    assert resolve_api_base_url() == "https://api.example.com"


def test_http_timeout_ignores_bad_values(monkeypatch):
    monkeypatch.setenv("CAFE_HTTP_TIMEOUT_SECONDS", "2.5")
    assert resolve_http_timeout() == 2.5

    for raw in ("soon", "-1", "0"):
        monkeypatch.setenv("CAFE_HTTP_TIMEOUT_SECONDS", raw)
        assert resolve_http_timeout() == HTTP_TIMEOUT_SECONDS


def test_debug_log_writes_package_records(monkeypatch, tmp_path):
    log_file = tmp_path / "logs" / "debug.log"
    monkeypatch.setenv("CAFE_DEBUG_LOG_PATH", str(log_file))
    package_logger = logging.getLogger("cafe_order")
    handlers_before = list(package_logger.handlers)
    level_before = package_logger.level

    try:
        assert resolve_debug_log_path() == str(log_file)
        assert configure_debug_log() == log_file
        logging.getLogger("cafe_order.menu").info("menu loaded")
    finally:
        for handler in list(package_logger.handlers):
            if handler not in handlers_before:
                handler.close()
                package_logger.removeHandler(handler)
        package_logger.setLevel(level_before)

    assert "INFO cafe_order.menu menu loaded" in log_file.read_text(encoding="utf-8")


def test_debug_log_is_attached_once_per_path(tmp_path):
    log_file = tmp_path / "debug.log"
    package_logger = logging.getLogger("cafe_order")
    handlers_before = list(package_logger.handlers)
    level_before = package_logger.level

    try:
        configure_debug_log(str(log_file))
        configure_debug_log(str(log_file))
        added = [handler for handler in package_logger.handlers if handler not in handlers_before]
        logging.getLogger("cafe_order.session").info("menu loaded categories=soup")
    finally:
        for handler in list(package_logger.handlers):
            if handler not in handlers_before:
                handler.close()
                package_logger.removeHandler(handler)
        package_logger.setLevel(level_before)

    assert len(added) == 1
    assert log_file.read_text(encoding="utf-8").count("menu loaded categories=soup") == 1
