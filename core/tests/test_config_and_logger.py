"""Tests for layered configuration and the SQLite audit logger."""
from __future__ import annotations

from pathlib import Path

import pytest

from core.common.app_context import AppContext
from core.config.config_service import ConfigService, config_service
from core.logging.logic.logger import logger
from core.models.user import User


def test_env_overlay_wins_over_defaults(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("RAMSTOOL_DATABASE__SIGNATURES", str(tmp_path / "x.db"))
    monkeypatch.setenv("RAMSTOOL_GENERAL__APP_NAME", "Site A")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
    svc = ConfigService()
    assert svc.database.signatures == tmp_path / "x.db"
    assert svc.general.app_name == "Site A"
    assert svc.meta_source("General", "app_name") == {"layer": "env", "source": "os.environ"}


def test_get_with_cast(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("RAMSTOOL_EXTRA__RETRIES", "3")
    monkeypatch.setenv("RAMSTOOL_EXTRA__ENABLED", "yes")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
    svc = ConfigService()
    assert svc.get("Extra", "retries", cast=int) == 3
    assert svc.get("Extra", "enabled", cast=bool) is True
    assert svc.get("Extra", "missing") is None


def test_user_ini_layer(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    cfg_dir = tmp_path / "cfg" / "ramstool"
    cfg_dir.mkdir(parents=True)
    (cfg_dir / "config.ini").write_text("[Display]\ntimezone = Australia/Sydney\n", encoding="utf-8")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "cfg"))
    monkeypatch.delenv("RAMSTOOL_DISPLAY__TIMEZONE", raising=False)
    svc = ConfigService()
    assert svc.display.timezone == "Australia/Sydney"
    assert svc.meta_source("Display", "timezone")["layer"] == "user"


def test_app_config_bundle() -> None:
    cfg = config_service.app_config
    assert cfg.database.logging == logger.db_path


def test_logger_persists_and_queries() -> None:
    logger.log("tests", "Ping", reference_id="REF-1", message="hello", user_id="u1")
    rows = logger.query_logs(feature="tests", reference_id="REF-1")
    assert rows
    assert rows[0].event == "Ping"
    assert rows[0].username == "unknown"
    as_dict = rows[0].as_dict()
    assert as_dict["message"] == "hello"
    assert as_dict["timestamp_utc"].endswith("+00:00")


def test_logger_fills_username_from_session() -> None:
    AppContext.set_current_user(User(id="u2", username="site.lead", email="l@example.com"))
    try:
        logger.log("tests", "WithUser", reference_id="REF-2")
    finally:
        AppContext.clear_current_user()
    rows = logger.query_logs(reference_id="REF-2")
    assert rows[0].username == "site.lead"


def test_clear_logs() -> None:
    logger.log("tests", "ToBeCleared")
    logger.clear_logs()
    assert logger.fetch_logs() == []


def test_logger_keeps_no_in_memory_history() -> None:
    for i in range(3):
        logger.log("tests", "NoHistory", reference_id=f"REF-H{i}")
    assert not any(isinstance(v, list) for v in vars(logger).values())
    assert len(logger.query_logs(event="NoHistory")) == 3
