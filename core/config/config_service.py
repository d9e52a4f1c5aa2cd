"""
core/config/config_service.py

Typed configuration for RAMSToolPy, merged from layers in this order (later
layers win):

    code          embedded defaults below
    defaults.ini  shipped next to this module
    env           RAMSTOOL_<SECTION>__<KEY> variables
    machine       core/config/config.ini (optional, per installation)
    user          $XDG_CONFIG_HOME/ramstool/config.ini or %APPDATA%/RAMSTool/config.ini

Every merged value remembers the layer it came from (`meta_source`).
"""
from __future__ import annotations

import configparser
import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from threading import RLock
from typing import Any, Callable, Dict, Iterator, Tuple

logger = logging.getLogger(__name__)

CONFIG_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = CONFIG_DIR.parent.parent
DEFAULTS_INI = CONFIG_DIR / "defaults.ini"
MACHINE_INI = CONFIG_DIR / "config.ini"

ENV_PREFIX = "RAMSTOOL_"

Sections = Dict[str, Dict[str, Any]]

_DEFAULTS: Sections = {
    "Database": {
        "signatures": (PROJECT_ROOT / "databases" / "rams-tool.db").as_posix(),
        "logging": (PROJECT_ROOT / "databases" / "logs.db").as_posix(),
    },
    "General": {"app_name": "RAMSToolPy", "version": "0.1.0"},
    "Display": {"timezone": "Europe/London"},
}

_TRUE = {"1", "true", "yes", "on"}


@dataclass
class DatabaseConfig:
    signatures: Path
    logging: Path


@dataclass
class GeneralConfig:
    app_name: str = ""
    version: str = ""


@dataclass
class DisplayConfig:
    timezone: str = "Europe/London"


@dataclass
class AppConfig:
    database: DatabaseConfig
    general: GeneralConfig
    display: DisplayConfig


def _coerce(value: Any, kind: Any) -> Any:
    # dataclass field types arrive as strings under postponed annotations
    name = kind if isinstance(kind, str) else getattr(kind, "__name__", "")
    if name == "Path":
        return Path(str(value)).expanduser()
    if name == "bool":
        return value if isinstance(value, bool) else str(value).strip().lower() in _TRUE
    if name in ("int", "float", "str"):
        return {"int": int, "float": float, "str": str}[name](value)
    return kind(value)


def _section_to(cls: type, values: Dict[str, Any]) -> Any:
    return cls(**{f.name: _coerce(values.get(f.name, f.default), f.type) for f in fields(cls)})


def _ini(path: Path) -> Sections:
    parser = configparser.ConfigParser()
    parser.read(path, encoding="utf-8")
    return {name: dict(parser.items(name)) for name in parser.sections()}


def _environment() -> Sections:
    found: Sections = {}
    for name, value in os.environ.items():
        if not name.startswith(ENV_PREFIX) or "__" not in name[len(ENV_PREFIX):]:
            continue
        section, key = name[len(ENV_PREFIX):].split("__", 1)
        found.setdefault(section.title(), {})[key.lower()] = value
    return found


def user_config_path() -> Path:
    if os.name == "nt":
        base = Path(os.environ.get("APPDATA") or Path.home() / "AppData" / "Roaming")
        return base / "RAMSTool" / "config.ini"
    base = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
    return base / "ramstool" / "config.ini"


def _layers() -> Iterator[Tuple[str, str, Sections]]:
    yield "code", "embedded", _DEFAULTS
    if DEFAULTS_INI.exists():
        yield "defaults.ini", str(DEFAULTS_INI), _ini(DEFAULTS_INI)
    yield "env", "os.environ", _environment()
    if MACHINE_INI.exists():
        yield "machine", str(MACHINE_INI), _ini(MACHINE_INI)
    user_ini = user_config_path()
    if user_ini.exists():
        yield "user", str(user_ini), _ini(user_ini)


class ConfigService:
    """Merged, typed view over all configuration layers."""

    def __init__(self) -> None:
        self._lock = RLock()
        self.reload()

    def reload(self) -> None:
        with self._lock:
            merged: Sections = {}
            origin: Dict[Tuple[str, str], Dict[str, str]] = {}
            for layer, source, sections in _layers():
                for section, values in sections.items():
                    for key, value in values.items():
                        merged.setdefault(section, {})[key] = value
                        origin[(section, key)] = {"layer": layer, "source": source}
            self._merged, self._sources = merged, origin

            self.database: DatabaseConfig = _section_to(DatabaseConfig, merged.get("Database", {}))
            self.general: GeneralConfig = _section_to(GeneralConfig, merged.get("General", {}))
            self.display: DisplayConfig = _section_to(DisplayConfig, merged.get("Display", {}))
            logger.debug("Configuration loaded; signatures db at %s", self.database.signatures)

    @property
    def app_config(self) -> AppConfig:
        return AppConfig(database=self.database, general=self.general, display=self.display)

    def get(self, section: str, key: str, *, cast: Callable[[Any], Any] | type = str) -> Any:
        """Raw merged value cast with *cast*; None when the key is missing."""
        value = self._merged.get(section, {}).get(key)
        if value is None:
            return None
        return _coerce(value, cast) if isinstance(cast, type) else cast(value)

    def meta_source(self, section: str, key: str) -> Dict[str, str] | None:
        return self._sources.get((section, key))


config_service = ConfigService()
