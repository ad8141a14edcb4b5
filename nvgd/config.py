"""Server configuration: defaults, YAML loading and per-component sections."""

from __future__ import annotations

import dataclasses
import logging
import sys
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass, field
from typing import Any

import yaml

__all__ = [
    "DEBUG",
    "DEFAULT_ADDR",
    "DEFAULT_ACCESS_LOG",
    "DEFAULT_ERROR_LOG",
    "ConfigError",
    "Config",
    "CustomConfig",
    "root",
    "load_config",
    "register_protocol",
    "register_filter",
]

# Development mode (python -X dev) selects the debug defaults.
DEBUG = bool(sys.flags.dev_mode)

if DEBUG:
    DEFAULT_ADDR = "127.0.0.1:9280"
    DEFAULT_ACCESS_LOG = "(stdout)"
    DEFAULT_ERROR_LOG = "(stderr)"
else:
    DEFAULT_ADDR = "0.0.0.0:9280"
    DEFAULT_ACCESS_LOG = "(discard)"
    DEFAULT_ERROR_LOG = "(stderr)"

_LOG_FORMAT = "%(asctime)s %(message)s"
_LOG_DATEFMT = "%Y/%m/%d %H:%M:%S"


class ConfigError(ValueError):
    """Raised when a configuration cannot be applied."""


def _as_str(key: str, value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    raise ConfigError(f"{key}: expected a string, got {type(value).__name__}")


def _as_str_list(key: str, value: Any) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError(f"{key}: expected a list of strings")
    return [_as_str(key, item) for item in value]


def _apply_section(target: Any, name: str, data: Any) -> None:
    """Apply a YAML mapping to a registered configuration object."""
    if data is None:
        return
    update = getattr(target, "update_from", None)
    if callable(update):
        update(data)
        return
    if not isinstance(data, Mapping):
        raise ConfigError(f"configuration for {name} must be a mapping")
    if isinstance(target, MutableMapping):
        target.update(data)
        return
    if dataclasses.is_dataclass(target) and not isinstance(target, type):
        names = {
            f.metadata.get("yaml", f.name): f.name for f in dataclasses.fields(target)
        }
        for key, value in data.items():
            attr = names.get(key)
            if attr is not None:
                setattr(target, attr, value)
        return
    raise ConfigError(f"cannot apply configuration to {name}")


class CustomConfig(dict):
    """Named configuration objects that YAML sections are applied to."""

    def update_from(self, data: Any) -> None:
        """Apply each named section of ``data`` to the registered object."""
        if data is None:
            return
        if not isinstance(data, Mapping):
            raise ConfigError("custom configuration must be a mapping")
        for key, value in data.items():
            if not isinstance(key, str):
                continue
            if key not in self:
                raise ConfigError(f"unknown configuration name: {key}")
            _apply_section(self[key], key, value)


def _open_logger(name: str, target: str) -> logging.Logger:
    if target == "(discard)":
        handler: logging.Handler = logging.NullHandler()
    elif target == "(stderr)":
        handler = logging.StreamHandler(sys.stderr)
    elif target == "(stdout)":
        handler = logging.StreamHandler(sys.stdout)
    else:
        handler = logging.FileHandler(target, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, _LOG_DATEFMT))
    logger = logging.getLogger(name)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    return logger


@dataclass
class Config:
    """Server configuration."""

    addr: str = DEFAULT_ADDR
    path_prefix: str = ""
    error_log_path: str = DEFAULT_ERROR_LOG
    access_log_path: str = DEFAULT_ACCESS_LOG
    root_contents_file: str = ""
    protocols: CustomConfig = field(default_factory=CustomConfig)
    filters: CustomConfig = field(default_factory=CustomConfig)
    default_filters: dict[str, list[str]] = field(default_factory=dict)
    aliases: dict[str, str] = field(default_factory=dict)
    access_control_allow_origin: str = ""

    def access_log(self) -> logging.Logger:
        """Create the access logger."""
        return _open_logger("nvgd.access", self.access_log_path)

    def error_log(self) -> logging.Logger:
        """Create the error logger."""
        return _open_logger("nvgd.error", self.error_log_path)

    def _apply(self, data: Any) -> None:
        if data is None:
            return
        if not isinstance(data, Mapping):
            raise ConfigError("configuration must be a mapping")
        for key, value in data.items():
            attr = _STRING_KEYS.get(key)
            if attr is not None:
                setattr(self, attr, _as_str(key, value))
            elif key == "protocols":
                self.protocols.update_from(value)
            elif key == "filters":
                self.filters.update_from(value)
            elif key == "default_filters":
                if value is None:
                    continue
                if not isinstance(value, Mapping):
                    raise ConfigError("default_filters must be a mapping")
                for path, filters in value.items():
                    self.default_filters[_as_str(key, path)] = _as_str_list(key, filters)
            elif key == "aliases":
                if value is None:
                    continue
                if not isinstance(value, Mapping):
                    raise ConfigError("aliases must be a mapping")
                for src, dst in value.items():
                    self.aliases[_as_str(key, src)] = _as_str(key, dst)


_STRING_KEYS = {
    "addr": "addr",
    "path_prefix": "path_prefix",
    "error_log": "error_log_path",
    "access_log": "access_log_path",
    "root_contents_file": "root_contents_file",
    "access_control_allow_origin": "access_control_allow_origin",
}

_root = Config()


def root() -> Config:
    """Return the process-wide configuration."""
    return _root


def load_config(filename: str) -> Config:
    """Load ``filename`` into the root configuration and return it.

    An empty name or a missing file leaves the defaults in place.
    """
    if not filename:
        return _root
    try:
        with open(filename, "rb") as f:
            raw = f.read()
    except FileNotFoundError:
        return _root
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigError(str(exc)) from exc
    _root._apply(data)
    return _root


def register_protocol(name: str, value: Any) -> None:
    """Register a protocol configuration section."""
    _root.protocols[name] = value


def register_filter(name: str, value: Any) -> None:
    """Register a filter configuration section."""
    _root.filters[name] = value