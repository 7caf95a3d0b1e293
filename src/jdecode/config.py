from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from contextvars import ContextVar, Token
from datetime import date, datetime, time
from pathlib import Path
from typing import Iterator, TypeAlias
import tomllib

from pydantic import BaseModel, ConfigDict, ValidationError

from jdecode.exceptions import ConfigError

_log = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "jdecode.toml"
CONFIG_SECTION = "decode"

_TRUTHY_VALUES = {"1", "true", "yes", "on"}
_FALSEY_VALUES = {"0", "false", "no", "off"}

TomlScalar: TypeAlias = str | int | float | bool | None | date | datetime | time
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlTable: TypeAlias = dict[str, TomlValue]


class DecodeSettings(BaseModel):
    """Ambient knobs read when decoders are built and when text is parsed."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    # Append each branch's failure to the generic one_of message.
    branch_diagnostics: bool = False
    # Accept the non-standard NaN / Infinity / -Infinity literals.
    allow_nan: bool = False


_SETTINGS: ContextVar[DecodeSettings] = ContextVar(
    "jdecode_settings",
    default=DecodeSettings(),
)


def _load_toml(path: Path) -> TomlTable:
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as exc:
        _log.debug("ignoring unreadable config %s: %s", path, exc)
        return {}
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        _log.debug("ignoring malformed config %s: %s", path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def load_config(root: Path | None = None, config_path: Path | None = None) -> TomlTable:
    if config_path is None:
        base = root if root is not None else Path.cwd()
        config_path = base / DEFAULT_CONFIG_NAME
    return _load_toml(config_path)


def decode_defaults(
    root: Path | None = None, config_path: Path | None = None
) -> TomlTable:
    data = load_config(root=root, config_path=config_path)
    section = data.get(CONFIG_SECTION, {})
    return section if isinstance(section, dict) else {}


def settings_from_config(section: TomlTable | None) -> DecodeSettings:
    if not section:
        return DecodeSettings()
    try:
        return DecodeSettings.model_validate(section)
    except ValidationError as exc:
        raise ConfigError(f"invalid [{CONFIG_SECTION}] settings: {exc}") from exc


def load_settings(
    root: Path | None = None, config_path: Path | None = None
) -> DecodeSettings:
    return settings_from_config(decode_defaults(root=root, config_path=config_path))


def _env_flag(name: str) -> bool | None:
    value = os.getenv(name)
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized in _TRUTHY_VALUES:
        return True
    if normalized in _FALSEY_VALUES:
        return False
    return None


def settings_from_env(base: DecodeSettings | None = None) -> DecodeSettings:
    return merge_settings(
        base if base is not None else DecodeSettings(),
        branch_diagnostics=_env_flag("JDECODE_BRANCH_DIAGNOSTICS"),
        allow_nan=_env_flag("JDECODE_ALLOW_NAN"),
    )


def merge_settings(base: DecodeSettings, **overrides: object) -> DecodeSettings:
    payload = base.model_dump()
    for key, value in overrides.items():
        if value is None:
            continue
        payload[key] = value
    return settings_from_config(payload)


def current_settings() -> DecodeSettings:
    return _SETTINGS.get()


def set_settings(settings: DecodeSettings) -> Token[DecodeSettings]:
    return _SETTINGS.set(settings)


def reset_settings(token: Token[DecodeSettings]) -> None:
    _SETTINGS.reset(token)


@contextmanager
def settings_scope(settings: DecodeSettings) -> Iterator[DecodeSettings]:
    token = set_settings(settings)
    try:
        yield settings
    finally:
        reset_settings(token)
