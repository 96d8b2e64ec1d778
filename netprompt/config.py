#!/usr/bin/env python3
# netprompt/config.py
from __future__ import annotations

"""
Configuration loader (stdlib-only).

Precedence (low → high):
  1) Built-in defaults
  2) Files in CWD: .env, config.ini, config.json, config.toml
  3) Environment variables prefixed with NETPROMPT_

Validation:
  - PROMPT: str (default "> ")
  - ROOT_COMMAND_SET / PLUGIN_PACKAGE: non-empty str
  - LOG_LEVEL: None or one of {'DEBUG','INFO','WARNING','ERROR','CRITICAL'}
  - LOG_FILE_PATH / HISTORY_FILE_PATH: None or normalized path
  - ENABLE_COMPLETION: bool
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional
from pathlib import Path
import configparser
import json
import os
import re
import tomllib  # stdlib in 3.11+

ENV_PREFIX = "NETPROMPT_"

# ---------- defaults ----------

DEFAULTS: dict[str, Any] = {
    "PROMPT": "> ",
    "ROOT_COMMAND_SET": "default",
    "PLUGIN_PACKAGE": "plugins",
    "LOG_LEVEL": None,              # 'DEBUG'/'INFO'/'WARNING'/'ERROR'/'CRITICAL'
    "LOG_FILE_PATH": None,
    "HISTORY_FILE_PATH": None,      # None keeps history in memory
    "ENABLE_COMPLETION": True,
}


# ---------- data model ----------

@dataclass(frozen=True)
class AppConfig:
    prompt: str
    root_command_set: str
    plugin_package: str

    log_level: str | None
    log_file_path: Path | None
    history_file_path: Path | None
    enable_completion: bool

    # Unrecognized keys preserved for debugging/forward-compat
    extra: dict[str, Any] = field(default_factory=dict)


# ---------- file loaders (stdlib) ----------
# Every loader returns a flat mapping; a missing or malformed file is empty.

_ENV_LINE = re.compile(r"""^([A-Za-z_][A-Za-z0-9_]*)\s*=\s*(.*?)$""")


def _read_text(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None


def _load_env_file(path: Path) -> dict[str, Any]:
    """KEY=VALUE lines; '#' comments and matching outer quotes are dropped."""
    text = _read_text(path)
    if text is None:
        return {}
    values: dict[str, Any] = {}
    for raw in text.splitlines():
        match = _ENV_LINE.match(raw.strip())
        if match is None:
            continue
        key, value = match.groups()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
            value = value[1:-1]
        values[key] = value
    return values


def _load_ini_file(path: Path) -> dict[str, Any]:
    """All sections merged; section names are not part of the key."""
    text = _read_text(path)
    if text is None:
        return {}
    parser = configparser.ConfigParser()
    try:
        parser.read_string(text, source=str(path))
    except configparser.Error:
        return {}
    return {key: value for section in parser.sections() for key, value in parser.items(section)}


def _load_json_file(path: Path) -> dict[str, Any]:
    text = _read_text(path)
    try:
        return _flatten_mapping(json.loads(text)) if text is not None else {}
    except json.JSONDecodeError:
        return {}


def _load_toml_file(path: Path) -> dict[str, Any]:
    text = _read_text(path)
    try:
        return _flatten_mapping(tomllib.loads(text)) if text is not None else {}
    except tomllib.TOMLDecodeError:
        return {}


def _flatten_mapping(obj: Any, prefix: str = "") -> dict[str, Any]:
    """Nested tables become joined keys: {'log': {'level': 'debug'}} -> {'log_level': 'debug'}."""
    if not isinstance(obj, Mapping):
        return {}
    flat: dict[str, Any] = {}
    for key, value in obj.items():
        name = f"{prefix}_{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(_flatten_mapping(value, name))
        else:
            flat[name] = value
    return flat


# Lowest precedence first.
_CONFIG_FILES: tuple[tuple[str, Callable[[Path], dict[str, Any]]], ...] = (
    (".env", _load_env_file),
    ("config.ini", _load_ini_file),
    ("config.json", _load_json_file),
    ("config.toml", _load_toml_file),
)


# ---------- normalization & coercion ----------

_BOOL_TRUE = {"1", "true", "yes", "y", "on"}
_BOOL_FALSE = {"0", "false", "no", "n", "off"}


def _as_bool(key: str, val: Any) -> bool:
    if isinstance(val, bool):
        return val
    s = str(val).strip().lower()
    if s in _BOOL_TRUE:
        return True
    if s in _BOOL_FALSE:
        return False
    raise ValueError(f"{key}: expected boolean, got {val!r}")


def _as_opt_str(val: Any) -> str | None:
    return None if val is None or str(val).strip().lower() in {"", "none"} else str(val)


def _as_name(key: str, val: Any) -> str:
    name = _as_opt_str(val)
    if name is None or not name.strip():
        raise ValueError(f"{key} must not be empty")
    return name.strip()


def _as_log_level(val: Any) -> str | None:
    lv = _as_opt_str(val)
    if lv is None:
        return None
    up = lv.upper()
    allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    if up not in allowed:
        raise ValueError(
            f"LOG_LEVEL must be one of {sorted(allowed)}, got {lv!r}")
    return up


def _as_opt_path(val: Any) -> Path | None:
    v = _as_opt_str(val)
    if v is None:
        return None
    # expand both ~ and env vars
    return Path(os.path.expandvars(os.path.expanduser(v))).resolve()


# ---------- merge & load ----------

def _normalize_keys(d: Mapping[str, Any]) -> dict[str, Any]:
    """Upper-case keys; files may spell them with or without the NETPROMPT_ prefix."""
    out: dict[str, Any] = {}
    for k, v in d.items():
        key = str(k).upper()
        out[key[len(ENV_PREFIX):] if key.startswith(ENV_PREFIX) else key] = v
    return out


def _env_overrides(environ: Mapping[str, str]) -> dict[str, str]:
    """Take NETPROMPT_* variables with the prefix removed."""
    return {
        k[len(ENV_PREFIX):]: v
        for k, v in environ.items()
        if k.startswith(ENV_PREFIX) and re.fullmatch(r"[A-Z0-9_]+", k)
    }


def _merge_sources(base: Path | None = None, environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    merged: dict[str, Any] = dict(DEFAULTS)

    directory = base or Path.cwd()
    for name, loader in _CONFIG_FILES:
        merged.update(_normalize_keys(loader(directory / name)))

    # Environment variables override all
    merged.update(_env_overrides(os.environ if environ is None else environ))
    return merged


# ---------- validation ----------

def _validate_and_build(config: dict[str, Any]) -> AppConfig:
    prompt = config.get("PROMPT", DEFAULTS["PROMPT"])
    prompt = DEFAULTS["PROMPT"] if prompt is None else str(prompt)

    root_command_set = _as_name(
        "ROOT_COMMAND_SET", config.get("ROOT_COMMAND_SET", DEFAULTS["ROOT_COMMAND_SET"]))
    plugin_package = _as_name(
        "PLUGIN_PACKAGE", config.get("PLUGIN_PACKAGE", DEFAULTS["PLUGIN_PACKAGE"]))
    log_level = _as_log_level(config.get("LOG_LEVEL", DEFAULTS["LOG_LEVEL"]))
    log_file_path = _as_opt_path(config.get("LOG_FILE_PATH", DEFAULTS["LOG_FILE_PATH"]))
    history_file_path = _as_opt_path(
        config.get("HISTORY_FILE_PATH", DEFAULTS["HISTORY_FILE_PATH"]))
    enable_completion = _as_bool("ENABLE_COMPLETION", config.get(
        "ENABLE_COMPLETION", DEFAULTS["ENABLE_COMPLETION"]))

    # Carry through extra keys
    recognized = set(DEFAULTS.keys())
    extra = {k: v for k, v in config.items() if k not in recognized}

    return AppConfig(
        prompt=prompt,
        root_command_set=root_command_set,
        plugin_package=plugin_package,
        log_level=log_level,
        log_file_path=log_file_path,
        history_file_path=history_file_path,
        enable_completion=enable_completion,
        extra=extra,
    )


# ---------- public API ----------

def load_config(base: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None) -> AppConfig:
    """
    Load, merge, normalize, and validate configuration.

    `base` is the directory searched for config files (default: CWD) and
    `environ` the environment mapping (default: os.environ).
    No filesystem side-effects.
    """
    raw = _merge_sources(base, environ)
    return _validate_and_build(raw)
