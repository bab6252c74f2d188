"""
config.py

Responsibility: load the optional `.releaserrc` settings file into a typed, immutable config.

The file may be written either as YAML:

    changelog_file: docs/CHANGELOG.md
    dryrun: true

or as a shell-style rc file (the historical format, meant to be `source`d):

    export changelog_file="docs/CHANGELOG.md"
    RELEASER_LOG_LEVEL=debug

The config is built once at process start and passed explicitly to whatever needs it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from releaser.errors import ConfigError

DEFAULT_CONFIG_FILE = ".releaserrc"
DEFAULT_CHANGELOG = "./CHANGELOG.md"
LOG_LEVELS = ("debug", "info")
LOG_LEVEL_ENV = "RELEASER_LOG_LEVEL"


@dataclass(frozen=True)
class ReleaserConfig:
    """Settings shared by every release step."""

    changelog_file: Path = Path(DEFAULT_CHANGELOG)
    log_level: str = "info"
    dryrun: bool = False

    def with_overrides(
        self,
        *,
        changelog_file: str | Path | None = None,
        log_level: str | None = None,
        dryrun: bool | None = None,
    ) -> "ReleaserConfig":
        cfg = self
        if changelog_file is not None:
            cfg = replace(cfg, changelog_file=Path(changelog_file))
        if log_level is not None:
            cfg = replace(cfg, log_level=_parse_log_level(log_level))
        if dryrun is not None:
            cfg = replace(cfg, dryrun=bool(dryrun))
        return cfg


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _best_effort_rc_parse(text: str) -> dict[str, Any]:
    """
    Very small shell rc parser:
    - Reads lines like `key=value` or `export key=value`
    - Ignores blank lines, `#` comments and anything that is not an assignment
    """
    out: dict[str, Any] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export ") :].strip()
        if "=" not in line:
            continue
        k, v = line.split("=", 1)
        k = k.strip()
        if not k or not k.replace("_", "").isalnum():
            continue
        v = v.strip()
        if not (v.startswith('"') or v.startswith("'")) and " #" in v:
            v = v.split(" #", 1)[0].rstrip()
        out[k] = _strip_quotes(v)
    return out


def _parse_settings_text(text: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError:
        data = None
    if isinstance(data, dict):
        return data
    return _best_effort_rc_parse(text)


def _parse_log_level(value: Any) -> str:
    level = str(value).strip().lower()
    if level not in LOG_LEVELS:
        raise ConfigError(f"Unsupported log level '{value}', expected one of: {', '.join(LOG_LEVELS)}")
    return level


def _parse_dryrun(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


def config_from_mapping(data: Mapping[str, Any], env: Mapping[str, str] | None = None) -> ReleaserConfig:
    """
    Build a ReleaserConfig from parsed settings.

    `RELEASER_LOG_LEVEL` in `env` takes precedence over the settings file.
    """
    env = os.environ if env is None else env

    changelog_raw = data.get("changelog_file")
    changelog_file = Path(str(changelog_raw).strip()) if changelog_raw else Path(DEFAULT_CHANGELOG)

    level_raw = env.get(LOG_LEVEL_ENV) or data.get(LOG_LEVEL_ENV) or data.get("log_level") or "info"
    log_level = _parse_log_level(level_raw)

    dryrun = _parse_dryrun(data.get("dryrun", False))

    return ReleaserConfig(changelog_file=changelog_file, log_level=log_level, dryrun=dryrun)


def load_config(
    config_path: str | Path | None = None,
    *,
    env: Mapping[str, str] | None = None,
) -> ReleaserConfig:
    """
    Load settings from `config_path` (default `./.releaserrc`).

    A missing default file is not an error; a missing explicitly requested file is.
    """
    explicit = config_path is not None
    path = Path(config_path) if explicit else Path(DEFAULT_CONFIG_FILE)
    if not path.exists():
        if explicit:
            raise ConfigError(f"Config file does not exist: {path}")
        return config_from_mapping({}, env)
    data = _parse_settings_text(path.read_text(encoding="utf-8"))
    return config_from_mapping(data, env)
