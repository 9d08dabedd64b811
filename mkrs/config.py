"""
config.py

Responsibility: Locate and parse the YAML configuration into a typed model.

Lookup order (first hit wins):
1) an explicit path (`--config`)
2) the `MKRS_CONFIG` environment variable
3) `.mkrs.yaml` in the working directory or any of its ancestors
4) `$XDG_CONFIG_HOME/cargo-mkrs/config.yaml` (default `~/.config`)
5) built-in defaults

An explicitly named file that does not exist is an error; the discovered
locations are simply skipped when absent.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from mkrs import MkrsError

logger = logging.getLogger("mkrs.config")

ENV_VAR = "MKRS_CONFIG"
LOCAL_FILENAME = ".mkrs.yaml"
USER_CONFIG = Path("cargo-mkrs") / "config.yaml"


class ConfigError(MkrsError):
    pass


@dataclass(frozen=True)
class Config:
    """Settings applied to every generated module."""

    header: str = ""
    public: bool = False
    source: Path | None = None


def _user_config_dir(env: Mapping[str, str]) -> Path:
    xdg = env.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg)
    return Path.home() / ".config"


def find_config(
    explicit: str | Path | None = None,
    *,
    cwd: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Path | None:
    env = os.environ if env is None else env

    named = explicit or env.get(ENV_VAR)
    if named:
        path = Path(named)
        if not path.is_file():
            raise ConfigError(f"Config file does not exist: {path}")
        return path

    start = (Path(cwd) if cwd is not None else Path.cwd()).resolve()
    for directory in (start, *start.parents):
        candidate = directory / LOCAL_FILENAME
        if candidate.is_file():
            return candidate

    candidate = _user_config_dir(env) / USER_CONFIG
    if candidate.is_file():
        return candidate
    return None


def parse_config(data: Any, source: Path | None = None) -> Config:
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"{source or 'config'}: top level must be a mapping/object.")

    header = data.get("header")
    if header is None:
        header = ""
    if not isinstance(header, str):
        raise ConfigError(f"{source or 'config'}: `header` must be a string.")

    public = data.get("public", False)
    if public is None:
        public = False
    if not isinstance(public, bool):
        raise ConfigError(f"{source or 'config'}: `public` must be true or false.")

    return Config(header=header, public=public, source=source)


def load_config(
    explicit: str | Path | None = None,
    *,
    cwd: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Config:
    """
    Load the effective configuration, falling back to defaults.
    """
    path = find_config(explicit, cwd=cwd, env=env)
    if path is None:
        logger.debug("No config file found, using defaults")
        return Config()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as e:
        raise ConfigError(f"{path}: not valid UTF-8 text: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"{path}: invalid YAML: {e}") from e

    logger.debug("Loaded config from %s", path)
    return parse_config(data, source=path)
