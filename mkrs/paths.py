"""
paths.py

Responsibility: Turn a user supplied module target into a filesystem location.

Targets may use Rust path syntax (`foo::bar::baz`) or plain path separators
(`foo/bar/baz`). Any extension on the last component is dropped; the caller
attaches `.rs` through `ResolvedTarget.source_path`.

This module also owns the closed set of canonical root file names, in the
priority order used when looking for a parent declaration file.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from mkrs import MkrsError

logger = logging.getLogger("mkrs.paths")

SOURCE_SUFFIX = ".rs"

# Highest priority first.
ROOT_NAMES: tuple[str, ...] = ("mod", "lib", "main")
FOLDER_ROOT = "mod"
UNNESTED_ROOTS: frozenset[str] = frozenset({"lib", "main"})

_SEPARATORS = ("/", os.sep)


class InvalidTargetError(MkrsError):
    pass


@dataclass(frozen=True)
class ResolvedTarget:
    """A module target resolved against a working directory."""

    path: Path
    name: str

    @property
    def source_path(self) -> Path:
        return self.path.with_name(self.name + SOURCE_SUFFIX)

    @property
    def is_root(self) -> bool:
        return self.name in ROOT_NAMES


def root_file_names() -> list[str]:
    return [name + SOURCE_SUFFIX for name in ROOT_NAMES]


def _normalize(target: str) -> str:
    normalized = target.strip().replace("::", "/")
    if not normalized:
        raise InvalidTargetError("invalid target name: target is empty")
    if normalized.endswith(_SEPARATORS):
        raise InvalidTargetError(f"invalid target name: {target!r} has no final component")
    last = normalized.replace(os.sep, "/").rsplit("/", 1)[-1]
    if last in (".", ".."):
        raise InvalidTargetError(f"invalid target name: {target!r} does not name a module")
    return normalized


def resolve_target(target: str, cwd: str | Path | None = None) -> ResolvedTarget:
    """
    Resolve `target` against `cwd` (default: the process working directory).

    The directory that will hold the module file is created if missing, so the
    returned path always has an existing parent.
    """
    base = Path(cwd) if cwd is not None else Path.cwd()
    joined = base / _normalize(target)

    name = Path(joined.name).stem
    if joined.name in ("", ".", "..") or not name:
        raise InvalidTargetError(f"invalid target name: {target!r}")

    directory = joined.parent.resolve()
    directory.mkdir(parents=True, exist_ok=True)

    resolved = ResolvedTarget(path=directory / name, name=name)
    logger.debug("Resolved %r to %s (module %r)", target, resolved.path, resolved.name)
    return resolved
