"""
modules.py

Responsibility: Create a Rust module file and wire it into the module tree.

Flow for one target (see `make_module`):
1) Resolve the target path and module name (`paths.py`)
2) Find the nearest parent declaration file (`find_parent`)
3) Append `mod name;` to it unless already declared (`declare_module`)
4) Create the module file with the header (`create_module_file`)
5) If the new file is itself `mod.rs` / `lib.rs` / `main.rs`, declare its
   sibling modules in it (`populate_root_module`)

Filesystem errors are not caught here; they propagate as `OSError`.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from mkrs import MkrsError
from mkrs.header import render_header
from mkrs.paths import (
    FOLDER_ROOT,
    ROOT_NAMES,
    SOURCE_SUFFIX,
    UNNESTED_ROOTS,
    resolve_target,
    root_file_names,
)

logger = logging.getLogger("mkrs.modules")


class InvalidParentPathError(MkrsError):
    pass


class DeclarationError(MkrsError):
    pass


@dataclass(frozen=True)
class ModuleResult:
    path: Path
    name: str
    parent: Path | None = None
    declared: bool = False
    populated: list[str] = field(default_factory=list)


def declaration_line(name: str, public: bool) -> str:
    return f"{'pub ' if public else ''}mod {name};"


def _declaration_pattern(name: str) -> re.Pattern[str]:
    # Matches `mod name;` with optional attributes and any `pub(...)` visibility.
    return re.compile(
        r"^[ \t]*(?:#\[[^\]]*\][ \t]*)*(?:pub(?:[ \t]*\([^)]*\))?[ \t]+)?mod[ \t]+"
        + re.escape(name)
        + r"[ \t]*;",
        re.MULTILINE,
    )


def is_declared(content: str, name: str) -> bool:
    return _declaration_pattern(name).search(content) is not None


def _first_root_file(directory: Path) -> Path | None:
    for filename in root_file_names():
        candidate = directory / filename
        if candidate.is_file():
            return candidate
    return None


def find_parent(target: Path) -> Path | None:
    """
    Return the declaration file that should list `target`, or None.

    `lib` and `main` are tree roots and have no parent. A `mod` file stands for
    its whole directory, so it is declared from the grandparent directory.
    Every other module is declared from its own directory.
    """
    name = target.stem
    if name in UNNESTED_ROOTS:
        return None

    directory = target.parent
    if name == FOLDER_ROOT:
        if directory.parent == directory:
            return None
        directory = directory.parent

    return _first_root_file(directory)


def declared_name(target: Path) -> str:
    """Name under which `target` appears in its parent; a `mod` file is its directory."""
    if target.stem == FOLDER_ROOT:
        return target.parent.name
    return target.stem


def declare_module(module: str, parent: Path, public: bool) -> bool:
    """
    Append a declaration of `module` to `parent` unless one already exists.

    Returns True when a line was written.
    """
    try:
        content = parent.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise DeclarationError(f"{parent}: not valid UTF-8 text: {e}") from e
    if is_declared(content, module):
        logger.info("%s already declares %r", parent, module)
        return False

    with parent.open("a", encoding="utf-8") as f:
        if content and not content.endswith("\n"):
            f.write("\n")
        f.write(declaration_line(module, public) + "\n")

    logger.info("Declared %r in %s", module, parent)
    return True


def create_module_file(path: Path, header: str) -> TextIO:
    """
    Create (or truncate) `path`, write `header` and return the open handle.

    The caller owns the returned handle and must close it.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    f = path.open("w", encoding="utf-8")
    try:
        f.write(header)
    except BaseException:
        f.close()
        raise
    logger.info("Created %s", path)
    return f


def _child_module_name(entry: Path) -> str | None:
    if entry.is_file() and entry.suffix == SOURCE_SUFFIX:
        name = entry.stem
    elif entry.is_dir() and (entry / (FOLDER_ROOT + SOURCE_SUFFIX)).is_file():
        name = entry.name
    else:
        return None
    if name in ROOT_NAMES:
        return None
    return name


def populate_root_module(f: TextIO, directory: Path, public: bool) -> list[str]:
    """
    Declare every sibling module of a new root file.

    Only the immediate children of `directory` are considered, in name order.
    """
    if not directory.is_dir():
        raise InvalidParentPathError(f"invalid parent path: {directory}")

    names: list[str] = []
    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        name = _child_module_name(entry)
        if name is None:
            continue
        f.write(declaration_line(name, public) + "\n")
        names.append(name)

    logger.debug("Populated %d declarations from %s", len(names), directory)
    return names


def make_module(
    target: str,
    *,
    cwd: str | Path | None = None,
    header: str = "",
    public: bool = False,
) -> ModuleResult:
    """
    Run the full pipeline for one target and describe what was done.
    """
    resolved = resolve_target(target, cwd)
    base = Path(cwd) if cwd is not None else Path.cwd()
    source = resolved.source_path
    text = render_header(header, module=resolved.name, path=source, base=base, public=public)

    parent = find_parent(resolved.path)
    declared = False
    if parent is not None:
        # A folder root is declared under its directory name, not as `mod mod;`.
        declared = declare_module(declared_name(resolved.path), parent, public)
    else:
        logger.info("No parent declaration file for %r", resolved.name)

    populated: list[str] = []
    with create_module_file(source, text) as f:
        if resolved.is_root:
            populated = populate_root_module(f, source.parent, public)

    return ModuleResult(
        path=source,
        name=resolved.name,
        parent=parent,
        declared=declared,
        populated=populated,
    )
