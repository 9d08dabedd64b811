"""
mkrs package

This package implements `cargo-mkrs`, a CLI that scaffolds Rust module files
and wires them into the nearest enclosing `mod.rs` / `lib.rs` / `main.rs`.

Key responsibilities are split across modules:
- `paths.py`: resolve a `foo::bar` / `foo/bar` target into a path and module name
- `modules.py`: locate the parent declaration file, insert declarations,
  create the module file and populate new root files
- `header.py`: render the boilerplate header written into new files
- `config.py`: load the YAML configuration that supplies the header
- `cli.py`: CLI entrypoint and orchestration (config -> pipeline -> exit code)
"""

from __future__ import annotations

__all__ = ["MkrsError", "__version__"]

__version__ = "0.1.0"


class MkrsError(RuntimeError):
    """Base class for every error `cargo-mkrs` reports to the user."""
