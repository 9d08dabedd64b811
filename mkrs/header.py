"""
header.py

Responsibility: Produce the boilerplate header written at the top of new files.

Rules:
- A header without Jinja2 markers is returned verbatim.
- Otherwise it is rendered with Jinja2, with `module`, `path` and `public`
  available to the template.

This module intentionally does NOT know about config files or the module tree.
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, StrictUndefined

from mkrs import MkrsError

_MARKERS = ("{{", "{%", "{#")


class HeaderError(MkrsError):
    pass


def has_template_markers(text: str) -> bool:
    return any(marker in text for marker in _MARKERS)


def _display_path(path: Path, base: Path | None) -> str:
    if base is not None:
        try:
            return path.relative_to(base.resolve()).as_posix()
        except ValueError:
            pass
    return path.as_posix()


def render_header(
    template: str,
    *,
    module: str,
    path: Path,
    base: Path | None = None,
    public: bool = False,
) -> str:
    """
    Render `template` for the module being created.

    `path` is shown relative to `base` when it lies beneath it.
    """
    if not has_template_markers(template):
        return template

    env = Environment(
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )
    context = {
        "module": module,
        "path": _display_path(path, base),
        "public": public,
    }
    try:
        return env.from_string(template).render(**context)
    except Exception as e:  # noqa: BLE001 - surface as HeaderError
        raise HeaderError(f"Failed rendering header template: {e}") from e
