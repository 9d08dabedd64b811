from __future__ import annotations

from pathlib import Path

import pytest

from mkrs.paths import InvalidTargetError, resolve_target, root_file_names


def test_rust_path_syntax(crate: Path) -> None:
    resolved = resolve_target("foo::bar::baz", crate)
    assert resolved.name == "baz"
    assert resolved.path == crate.resolve() / "foo" / "bar" / "baz"
    assert resolved.source_path == crate.resolve() / "foo" / "bar" / "baz.rs"
    assert resolved.path.is_absolute()


def test_slash_syntax_matches_rust_syntax(crate: Path) -> None:
    assert resolve_target("foo/bar", crate) == resolve_target("foo::bar", crate)


def test_creates_intermediate_directories(crate: Path) -> None:
    resolve_target("a::b::c", crate)
    assert (crate / "a" / "b").is_dir()
    assert not (crate / "a" / "b" / "c").exists()


def test_extension_is_stripped(crate: Path) -> None:
    resolved = resolve_target("foo/bar.rs", crate)
    assert resolved.name == "bar"
    assert resolved.source_path.name == "bar.rs"


def test_root_names_flagged(crate: Path) -> None:
    assert resolve_target("foo::mod", crate).is_root
    assert resolve_target("lib", crate).is_root
    assert not resolve_target("module", crate).is_root


@pytest.mark.parametrize("target", ["", "   ", "foo/", "foo::", "foo/..", ".", "foo::.", "foo/.", "foo::.."])
def test_invalid_targets(crate: Path, target: str) -> None:
    with pytest.raises(InvalidTargetError):
        resolve_target(target, crate)


def test_file_in_the_way_is_an_os_error(crate: Path) -> None:
    (crate / "foo").write_text("not a directory", encoding="utf-8")
    with pytest.raises(OSError):
        resolve_target("foo::bar::baz", crate)


def test_root_file_priority() -> None:
    assert root_file_names() == ["mod.rs", "lib.rs", "main.rs"]


def test_dot_target_stays_inside_working_directory(crate: Path) -> None:
    with pytest.raises(InvalidTargetError):
        resolve_target(".", crate)
    assert list(crate.parent.glob("*.rs")) == []
