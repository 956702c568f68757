# tests/modpacker/core/test_paths.py
from __future__ import annotations
from pathlib import PurePosixPath

import pytest

from modpacker.core.errors import PrefixMismatchError, UnsafePathError
from modpacker.core.paths import normalizeSeparators, relativize, resolveInside


def test_relativize_strips_base_prefix():
    assert relativize("c:a/b/c/d", "c:a/b") == "c/d"


def test_relativize_accepts_path_objects(tmp_path):
    target = tmp_path / "img" / "icons" / "a.png"
    assert relativize(target, tmp_path) == "img/icons/a.png"


def test_relativize_mismatch_names_both_inputs():
    with pytest.raises(PrefixMismatchError) as info:
        relativize("c:a/b/c/d", "c:a/e")
    assert info.value.path == "c:a/b/c/d"
    assert info.value.base == "c:a/e"
    assert "c:a/b/c/d" in str(info.value)
    assert "c:a/e" in str(info.value)


def test_relativize_is_component_wise():
    with pytest.raises(PrefixMismatchError):
        relativize("mods/abc/file.js", "mods/ab")


def test_relativize_normalizes_backslashes():
    assert relativize("mods\\demo\\img\\a.png", "mods\\demo") == "img/a.png"


@pytest.mark.parametrize(
    "base, rel",
    [
        ("root", "a.png"),
        ("root/mods", "x/y/z.js"),
        ("/abs/base", "deep/er/file.twee"),
    ],
)
def test_relativize_round_trip(base, rel):
    full = f"{base}/{rel}"
    out = relativize(full, base)
    assert PurePosixPath(base) / out == PurePosixPath(full)


def test_normalize_separators():
    assert normalizeSeparators("a\\b/c\\d") == "a/b/c/d"
    assert normalizeSeparators("plain") == "plain"


# -------- resolveInside --------

def test_resolve_inside_plain_name(tmp_path):
    assert resolveInside(tmp_path, "Demo.mod.zip") == tmp_path / "Demo.mod.zip"


@pytest.mark.parametrize(
    "name, reason",
    [
        ("../escaped.mod.zip", "separator"),
        ("a/b.mod.zip", "separator"),
        ("a\\b.mod.zip", "separator"),
        ("a\x00b.mod.zip", "NUL"),
        ("..", "not a file name"),
        ("", "not a file name"),
    ],
)
def test_resolve_inside_rejects_escaping_names(tmp_path, name, reason):
    with pytest.raises(UnsafePathError) as exc:
        resolveInside(tmp_path, name)
    assert reason in exc.value.reason
    assert exc.value.base == tmp_path


def test_resolve_inside_rejects_symlink_leaving_root(tmp_path):
    root = tmp_path / "results"
    root.mkdir()
    outside = tmp_path / "elsewhere.zip"
    try:
        (root / "Demo.mod.zip").symlink_to(outside)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not available")

    with pytest.raises(UnsafePathError):
        resolveInside(root, "Demo.mod.zip")
