# tests/modpacker/packs/test_builder.py
from __future__ import annotations
import stat
import zipfile

import pytest

from modpacker.core.errors import PackIOError, UnsafePathError
from modpacker.mods.manifest import BootManifest
from modpacker.packs.builder import (
    ArchiveOptions, buildPackage, pruneTree, renderArchiveName, resolveArchivePath,
    walkTree, writeArchive,
)


def populate(base, rels):
    for rel in rels:
        target = base / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(rel, encoding="utf-8")


def surviving_files(root):
    return sorted(
        path.relative_to(root).as_posix()
        for path in root.rglob("*")
        if path.is_file()
    )


# -------- walkTree --------

def test_walk_is_sorted_depth_first(tmp_path):
    populate(tmp_path, ["b.txt", "a/z.txt", "a/b/c.txt", "c/x.txt"])
    names = [(path.relative_to(tmp_path).as_posix(), isDir) for path, isDir in walkTree(tmp_path)]
    assert names == [
        ("a", True),
        ("a/b", True),
        ("a/b/c.txt", False),
        ("a/z.txt", False),
        ("b.txt", False),
        ("c", True),
        ("c/x.txt", False),
    ]


# -------- pruneTree --------

def test_prune_keeps_only_members(tmp_path):
    populate(tmp_path, ["boot.json", "a.png", "notes.txt", "img/b.png", "img/c.psd"])
    manifest = BootManifest(name="Demo", imgFileList=["a.png", "img/b.png"])

    report = pruneTree(tmp_path, manifest.isMember)

    assert surviving_files(tmp_path) == ["a.png", "boot.json", "img/b.png"]
    assert sorted(report.deletedFiles) == ["img/c.psd", "notes.txt"]
    assert report.removedDirs == []


def test_prune_removes_transitively_empty_directories(tmp_path):
    populate(tmp_path, ["boot.json", "src/deep/er/index.ts", "keep/a.js", "keep/sub/tmp.log"])
    (tmp_path / "empty" / "nested" / "dirs").mkdir(parents=True)
    manifest = BootManifest(name="Demo", scriptFileList=["keep/a.js"])

    report = pruneTree(tmp_path, manifest.isMember)

    assert surviving_files(tmp_path) == ["boot.json", "keep/a.js"]
    assert not (tmp_path / "src").exists()
    assert not (tmp_path / "empty").exists()
    assert not (tmp_path / "keep" / "sub").exists()
    assert sorted(report.removedDirs) == ["empty", "keep/sub", "src"]


def test_prune_every_survivor_is_member(tmp_path):
    rels = ["boot.json", "a.png", "b.js", "c/d.css", "c/e.txt", "f/g/h.twee", "f/g/i.bin"]
    populate(tmp_path, rels)
    manifest = BootManifest(name="Demo", imgFileList=["a.png"], styleFileList=["c/d.css"], tweeFileList=["f/g/h.twee"])

    pruneTree(tmp_path, manifest.isMember)

    survivors = surviving_files(tmp_path)
    assert all(manifest.isMember(rel) for rel in survivors)
    for rel in rels:
        if not manifest.isMember(rel):
            assert not (tmp_path / rel).exists()


def test_prune_wraps_delete_failures(tmp_path, monkeypatch):
    populate(tmp_path, ["boot.json", "junk.txt"])

    def refuse(self, *args, **kwargs):
        raise PermissionError("read-only")

    monkeypatch.setattr("pathlib.Path.unlink", refuse)
    with pytest.raises(PackIOError):
        pruneTree(tmp_path, BootManifest(name="Demo").isMember)


# -------- writeArchive --------

def test_archive_contains_tree_with_portable_modes(tmp_path):
    work = tmp_path / "work"
    populate(work, ["boot.json", "img/a.png"])
    out = tmp_path / "out.zip"

    result = writeArchive(work, out)

    assert result.fileCount == 2
    assert result.dirCount == 1
    with zipfile.ZipFile(out) as archive:
        assert archive.namelist() == ["boot.json", "img/", "img/a.png"]
        assert archive.read("img/a.png") == b"img/a.png"
        file_info = archive.getinfo("img/a.png")
        dir_info = archive.getinfo("img/")
        assert file_info.compress_type == zipfile.ZIP_DEFLATED
        assert stat.S_IMODE(file_info.external_attr >> 16) == 0o644
        assert stat.S_IMODE(dir_info.external_attr >> 16) == 0o755
        assert dir_info.is_dir()


def test_archive_stored_compression(tmp_path):
    work = tmp_path / "work"
    populate(work, ["boot.json"])
    out = tmp_path / "out.zip"

    writeArchive(work, out, ArchiveOptions(compression="stored"))

    with zipfile.ZipFile(out) as archive:
        assert archive.getinfo("boot.json").compress_type == zipfile.ZIP_STORED


def test_archive_failure_removes_partial_file(tmp_path, monkeypatch):
    work = tmp_path / "work"
    populate(work, ["boot.json", "a.png"])
    out = tmp_path / "out.zip"

    def broken_copy(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr("modpacker.packs.builder.shutil.copyfileobj", broken_copy)
    with pytest.raises(PackIOError):
        writeArchive(work, out)
    assert not out.exists()


def test_archive_options_reject_unknown_method():
    with pytest.raises(ValueError):
        ArchiveOptions(compression="bzip2").method()


# -------- buildPackage / names --------

def test_build_package_prunes_then_archives(tmp_path):
    work = tmp_path / "Demo"
    populate(work, ["boot.json", "a.png", "notes.txt"])
    manifest = BootManifest(name="Demo", imgFileList=["a.png"])
    out = tmp_path / "Demo.mod.zip"

    result = buildPackage(work, manifest, out)

    assert result.pruned.deletedFiles == ["notes.txt"]
    assert not (work / "notes.txt").exists()
    with zipfile.ZipFile(out) as archive:
        assert sorted(archive.namelist()) == ["a.png", "boot.json"]


@pytest.mark.parametrize(
    "template, expected",
    [
        ("{name}.mod.zip", "Demo.mod.zip"),
        ("{name}-{version}.zip", "Demo-2.0.1.zip"),
        ("{name}_v{ver}.mod.zip", "Demo_v2.0.1.mod.zip"),
        ("static.zip", "static.zip"),
    ],
)
def test_render_archive_name(template, expected):
    manifest = BootManifest(name="Demo", version="2.0.1")
    assert renderArchiveName(template, manifest) == expected


def test_archive_rejected_entry_name_removes_partial_file(tmp_path, monkeypatch):
    work = tmp_path / "work"
    populate(work, ["boot.json", "a.png"])
    out = tmp_path / "out.zip"

    def unencodable(*args, **kwargs):
        raise UnicodeEncodeError("utf-8", "bad\udcff.png", 3, 4, "surrogates not allowed")

    monkeypatch.setattr("modpacker.packs.builder.shutil.copyfileobj", unencodable)
    with pytest.raises(PackIOError) as exc:
        writeArchive(work, out)
    assert isinstance(exc.value.cause, ValueError)
    assert not out.exists()


def test_archive_target_with_nul_byte_is_pack_error(tmp_path):
    work = tmp_path / "work"
    populate(work, ["boot.json"])

    with pytest.raises(PackIOError):
        writeArchive(work, tmp_path / "a\x00b.zip")


def test_resolve_archive_path_inside_results(tmp_path):
    manifest = BootManifest(name="Demo", version="1.2.3")
    assert resolveArchivePath(tmp_path, "{name}-{ver}.zip", manifest) == tmp_path / "Demo-1.2.3.zip"


@pytest.mark.parametrize("name", ["../escaped", "a/b", "a\x00b"])
def test_resolve_archive_path_rejects_unsafe_names(tmp_path, name):
    with pytest.raises(UnsafePathError):
        resolveArchivePath(tmp_path / "results", "{name}.mod.zip", BootManifest(name=name))
