"""Tests for the workspace tree builder."""

import json
import os
import sys
from pathlib import Path

import pytest

from miku.errors import IoError
from miku.workspace import tree as tree_module
from miku.workspace.models import WorkspaceFile
from miku.workspace.tree import build_tree


def _names(nodes: list[WorkspaceFile]) -> list[str]:
    return [n.name for n in nodes]


def _walk(nodes: list[WorkspaceFile]):
    for node in nodes:
        yield node
        if node.children:
            yield from _walk(node.children)


class TestBuildTree:
    @pytest.mark.asyncio
    async def test_empty_root(self, workspace: Path):
        assert await build_tree(workspace, is_root=True) == []

    @pytest.mark.asyncio
    async def test_lists_markdown_only(self, workspace: Path):
        (workspace / "a.md").write_text("# a")
        (workspace / "b.txt").write_text("b")
        (workspace / "c.markdown").write_text("c")
        (workspace / "Makefile").write_text("all:")

        files = await build_tree(workspace)
        assert _names(files) == ["a.md", "c.markdown"]
        assert all(not f.is_directory and f.children is None for f in files)

    @pytest.mark.asyncio
    async def test_paths_are_absolute(self, workspace: Path):
        (workspace / "docs").mkdir()
        (workspace / "docs" / "guide.md").write_text("")

        files = await build_tree(workspace)
        docs = files[0]
        assert docs.path == str(workspace / "docs")
        assert docs.children[0].path == str(workspace / "docs" / "guide.md")
        assert Path(docs.children[0].path).is_absolute()

    @pytest.mark.asyncio
    async def test_directories_before_files_case_insensitive(self, workspace: Path):
        for name in ("B.md", "a.md", "c.MD"):
            (workspace / name).write_text("")
        for name in ("Zeta", "alpha", "Beta"):
            (workspace / name).mkdir()
            (workspace / name / "note.md").write_text("")

        files = await build_tree(workspace)
        assert _names(files) == ["alpha", "Beta", "Zeta", "a.md", "B.md", "c.MD"]

    @pytest.mark.asyncio
    async def test_nested_children_sorted(self, workspace: Path):
        sub = workspace / "sub"
        sub.mkdir()
        (sub / "z.md").write_text("")
        (sub / "Y.md").write_text("")
        (sub / "inner").mkdir()
        (sub / "inner" / "x.md").write_text("")

        files = await build_tree(workspace)
        assert _names(files[0].children) == ["inner", "Y.md", "z.md"]

    @pytest.mark.asyncio
    async def test_prunes_empty_directories(self, workspace: Path):
        (workspace / "empty").mkdir()
        (workspace / "no_markdown").mkdir()
        (workspace / "no_markdown" / "image.png").write_bytes(b"\x89PNG")
        (workspace / "deep" / "deeper" / "deepest").mkdir(parents=True)
        (workspace / "kept" / "nested").mkdir(parents=True)
        (workspace / "kept" / "nested" / "note.md").write_text("")
        (workspace / "kept" / "empty_sibling").mkdir()

        files = await build_tree(workspace)
        assert _names(files) == ["kept"]
        assert _names(files[0].children) == ["nested"]
        for node in _walk(files):
            if node.is_directory:
                assert node.children

    @pytest.mark.asyncio
    async def test_skips_hidden_and_excluded(self, workspace: Path):
        for name in (".git", "node_modules", "target", ".obsidian"):
            (workspace / name).mkdir()
            (workspace / name / "readme.md").write_text("")
        (workspace / ".hidden.md").write_text("")
        (workspace / "visible.md").write_text("")

        files = await build_tree(workspace)
        assert _names(files) == ["visible.md"]

    @pytest.mark.asyncio
    async def test_excluded_directories_not_walked(self, workspace: Path, monkeypatch):
        (workspace / "node_modules" / "pkg").mkdir(parents=True)
        (workspace / "docs").mkdir()
        (workspace / "docs" / "a.md").write_text("")

        scanned: list[str] = []
        original = tree_module._scan_directory

        def spy(path: str):
            scanned.append(path)
            return original(path)

        monkeypatch.setattr(tree_module, "_scan_directory", spy)
        await build_tree(workspace)
        assert not any("node_modules" in p for p in scanned)

    @pytest.mark.asyncio
    async def test_missing_root_raises(self, tmp_path: Path):
        with pytest.raises(IoError):
            await build_tree(tmp_path / "missing", is_root=True)

    @pytest.mark.asyncio
    async def test_file_root_raises(self, workspace: Path):
        (workspace / "note.md").write_text("")
        with pytest.raises(IoError):
            await build_tree(workspace / "note.md", is_root=True)

    @pytest.mark.asyncio
    async def test_unreadable_subtree_is_skipped(self, workspace: Path, monkeypatch):
        (workspace / "locked").mkdir()
        (workspace / "locked" / "secret.md").write_text("")
        (workspace / "open").mkdir()
        (workspace / "open" / "note.md").write_text("")
        (workspace / "top.md").write_text("")

        original = tree_module._scan_directory
        locked = str(workspace / "locked")

        def scan(path: str):
            if path == locked:
                raise PermissionError(13, "Permission denied", path)
            return original(path)

        monkeypatch.setattr(tree_module, "_scan_directory", scan)
        files = await build_tree(workspace)
        assert _names(files) == ["open", "top.md"]

    @pytest.mark.asyncio
    async def test_unreadable_root_raises(self, workspace: Path, monkeypatch):
        def scan(path: str):
            raise PermissionError(13, "Permission denied", path)

        monkeypatch.setattr(tree_module, "_scan_directory", scan)
        with pytest.raises(IoError, match="Permission denied"):
            await build_tree(workspace)

    @pytest.mark.asyncio
    async def test_directory_symlink_not_followed(self, workspace: Path, tmp_path: Path):
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "linked.md").write_text("")
        (workspace / "link").symlink_to(outside, target_is_directory=True)
        (workspace / "loop").symlink_to(workspace, target_is_directory=True)

        assert await build_tree(workspace) == []

    @pytest.mark.asyncio
    async def test_deterministic_across_calls(self, workspace: Path):
        for i in range(20):
            d = workspace / f"dir{i:02d}"
            d.mkdir()
            (d / f"note{i}.md").write_text("")

        first = await build_tree(workspace)
        second = await build_tree(workspace)
        assert first == second
        assert _names(first) == [f"dir{i:02d}" for i in range(20)]

    @pytest.mark.skipif(sys.platform == "darwin", reason="APFS rejects non-UTF-8 names")
    @pytest.mark.asyncio
    async def test_undecodable_names_are_replaced(self, workspace: Path):
        sub = workspace / "sub"
        sub.mkdir()
        (sub / "good.md").write_text("")
        with open(os.fsencode(sub) + b"/caf\xe9.md", "w"):
            pass

        files = await build_tree(workspace)
        children = files[0].children
        assert children is not None
        assert _names(children) == ["caf�.md", "good.md"]
        assert children[0].path == str(sub) + "/caf�.md"
        json.dumps([f.to_dict() for f in files], ensure_ascii=False).encode("utf-8")
