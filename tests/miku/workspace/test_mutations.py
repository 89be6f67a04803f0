"""Tests for workspace file and folder mutations."""

from pathlib import Path

import pytest

from miku.errors import IoError, PathError, PathErrorKind
from miku.workspace import mutations


class TestCreateFile:
    @pytest.mark.asyncio
    async def test_creates_empty_file(self, workspace: Path):
        result = await mutations.create_file(str(workspace), "x.md")
        assert result == str(workspace / "x.md")
        assert (workspace / "x.md").read_text() == ""

    @pytest.mark.asyncio
    async def test_second_call_fails(self, workspace: Path):
        await mutations.create_file(str(workspace), "x.md")
        with pytest.raises(PathError) as exc_info:
            await mutations.create_file(str(workspace), "x.md")
        assert exc_info.value.kind == PathErrorKind.ALREADY_EXISTS
        assert str(exc_info.value) == "Path error: File already exists"

    @pytest.mark.asyncio
    async def test_existing_file_untouched(self, workspace: Path):
        (workspace / "x.md").write_text("keep me")
        with pytest.raises(PathError):
            await mutations.create_file(str(workspace), "x.md")
        assert (workspace / "x.md").read_text() == "keep me"

    @pytest.mark.asyncio
    async def test_name_taken_by_folder(self, workspace: Path):
        (workspace / "x.md").mkdir()
        with pytest.raises(PathError) as exc_info:
            await mutations.create_file(str(workspace), "x.md")
        assert exc_info.value.kind == PathErrorKind.ALREADY_EXISTS

    @pytest.mark.asyncio
    async def test_missing_base_dir(self, tmp_path: Path):
        with pytest.raises(IoError):
            await mutations.create_file(str(tmp_path / "missing"), "x.md")


class TestCreateFolder:
    @pytest.mark.asyncio
    async def test_creates_folder(self, workspace: Path):
        result = await mutations.create_folder(str(workspace), "drafts")
        assert result == str(workspace / "drafts")
        assert (workspace / "drafts").is_dir()

    @pytest.mark.asyncio
    async def test_existing_target(self, workspace: Path):
        (workspace / "drafts").mkdir()
        with pytest.raises(PathError) as exc_info:
            await mutations.create_folder(str(workspace), "drafts")
        assert exc_info.value.kind == PathErrorKind.ALREADY_EXISTS

    @pytest.mark.asyncio
    async def test_not_recursive(self, workspace: Path):
        with pytest.raises(IoError):
            await mutations.create_folder(str(workspace / "a"), "b")
        assert not (workspace / "a").exists()


class TestDelete:
    @pytest.mark.asyncio
    async def test_deletes_file(self, workspace: Path):
        (workspace / "x.md").write_text("")
        await mutations.delete(str(workspace / "x.md"))
        assert not (workspace / "x.md").exists()

    @pytest.mark.asyncio
    async def test_deletes_directory_recursively(self, workspace: Path):
        nested = workspace / "a" / "b" / "c"
        nested.mkdir(parents=True)
        (nested / "deep.md").write_text("")
        (workspace / "a" / "top.md").write_text("")

        await mutations.delete(str(workspace / "a"))
        assert not (workspace / "a").exists()
        assert workspace.exists()

    @pytest.mark.asyncio
    async def test_missing_path(self, workspace: Path):
        with pytest.raises(PathError) as exc_info:
            await mutations.delete(str(workspace / "missing.md"))
        assert exc_info.value.kind == PathErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_symlink_removes_link_only(self, workspace: Path, tmp_path: Path):
        target = tmp_path / "target_dir"
        target.mkdir()
        (target / "keep.md").write_text("")
        link = workspace / "link"
        link.symlink_to(target, target_is_directory=True)

        await mutations.delete(str(link))
        assert not link.exists()
        assert (target / "keep.md").exists()


class TestRename:
    @pytest.mark.asyncio
    async def test_renames_file(self, workspace: Path):
        (workspace / "old.md").write_text("content")
        result = await mutations.rename(str(workspace / "old.md"), "new.md")
        assert result == str(workspace / "new.md")
        assert not (workspace / "old.md").exists()
        assert (workspace / "new.md").read_text() == "content"

    @pytest.mark.asyncio
    async def test_renames_folder(self, workspace: Path):
        (workspace / "drafts").mkdir()
        (workspace / "drafts" / "a.md").write_text("")
        result = await mutations.rename(str(workspace / "drafts"), "published")
        assert Path(result, "a.md").exists()

    @pytest.mark.asyncio
    async def test_target_exists(self, workspace: Path):
        (workspace / "old.md").write_text("old")
        (workspace / "new.md").write_text("new")

        with pytest.raises(PathError) as exc_info:
            await mutations.rename(str(workspace / "old.md"), "new.md")

        assert exc_info.value.kind == PathErrorKind.ALREADY_EXISTS
        assert (workspace / "old.md").read_text() == "old"
        assert (workspace / "new.md").read_text() == "new"

    @pytest.mark.asyncio
    async def test_missing_source(self, workspace: Path):
        with pytest.raises(PathError) as exc_info:
            await mutations.rename(str(workspace / "missing.md"), "new.md")
        assert exc_info.value.kind == PathErrorKind.NOT_FOUND

    @pytest.mark.asyncio
    async def test_filesystem_root(self):
        with pytest.raises(PathError) as exc_info:
            await mutations.rename("/", "renamed")
        assert exc_info.value.kind == PathErrorKind.NO_PARENT

    @pytest.mark.parametrize("new_name", ["../escaped.md", "sub/b.md", "..", ".", ""])
    @pytest.mark.asyncio
    async def test_rejects_non_bare_name(self, workspace: Path, new_name: str):
        (workspace / "sub").mkdir()
        source = workspace / "a.md"
        source.write_text("keep")

        with pytest.raises(PathError) as exc_info:
            await mutations.rename(str(source), new_name)
        assert exc_info.value.kind == PathErrorKind.INVALID_NAME
        assert source.read_text() == "keep"
        assert not (workspace.parent / "escaped.md").exists()
