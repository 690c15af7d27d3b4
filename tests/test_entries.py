import os
from pathlib import Path

import pytest

from dirlist.entries import Entry, EntryKind, classify, inspect, isHidden
from dirlist.options import Options
from dirlist.paths import resolve


def test_classify_file_and_directory(root: Path) -> None:
	assert classify(resolve(root, "docs/a.txt"), Options.Nothing) is EntryKind.File
	assert classify(resolve(root, "docs"), Options.Nothing) is EntryKind.Directory
	assert classify(resolve(root, ""), Options.Nothing) is EntryKind.Directory


def test_dotfiles_are_missing_unless_enabled(root: Path) -> None:
	secret = resolve(root, "docs/.secret")
	assert classify(secret, Options.Nothing) is EntryKind.Missing
	assert classify(secret, Options.Index | Options.Missing) is EntryKind.Missing
	assert classify(secret, Options.DotFiles) is EntryKind.File


def test_dot_directories_hide_their_contents(root: Path) -> None:
	note = resolve(root, ".hidden/note.txt")
	assert classify(note, Options.Nothing) is EntryKind.Missing
	assert classify(note, Options.DotFiles) is EntryKind.File


def test_dotted_root_is_not_hidden(tmp_path: Path) -> None:
	site = tmp_path / ".site"
	site.mkdir()
	(site / "page.txt").write_text("page")
	resolved = resolve(site.resolve(), "page.txt")
	assert classify(resolved, Options.Nothing) is EntryKind.File


def test_is_hidden() -> None:
	assert isHidden((".git", "config"))
	assert isHidden(("docs", ".secret"))
	assert not isHidden(("docs", "a.txt"))
	assert not isHidden(())


def test_vanished_path_keeps_the_error(root: Path) -> None:
	resolved = resolve(root, "docs/a.txt")
	(root / "docs" / "a.txt").unlink()
	classification = inspect(resolved, Options.Nothing)
	assert classification.kind is EntryKind.Missing
	assert isinstance(classification.error, FileNotFoundError)


@pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="needs named pipes")
def test_special_files_are_missing(root: Path) -> None:
	os.mkfifo(root / "pipe")
	classification = inspect(resolve(root, "pipe"), Options.Nothing)
	assert classification.kind is EntryKind.Missing
	assert classification.error is None


def test_entry_from_dir_entry(root: Path) -> None:
	os.symlink(root / "gone", root / "docs" / "broken")
	with os.scandir(root / "docs") as items:
		entries = {_.name: Entry.FromDirEntry(_) for _ in items}
	assert entries["a.txt"].kind is EntryKind.File
	assert entries["a.txt"].size == 1
	assert entries["img"].isDirectory
	assert entries["img"].size is None
	assert entries["broken"].kind is EntryKind.Other
	assert entries["broken"].updatedAt is None


# EOF
