import json
import re
import shutil
from pathlib import Path

import pytest

from dirlist.entries import EntryKind
from dirlist.listing import (
	Listing,
	ListingError,
	displayName,
	formatSize,
	render,
	toHTML,
	toJSON,
)
from dirlist.options import Options
from dirlist.paths import resolve

RE_LINK = re.compile(r'<a href="([^"]*)" class="([^"]*)">([^<]*)</a>')


def links(html: str) -> list[tuple[str, str, str]]:
	return RE_LINK.findall(html)


def test_entries_are_the_visible_children(root: Path) -> None:
	listing = render(resolve(root, "docs/"), "/docs/", Options.Nothing)
	assert [_.name for _ in listing.entries] == ["a.txt", "b.txt", "img"]
	assert [_.kind for _ in listing.entries] == [
		EntryKind.File,
		EntryKind.File,
		EntryKind.Directory,
	]


def test_dotfiles_are_listed_when_enabled(root: Path) -> None:
	listing = render(resolve(root, "docs/"), "/docs/", Options.DotFiles)
	assert [_.name for _ in listing.entries] == [".secret", "a.txt", "b.txt", "img"]


def test_entries_sort_by_code_point(tmp_path: Path) -> None:
	for name in ("b.txt", "Z", "_x", "a.txt", "B.txt", "é.txt"):
		(tmp_path / name).write_text(name)
	(tmp_path / "C").mkdir()
	listing = render(resolve(tmp_path.resolve(), ""), "/", Options.Nothing)
	# Directories and files are not grouped
	assert [_.name for _ in listing.entries] == [
		"B.txt",
		"C",
		"Z",
		"_x",
		"a.txt",
		"b.txt",
		"é.txt",
	]


def test_parent_link(root: Path) -> None:
	assert render(resolve(root, ""), "/", Options.Nothing).parent is None
	assert render(resolve(root, "docs/"), "/docs/", Options.Nothing).parent == "/"
	assert (
		render(resolve(root, "docs/img"), "/files/docs/img", Options.Nothing).parent
		== "/files/docs/"
	)


def test_links_are_absolute_and_encoded(root: Path) -> None:
	(root / "docs" / "a b&c.txt").write_text("x")
	listing = render(resolve(root, "docs"), "/docs", Options.Nothing)
	assert listing.path == "/docs/"
	assert [listing.href(_) for _ in listing.entries] == [
		"/docs/a%20b%26c.txt",
		"/docs/a.txt",
		"/docs/b.txt",
		"/docs/img/",
	]


def test_html_listing(root: Path) -> None:
	html = toHTML(render(resolve(root, "docs/"), "/docs/", Options.Nothing))
	assert html.startswith("<!DOCTYPE html>\n")
	assert links(html) == [
		("/", "parent", "../"),
		("/docs/a.txt", "file", "a.txt"),
		("/docs/b.txt", "file", "b.txt"),
		("/docs/img/", "directory", "img/"),
	]
	assert "<title>Index of /docs/</title>" in html
	# Self-contained: no scripts, stylesheets or external resources
	assert "<script" not in html
	assert "<link" not in html
	assert "src=" not in html


def test_html_escapes_names(root: Path) -> None:
	(root / "docs" / "<b>.txt").write_text("x")
	html = toHTML(render(resolve(root, "docs/"), "/docs/", Options.Nothing))
	assert "<b>" not in html
	assert ">&lt;b&gt;.txt</a>" in html


def test_rendering_is_idempotent(root: Path) -> None:
	first = toHTML(render(resolve(root, "docs/"), "/docs/", Options.Nothing))
	second = toHTML(render(resolve(root, "docs/"), "/docs/", Options.Nothing))
	assert first == second


def test_json_listing(root: Path) -> None:
	data = json.loads(toJSON(render(resolve(root, "docs/"), "/docs/", Options.Nothing)))
	assert data["path"] == "/docs/"
	assert data["parent"] == "/"
	assert [(_["name"], _["kind"], _["href"]) for _ in data["entries"]] == [
		("a.txt", "file", "/docs/a.txt"),
		("b.txt", "file", "/docs/b.txt"),
		("img", "directory", "/docs/img/"),
	]
	assert data["entries"][0]["size"] == 1


def test_vanished_directory_fails_whole(root: Path) -> None:
	docs = resolve(root, "docs/")
	shutil.rmtree(root / "docs")
	with pytest.raises(ListingError) as error:
		render(docs, "/docs/", Options.Nothing)
	assert isinstance(error.value.__cause__, FileNotFoundError)


def test_custom_listing_title() -> None:
	listing = Listing(path="/a%20b/", entries=(), isRoot=False)
	assert listing.title == "/a b/"
	assert listing.parent == "/"


def test_format_size() -> None:
	assert formatSize(None) == "-"
	assert formatSize(12) == "12 B"
	assert formatSize(2048) == "2.0 KB"
	assert formatSize(5 * 1024 * 1024) == "5.0 MB"


def test_display_name() -> None:
	assert displayName("caf\u00e9") == "caf\u00e9"
	assert displayName("bad\udcff.txt") == "bad\ufffd.txt"


# EOF
