import os
import time
from typing import Callable, NamedTuple
from urllib.parse import unquote

from .entries import Entry, isHidden
from .options import Options
from .paths import ResolvedPath, quoteSegment
from .utils.htmpl import H, Node, html, raw
from .utils.json import json

LISTING_CSS: str = """
:root {
	font-family: sans-serif;
	font-size: 14px;
	line-height: 1.35em;
	padding: 20px;
	background: #F0F0F0;
}
h1 {
	margin: 1.25em 0em;
	line-height: 1.25em;
	word-break: break-all;
}
table {
	border-collapse: collapse;
	min-width: 50%;
}
th, td {
	text-align: left;
	padding: 0.25em 1em 0.25em 0em;
}
td.size, td.updated {
	color: #606060;
	white-space: nowrap;
}
a.directory {
	font-weight: bold;
}
"""

# -----------------------------------------------------------------------------
#
# MODEL
#
# -----------------------------------------------------------------------------


class ListingError(Exception):
	"""The directory could not be read in full. The `OSError` that caused
	it is available as `__cause__`."""

	def __init__(self, path: str, cause: OSError):
		super().__init__(f"Could not list directory {path!r}: {cause}")
		self.path: str = path


def displayName(name: str) -> str:
	"""Returns the filesystem `name` as printable text, where bytes that
	are not UTF-8 show as replacement characters."""
	return name.encode("utf8", "surrogateescape").decode("utf8", "replace")


class Listing(NamedTuple):
	"""The contents of a directory, as seen from the URL `path` (ending with
	a `/`). Entries are sorted by name."""

	path: str
	entries: tuple[Entry, ...]
	isRoot: bool

	@property
	def title(self) -> str:
		return unquote(self.path)

	@property
	def parent(self) -> str | None:
		if self.isRoot:
			return None
		else:
			return f"{self.path.rstrip('/').rsplit('/', 1)[0]}/"

	def href(self, entry: Entry) -> str:
		return f"{self.path}{quoteSegment(entry.name)}{'/' if entry.isDirectory else ''}"

	def label(self, entry: Entry) -> str:
		name = displayName(entry.name)
		return f"{name}/" if entry.isDirectory else name


TRenderer = Callable[[Listing], str]

# -----------------------------------------------------------------------------
#
# ENUMERATION
#
# -----------------------------------------------------------------------------


def listEntries(path: os.PathLike[str] | str, options: Options) -> list[Entry]:
	"""Returns the direct children of the directory at `path` sorted by
	name, skipping dotfiles unless `Options.DotFiles` is set. Raises
	`OSError` if any part of the directory can't be read."""
	dotfiles: bool = Options.DotFiles in options
	with os.scandir(path) as entries:
		res = [
			Entry.FromDirEntry(_)
			for _ in entries
			if dotfiles or not isHidden((_.name,))
		]
	# Names compare by code point, independently of the locale
	return sorted(res, key=lambda _: _.name)


def render(directory: ResolvedPath, requestPath: str, options: Options) -> Listing:
	"""Creates the listing of the given directory, where `requestPath` is
	the URL path the directory was requested at. Either the whole directory
	is listed or `ListingError` is raised."""
	path: str = requestPath if requestPath.endswith("/") else f"{requestPath}/"
	try:
		entries = listEntries(directory.path, options)
	except OSError as e:
		raise ListingError(path, e) from e
	return Listing(path=path, entries=tuple(entries), isRoot=directory.isRoot)


# -----------------------------------------------------------------------------
#
# RENDERING
#
# -----------------------------------------------------------------------------


def formatSize(size: int | None) -> str:
	if size is None:
		return "-"
	value: float = size
	for unit in ("B", "KB", "MB", "GB"):
		if value < 1024:
			return f"{value:.0f} {unit}" if unit == "B" else f"{value:.1f} {unit}"
		value /= 1024
	return f"{value:.1f} TB"


def formatTime(timestamp: float | None) -> str:
	# UTC so that the output doesn't depend on the host
	if timestamp is None:
		return "-"
	return time.strftime("%Y-%m-%d %H:%M", time.gmtime(timestamp))


def renderRow(listing: Listing, entry: Entry) -> Node:
	return H.tr(
		H.td(
			H.a(
				listing.label(entry),
				href=listing.href(entry),
				_=entry.kind.value,
			)
		),
		H.td(formatSize(entry.size), _="size"),
		H.td(formatTime(entry.updatedAt), _="updated"),
	)


def toHTML(listing: Listing) -> str:
	"""Renders the listing as a standalone HTML document."""
	rows: list[Node] = []
	if (parent := listing.parent) is not None:
		rows.append(
			H.tr(H.td(H.a("../", href=parent, _="parent")), H.td(""), H.td(""))
		)
	rows += [renderRow(listing, _) for _ in listing.entries]
	return "".join(
		html(
			H.html(
				H.head(
					H.meta(charset="utf-8"),
					H.meta(
						name="viewport",
						content="width=device-width, initial-scale=1.0",
					),
					H.title(f"Index of {listing.title}"),
					H.style(raw(LISTING_CSS)),
				),
				H.body(
					H.h1(f"Index of {listing.title}"),
					H.table(
						H.thead(H.tr(H.th("Name"), H.th("Size"), H.th("Modified"))),
						H.tbody(rows),
					),
				),
			),
			doctype="html",
		)
	)


def toJSON(listing: Listing) -> str:
	"""Renders the listing as a JSON document."""
	return json(
		{
			"path": listing.title,
			"parent": listing.parent,
			"entries": [
				{
					"name": displayName(_.name),
					"kind": _.kind,
					"size": _.size,
					"updatedAt": _.updatedAt,
					"href": listing.href(_),
				}
				for _ in listing.entries
			],
		}
	).decode("utf8")


# EOF
