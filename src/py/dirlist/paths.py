import os
from pathlib import Path, PurePath
from typing import NamedTuple
from urllib.parse import quote, unquote

__doc__ = """
Maps request paths to locations inside the served root. This is the one
place where untrusted input meets the filesystem: anything returned as a
`ResolvedPath` is canonical and contained in the root, everything else
raises a `PathError`.
"""

# Characters that can never appear in a decoded segment
FORBIDDEN_CHARS: tuple[str, ...] = ("/", "\\", "\x00")

# -----------------------------------------------------------------------------
#
# ERRORS
#
# -----------------------------------------------------------------------------


class PathError(Exception):
	"""Base class for request paths that can't be resolved."""

	def __init__(self, path: str, reason: str):
		super().__init__(f"{reason}: {path!r}")
		self.path: str = path
		self.reason: str = reason


class PathEscape(PathError):
	"""The request path would lead outside of the root."""


class PathNotFound(PathError):
	"""The request path does not lead to anything on the filesystem, or
	leads through a broken link."""


# -----------------------------------------------------------------------------
#
# RESOLUTION
#
# -----------------------------------------------------------------------------


class ResolvedPath(NamedTuple):
	"""A validated location in the root. `path` is canonical and `segments` are
	the decoded segments of the request below the root."""

	path: Path
	segments: tuple[str, ...]

	@property
	def name(self) -> str:
		return self.segments[-1] if self.segments else ""

	@property
	def isRoot(self) -> bool:
		return not self.segments


def checkSegment(segment: str, requestPath: str) -> str:
	"""Returns the decoded `segment` if it names an entry of its parent
	directory, raising `PathEscape` otherwise."""
	if segment == "..":
		raise PathEscape(requestPath, "Parent segment in path")
	elif any(_ in segment for _ in FORBIDDEN_CHARS):
		raise PathEscape(requestPath, "Separator in path segment")
	elif PurePath(segment).anchor:
		raise PathEscape(requestPath, "Absolute path segment")
	return segment


def splitPath(requestPath: str) -> tuple[str, ...]:
	"""Splits the percent-encoded `requestPath` into decoded segments. Each
	segment is decoded on its own so that an encoded `/` can't create a
	segment, and `..` is rejected instead of being collapsed."""
	segments: list[str] = []
	for chunk in requestPath.split("/"):
		# Bytes that are not UTF-8 map to the same name `os.scandir` returns
		segment = unquote(chunk, errors="surrogateescape")
		if segment in ("", "."):
			continue
		segments.append(checkSegment(segment, requestPath))
	return tuple(segments)


def quoteSegment(name: str) -> str:
	"""Percent-encodes the filesystem `name` as a URL path segment, the
	inverse of the decoding done by `splitPath`."""
	return quote(os.fsencode(name), safe="")


def urlPath(prefix: str, segments: tuple[str, ...]) -> str:
	"""The canonical URL of the directory at `segments` below a mount
	`prefix` (ending with a `/`), itself ending with a `/`."""
	return "".join([prefix, *(f"{quoteSegment(_)}/" for _ in segments)])


def contains(root: Path, path: Path) -> bool:
	"""Tells if `path` is `root` or below it, comparing whole segments so
	that `/srv/www-evil` is not within `/srv/www`."""
	return path.is_relative_to(root)


def canonical(root: Path, candidate: Path, requestPath: str) -> Path:
	try:
		res = candidate.resolve(strict=True)
	# NOTE: Symlink loops raise `RuntimeError` before Python 3.13
	except (OSError, RuntimeError) as e:
		raise PathNotFound(requestPath, str(e)) from e
	if not contains(root, res):
		raise PathEscape(requestPath, "Path resolves outside of root")
	return res


def resolve(root: Path, requestPath: str) -> ResolvedPath:
	"""Resolves `requestPath` within `root`, which must already be
	canonical. Raises `PathEscape` when the path, or any link it goes
	through, leads outside of root, and `PathNotFound` when it can't be
	canonicalized."""
	segments = splitPath(requestPath)
	return ResolvedPath(
		path=canonical(root, root.joinpath(*segments), requestPath),
		segments=segments,
	)


def resolveChild(root: Path, parent: ResolvedPath, name: str) -> ResolvedPath:
	"""Resolves the entry `name` (not encoded) of the resolved directory
	`parent`, with the same guarantees as `resolve`."""
	segment = checkSegment(name, name)
	return ResolvedPath(
		path=canonical(root, parent.path / segment, name),
		segments=(*parent.segments, segment),
	)


# EOF
