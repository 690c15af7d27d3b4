import os
import stat
from enum import Enum
from typing import Iterable, NamedTuple

from .options import Options
from .paths import ResolvedPath


class EntryKind(Enum):
	File = "file"
	Directory = "directory"
	Other = "other"
	# Only produced by classification, never listed
	Missing = "missing"


class Entry(NamedTuple):
	"""A member of a listed directory."""

	name: str
	kind: EntryKind
	size: int | None = None
	updatedAt: float | None = None

	@property
	def isDirectory(self) -> bool:
		return self.kind is EntryKind.Directory

	@staticmethod
	def FromDirEntry(entry: os.DirEntry[str]) -> "Entry":
		"""Creates an entry from a `scandir` result, following symlinks. A
		dangling symlink becomes an `Other` entry, any other `OSError`
		propagates."""
		try:
			info = entry.stat()
		except FileNotFoundError:
			if entry.is_symlink():
				return Entry(entry.name, EntryKind.Other)
			raise
		if stat.S_ISDIR(info.st_mode):
			return Entry(entry.name, EntryKind.Directory, None, info.st_mtime)
		elif stat.S_ISREG(info.st_mode):
			return Entry(entry.name, EntryKind.File, info.st_size, info.st_mtime)
		else:
			return Entry(entry.name, EntryKind.Other, None, info.st_mtime)


class Classification(NamedTuple):
	"""The kind of a resolved path, with the error that made it `Missing`
	if there was one."""

	kind: EntryKind
	error: OSError | None = None


def isHidden(segments: Iterable[str]) -> bool:
	"""Tells if any of the given segments is a dotfile. Only segments below
	the root are given, the root's own name never counts."""
	return any(_.startswith(".") for _ in segments)


def inspect(resolved: ResolvedPath, options: Options) -> Classification:
	"""Classifies the resolved path as a `File`, a `Directory` or `Missing`,
	applying the dotfiles policy first."""
	if Options.DotFiles not in options and isHidden(resolved.segments):
		return Classification(EntryKind.Missing)
	try:
		mode = os.stat(resolved.path).st_mode
	except OSError as e:
		return Classification(EntryKind.Missing, e)
	if stat.S_ISREG(mode):
		return Classification(EntryKind.File)
	elif stat.S_ISDIR(mode):
		return Classification(EntryKind.Directory)
	else:
		# Fifos, sockets and devices are never served
		return Classification(EntryKind.Missing)


def classify(resolved: ResolvedPath, options: Options) -> EntryKind:
	return inspect(resolved, options).kind


# EOF
