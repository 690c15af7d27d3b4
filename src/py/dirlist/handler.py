from pathlib import Path

from .entries import EntryKind, inspect
from .http.model import HTTPRequest, HTTPResponse
from .listing import ListingError, TRenderer, render, toHTML, toJSON
from .options import DEFAULT_INDEX, DEFAULT_RANK, Options
from .paths import (
	PathError,
	PathEscape,
	PathNotFound,
	ResolvedPath,
	resolve,
	resolveChild,
	urlPath,
)
from .routing import Decline, Route, THandlerOutcome
from .utils.logging import error, info, warning


class ListingFileServer:
	"""Serves the files of a directory tree, generating a listing for
	directories that have no index file.

	Be careful exposing this in production: listings reveal the files and
	layout of the served tree.

	>    server = ListingFileServer("/srv/www", Options.Index | Options.Missing)
	>    router = Router().register(*server.routes())

	The handler keeps no state besides its configuration, so a single
	instance can serve any number of concurrent requests."""

	def __init__(
		self,
		root: str | Path,
		options: Options = Options.Nothing,
		*,
		index: str = DEFAULT_INDEX,
		rank: int = DEFAULT_RANK,
		prefix: str = "/",
		renderer: TRenderer = toHTML,
	):
		path = Path(root)
		if not path.is_dir():
			error(
				"ListingFileServer root is not a directory",
				"BADROOT",
				Root=str(path),
			)
			raise ValueError(f"ListingFileServer root is not a directory: {path}")
		self.root: Path = path.resolve(strict=True)
		self.options: Options = options
		self.index: str = index
		self.rank: int = rank
		self.prefix: str = f"/{prefix.strip('/')}/" if prefix.strip("/") else "/"
		self.renderer: TRenderer = renderer

	@classmethod
	def From(
		cls, root: str | Path, renderer: TRenderer = toHTML
	) -> "ListingFileServer":
		"""Creates a server with no options, where directories are always
		listed."""
		return cls(root, Options.Nothing, renderer=renderer)

	def withRank(self, rank: int) -> "ListingFileServer":
		self.rank = rank
		return self

	def routes(self) -> list[Route]:
		"""The routes to register this handler under."""
		return [
			Route(
				self.prefix,
				self.handle,
				rank=self.rank,
				name=f"ListingFileServer: {self.root}/",
			)
		]

	# =========================================================================
	# HANDLING
	# =========================================================================

	def handle(self, request: HTTPRequest, path: str) -> THandlerOutcome:
		"""Handles the request for `path`, which is the request path
		relative to the mount prefix. Always returns a response or a
		`Decline`, filesystem errors are never raised."""
		try:
			resolved = resolve(self.root, path)
		except PathEscape as e:
			info("Rejected path outside of root", Path=request.path, Reason=e.reason)
			return request.notAuthorized()
		except PathNotFound:
			return self.onMissing(request, path)
		classification = inspect(resolved, self.options)
		match classification.kind:
			case EntryKind.File:
				return self.serveFile(request, resolved.path)
			case EntryKind.Directory:
				return self.serveDirectory(request, resolved)
			case _:
				if classification.error:
					warning(
						"Could not read path metadata",
						Path=request.path,
						Error=str(classification.error),
					)
				return self.onMissing(request, path)

	def serveDirectory(
		self, request: HTTPRequest, resolved: ResolvedPath
	) -> HTTPResponse:
		# Empty and `.` segments of the request path are dropped, so that the
		# URL never starts with `//`, which browsers read as another host.
		url: str = urlPath(self.prefix, resolved.segments)
		if Options.NormalizeDirs in self.options and not request.path.endswith("/"):
			query: str = request.queryString
			return request.redirect(f"{url}?{query}" if query else url, permanent=True)
		if Options.Index in self.options:
			index = self.findIndex(resolved)
			if index:
				return self.serveFile(request, index)
		try:
			listing = render(resolved, url, self.options)
		except ListingError as e:
			error(
				"Could not list directory",
				"LISTFAIL",
				Path=request.path,
				Error=str(e.__cause__),
			)
			return request.fail()
		if request.param("format") == "json":
			return request.respondJSON(toJSON(listing))
		return request.respondHTML(self.renderer(listing))

	def findIndex(self, resolved: ResolvedPath) -> Path | None:
		"""Returns the index file of the directory, if there is one that is
		a regular file within the root."""
		try:
			index = resolveChild(self.root, resolved, self.index)
		except PathError:
			return None
		if inspect(index, self.options).kind is EntryKind.File:
			return index.path
		else:
			return None

	def serveFile(self, request: HTTPRequest, path: Path) -> HTTPResponse:
		# Opening the file surfaces permission errors now rather than while
		# the response is being written.
		try:
			with open(path, "rb"):
				pass
			return request.respondFile(path)
		except OSError as e:
			error("Could not read file", "READFAIL", Path=request.path, Error=str(e))
			return request.fail()

	def onMissing(self, request: HTTPRequest, path: str) -> THandlerOutcome:
		if Options.Missing in self.options:
			return request.notFound()
		else:
			return Decline(path)

	def __repr__(self) -> str:
		return f"(ListingFileServer {self.root} {self.options} :rank {self.rank})"


# EOF
