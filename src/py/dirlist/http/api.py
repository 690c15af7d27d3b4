from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Generic, TypeVar

from ..utils.files import contentType as guessContentType
from .status import HTTP_STATUS

T = TypeVar("T")

# -----------------------------------------------------------------------------
#
# RESPONSE FACTORY
#
# -----------------------------------------------------------------------------

# --
# Every response the file server produces is one of the shortcuts below, all
# of them going through the `respond` method of the request.


class ResponseFactory(ABC, Generic[T]):
	@abstractmethod
	def respond(
		self,
		content: Any = None,
		contentType: str | None = None,
		contentLength: int | None = None,
		status: int = 200,
		headers: dict[str, str] | None = None,
		message: str | None = None,
	) -> T: ...

	# =========================================================================
	# ERRORS
	# =========================================================================

	def error(
		self,
		status: int,
		content: str | None = None,
		headers: dict[str, str] | None = None,
	) -> T:
		"""A plain text error, with the status message as default body."""
		message = HTTP_STATUS.get(status, "Server Error")
		return self.respond(
			content=message if content is None else content,
			contentType="text/plain; charset=utf-8",
			status=status,
			message=message,
			headers=headers,
		)

	def notAuthorized(self, content: str | None = None) -> T:
		return self.error(403, content)

	def notFound(self, content: str | None = None) -> T:
		return self.error(404, content)

	def notAllowed(self, allowed: tuple[str, ...] = ("GET", "HEAD")) -> T:
		return self.error(405, headers={"Allow": ", ".join(allowed)})

	def fail(self, content: str | None = None) -> T:
		return self.error(500, content)

	# =========================================================================
	# CONTENT
	# =========================================================================

	def redirect(self, url: str, permanent: bool = False) -> T:
		return self.respond(
			status=301 if permanent else 302, headers={"Location": url}
		)

	def respondHTML(self, html: str) -> T:
		return self.respond(content=html, contentType="text/html; charset=utf-8")

	def respondJSON(self, payload: str | bytes) -> T:
		return self.respond(content=payload, contentType="application/json")

	def respondFile(self, path: Path, contentType: str | None = None) -> T:
		"""Responds with the file at `path`, which is expected to be a
		readable regular file. Ranges and ETags are left to the hosting
		server."""
		return self.respond(
			content=path, contentType=contentType or guessContentType(path)
		)


# EOF
