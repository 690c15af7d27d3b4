import os.path
from pathlib import Path
from typing import Any, Iterator, NamedTuple, TypeAlias
from urllib.parse import urlencode

from ..config import DEFAULT_ENCODING
from .api import ResponseFactory
from .status import HTTP_STATUS

# -----------------------------------------------------------------------------
#
# HELPERS
#
# -----------------------------------------------------------------------------


def headername(name: str, *, headers: dict[str, str] = {}) -> str:
	"""Normalizes the header name as `Kebab-Case`."""
	key: str = name.lower()
	if key in headers:
		return headers[key]
	else:
		normalized: str = "-".join(_.capitalize() for _ in name.split("-"))
		headers[key] = normalized
		return normalized


# -----------------------------------------------------------------------------
#
# DATA MODEL
#
# -----------------------------------------------------------------------------


class HTTPHeaders(NamedTuple):
	"""Wraps HTTP headers, keeping key information for response processing."""

	headers: dict[str, str]
	contentType: str | None = None
	contentLength: int | None = None


class HTTPBodyBlob(NamedTuple):
	"""A body held in memory."""

	payload: bytes = b""
	length: int = 0

	@staticmethod
	def FromBytes(data: bytes) -> "HTTPBodyBlob":
		return HTTPBodyBlob(payload=data, length=len(data))


class HTTPBodyFile(NamedTuple):
	"""A body read from a file when the response is written."""

	path: Path
	length: int


THTTPBody: TypeAlias = HTTPBodyBlob | HTTPBodyFile

BODY_CHUNK_SIZE: int = 64_000


# -----------------------------------------------------------------------------
#
# REQUESTS
#
# -----------------------------------------------------------------------------


class HTTPRequest(ResponseFactory["HTTPResponse"]):
	"""Represents an HTTP request, which also acts as a factory for
	responses. The `path` is the full URL path, still percent-encoded."""

	__slots__ = ["protocol", "method", "path", "query", "rawQuery", "headers"]

	def __init__(
		self,
		method: str,
		path: str,
		query: dict[str, str] | None = None,
		headers: dict[str, str] | None = None,
		protocol: str = "HTTP/1.1",
		rawQuery: str | None = None,
	):
		super().__init__()
		self.method: str = method.upper()
		self.path: str = path or "/"
		self.query: dict[str, str] | None = query
		# The query string as received, kept so that it can be passed on as is
		self.rawQuery: str | None = rawQuery
		self.protocol: str = protocol
		self.headers: dict[str, str] = {
			headername(k): v for k, v in (headers or {}).items()
		}

	def header(self, name: str) -> str | None:
		return self.headers.get(headername(name))

	def param(self, name: str, default: str | None = None) -> str | None:
		return self.query.get(name, default) if self.query else default

	@property
	def queryString(self) -> str:
		if self.rawQuery is not None:
			return self.rawQuery
		return urlencode(self.query) if self.query else ""

	def respond(
		self,
		content: Any = None,
		contentType: str | None = None,
		contentLength: int | None = None,
		status: int = 200,
		headers: dict[str, str] | None = None,
		message: str | None = None,
	) -> "HTTPResponse":
		return HTTPResponse.Create(
			status=status,
			message=message,
			content=content,
			contentType=contentType,
			contentLength=contentLength,
			protocol=self.protocol,
			headers=headers,
		)

	def __str__(self) -> str:
		return f"Request({self.method} {self.path}{f'?{self.queryString}' if self.queryString else ''})"


# -----------------------------------------------------------------------------
#
# RESPONSE
#
# -----------------------------------------------------------------------------


class HTTPResponse:
	"""An HTTP response."""

	__slots__ = ["protocol", "status", "message", "headers", "body"]

	@staticmethod
	def Create(
		content: Any = None,
		contentType: str | None = None,
		contentLength: int | None = None,
		headers: dict[str, str] | None = None,
		status: int = 200,
		message: str | None = None,
		protocol: str = "HTTP/1.1",
	) -> "HTTPResponse":
		"""Factory method to create HTTP response objects. A `Path` content
		is sized here, which raises `OSError` if it went away."""
		body: THTTPBody | None = None
		if content is None:
			contentLength = 0
		elif isinstance(content, str):
			body = HTTPBodyBlob.FromBytes(content.encode(DEFAULT_ENCODING))
		elif isinstance(content, bytes):
			body = HTTPBodyBlob.FromBytes(content)
		elif isinstance(content, Path):
			body = HTTPBodyFile(content, os.path.getsize(content))
		else:
			raise ValueError(f"Unsupported content {type(content)}:{content}")
		if body is not None:
			contentLength = body.length
		res: dict[str, str] = {headername(k): v for k, v in (headers or {}).items()}
		if contentType is not None:
			res["Content-Type"] = contentType
		if contentLength is not None:
			res["Content-Length"] = str(contentLength)
		return HTTPResponse(
			status=status,
			message=message or HTTP_STATUS.get(status, "Unknown status"),
			headers=HTTPHeaders(
				res,
				contentType=res.get("Content-Type"),
				contentLength=contentLength,
			),
			body=body,
			protocol=protocol,
		)

	def __init__(
		self,
		protocol: str,
		status: int,
		message: str | None,
		headers: HTTPHeaders,
		body: THTTPBody | None = None,
	):
		self.protocol: str = protocol
		self.status: int = status
		self.message: str | None = message
		self.headers: HTTPHeaders = headers
		self.body: THTTPBody | None = body

	def getHeader(self, name: str) -> str | None:
		return self.headers.headers.get(headername(name))

	def withoutBody(self) -> "HTTPResponse":
		"""Returns the same response with its headers but no body, as
		expected for a `HEAD` request."""
		return HTTPResponse(
			protocol=self.protocol,
			status=self.status,
			message=self.message,
			headers=self.headers,
			body=None,
		)

	def iterBody(self, size: int = BODY_CHUNK_SIZE) -> Iterator[bytes]:
		"""Yields the body as chunks of at most `size` bytes."""
		body = self.body
		if isinstance(body, HTTPBodyBlob):
			if body.payload:
				yield body.payload
		elif isinstance(body, HTTPBodyFile):
			with open(body.path, "rb") as f:
				while chunk := f.read(size):
					yield chunk

	def read(self) -> bytes:
		"""Returns the whole body, reading the file if there is one."""
		return b"".join(self.iterBody())

	def __str__(self) -> str:
		return f"Response({self.protocol} {self.status} {self.message} {self.headers.headers})"


# EOF
