from dataclasses import dataclass
from typing import Callable, TypeAlias

from .http.model import HTTPRequest, HTTPResponse
from .utils.logging import debug, exception, info

# -----------------------------------------------------------------------------
#
# OUTCOMES
#
# -----------------------------------------------------------------------------


@dataclass(slots=True, frozen=True)
class Decline:
	"""Returned by a handler instead of a response when it does not own the
	request, so that the router tries the next route. This is different
	from answering 404."""

	path: str


THandlerOutcome: TypeAlias = HTTPResponse | Decline
THandler: TypeAlias = Callable[[HTTPRequest, str], THandlerOutcome]

# -----------------------------------------------------------------------------
#
# ROUTE
#
# -----------------------------------------------------------------------------


class Route:
	"""Maps every path below `prefix` to a handler. The handler is given the
	rest of the path after the prefix. Routes with a lower `rank` are tried
	first."""

	def __init__(
		self,
		prefix: str,
		handler: THandler,
		*,
		rank: int = 0,
		name: str | None = None,
		methods: tuple[str, ...] = ("GET", "HEAD"),
	):
		self.prefix: str = f"/{prefix.strip('/')}" if prefix.strip("/") else ""
		self.handler: THandler = handler
		self.rank: int = rank
		self.name: str = name or f"{self.prefix}/"
		self.methods: tuple[str, ...] = methods

	def match(self, path: str) -> str | None:
		"""Returns the part of `path` after the prefix, or `None` when the
		prefix does not match whole segments of the path."""
		prefix = self.prefix
		if path == prefix:
			return ""
		elif path.startswith(f"{prefix}/"):
			return path[len(prefix) + 1 :]
		else:
			return None

	def __repr__(self) -> str:
		return f'(Route "{self.prefix}/" :rank {self.rank} "{self.name}")'


# -----------------------------------------------------------------------------
#
# ROUTER
#
# -----------------------------------------------------------------------------


class Router:
	"""Dispatches requests to the routes matching their path, by ascending
	rank. A route that declines passes the request on to the next one, and
	a 404 is returned when every route declined."""

	def __init__(self) -> None:
		self.routes: list[Route] = []

	def register(self, *routes: Route) -> "Router":
		for route in routes:
			info("Registered route", Prefix=f"{route.prefix}/", Rank=route.rank)
			self.routes.append(route)
		# The sort is stable, so equal ranks keep their registration order
		self.routes.sort(key=lambda _: _.rank)
		return self

	def dispatch(self, request: HTTPRequest) -> HTTPResponse:
		matched: bool = False
		allowed: bool = False
		for route in self.routes:
			rest = route.match(request.path)
			if rest is None:
				continue
			matched = True
			if request.method not in route.methods:
				continue
			allowed = True
			try:
				res = route.handler(request, rest)
			except Exception as e:
				exception(e, f"Route {route.name} failed on {request}")
				return request.fail()
			if isinstance(res, Decline):
				debug("Route declined", Route=route.name, Path=request.path)
				continue
			return res.withoutBody() if request.method == "HEAD" else res
		return request.notAllowed() if matched and not allowed else request.notFound()


# EOF
