from typing import Any, Awaitable, Callable, Union
from urllib.parse import parse_qsl, quote

from ..handler import ListingFileServer
from ..http.model import HTTPRequest, HTTPResponse
from ..routing import Route, Router
from ..utils.logging import exception, info, warning

# --
# ## ASGI Bridge
#
# Exposes file servers through the ASGI gateway, so that they can be run by
# any ASGI server (uvicorn, hypercorn, …).

# SEE: https://asgi.readthedocs.io/en/latest/specs/main.html

TScope = dict[str, Any]
TReceive = Callable[[], Awaitable[dict[str, Any]]]
TSend = Callable[[dict[str, Any]], Awaitable[None]]
TApplication = Callable[[TScope, TReceive, TSend], Awaitable[None]]


def asRequest(scope: TScope) -> HTTPRequest:
	"""Creates a request from an ASGI HTTP scope. The path is kept
	percent-encoded, using `raw_path` when the server provides it."""
	raw: bytes | None = scope.get("raw_path")
	path: str = raw.decode("latin-1") if raw else quote(scope.get("path") or "/")
	query: str = (scope.get("query_string") or b"").decode("latin-1")
	return HTTPRequest(
		method=scope.get("method", "GET"),
		path=path,
		query=dict(parse_qsl(query, keep_blank_values=True)) if query else None,
		rawQuery=query,
		headers={
			k.decode("latin-1"): v.decode("latin-1")
			for k, v in scope.get("headers") or ()
		},
		protocol=f"HTTP/{scope.get('http_version', '1.1')}",
	)


async def writeResponse(response: HTTPResponse, send: TSend) -> None:
	await send(
		{
			"type": "http.response.start",
			"status": response.status,
			"headers": [
				(k.lower().encode("latin-1"), v.encode("latin-1"))
				for k, v in response.headers.headers.items()
			],
		}
	)
	try:
		for chunk in response.iterBody():
			await send({"type": "http.response.body", "body": chunk, "more_body": True})
	except OSError as e:
		# The status is already sent, all we can do is cut the body short
		exception(e, "Could not stream response body")
	await send({"type": "http.response.body", "body": b"", "more_body": False})


async def lifespan(receive: TReceive, send: TSend) -> None:
	# SEE: https://asgi.readthedocs.io/en/latest/specs/lifespan.html
	while True:
		message = await receive()
		if message["type"] == "lifespan.startup":
			await send({"type": "lifespan.startup.complete"})
		elif message["type"] == "lifespan.shutdown":
			await send({"type": "lifespan.shutdown.complete"})
			return None


def server(*components: Union[ListingFileServer, Route, Router]) -> TApplication:
	"""Creates the ASGI application serving the given file servers, routes
	or router."""
	router: Router | None = next((_ for _ in components if isinstance(_, Router)), None)
	router = router or Router()
	for item in components:
		if isinstance(item, ListingFileServer):
			info("Mounting file server", Root=str(item.root), Prefix=item.prefix)
			router.register(*item.routes())
		elif isinstance(item, Route):
			router.register(item)

	async def application(scope: TScope, receive: TReceive, send: TSend) -> None:
		"""ASGI Application"""
		protocol = scope["type"]
		if protocol == "http":
			await writeResponse(router.dispatch(asRequest(scope)), send)
		elif protocol == "lifespan":
			await lifespan(receive, send)
		else:
			warning("Unsupported ASGI protocol", Protocol=protocol)

	return application


# EOF
