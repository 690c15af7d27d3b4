import mimetypes
from pathlib import Path

mimetypes.init()

# Types that `mimetypes` reports as an encoding rather than a content type
MIME_TYPES: dict[str, str] = dict(
	bz2="application/x-bzip",
	gz="application/x-gzip",
	md="text/markdown",
)

TEXT_TYPES: tuple[str, ...] = ("text/", "application/json", "application/javascript")


def contentType(path: Path | str) -> str:
	"""Guesses the content type from the given path's name, adding a charset
	to textual types."""
	name = str(path)
	res = MIME_TYPES.get(name.rsplit(".", 1)[-1].lower()) or mimetypes.guess_type(
		name
	)[0]
	if not res:
		return "application/octet-stream"
	elif res.startswith(TEXT_TYPES):
		return f"{res}; charset=utf-8"
	else:
		return res


# EOF
