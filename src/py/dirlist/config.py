from os import getenv

from .utils.logging import LogLevel, warning


def intenv(name: str, default: int) -> int:
	"""Reads the integer environment variable `name`, falling back to
	`default` with a warning when it is not a number."""
	value: str | None = getenv(name)
	if value is None:
		return default
	try:
		return int(value)
	except ValueError:
		warning(
			"Invalid integer in environment, using default",
			Variable=name,
			Value=value,
			Default=default,
		)
		return default


def levelenv(name: str, default: str) -> str:
	"""Like `intenv`, for the name of a `LogLevel`."""
	value: str = getenv(name, default)
	if value in LogLevel.__members__:
		return value
	warning(
		"Invalid log level in environment, using default",
		Variable=name,
		Value=value,
		Default=default,
	)
	return default


# Name of the file served in place of a listing when `Options.Index` is set
INDEX: str = getenv("DIRLIST_INDEX", "index.html")

# Routes with a lower rank are tried first
RANK: int = intenv("DIRLIST_RANK", 10)

# One of Debug, Info, Warning, Error, Exception
LOG_LEVEL: str = levelenv("DIRLIST_LOG_LEVEL", "Info")

DEFAULT_ENCODING: str = "utf8"

# EOF
