import sys
import time
from enum import Enum
from typing import NamedTuple, Any, TextIO
from contextvars import ContextVar
from .term import Term

__doc__ = """
Structured logging for the file server. Each call builds a `LogEntry` that
carries free-form context (`Path=…`, `Status=…`) next to its message, and
`send` writes it to stderr as a single coloured line.
"""

LogOrigin: ContextVar[str] = ContextVar("LogOrigin", default="dirlist")


class LogLevel(Enum):
	Debug = 0
	Info = 10
	Warning = 30
	Error = 40  # A managed error
	Exception = 50  # An un-managed error


LOG_LEVEL_COLOR = {
	LogLevel.Debug: 31,
	LogLevel.Info: 75,
	LogLevel.Warning: 202,
	LogLevel.Error: 160,
	LogLevel.Exception: 124,
}

LOG_LEVEL_ICON = {
	LogLevel.Debug: "┄",
	LogLevel.Info: "»",
	LogLevel.Warning: "!",
	LogLevel.Error: "✘",
	LogLevel.Exception: "‼",
}


class LogEntry(NamedTuple):
	origin: str
	time: float
	level: LogLevel = LogLevel.Info
	message: str | None = None
	code: int | str | None = None
	context: dict[str, Any] | None = None


class LogOutput:
	"""Where and from which level entries are written. Tests swap `stream`
	to capture the output."""

	stream: TextIO = sys.stderr
	level: LogLevel = LogLevel.Info


def setLevel(level: LogLevel | str) -> LogLevel:
	"""Sets the minimum level of the entries that get written."""
	LogOutput.level = level if isinstance(level, LogLevel) else LogLevel[level]
	return LogOutput.level


def formatData(value: Any) -> str:
	if value is None or value == () or value == [] or value == {}:
		return "◌"
	elif isinstance(value, dict):
		return " ".join(
			f"{Term.BOLD}{k}{Term.RESET}={formatData(v)}" for k, v in value.items()
		)
	elif isinstance(value, list) or isinstance(value, tuple):
		return ",".join(formatData(v) for v in value)
	elif isinstance(value, str):
		return repr(value) if " " in value else value
	elif isinstance(value, bool):
		return "✓" if value else "✗"
	elif isinstance(value, float):
		return f"{value:0.2f}"
	else:
		return str(value)


def logged(level: LogLevel) -> bool:
	"""Tells if entries of the given level are currently written, so that
	callers can skip building expensive context."""
	return level.value >= LogOutput.level.value


def send(entry: LogEntry) -> LogEntry:
	if not logged(entry.level):
		return entry
	clr: str = Term.Color(LOG_LEVEL_COLOR[entry.level])
	icon: str = LOG_LEVEL_ICON[entry.level]
	code: str = f" {entry.code}" if entry.code is not None else ""
	context: str = f" {formatData(entry.context)}" if entry.context else ""
	out = LogOutput.stream
	origin: str = f"{clr}{Term.BOLD}[{entry.origin}]{Term.RESET}"
	out.write(f"{origin}{clr} {icon}{code} {entry.message}{Term.RESET}{context}\n")
	out.flush()
	return entry


def entry(
	*,
	origin: str | None = None,
	level: LogLevel = LogLevel.Info,
	message: str | None = None,
	code: int | str | None = None,
	context: dict[str, Any] | None = None,
) -> LogEntry:
	return LogEntry(
		origin=origin or LogOrigin.get(),
		time=time.time(),
		level=level,
		message=message,
		code=code,
		context=context,
	)


def debug(message: str, *, origin: str | None = None, **context: Any) -> LogEntry:
	return send(
		entry(message=message, level=LogLevel.Debug, origin=origin, context=context)
	)


def info(message: str, *, origin: str | None = None, **context: Any) -> LogEntry:
	return send(entry(message=message, origin=origin, context=context))


def warning(message: str, *, origin: str | None = None, **context: Any) -> LogEntry:
	return send(
		entry(message=message, level=LogLevel.Warning, origin=origin, context=context)
	)


def error(
	message: str,
	code: int | str | None,
	*,
	origin: str | None = None,
	**context: Any,
) -> LogEntry:
	return send(
		entry(
			message=message,
			code=code,
			level=LogLevel.Error,
			origin=origin,
			context=context,
		)
	)


def exception(
	exception: BaseException,
	message: str | None = None,
	*,
	origin: str | None = None,
) -> BaseException:
	"""Logs the exception along with its traceback, and returns it so that
	this can be used as `raise exception(e)`."""
	name: str = exception.__class__.__name__
	send(
		entry(
			message=f"{message}: [{name}] {exception}" if message else f"[{name}] {exception}",
			level=LogLevel.Exception,
			origin=origin,
		)
	)
	if logged(LogLevel.Exception):
		out = LogOutput.stream
		tb = exception.__traceback__
		while tb:
			code = tb.tb_frame.f_code
			out.write(
				f"{Term.DIM}... in {code.co_name:15s} at {tb.tb_lineno:4d} in {code.co_filename}{Term.RESET}\n"
			)
			tb = tb.tb_next
		out.flush()
	return exception


# EOF
