from typing import Any
from enum import Enum
from pathlib import Path
import json as basejson


def asPrimitive(value: Any) -> Any:
	"""Converts named tuples, enums and paths to values that the `json`
	module can encode."""
	if value is None or type(value) in (bool, float, int, str):
		return value
	elif isinstance(value, tuple) and hasattr(value, "_fields"):
		return {k: asPrimitive(getattr(value, k)) for k in value._fields}
	elif isinstance(value, (list, tuple, set)):
		return [asPrimitive(_) for _ in value]
	elif isinstance(value, dict):
		return {str(k): asPrimitive(v) for k, v in value.items()}
	elif isinstance(value, Enum):
		return asPrimitive(value.value)
	elif isinstance(value, Path):
		return str(value)
	else:
		return value


def json(value: Any) -> bytes:
	"""Encodes the value as UTF-8 JSON."""
	return basejson.dumps(asPrimitive(value)).encode("utf8")


# EOF
