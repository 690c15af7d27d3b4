import io
from pathlib import Path

import pytest

from dirlist.http.model import HTTPRequest
from dirlist.utils.logging import LogLevel, LogOutput

# --
# The sample tree used across tests:
#
#   www/
#   ├─ .hidden/note.txt
#   ├─ docs/{.secret, a.txt, b.txt, img/logo.png}
#   ├─ site/{index.html, other.txt}
#   └─ top.txt


@pytest.fixture(autouse=True)
def logs(monkeypatch: pytest.MonkeyPatch) -> io.StringIO:
	"""Captures the log output, which tests can inspect."""
	output = io.StringIO()
	monkeypatch.setattr(LogOutput, "stream", output)
	monkeypatch.setattr(LogOutput, "level", LogLevel.Debug)
	return output


@pytest.fixture
def root(tmp_path: Path) -> Path:
	www = tmp_path / "www"
	(www / "docs" / "img").mkdir(parents=True)
	(www / "docs" / "a.txt").write_text("A")
	(www / "docs" / "b.txt").write_text("B")
	(www / "docs" / ".secret").write_text("secret")
	(www / "docs" / "img" / "logo.png").write_bytes(b"\x89PNG")
	(www / "site").mkdir()
	(www / "site" / "index.html").write_text("<h1>Site</h1>")
	(www / "site" / "other.txt").write_text("other")
	(www / ".hidden").mkdir()
	(www / ".hidden" / "note.txt").write_text("note")
	(www / "top.txt").write_text("top")
	return www.resolve()


def get(
	path: str, query: dict[str, str] | None = None, method: str = "GET"
) -> HTTPRequest:
	return HTTPRequest(method, path, query)


# EOF
