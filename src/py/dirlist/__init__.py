from . import config
from .utils.logging import setLevel

from .http.model import HTTPRequest, HTTPResponse  # NOQA: F401
from .options import Options, DEFAULT_RANK, DEFAULT_INDEX  # NOQA: F401
from .paths import PathError, PathEscape, PathNotFound, ResolvedPath, resolve  # NOQA: F401
from .entries import Entry, EntryKind, classify  # NOQA: F401
from .listing import Listing, ListingError, render, toHTML, toJSON  # NOQA: F401
from .routing import Decline, Route, Router  # NOQA: F401
from .handler import ListingFileServer  # NOQA: F401

setLevel(config.LOG_LEVEL)

# EOF
