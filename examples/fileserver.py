"""
Directory Listing Example

Serves the current directory with listings for directories that have no
`index.html`, behind a second server that only answers for `/docs`.

Usage:
    uvicorn fileserver:app

Test with:
    http://localhost:8000/            # Listing of the current directory
    http://localhost:8000/docs        # Redirected to /docs/
    http://localhost:8000/README.md   # A file
"""

import os

from dirlist import ListingFileServer, Options
from dirlist.bridge import server
from dirlist.utils.logging import info

# Tried first, declines anything that is not in ./docs
docs = ListingFileServer(
	"docs" if os.path.isdir("docs") else ".",
	Options.Index | Options.NormalizeDirs,
	prefix="/docs",
	rank=1,
)

# Everything else, answering 404 for what does not exist
files = ListingFileServer(".", Options.Default)

info("Serving files", Docs=str(docs.root), Files=str(files.root))
app = server(docs, files)

# EOF
