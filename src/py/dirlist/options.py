from enum import Flag
from . import config

# The rank given to routes when none is set, lower ranks are tried first
DEFAULT_RANK: int = config.RANK

# The index file looked up when `Options.Index` is set
DEFAULT_INDEX: str = config.INDEX


class Options(Flag):
	"""The flags that change how a `ListingFileServer` handles requests. Flags
	combine with `|` and are tested with `in`:

	>    options = Options.Index | Options.NormalizeDirs
	>    Options.Index in options   # True

	- `Index` serves the index file of a directory instead of its listing
	- `DotFiles` makes dot-prefixed files and directories visible
	- `NormalizeDirs` redirects `/dir` to `/dir/`
	- `Missing` answers 404 for missing paths instead of declining them
	"""

	Nothing = 0
	Index = 1
	DotFiles = 2
	NormalizeDirs = 4
	Missing = 8
	Default = Index | NormalizeDirs | Missing


# EOF
