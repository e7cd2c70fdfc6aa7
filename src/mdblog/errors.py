"""Exception types raised while collecting, rendering, and building posts"""


class MdblogError(Exception):
    """Base class for all mdblog errors."""


class MalformedFrontMatterError(MdblogError):
    """Front matter block is opened but never closed, or has an unparseable line."""


class InvalidFilenameError(MdblogError):
    """Post filename carries a date prefix that is not a valid calendar date, or no slug."""


class DuplicateSlugError(MdblogError):
    """Two post files resolve to the same slug."""


class UnknownLayoutError(MdblogError):
    """Requested layout has no template (strict mode only)."""


class SiteBuildError(MdblogError):
    """Directory-level failure that aborts the whole build."""
