"""Exception hierarchy for movemoro."""


class MovemoroError(Exception):
    """Base exception for movemoro."""


class ConfigError(MovemoroError):
    """Raised when settings contain invalid durations or session counts."""


class CatalogLoadError(MovemoroError):
    """Raised when the exercise catalog is unreachable or malformed."""
