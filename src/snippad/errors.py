"""Exceptions raised by the snippet store and its callers."""


class SnippadError(Exception):
    """Base exception for snippad."""


class ConfigError(SnippadError):
    """Raised when configuration is missing or invalid."""


class StoreNotFound(SnippadError):
    """Raised when the snippet document is missing or unreadable."""


class ParseError(SnippadError):
    """Raised when the snippet document cannot be parsed into a heading tree."""

    def __init__(self, message: str, *, source: str = "<string>", line: int | None = None) -> None:
        self.source = source
        self.line = line
        where = f"{source}:{line}" if line is not None else source
        super().__init__(f"{where}: {message}")


class InsertAborted(SnippadError):
    """Raised when a snippet insertion cannot proceed."""
