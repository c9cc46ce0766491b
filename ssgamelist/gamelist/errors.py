"""Error types for gamelist loading, saving and clone reconciliation."""


class GameListError(Exception):
    """Base exception for gamelist errors."""
    pass


class ParseError(GameListError):
    """Gamelist document could not be read or is not well-formed XML."""
    pass


class SchemaError(GameListError):
    """Well-formed document without the expected root or container tags."""
    pass


class ReferenceLoadError(GameListError):
    """Reference dat for clone reconciliation is unreadable or malformed."""
    pass


class WriteError(GameListError):
    """Gamelist document could not be serialized or written."""
    pass
