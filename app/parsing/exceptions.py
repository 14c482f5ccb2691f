class ParseError(Exception):
    """Raised when an uploaded buffer cannot be parsed as its detected type."""
