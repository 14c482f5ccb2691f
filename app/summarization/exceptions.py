class SummarizationError(Exception):
    """Base exception for all summarization errors."""


class TransportError(SummarizationError):
    """Raised when the model call fails: non-OK status, network error or timeout."""


class ModelBlockedError(SummarizationError):
    """Raised when the model returns no candidates or blocks the content."""


class EmptyOutputError(SummarizationError):
    """Raised when a successful model call carries no usable text."""


class TerminalSummarizationError(SummarizationError):
    """Raised when no tier of the fallback ladder produced a summary."""
