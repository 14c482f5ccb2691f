class IngestionError(Exception):
    """Base exception for upload-boundary errors."""


class EmptyUploadError(IngestionError):
    """Raised when no file content was provided."""


class UnsupportedTypeError(IngestionError):
    """Raised when neither the extension nor the MIME type is accepted."""


class FileTooLargeError(IngestionError):
    """Raised when the upload exceeds the configured size ceiling."""


class RecordNotFoundError(IngestionError):
    """Raised when a processing record does not exist."""
