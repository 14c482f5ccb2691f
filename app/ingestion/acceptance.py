from app.ingestion.exceptions import EmptyUploadError, FileTooLargeError, UnsupportedTypeError
from app.parsing.detector import file_extension

ALLOWED_EXTENSIONS = frozenset({".csv", ".json", ".txt", ".log"})
ALLOWED_MIME_TYPES = frozenset({
    "text/plain",
    "text/csv",
    "application/json",
    "application/vnd.ms-excel",
})


def check_upload(
    buffer: bytes | None,
    filename: str | None,
    mime_type: str | None,
    max_bytes: int,
) -> bytes:
    """Apply the upload acceptance rules before the buffer reaches parsing.

    Raises:
        EmptyUploadError: if no buffer was provided.
        UnsupportedTypeError: if neither extension nor MIME type is allowed.
        FileTooLargeError: if the buffer exceeds max_bytes.
    """
    if buffer is None:
        raise EmptyUploadError('No file uploaded. Use form-data field "file".')
    extension_ok = file_extension(filename) in ALLOWED_EXTENSIONS
    mime_ok = (mime_type or "").strip().lower() in ALLOWED_MIME_TYPES
    if not (extension_ok or mime_ok):
        raise UnsupportedTypeError("Unsupported file type. Allowed: CSV, JSON, TXT, LOG")
    if len(buffer) > max_bytes:
        raise FileTooLargeError(
            f"File is {len(buffer)} bytes; the limit is {max_bytes} bytes"
        )
    return buffer
