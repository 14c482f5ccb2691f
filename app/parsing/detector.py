"""Classifies an uploaded buffer as csv, json, log or txt."""

from pathlib import PurePath

from app.parsing.models import FileType

SNIFF_BYTES = 512

EXTENSION_TYPES: dict[str, FileType] = {
    ".csv": "csv",
    ".json": "json",
    ".log": "log",
    ".txt": "txt",
}

MIME_TYPES: dict[str, FileType] = {
    "application/json": "json",
    "text/csv": "csv",
    "application/vnd.ms-excel": "csv",
    "text/plain": "txt",
}


def file_extension(filename: str | None) -> str:
    """Return the lowercased extension of filename including the dot, or ''."""
    if not filename:
        return ""
    return PurePath(filename).suffix.lower()


def detect_file_type(
    buffer: bytes,
    filename: str | None = None,
    mime_type: str | None = None,
) -> FileType:
    """Resolve the filetype: extension first, then exact MIME, then content."""
    by_extension = EXTENSION_TYPES.get(file_extension(filename))
    if by_extension is not None:
        return by_extension

    by_mime = MIME_TYPES.get((mime_type or "").strip().lower())
    if by_mime is not None:
        return by_mime

    return sniff_content(buffer)


def sniff_content(buffer: bytes) -> FileType:
    head = buffer[:SNIFF_BYTES].decode("utf-8", errors="ignore").strip()
    if head.startswith(("{", "[")):
        return "json"
    if "," in head and "\n" in head:
        return "csv"
    if "{" in head or "[" in head:
        return "json"
    return "txt"
