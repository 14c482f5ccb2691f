from abc import ABC, abstractmethod

from app.parsing.models import ParsedDocument


def decode_text(buffer: bytes) -> str:
    """Decode an uploaded buffer as UTF-8 (BOM dropped, bad bytes replaced)."""
    return buffer.decode("utf-8-sig", errors="replace")


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n")


class BaseParser(ABC):
    """Contract for all format parsers."""

    @abstractmethod
    def parse(self, buffer: bytes) -> ParsedDocument:
        """Convert a raw buffer of the parser's format into a ParsedDocument.

        Args:
            buffer: Raw uploaded bytes.

        Returns:
            ParsedDocument with data, record_count, detected_columns, description.

        Raises:
            ParseError: if the buffer is malformed for this format.
        """
