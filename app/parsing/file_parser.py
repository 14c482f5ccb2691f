from app.logging.logger import Log
from app.parsing.detector import detect_file_type
from app.parsing.factory import ParserFactory
from app.parsing.models import ParsedDocument


def parse_file(
    buffer: bytes,
    filename: str | None = None,
    mime_type: str | None = None,
) -> ParsedDocument:
    """Detect the buffer's type and parse it.

    Raises:
        ParseError: if the buffer is malformed for its detected type.
    """
    filetype = detect_file_type(buffer, filename, mime_type)
    Log.debug(f"Detected filetype '{filetype}' for {filename or '<unnamed>'}")
    document = ParserFactory.create(filetype).parse(buffer)
    Log.info(f"Parsed {filename or '<unnamed>'}: {document.description}")
    return document
