from app.parsing.detector import detect_file_type
from app.parsing.exceptions import ParseError
from app.parsing.file_parser import parse_file
from app.parsing.models import ParsedDocument

__all__ = ["ParseError", "ParsedDocument", "detect_file_type", "parse_file"]
