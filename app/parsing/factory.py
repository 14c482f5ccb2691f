from app.parsing.base import BaseParser
from app.parsing.csv_parser import CsvParser
from app.parsing.json_parser import JsonParser
from app.parsing.log_parser import LogTextParser
from app.parsing.models import FileType


class ParserFactory:
    """Creates the parser for a detected filetype."""

    @classmethod
    def create(cls, filetype: FileType) -> BaseParser:
        if filetype == "csv":
            return CsvParser()
        if filetype == "json":
            return JsonParser()
        if filetype in ("log", "txt"):
            return LogTextParser(filetype=filetype)
        raise ValueError(
            f"Unknown filetype '{filetype}'. Choose from: ['csv', 'json', 'log', 'txt']"
        )
