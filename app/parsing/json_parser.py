import json
import math

from app.parsing.base import BaseParser
from app.parsing.exceptions import ParseError
from app.parsing.models import ParsedDocument, classify_json


def _reject_constant(token: str) -> None:
    raise ValueError(f"{token} is not a valid JSON value")


def _finite_float(token: str) -> float:
    number = float(token)
    if math.isinf(number):
        raise ValueError(f"{token} overflows a double")
    return number


class JsonParser(BaseParser):
    """Parses a JSON document; no recovery is attempted on invalid input."""

    def parse(self, buffer: bytes) -> ParsedDocument:
        try:
            text = buffer.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ParseError(f"Invalid JSON: not UTF-8 text ({exc})") from exc
        try:
            value = json.loads(
                text, parse_constant=_reject_constant, parse_float=_finite_float
            )
        except ValueError as exc:
            raise ParseError(f"Invalid JSON: {exc}") from exc

        if isinstance(value, list):
            first = value[0] if value else None
            columns = list(first.keys()) if isinstance(first, dict) else []
            return ParsedDocument(
                filetype="json",
                data=classify_json(value),
                record_count=len(value),
                detected_columns=columns,
                description=f"JSON array with {len(value)} records",
            )
        if isinstance(value, dict):
            return ParsedDocument(
                filetype="json",
                data=classify_json(value),
                record_count=1,
                detected_columns=list(value.keys()),
                description=f"JSON object with {len(value)} keys",
            )
        return ParsedDocument(
            filetype="json",
            data=classify_json(value),
            record_count=1,
            detected_columns=["value"],
            description="Primitive JSON value",
        )
