import io
import re
from typing import Any

import pandas as pd

from app.parsing.base import BaseParser, decode_text, normalize_newlines
from app.parsing.exceptions import ParseError
from app.parsing.models import ParsedDocument, RecordsData

_ALPHA = re.compile(r"[a-zA-Z]")


def has_header(first_line: str) -> bool:
    """A first line is a header if any quote-stripped token contains a letter."""
    tokens = (token.strip().strip('"') for token in first_line.split(","))
    return any(_ALPHA.search(token) for token in tokens)


class CsvParser(BaseParser):
    """Parses comma-separated text into records keyed by column name."""

    def parse(self, buffer: bytes) -> ParsedDocument:
        text = normalize_newlines(decode_text(buffer))
        rows = self._read_rows(text) if text.strip() else []
        detected_columns = list(rows[0].keys()) if rows else []
        return ParsedDocument(
            filetype="csv",
            data=RecordsData(rows=rows),
            record_count=len(rows),
            detected_columns=detected_columns,
            description=f"CSV with {len(detected_columns)} columns and {len(rows)} rows",
        )

    def _read_rows(self, text: str) -> list[dict[str, Any]]:
        first_line = text.lstrip("\n").split("\n", 1)[0]
        # The header is taken from the first row so wider rows fail in the tokenizer.
        try:
            frame = pd.read_csv(
                io.StringIO(text),
                header=None,
                index_col=False,
                dtype=str,
                na_filter=False,
                skip_blank_lines=True,
                skipinitialspace=True,
            )
        except (pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
            raise ParseError(f"Malformed CSV: {exc}") from exc

        lines = [
            [str(value).strip() for value in values]
            for values in frame.fillna("").itertuples(index=False, name=None)
        ]
        if has_header(first_line):
            columns, lines = (lines[0], lines[1:]) if lines else ([], [])
        else:
            columns = [str(position) for position in range(frame.shape[1])]

        rows: list[dict[str, Any]] = []
        for cells in lines:
            if not any(cells):
                continue
            rows.append(dict(zip(columns, cells)))
        return rows
