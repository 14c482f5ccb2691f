"""Reduces a parsed document to a bounded sample for model prompts."""

import json
from typing import Any

from app.parsing.models import (
    DocumentData,
    LinesData,
    ObjectData,
    PrimitiveData,
    RecordsData,
)

PROMPT_CHAR_BUDGET = 6_000
METADATA_CHAR_BUDGET = 1_500
DEFAULT_CHAR_BUDGET = 120_000

MAX_SAMPLE_ROWS = 10
MAX_SAMPLE_COLUMNS = 20
MAX_SAMPLE_LINES = 20
MAX_SAMPLE_KEYS = 20


def truncation_marker(original_length: int) -> str:
    return f"\n\n[Truncated for summarization: original length {original_length} chars]"


def truncate_text(text: str, max_chars: int = DEFAULT_CHAR_BUDGET) -> str:
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + truncation_marker(len(text))


def to_json_text(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, default=str)


def sample_data(
    data: DocumentData,
    *,
    max_rows: int = MAX_SAMPLE_ROWS,
    max_columns: int = MAX_SAMPLE_COLUMNS,
    max_lines: int = MAX_SAMPLE_LINES,
    max_keys: int = MAX_SAMPLE_KEYS,
) -> dict[str, Any]:
    """Structural sample of the data; the input is never modified."""
    if isinstance(data, RecordsData):
        rows = data.rows[:max_rows]
        columns: list[str] = []
        for row in rows:
            if not isinstance(row, dict):
                continue
            for key in row:
                if len(columns) >= max_columns:
                    break
                if key not in columns:
                    columns.append(key)
        return {
            "shape": "records",
            "total_records": len(data.rows),
            "columns": columns,
            "rows": list(rows),
        }
    if isinstance(data, LinesData):
        return {
            "shape": "lines",
            "total_lines": len(data.items),
            "lines": list(data.items[:max_lines]),
        }
    if isinstance(data, ObjectData):
        keys = list(data.mapping)[:max_keys]
        return {
            "shape": "object",
            "total_keys": len(data.mapping),
            "object": {key: _shallow(data.mapping[key]) for key in keys},
        }
    if isinstance(data, PrimitiveData):
        return {"shape": "primitive", "value": data.value}
    raise TypeError(f"Unsupported document data: {type(data).__name__}")


def _shallow(value: Any) -> Any:
    if isinstance(value, list):
        return f"[array(len={len(value)})]"
    if isinstance(value, dict):
        return f"{{object(keys={len(value)})}}"
    return value


def build_sample(data: DocumentData, max_chars: int = PROMPT_CHAR_BUDGET) -> str:
    return truncate_text(to_json_text(sample_data(data)), max_chars)
