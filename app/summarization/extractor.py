"""Recovers a JSON object from raw model output.

Strategies run in a fixed order and each one is usable on its own:
fence strip -> strict parse -> brace-slice parse -> give up.
"""

import base64
import binascii
import json
from typing import Any, Callable

from app.summarization.models import ModelOutput

JsonObject = dict[str, Any]


def decode_output_text(output: ModelOutput | None) -> str:
    """Return the model's text, decoding base64 inline data when no text was sent."""
    if output is None:
        return ""
    if output.text and output.text.strip():
        return output.text
    if output.inline_data:
        try:
            return base64.b64decode(output.inline_data, validate=True).decode("utf-8")
        except (binascii.Error, ValueError):
            return ""
    return ""


def strip_code_fences(text: str) -> str:
    cleaned = text.strip()
    if not cleaned.startswith("```"):
        return cleaned
    lines = cleaned.splitlines()
    if lines and lines[0].startswith("```"):
        lines = lines[1:]
    if lines and lines[-1].strip() == "```":
        lines = lines[:-1]
    elif lines and lines[-1].rstrip().endswith("```"):
        lines[-1] = lines[-1].rstrip()[:-3]
    return "\n".join(lines).strip()


def _accept(value: Any) -> JsonObject | None:
    if isinstance(value, dict) and value:
        return value
    return None


def parse_strict(text: str) -> JsonObject | None:
    try:
        return _accept(json.loads(text))
    except json.JSONDecodeError:
        return None


def parse_brace_slice(text: str) -> JsonObject | None:
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    return parse_strict(text[start : end + 1])


PARSE_STRATEGIES: tuple[Callable[[str], JsonObject | None], ...] = (
    parse_strict,
    parse_brace_slice,
)


def extract_json_object(text: str) -> JsonObject | None:
    if not text or not text.strip():
        return None
    cleaned = strip_code_fences(text)
    for strategy in PARSE_STRATEGIES:
        parsed = strategy(cleaned)
        if parsed is not None:
            return parsed
    return None


def extract_summary_payload(output: ModelOutput | None) -> JsonObject | None:
    """Full extraction: inline-data decode, then the ordered parse strategies."""
    return extract_json_object(decode_output_text(output))
