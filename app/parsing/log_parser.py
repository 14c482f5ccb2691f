import re
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from app.parsing.base import BaseParser, decode_text, normalize_newlines
from app.parsing.models import FileType, ParsedDocument, RecordsData

LOG_COLUMNS = ["timestamp", "message"]

_TIMESTAMP_PATTERNS = (
    re.compile(r"^\[?(\d{4}-\d{2}-\d{2}[ T]\d{2}:\d{2}:\d{2}(?:\.\d+)?Z?)\]?"),
    re.compile(r"^(\w{3}\s+\d{1,2}\s+\d{2}:\d{2}:\d{2})"),
)
_HTTP_STATUS = re.compile(r"\s(\d{3})\s")
_LEVEL = re.compile(r"\b(INFO|WARN|ERROR|DEBUG|FATAL|TRACE)\b", re.IGNORECASE)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_instant(instant: datetime) -> str:
    """ISO-8601 UTC with millisecond precision and a trailing Z."""
    utc = instant.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def extract_timestamp(line: str) -> str | None:
    for pattern in _TIMESTAMP_PATTERNS:
        match = pattern.match(line)
        if match:
            return match.group(1)
    return None


class LogTextParser(BaseParser):
    """Parses log or plain text into one record per non-blank line."""

    def __init__(
        self,
        filetype: FileType = "log",
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._filetype = filetype
        self._clock = clock

    def parse(self, buffer: bytes) -> ParsedDocument:
        text = normalize_newlines(decode_text(buffer))
        lines = [line for line in text.split("\n") if line.strip()]
        start = self._clock()
        records = [self._parse_line(line, index, start) for index, line in enumerate(lines)]

        statuses: list[int] = []
        for record in records:
            status = record.get("http_status")
            if status is not None and status not in statuses:
                statuses.append(status)

        description = f"Log/TXT file with {len(records)} lines"
        if statuses:
            description += f"; statuses: {', '.join(str(s) for s in statuses)}"

        return ParsedDocument(
            filetype=self._filetype,
            data=RecordsData(rows=records),
            record_count=len(records),
            detected_columns=list(LOG_COLUMNS) if records else [],
            description=description,
        )

    @staticmethod
    def _parse_line(line: str, index: int, start: datetime) -> dict[str, Any]:
        timestamp = extract_timestamp(line)
        if timestamp is None:
            # Synthetic timestamps keep per-line ordering strictly increasing.
            timestamp = format_instant(start + timedelta(seconds=index))

        record: dict[str, Any] = {"timestamp": timestamp, "message": line}
        status_match = _HTTP_STATUS.search(line)
        if status_match:
            record["http_status"] = int(status_match.group(1))
        level_match = _LEVEL.search(line)
        if level_match:
            record["level"] = level_match.group(1).upper()
        return record
