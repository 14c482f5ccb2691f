from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ModelOutput:
    """Raw output of one model call: text, or base64 inline data, or neither."""

    text: str | None = None
    inline_data: str | None = None


@dataclass(frozen=True)
class DataOverview:
    records: int = 0
    columns: list[str] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (self.records or self.columns or self.notes)


@dataclass(frozen=True)
class SummaryResult:
    """Structured insight summary produced by the summarization pipeline."""

    summary: str = ""
    file_type_guess: str = ""
    probable_domain: str = ""
    key_fields: list[str] = field(default_factory=list)
    insights: list[str] = field(default_factory=list)
    anomalies: list[str] = field(default_factory=list)
    data_overview: DataOverview = field(default_factory=DataOverview)

    def is_empty(self) -> bool:
        return not (
            self.summary
            or self.file_type_guess
            or self.probable_domain
            or self.key_fields
            or self.insights
            or self.anomalies
        ) and self.data_overview.is_empty()

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.summary,
            "file_type_guess": self.file_type_guess,
            "probable_domain": self.probable_domain,
            "key_fields": list(self.key_fields),
            "insights": list(self.insights),
            "anomalies": list(self.anomalies),
            "data_overview": {
                "records": self.data_overview.records,
                "columns": list(self.data_overview.columns),
                "notes": list(self.data_overview.notes),
            },
        }

    @classmethod
    def from_payload(cls, raw: dict[str, Any]) -> "SummaryResult":
        """Build from a loosely typed payload (model output or a stored row).

        Unknown keys are dropped; wrongly typed fields fall back to empty values.
        """
        overview = raw.get("data_overview")
        if not isinstance(overview, dict):
            overview = {}
        records = overview.get("records")
        return cls(
            summary=_as_text(raw.get("summary")),
            file_type_guess=_as_text(raw.get("file_type_guess")),
            probable_domain=_as_text(raw.get("probable_domain")),
            key_fields=_as_text_list(raw.get("key_fields")),
            insights=_as_text_list(raw.get("insights")),
            anomalies=_as_text_list(raw.get("anomalies")),
            data_overview=DataOverview(
                records=records if isinstance(records, int) and not isinstance(records, bool) else 0,
                columns=_as_text_list(overview.get("columns")),
                notes=_as_text_list(overview.get("notes")),
            ),
        )


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float, bool)):
        return str(value)
    return ""


def _as_text_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item if isinstance(item, str) else str(item) for item in value if item is not None]
