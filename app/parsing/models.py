from dataclasses import dataclass, field
from typing import Any, ClassVar, Literal

FileType = Literal["csv", "json", "log", "txt"]

FILE_TYPES: tuple[FileType, ...] = ("csv", "json", "log", "txt")

DataShape = Literal["records", "lines", "object", "primitive"]


@dataclass(frozen=True)
class RecordsData:
    """Array of records: CSV rows, log lines, or a JSON array of objects."""

    shape: ClassVar[DataShape] = "records"
    rows: list[Any] = field(default_factory=list)

    def to_json(self) -> list[Any]:
        return self.rows


@dataclass(frozen=True)
class LinesData:
    """JSON array whose elements are not objects (strings, numbers, nested arrays)."""

    shape: ClassVar[DataShape] = "lines"
    items: list[Any] = field(default_factory=list)

    def to_json(self) -> list[Any]:
        return self.items


@dataclass(frozen=True)
class ObjectData:
    """A single JSON object."""

    shape: ClassVar[DataShape] = "object"
    mapping: dict[str, Any] = field(default_factory=dict)

    def to_json(self) -> dict[str, Any]:
        return self.mapping


@dataclass(frozen=True)
class PrimitiveData:
    """A bare JSON primitive, serialized wrapped as {"value": ...}."""

    shape: ClassVar[DataShape] = "primitive"
    value: Any = None

    def to_json(self) -> dict[str, Any]:
        return {"value": self.value}


DocumentData = RecordsData | LinesData | ObjectData | PrimitiveData


def classify_json(value: Any) -> DocumentData:
    """Decide the shape of a JSON value once, so consumers never re-inspect it."""
    if isinstance(value, list):
        if not value or isinstance(value[0], dict):
            return RecordsData(rows=value)
        return LinesData(items=value)
    if isinstance(value, dict):
        return ObjectData(mapping=value)
    return PrimitiveData(value=value)


def restore_data(shape: str, value: Any) -> DocumentData:
    """Rebuild the variant recorded at parse time from its stored JSON form.

    Rows stored without a shape tag are classified from the value itself.
    """
    if shape == "records" and isinstance(value, list):
        return RecordsData(rows=value)
    if shape == "lines" and isinstance(value, list):
        return LinesData(items=value)
    if shape == "object" and isinstance(value, dict):
        return ObjectData(mapping=value)
    if shape == "primitive" and isinstance(value, dict) and "value" in value:
        return PrimitiveData(value=value["value"])
    return classify_json(value)


@dataclass(frozen=True)
class ParsedDocument:
    """Normalized result of parsing one uploaded buffer."""

    filetype: FileType
    data: DocumentData
    record_count: int
    detected_columns: list[str]
    description: str

    def __post_init__(self) -> None:
        if self.record_count < 0:
            raise ValueError("record_count must be >= 0")
        if self.record_count == 0 and self.detected_columns:
            raise ValueError("detected_columns must be empty when there are no records")

    def to_json_data(self) -> Any:
        return self.data.to_json()
