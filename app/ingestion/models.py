from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from app.parsing.log_parser import format_instant
from app.parsing.models import ParsedDocument


def size_in_kb(size_bytes: int) -> float:
    return round(size_bytes / 1024, 1)


@dataclass(frozen=True)
class Metadata:
    """Descriptive view of one upload; never mutated after creation."""

    filename: str
    filetype: str
    size_kb: float
    upload_timestamp: str
    record_count: int
    detected_columns: tuple[str, ...] = ()
    data_shape: str = ""

    @classmethod
    def from_document(
        cls,
        document: ParsedDocument,
        *,
        filename: str,
        size_bytes: int,
        uploaded_at: datetime | None = None,
    ) -> "Metadata":
        return cls(
            filename=filename,
            filetype=document.filetype,
            size_kb=size_in_kb(size_bytes),
            upload_timestamp=format_instant(uploaded_at or datetime.now(timezone.utc)),
            record_count=document.record_count,
            detected_columns=tuple(document.detected_columns),
            data_shape=document.data.shape,
        )

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "Metadata":
        return cls(
            filename=str(raw.get("filename", "")),
            filetype=str(raw.get("filetype", "")),
            size_kb=float(raw.get("size_kb") or 0.0),
            upload_timestamp=str(raw.get("upload_timestamp", "")),
            record_count=int(raw.get("record_count") or 0),
            detected_columns=tuple(str(c) for c in raw.get("detected_columns") or ()),
            data_shape=str(raw.get("data_shape") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "filename": self.filename,
            "filetype": self.filetype,
            "size_kb": self.size_kb,
            "upload_timestamp": self.upload_timestamp,
            "record_count": self.record_count,
            "detected_columns": list(self.detected_columns),
            "data_shape": self.data_shape,
        }


@dataclass(frozen=True)
class UploadReceipt:
    """Returned to the uploader immediately; summarization continues in the background."""

    id: str
    status: str
    metadata: Metadata
    file_type_description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "status": self.status,
            "metadata": self.metadata.to_dict(),
            "file_type_description": self.file_type_description,
        }
