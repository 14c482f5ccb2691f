import threading
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from app.database.models import ProcessingRecord
from app.database.repositories.base import BaseRecordStore
from app.ingestion.models import Metadata
from app.summarization.models import SummaryResult
from app.worker.state_machine import ProcessingStatus


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryRecordStore(BaseRecordStore):
    """Thread-safe, process-local record store for the CLI and tests."""

    def __init__(self, clock: Callable[[], datetime] = _utc_now) -> None:
        self._records: dict[str, ProcessingRecord] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def create(
        self,
        record_id: str,
        metadata: Metadata,
        raw_data: Any,
        status: ProcessingStatus = ProcessingStatus.PROCESSING,
    ) -> None:
        now = self._clock()
        with self._lock:
            if record_id in self._records:
                raise ValueError(f"Record {record_id} already exists")
            self._records[record_id] = ProcessingRecord(
                id=record_id,
                metadata=metadata,
                raw_data=raw_data,
                status=status,
                created_at=now,
                updated_at=now,
            )

    def update_summary(
        self,
        record_id: str,
        summary: SummaryResult | None,
        status: ProcessingStatus,
        last_error: str | None,
    ) -> bool:
        with self._lock:
            record = self._records.get(record_id)
            if record is None:
                return False
            self._records[record_id] = replace(
                record,
                summary=summary if summary is not None else record.summary,
                status=status,
                last_error=last_error,
                updated_at=self._clock(),
            )
            return True

    def get(self, record_id: str) -> ProcessingRecord | None:
        with self._lock:
            record = self._records.get(record_id)
            return replace(record) if record is not None else None

    def delete(self, record_id: str) -> bool:
        with self._lock:
            return self._records.pop(record_id, None) is not None

    def list_all(self) -> list[ProcessingRecord]:
        with self._lock:
            records = [replace(record) for record in self._records.values()]
        return sorted(records, key=lambda r: r.created_at or _utc_now(), reverse=True)

    def find_stale_processing(self, older_than_seconds: int, limit: int = 20) -> list[str]:
        cutoff = self._clock() - timedelta(seconds=older_than_seconds)
        with self._lock:
            stale = [
                record
                for record in self._records.values()
                if record.status is ProcessingStatus.PROCESSING
                and record.updated_at is not None
                and record.updated_at < cutoff
            ]
        stale.sort(key=lambda r: r.updated_at)
        return [record.id for record in stale[:limit]]
