from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from app.database.connection import get_connection
from app.database.models import ProcessingRecord
from app.database.repositories.base import BaseRecordStore
from app.ingestion.models import Metadata
from app.summarization.models import SummaryResult
from app.worker.state_machine import ProcessingStatus

_SELECT_COLUMNS = """
    id, metadata_json, raw_json, summary_json, status, last_error,
    uploaded_at, updated_at
"""


class ProcessedFilesRepository(BaseRecordStore):
    """Database operations for the processed_files table."""

    def ensure_schema(self) -> None:
        """Create the processed_files table and its status index if missing."""
        with get_connection() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS processed_files (
                    id text PRIMARY KEY,
                    filename text NOT NULL,
                    filetype text NOT NULL,
                    size numeric,
                    uploaded_at timestamptz NOT NULL DEFAULT NOW(),
                    metadata_json jsonb NOT NULL,
                    summary_json jsonb,
                    raw_json jsonb,
                    status text NOT NULL DEFAULT 'processing',
                    last_error text,
                    updated_at timestamptz NOT NULL DEFAULT NOW()
                )
                """
            )
            conn.execute(
                """
                CREATE INDEX IF NOT EXISTS processed_files_status_updated_idx
                ON processed_files (status, updated_at)
                """
            )
            conn.commit()

    def create(
        self,
        record_id: str,
        metadata: Metadata,
        raw_data: Any,
        status: ProcessingStatus = ProcessingStatus.PROCESSING,
    ) -> None:
        with get_connection() as conn:
            conn.execute(
                """
                INSERT INTO processed_files
                    (id, filename, filetype, size, metadata_json, summary_json,
                     raw_json, status)
                VALUES (%s, %s, %s, %s, %s, NULL, %s, %s)
                """,
                (
                    record_id,
                    metadata.filename,
                    metadata.filetype,
                    metadata.size_kb,
                    Jsonb(metadata.to_dict()),
                    Jsonb(raw_data),
                    status.value,
                ),
            )
            conn.commit()

    def update_summary(
        self,
        record_id: str,
        summary: SummaryResult | None,
        status: ProcessingStatus,
        last_error: str | None,
    ) -> bool:
        summary_value = Jsonb(summary.to_dict()) if summary is not None else None
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE processed_files
                    SET summary_json = COALESCE(%s, summary_json),
                        status = %s,
                        last_error = %s,
                        updated_at = NOW()
                    WHERE id = %s
                    """,
                    (summary_value, status.value, last_error, record_id),
                )
                updated = cur.rowcount > 0
            conn.commit()
        return updated

    def get(self, record_id: str) -> ProcessingRecord | None:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_SELECT_COLUMNS} FROM processed_files WHERE id = %s LIMIT 1",
                    (record_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None
        return self._to_record(row)

    def delete(self, record_id: str) -> bool:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute("DELETE FROM processed_files WHERE id = %s", (record_id,))
                deleted = cur.rowcount > 0
            conn.commit()
        return deleted

    def list_all(self) -> list[ProcessingRecord]:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_SELECT_COLUMNS} FROM processed_files ORDER BY uploaded_at DESC"
                )
                rows = cur.fetchall()
        return [self._to_record(row) for row in rows]

    def find_stale_processing(self, older_than_seconds: int, limit: int = 20) -> list[str]:
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    SELECT id
                    FROM processed_files
                    WHERE status = 'processing'
                      AND updated_at < NOW() - (%s * INTERVAL '1 second')
                    ORDER BY updated_at
                    LIMIT %s
                    """,
                    (older_than_seconds, limit),
                )
                rows = cur.fetchall()
        return [row[0] for row in rows]

    @staticmethod
    def _to_record(row: dict[str, Any]) -> ProcessingRecord:
        summary_json = row["summary_json"]
        return ProcessingRecord(
            id=row["id"],
            metadata=Metadata.from_dict(row["metadata_json"] or {}),
            raw_data=row["raw_json"],
            status=ProcessingStatus(row["status"]),
            summary=SummaryResult.from_payload(summary_json) if summary_json else None,
            last_error=row["last_error"],
            created_at=row["uploaded_at"],
            updated_at=row["updated_at"],
        )
