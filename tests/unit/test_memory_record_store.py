from datetime import datetime, timedelta, timezone

import pytest

from app.database.repositories.memory_record_store import InMemoryRecordStore
from app.ingestion.models import Metadata
from app.summarization.models import SummaryResult
from app.worker.state_machine import ProcessingStatus


FIXED_INSTANT = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


class _Clock:
    def __init__(self) -> None:
        self.now = FIXED_INSTANT

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now = self.now + timedelta(seconds=seconds)


class TestInMemoryRecordStore:
    def test_create_and_get(self, store: InMemoryRecordStore, metadata: Metadata) -> None:
        store.create("r1", metadata, [{"order_id": "1"}])
        record = store.get("r1")
        assert record is not None
        assert record.status is ProcessingStatus.PROCESSING
        assert record.summary is None
        assert record.raw_data == [{"order_id": "1"}]
        assert record.created_at == FIXED_INSTANT

    def test_duplicate_id_rejected(self, store: InMemoryRecordStore, metadata: Metadata) -> None:
        store.create("r1", metadata, [])
        with pytest.raises(ValueError):
            store.create("r1", metadata, [])

    def test_get_missing(self, store: InMemoryRecordStore) -> None:
        assert store.get("missing") is None

    def test_mark_completed_then_failed_keeps_summary(
        self, store: InMemoryRecordStore, metadata: Metadata
    ) -> None:
        store.create("r1", metadata, [])
        summary = SummaryResult(summary="done")
        assert store.mark_completed("r1", summary)
        assert store.mark_processing("r1")
        assert store.mark_failed("r1", "boom")

        record = store.get("r1")
        assert record is not None
        assert record.status is ProcessingStatus.FAILED
        assert record.last_error == "boom"
        assert record.summary == summary

    def test_completed_clears_last_error(self, store: InMemoryRecordStore, metadata: Metadata) -> None:
        store.create("r1", metadata, [])
        store.mark_failed("r1", "boom")
        store.mark_completed("r1", SummaryResult(summary="ok"))
        record = store.get("r1")
        assert record is not None
        assert record.last_error is None

    def test_update_missing_returns_false(self, store: InMemoryRecordStore) -> None:
        assert not store.mark_processing("missing")

    def test_returned_record_is_a_copy(self, store: InMemoryRecordStore, metadata: Metadata) -> None:
        store.create("r1", metadata, [])
        record = store.get("r1")
        assert record is not None
        record.status = ProcessingStatus.FAILED
        assert store.get("r1").status is ProcessingStatus.PROCESSING  # type: ignore[union-attr]

    def test_delete(self, store: InMemoryRecordStore, metadata: Metadata) -> None:
        store.create("r1", metadata, [])
        assert store.delete("r1")
        assert not store.delete("r1")
        assert store.get("r1") is None

    def test_list_all_newest_first(self, metadata: Metadata) -> None:
        clock = _Clock()
        store = InMemoryRecordStore(clock=clock)
        store.create("old", metadata, [])
        clock.advance(10)
        store.create("new", metadata, [])
        assert [record.id for record in store.list_all()] == ["new", "old"]

    def test_find_stale_processing(self, metadata: Metadata) -> None:
        clock = _Clock()
        store = InMemoryRecordStore(clock=clock)
        store.create("stale", metadata, [])
        store.create("done", metadata, [])
        store.mark_completed("done", SummaryResult(summary="x"))
        clock.advance(120)
        store.create("fresh", metadata, [])
        clock.advance(30)

        assert store.find_stale_processing(60) == ["stale"]
        assert store.find_stale_processing(600) == []
