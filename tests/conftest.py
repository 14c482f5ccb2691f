from collections.abc import Callable
from datetime import datetime, timezone

import pytest

from app.database.repositories.memory_record_store import InMemoryRecordStore
from app.ingestion.models import Metadata

FIXED_INSTANT = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture()
def fixed_clock() -> Callable[[], datetime]:
    return lambda: FIXED_INSTANT


@pytest.fixture()
def csv_bytes() -> bytes:
    return b"name,age\nAlice,30\nBob,40"


@pytest.fixture()
def log_bytes() -> bytes:
    return (
        b"2024-01-01 10:00:00 ERROR 500 failed\n"
        b"2024-01-01 10:00:01 INFO 200 ok\n"
        b"\n"
        b"plain line without timestamp\n"
    )


@pytest.fixture()
def metadata() -> Metadata:
    return Metadata(
        filename="orders.csv",
        filetype="csv",
        size_kb=1.2,
        upload_timestamp="2024-05-01T12:00:00.000Z",
        record_count=2,
        detected_columns=("order_id", "amount"),
    )


@pytest.fixture()
def store(fixed_clock: Callable[[], datetime]) -> InMemoryRecordStore:
    return InMemoryRecordStore(clock=fixed_clock)
