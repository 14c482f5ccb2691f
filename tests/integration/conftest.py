import os
from collections.abc import Generator

import pytest

from app.config.settings import Settings
from app.database.connection import close_pool, get_connection, init_pool
from app.database.repositories.processed_files_repository import ProcessedFilesRepository


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "insights_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute("SELECT 1")
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        ProcessedFilesRepository().ensure_schema()
        yield
    finally:
        close_pool()


@pytest.fixture
def repository(integration_pool: None) -> ProcessedFilesRepository:
    return ProcessedFilesRepository()


@pytest.fixture
def integration_cleanup(integration_pool: None) -> Generator[list[str], None, None]:
    cleanup: list[str] = []
    yield cleanup
    if not cleanup:
        return
    with get_connection() as conn:
        for record_id in cleanup:
            conn.execute("DELETE FROM processed_files WHERE id = %s", (record_id,))
        conn.commit()
