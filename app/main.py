import argparse
import json
import mimetypes
import sys
from pathlib import Path

from app.config.settings import Settings
from app.database.connection import close_pool, init_pool
from app.database.repositories.base import BaseRecordStore
from app.database.repositories.memory_record_store import InMemoryRecordStore
from app.database.repositories.processed_files_repository import ProcessedFilesRepository
from app.ingestion.exceptions import IngestionError
from app.ingestion.service import IngestionService
from app.logging.logger import Log
from app.parsing.exceptions import ParseError
from app.summarization.factory import SummaryClientFactory
from app.summarization.summarizer import Summarizer, SummaryOptions
from app.worker.dispatcher import SummaryDispatcher
from app.worker.summary_runner import SummaryRunner
from app.worker.worker import Worker


def build_dispatcher(settings: Settings, store: BaseRecordStore) -> SummaryDispatcher:
    """Wire model client -> summarizer -> runner -> dispatcher from settings."""
    summarizer = Summarizer(
        client=SummaryClientFactory.create(settings),
        options=SummaryOptions.from_settings(settings),
    )
    runner = SummaryRunner(summarizer, store)
    return SummaryDispatcher(runner, max_workers=settings.summary_max_workers)


def summarize_file(settings: Settings, path: Path, mime_type: str | None) -> int:
    """Parse and summarize a local file without a database; print the record."""
    store = InMemoryRecordStore()
    dispatcher = build_dispatcher(settings, store)
    service = IngestionService(store, dispatcher, settings)
    try:
        receipt = service.ingest(
            path.read_bytes(),
            path.name,
            mime_type or mimetypes.guess_type(path.name)[0],
        )
    except (IngestionError, ParseError) as exc:
        Log.error(f"Cannot ingest {path}: {exc}")
        return 1
    finally:
        dispatcher.shutdown(wait=True)

    record = service.get(receipt.id)
    print(json.dumps(record.to_dict(), indent=2, ensure_ascii=False, default=str))
    return 0


def run_worker(settings: Settings) -> int:
    """Entry point: initialize pool -> ensure schema -> sweep stale records."""
    init_pool(settings)
    try:
        store = ProcessedFilesRepository()
        store.ensure_schema()
        dispatcher = build_dispatcher(settings, store)
        try:
            Worker(store, dispatcher, settings).run()
        finally:
            dispatcher.shutdown(wait=True)
    finally:
        close_pool()
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="insights", description="Upload insight worker")
    commands = parser.add_subparsers(dest="command", required=True)

    summarize = commands.add_parser("summarize", help="Parse and summarize a local file")
    summarize.add_argument("path", type=Path)
    summarize.add_argument("--mime-type", default=None)

    commands.add_parser("worker", help="Resubmit records stuck in processing")

    args = parser.parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)

    if args.command == "summarize":
        return summarize_file(settings, args.path, args.mime_type)
    return run_worker(settings)


if __name__ == "__main__":
    sys.exit(main())
