from app.summarization.client_base import BaseSummaryClient
from app.summarization.factory import SummaryClientFactory
from app.summarization.models import SummaryResult
from app.summarization.summarizer import SummaryOptions, Summarizer

__all__ = [
    "BaseSummaryClient",
    "SummaryClientFactory",
    "SummaryOptions",
    "SummaryResult",
    "Summarizer",
]
