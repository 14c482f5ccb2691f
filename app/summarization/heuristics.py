"""Offline, rule-based summary used whenever the model path is unusable.

Pure and deterministic: no clock, no randomness, no network.
"""

from app.ingestion.models import Metadata
from app.parsing.models import DocumentData, LinesData, ObjectData, PrimitiveData, RecordsData
from app.summarization.models import DataOverview, SummaryResult

HEURISTIC_NOTE = "heuristic_fallback"
MAX_KEY_FIELDS = 10

DOMAIN_KEYWORDS: tuple[tuple[str, frozenset[str]], ...] = (
    (
        "finance",
        frozenset({
            "amount", "balance", "price", "cost", "revenue", "transaction",
            "transaction_id", "account", "account_id", "credit", "debit",
            "currency", "payment", "invoice", "tax",
        }),
    ),
    (
        "web-logs",
        frozenset({
            "http_status", "status_code", "method", "url", "path", "ip",
            "client_ip", "user_agent", "referrer", "response_time", "endpoint",
            "bytes",
        }),
    ),
    (
        "ecommerce",
        frozenset({
            "order", "order_id", "product", "product_id", "sku", "quantity",
            "cart", "customer", "customer_id", "category", "shipping", "discount",
        }),
    ),
    (
        "analytics",
        frozenset({
            "event", "event_name", "session", "session_id", "user_id", "visits",
            "clicks", "impressions", "conversion", "conversions", "pageviews",
            "metric", "bounce_rate",
        }),
    ),
)

DOMAIN_HINTS: dict[str, str] = {
    "finance": "Monetary fields are present; totals, balances and outlier amounts are worth reviewing.",
    "web-logs": "Request-level fields are present; status code and latency distributions are worth reviewing.",
    "ecommerce": "Order and product fields are present; top products and order volumes are worth reviewing.",
    "analytics": "Event and session fields are present; engagement and conversion trends are worth reviewing.",
    "logs": "Timestamped messages are present; error bursts over time are worth reviewing.",
}

_LOG_COLUMNS = frozenset({"timestamp", "message"})


def infer_domain(columns: list[str]) -> str:
    lowered = {column.lower() for column in columns}
    for domain, keywords in DOMAIN_KEYWORDS:
        if lowered & keywords:
            return domain
    if _LOG_COLUMNS <= lowered:
        return "logs"
    return "general"


def is_log_like(columns: list[str]) -> bool:
    return _LOG_COLUMNS <= {column.lower() for column in columns}


def is_placeholder_column(name: str) -> bool:
    lowered = name.strip().lower()
    return lowered == "" or lowered.startswith("unnamed") or lowered.startswith("column")


def _columns_of(metadata: Metadata, data: DocumentData) -> list[str]:
    if metadata.detected_columns:
        return list(metadata.detected_columns)
    if isinstance(data, RecordsData) and data.rows and isinstance(data.rows[0], dict):
        return [str(key) for key in data.rows[0]]
    if isinstance(data, ObjectData):
        return [str(key) for key in data.mapping]
    return []


def _record_insights(data: DocumentData) -> list[str]:
    if not isinstance(data, RecordsData):
        return []
    rows = [row for row in data.rows if isinstance(row, dict)]
    insights = []
    severe = sum(1 for row in rows if row.get("level") in ("ERROR", "FATAL"))
    if severe:
        insights.append(f"{severe} lines are logged at ERROR or FATAL level.")
    server_errors = sum(
        1
        for row in rows
        if isinstance(row.get("http_status"), int) and row["http_status"] >= 500
    )
    if server_errors:
        insights.append(f"{server_errors} lines carry an HTTP 5xx status.")
    return insights


def _shape_label(data: DocumentData) -> str:
    if isinstance(data, RecordsData):
        return "tabular records"
    if isinstance(data, LinesData):
        return "a list of values"
    if isinstance(data, ObjectData):
        return "a single object"
    if isinstance(data, PrimitiveData):
        return "a single value"
    raise TypeError(f"Unsupported document data: {type(data).__name__}")


def heuristic_summary(metadata: Metadata, data: DocumentData) -> SummaryResult:
    """Best-effort summary from column names and record counts alone."""
    columns = _columns_of(metadata, data)
    domain = infer_domain(columns)
    log_like = is_log_like(columns)
    file_type_guess = metadata.filetype or ("log" if log_like else "unknown")

    insights: list[str] = []
    if metadata.record_count:
        insights.append(f"Dataset contains {metadata.record_count} records.")
    if columns:
        preview = ", ".join(columns[:5])
        more = f" (+{len(columns) - 5} more)" if len(columns) > 5 else ""
        insights.append(f"{len(columns)} columns detected: {preview}{more}.")
    if log_like:
        insights.append("Records follow a timestamp/message log structure.")
    insights.extend(_record_insights(data))
    if domain in DOMAIN_HINTS:
        insights.append(DOMAIN_HINTS[domain])

    anomalies = [
        f"Placeholder-looking column name: '{column}'"
        for column in columns
        if is_placeholder_column(column)
    ]
    if metadata.record_count == 0:
        anomalies.append("No records were found in the uploaded file.")

    summary = (
        f"Heuristic summary: {_shape_label(data)} from {metadata.filename or 'upload'} "
        f"({file_type_guess}) with {metadata.record_count} records and "
        f"{len(columns)} columns; probable domain: {domain}."
    )
    return SummaryResult(
        summary=summary,
        file_type_guess=file_type_guess,
        probable_domain=domain,
        key_fields=columns[:MAX_KEY_FIELDS],
        insights=insights,
        anomalies=anomalies,
        data_overview=DataOverview(
            records=metadata.record_count,
            columns=columns,
            notes=[HEURISTIC_NOTE, "Generated from column names and counts without model output."],
        ),
    )
