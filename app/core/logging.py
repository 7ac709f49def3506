import json
import logging
from datetime import datetime, timezone
from decimal import Decimal

from app.config import get_settings

# Keys services pass through ``extra=`` when they touch a row.
CONTEXT_FIELDS = (
    "table",
    "row_id",
    "product_id",
    "quantity_sold",
    "total_revenue",
    "profit",
    "error_type",
)

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def _context(record: logging.LogRecord) -> dict:
    context = {}
    for key in CONTEXT_FIELDS:
        value = getattr(record, key, None)
        if value is None:
            continue
        context[key] = str(value) if isinstance(value, Decimal) else value
    return context


class JsonFormatter(logging.Formatter):
    """One JSON object per line, with row context merged in at top level."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_context(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def setup_logging() -> None:
    settings = get_settings()
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    handler = logging.StreamHandler()
    if settings.LOG_JSON:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(fmt=TEXT_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S"))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    # Engine chatter drowns out the ledger events at INFO.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


__all__ = ["CONTEXT_FIELDS", "JsonFormatter", "setup_logging"]
