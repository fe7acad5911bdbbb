from __future__ import annotations

import logging

# Record attributes appended to a log line, in this order, when a call passes them in ``extra``.
CONTEXT_KEYS = (
    "session_id",
    "tutor_id",
    "date",
    "time",
    "slot",
    "generation",
    "slot_count",
    "date_count",
    "booking_id",
    "method",
    "path",
    "status",
    "reason",
    "error",
)

LOG_FORMAT = "%(levelname)s:%(name)s:%(message)s"


class ContextFormatter(logging.Formatter):
    """Appends ``key=value`` pairs for the booking context carried on a record."""

    def __init__(self, fmt: str = LOG_FORMAT, keys: tuple[str, ...] = CONTEXT_KEYS) -> None:
        super().__init__(fmt)
        self._keys = keys

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        pairs = [
            f"{key}={getattr(record, key)}" for key in self._keys if getattr(record, key, None) not in (None, "")
        ]
        return f"{base} | {' '.join(pairs)}" if pairs else base


def configure_logging(level: str) -> None:
    """Route everything through one stderr handler. Unknown level names fall back to INFO."""
    handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter())
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[handler],
        force=True,
    )
