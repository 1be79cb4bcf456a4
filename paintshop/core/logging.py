"""
Process-wide logging for the paint-line API.

Every line carries the request correlation id and the authenticated username,
taken from context variables that the HTTP middleware and the auth dependency
fill in. Lines logged outside a request (startup, seeding, migrations) show
"-" for both.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import Dict, Optional, Union

correlation_id_var: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)
username_var: ContextVar[Optional[str]] = ContextVar("username", default=None)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | cid=%(correlation_id)s | user=%(username)s | %(message)s"

# passlib warns about the bcrypt version lookup on every hash; alembic is chatty at INFO.
QUIET_LOGGERS: Dict[str, int] = {
    "passlib": logging.ERROR,
    "alembic.runtime.migration": logging.WARNING,
}


class RequestContextFilter(logging.Filter):
    """Copy correlation id and username from the request context onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id_var.get() or "-"
        record.username = username_var.get() or "-"
        return True


def _resolve_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


# PUBLIC_INTERFACE
def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Install a single stdout handler on the root logger with the request context filter."""
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))
    handler.addFilter(RequestContextFilter())

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(_resolve_level(level))

    for name, quiet_level in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(quiet_level)
