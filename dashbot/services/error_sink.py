"""Error sink – persists runtime failures so operators can see them in the dashboard."""

from __future__ import annotations

import logging
import traceback

from dashbot.services.config_store import ConfigStore

logger = logging.getLogger(__name__)


def _safe_str(value: object) -> str:
    try:
        return str(value)
    except Exception:
        return type(value).__name__


def describe_error(error: object | None) -> str | None:
    """Turn *error* into display text.

    Exceptions with a traceback render the full trace, others fall back to
    their message (or class name); anything else is forced through ``str``.
    Objects whose ``str`` raises are described by their class name.
    """
    if error is None:
        return None
    if isinstance(error, BaseException):
        if error.__traceback__ is not None:
            try:
                return "".join(
                    traceback.format_exception(type(error), error, error.__traceback__)
                ).rstrip()
            except Exception:
                return type(error).__name__
        return _safe_str(error) or type(error).__name__
    return _safe_str(error)


class ErrorSink:
    def __init__(self, store: ConfigStore) -> None:
        self._store = store

    async def record(self, message: str, error: object | None = None) -> None:
        """Log and persist a failure. Never raises."""
        message = message or "Unknown error"
        try:
            stack = describe_error(error)
            logger.error("%s: %s", message, stack or "No stack trace")
            await self._store.append_error_log(message, stack)
        except Exception:
            logger.exception("Error while persisting error log (original: %s)", message)
