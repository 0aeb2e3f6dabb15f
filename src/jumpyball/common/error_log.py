from __future__ import annotations

import logging
import traceback
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class ErrorItem:
    tick: int
    context: str
    message: str
    tb: str | None
    count: int = 1
    last_tick: int = 0

    def summary_line(self) -> str:
        base = f"[tick {self.tick}] {self.context}: {self.message}".strip()
        if self.count > 1:
            base += f" (x{self.count}, last tick {self.last_tick})"
        return base


class ErrorLog:
    """
    Recent failures caught at the host frame boundary.

    Repeated identical errors (the usual shape of a per-tick bug) collapse into one
    entry with a count, and only the first occurrence is written to the log.
    """

    def __init__(self, *, max_items: int = 30) -> None:
        self._max_items = max(1, int(max_items))
        self._items: list[ErrorItem] = []
        self._last_key: tuple[str, str] | None = None

    def items(self) -> list[ErrorItem]:
        return list(self._items)

    def clear(self) -> None:
        self._items.clear()
        self._last_key = None

    def log_message(self, *, tick: int, context: str, message: str) -> None:
        context = str(context or "unknown")
        message = str(message or "").strip() or "Unknown error"
        if self._append(tick=tick, context=context, message=message, tb=None):
            logger.error("%s: %s (tick %d)", context, message, int(tick))

    def log_exception(self, *, tick: int, context: str, exc: BaseException) -> None:
        context = str(context or "unknown")
        message = f"{type(exc).__name__}: {exc}".strip()
        tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        if self._append(tick=tick, context=context, message=message, tb=tb):
            logger.error("%s: %s (tick %d)\n%s", context, message, int(tick), tb.rstrip())

    def _append(self, *, tick: int, context: str, message: str, tb: str | None) -> bool:
        """Returns True when a new entry was started."""

        key = (context, message)
        if self._items and self._last_key == key:
            self._items[-1].count += 1
            self._items[-1].last_tick = int(tick)
            return False

        self._items.append(ErrorItem(tick=int(tick), context=context, message=message, tb=tb, last_tick=int(tick)))
        self._last_key = key
        if len(self._items) > self._max_items:
            self._items = self._items[-self._max_items :]
        return True
