"""
Logging helpers: structured event lines and the per-request scrape log.
"""
import json
import logging
from typing import Callable, Optional

from aflscraper.models import LogEvent, LogType

logger = logging.getLogger('aflscraper')

LogCallback = Callable[[str, str], None]

_LEVELS = {
    'info': logging.INFO,
    'success': logging.INFO,
    'warning': logging.WARNING,
    'error': logging.ERROR,
}


def log_event(**kv):
    """Emit structured JSON log line."""
    logger.debug(json.dumps(kv, separators=(',', ':'), default=str))


class ScrapeLog:
    """
    Append-only log for one scrape request.

    Every entry is kept as a LogEvent, mirrored to the 'aflscraper' logger and
    forwarded to the optional callback as (message, type).
    """

    def __init__(self, callback: Optional[LogCallback] = None):
        self._events: list[LogEvent] = []
        self._callback = callback

    def __call__(self, message: str, type: LogType = 'info') -> LogEvent:
        event = LogEvent(type=type, message=message)
        self._events.append(event)
        logger.log(_LEVELS.get(type, logging.INFO), '[%s] %s', type, message)
        if self._callback is not None:
            self._callback(message, type)
        return event

    @property
    def events(self) -> list[LogEvent]:
        return list(self._events)

    def __len__(self) -> int:
        return len(self._events)
