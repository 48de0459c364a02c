"""
Event log destinations.

Four independent single-line logs: general (bindings, unknown MACs,
learning), denylist, allowlist, and scan. A destination that is not
configured gets a NullHandler, which disables that log.
"""

import logging
import os
from typing import Dict

from config.settings import EVENT_LOG_FORMAT, EVENT_LOG_KEYS, LOG_DATE_FORMAT
from defenses.events import LOG_DESTINATIONS, AlarmEvent


EVENT_LOGGER_PREFIX = "arpwarden.events"


def _build_logger(key: str, path: str = None) -> logging.Logger:
    event_logger = logging.getLogger(f"{EVENT_LOGGER_PREFIX}.{key}")
    event_logger.setLevel(logging.INFO)
    event_logger.propagate = False
    for handler in list(event_logger.handlers):
        event_logger.removeHandler(handler)
        handler.close()

    if path:
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        handler = logging.FileHandler(path, encoding='utf-8')
        handler.setFormatter(logging.Formatter(EVENT_LOG_FORMAT, LOG_DATE_FORMAT))
    else:
        handler = logging.NullHandler()
    event_logger.addHandler(handler)
    return event_logger


class EventLog:
    """Routes each AlarmEvent to the log configured for its kind."""

    def __init__(self, destinations: Dict[str, str] = None):
        destinations = destinations or {}
        self.destinations = {key: destinations.get(key) for key in EVENT_LOG_KEYS}
        self._loggers = {
            key: _build_logger(key, path) for key, path in self.destinations.items()
        }

    def record(self, event: AlarmEvent):
        key = LOG_DESTINATIONS[event.kind]
        self._loggers[key].info(event.describe())

    def close(self):
        for event_logger in self._loggers.values():
            for handler in list(event_logger.handlers):
                event_logger.removeHandler(handler)
                handler.close()
