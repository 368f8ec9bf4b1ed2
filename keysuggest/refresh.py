"""Refresh sinks — tell vocabulary consumers (gesture decoder) to reload."""
import logging
from typing import Callable

import requests

logger = logging.getLogger(__name__)


class NullRefreshSink:
    def notify_vocabulary_changed(self):
        pass


class CallbackRefreshSink:
    """Calls a Python callable; errors are logged, never raised."""

    def __init__(self, callback: Callable[[], None]):
        self.callback = callback

    def notify_vocabulary_changed(self):
        try:
            self.callback()
        except Exception as e:
            logger.warning("Vocabulary refresh callback failed: %s", e)


class HttpRefreshSink:
    """Posts a vocabulary_changed event to a local HTTP endpoint.

    Fire-and-forget: a short timeout, and any failure is only logged.
    """

    def __init__(self, url: str, timeout_ms: int = 200):
        self.url = url
        self.timeout_sec = timeout_ms / 1000.0

    def notify_vocabulary_changed(self):
        try:
            resp = requests.post(
                self.url,
                json={"event": "vocabulary_changed"},
                timeout=self.timeout_sec,
            )
            resp.raise_for_status()
            logger.debug("Refresh signal sent to %s", self.url)
        except requests.RequestException as e:
            logger.warning("Refresh signal to %s failed: %s", self.url, e)
