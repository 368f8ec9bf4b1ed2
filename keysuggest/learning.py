"""Learning from accepted suggestions.

Accepted words that the base dictionary does not know are written to the
learned store: new words start boosted, known learned words grow a little
on each acceptance. Store failures are logged and swallowed so typing
keeps working without persistence.
"""
import logging
import queue
import threading
from typing import Optional

from keysuggest.errors import DictionaryLoadError, InvalidInput
from keysuggest.models import FREQUENCY_MAX, LearnedEntry
from keysuggest.refresh import NullRefreshSink

logger = logging.getLogger(__name__)

FREQUENCY_DEFAULT = 128
ACCEPT_BOOST = 35
REPEAT_BOOST = 10


def normalize_word(word) -> str:
    """Strip word; raises InvalidInput if nothing learnable is left."""
    word = (word or "").strip()
    if not word or not any(c.isalpha() for c in word):
        raise InvalidInput(f"{word!r} is empty or has no letters")
    return word


class LearningFeedbackHandler:
    def __init__(self, vocabulary, learned_store, refresh_sink=None,
                 base_boost: int = FREQUENCY_DEFAULT):
        self.vocabulary = vocabulary
        self.learned_store = learned_store
        self.refresh_sink = refresh_sink or NullRefreshSink()
        self.base_boost = base_boost

    def on_accepted(self, word: str, locale: str) -> bool:
        """Record an accepted word. Returns True if the learned store changed."""
        try:
            word = normalize_word(word)
        except InvalidInput as e:
            logger.debug("Not learning: %s", e)
            return False

        if self._in_base_dictionary(word, locale):
            logger.debug("Not learning %r: already in base dictionary", word)
            return False

        try:
            changed = self._upsert(word, locale)
        except Exception as e:
            logger.warning("Could not learn %r for %s: %s", word, locale, e)
            return False

        if changed:
            try:
                self.refresh_sink.notify_vocabulary_changed()
            except Exception as e:
                logger.warning("Refresh notification failed: %s", e)
        return changed

    def _in_base_dictionary(self, word: str, locale: str) -> bool:
        try:
            self.vocabulary.preload(locale)
        except DictionaryLoadError as e:
            logger.warning("Base dictionary unavailable while learning %r: %s", word, e)
        return self.vocabulary.contains_base_word(locale, word)

    def _find_learned(self, word: str, locale: str):
        """Learned rows for word, matched case-insensitively."""
        existing = self.learned_store.query_exact(word, locale)
        if existing:
            return existing
        lower = word.lower()
        return [e for e in self.learned_store.query_all(locale) if e.word.lower() == lower]

    def _upsert(self, word: str, locale: str) -> bool:
        existing = self._find_learned(word, locale)
        if not existing:
            entry = LearnedEntry(
                id=0,  # auto-generate
                word=word,
                frequency=min(self.base_boost + ACCEPT_BOOST, FREQUENCY_MAX),
                locale=locale,
            )
            entry_id = self.learned_store.insert(entry)
            logger.info("Learned new word %r (%s) id=%s freq=%d",
                        word, locale, entry_id, entry.frequency)
            return True

        entry = existing[0]
        new_freq = min(entry.frequency + REPEAT_BOOST, FREQUENCY_MAX)
        if new_freq <= entry.frequency:
            logger.debug("Learned word %r already at max frequency", word)
            return False
        old_freq = entry.frequency
        entry.frequency = new_freq
        self.learned_store.update(entry)
        logger.debug("Boosted learned word %r from %d to %d", word, old_freq, new_freq)
        return True


class LearningWorker:
    """Runs learning on a background thread so acceptance never blocks typing."""

    _STOP = object()

    def __init__(self, handler: LearningFeedbackHandler):
        self.handler = handler
        self._queue: "queue.Queue" = queue.Queue()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        with self._lock:
            if self.running:
                return
            self._thread = threading.Thread(target=self._run, name="keysuggest-learning",
                                            daemon=True)
            self._thread.start()

    def submit(self, word: str, locale: str):
        if not self.running:
            self.start()
        self._queue.put((word, locale))

    def flush(self):
        """Block until every submitted word has been processed."""
        self._queue.join()

    def stop(self, timeout: float = 5.0):
        with self._lock:
            thread = self._thread
            self._thread = None
        if thread is None:
            return
        self._queue.put(self._STOP)
        thread.join(timeout=timeout)
        if thread.is_alive():
            logger.warning("Learning worker did not stop within %.1fs", timeout)

    def _run(self):
        while True:
            task = self._queue.get()
            try:
                if task is self._STOP:
                    return
                word, locale = task
                self.handler.on_accepted(word, locale)
            except Exception as e:
                logger.error("Learning task failed: %s", e)
            finally:
                self._queue.task_done()
