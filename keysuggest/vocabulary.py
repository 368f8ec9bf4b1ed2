"""Vocabulary store — lock-guarded base dictionaries merged with learned words."""
import logging
import threading
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional

from keysuggest.errors import DictionaryLoadError, LearnedStoreUnavailable
from keysuggest.interfaces import AssetReader, LearnedStore
from keysuggest.models import FREQUENCY_MAX, clamp_frequency

logger = logging.getLogger(__name__)


class GuardedDictionary:
    """Word → frequency map that can only be populated once and read as a copy.

    Both operations hold the lock for their whole critical section, so a
    reader never observes a half-populated dictionary.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._words: Dict[str, int] = {}

    def load_if_empty(self, loader: Callable[[], Dict[str, int]]) -> bool:
        """Populate from loader() if still empty. Returns True if it loaded.

        If loader raises, the dictionary stays empty and the error propagates;
        the next call tries again.
        """
        with self._lock:
            if self._words:
                return False
            words = loader()
            self._words.update(words)
            return True

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._words)

    def is_empty(self) -> bool:
        with self._lock:
            return not self._words


def merge_dictionaries(base: Mapping[str, int], learned: Mapping[str, int],
                       prefer_learned: bool = True) -> Dict[str, int]:
    """Overlay learned on base.

    On collision the preferred side's frequency replaces the other; the two
    are never summed. Collisions are detected case-insensitively, and the
    base casing is kept for display when the learned side wins.
    """
    merged = dict(base)
    keys = {w.lower(): w for w in base}

    for word, freq in learned.items():
        existing = merged.get(word)
        if existing is None:
            key = keys.get(word.lower())
            if key is None:
                merged[word] = clamp_frequency(freq)
                keys[word.lower()] = word
                continue
            word = key
        if prefer_learned:
            merged[word] = clamp_frequency(freq)
    return merged


class VocabularyStore:
    """Owns the base dictionary per locale and builds merged views."""

    def __init__(self, asset_reader: AssetReader, learned_store: Optional[LearnedStore] = None):
        self.asset_reader = asset_reader
        self.learned_store = learned_store
        self._locales_lock = threading.Lock()
        self._locales: Dict[str, GuardedDictionary] = {}

    def _container(self, locale: str) -> GuardedDictionary:
        with self._locales_lock:
            container = self._locales.get(locale)
            if container is None:
                container = GuardedDictionary()
                self._locales[locale] = container
            return container

    def preload(self, locale: str):
        """Load the base dictionary for locale once.

        Raises DictionaryLoadError if the asset cannot be read; nothing is
        cached in that case, so a later call retries.
        """
        container = self._container(locale)

        def _load():
            words = self.asset_reader.read_base_dictionary(locale)
            if not words:
                raise DictionaryLoadError(locale, "dictionary is empty")
            return words

        if container.load_if_empty(_load):
            logger.info("Loaded base dictionary for %s", locale)

    def is_loaded(self, locale: str) -> bool:
        return not self._container(locale).is_empty()

    def base_snapshot(self, locale: str) -> Dict[str, int]:
        return self._container(locale).snapshot()

    def learned_snapshot(self, locale: str) -> Dict[str, int]:
        """All learned words for locale, or {} if the learned store fails."""
        if self.learned_store is None:
            return {}
        try:
            entries = self.learned_store.query_all(locale)
        except LearnedStoreUnavailable as e:
            logger.warning("Learned store unavailable for %s, using base dictionary only: %s",
                           locale, e)
            return {}
        except Exception as e:
            logger.warning("Learned store query failed for %s: %s", locale, e)
            return {}

        learned: Dict[str, int] = {}
        keys: Dict[str, str] = {}
        for entry in entries:
            # Rows differing only in case collapse; the highest frequency wins
            key = keys.setdefault(entry.word.lower(), entry.word)
            if entry.frequency >= learned.get(key, -1):
                learned[key] = entry.frequency
        return learned

    def merged_view(self, locale: str) -> Mapping[str, int]:
        """Read-only point-in-time overlay of base and learned words."""
        base = self.base_snapshot(locale)
        learned = self.learned_snapshot(locale)
        return MappingProxyType(merge_dictionaries(base, learned))

    def contains_base_word(self, locale: str, word: str) -> bool:
        base = self.base_snapshot(locale)
        if word in base or word.lower() in base:
            return True
        lower = word.lower()
        return any(w.lower() == lower for w in base)

    def words(self, locale: str) -> List[str]:
        return list(self.base_snapshot(locale))

    def frequency_for_word(self, locale: str, word: str) -> float:
        """Normalized base frequency for word, 0.0 if unknown."""
        return self.base_snapshot(locale).get(word, 0) / FREQUENCY_MAX

    def unload(self, locale: Optional[str] = None):
        """Forget loaded base dictionaries (all locales when locale is None)."""
        with self._locales_lock:
            if locale is None:
                self._locales.clear()
            else:
                self._locales.pop(locale, None)
