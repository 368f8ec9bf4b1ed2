"""Suggestion engine — the interface the keyboard talks to.

Wires VocabularyStore, MatchEngine, SpellChecker and learning together and
guarantees that no call on the keystroke path raises: a locale whose base
dictionary cannot be loaded yields no suggestions and treats every word as
valid until a later preload succeeds.
"""
import logging
from typing import List, Optional, Sequence, Union

from keysuggest.assets import JsonAssetReader
from keysuggest.autocommit import AutoCorrectAggressiveness, pick_auto_commit_candidate
from keysuggest.errors import DictionaryLoadError
from keysuggest.interfaces import AssetReader, LearnedStore, RefreshSink
from keysuggest.learned_store import InMemoryLearnedStore, JsonLearnedStore
from keysuggest.learning import LearningFeedbackHandler, LearningWorker
from keysuggest.matcher import MatchEngine
from keysuggest.models import SpellingVerdict, SuggestionCandidate
from keysuggest.refresh import HttpRefreshSink, NullRefreshSink
from keysuggest.spelling import SpellChecker
from keysuggest.vocabulary import VocabularyStore

logger = logging.getLogger(__name__)

Candidate = Union[SuggestionCandidate, str]


def _candidate_text(candidate: Candidate) -> str:
    if isinstance(candidate, SuggestionCandidate):
        return candidate.text
    return str(candidate or "")


class SuggestionEngine:
    """Explicitly constructed engine; callers share one instance by reference."""

    def __init__(self, asset_reader: AssetReader, learned_store: LearnedStore,
                 refresh_sink: Optional[RefreshSink] = None,
                 default_locale: str = "en", learning_enabled: bool = True,
                 background_learning: bool = True,
                 base_boost: int = 128,
                 auto_correct_enabled: bool = True,
                 aggressiveness: AutoCorrectAggressiveness = AutoCorrectAggressiveness.MODERATE):
        self.default_locale = default_locale
        self.vocabulary = VocabularyStore(asset_reader, learned_store)
        self.matcher = MatchEngine()
        self.spell_checker = SpellChecker()
        self.learning = LearningFeedbackHandler(
            self.vocabulary, learned_store, refresh_sink or NullRefreshSink(),
            base_boost=base_boost,
        )
        self.learning_enabled = learning_enabled
        self._worker: Optional[LearningWorker] = (
            LearningWorker(self.learning) if background_learning else None
        )
        self.auto_correct_enabled = auto_correct_enabled
        self.aggressiveness = aggressiveness

    @classmethod
    def from_config(cls, config, background_learning: bool = True) -> "SuggestionEngine":
        reader = JsonAssetReader([config.dictionary_dir])
        if config.learned_store_file:
            store = JsonLearnedStore(config.learned_store_file)
        else:
            store = InMemoryLearnedStore()
        if config.refresh_url:
            sink = HttpRefreshSink(config.refresh_url, config.refresh_timeout_ms)
        else:
            sink = NullRefreshSink()
        return cls(
            reader, store, sink,
            default_locale=config.locale,
            learning_enabled=config.learning_enabled,
            background_learning=background_learning,
            base_boost=config.base_boost,
            auto_correct_enabled=config.auto_correct_enabled,
            aggressiveness=AutoCorrectAggressiveness.from_name(config.auto_correct_aggressiveness),
        )

    def _locale(self, locale: Optional[str]) -> str:
        return locale or self.default_locale

    def preload(self, locale: Optional[str] = None):
        """Load the base dictionary. Raises DictionaryLoadError on failure."""
        self.vocabulary.preload(self._locale(locale))

    def _merged_view(self, locale: str):
        """Merged view, or None if the base dictionary is unavailable."""
        try:
            self.vocabulary.preload(locale)
        except DictionaryLoadError as e:
            logger.error("%s", e)
            return None
        return self.vocabulary.merged_view(locale)

    def check(self, word: str, preceding_words: Sequence[str] = (),
              following_words: Sequence[str] = (), max_suggestions: int = 3,
              allow_offensive: bool = False, is_private: bool = False,
              locale: Optional[str] = None) -> SpellingVerdict:
        # Context and policy flags are accepted for interface compatibility only.
        if not word or not word.strip():
            return SpellingVerdict.valid()
        view = self._merged_view(self._locale(locale))
        if view is None:
            return SpellingVerdict.valid()
        try:
            return self.spell_checker.check(word, view, max_suggestions)
        except Exception as e:
            logger.error("Spell check failed for %r: %s", word, e)
            return SpellingVerdict.valid()

    def suggest(self, composing_text: str, context_words: Sequence[str] = (),
                max_candidates: int = 3, allow_offensive: bool = False,
                is_private: bool = False,
                locale: Optional[str] = None) -> List[SuggestionCandidate]:
        view = self._merged_view(self._locale(locale))
        if view is None:
            return []
        try:
            return self.matcher.suggest(composing_text, view, max_candidates,
                                       locale=self._locale(locale))
        except Exception as e:
            logger.error("Suggestion failed for %r: %s", composing_text, e)
            return []

    def auto_commit_candidate(self, candidates: Sequence[SuggestionCandidate],
                              composing_text: str) -> Optional[SuggestionCandidate]:
        return pick_auto_commit_candidate(
            candidates, composing_text,
            aggressiveness=self.aggressiveness,
            enabled=self.auto_correct_enabled,
        )

    def on_accepted(self, candidate: Candidate, locale: Optional[str] = None):
        """Learn from an accepted candidate; returns immediately with a worker."""
        word = _candidate_text(candidate).strip()
        if not word or not self.learning_enabled:
            return
        locale = self._locale(locale)
        if self._worker is not None:
            self._worker.submit(word, locale)
        else:
            self.learning.on_accepted(word, locale)

    def on_reverted(self, candidate: Candidate, locale: Optional[str] = None):
        logger.debug("Suggestion reverted: %r (%s)", _candidate_text(candidate), self._locale(locale))

    def remove(self, candidate: Candidate, locale: Optional[str] = None) -> bool:
        logger.debug("Removal not supported: %r (%s)", _candidate_text(candidate), self._locale(locale))
        return False

    def words(self, locale: Optional[str] = None) -> List[str]:
        return self.vocabulary.words(self._locale(locale))

    def frequency_for_word(self, word: str, locale: Optional[str] = None) -> float:
        return self.vocabulary.frequency_for_word(self._locale(locale), word)

    def flush(self):
        """Wait for pending background learning."""
        if self._worker is not None:
            self._worker.flush()

    def close(self):
        if self._worker is not None:
            self._worker.stop()
        self.vocabulary.unload()
