"""Spell checker for completed words."""
import logging
from typing import Mapping

from keysuggest import edit_distance
from keysuggest.models import SpellingVerdict

logger = logging.getLogger(__name__)

MIN_CHECKED_LENGTH = 3
MAX_TYPO_DISTANCE = 2


class SpellChecker:
    """Decides valid/typo for a word against a merged view.

    Short words and words with no close dictionary neighbour are reported
    valid, so the keyboard never flags something it cannot fix.
    """

    def check(self, word: str, merged_view: Mapping[str, int],
              max_suggestions: int) -> SpellingVerdict:
        original = (word or "").strip()
        lower = original.lower()

        if self._is_known(original, lower, merged_view):
            return SpellingVerdict.valid()

        if len(lower) < MIN_CHECKED_LENGTH:
            return SpellingVerdict.valid()

        scored = []
        for dict_word, freq in merged_view.items():
            dist = edit_distance.distance(lower, dict_word.lower())
            if 0 < dist <= MAX_TYPO_DISTANCE:
                scored.append((freq, dist, dict_word))

        # Highest frequency first, closer words break ties
        scored.sort(key=lambda item: (-item[0], item[1]))
        suggestions = [w for _, _, w in scored[:max(max_suggestions, 0)]]

        if suggestions:
            logger.debug("Typo %r → %s", original, suggestions)
            return SpellingVerdict.typo(suggestions)
        return SpellingVerdict.valid()

    @staticmethod
    def _is_known(original: str, lower: str, merged_view: Mapping[str, int]) -> bool:
        if original in merged_view or lower in merged_view:
            return True
        # Stored casing may differ from both ("I", "iPhone")
        return any(w.lower() == lower for w in merged_view)
