"""Match engine — ranks dictionary words against the composing text.

Every word lands in at most one tier, tried in this order:

1. exact        word == input (case-insensitive); confidence 1.0
2. prefix       word starts with input; scaled by how much of the word is typed
3. substring    word contains input; capped at 0.9
4. edit         Levenshtein similarity > 0.8; capped at 0.95

Exact matches come first, then prefix matches, then substring and edit
matches ranked together.
"""
import logging
from operator import attrgetter
from typing import List, Mapping, Optional

from keysuggest import edit_distance
from keysuggest.models import (
    FREQUENCY_MAX, MatchTier, SuggestionCandidate, clamp_confidence,
)

logger = logging.getLogger(__name__)

# (min input/word length ratio, multiplier), checked top-down
PREFIX_RATIO_FACTORS = ((0.8, 0.95), (0.6, 0.85), (0.4, 0.75))
PREFIX_RATIO_FLOOR = 0.65
# (min input length, multiplier)
INPUT_LENGTH_BOOSTS = ((5, 1.1), (3, 1.05))
PREFIX_AUTO_COMMIT_MIN_INPUT = 3
PREFIX_AUTO_COMMIT_CONFIDENCE = 0.8

SUBSTRING_FACTOR = 0.7
SUBSTRING_START_BOOST = 1.1
SUBSTRING_CAP = 0.9

EDIT_MIN_SIMILARITY = 0.8
EDIT_FACTOR = 0.8
EDIT_CAP = 0.95
EDIT_AUTO_COMMIT_CONFIDENCE = 0.9


def prefix_ratio_factor(input_len: int, word_len: int) -> float:
    ratio = input_len / word_len
    for threshold, factor in PREFIX_RATIO_FACTORS:
        if ratio >= threshold:
            return factor
    return PREFIX_RATIO_FLOOR


def input_length_boost(input_len: int) -> float:
    for min_len, boost in INPUT_LENGTH_BOOSTS:
        if input_len >= min_len:
            return boost
    return 1.0


# Languages whose dotless/dotted i pair title-cases differently
DOTTED_I_LANGUAGES = ("tr", "az")


def title_first(char: str, locale: Optional[str] = None) -> str:
    language = (locale or "").replace("-", "_").split("_", 1)[0].lower()
    if char == "i" and language in DOTTED_I_LANGUAGES:
        return "\u0130"
    return char.title()


def preserve_case(composing: str, word: str, locale: Optional[str] = None) -> str:
    """Title-case the first character of word if the user typed a capital."""
    if composing and word and composing[0].isupper():
        return title_first(word[0], locale) + word[1:]
    return word


class MatchEngine:
    """Classifies merged-view words into tiers and scores them."""

    def suggest(self, composing_text: str, merged_view: Mapping[str, int],
                max_candidates: int, locale: Optional[str] = None) -> List[SuggestionCandidate]:
        if max_candidates <= 0:
            return []

        composing = (composing_text or "").strip()
        if not composing:
            return self._most_popular(merged_view, max_candidates)

        needle = composing.lower()
        exact: List[SuggestionCandidate] = []
        prefix: List[SuggestionCandidate] = []
        fuzzy: List[SuggestionCandidate] = []

        for word, frequency in merged_view.items():
            candidate = self.classify(needle, word, frequency)
            if candidate is None:
                continue
            candidate = SuggestionCandidate(
                text=preserve_case(composing, candidate.text, locale),
                confidence=candidate.confidence,
                auto_commit_eligible=candidate.auto_commit_eligible,
                source_tier=candidate.source_tier,
            )
            if candidate.source_tier is MatchTier.EXACT:
                exact.append(candidate)
            elif candidate.source_tier is MatchTier.PREFIX:
                prefix.append(candidate)
            else:
                fuzzy.append(candidate)

        by_confidence = attrgetter("confidence")
        ranked = (sorted(exact, key=by_confidence, reverse=True)
                  + sorted(prefix, key=by_confidence, reverse=True)
                  + sorted(fuzzy, key=by_confidence, reverse=True))
        logger.debug("suggest(%r): %d exact, %d prefix, %d fuzzy",
                     composing, len(exact), len(prefix), len(fuzzy))
        return ranked[:max_candidates]

    def classify(self, needle: str, word: str, frequency: int) -> Optional[SuggestionCandidate]:
        """Score word against the lowercased input, or None if it does not match."""
        word_lower = word.lower()
        base = frequency / FREQUENCY_MAX
        input_len = len(needle)
        word_len = len(word_lower)

        if word_lower == needle:
            return SuggestionCandidate(word, 1.0, True, MatchTier.EXACT)

        if word_lower.startswith(needle):
            confidence = (base
                          * prefix_ratio_factor(input_len, word_len)
                          * input_length_boost(input_len))
            confidence = min(confidence, 1.0)
            eligible = (input_len >= PREFIX_AUTO_COMMIT_MIN_INPUT
                        and confidence > PREFIX_AUTO_COMMIT_CONFIDENCE)
            return SuggestionCandidate(word, confidence, eligible, MatchTier.PREFIX)

        if input_len > 1:
            position = word_lower.find(needle)
            if position >= 0:
                confidence = base * SUBSTRING_FACTOR
                if position == 0:
                    confidence *= SUBSTRING_START_BOOST
                return SuggestionCandidate(word, min(confidence, SUBSTRING_CAP),
                                           False, MatchTier.SUBSTRING)

        # A length gap beyond the bound only yields the "too different" sentinel
        if (input_len > 2 and word_len > 2
                and abs(input_len - word_len) <= edit_distance.MAX_LENGTH_GAP):
            dist = edit_distance.distance(needle, word_lower)
            similarity = 1 - dist / max(input_len, word_len)
            if similarity > EDIT_MIN_SIMILARITY:
                confidence = min(base * similarity * EDIT_FACTOR, EDIT_CAP)
                return SuggestionCandidate(word, confidence,
                                           confidence > EDIT_AUTO_COMMIT_CONFIDENCE,
                                           MatchTier.EDIT_DISTANCE)

        return None

    @staticmethod
    def _most_popular(merged_view: Mapping[str, int], limit: int) -> List[SuggestionCandidate]:
        top = sorted(merged_view.items(), key=lambda item: item[1], reverse=True)[:limit]
        return [
            SuggestionCandidate(
                text=word,
                confidence=clamp_confidence(freq / FREQUENCY_MAX),
                auto_commit_eligible=False,
                source_tier=MatchTier.POPULAR,
            )
            for word, freq in top
        ]
