"""Auto-commit selection — which candidate (if any) replaces the word on space."""
import unicodedata
from enum import Enum
from typing import Optional, Sequence

from keysuggest.edit_distance import full_distance
from keysuggest.models import SuggestionCandidate

FALLBACK_CONFIDENCE = 0.95


class AutoCorrectAggressiveness(Enum):
    """(min confidence, max edit distance, min word length) per level."""
    CONSERVATIVE = (0.95, 1, 4)
    MODERATE = (0.75, 2, 3)
    AGGRESSIVE = (0.6, 2, 2)

    @property
    def min_confidence(self) -> float:
        return self.value[0]

    @property
    def max_edit_distance(self) -> int:
        return self.value[1]

    @property
    def min_word_length(self) -> int:
        return self.value[2]

    @classmethod
    def from_name(cls, name: str) -> "AutoCorrectAggressiveness":
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown auto-correct aggressiveness: {name!r}") from None


def contains_emoji(text: str) -> bool:
    for c in text:
        if unicodedata.category(c) == "So" or 0x1F000 <= ord(c) <= 0x1FAFF:
            return True
    return False


def pick_auto_commit_candidate(
    candidates: Sequence[SuggestionCandidate],
    composing_text: str,
    aggressiveness: AutoCorrectAggressiveness = AutoCorrectAggressiveness.MODERATE,
    enabled: bool = True,
) -> Optional[SuggestionCandidate]:
    if not enabled or not candidates:
        return None

    composing = (composing_text or "").strip()

    explicit = next((c for c in candidates if c.auto_commit_eligible), None)
    if explicit is not None:
        return None if contains_emoji(explicit.text) else explicit

    best = candidates[0]
    if composing:
        if contains_emoji(best.text):
            return None
        if _should_auto_commit(best, composing, aggressiveness):
            return best

    return next((c for c in candidates if c.confidence > FALLBACK_CONFIDENCE), None)


def _should_auto_commit(best: SuggestionCandidate, composing: str,
                        level: AutoCorrectAggressiveness) -> bool:
    candidate = best.text.lower()
    typed = composing.lower()
    dist = full_distance(typed, candidate)
    length_diff = abs(len(composing) - len(candidate))
    conf = best.confidence
    min_conf = level.min_confidence

    # Near-exact with high confidence
    if conf > min_conf and dist <= 1:
        return True
    # Small typo
    if (conf > min_conf - 0.1 and dist <= level.max_edit_distance
            and length_diff <= 1 and len(composing) >= level.min_word_length):
        return True
    # Short completion of a meaningful prefix
    if (conf > min_conf - 0.15 and candidate.startswith(typed)
            and len(typed) >= level.min_word_length
            and len(candidate) <= len(typed) + 4):
        return True
    if level is AutoCorrectAggressiveness.CONSERVATIVE and conf > 0.95 and dist == 0:
        return True
    if (level is AutoCorrectAggressiveness.AGGRESSIVE and conf > 0.6
            and dist <= 2 and len(composing) >= 2):
        return True
    return False
