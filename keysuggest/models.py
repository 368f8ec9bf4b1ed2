"""Value types shared by the engine components."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

FREQUENCY_MIN = 0
FREQUENCY_MAX = 255


def clamp_frequency(value: int) -> int:
    return max(FREQUENCY_MIN, min(int(value), FREQUENCY_MAX))


def clamp_confidence(value: float) -> float:
    return max(0.0, min(float(value), 1.0))


class MatchTier(Enum):
    POPULAR = "popular"        # empty input, top words by frequency
    EXACT = "exact"
    PREFIX = "prefix"
    SUBSTRING = "substring"
    EDIT_DISTANCE = "edit_distance"


@dataclass(frozen=True)
class WordEntry:
    word: str
    frequency: int

    def __post_init__(self):
        object.__setattr__(self, "frequency", clamp_frequency(self.frequency))


@dataclass
class LearnedEntry:
    """Row of the learned dictionary, keyed by (word, locale)."""
    id: int
    word: str
    frequency: int
    locale: str
    shortcut: Optional[str] = None

    def __post_init__(self):
        self.frequency = clamp_frequency(self.frequency)


@dataclass(frozen=True)
class SuggestionCandidate:
    text: str
    confidence: float
    auto_commit_eligible: bool = False
    source_tier: MatchTier = MatchTier.POPULAR

    def __post_init__(self):
        object.__setattr__(self, "confidence", clamp_confidence(self.confidence))


@dataclass(frozen=True)
class SpellingVerdict:
    is_valid: bool
    suggestions: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def valid(cls) -> "SpellingVerdict":
        return cls(is_valid=True)

    @classmethod
    def typo(cls, suggestions) -> "SpellingVerdict":
        return cls(is_valid=False, suggestions=tuple(suggestions))

    @property
    def is_typo(self) -> bool:
        return not self.is_valid
