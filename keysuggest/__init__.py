"""keysuggest — tiered word suggestion and spell checking for software keyboards."""
from keysuggest.engine import SuggestionEngine
from keysuggest.models import SuggestionCandidate, SpellingVerdict, MatchTier

__all__ = ["SuggestionEngine", "SuggestionCandidate", "SpellingVerdict", "MatchTier"]
