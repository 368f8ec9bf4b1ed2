"""Build base dictionary assets from pyspellchecker word-frequency lists."""
import json
import logging
import math
from pathlib import Path
from typing import Dict, Iterable, Tuple

from spellchecker import SpellChecker

from keysuggest.models import FREQUENCY_MAX

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20000


def scale_counts(counts: Iterable[Tuple[str, int]]) -> Dict[str, int]:
    """Map raw corpus counts onto 1..255 on a log scale.

    The most frequent word gets 255; every kept word gets at least 1.
    """
    items = [(w, c) for w, c in counts if w and c > 0]
    if not items:
        return {}
    top = math.log1p(max(c for _, c in items))
    return {
        w: max(1, min(FREQUENCY_MAX, round(FREQUENCY_MAX * math.log1p(c) / top)))
        for w, c in items
    }


def build_dictionary(locale: str, limit: int = DEFAULT_LIMIT) -> Dict[str, int]:
    language = locale.replace("-", "_").split("_", 1)[0].lower()
    spell = SpellChecker(language=language)
    common = spell.word_frequency.most_common(limit)
    logger.info("Building %s dictionary from %d pyspellchecker words", locale, len(common))
    return scale_counts(common)


def write_dictionary(words: Dict[str, int], output) -> Path:
    path = Path(output).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(words, f, ensure_ascii=False, separators=(",", ":"))
    return path
