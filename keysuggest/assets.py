"""Base dictionary assets — flat JSON word → frequency files."""
import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from keysuggest.errors import DictionaryLoadError
from keysuggest.models import WordEntry

logger = logging.getLogger(__name__)

RESOURCES_DIR = Path(__file__).parent / "resources"
FALLBACK_ASSET = "data.json"


def candidate_names(locale: str) -> List[str]:
    """Asset file names tried for a locale, most specific first.

    'en_US' → ['en_US.json', 'en.json', 'data.json']
    """
    names = []
    tag = locale.replace("-", "_")
    if tag:
        names.append(f"{tag}.json")
        language = tag.split("_", 1)[0]
        if language and language != tag:
            names.append(f"{language}.json")
    names.append(FALLBACK_ASSET)
    return names


def parse_dictionary(raw: str, source: str = "<string>") -> Dict[str, int]:
    """Parse a flat JSON object of string keys and integer values."""
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError(f"{source}: expected a JSON object, got {type(data).__name__}")

    words: Dict[str, int] = {}
    for word, freq in data.items():
        # bool is an int subclass; reject it explicitly
        if isinstance(freq, bool) or not isinstance(freq, int):
            raise ValueError(f"{source}: frequency for {word!r} is not an integer")
        if not word:
            continue
        entry = WordEntry(word, freq)
        words[entry.word] = entry.frequency
    return words


class JsonAssetReader:
    """Reads base dictionaries from JSON files in a list of directories.

    Directories are searched in order; the bundled resources directory is
    always searched last.
    """

    def __init__(self, search_dirs: Optional[Iterable] = None):
        dirs = [Path(d).expanduser() for d in (search_dirs or []) if d]
        if RESOURCES_DIR not in dirs:
            dirs.append(RESOURCES_DIR)
        self.search_dirs = dirs

    def find_asset(self, locale: str) -> Optional[Path]:
        for directory in self.search_dirs:
            for name in candidate_names(locale):
                path = directory / name
                if path.is_file():
                    return path
        return None

    def read_base_dictionary(self, locale: str) -> Dict[str, int]:
        path = self.find_asset(locale)
        if path is None:
            raise DictionaryLoadError(locale, "no dictionary asset found")

        logger.debug("Reading base dictionary for %s from %s", locale, path)
        try:
            raw = path.read_text(encoding="utf-8")
            return parse_dictionary(raw, source=str(path))
        except (OSError, ValueError) as e:
            # json.JSONDecodeError is a ValueError
            raise DictionaryLoadError(locale, str(e)) from e
