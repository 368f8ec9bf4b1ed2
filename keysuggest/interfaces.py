"""Collaborator interfaces the engine talks to.

Asset reader, learned store and refresh sink live outside the engine; these
protocols describe the methods the engine relies on.
"""
from typing import Dict, List, Protocol

from keysuggest.models import LearnedEntry


class AssetReader(Protocol):
    def read_base_dictionary(self, locale: str) -> Dict[str, int]:
        """Return the flat word → frequency map for locale.

        Raises DictionaryLoadError when the asset is missing or malformed.
        """
        ...


class LearnedStore(Protocol):
    def query_all(self, locale: str) -> List[LearnedEntry]:
        ...

    def query_exact(self, word: str, locale: str) -> List[LearnedEntry]:
        ...

    def insert(self, entry: LearnedEntry) -> int:
        ...

    def update(self, entry: LearnedEntry) -> None:
        ...


class RefreshSink(Protocol):
    def notify_vocabulary_changed(self) -> None:
        ...
