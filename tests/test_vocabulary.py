"""Tests for base dictionary loading, locking and the learned overlay."""
import sys
import os
import threading
import time
from unittest.mock import MagicMock
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest

from keysuggest.errors import DictionaryLoadError, LearnedStoreUnavailable
from keysuggest.learned_store import InMemoryLearnedStore
from keysuggest.models import LearnedEntry
from keysuggest.vocabulary import GuardedDictionary, VocabularyStore, merge_dictionaries

SAMPLE = {"hello": 200, "help": 150, "world": 100}


def make_reader(words=None):
    reader = MagicMock()
    reader.read_base_dictionary.return_value = dict(words or SAMPLE)
    return reader


def test_merge_learned_overrides_base():
    merged = merge_dictionaries({"hello": 200, "help": 150}, {"hello": 50, "zoomer": 163})
    assert merged == {"hello": 50, "help": 150, "zoomer": 163}


def test_merge_collision_is_case_insensitive():
    merged = merge_dictionaries({"Hello": 200}, {"hello": 90})
    assert merged == {"Hello": 90}


def test_merge_prefer_base():
    merged = merge_dictionaries({"hello": 200}, {"hello": 50, "new": 10}, prefer_learned=False)
    assert merged == {"hello": 200, "new": 10}


def test_merge_does_not_mutate_inputs():
    base = {"hello": 200}
    learned = {"hello": 1}
    merge_dictionaries(base, learned)
    assert base == {"hello": 200}


def test_guarded_dictionary_loads_once():
    guarded = GuardedDictionary()
    assert guarded.load_if_empty(lambda: {"a": 1})
    assert not guarded.load_if_empty(lambda: {"b": 2})
    assert guarded.snapshot() == {"a": 1}


def test_guarded_snapshot_is_a_copy():
    guarded = GuardedDictionary()
    guarded.load_if_empty(lambda: {"a": 1})
    snap = guarded.snapshot()
    snap["b"] = 2
    assert guarded.snapshot() == {"a": 1}


def test_preload_is_idempotent():
    reader = make_reader()
    store = VocabularyStore(reader)
    store.preload("en")
    first = dict(store.merged_view("en"))
    store.preload("en")
    assert dict(store.merged_view("en")) == first
    assert reader.read_base_dictionary.call_count == 1


def test_preload_per_locale():
    reader = make_reader()
    store = VocabularyStore(reader)
    store.preload("en")
    store.preload("de")
    assert reader.read_base_dictionary.call_count == 2


def test_failed_preload_is_retried():
    reader = MagicMock()
    reader.read_base_dictionary.side_effect = [DictionaryLoadError("en", "disk"), dict(SAMPLE)]
    store = VocabularyStore(reader)

    with pytest.raises(DictionaryLoadError):
        store.preload("en")
    assert not store.is_loaded("en")
    assert dict(store.merged_view("en")) == {}

    store.preload("en")
    assert store.is_loaded("en")
    assert reader.read_base_dictionary.call_count == 2


def test_empty_asset_is_a_load_error():
    reader = MagicMock()
    reader.read_base_dictionary.return_value = {}
    store = VocabularyStore(reader)
    with pytest.raises(DictionaryLoadError):
        store.preload("en")


def test_concurrent_preload_reads_asset_once():
    calls = []

    class SlowReader:
        def read_base_dictionary(self, locale):
            calls.append(locale)
            time.sleep(0.05)
            return dict(SAMPLE)

    store = VocabularyStore(SlowReader())
    views = []
    errors = []

    def worker():
        try:
            store.preload("en")
            views.append(dict(store.merged_view("en")))
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert calls == ["en"]
    assert all(v == SAMPLE for v in views)


def test_merged_view_overlays_learned_entries():
    learned = InMemoryLearnedStore()
    learned.insert(LearnedEntry(id=0, word="hello", frequency=50, locale="en"))
    learned.insert(LearnedEntry(id=0, word="zoomer", frequency=163, locale="en"))
    learned.insert(LearnedEntry(id=0, word="hallo", frequency=99, locale="de"))

    store = VocabularyStore(make_reader(), learned)
    store.preload("en")
    view = store.merged_view("en")
    assert view["hello"] == 50
    assert view["zoomer"] == 163
    assert "hallo" not in view


def test_merged_view_is_read_only():
    store = VocabularyStore(make_reader())
    store.preload("en")
    view = store.merged_view("en")
    with pytest.raises(TypeError):
        view["new"] = 1


def test_learned_store_failure_falls_back_to_base():
    learned = MagicMock()
    learned.query_all.side_effect = LearnedStoreUnavailable("db locked")
    store = VocabularyStore(make_reader(), learned)
    store.preload("en")
    assert dict(store.merged_view("en")) == SAMPLE


def test_word_list_and_frequency():
    store = VocabularyStore(make_reader())
    store.preload("en")
    assert sorted(store.words("en")) == ["hello", "help", "world"]
    assert store.frequency_for_word("en", "hello") == pytest.approx(200 / 255)
    assert store.frequency_for_word("en", "missing") == 0.0


def test_contains_base_word_ignores_case_of_input():
    store = VocabularyStore(make_reader())
    store.preload("en")
    assert store.contains_base_word("en", "Hello")
    assert not store.contains_base_word("en", "zoomer")


def test_unload_forgets_dictionary():
    reader = make_reader()
    store = VocabularyStore(reader)
    store.preload("en")
    store.unload("en")
    assert not store.is_loaded("en")
    store.preload("en")
    assert reader.read_base_dictionary.call_count == 2


def test_contains_base_word_matches_any_stored_casing():
    store = VocabularyStore(make_reader({"iPhone": 200}))
    store.preload("en")
    assert store.contains_base_word("en", "IPHONE")
    assert store.contains_base_word("en", "iphone")


def test_learned_rows_differing_in_case_collapse():
    learned = InMemoryLearnedStore()
    learned.insert(LearnedEntry(id=0, word="Zoomer", frequency=163, locale="en"))
    learned.insert(LearnedEntry(id=0, word="zoomer", frequency=173, locale="en"))
    store = VocabularyStore(make_reader(), learned)
    store.preload("en")
    assert store.learned_snapshot("en") == {"Zoomer": 173}
    view = store.merged_view("en")
    assert [w for w in view if w.lower() == "zoomer"] == ["Zoomer"]


def test_merge_dedupes_learned_words_by_case():
    merged = merge_dictionaries({"hello": 200}, {"Zoomer": 163, "zoomer": 173})
    assert merged == {"hello": 200, "Zoomer": 173}
