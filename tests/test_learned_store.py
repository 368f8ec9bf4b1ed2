"""Tests for the learned dictionary stores."""
import sys
import os
import json
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest

from keysuggest.errors import LearnedStoreUnavailable
from keysuggest.learned_store import InMemoryLearnedStore, JsonLearnedStore
from keysuggest.models import LearnedEntry


def entry(word, freq=163, locale="en", id=0):
    return LearnedEntry(id=id, word=word, frequency=freq, locale=locale)


def test_insert_assigns_ids():
    store = InMemoryLearnedStore()
    a = store.insert(entry("zoomer"))
    b = store.insert(entry("yeet"))
    assert a != b
    assert {e.id for e in store.query_all("en")} == {a, b}


def test_query_exact_is_case_sensitive_and_per_locale():
    store = InMemoryLearnedStore()
    store.insert(entry("Zoomer"))
    store.insert(entry("zoomer", locale="de"))
    assert store.query_exact("zoomer", "en") == []
    assert len(store.query_exact("Zoomer", "en")) == 1
    assert len(store.query_exact("zoomer", "de")) == 1


def test_query_results_are_copies():
    store = InMemoryLearnedStore()
    store.insert(entry("zoomer"))
    row = store.query_exact("zoomer", "en")[0]
    row.frequency = 1
    assert store.query_exact("zoomer", "en")[0].frequency == 163


def test_update_unknown_id_fails():
    store = InMemoryLearnedStore()
    with pytest.raises(LearnedStoreUnavailable):
        store.update(entry("zoomer", id=42))


def test_frequency_clamped():
    assert entry("x", freq=400).frequency == 255
    assert entry("x", freq=-3).frequency == 0


def test_json_store_persists(tmp_path):
    path = tmp_path / "learned.json"
    store = JsonLearnedStore(path)
    entry_id = store.insert(entry("zoomer"))
    row = store.query_exact("zoomer", "en")[0]
    row.frequency = 173
    store.update(row)

    reopened = JsonLearnedStore(path)
    rows = reopened.query_exact("zoomer", "en")
    assert len(rows) == 1
    assert rows[0].id == entry_id
    assert rows[0].frequency == 173
    # ids keep counting after reload
    assert reopened.insert(entry("yeet")) > entry_id

    data = json.loads(path.read_text(encoding="utf-8"))
    assert {row["word"] for row in data["entries"]} == {"zoomer", "yeet"}


def test_json_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "learned.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonLearnedStore(path)
    assert store.query_all("en") == []


def test_json_store_write_failure_rolls_back(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory", encoding="utf-8")
    store = JsonLearnedStore(blocker / "learned.json")

    with pytest.raises(LearnedStoreUnavailable):
        store.insert(entry("zoomer"))
    assert store.query_all("en") == []
