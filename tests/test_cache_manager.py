"""Tests for the on-disk response cache."""

import json
from datetime import datetime, timedelta

from tiation_sdk.core.cache_manager import ResponseCacheManager, is_cache_miss


def _age_entries(cache, seconds):
    """Rewrite every stored entry as if it had been cached `seconds` ago."""
    for cache_file in cache.cache_dir.glob("*.json"):
        entry = json.loads(cache_file.read_text(encoding="utf-8"))
        entry["timestamp"] = (datetime.now() - timedelta(seconds=seconds)).isoformat()
        cache_file.write_text(json.dumps(entry), encoding="utf-8")


def test_round_trip_and_hit_rate(tmp_path):
    cache = ResponseCacheManager(cache_dir=str(tmp_path), max_age_seconds=60)

    assert is_cache_miss(cache.get_response("/webhooks"))
    cache.cache_response("/webhooks", None, {"data": []})

    assert cache.get_response("/webhooks") == {"data": []}
    assert cache.get_hit_rate() == 0.5


def test_params_are_part_of_the_key(tmp_path):
    cache = ResponseCacheManager(cache_dir=str(tmp_path))
    cache.cache_response("/cms/content", {"page": 1}, {"page": 1})

    assert is_cache_miss(cache.get_response("/cms/content", {"page": 2}))
    assert cache.get_response("/cms/content", {"page": 1}) == {"page": 1}


def test_expired_entries_are_removed_and_count_as_misses(tmp_path):
    cache = ResponseCacheManager(cache_dir=str(tmp_path), max_age_seconds=30)
    cache.cache_response("/webhooks", None, {"data": []})
    _age_entries(cache, 120)

    assert is_cache_miss(cache.get_response("/webhooks"))
    assert cache.misses == 1
    assert cache.hits == 0
    assert list(cache.cache_dir.glob("*.json")) == []


def test_clear_cache_returns_removed_count(tmp_path):
    cache = ResponseCacheManager(cache_dir=str(tmp_path))
    cache.cache_response("/a", None, 1)
    cache.cache_response("/b", None, 2)
    cache.cache_response("/b", {"page": 2}, 3)

    assert cache.clear_cache() == 3
    assert cache.clear_cache() == 0
    assert is_cache_miss(cache.get_response("/a"))


def test_namespaces_do_not_share_entries(tmp_path):
    first = ResponseCacheManager(cache_dir=str(tmp_path), namespace="https://a.example.test|abc")
    second = ResponseCacheManager(cache_dir=str(tmp_path), namespace="https://a.example.test|def")
    first.cache_response("/cms/content", None, {"owner": "first"})

    assert is_cache_miss(second.get_response("/cms/content"))
    assert first.get_response("/cms/content") == {"owner": "first"}


def test_disabled_cache_stores_nothing(tmp_path):
    cache = ResponseCacheManager(cache_dir=str(tmp_path / "unused"), enabled=False)
    cache.cache_response("/a", None, 1)

    assert is_cache_miss(cache.get_response("/a"))
    assert cache.clear_cache() == 0
    assert not (tmp_path / "unused").exists()
