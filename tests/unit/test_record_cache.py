from unittest.mock import Mock

from src.application.services.record_cache import CONTACTS, PROJECTS, RecordCache


def test_loads_once_until_invalidated():
    cache = RecordCache(ttl=60)
    loader = Mock(side_effect=[["a"], ["a", "b"]])

    assert cache.get_or_load(PROJECTS, loader) == ["a"]
    assert cache.get_or_load(PROJECTS, loader) == ["a"]
    assert loader.call_count == 1

    cache.invalidate(PROJECTS)
    assert cache.get_or_load(PROJECTS, loader) == ["a", "b"]
    assert loader.call_count == 2


def test_invalidate_only_named_collections():
    cache = RecordCache(ttl=60)
    cache.get_or_load(PROJECTS, lambda: [1])
    cache.get_or_load(CONTACTS, lambda: [2])

    cache.invalidate(CONTACTS)

    assert cache.get_or_load(PROJECTS, lambda: ["reloaded"]) == [1]
    assert cache.get_or_load(CONTACTS, lambda: ["reloaded"]) == ["reloaded"]


def test_zero_ttl_always_reloads():
    cache = RecordCache(ttl=0)
    loader = Mock(return_value=[])
    cache.get_or_load(PROJECTS, loader)
    cache.get_or_load(PROJECTS, loader)
    assert loader.call_count == 2


def test_failed_load_is_not_cached():
    cache = RecordCache(ttl=60)
    loader = Mock(side_effect=[RuntimeError("down"), ["ok"]])
    try:
        cache.get_or_load(PROJECTS, loader)
    except RuntimeError:
        pass
    assert cache.get_or_load(PROJECTS, loader) == ["ok"]
