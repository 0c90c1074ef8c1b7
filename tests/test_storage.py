"""
Tests for the pricing cache and the analysis history store.
"""

import json

import pytest

from domainseo import analyze_domain
from domainseo.checkers.pricing_service import DomainPricing
from domainseo.utils import AvailabilityCache, ResultsStore


@pytest.fixture
def store(tmp_path):
    return ResultsStore(str(tmp_path / "results" / "analyses.db"))


@pytest.fixture
def cache(tmp_path, clock):
    return AvailabilityCache(cache_file=str(tmp_path / "cache.json"), ttl_hours=24, clock=clock)


class TestAvailabilityCache:
    """Test the JSON availability cache."""

    def test_put_and_get(self, cache):
        cache.put("example.com", False, registrar="MarkMonitor")
        entry = cache.get("Example.COM")
        assert entry['available'] is False
        assert entry['registrar'] == "MarkMonitor"
        assert entry['method'] == "whois"
        assert entry['checked_at'] == "2024-01-15T12:00:00"

    def test_persists_to_disk(self, cache, tmp_path, clock):
        cache.put("example.com", True, method="dns")
        reloaded = AvailabilityCache(cache_file=str(tmp_path / "cache.json"), clock=clock)
        assert reloaded.get("example.com")['method'] == "dns"
        assert len(reloaded) == 1

    def test_entry_expires_after_ttl(self, cache, clock):
        cache.put("old.com", True)
        clock.advance(hours=24)
        assert cache.get("old.com") is not None
        clock.advance(seconds=1)
        assert cache.get("old.com") is None
        assert len(cache) == 0

    def test_prune(self, cache, clock):
        cache.put("old.com", True)
        clock.advance(hours=20)
        cache.put("new.com", False, method="dns")
        clock.advance(hours=5)
        assert cache.prune() == 1
        assert cache.stats() == {'entries': 1, 'available': 0, 'registered': 1, 'by_method': {'dns': 1}}

    def test_expired_entries_pruned_on_load(self, cache, tmp_path, clock):
        cache.put("old.com", True)
        clock.advance(hours=12)
        cache.put("new.com", False)
        clock.advance(hours=13)

        reloaded = AvailabilityCache(cache_file=str(tmp_path / "cache.json"), ttl_hours=24, clock=clock)
        assert len(reloaded) == 1
        assert set(json.loads((tmp_path / "cache.json").read_text())) == {"new.com"}

    def test_unreadable_file_is_ignored(self, tmp_path):
        path = tmp_path / "cache.json"
        path.write_text("{not json")
        assert len(AvailabilityCache(cache_file=str(path))) == 0

    def test_file_format(self, cache, tmp_path):
        cache.put("example.com", True)
        data = json.loads((tmp_path / "cache.json").read_text())
        assert set(data["example.com"]) == {'available', 'registrar', 'method', 'checked_at'}


class TestResultsStore:
    """Test the SQLite analysis history."""

    def test_add_and_get(self, store):
        store.add(analyze_domain("example.com"))
        row = store.get("example.com")
        assert row['name'] == "example"
        assert row['extension'] == "com"
        assert row['overall_score'] == 8
        assert row['has_keywords'] == 0
        assert row['available'] is None
        assert row['analysis_count'] == 1

    def test_repeat_analysis_updates_row(self, store):
        result = analyze_domain("example.com")
        store.add(result)
        first = store.get("example.com")['first_analyzed']
        store.add(result)
        row = store.get("example.com")
        assert row['analysis_count'] == 2
        assert row['first_analyzed'] == first

    def test_pricing_columns(self, store):
        result = analyze_domain("myseo-app.io")
        result.pricing = DomainPricing(available=True, price=49.0, registrar="Namecheap")
        store.add(result)
        row = store.get("myseo-app.io")
        assert row['available'] == 1
        assert row['price'] == 49.0
        assert row['currency'] == "USD"

    def test_query_orders_by_score(self, store):
        store.add_batch([analyze_domain(d) for d in ["site123.net", "myseo-app.io", "example.com"]])
        rows = store.query()
        assert [r['domain'] for r in rows] == ["myseo-app.io", "example.com", "site123.net"]

    def test_query_filters(self, store):
        store.add_batch([analyze_domain(d) for d in ["site123.net", "myseo-app.io", "example.com"]])
        assert [r['domain'] for r in store.query(min_score=8)] == ["myseo-app.io", "example.com"]
        assert [r['domain'] for r in store.query(extension="net")] == ["site123.net"]
        assert len(store.query(limit=1)) == 1
        assert store.query(available=True) == []

    def test_stats(self, store):
        store.add_batch([analyze_domain(d) for d in ["site123.net", "myseo-app.io", "example.com"]])
        stats = store.stats()
        assert stats['total'] == 3
        assert stats['max_score'] == 9
        assert stats['min_score'] == 7
        assert stats['avg_score'] == 8.0
        assert stats['extensions']['net'] == {'total': 1, 'avg_score': 7.0}

    def test_empty_stats(self, store):
        assert store.stats()['total'] == 0
        assert store.get("missing.com") is None
