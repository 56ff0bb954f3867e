"""Unit tests for the NetworkCache store."""

from infodetect.schemas.record_schemas import ProviderResult
from infodetect.store import DEFAULT_TTL_MS, NetworkCache


class TestFreshness:

    def test_new_cache_is_empty_and_not_usable(self, clock):
        cache = NetworkCache(clock=clock)

        assert cache.snapshot().model_dump() == {"ip": "", "isp": "", "country": "", "last_updated": 0}
        assert not cache.is_usable()

    def test_ttl_boundary(self, clock):
        cache = NetworkCache(clock=clock)
        cache.commit(ProviderResult(ip="1.1.1.1"))

        clock.advance(DEFAULT_TTL_MS - 1)
        assert cache.is_fresh()

        clock.advance(2)
        assert not cache.is_fresh()
        assert not cache.is_usable()

    def test_exactly_ttl_is_stale(self, clock):
        cache = NetworkCache(ttl_ms=1000, clock=clock)
        cache.commit(ProviderResult(ip="1.1.1.1"))

        clock.advance(1000)

        assert not cache.is_fresh()

    def test_fresh_but_empty_ip_is_not_usable(self, clock):
        cache = NetworkCache(clock=clock)
        cache.last_updated = clock()

        assert cache.is_fresh()
        assert not cache.is_usable()


class TestCommit:

    def test_full_commit_replaces_everything(self, clock):
        cache = NetworkCache(clock=clock)
        cache.commit(ProviderResult(ip="9.9.9.9", isp="Old", country="FR"))
        clock.advance(10)

        facts = cache.commit(ProviderResult(ip="1.2.3.4", isp="Acme", country="US"))

        assert (facts.ip, facts.isp, facts.country) == ("1.2.3.4", "Acme", "US")
        assert facts.last_updated == clock()

    def test_ip_only_commit_keeps_isp_and_country(self, clock):
        cache = NetworkCache(clock=clock)
        cache.commit(ProviderResult(ip="9.9.9.9", isp="Old", country="FR"))

        cache.commit(ProviderResult(ip="5.5.5.5"))

        assert (cache.ip, cache.isp, cache.country) == ("5.5.5.5", "Old", "FR")

    def test_snapshot_is_a_copy(self, clock):
        cache = NetworkCache(clock=clock)
        cache.commit(ProviderResult(ip="1.1.1.1"))

        snap = cache.snapshot()
        cache.commit(ProviderResult(ip="2.2.2.2"))

        assert snap.ip == "1.1.1.1"
        assert cache.snapshot().ip == "2.2.2.2"
