"""
Tests for pricing and availability enrichment.
"""

import asyncio

import pytest

from domainseo import EnrichmentError
from domainseo.checkers.pricing_service import (
    REGISTERED_LABEL,
    EstimatedPricingService,
    LLMPricingService,
    RegistryPricingService,
    build_pricing_service,
    default_price_estimate,
)
from domainseo.checkers.whois_checker import WhoisRecord
from domainseo.config import DEFAULTS
from domainseo.utils.cache import AvailabilityCache


class FakeDNS:
    def __init__(self, result):
        self.result = result
        self.calls = 0

    async def check(self, domain):
        self.calls += 1
        return self.result


class FakeWhois:
    def __init__(self, available, registrar=None):
        self.available = available
        self.registrar = registrar

    def lookup(self, domain):
        return WhoisRecord(domain=domain, available=self.available, registrar=self.registrar)


class FakeLLM:
    def __init__(self, data=None, error=None):
        self.data = data
        self.error = error
        self.prompts = []

    async def generate_json(self, prompt, **kwargs):
        self.prompts.append(prompt)
        if self.error:
            raise self.error
        return self.data


class TestDefaultPriceEstimate:

    @pytest.mark.parametrize("domain,expected", [
        ("abc.ai", 15000), ("abc.com", 8000),
        ("abcde.io", 5000), ("abcde.com", 2000),
        ("example.dev", 1500), ("example.com", 500),
    ])
    def test_price_bands(self, domain, expected):
        assert default_price_estimate(domain) == expected


class TestEstimatedPricing:
    """Test offline heuristic pricing."""

    def test_well_known_names_are_registered(self):
        pricing = EstimatedPricingService(seed=1).estimate("google.com")
        assert pricing.available is False
        assert pricing.registrar == REGISTERED_LABEL
        assert pricing.price == 500

    def test_seed_makes_results_reproducible(self):
        domains = ["abc.com", "example.io", "mybrand.net"]
        first = [EstimatedPricingService(seed=42).estimate(d) for d in domains]
        again = [EstimatedPricingService(seed=42).estimate(d) for d in domains]
        assert first == again

    @pytest.mark.parametrize("seed", range(20))
    def test_short_name_price_ranges(self, seed):
        pricing = EstimatedPricingService(seed=seed).estimate("abcd.com")
        if pricing.available:
            assert 2000 <= pricing.price < 10000
            assert pricing.registrar == "GoDaddy"
        else:
            assert 5000 <= pricing.price < 25000
            assert pricing.registrar == REGISTERED_LABEL

    @pytest.mark.parametrize("seed", range(20))
    def test_regular_name_price_ranges(self, seed):
        pricing = EstimatedPricingService(seed=seed).estimate("mybrandname.com")
        if pricing.available:
            assert 10 <= pricing.price < 110
            assert pricing.registrar in EstimatedPricingService.REGISTRARS
        else:
            assert 200 <= pricing.price < 5200

    def test_get_pricing_is_async(self):
        pricing = asyncio.run(EstimatedPricingService(seed=3).get_pricing("example.com"))
        assert pricing.source == "estimate"


class TestRegistryPricing:
    """Test DNS + WHOIS backed pricing."""

    def test_registered_domain(self):
        service = RegistryPricingService(dns_checker=FakeDNS(False),
                                         whois_checker=FakeWhois(False, "MarkMonitor"))
        pricing = asyncio.run(service.get_pricing("example.com"))
        assert pricing.available is False
        assert pricing.registrar == "MarkMonitor"
        assert pricing.price == 500
        assert pricing.source == "registry"

    def test_registered_without_registrar(self):
        service = RegistryPricingService(dns_checker=FakeDNS(False), whois_checker=FakeWhois(False))
        pricing = asyncio.run(service.get_pricing("example.com"))
        assert pricing.registrar == REGISTERED_LABEL

    def test_inconclusive_whois_trusts_dns(self):
        service = RegistryPricingService(dns_checker=FakeDNS(True), whois_checker=FakeWhois(None))
        assert asyncio.run(service.get_pricing("unregistered-name.io")).available is True

    def test_dns_failure_raises(self):
        service = RegistryPricingService(dns_checker=FakeDNS(None), whois_checker=FakeWhois(True))
        with pytest.raises(EnrichmentError):
            asyncio.run(service.get_pricing("example.com"))

    def test_uses_cache(self, tmp_path):
        cache = AvailabilityCache(cache_file=str(tmp_path / "cache.json"))
        dns = FakeDNS(True)
        service = RegistryPricingService(dns_checker=dns, whois_checker=FakeWhois(True), cache=cache)

        first = asyncio.run(service.get_pricing("freshname.com"))
        second = asyncio.run(service.get_pricing("freshname.com"))

        assert first.available is second.available is True
        assert dns.calls == 1
        assert cache.get("freshname.com")['method'] == "whois"


class TestLLMPricing:
    """Test model-backed pricing."""

    def test_parses_response(self):
        client = FakeLLM({"available": True, "price": "12.5", "registrar": "Namecheap"})
        pricing = asyncio.run(LLMPricingService(client).get_pricing("example.io"))
        assert pricing.available is True
        assert pricing.price == 12.5
        assert pricing.currency == "USD"
        assert pricing.source == "llm"
        assert '"example.io"' in client.prompts[0]

    def test_unparseable_price(self):
        client = FakeLLM({"available": False, "price": "n/a"})
        assert asyncio.run(LLMPricingService(client).get_pricing("example.io")).price is None

    def test_missing_availability(self):
        client = FakeLLM({"price": 10})
        with pytest.raises(EnrichmentError):
            asyncio.run(LLMPricingService(client).get_pricing("example.io"))

    def test_client_error_propagates(self):
        client = FakeLLM(error=EnrichmentError("down"))
        with pytest.raises(EnrichmentError):
            asyncio.run(LLMPricingService(client).get_pricing("example.io"))


class TestBuildPricingService:

    def test_none(self):
        assert build_pricing_service(DEFAULTS, provider='none') is None

    def test_default_is_estimate(self):
        assert isinstance(build_pricing_service(DEFAULTS), EstimatedPricingService)

    def test_registry(self, tmp_path):
        config = dict(DEFAULTS, cache={'file': str(tmp_path / "c.json"), 'ttl_hours': 1})
        assert isinstance(build_pricing_service(config, provider='registry'), RegistryPricingService)

    def test_llm(self):
        assert isinstance(build_pricing_service(DEFAULTS, provider='llm'), LLMPricingService)

    def test_seed_argument(self):
        a = build_pricing_service(DEFAULTS, seed=7).estimate("mybrandname.com")
        b = build_pricing_service(DEFAULTS, seed=7).estimate("mybrandname.com")
        assert a == b

    def test_unknown_provider(self):
        with pytest.raises(ValueError):
            build_pricing_service(DEFAULTS, provider='auction')
