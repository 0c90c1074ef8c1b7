"""Pricing and availability enrichment for analyzed domains."""

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Dict, Optional, Any

from ..exceptions import EnrichmentError
from ..llm_client import LLMClient
from ..utils.cache import AvailabilityCache
from .dns_checker import DNSChecker
from .whois_checker import WhoisChecker

logger = logging.getLogger(__name__)

REGISTERED_LABEL = "Unknown (Currently Registered)"

PREMIUM_TLDS = {'ai', 'io', 'app', 'dev', 'tech', 'co'}


@dataclass(frozen=True)
class DomainPricing:
    """Optional pricing/availability data attached to an analysis."""
    available: bool
    price: Optional[float] = None
    currency: Optional[str] = "USD"
    registrar: Optional[str] = None
    source: str = "estimate"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'available': self.available,
            'price': self.price,
            'currency': self.currency,
            'registrar': self.registrar,
            'source': self.source
        }


def _name_and_tld(domain: str):
    parts = domain.lower().split('.')
    return parts[0], parts[-1]


def default_price_estimate(domain: str) -> float:
    """Rough market price: short names and premium TLDs cost more."""
    name, tld = _name_and_tld(domain)
    premium = tld in PREMIUM_TLDS

    if len(name) <= 3:
        return 15000 if premium else 8000
    elif len(name) <= 5:
        return 5000 if premium else 2000
    else:
        return 1500 if premium else 500


class PricingService:
    """Interface: anything with an async get_pricing(domain) can enrich analyses."""

    source = "unknown"

    async def get_pricing(self, domain: str) -> DomainPricing:
        raise NotImplementedError


class EstimatedPricingService(PricingService):
    """Offline heuristic pricing with reproducible pseudo-random availability."""

    source = "estimate"

    WELL_KNOWN_NAMES = {'google', 'amazon', 'facebook', 'twitter', 'instagram'}
    REGISTRARS = ['GoDaddy', 'Namecheap', 'Domain.com', 'Google Domains']

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random(seed)

    def estimate(self, domain: str) -> DomainPricing:
        name, _ = _name_and_tld(domain)

        if name in self.WELL_KNOWN_NAMES:
            return DomainPricing(
                available=False,
                price=default_price_estimate(domain),
                registrar=REGISTERED_LABEL,
                source=self.source
            )

        # Short names are usually taken but valuable
        if len(name) <= 4:
            available = self.rng.random() > 0.8
            if available:
                price = 2000 + self.rng.randrange(8000)
            else:
                price = 5000 + self.rng.randrange(20000)
            return DomainPricing(
                available=available,
                price=price,
                registrar='GoDaddy' if available else REGISTERED_LABEL,
                source=self.source
            )

        available = self.rng.random() > 0.4
        if available:
            price = 10 + self.rng.randrange(100)
            registrar = self.rng.choice(self.REGISTRARS)
        else:
            price = 200 + self.rng.randrange(5000)
            registrar = REGISTERED_LABEL
        return DomainPricing(available=available, price=price, registrar=registrar, source=self.source)

    async def get_pricing(self, domain: str) -> DomainPricing:
        return self.estimate(domain)


class RegistryPricingService(PricingService):
    """Availability from DNS + WHOIS, price from the default estimate."""

    source = "registry"

    def __init__(
        self,
        dns_checker: Optional[DNSChecker] = None,
        whois_checker: Optional[WhoisChecker] = None,
        cache: Optional[AvailabilityCache] = None
    ):
        self.dns_checker = dns_checker or DNSChecker()
        self.whois_checker = whois_checker or WhoisChecker()
        self.cache = cache

    def _pricing(self, domain: str, available: bool, registrar: Optional[str]) -> DomainPricing:
        if not available and not registrar:
            registrar = REGISTERED_LABEL
        return DomainPricing(
            available=available,
            price=default_price_estimate(domain),
            registrar=registrar,
            source=self.source
        )

    async def get_pricing(self, domain: str) -> DomainPricing:
        if self.cache is not None:
            cached = self.cache.get(domain)
            if cached is not None:
                return self._pricing(domain, cached['available'], cached.get('registrar'))

        # DNS first (fast); WHOIS confirms and names the registrar
        dns_result = await self.dns_checker.check(domain)
        if dns_result is None:
            raise EnrichmentError(f"Could not determine availability of {domain}")

        record = await asyncio.to_thread(self.whois_checker.lookup, domain)
        if record.available is None:
            # WHOIS inconclusive, trust DNS
            available, method = dns_result, 'dns'
        else:
            available, method = record.available, 'whois'

        if self.cache is not None:
            self.cache.put(domain, available, registrar=record.registrar, method=method)

        return self._pricing(domain, available, record.registrar)


class LLMPricingService(PricingService):
    """Asks a generative-text model for pricing and parses JSON out of the reply."""

    source = "llm"

    PROMPT = (
        'You are a domain pricing expert. Be precise and concise.\n'
        'I need information about the domain "{domain}". Please provide:\n'
        '1. Is the domain available for purchase? (true or false)\n'
        '2. What is its approximate price in USD?\n'
        '3. Which registrar offers this domain?\n'
        'Format your response as a JSON object with these keys:\n'
        '{{"available": boolean, "price": number, "currency": "USD", "registrar": string}}\n'
        'Only return valid JSON. Don\'t include any other explanation.'
    )

    def __init__(self, client: LLMClient):
        self.client = client

    async def get_pricing(self, domain: str) -> DomainPricing:
        data = await self.client.generate_json(self.PROMPT.format(domain=domain), max_tokens=200)

        if 'available' not in data:
            raise EnrichmentError(f"Model response for {domain} has no availability")

        price = data.get('price')
        try:
            price = float(price) if price is not None else None
        except (TypeError, ValueError):
            price = None

        return DomainPricing(
            available=bool(data['available']),
            price=price,
            currency=data.get('currency') or 'USD',
            registrar=data.get('registrar'),
            source=self.source
        )


PROVIDERS = ('estimate', 'registry', 'llm', 'none')


def build_pricing_service(config: Dict[str, Any], provider: Optional[str] = None,
                          seed: Optional[int] = None) -> Optional[PricingService]:
    """Create the pricing service named by provider (or the config default)."""
    pricing_cfg = config.get('pricing', {})
    provider = provider or pricing_cfg.get('provider', 'estimate')

    if provider == 'none':
        return None
    if provider == 'estimate':
        return EstimatedPricingService(seed=seed if seed is not None else pricing_cfg.get('seed'))
    if provider == 'registry':
        cache_cfg = config.get('cache', {})
        return RegistryPricingService(
            dns_checker=DNSChecker(timeout=config.get('dns', {}).get('timeout', 3.0)),
            whois_checker=WhoisChecker(
                rate_limit_delay=config.get('whois', {}).get('rate_limit_delay', 1.5)
            ),
            cache=AvailabilityCache(
                cache_file=cache_cfg.get('file', 'data/results/pricing_cache.json'),
                ttl_hours=cache_cfg.get('ttl_hours', 24)
            )
        )
    if provider == 'llm':
        llm_cfg = config.get('llm', {})
        return LLMPricingService(LLMClient(
            api_key=llm_cfg.get('api_key'),
            model=llm_cfg.get('model', 'gemini-pro'),
            timeout=llm_cfg.get('timeout', 30.0)
        ))
    raise ValueError(f"Unknown pricing provider: {provider}")
