"""
Pytest configuration and shared fixtures.
"""

from datetime import datetime, timedelta

import pytest
import yaml

from domainseo.accounts import AccountService, InMemoryUserRepository
from domainseo.checkers.pricing_service import DomainPricing, PricingService


class FakeClock:
    """Callable clock that tests can move forward."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class FakePricingService(PricingService):
    source = "fake"

    def __init__(self, available: bool = True, price: float = 99.0):
        self.available = available
        self.price = price
        self.calls = []

    async def get_pricing(self, domain: str) -> DomainPricing:
        self.calls.append(domain)
        return DomainPricing(available=self.available, price=self.price,
                             registrar="Namecheap", source=self.source)


class FailingPricingService(PricingService):
    async def get_pricing(self, domain: str) -> DomainPricing:
        raise RuntimeError("registry unreachable")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 1, 15, 12, 0, 0))


@pytest.fixture
def accounts(clock) -> AccountService:
    return AccountService(InMemoryUserRepository(), clock=clock)


@pytest.fixture
def fake_pricing() -> FakePricingService:
    return FakePricingService()


@pytest.fixture
def failing_pricing() -> FailingPricingService:
    return FailingPricingService()


@pytest.fixture
def config_file(tmp_path):
    """Config file keeping every database and cache under tmp_path."""
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({
        'pricing': {'provider': 'none'},
        'cache': {'file': str(tmp_path / "cache.json")},
        'store': {'db_file': str(tmp_path / "analyses.db")},
        'accounts': {'db_file': str(tmp_path / "users.db")},
    }))
    return path
