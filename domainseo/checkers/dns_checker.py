"""DNS-based domain registration pre-check."""

import asyncio
import logging
from typing import Optional

import dns.asyncresolver
import dns.exception
import dns.resolver

logger = logging.getLogger(__name__)


class DNSChecker:
    """Fast DNS pre-filter: a domain with no records is possibly unregistered."""

    def __init__(self, timeout: float = 3.0, max_concurrent: int = 20):
        self.timeout = timeout
        self.max_concurrent = max_concurrent
        self._semaphore: Optional[asyncio.Semaphore] = None

    def _get_semaphore(self) -> asyncio.Semaphore:
        # Created lazily so it binds to the running loop
        if self._semaphore is None:
            self._semaphore = asyncio.Semaphore(self.max_concurrent)
        return self._semaphore

    async def check(self, domain: str) -> Optional[bool]:
        """Check a domain via an A-record lookup.

        Returns:
            True: no DNS records, likely available
            False: domain resolves or has a zone, registered
            None: lookup timed out or failed
        """
        async with self._get_semaphore():
            try:
                resolver = dns.asyncresolver.Resolver()
                resolver.timeout = self.timeout
                resolver.lifetime = self.timeout

                await resolver.resolve(domain, 'A')
                return False  # Has records
            except dns.resolver.NXDOMAIN:
                return True
            except dns.resolver.NoAnswer:
                return False  # Exists, no A record
            except dns.resolver.NoNameservers:
                return True
            except dns.exception.Timeout:
                logger.debug("DNS timeout for %s", domain)
                return None
            except dns.exception.DNSException as e:
                logger.debug("DNS lookup failed for %s: %s", domain, e)
                return None
