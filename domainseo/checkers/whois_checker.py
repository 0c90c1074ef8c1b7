"""WHOIS-based availability and registrar lookup."""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Optional

import whois
from whois.exceptions import WhoisDomainNotFoundError

logger = logging.getLogger(__name__)


@dataclass
class WhoisRecord:
    """Outcome of a WHOIS query. available is None when the answer is unclear."""
    domain: str
    available: Optional[bool]
    registrar: Optional[str] = None


class WhoisChecker:
    """WHOIS lookups spaced out to stay under registry rate limits."""

    AVAILABLE_PATTERNS = ['no match', 'not found', 'no entries', 'available', 'domain not found']
    REGISTERED_PATTERNS = ['registered', 'exists']

    def __init__(self, rate_limit_delay: float = 1.5):
        self.rate_limit_delay = rate_limit_delay
        self._last_request_time = float('-inf')
        self._rate_lock = threading.Lock()

    def _wait_for_rate_limit(self):
        # Lookups run in worker threads; one thread at a time waits and stamps
        with self._rate_lock:
            elapsed = time.monotonic() - self._last_request_time
            if elapsed < self.rate_limit_delay:
                time.sleep(self.rate_limit_delay - elapsed)
            self._last_request_time = time.monotonic()

    def lookup(self, domain: str) -> WhoisRecord:
        """Query WHOIS for a domain. Blocking; run in a worker thread from async code."""
        self._wait_for_rate_limit()

        try:
            w = whois.whois(domain)
        except WhoisDomainNotFoundError:
            return WhoisRecord(domain=domain, available=True)
        except Exception as e:
            # python-whois reports many outcomes only through the error text
            error_msg = str(e).lower()
            if any(p in error_msg for p in self.AVAILABLE_PATTERNS):
                return WhoisRecord(domain=domain, available=True)
            if any(p in error_msg for p in self.REGISTERED_PATTERNS):
                return WhoisRecord(domain=domain, available=False)
            logger.debug("WHOIS lookup failed for %s: %s", domain, e)
            return WhoisRecord(domain=domain, available=None)

        if w.domain_name is None:
            return WhoisRecord(domain=domain, available=True)

        registrar = w.registrar
        if isinstance(registrar, list):
            registrar = registrar[0] if registrar else None
        return WhoisRecord(domain=domain, available=False, registrar=registrar)
