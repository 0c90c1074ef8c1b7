"""JSON file cache for registry availability lookups."""

import json
import logging
from collections import Counter
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)


class AvailabilityCache:
    """Availability and registrar per domain, persisted as JSON and expired after a TTL."""

    def __init__(
        self,
        cache_file: str = "data/results/pricing_cache.json",
        ttl_hours: float = 24,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.path = Path(cache_file)
        self.ttl = timedelta(hours=ttl_hours)
        self.clock = clock or datetime.now
        self._entries: Dict[str, Dict[str, Any]] = self._read()
        pruned = self.prune()
        if pruned:
            logger.debug("Dropped %d expired entries from %s", pruned, self.path)

    def _read(self) -> Dict[str, Dict[str, Any]]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text())
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Ignoring unreadable cache file %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(self._entries, indent=2, sort_keys=True))

    def _expired(self, entry: Dict[str, Any], now: datetime) -> bool:
        return now - datetime.fromisoformat(entry['checked_at']) > self.ttl

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, domain: str) -> Optional[Dict[str, Any]]:
        """Fresh entry for a domain, or None (expired entries are dropped)."""
        key = domain.lower()
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._expired(entry, self.clock()):
            del self._entries[key]
            return None
        return entry

    def put(self, domain: str, available: bool, registrar: Optional[str] = None,
            method: str = "whois") -> Dict[str, Any]:
        entry = {
            'available': available,
            'registrar': registrar,
            'method': method,
            'checked_at': self.clock().isoformat()
        }
        self._entries[domain.lower()] = entry
        self._write()
        return entry

    def prune(self) -> int:
        """Drop expired entries and return how many went."""
        now = self.clock()
        stale = [domain for domain, entry in self._entries.items() if self._expired(entry, now)]
        for domain in stale:
            del self._entries[domain]
        if stale:
            self._write()
        return len(stale)

    def stats(self) -> Dict[str, Any]:
        available = sum(1 for e in self._entries.values() if e['available'])
        return {
            'entries': len(self._entries),
            'available': available,
            'registered': len(self._entries) - available,
            'by_method': dict(Counter(e['method'] for e in self._entries.values()))
        }
