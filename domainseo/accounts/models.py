"""Account entity and tier levels."""

from dataclasses import dataclass, asdict
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional


class Tier(str, Enum):
    FREE = "free"
    PREMIUM = "premium"


@dataclass
class User:
    """A user with a tier and a per-day usage counter.

    Trial status is not a tier of its own: a free user whose trial_end_date
    lies in the future gets premium features.
    """
    id: str
    email: str
    name: Optional[str] = None
    tier: Tier = Tier.FREE
    daily_usage: int = 0
    last_usage_date: Optional[date] = None
    trial_end_date: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['tier'] = self.tier.value
        data['last_usage_date'] = self.last_usage_date.isoformat() if self.last_usage_date else None
        data['trial_end_date'] = self.trial_end_date.isoformat() if self.trial_end_date else None
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        last_usage = data.get('last_usage_date')
        trial_end = data.get('trial_end_date')
        return cls(
            id=data['id'],
            email=data['email'],
            name=data.get('name'),
            tier=Tier(data.get('tier') or Tier.FREE.value),
            daily_usage=int(data.get('daily_usage') or 0),
            last_usage_date=date.fromisoformat(last_usage) if last_usage else None,
            trial_end_date=datetime.fromisoformat(trial_end) if trial_end else None,
        )
