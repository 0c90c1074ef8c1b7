"""Tier rules: trials, daily usage limits and comparison limits."""

import logging
import uuid
from datetime import datetime, timedelta
from typing import Callable, Optional

from ..exceptions import AccountError
from .models import Tier, User
from .repository import UserRepository

logger = logging.getLogger(__name__)


class AccountService:
    """Sign-up/sign-in and feature gating for free, trial and premium users."""

    def __init__(
        self,
        repository: UserRepository,
        trial_days: int = 14,
        free_daily_limit: int = 5,
        free_compare_limit: int = 2,
        max_compare: int = 5,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.repository = repository
        self.trial_days = trial_days
        self.free_daily_limit = free_daily_limit
        self.free_compare_limit = free_compare_limit
        self.max_compare = max_compare
        self.clock = clock or datetime.now

    def sign_up(self, email: str, name: Optional[str] = None) -> User:
        """Create a free user with a premium trial."""
        email = email.strip().lower()
        if self.repository.find_by_email(email):
            raise AccountError("Email already in use")

        now = self.clock()
        user = User(
            id=f"user-{uuid.uuid4().hex[:12]}",
            email=email,
            name=name,
            tier=Tier.FREE,
            daily_usage=0,
            last_usage_date=now.date(),
            trial_end_date=now + timedelta(days=self.trial_days),
        )
        logger.info("Created account %s with %d-day trial", email, self.trial_days)
        return self.repository.create(user)

    def _reset_if_new_day(self, user: User) -> bool:
        today = self.clock().date()
        if user.last_usage_date != today:
            user.daily_usage = 0
            user.last_usage_date = today
            return True
        return False

    def sign_in(self, email: str) -> User:
        user = self.repository.find_by_email(email.strip().lower())
        if user is None:
            raise AccountError("Invalid email or password")

        if self._reset_if_new_day(user):
            self.repository.save(user)
        return user

    def get(self, email: str) -> User:
        user = self.repository.find_by_email(email.strip().lower())
        if user is None:
            raise AccountError(f"No account for {email}")
        return user

    def is_in_trial(self, user: User) -> bool:
        return user.trial_end_date is not None and user.trial_end_date > self.clock()

    def is_premium(self, user: User) -> bool:
        """Premium features: paid tier or an active trial."""
        return user.tier == Tier.PREMIUM or self.is_in_trial(user)

    def trial_hours_remaining(self, user: User) -> int:
        if not self.is_in_trial(user):
            return 0
        remaining = user.trial_end_date - self.clock()
        return -(-int(remaining.total_seconds()) // 3600)

    def record_usage(self, user: User) -> bool:
        """Count one analysis. Free users past their daily limit are refused."""
        self._reset_if_new_day(user)

        if not self.is_premium(user) and user.daily_usage >= self.free_daily_limit:
            logger.info("Daily limit reached for %s", user.email)
            self.repository.save(user)
            return False

        user.daily_usage += 1
        self.repository.save(user)
        return True

    def max_compare_domains(self, user: Optional[User]) -> int:
        if user is not None and self.is_premium(user):
            return self.max_compare
        return self.free_compare_limit

    def upgrade(self, user: User) -> User:
        user.tier = Tier.PREMIUM
        logger.info("Upgraded %s to premium", user.email)
        return self.repository.save(user)
