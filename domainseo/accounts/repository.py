"""User storage behind a small repository interface."""

import sqlite3
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from ..exceptions import AccountError
from .models import User


class UserRepository(ABC):
    """Where AccountService keeps users. Inject one per service."""

    @abstractmethod
    def create(self, user: User) -> User:
        """Store a new user; duplicate ids or emails raise AccountError."""

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[User]:
        ...

    @abstractmethod
    def find_by_id(self, user_id: str) -> Optional[User]:
        ...

    @abstractmethod
    def save(self, user: User) -> User:
        """Persist changes to an existing user."""


class InMemoryUserRepository(UserRepository):
    """Dictionary-backed repository, mostly for tests and one-off sessions."""

    def __init__(self):
        self._users: Dict[str, User] = {}

    def create(self, user: User) -> User:
        if user.id in self._users or self.find_by_email(user.email):
            raise AccountError(f"User already exists: {user.email}")
        self._users[user.id] = user
        return user

    def find_by_email(self, email: str) -> Optional[User]:
        email = email.lower()
        return next((u for u in self._users.values() if u.email == email), None)

    def find_by_id(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    def save(self, user: User) -> User:
        if user.id not in self._users:
            raise AccountError(f"Unknown user: {user.id}")
        self._users[user.id] = user
        return user


class SQLiteUserRepository(UserRepository):
    """Stores users in a SQLite table."""

    COLUMNS = ('id', 'email', 'name', 'tier', 'daily_usage', 'last_usage_date', 'trial_end_date')

    def __init__(self, db_file: str = "data/results/users.db"):
        self.db_file = Path(db_file)
        self.db_file.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self):
        with sqlite3.connect(self.db_file) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS users (
                    id TEXT PRIMARY KEY,
                    email TEXT UNIQUE NOT NULL,
                    name TEXT,
                    tier TEXT NOT NULL,
                    daily_usage INTEGER DEFAULT 0,
                    last_usage_date TEXT,
                    trial_end_date TEXT
                )
            """)
            conn.commit()

    def _values(self, user: User) -> tuple:
        row = user.to_dict()
        return tuple(row[c] for c in self.COLUMNS)

    def _find(self, column: str, value: str) -> Optional[User]:
        with sqlite3.connect(self.db_file) as conn:
            conn.row_factory = sqlite3.Row
            row = conn.execute(
                f"SELECT * FROM users WHERE {column} = ?", (value,)
            ).fetchone()
            return User.from_dict(dict(row)) if row else None

    def create(self, user: User) -> User:
        try:
            with sqlite3.connect(self.db_file) as conn:
                conn.execute(
                    f"INSERT INTO users ({', '.join(self.COLUMNS)}) VALUES (?, ?, ?, ?, ?, ?, ?)",
                    self._values(user)
                )
                conn.commit()
        except sqlite3.IntegrityError as e:
            raise AccountError(f"User already exists: {user.email}") from e
        return user

    def find_by_email(self, email: str) -> Optional[User]:
        return self._find('email', email.lower())

    def find_by_id(self, user_id: str) -> Optional[User]:
        return self._find('id', user_id)

    def save(self, user: User) -> User:
        with sqlite3.connect(self.db_file) as conn:
            values = self._values(user)
            cursor = conn.execute("""
                UPDATE users SET email = ?, name = ?, tier = ?, daily_usage = ?,
                    last_usage_date = ?, trial_end_date = ?
                WHERE id = ?
            """, values[1:] + values[:1])
            conn.commit()
            if cursor.rowcount == 0:
                raise AccountError(f"Unknown user: {user.id}")
        return user
