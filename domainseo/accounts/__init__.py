from .models import Tier, User
from .repository import UserRepository, InMemoryUserRepository, SQLiteUserRepository
from .service import AccountService

__all__ = [
    'Tier', 'User', 'UserRepository', 'InMemoryUserRepository', 'SQLiteUserRepository',
    'AccountService',
]
