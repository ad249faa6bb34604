from .user import User
from .profile import Gender, Profile
from .history import HistoryEntry
from .session import AuthSession

__all__ = ["User", "Gender", "Profile", "HistoryEntry", "AuthSession"]
