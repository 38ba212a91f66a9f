"""
Ludo Database Layer.

Supabase integration for player profiles and win/loss statistics.
"""

from src.database.client import get_supabase_client
from src.database.models import Profile, ProfileUpdate, UserStatistics, win_rate
from src.database.profile import ProfileManager

__all__ = [
    "get_supabase_client",
    "Profile",
    "ProfileManager",
    "ProfileUpdate",
    "UserStatistics",
    "win_rate",
]
