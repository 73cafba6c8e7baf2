from .favorite import Favorite
from .friend import Friend
from .team import Team
from .user import User

__all__ = [
    "User",
    "Favorite",
    "Team",
    "Friend",
]
