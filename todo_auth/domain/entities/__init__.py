"""
Todo Auth Domain Entities

Each entity lives in its own module; import them from here.
"""

from .user import User
from .session import Session

__all__ = [
    "User",
    "Session",
]
