"""Repository interfaces for the Inkwell domain.

Interfaces live in the domain layer; implementations live in persistence.
"""

from inkwell.domain.repository.change_feed import (
    ChangeFeed,
    ChangeHandler,
    Unsubscribe,
)
from inkwell.domain.repository.comment import CommentRepository
from inkwell.domain.repository.post import PostRepository
from inkwell.domain.repository.user import UserRepository

__all__ = [
    "ChangeFeed",
    "ChangeHandler",
    "CommentRepository",
    "PostRepository",
    "Unsubscribe",
    "UserRepository",
]
