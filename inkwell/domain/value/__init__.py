"""Domain value objects for Inkwell."""

from inkwell.domain.value.identifiers import CommentId, PostId, UserId
from inkwell.domain.value.types import ChangeType, DisplayName, PostSortOrder

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    # Types
    "ChangeType",
    "DisplayName",
    "PostSortOrder",
]
