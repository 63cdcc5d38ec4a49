"""Strongly typed identifiers for Inkwell entities.

NewType keeps a comment id from being passed where a post id is expected.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
PostId = NewType("PostId", UUID)
CommentId = NewType("CommentId", UUID)
