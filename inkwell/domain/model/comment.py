"""Comment entity.

Comments are stored flat. Threading is expressed only through ``parent_id``;
the tree is derived at read time by the thread builder.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from inkwell.domain.model.common import DomainModel
from inkwell.domain.value import CommentId, PostId, UserId
from inkwell.domain.value.types import DisplayName


class Comment(DomainModel):
    """Comment entity.

    A comment on a blog post, or a reply to another comment on the same post.

    - parent_id: Comment being replied to (None for top-level). Never
      validated at read time; a dangling reference makes the comment a root.
    - seq: Store-assigned insertion sequence, breaks created_at ties.
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    author_name: DisplayName
    content: str = Field(min_length=1, max_length=10000)
    parent_id: Optional[CommentId] = None
    seq: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def sort_key(self) -> tuple[datetime, int, str]:
        """Canonical thread ordering: creation time, then sequence, then id."""
        return (self.created_at, self.seq, str(self.id))
