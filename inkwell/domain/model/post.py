"""Blog post aggregate root."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from inkwell.domain.model.common import DomainModel
from inkwell.domain.value import PostId, UserId
from inkwell.domain.value.types import DisplayName


class Post(DomainModel):
    """Blog post.

    ``content`` is stored in the text-decoration markup syntax and rendered
    on read.
    """

    id: PostId
    author_id: UserId
    author_name: DisplayName
    title: str = Field(min_length=1, max_length=100)
    content: str = Field(min_length=1, max_length=20000)
    image_url: Optional[str] = None
    view_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
