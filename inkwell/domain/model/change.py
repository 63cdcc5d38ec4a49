"""Change feed events."""

from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from pydantic import Field

from inkwell.domain.model.common import DomainModel
from inkwell.domain.value import PostId
from inkwell.domain.value.types import ChangeType


class ChangeEvent(DomainModel):
    """A row changed in the store.

    Subscribers treat events as a signal to re-fetch; the payload carries
    only enough to filter by post. An event without ``post_id`` concerns
    every post, as after the feed reconnects.
    """

    type: ChangeType
    table: str = "comments"
    record_id: Optional[UUID] = None
    post_id: Optional[PostId] = None
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
