"""User profile.

Accounts and credentials live with the external identity service; this is
the profile the blog shows for a user id.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from inkwell.domain.model.common import DomainModel
from inkwell.domain.value import UserId
from inkwell.domain.value.types import DisplayName


class User(DomainModel):
    """User profile."""

    id: UserId
    display_name: DisplayName
    introduce: Optional[str] = Field(default=None, max_length=300)
    avatar_url: Optional[str] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
