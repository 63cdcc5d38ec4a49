"""Domain value objects for Inkwell."""

from enum import Enum

from pydantic import field_validator

from inkwell.domain.value.common import RootValueObject


class DisplayName(RootValueObject[str]):
    """User-facing name shown next to posts and comments."""

    @field_validator("root")
    @classmethod
    def validate_display_name(cls, v: str) -> str:
        """Validate display name is not blank and within length limits."""
        v = v.strip()
        if len(v) < 1 or len(v) > 50:
            raise ValueError("Display name must be 1-50 characters")
        return v


class PostSortOrder(str, Enum):
    """Sort order for post listings."""

    LATEST = "latest"  # updated_at DESC
    OLDEST = "oldest"  # updated_at ASC


class ChangeType(str, Enum):
    """Kind of row change announced on the change feed."""

    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"
    RESYNC = "resync"  # feed reconnected, changes may have been missed
