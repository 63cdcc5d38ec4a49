"""Test configuration and helpers."""

from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import uuid4

from inkwell.config import AuthSettings
from inkwell.domain.model import Comment, Post
from inkwell.domain.value import CommentId, PostId, UserId
from inkwell.domain.value.types import DisplayName
from inkwell.util.jwt import create_token

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def make_comment(
    post_id: PostId,
    parent_id: Optional[CommentId] = None,
    *,
    minutes: int = 0,
    seq: int = 0,
    comment_id: Optional[CommentId] = None,
    author_id: Optional[UserId] = None,
    author_name: str = "reader",
    content: str = "A comment",
) -> Comment:
    """Build a comment created ``minutes`` after a fixed base time.

    Fixed timestamps keep thread ordering deterministic.
    """
    return Comment(
        id=comment_id or CommentId(uuid4()),
        post_id=post_id,
        author_id=author_id or UserId(uuid4()),
        author_name=DisplayName(author_name),
        content=content,
        parent_id=parent_id,
        seq=seq,
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )


def make_post(
    author_id: Optional[UserId] = None,
    *,
    title: str = "First post",
    content: str = "Hello **world**",
    minutes: int = 0,
) -> Post:
    """Build a post last updated ``minutes`` after a fixed base time."""
    at = BASE_TIME + timedelta(minutes=minutes)
    return Post(
        id=PostId(uuid4()),
        author_id=author_id or UserId(uuid4()),
        author_name=DisplayName("author"),
        title=title,
        content=content,
        created_at=at,
        updated_at=at,
    )


def make_token(user_id: UserId | str, display_name: str = "reader") -> str:
    """Token signed with the default auth settings, as the identity service would."""
    return create_token(str(user_id), display_name, AuthSettings())
