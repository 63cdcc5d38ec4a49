"""Unit tests for the in-memory comment repository."""

from uuid import uuid4

import pytest

from inkwell.domain.model import ChangeEvent
from inkwell.domain.value import ChangeType, PostId
from inkwell.persistence.change_feed import LocalChangeFeed
from inkwell.persistence.repository.inmemory import InMemoryCommentRepository
from tests.conftest import make_comment


class TestInMemoryCommentRepository:
    """Tests for InMemoryCommentRepository."""

    @pytest.mark.asyncio
    async def test_list_orders_ties_by_sequence(self):
        """Comments with equal timestamps list in insertion order."""
        # Arrange
        repo = InMemoryCommentRepository()
        post_id = PostId(uuid4())
        first = await repo.insert(make_comment(post_id))
        second = await repo.insert(make_comment(post_id))
        earliest = await repo.insert(make_comment(post_id, minutes=-1))

        # Act
        comments = await repo.list_by_post(post_id)

        # Assert
        assert [c.id for c in comments] == [earliest.id, first.id, second.id]

    @pytest.mark.asyncio
    async def test_writes_publish_change_events(self):
        """Insert and delete announce the change for the comment's post."""
        # Arrange
        feed = LocalChangeFeed()
        repo = InMemoryCommentRepository(change_feed=feed)
        post_id = PostId(uuid4())
        events: list[ChangeEvent] = []

        async def record(event):
            events.append(event)

        feed.subscribe(record, post_id=post_id)

        # Act
        comment = await repo.insert(make_comment(post_id))
        await repo.delete(comment.id)
        await repo.delete(comment.id)

        # Assert
        assert [e.type for e in events] == [ChangeType.INSERT, ChangeType.DELETE]
        assert all(e.record_id == comment.id for e in events)

    @pytest.mark.asyncio
    async def test_delete_by_post(self):
        repo = InMemoryCommentRepository()
        post_id = PostId(uuid4())
        other = PostId(uuid4())
        await repo.insert(make_comment(post_id))
        await repo.insert(make_comment(post_id))
        await repo.insert(make_comment(other))

        assert await repo.delete_by_post(post_id) == 2
        assert await repo.count_by_post(post_id) == 0
        assert await repo.count_by_post(other) == 1
