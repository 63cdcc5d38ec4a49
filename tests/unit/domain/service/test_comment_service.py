"""Unit tests for CommentService."""

from uuid import uuid4

import pytest

from inkwell.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from inkwell.domain.repository import CommentRepository
from inkwell.domain.service import CommentService
from inkwell.domain.value import CommentId, PostId, UserId
from inkwell.domain.value.types import DisplayName
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()


async def create(service: CommentService, post_id: PostId, **kwargs):
    kwargs.setdefault("author_id", UserId(uuid4()))
    kwargs.setdefault("author_name", DisplayName("reader"))
    kwargs.setdefault("content", "Nice post")
    return await service.create_comment(post_id=post_id, **kwargs)


class TestCreateComment:
    """Tests for create_comment method."""

    @pytest.mark.asyncio
    async def test_create_top_level_comment(self, unit_env):
        """Top-level comment is stored without a parent."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        post_id = PostId(uuid4())

        # Act
        result = await create(comment_service, post_id, content="  Hello  ")

        # Assert
        assert result.parent_id is None
        assert result.content == "Hello"
        assert result.post_id == post_id
        assert await comment_repo.find_by_id(result.id) == result

    @pytest.mark.asyncio
    async def test_create_reply(self, unit_env):
        """Reply keeps a reference to its parent."""
        comment_service = await unit_env.get(CommentService)
        post_id = PostId(uuid4())
        parent = await create(comment_service, post_id)

        reply = await create(comment_service, post_id, parent_id=parent.id)

        assert reply.parent_id == parent.id

    @pytest.mark.asyncio
    async def test_store_assigns_increasing_sequence(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        post_id = PostId(uuid4())

        first = await create(comment_service, post_id)
        second = await create(comment_service, post_id)

        assert 0 < first.seq < second.seq

    @pytest.mark.asyncio
    async def test_blank_content_rejected(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(ValidationError, match="cannot be empty"):
            await create(comment_service, PostId(uuid4()), content="   ")

    @pytest.mark.asyncio
    async def test_too_long_content_rejected(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        limit = comment_service.settings.max_length

        with pytest.raises(ValidationError, match="at most"):
            await create(comment_service, PostId(uuid4()), content="x" * (limit + 1))

    @pytest.mark.asyncio
    async def test_missing_parent_rejected(self, unit_env):
        """Replying to a comment that does not exist fails."""
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await create(
                comment_service, PostId(uuid4()), parent_id=CommentId(uuid4())
            )

    @pytest.mark.asyncio
    async def test_parent_on_other_post_rejected(self, unit_env):
        """Replies must stay on the parent's post."""
        comment_service = await unit_env.get(CommentService)
        parent = await create(comment_service, PostId(uuid4()))

        with pytest.raises(ValidationError, match="does not belong"):
            await create(comment_service, PostId(uuid4()), parent_id=parent.id)


class TestGetThread:
    """Tests for get_thread and listing."""

    @pytest.mark.asyncio
    async def test_get_thread_builds_forest(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_id = PostId(uuid4())
        root = await create(comment_service, post_id)
        reply = await create(comment_service, post_id, parent_id=root.id)
        await create(comment_service, PostId(uuid4()))  # other post

        # Act
        forest = await comment_service.get_thread(post_id)

        # Assert
        assert len(forest) == 1
        assert forest[0].id == root.id
        assert forest[0].replies[0].id == reply.id

    @pytest.mark.asyncio
    async def test_comments_for_post_oldest_first(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        post_id = PostId(uuid4())
        first = await create(comment_service, post_id)
        second = await create(comment_service, post_id)

        comments = await comment_service.get_comments_for_post(post_id)

        assert [c.id for c in comments] == [first.id, second.id]
        assert await comment_service.count_for_post(post_id) == 2


class TestDeleteComment:
    """Tests for delete_comment method."""

    @pytest.mark.asyncio
    async def test_author_can_delete(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        author_id = UserId(uuid4())
        comment = await create(comment_service, PostId(uuid4()), author_id=author_id)

        deleted = await comment_service.delete_comment(comment.id, author_id)

        assert deleted.id == comment.id
        assert await comment_service.get_comment_by_id(comment.id) is None

    @pytest.mark.asyncio
    async def test_non_author_cannot_delete(self, unit_env):
        """Only the author may delete; the comment stays."""
        comment_service = await unit_env.get(CommentService)
        comment = await create(comment_service, PostId(uuid4()))

        with pytest.raises(NotAuthorizedError):
            await comment_service.delete_comment(comment.id, UserId(uuid4()))

        assert await comment_service.get_comment_by_id(comment.id) is not None

    @pytest.mark.asyncio
    async def test_delete_missing_comment(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.delete_comment(CommentId(uuid4()), UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_replies_survive_as_roots(self, unit_env):
        """Deleting a parent leaves its replies at the top level."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        post_id = PostId(uuid4())
        author_id = UserId(uuid4())
        parent = await create(comment_service, post_id, author_id=author_id)
        reply = await create(comment_service, post_id, parent_id=parent.id)

        # Act
        await comment_service.delete_comment(parent.id, author_id)

        # Assert
        forest = await comment_service.get_thread(post_id)
        assert [n.id for n in forest] == [reply.id]
        assert forest[0].depth == 0

    @pytest.mark.asyncio
    async def test_delete_comments_for_post(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        post_id = PostId(uuid4())
        other_post = PostId(uuid4())
        await create(comment_service, post_id)
        await create(comment_service, post_id)
        await create(comment_service, other_post)

        count = await comment_service.delete_comments_for_post(post_id)

        assert count == 2
        assert await comment_service.count_for_post(post_id) == 0
        assert await comment_service.count_for_post(other_post) == 1
