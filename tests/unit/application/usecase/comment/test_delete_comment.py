"""Unit tests for DeleteCommentUseCase."""

from uuid import uuid4

import pytest

from inkwell.application.usecase.comment import (
    DeleteCommentRequest,
    DeleteCommentUseCase,
)
from inkwell.domain.error import NotAuthorizedError, NotFoundError
from inkwell.domain.service import CommentService
from inkwell.domain.value import PostId, UserId
from inkwell.domain.value.types import DisplayName
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestDeleteCommentUseCase:
    """Tests for DeleteCommentUseCase."""

    async def _create_comment(self, comment_service: CommentService, author_id):
        return await comment_service.create_comment(
            post_id=PostId(uuid4()),
            author_id=author_id,
            author_name=DisplayName("alice"),
            content="To be deleted",
        )

    @pytest.mark.asyncio
    async def test_author_deletes(self, unit_env):
        # Arrange
        comment_service = await unit_env.get(CommentService)
        author_id = UserId(uuid4())
        comment = await self._create_comment(comment_service, author_id)
        use_case = DeleteCommentUseCase(comment_service)

        # Act
        response = await use_case.execute(
            DeleteCommentRequest(
                post_id=str(comment.post_id),
                comment_id=str(comment.id),
                user_id=str(author_id),
            )
        )

        # Assert
        assert response.comment_id == str(comment.id)
        assert await comment_service.get_comment_by_id(comment.id) is None

    @pytest.mark.asyncio
    async def test_comment_on_other_post(self, unit_env):
        """The comment must belong to the post in the request."""
        comment_service = await unit_env.get(CommentService)
        author_id = UserId(uuid4())
        comment = await self._create_comment(comment_service, author_id)
        use_case = DeleteCommentUseCase(comment_service)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                DeleteCommentRequest(
                    post_id=str(uuid4()),
                    comment_id=str(comment.id),
                    user_id=str(author_id),
                )
            )

    @pytest.mark.asyncio
    async def test_non_author(self, unit_env):
        comment_service = await unit_env.get(CommentService)
        comment = await self._create_comment(comment_service, UserId(uuid4()))
        use_case = DeleteCommentUseCase(comment_service)

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                DeleteCommentRequest(
                    post_id=str(comment.post_id),
                    comment_id=str(comment.id),
                    user_id=str(uuid4()),
                )
            )
