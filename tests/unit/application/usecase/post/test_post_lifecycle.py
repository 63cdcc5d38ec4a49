"""Unit tests for creating, reading, listing and deleting posts."""

import base64
from uuid import uuid4

import pytest

from inkwell.adapter.storage import ImageStore
from inkwell.application.usecase.post import (
    CreatePostRequest,
    CreatePostUseCase,
    DeletePostRequest,
    DeletePostUseCase,
    GetPostRequest,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsUseCase,
)
from inkwell.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from inkwell.domain.repository import PostRepository, UserRepository
from inkwell.domain.service import CommentService
from inkwell.domain.value import PostId, UserId
from inkwell.domain.value.types import DisplayName
from tests.conftest import make_post
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


def create_request(author_id: UserId, **kwargs) -> CreatePostRequest:
    kwargs.setdefault("title", "Hello")
    kwargs.setdefault("content", "My **first** post")
    return CreatePostRequest(
        author_id=str(author_id), author_name=DisplayName("author"), **kwargs
    )


class TestCreatePostUseCase:
    """Tests for CreatePostUseCase."""

    @pytest.mark.asyncio
    async def test_create_with_cover_image(self, unit_env):
        # Arrange
        use_case = await unit_env.get(CreatePostUseCase)
        image_store = await unit_env.get(ImageStore)
        user_repo = await unit_env.get(UserRepository)
        author_id = UserId(uuid4())
        image = "data:image/jpeg;base64," + base64.b64encode(b"jpeg").decode()

        # Act
        post = await use_case.execute(create_request(author_id, image=image))

        # Assert
        assert post.comment_count == 0
        assert post.content_html == "My <strong>first</strong> post"
        assert post.image_url.endswith(".jpg")
        assert image_store.images[post.image_url] == (b"jpeg", "image/jpeg")
        assert await user_repo.find_by_id(author_id) is not None

    @pytest.mark.asyncio
    async def test_bad_image_rejected(self, unit_env):
        use_case = await unit_env.get(CreatePostUseCase)
        post_repo = await unit_env.get(PostRepository)

        with pytest.raises(ValidationError):
            await use_case.execute(
                create_request(UserId(uuid4()), image="not a data url")
            )

        assert await post_repo.count() == 0


class TestGetPostUseCase:
    """Tests for GetPostUseCase."""

    @pytest.mark.asyncio
    async def test_each_read_counts_a_view(self, unit_env):
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        comment_service = await unit_env.get(CommentService)
        post = await post_repo.save(make_post())
        await comment_service.create_comment(
            post_id=post.id,
            author_id=UserId(uuid4()),
            author_name=DisplayName("reader"),
            content="Hi",
        )
        use_case = await unit_env.get(GetPostUseCase)

        # Act
        await use_case.execute(GetPostRequest(post_id=str(post.id)))
        detail = await use_case.execute(GetPostRequest(post_id=str(post.id)))

        # Assert
        assert detail.view_count == 2
        assert detail.comment_count == 1

    @pytest.mark.asyncio
    async def test_read_without_counting(self, unit_env):
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        use_case = await unit_env.get(GetPostUseCase)

        detail = await use_case.execute(
            GetPostRequest(post_id=str(post.id), record_view=False)
        )

        assert detail.view_count == 0

    @pytest.mark.asyncio
    async def test_missing_post(self, unit_env):
        use_case = await unit_env.get(GetPostUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(GetPostRequest(post_id=str(uuid4())))


class TestListPostsUseCase:
    """Tests for ListPostsUseCase."""

    @pytest.mark.asyncio
    async def test_excerpt_is_plain_text(self, unit_env):
        post_repo = await unit_env.get(PostRepository)
        await post_repo.save(
            make_post(content="**Bold** intro\n<image>https://img.test/a.png</image>")
        )
        use_case = await unit_env.get(ListPostsUseCase)

        response = await use_case.execute(ListPostsRequest())

        assert response.total == 1
        assert response.posts[0].excerpt == "Bold intro"

    @pytest.mark.asyncio
    async def test_page_metadata(self, unit_env):
        post_repo = await unit_env.get(PostRepository)
        for i in range(3):
            await post_repo.save(make_post(minutes=i))
        use_case = await unit_env.get(ListPostsUseCase)

        response = await use_case.execute(ListPostsRequest(limit=2, offset=2))

        assert response.total == 3
        assert len(response.posts) == 1
        assert (response.limit, response.offset) == (2, 2)


class TestDeletePostUseCase:
    """Tests for DeletePostUseCase."""

    @pytest.mark.asyncio
    async def test_delete_removes_comments(self, unit_env):
        # Arrange
        post_repo = await unit_env.get(PostRepository)
        comment_service = await unit_env.get(CommentService)
        author_id = UserId(uuid4())
        post = await post_repo.save(make_post(author_id))
        for _ in range(3):
            await comment_service.create_comment(
                post_id=post.id,
                author_id=UserId(uuid4()),
                author_name=DisplayName("reader"),
                content="Hi",
            )
        use_case = await unit_env.get(DeletePostUseCase)

        # Act
        response = await use_case.execute(
            DeletePostRequest(post_id=str(post.id), user_id=str(author_id))
        )

        # Assert
        assert response.deleted_comments == 3
        assert await post_repo.find_by_id(post.id) is None
        assert await comment_service.count_for_post(PostId(post.id)) == 0

    @pytest.mark.asyncio
    async def test_non_author_cannot_delete(self, unit_env):
        post_repo = await unit_env.get(PostRepository)
        post = await post_repo.save(make_post())
        use_case = await unit_env.get(DeletePostUseCase)

        with pytest.raises(NotAuthorizedError):
            await use_case.execute(
                DeletePostRequest(post_id=str(post.id), user_id=str(uuid4()))
            )

        assert await post_repo.find_by_id(post.id) is not None
