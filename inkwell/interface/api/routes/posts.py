"""Post routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field

from inkwell.application.usecase.post import (
    CreatePostRequest,
    CreatePostUseCase,
    DeletePostRequest,
    DeletePostResponse,
    DeletePostUseCase,
    GetPostRequest,
    GetPostUseCase,
    ListPostsRequest,
    ListPostsResponse,
    ListPostsUseCase,
    PostDetail,
    UpdatePostRequest,
    UpdatePostUseCase,
)
from inkwell.domain.service import JWTService
from inkwell.domain.value import PostSortOrder
from inkwell.interface.api.auth import require_user
from inkwell.interface.error import to_http_exception

router = APIRouter(prefix="/posts", tags=["posts"], route_class=DishkaRoute)


class CreatePostAPIRequest(BaseModel):
    """API request for creating a post."""

    title: str = Field(min_length=1, max_length=100)
    content: str = Field(min_length=1, max_length=20000)
    image: str | None = None  # data:image/...;base64,...


class UpdatePostAPIRequest(BaseModel):
    """API request for updating a post. Omitted fields are left unchanged."""

    title: str | None = Field(default=None, min_length=1, max_length=100)
    content: str | None = Field(default=None, min_length=1, max_length=20000)
    image: str | None = None
    remove_image: bool = False


@router.get("", response_model=ListPostsResponse)
async def list_posts(
    list_posts_use_case: FromDishka[ListPostsUseCase],
    search: str | None = Query(default=None, max_length=100),
    author_id: UUID | None = None,
    sort: PostSortOrder = PostSortOrder.LATEST,
    limit: int = Query(default=30, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
) -> ListPostsResponse:
    """List posts, newest or oldest first by last update.

    Args:
        list_posts_use_case: List posts use case from DI
        search: Case-insensitive term matched against title and content
        author_id: Only posts by this author
        sort: ``latest`` or ``oldest``
        limit: Page size
        offset: Page offset

    Returns:
        Page of post summaries with the total match count
    """
    try:
        return await list_posts_use_case.execute(
            ListPostsRequest(
                search=search,
                author_id=str(author_id) if author_id else None,
                sort=sort,
                limit=limit,
                offset=offset,
            )
        )
    except Exception as e:
        raise to_http_exception(e, "list posts") from e


@router.post("", response_model=PostDetail, status_code=status.HTTP_201_CREATED)
async def create_post(
    request: CreatePostAPIRequest,
    create_post_use_case: FromDishka[CreatePostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PostDetail:
    """Create a new post.

    Requires authentication.

    Args:
        request: Post creation data
        create_post_use_case: Create post use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Created post

    Raises:
        HTTPException: If not authenticated or validation fails
    """
    user = require_user(jwt_service, auth_token, "create posts")

    try:
        return await create_post_use_case.execute(
            CreatePostRequest(
                author_id=user.user_id,
                author_name=user.display_name,
                title=request.title,
                content=request.content,
                image=request.image,
            )
        )
    except Exception as e:
        raise to_http_exception(e, "create post") from e


@router.get("/{post_id}", response_model=PostDetail)
async def get_post(
    post_id: UUID,
    get_post_use_case: FromDishka[GetPostUseCase],
) -> PostDetail:
    """Get a post with its rendered content. Counts as one view.

    Args:
        post_id: Post UUID
        get_post_use_case: Get post use case from DI

    Returns:
        Post details
    """
    try:
        return await get_post_use_case.execute(GetPostRequest(post_id=str(post_id)))
    except Exception as e:
        raise to_http_exception(e, "get post") from e


@router.patch("/{post_id}", response_model=PostDetail)
async def update_post(
    post_id: UUID,
    request: UpdatePostAPIRequest,
    update_post_use_case: FromDishka[UpdatePostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> PostDetail:
    """Edit a post. Only the author can edit.

    Args:
        post_id: Post UUID
        request: Fields to change
        update_post_use_case: Update post use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Updated post
    """
    user = require_user(jwt_service, auth_token, "edit posts")

    try:
        return await update_post_use_case.execute(
            UpdatePostRequest(
                post_id=str(post_id),
                user_id=user.user_id,
                title=request.title,
                content=request.content,
                image=request.image,
                remove_image=request.remove_image,
            )
        )
    except Exception as e:
        raise to_http_exception(e, "edit this post") from e


@router.delete("/{post_id}", response_model=DeletePostResponse)
async def delete_post(
    post_id: UUID,
    delete_post_use_case: FromDishka[DeletePostUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeletePostResponse:
    """Delete a post and its comments. Only the author can delete.

    Args:
        post_id: Post UUID
        delete_post_use_case: Delete post use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Deleted post ID and the number of comments removed
    """
    user = require_user(jwt_service, auth_token, "delete posts")

    try:
        return await delete_post_use_case.execute(
            DeletePostRequest(post_id=str(post_id), user_id=user.user_id)
        )
    except Exception as e:
        raise to_http_exception(e, "delete this post") from e
