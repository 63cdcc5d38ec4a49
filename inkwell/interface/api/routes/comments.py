"""Comment routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field

from inkwell.application.usecase.comment import (
    CommentItem,
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
    GetReplyChainRequest,
    GetReplyChainResponse,
    GetReplyChainUseCase,
    GetThreadRequest,
    GetThreadUseCase,
    ThreadView,
)
from inkwell.domain.service import JWTService
from inkwell.interface.api.auth import require_user
from inkwell.interface.error import to_http_exception

router = APIRouter(prefix="/posts", tags=["comments"], route_class=DishkaRoute)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    content: str = Field(min_length=1, max_length=2000)
    parent_id: UUID | None = None  # Comment being replied to


@router.get("/{post_id}/comments", response_model=GetCommentsResponse)
async def get_comments(
    post_id: UUID,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
) -> GetCommentsResponse:
    """Get the flat comments of a post, oldest first.

    Args:
        post_id: Post UUID
        get_comments_use_case: Get comments use case from DI

    Returns:
        Flat list of comments
    """
    try:
        return await get_comments_use_case.execute(
            GetCommentsRequest(post_id=str(post_id))
        )
    except Exception as e:
        raise to_http_exception(e, "load comments") from e


@router.get("/{post_id}/comments/thread", response_model=ThreadView)
async def get_thread(
    post_id: UUID,
    get_thread_use_case: FromDishka[GetThreadUseCase],
    expanded: list[UUID] | None = Query(default=None),
    collapsed: list[UUID] | None = Query(default=None),
) -> ThreadView:
    """Get the threaded comments of a post.

    Nodes with more replies than the collapse threshold start collapsed;
    ``expanded`` and ``collapsed`` override that per comment.

    Args:
        post_id: Post UUID
        get_thread_use_case: Get thread use case from DI
        expanded: Comments whose replies should be shown
        collapsed: Comments whose replies should be hidden

    Returns:
        Forest of comments with collapse state and display order
    """
    try:
        return await get_thread_use_case.execute(
            GetThreadRequest(
                post_id=str(post_id),
                expanded=[str(c) for c in expanded or []],
                collapsed=[str(c) for c in collapsed or []],
            )
        )
    except Exception as e:
        raise to_http_exception(e, "load comments") from e


@router.post(
    "/{post_id}/comments",
    response_model=CommentItem,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: UUID,
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CommentItem:
    """Create a comment on a post or reply to another comment.

    Requires authentication.

    Args:
        post_id: Post UUID
        request: Comment creation data
        create_comment_use_case: Create comment use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        Created comment
    """
    user = require_user(jwt_service, auth_token, "create comments")

    try:
        return await create_comment_use_case.execute(
            CreateCommentRequest(
                post_id=str(post_id),
                content=request.content,
                author_id=user.user_id,
                author_name=user.display_name,
                parent_id=str(request.parent_id) if request.parent_id else None,
            )
        )
    except Exception as e:
        raise to_http_exception(e, "create comment") from e


@router.delete(
    "/{post_id}/comments/{comment_id}", response_model=DeleteCommentResponse
)
async def delete_comment(
    post_id: UUID,
    comment_id: UUID,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteCommentResponse:
    """Delete a comment. Only the author can delete.

    Args:
        post_id: Post UUID
        comment_id: Comment UUID
        delete_comment_use_case: Delete comment use case from DI
        jwt_service: JWT service for token verification (injected)
        auth_token: JWT token from cookie

    Returns:
        IDs of the deleted comment and its post
    """
    user = require_user(jwt_service, auth_token, "delete comments")

    try:
        return await delete_comment_use_case.execute(
            DeleteCommentRequest(
                post_id=str(post_id), comment_id=str(comment_id), user_id=user.user_id
            )
        )
    except Exception as e:
        raise to_http_exception(e, "delete this comment") from e


@router.get(
    "/{post_id}/comments/{comment_id}/chain", response_model=GetReplyChainResponse
)
async def get_reply_chain(
    post_id: UUID,
    comment_id: UUID,
    get_reply_chain_use_case: FromDishka[GetReplyChainUseCase],
) -> GetReplyChainResponse:
    """Breadcrumb of ancestors shown when replying to a comment.

    Args:
        post_id: Post UUID
        comment_id: Comment being replied to
        get_reply_chain_use_case: Get reply chain use case from DI

    Returns:
        Reply chain, root first, ending with the comment itself
    """
    try:
        return await get_reply_chain_use_case.execute(
            GetReplyChainRequest(post_id=str(post_id), comment_id=str(comment_id))
        )
    except Exception as e:
        raise to_http_exception(e, "load reply chain") from e
