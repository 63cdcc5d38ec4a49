"""Comment use cases."""

from .create_comment import CreateCommentRequest, CreateCommentUseCase
from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from .get_comments import (
    CommentItem,
    GetCommentsRequest,
    GetCommentsResponse,
    GetCommentsUseCase,
)
from .get_reply_chain import (
    GetReplyChainRequest,
    GetReplyChainResponse,
    GetReplyChainUseCase,
)
from .get_thread import (
    GetThreadRequest,
    GetThreadUseCase,
    ThreadNodeItem,
    ThreadView,
    serialize_forest,
)

__all__ = [
    "CommentItem",
    "CreateCommentRequest",
    "CreateCommentUseCase",
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
    "GetCommentsRequest",
    "GetCommentsResponse",
    "GetCommentsUseCase",
    "GetReplyChainRequest",
    "GetReplyChainResponse",
    "GetReplyChainUseCase",
    "GetThreadRequest",
    "GetThreadUseCase",
    "ThreadNodeItem",
    "ThreadView",
    "serialize_forest",
]
