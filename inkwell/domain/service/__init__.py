"""Domain services."""

from .base import Service
from .comment_service import CommentService
from .jwt_service import JWTService
from .post_service import PostService
from .thread_builder import ThreadNode, build_thread
from .thread_view import ReplyChainEntry, ThreadViewPolicy
from .user_service import UserService

__all__ = [
    "CommentService",
    "JWTService",
    "PostService",
    "ReplyChainEntry",
    "Service",
    "ThreadNode",
    "ThreadViewPolicy",
    "UserService",
    "build_thread",
]
