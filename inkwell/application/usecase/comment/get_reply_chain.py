"""Get reply chain use case."""

from uuid import UUID

from pydantic import BaseModel

from inkwell.config import CommentSettings
from inkwell.domain.error import NotFoundError
from inkwell.domain.service import CommentService, ReplyChainEntry, ThreadViewPolicy
from inkwell.domain.value import CommentId, PostId

from ..base import BaseUseCase


class GetReplyChainRequest(BaseModel):
    """Get reply chain request."""

    post_id: str  # UUID string
    comment_id: str  # Comment being replied to


class GetReplyChainResponse(BaseModel):
    """Breadcrumb shown above a nested reply box, root first."""

    comment_id: str
    chain: list[ReplyChainEntry]


class GetReplyChainUseCase(BaseUseCase[GetReplyChainRequest, GetReplyChainResponse]):
    """Use case for the "replying to" breadcrumb of a comment."""

    def __init__(
        self, comment_service: CommentService, settings: CommentSettings
    ) -> None:
        """Initialize get reply chain use case.

        Args:
            comment_service: Comment domain service
            settings: Comment settings (depth and snippet limits)
        """
        self.comment_service = comment_service
        self.settings = settings

    async def execute(self, request: GetReplyChainRequest) -> GetReplyChainResponse:
        """Execute get reply chain flow.

        Args:
            request: Post and target comment IDs

        Returns:
            Ancestors of the target followed by the target itself

        Raises:
            NotFoundError: If the comment is not part of the post's thread
        """
        post_id = PostId(UUID(request.post_id))
        comment_id = CommentId(UUID(request.comment_id))

        forest = await self.comment_service.get_thread(post_id)
        policy = ThreadViewPolicy(
            max_depth=self.settings.max_depth,
            collapse_threshold=self.settings.collapse_threshold,
            snippet_length=self.settings.snippet_length,
        )
        chain = policy.build_reply_chain(forest, comment_id)
        if not chain:
            raise NotFoundError("Comment", request.comment_id)

        return GetReplyChainResponse(comment_id=request.comment_id, chain=chain)
