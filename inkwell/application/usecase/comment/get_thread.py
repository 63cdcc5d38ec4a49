"""Get thread use case."""

from collections.abc import Iterable
from uuid import UUID

from pydantic import BaseModel, Field

from inkwell.config import CommentSettings
from inkwell.domain.service import CommentService, ThreadNode, ThreadViewPolicy
from inkwell.domain.service.thread_builder import count_nodes
from inkwell.domain.value import CommentId, PostId

from ..base import BaseUseCase
from .get_comments import CommentItem


class ThreadNodeItem(BaseModel):
    """A comment with its place in the thread."""

    comment: CommentItem
    depth: int
    display_depth: int
    reply_to_author: str | None
    reply_to_snippet: str | None
    reply_count: int
    collapsed: bool
    replies: list["ThreadNodeItem"] = Field(default_factory=list)


class ThreadView(BaseModel):
    """Serialized forest plus the order rows are shown in."""

    post_id: str
    comments: list[ThreadNodeItem]
    visible_ids: list[str]
    total: int


def serialize_forest(
    post_id: PostId, forest: Iterable[ThreadNode], policy: ThreadViewPolicy
) -> ThreadView:
    """Convert a forest to response models under a view policy.

    Nested models are built bottom-up with an explicit stack, so deep
    threads never hit the recursion limit.
    """
    forest = list(forest)
    items: dict[CommentId, ThreadNodeItem] = {}

    # Post-order: every node is visited after all of its replies
    stack: list[tuple[ThreadNode, bool]] = [(node, False) for node in reversed(forest)]
    while stack:
        node, expanded = stack.pop()
        if not expanded:
            stack.append((node, True))
            stack.extend((reply, False) for reply in reversed(node.replies))
            continue
        items[node.id] = ThreadNodeItem(
            comment=CommentItem.from_comment(node.comment),
            depth=node.depth,
            display_depth=policy.display_depth(node),
            reply_to_author=node.reply_to_author,
            reply_to_snippet=node.reply_to_snippet,
            reply_count=node.reply_count,
            collapsed=policy.is_collapsed(node),
            replies=[items[reply.id] for reply in node.replies],
        )

    return ThreadView(
        post_id=str(post_id),
        comments=[items[node.id] for node in forest],
        visible_ids=[str(node.id) for node in policy.visible_nodes(forest)],
        total=count_nodes(forest),
    )


class GetThreadRequest(BaseModel):
    """Get thread request.

    ``expanded`` and ``collapsed`` carry the viewer's manual toggles; every
    other node uses the collapse threshold.
    """

    post_id: str  # UUID string
    expanded: list[str] = Field(default_factory=list)
    collapsed: list[str] = Field(default_factory=list)


class GetThreadUseCase(BaseUseCase[GetThreadRequest, ThreadView]):
    """Use case for reading the threaded comments of a post."""

    def __init__(
        self, comment_service: CommentService, settings: CommentSettings
    ) -> None:
        """Initialize get thread use case.

        Args:
            comment_service: Comment domain service
            settings: Comment settings (depth and collapse limits)
        """
        self.comment_service = comment_service
        self.settings = settings

    async def execute(self, request: GetThreadRequest) -> ThreadView:
        """Execute get thread flow.

        Args:
            request: Post ID and collapse overrides

        Returns:
            Forest with collapse state and display order
        """
        post_id = PostId(UUID(request.post_id))
        forest = await self.comment_service.get_thread(post_id)

        policy = ThreadViewPolicy(
            max_depth=self.settings.max_depth,
            collapse_threshold=self.settings.collapse_threshold,
            snippet_length=self.settings.snippet_length,
        )
        for comment_id in request.expanded:
            policy.expand(CommentId(UUID(comment_id)))
        for comment_id in request.collapsed:
            policy.collapse(CommentId(UUID(comment_id)))

        return serialize_forest(post_id, forest, policy)
