"""Thread view policy.

Presentation-independent rules for showing a comment forest: which reply
lists start collapsed, how deep a node is indented, and the "replying to"
breadcrumb shown while composing a nested reply.
"""

from typing import Iterable, Iterator

from inkwell.domain.service.thread_builder import (
    ThreadNode,
    iter_thread,
    make_snippet,
)
from inkwell.domain.value import CommentId
from inkwell.domain.value.common import ValueObject


class ReplyChainEntry(ValueObject):
    """One ancestor in a reply breadcrumb."""

    comment_id: CommentId
    snippet: str
    author_name: str


class ThreadViewPolicy:
    """Collapse state and display rules for one viewer of one thread.

    Overrides are keyed by comment id, so they survive rebuilds of the
    forest as long as the comment exists.
    """

    def __init__(
        self, max_depth: int, collapse_threshold: int, snippet_length: int = 50
    ) -> None:
        """Initialize view policy.

        Args:
            max_depth: Deepest indentation level
            collapse_threshold: Reply count above which replies start collapsed
            snippet_length: Length of breadcrumb previews
        """
        self.max_depth = max_depth
        self.collapse_threshold = collapse_threshold
        self.snippet_length = snippet_length
        self._overrides: dict[CommentId, bool] = {}

    def collapsed_by_default(self, node: ThreadNode) -> bool:
        return node.reply_count > self.collapse_threshold

    def is_collapsed(self, node: ThreadNode) -> bool:
        """Whether the replies of ``node`` are hidden."""
        return self._overrides.get(node.id, self.collapsed_by_default(node))

    def toggle(self, node: ThreadNode) -> bool:
        """Flip collapse state of a single node.

        Returns:
            The new collapsed state
        """
        collapsed = not self.is_collapsed(node)
        self._overrides[node.id] = collapsed
        return collapsed

    def expand(self, comment_id: CommentId) -> None:
        self._overrides[comment_id] = False

    def collapse(self, comment_id: CommentId) -> None:
        self._overrides[comment_id] = True

    def reset(self) -> None:
        """Drop all overrides, back to threshold defaults."""
        self._overrides.clear()

    def display_depth(self, node: ThreadNode) -> int:
        """Indentation level, clamped to the max depth boundary."""
        return min(node.depth, self.max_depth)

    def visible_nodes(self, forest: Iterable[ThreadNode]) -> Iterator[ThreadNode]:
        """Yield nodes in display order, skipping replies of collapsed nodes."""
        stack = list(reversed(list(forest)))
        while stack:
            node = stack.pop()
            yield node
            if node.replies and not self.is_collapsed(node):
                stack.extend(reversed(node.replies))

    def build_reply_chain(
        self, forest: Iterable[ThreadNode], target_id: CommentId
    ) -> list[ReplyChainEntry]:
        """Breadcrumb for replying to ``target_id``, root first.

        Walks declared parents upward from the target, stopping at a root, a
        missing parent, a comment already seen, or after ``max_depth`` hops.

        Args:
            forest: Current forest of the post
            target_id: Comment being replied to

        Returns:
            Ancestors of the target followed by the target itself, or an
            empty list if the target is not in the forest
        """
        by_id = {node.id: node for node in iter_thread(forest)}

        chain: list[ReplyChainEntry] = []
        seen: set[CommentId] = set()
        current = by_id.get(target_id)
        while current is not None and len(chain) <= self.max_depth:
            if current.id in seen:
                break
            seen.add(current.id)
            chain.append(
                ReplyChainEntry(
                    comment_id=current.id,
                    snippet=make_snippet(current.comment.content, self.snippet_length),
                    author_name=str(current.comment.author_name),
                )
            )
            parent_id = current.comment.parent_id
            current = by_id.get(parent_id) if parent_id else None

        chain.reverse()
        return chain
