"""Thread builder.

Turns the flat comment list of a post into a forest of ThreadNode.

The builder is a pure function of its input: same comments and limits in,
structurally identical forest out. It never raises on bad references:

- a parent that is missing, on another post, or the comment itself -> root
- a parent chain that loops back on itself -> the earliest comment of the
  loop becomes a root and the rest hang below it
- nesting deeper than ``max_depth`` -> attached to the nearest ancestor
  above the boundary, so depth never exceeds ``max_depth``
"""

from collections import defaultdict, deque
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional

from inkwell.domain.model.comment import Comment
from inkwell.domain.value import CommentId


@dataclass
class ThreadNode:
    """A comment placed in the thread.

    Nodes are rebuilt from scratch on every fetch and are not shared between
    builds.
    """

    comment: Comment
    depth: int = 0
    replies: list["ThreadNode"] = field(default_factory=list)
    reply_to_author: Optional[str] = None
    reply_to_snippet: Optional[str] = None

    @property
    def id(self) -> CommentId:
        return self.comment.id

    @property
    def reply_count(self) -> int:
        return len(self.replies)


def make_snippet(text: str, length: int) -> str:
    """Single-line preview of ``text`` at most ``length`` characters long."""
    flat = " ".join(text.split())
    if len(flat) <= length:
        return flat
    return flat[:length].rstrip() + "..."


def build_thread(
    comments: Iterable[Comment], max_depth: int, snippet_length: int = 50
) -> list[ThreadNode]:
    """Build the comment forest of a post.

    Args:
        comments: Flat comments of one post, any order
        max_depth: Deepest allowed nesting level (0 means everything is a root)
        snippet_length: Length of the "replying to" preview

    Returns:
        Root nodes ordered by (created_at, seq, id), each with its replies
        populated in the same order
    """
    ordered = sorted(comments, key=lambda c: c.sort_key)

    nodes: dict[CommentId, ThreadNode] = {}
    position: dict[CommentId, int] = {}
    for comment in ordered:
        if comment.id in nodes:
            # Duplicate row from the store, first one wins
            continue
        position[comment.id] = len(position)
        nodes[comment.id] = ThreadNode(comment=comment)

    def resolve_parent(node: ThreadNode) -> Optional[ThreadNode]:
        parent_id = node.comment.parent_id
        if parent_id is None or parent_id == node.id:
            return None
        parent = nodes.get(parent_id)
        if parent is None or parent.comment.post_id != node.comment.post_id:
            return None
        return parent

    # Effective parent of every placed node (None for roots)
    attached_to: dict[CommentId, Optional[CommentId]] = {}
    # Children whose parent has not been placed yet
    waiting: dict[CommentId, list[ThreadNode]] = defaultdict(list)
    roots: list[ThreadNode] = []

    def attach_target(parent: ThreadNode) -> Optional[ThreadNode]:
        target: Optional[ThreadNode] = parent
        hops = 0
        while target is not None and target.depth >= max_depth:
            if hops >= max_depth:
                return None
            target_parent_id = attached_to[target.id]
            target = nodes[target_parent_id] if target_parent_id else None
            hops += 1
        return target

    def place(node: ThreadNode, parent: Optional[ThreadNode]) -> None:
        queue = deque([(node, parent)])
        while queue:
            current, declared_parent = queue.popleft()
            if current.id in attached_to:
                continue

            target = attach_target(declared_parent) if declared_parent else None
            if target is None:
                current.depth = 0
                attached_to[current.id] = None
                roots.append(current)
            else:
                current.depth = target.depth + 1
                current.reply_to_author = str(declared_parent.comment.author_name)
                current.reply_to_snippet = make_snippet(
                    declared_parent.comment.content, snippet_length
                )
                attached_to[current.id] = target.id
                target.replies.append(current)

            for child in waiting.pop(current.id, []):
                queue.append((child, current))

    for node in nodes.values():
        parent = resolve_parent(node)
        if parent is None:
            place(node, None)
        elif parent.id in attached_to:
            place(node, parent)
        else:
            waiting[parent.id].append(node)

    # Anything still unplaced waits on a parent chain that loops; break each
    # loop at its earliest comment
    for node in nodes.values():
        if node.id not in attached_to:
            place(node, None)

    # Deferred placement can append out of order
    roots.sort(key=lambda n: position[n.id])
    for node in nodes.values():
        node.replies.sort(key=lambda n: position[n.id])

    return roots


def iter_thread(forest: Iterable[ThreadNode]) -> Iterator[ThreadNode]:
    """Yield every node in display (pre-order) order without recursion."""
    stack = list(reversed(list(forest)))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.replies))


def count_nodes(forest: Iterable[ThreadNode]) -> int:
    return sum(1 for _ in iter_thread(forest))


def find_node(
    forest: Iterable[ThreadNode], comment_id: CommentId
) -> Optional[ThreadNode]:
    for node in iter_thread(forest):
        if node.id == comment_id:
            return node
    return None
