"""Live comment thread for one viewer.

``LiveThread`` keeps the forest of the currently viewed post in step with
the Comment Store. Every change event for the post triggers a full re-fetch
and rebuild; writes never patch the forest locally and rely on the change
feed round trip instead.

Each store operation runs in its own short-lived service scope, so a viewer
that stays mounted for hours never holds a database session.
"""

from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from dataclasses import dataclass
from itertools import count
from typing import Optional

import logfire

from inkwell.application.usecase.comment import (
    CommentItem,
    CreateCommentRequest,
    CreateCommentUseCase,
)
from inkwell.config import CommentSettings
from inkwell.domain.error import (
    DomainError,
    NotAuthorizedError,
    NotFoundError,
    SubmissionInProgressError,
    ValidationError,
)
from inkwell.domain.model import ChangeEvent
from inkwell.domain.repository import ChangeFeed, Unsubscribe
from inkwell.domain.service import CommentService, ThreadNode, ThreadViewPolicy
from inkwell.domain.service.thread_builder import find_node
from inkwell.domain.value import CommentId, PostId, UserId
from inkwell.domain.value.types import DisplayName


@dataclass(frozen=True)
class LiveServices:
    """What one store operation of a live thread runs against."""

    comments: CommentService
    create_comment: CreateCommentUseCase


LiveServiceScope = Callable[[], AbstractAsyncContextManager[LiveServices]]
UpdateListener = Callable[[list[ThreadNode]], Awaitable[None]]
ErrorListener = Callable[[str], Awaitable[None]]

LOAD_ERROR = "failed to load comments"
SUBMIT_ERROR = "failed to submit comment"
DELETE_ERROR = "failed to delete comment"


class LiveThread:
    """Mounted view of one post's comment thread.

    State is only ever replaced by the outcome of the operation for the
    currently mounted post; anything that resolves after ``unmount`` or a
    remount on another post is dropped.

    ``pending`` covers both submit and delete: while either is in flight,
    the other is rejected.
    """

    def __init__(
        self,
        services: LiveServiceScope,
        change_feed: ChangeFeed,
        settings: CommentSettings,
    ) -> None:
        """Initialize live thread.

        Args:
            services: Opens a scope yielding the services of one operation
            change_feed: Feed of Comment Store changes
            settings: Comment settings
        """
        self.services = services
        self.change_feed = change_feed
        self.settings = settings
        self.policy = ThreadViewPolicy(
            max_depth=settings.max_depth,
            collapse_threshold=settings.collapse_threshold,
            snippet_length=settings.snippet_length,
        )

        self.post_id: Optional[PostId] = None
        self.forest: list[ThreadNode] = []
        self.error: Optional[str] = None
        self.pending = False
        self.draft = ""

        self._unsubscribe: Optional[Unsubscribe] = None
        # Bumped on every mount/unmount; results from an older mount are stale
        self._generation = 0
        # Fetch tickets, so a slow fetch never overwrites a newer one
        self._tickets = count(1)
        self._applied_ticket = 0

        self._update_listeners: list[UpdateListener] = []
        self._error_listeners: list[ErrorListener] = []

    @property
    def mounted(self) -> bool:
        return self.post_id is not None

    def on_update(self, listener: UpdateListener) -> None:
        """Call ``listener`` with the forest after every rebuild or state change."""
        self._update_listeners.append(listener)

    def on_error(self, listener: ErrorListener) -> None:
        """Call ``listener`` with a user-facing message when an operation fails."""
        self._error_listeners.append(listener)

    async def mount(self, post_id: PostId) -> None:
        """Show the thread of ``post_id``.

        Releases any previous subscription first, subscribes to changes of
        the post, then fetches and publishes the initial forest.
        """
        with logfire.span("live_thread.mount", post_id=str(post_id)):
            self._release()
            self._generation += 1
            self.post_id = post_id
            self.forest = []
            self.policy.reset()
            self.error = None
            self.pending = False
            self.draft = ""

            # Subscribe before the first fetch so no change can slip between
            self._unsubscribe = self.change_feed.subscribe(
                self._on_change, post_id=post_id
            )
            await self.refresh()

    async def unmount(self) -> None:
        """Stop following the post. Safe to call more than once."""
        if self.post_id is not None:
            logfire.info("Live thread unmounted", post_id=str(self.post_id))
        self._release()
        self._generation += 1
        self.post_id = None
        self.forest = []
        self.policy.reset()
        self.error = None
        self.pending = False
        self.draft = ""

    async def refresh(self) -> None:
        """Re-fetch the flat comments and rebuild the forest.

        On failure the previous forest is kept and ``error`` is set.
        """
        if self.post_id is None:
            return

        post_id = self.post_id
        generation = self._generation
        ticket = next(self._tickets)

        try:
            async with self.services() as services:
                forest = await services.comments.get_thread(post_id)
        except Exception as e:
            logfire.error(
                "Live thread fetch failed",
                post_id=str(post_id),
                error=str(e),
                _exc_info=True,
            )
            if self._is_current(generation):
                self.error = LOAD_ERROR
                await self._emit_error(LOAD_ERROR)
            return

        if not self._is_current(generation) or ticket < self._applied_ticket:
            logfire.debug("Dropping stale thread fetch", post_id=str(post_id))
            return

        self._applied_ticket = ticket
        self.forest = forest
        self.error = None
        await self._publish()

    async def submit(
        self,
        content: str,
        author_id: UserId,
        author_name: DisplayName,
        reply_to_id: Optional[CommentId] = None,
    ) -> Optional[CommentItem]:
        """Post a comment, or a reply to ``reply_to_id``, on the mounted post.

        Runs the same flow as the HTTP route: the post must still exist and a
        first-time commenter gets a profile. While the write is in flight
        ``pending`` is set and further writes are rejected. On failure the
        error goes to ``on_error`` listeners and ``draft`` keeps the content;
        on success ``draft`` is cleared. Either way the settled state is
        pushed to ``on_update`` listeners once ``pending`` is cleared.

        Returns:
            The stored comment, or None if the submit failed or the thread
            was unmounted meanwhile

        Raises:
            SubmissionInProgressError: If a submit or delete is already in flight
            ValidationError: If no post is mounted
        """
        if self.post_id is None:
            raise ValidationError("No post is mounted")
        if self.pending:
            raise SubmissionInProgressError(str(self.post_id))

        post_id = self.post_id
        generation = self._generation
        self.pending = True
        self.draft = content

        with logfire.span(
            "live_thread.submit",
            post_id=str(post_id),
            author_id=str(author_id),
            reply_to_id=str(reply_to_id) if reply_to_id else None,
        ):
            try:
                async with self.services() as services:
                    comment = await services.create_comment.execute(
                        CreateCommentRequest(
                            post_id=str(post_id),
                            content=content,
                            author_id=str(author_id),
                            author_name=author_name,
                            parent_id=str(reply_to_id) if reply_to_id else None,
                        )
                    )
            except DomainError as e:
                await self._settle(generation, error=str(e))
                return None
            except Exception as e:
                logfire.error(
                    "Live thread submit failed",
                    post_id=str(post_id),
                    error=str(e),
                    _exc_info=True,
                )
                await self._settle(generation, error=SUBMIT_ERROR)
                return None

            if not self._is_current(generation):
                return None

            self.draft = ""
            await self._settle(generation)
            return comment

    async def delete(self, comment_id: CommentId, acting_user_id: UserId) -> bool:
        """Delete a comment of the acting user from the mounted post.

        Only the author is offered deletion; the check happens here before
        the store is touched. The store enforces it again. ``pending`` is set
        while the store call is in flight.

        Returns:
            True if the comment was deleted

        Raises:
            NotFoundError: If the comment is not in the current forest
            NotAuthorizedError: If the acting user is not the author
            SubmissionInProgressError: If a submit or delete is already in flight
        """
        node = find_node(self.forest, comment_id)
        if node is None:
            raise NotFoundError("Comment", str(comment_id))
        if node.comment.author_id != acting_user_id:
            raise NotAuthorizedError("comment", str(comment_id), str(acting_user_id))
        if self.pending:
            raise SubmissionInProgressError(str(self.post_id), "deletion")

        generation = self._generation
        self.pending = True

        with logfire.span(
            "live_thread.delete",
            comment_id=str(comment_id),
            acting_user_id=str(acting_user_id),
        ):
            try:
                async with self.services() as services:
                    await services.comments.delete_comment(comment_id, acting_user_id)
            except DomainError as e:
                await self._settle(generation, error=str(e))
                return False
            except Exception as e:
                logfire.error(
                    "Live thread delete failed",
                    comment_id=str(comment_id),
                    error=str(e),
                    _exc_info=True,
                )
                await self._settle(generation, error=DELETE_ERROR)
                return False

            await self._settle(generation)
        return True

    def toggle(self, comment_id: CommentId) -> bool:
        """Flip the collapse state of a node in the current forest.

        Returns:
            The new collapsed state

        Raises:
            NotFoundError: If the comment is not in the current forest
        """
        node = find_node(self.forest, comment_id)
        if node is None:
            raise NotFoundError("Comment", str(comment_id))
        return self.policy.toggle(node)

    async def _on_change(self, event: ChangeEvent) -> None:
        if self.post_id is None:
            return
        if event.post_id is not None and event.post_id != self.post_id:
            return
        logfire.debug(
            "Comment change received",
            post_id=str(self.post_id),
            change=event.type.value,
            record_id=str(event.record_id) if event.record_id else None,
        )
        await self.refresh()

    async def _settle(self, generation: int, error: Optional[str] = None) -> None:
        """Clear ``pending`` after a write and push the settled state."""
        if not self._is_current(generation):
            return
        self.pending = False
        if error is not None:
            await self._emit_error(error)
        await self._publish()

    async def _publish(self) -> None:
        for listener in list(self._update_listeners):
            await listener(self.forest)

    async def _emit_error(self, message: str) -> None:
        for listener in list(self._error_listeners):
            await listener(message)

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation and self.post_id is not None

    def _release(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None


def scoped_live_services(
    open_scope: Callable[[], AbstractAsyncContextManager],
) -> LiveServiceScope:
    """Adapt a DI scope opener into a LiveServices scope.

    Args:
        open_scope: Opens a request scope with a ``get`` coroutine (a dishka
            container)

    Returns:
        Scope factory suitable for ``LiveThread``
    """
    @asynccontextmanager
    async def _scope() -> AsyncIterator[LiveServices]:
        async with open_scope() as request_container:
            yield LiveServices(
                comments=await request_container.get(CommentService),
                create_comment=await request_container.get(CreateCommentUseCase),
            )

    return _scope
