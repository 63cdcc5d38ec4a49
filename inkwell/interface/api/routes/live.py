"""Live comment thread over WebSocket.

Client messages (JSON):

    {"type": "submit", "content": "...", "reply_to_id": "<uuid>|null"}
    {"type": "delete", "comment_id": "<uuid>"}
    {"type": "toggle", "comment_id": "<uuid>"}
    {"type": "refresh"}

Server messages (JSON):

    {"type": "thread", "post_id": ..., "comments": [...], "visible_ids": [...],
     "total": n, "pending": bool, "draft": "..."}
    {"type": "submitted", "comment_id": "<uuid>"}
    {"type": "error", "message": "..."}
"""

from typing import Literal
from uuid import UUID

import logfire
import pydantic
from dishka import AsyncContainer
from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status
from pydantic import BaseModel

from inkwell.application.live_thread import LiveThread, scoped_live_services
from inkwell.application.usecase.comment import serialize_forest
from inkwell.config import CommentSettings
from inkwell.domain.error import (
    NotAuthorizedError,
    NotFoundError,
    SubmissionInProgressError,
    ValidationError,
)
from inkwell.domain.repository import ChangeFeed
from inkwell.domain.service import JWTService, PostService, ThreadNode
from inkwell.domain.value import CommentId, PostId, UserId
from inkwell.domain.value.types import DisplayName
from inkwell.util.jwt import TokenPayload

router = APIRouter(prefix="/posts", tags=["comments"])


class LiveCommand(BaseModel):
    """Message sent by a live viewer."""

    type: Literal["submit", "delete", "toggle", "refresh"]
    content: str | None = None
    reply_to_id: UUID | None = None
    comment_id: UUID | None = None


class LiveSession:
    """One WebSocket connection following one post."""

    def __init__(
        self, websocket: WebSocket, live: LiveThread, user: TokenPayload | None
    ) -> None:
        self.websocket = websocket
        self.live = live
        self.user = user

        live.on_update(self.send_thread)
        live.on_error(self.send_error)

    async def send_thread(self, forest: list[ThreadNode]) -> None:
        view = serialize_forest(self.live.post_id, forest, self.live.policy)
        await self.websocket.send_json(
            {
                "type": "thread",
                **view.model_dump(mode="json"),
                "pending": self.live.pending,
                "draft": self.live.draft,
            }
        )

    async def send_error(self, message: str) -> None:
        await self.websocket.send_json({"type": "error", "message": message})

    async def handle(self, command: LiveCommand) -> None:
        if command.type == "refresh":
            await self.live.refresh()
            return

        if command.type == "toggle":
            if command.comment_id is None:
                await self.send_error("comment_id is required")
                return
            try:
                self.live.toggle(CommentId(command.comment_id))
            except NotFoundError as e:
                await self.send_error(str(e))
                return
            await self.send_thread(self.live.forest)
            return

        if self.user is None:
            await self.send_error(f"Authentication required to {command.type}")
            return
        user_id = UserId(UUID(self.user.user_id))

        if command.type == "submit":
            try:
                comment = await self.live.submit(
                    content=command.content or "",
                    author_id=user_id,
                    author_name=DisplayName(self.user.display_name),
                    reply_to_id=CommentId(command.reply_to_id)
                    if command.reply_to_id
                    else None,
                )
            except (SubmissionInProgressError, ValidationError) as e:
                await self.send_error(str(e))
                return
            if comment is not None:
                await self.websocket.send_json(
                    {"type": "submitted", "comment_id": comment.comment_id}
                )
            return

        # delete
        if command.comment_id is None:
            await self.send_error("comment_id is required")
            return
        try:
            await self.live.delete(CommentId(command.comment_id), user_id)
        except (NotFoundError, NotAuthorizedError, SubmissionInProgressError) as e:
            await self.send_error(str(e))


@router.websocket("/{post_id}/comments/live")
async def live_comments(websocket: WebSocket, post_id: UUID) -> None:
    """Push the rebuilt thread of a post to the client after every change.

    Reading is anonymous; submit and delete need the ``auth_token`` cookie.
    """
    container: AsyncContainer = websocket.app.state.dishka_container

    async with container() as request_container:
        jwt_service = await request_container.get(JWTService)
        post_service = await request_container.get(PostService)
        post = await post_service.get_post_by_id(PostId(post_id))

    if post is None:
        await websocket.close(
            code=status.WS_1008_POLICY_VIOLATION, reason="Post not found"
        )
        return

    user = jwt_service.authenticate(websocket.cookies.get("auth_token"))

    live = LiveThread(
        services=scoped_live_services(container),
        change_feed=await container.get(ChangeFeed),
        settings=await container.get(CommentSettings),
    )

    await websocket.accept()
    session = LiveSession(websocket, live, user)

    with logfire.span(
        "live_comments.session",
        post_id=str(post_id),
        user_id=user.user_id if user else None,
    ):
        try:
            await live.mount(PostId(post_id))
            while True:
                raw = await websocket.receive_text()
                try:
                    command = LiveCommand.model_validate_json(raw)
                except pydantic.ValidationError:
                    await session.send_error("invalid message")
                    continue
                await session.handle(command)
        except WebSocketDisconnect:
            logfire.info("Live viewer disconnected", post_id=str(post_id))
        finally:
            await live.unmount()
