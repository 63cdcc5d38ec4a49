"""Change feed implementations.

``LocalChangeFeed`` fans events out inside one process. ``PostgresChangeFeed``
extends it with a dedicated asyncpg connection that LISTENs on the channel
fed by the ``notify_comment_change`` trigger.
"""

import asyncio
import json
from itertools import count
from typing import Any, Optional
from uuid import UUID

import asyncpg
import logfire

from inkwell.domain.model import ChangeEvent
from inkwell.domain.repository import ChangeFeed, ChangeHandler, Unsubscribe
from inkwell.domain.value import ChangeType, PostId


class LocalChangeFeed(ChangeFeed):
    """In-process change feed."""

    def __init__(self) -> None:
        self._subscriptions: dict[int, tuple[ChangeHandler, Optional[PostId]]] = {}
        self._tokens = count()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(
        self, handler: ChangeHandler, post_id: Optional[PostId] = None
    ) -> Unsubscribe:
        token = next(self._tokens)
        self._subscriptions[token] = (handler, post_id)
        logfire.debug(
            "Change feed subscription added",
            post_id=str(post_id) if post_id else None,
            subscribers=len(self._subscriptions),
        )

        def unsubscribe() -> None:
            if self._subscriptions.pop(token, None) is not None:
                logfire.debug(
                    "Change feed subscription removed",
                    subscribers=len(self._subscriptions),
                )

        return unsubscribe

    async def publish(self, event: ChangeEvent) -> None:
        # Events without a post id reach every subscriber
        for handler, post_id in list(self._subscriptions.values()):
            if post_id and event.post_id and post_id != event.post_id:
                continue
            try:
                await handler(event)
            except Exception as e:
                # One broken viewer must not stop delivery to the others
                logfire.error(
                    "Change handler failed",
                    change=event.type.value,
                    record_id=str(event.record_id) if event.record_id else None,
                    error=str(e),
                    _exc_info=True,
                )


def parse_notification(payload: str) -> ChangeEvent:
    """Parse a NOTIFY payload from the comment trigger.

    The payload is JSON: ``{"op": "INSERT", "table": "comments", "id": ...,
    "post_id": ...}``.

    Raises:
        ValueError: If the payload is not a valid change notification
    """
    try:
        data: dict[str, Any] = json.loads(payload)
        post_id = data.get("post_id")
        return ChangeEvent(
            type=ChangeType(str(data["op"]).lower()),
            table=data.get("table", "comments"),
            record_id=UUID(str(data["id"])),
            post_id=PostId(UUID(str(post_id))) if post_id else None,
        )
    except (KeyError, TypeError, json.JSONDecodeError) as e:
        raise ValueError(f"Invalid change notification: {payload!r}") from e


class PostgresChangeFeed(LocalChangeFeed):
    """Change feed driven by PostgreSQL LISTEN/NOTIFY.

    When the listening connection drops it is re-opened with exponential
    backoff. Notifications sent while disconnected are lost, so a
    successful reconnect publishes a ``RESYNC`` event without a post id and
    every viewer re-fetches.
    """

    def __init__(
        self,
        dsn: str,
        channel: str,
        retry_delay: float = 1.0,
        max_retry_delay: float = 30.0,
    ) -> None:
        """Initialize feed.

        Args:
            dsn: Plain libpq DSN (no SQLAlchemy driver suffix)
            channel: NOTIFY channel written by the comment trigger
            retry_delay: Seconds to wait after the first failed reconnect
            max_retry_delay: Upper bound for the doubling retry delay
        """
        super().__init__()
        self.dsn = dsn
        self.channel = channel
        self.retry_delay = retry_delay
        self.max_retry_delay = max_retry_delay
        self._connection: Optional[asyncpg.Connection] = None
        self._pending: set[asyncio.Task] = set()
        self._reconnect_task: Optional[asyncio.Task] = None
        self._stopping = False

    @property
    def connected(self) -> bool:
        return self._connection is not None

    async def start(self) -> None:
        """Open the listening connection. Idempotent."""
        if self._connection is not None:
            return
        self._stopping = False
        with logfire.span("change_feed.start", channel=self.channel):
            await self._connect()
            logfire.info("Listening for comment changes", channel=self.channel)

    async def stop(self) -> None:
        """Close the listening connection and wait for in-flight deliveries."""
        self._stopping = True
        reconnect, self._reconnect_task = self._reconnect_task, None
        if reconnect is not None and not reconnect.done():
            reconnect.cancel()
            await asyncio.gather(reconnect, return_exceptions=True)

        connection, self._connection = self._connection, None
        if connection is None:
            return
        # Our own close must not look like a lost connection
        connection.remove_termination_listener(self._on_terminated)
        try:
            await connection.remove_listener(self.channel, self._on_notify)
        finally:
            await connection.close()
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
        logfire.info("Stopped listening for comment changes", channel=self.channel)

    async def _connect(self) -> None:
        connection = await asyncpg.connect(self.dsn)
        await connection.add_listener(self.channel, self._on_notify)
        connection.add_termination_listener(self._on_terminated)
        self._connection = connection

    def _on_terminated(self, connection: asyncpg.Connection) -> None:
        if self._stopping or connection is not self._connection:
            return
        logfire.warn("Change feed connection lost", channel=self.channel)
        self._connection = None
        self._reconnect_task = asyncio.get_running_loop().create_task(
            self._reconnect()
        )

    async def _reconnect(self) -> None:
        delay = self.retry_delay
        attempt = 0
        with logfire.span("change_feed.reconnect", channel=self.channel):
            while not self._stopping:
                attempt += 1
                try:
                    await self._connect()
                except (
                    OSError,
                    asyncio.TimeoutError,
                    asyncpg.PostgresError,
                    asyncpg.InterfaceError,
                ) as e:
                    logfire.warn(
                        "Change feed reconnect failed",
                        channel=self.channel,
                        attempt=attempt,
                        retry_in=delay,
                        error=str(e),
                    )
                    await asyncio.sleep(delay)
                    delay = min(delay * 2, self.max_retry_delay)
                    continue

                logfire.info(
                    "Change feed reconnected", channel=self.channel, attempts=attempt
                )
                await self.publish(ChangeEvent(type=ChangeType.RESYNC))
                return

    def _on_notify(
        self, connection: asyncpg.Connection, pid: int, channel: str, payload: str
    ) -> None:
        try:
            event = parse_notification(payload)
        except ValueError as e:
            logfire.warn("Ignoring malformed notification", error=str(e))
            return

        task = asyncio.get_running_loop().create_task(self.publish(event))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
