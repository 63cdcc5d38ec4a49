"""Change feed interface."""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Optional

from inkwell.domain.model.change import ChangeEvent
from inkwell.domain.value import PostId

ChangeHandler = Callable[[ChangeEvent], Awaitable[None]]
Unsubscribe = Callable[[], None]


class ChangeFeed(ABC):
    """Push notifications for changes in the Comment Store.

    Handlers are coroutines run on the subscriber's event loop. Every
    ``subscribe`` must be paired with a call to the returned ``Unsubscribe``.
    """

    @abstractmethod
    def subscribe(
        self, handler: ChangeHandler, post_id: Optional[PostId] = None
    ) -> Unsubscribe:
        """Register a handler.

        Args:
            handler: Coroutine called with each matching event
            post_id: Only deliver events for this post (None for all events)

        Returns:
            Callable that removes the handler; calling it twice is a no-op
        """
        pass

    @property
    @abstractmethod
    def subscriber_count(self) -> int:
        """Number of live handlers currently registered."""
        pass

    @abstractmethod
    async def publish(self, event: ChangeEvent) -> None:
        """Deliver an event to matching handlers.

        Args:
            event: The change that happened
        """
        pass
