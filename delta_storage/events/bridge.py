"""
Change notification bridge.

Turns ``directory:change`` signals from the event channel into fresh
resource reads handed to caller callbacks.

Each signal starts one independent task per listener. Tasks are never
coalesced or cancelled when a newer signal arrives, so two refreshes for
back-to-back signals race and the later-completing one may deliver
older data. Every signal still produces one callback per listener.
"""

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from enum import StrEnum
from typing import Any

import structlog

from delta_storage.events.channel import EventChannel
from delta_storage.models.storage import DirectoryListing
from delta_storage.services.directory_service import DirectoryService

logger = structlog.get_logger(__name__)

DIRECTORY_CHANGE = "directory:change"
DIRECTORY_INITIALIZE = "directory:initialize"

Listener = Callable[[Any], Any]
ErrorHandler = Callable[[BaseException], None]


class ChannelState(StrEnum):
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"


class Subscription:
    """Handle for one registered directory-change listener."""

    def __init__(
        self,
        bridge: "ChangeNotificationBridge",
        callback: Listener,
        directory_id: str | None = None,
    ) -> None:
        self._bridge = bridge
        self.callback = callback
        self.directory_id = directory_id

    @property
    def active(self) -> bool:
        return self._bridge._is_subscribed(self)

    def unsubscribe(self) -> None:
        """Stop receiving signals. No-op if already removed."""
        self._bridge._unsubscribe(self)


class ChangeNotificationBridge:
    """
    Bridges the event channel to directory and size refreshes.

    Args:
        channel: Event channel to listen on.
        directories: Service used to re-fetch data on each signal.
        on_error: Called with any exception raised by a listener or a
            refresh. Failures are logged either way.
    """

    def __init__(
        self,
        channel: EventChannel,
        directories: DirectoryService,
        *,
        on_error: ErrorHandler | None = None,
    ) -> None:
        self._channel = channel
        self._directories = directories
        self._on_error = on_error

        self._subscriptions: list[Subscription] = []
        self._tasks: set[asyncio.Task[Any]] = set()
        # Directory id -> number of live subscriptions watching it.
        self._watched: dict[str, int] = {}

        channel.on(DIRECTORY_CHANGE, self._dispatch)

    @property
    def state(self) -> ChannelState:
        """Current connection state, including drops seen by the transport."""
        return ChannelState.CONNECTED if self._channel.connected else ChannelState.DISCONNECTED

    @property
    def listener_count(self) -> int:
        return len(self._subscriptions)

    @property
    def pending_refreshes(self) -> int:
        return len(self._tasks)

    @property
    def watched_directories(self) -> tuple[str, ...]:
        """Directories announced with ``directory:initialize`` on every connect."""
        return tuple(self._watched)

    async def connect(self) -> None:
        """
        Connect the event channel and announce watched directories.

        Raises:
            EventChannelError: If the channel cannot connect.
        """
        if self._channel.connected:
            logger.debug("Event channel already connected")
            return
        await self._channel.connect()
        for directory_id in list(self._watched):
            await self._emit_initialize(directory_id)

    async def disconnect(self) -> None:
        """Disconnect the event channel. In-flight refreshes keep running."""
        if not self._channel.connected:
            logger.debug("Event channel already disconnected")
            return
        await self._channel.disconnect()

    def on_directory_change(self, callback: Listener) -> Subscription:
        """
        Call ``callback`` with the raw payload of every change signal.

        ``callback`` may be a plain function or a coroutine function.
        """
        return self._subscribe(callback)

    def on_total_size_change(self, callback: Callable[[int], Any]) -> Subscription:
        """Re-query the total size on every change signal and pass it to ``callback``."""

        async def _refresh(_: Any) -> None:
            total_size = await self._directories.get_total_size()
            await _maybe_await(callback(total_size))

        return self.on_directory_change(_refresh)

    async def on_read_directory_event(
        self, directory_id: str, callback: Callable[[DirectoryListing], Any]
    ) -> Subscription:
        """
        Watch a directory and pass its fresh listing to ``callback`` on every change.

        The server is told about the watch with ``directory:initialize``;
        if the channel is not connected yet, this happens on connect. This
        method is a coroutine because of that emit. The watch is dropped
        once its last subscription is removed.

        Raises:
            AuthorizationDeniedError: If the key cannot read directories.
        """
        self._directories.check_read()
        if self._channel.connected and directory_id not in self._watched:
            await self._emit_initialize(directory_id)
        self._watched[directory_id] = self._watched.get(directory_id, 0) + 1

        async def _refresh(_: Any) -> None:
            listing = await self._directories.read_directory(directory_id)
            await _maybe_await(callback(listing))

        return self._subscribe(_refresh, directory_id)

    def on_read_directory_segment_change(
        self, path: str, callback: Callable[[DirectoryListing], Any]
    ) -> Subscription:
        """
        Pass the fresh listing of the directory at ``path`` to ``callback`` on every change.

        Path watches are not announced to the server, so unlike
        ``on_read_directory_event`` this registers without awaiting.

        Raises:
            AuthorizationDeniedError: If the key cannot read directories.
        """
        self._directories.check_read()

        async def _refresh(_: Any) -> None:
            listing = await self._directories.read_directory_by_segment(path)
            await _maybe_await(callback(listing))

        return self.on_directory_change(_refresh)

    def disconnect_read_directory_event(self) -> None:
        """Remove every directory-change listener and forget watched directories."""
        self._subscriptions.clear()
        self._watched.clear()
        logger.debug("All directory change listeners removed")

    async def wait_idle(self) -> None:
        """Wait until every in-flight refresh other than the caller's own has finished."""
        while pending := self._tasks - {asyncio.current_task()}:
            await asyncio.gather(*pending, return_exceptions=True)

    def _dispatch(self, *args: Any) -> None:
        payload = args[0] if args else None
        # Listeners may unsubscribe while being called.
        for subscription in list(self._subscriptions):
            self._run(subscription.callback, payload)

    def _run(self, listener: Listener, payload: Any) -> None:
        try:
            result = listener(payload)
        except Exception as e:
            self._report(e)
            return
        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self._tasks.add(task)
            task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task[Any]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        if (exc := task.exception()) is not None:
            self._report(exc)

    def _report(self, exc: BaseException) -> None:
        logger.error("Directory change listener failed", error=str(exc), exc_info=exc)
        if self._on_error is not None:
            self._on_error(exc)

    async def _emit_initialize(self, directory_id: str) -> None:
        await self._channel.emit(DIRECTORY_INITIALIZE, {"directoryId": directory_id})
        logger.debug("Watching directory", directory_id=directory_id)

    def _is_subscribed(self, subscription: Subscription) -> bool:
        return any(existing is subscription for existing in self._subscriptions)

    def _subscribe(self, callback: Listener, directory_id: str | None = None) -> Subscription:
        subscription = Subscription(self, callback, directory_id)
        self._subscriptions.append(subscription)
        logger.debug("Directory change listener added", count=len(self._subscriptions))
        return subscription

    def _unsubscribe(self, subscription: Subscription) -> None:
        if not self._is_subscribed(subscription):
            return
        self._subscriptions = [s for s in self._subscriptions if s is not subscription]
        if subscription.directory_id is not None:
            self._release_watch(subscription.directory_id)

    def _release_watch(self, directory_id: str) -> None:
        remaining = self._watched.get(directory_id, 0) - 1
        if remaining > 0:
            self._watched[directory_id] = remaining
        else:
            self._watched.pop(directory_id, None)
            logger.debug("Stopped watching directory", directory_id=directory_id)


async def _maybe_await(result: Awaitable[Any] | Any) -> None:
    if inspect.isawaitable(result):
        await result
