import asyncio
import inspect
import logging
from contextlib import asynccontextmanager
from typing import Callable, Optional

import requests
from pydantic import ValidationError

from tracker.core.exceptions import AuthenticationError, TransportError
from tracker.realtime.events import Created, Modified, Removed, decode_event
from tracker.realtime.feed import FeedStatus
from tracker.schemas import TABLE_SCHEMAS, ConnectionStateEnum, SubscriptionStatus

logger = logging.getLogger(__name__)

TABLES = tuple(TABLE_SCHEMAS)


class Subscription:
    """One live subscription to one table's change feed.

    ``state`` and ``error`` are observable through ``on_state``; ``close`` tears
    the feed down and may be called any number of times.
    """

    def __init__(self, table: str, feed, on_insert=None, on_update=None, on_delete=None,
                 on_state: Callable = None):
        self.table = table
        self.feed = feed
        self.schema = TABLE_SCHEMAS[table]
        self.handlers = {
            Created: on_insert,
            Modified: on_update,
            Removed: on_delete,
        }
        self.on_state = on_state
        self.state = ConnectionStateEnum.connecting
        self.error: Optional[str] = None
        self.handle = None
        self._closed = False

    @property
    def connected(self) -> bool:
        return self.state == ConnectionStateEnum.connected

    @property
    def status(self) -> SubscriptionStatus:
        return SubscriptionStatus(table=self.table, state=self.state, error=self.error)

    def _set_state(self, state: ConnectionStateEnum, error: Optional[str] = None):
        self.state = state
        if error is not None:
            self.error = error
        if self.on_state is not None:
            self.on_state(self.status)

    def fail(self, message: str):
        logger.error(f"Realtime {self.table}: {message}")
        self._set_state(ConnectionStateEnum.errored, message)

    async def on_status(self, status: FeedStatus, message: Optional[str] = None):
        logger.info(f"Realtime {self.table} subscription status: {status.value}")
        if self._closed:
            return
        if status == FeedStatus.SUBSCRIBED:
            self.error = None
            self._set_state(ConnectionStateEnum.connected)
        elif status == FeedStatus.CHANNEL_ERROR:
            if message:
                logger.error(f"Realtime {self.table} channel error: {message}")
            self.fail(f"Channel error for {self.table}")
        elif status == FeedStatus.TIMED_OUT:
            self.fail(f"Connection timed out for {self.table}")
        elif status == FeedStatus.CLOSED:
            # an errored channel stays errored, nothing reconnects it
            if self.state != ConnectionStateEnum.errored:
                self._set_state(ConnectionStateEnum.closed)

    async def on_payload(self, payload: dict):
        try:
            event = decode_event(payload, self.schema)
        except (KeyError, TypeError, ValidationError) as e:
            logger.error(f"Malformed {self.table} change: {e}")
            self.error = f"Error handling {self.table} change: {e}"
            return
        if event is None:
            logger.info(f"Realtime {self.table} unknown event type: {payload.get('type')}")
            return

        logger.debug(f"Realtime {self.table} {type(event).__name__} event received")
        handler = self.handlers[type(event)]
        if handler is None:
            return
        try:
            result = handler(event)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.error(f"Error handling realtime {self.table} change: {e}", exc_info=True)
            self.error = f"Error handling {self.table} change: {e}"

    async def close(self):
        if self._closed:
            return
        self._closed = True
        logger.info(f"Cleaning up realtime subscription for {self.table}...")
        if self.handle is not None:
            await self.feed.unsubscribe(self.handle)
        if self.state != ConnectionStateEnum.errored:
            self._set_state(ConnectionStateEnum.closed)


class ChangeFeedSubscriber:
    def __init__(self, client):
        self.client = client

    async def _current_user(self, sub: Subscription):
        try:
            user = await asyncio.to_thread(self.client.auth.get_current_user)
        except (AuthenticationError, requests.RequestException) as e:
            sub.fail(f"Authentication error: {e}")
            return None
        if user is None:
            sub.fail("No authenticated user")
            return None
        logger.info(f"User authenticated for {sub.table} realtime: {user.email}")
        return user

    async def subscribe(self, table: str, on_insert=None, on_update=None, on_delete=None,
                        on_state: Callable = None) -> Subscription:
        """Open a subscription on one table.

        Handlers receive the decoded event (``Created``/``Modified`` carry the new
        row, ``Removed`` the prior one) and may be plain functions or coroutines.
        Authentication and transport failures do not raise: the returned
        subscription is left ``errored`` with a message.
        """
        if table not in TABLE_SCHEMAS:
            raise ValueError(f"Unknown table {table!r}, expected one of {TABLES}")

        logger.info(f"Setting up realtime subscription for {table}...")
        sub = Subscription(table, self.client.feed, on_insert, on_update, on_delete, on_state)
        if await self._current_user(sub) is None:
            return sub

        try:
            sub.handle = await self.client.feed.subscribe(table, sub.on_payload, sub.on_status)
        except TransportError as e:
            sub.fail(f"Setup error for {table}: {e}")
        return sub

    @asynccontextmanager
    async def open(self, table: str, **handlers):
        sub = await self.subscribe(table, **handlers)
        try:
            yield sub
        finally:
            await sub.close()
