"""Change-feed transport over Postgres LISTEN/NOTIFY.

Every tracked table publishes on the channel ``<table>_changes`` from a row
trigger (installed by the ``0001_change_feed_triggers`` migration) with a JSON
payload of the shape described in ``tracker.realtime.events``.

Each subscription owns one autocommit connection whose socket is watched by
the running event loop. Notifications are queued and handed to the consumer
one at a time, in the order the server sent them.
"""
import asyncio
import json
import logging
from enum import Enum
from typing import Awaitable, Callable, Optional

import psycopg2
from psycopg2 import sql
from psycopg2.extensions import ISOLATION_LEVEL_AUTOCOMMIT

from tracker.core.exceptions import TransportError

logger = logging.getLogger(__name__)


class FeedStatus(str, Enum):
    SUBSCRIBED = "SUBSCRIBED"
    CHANNEL_ERROR = "CHANNEL_ERROR"
    TIMED_OUT = "TIMED_OUT"
    CLOSED = "CLOSED"


PayloadCallback = Callable[[dict], Awaitable[None]]
StatusCallback = Callable[[FeedStatus, Optional[str]], Awaitable[None]]


class _ChannelFailed:
    def __init__(self, message: str):
        self.message = message


def _close_abandoned(future):
    """Close a connection that finished opening after its subscriber left."""
    if future.cancelled() or future.exception() is not None:
        return
    future.result().close()


class FeedHandle:
    def __init__(self, table: str):
        self.table = table
        self.channel = f"{table}_changes"
        self.conn = None
        self.task: Optional[asyncio.Task] = None
        self.closed = False


class PostgresChangeFeed:
    def __init__(self, dsn: str, timeout: float = 10):
        self.dsn = dsn
        self.timeout = timeout
        self._handles = set()

    async def subscribe(self, table: str, on_payload: PayloadCallback, on_status: StatusCallback) -> FeedHandle:
        if not table.replace("_", "").isalnum():
            raise TransportError(table, f"Invalid table name {table!r}")
        handle = FeedHandle(table)
        self._handles.add(handle)
        handle.task = asyncio.create_task(self._run(handle, on_payload, on_status))
        return handle

    def _listen(self, channel: str):
        conn = psycopg2.connect(self.dsn, connect_timeout=max(1, int(self.timeout)))
        conn.set_isolation_level(ISOLATION_LEVEL_AUTOCOMMIT)
        with conn.cursor() as cur:
            cur.execute(sql.SQL("LISTEN {}").format(sql.Identifier(channel)))
        return conn

    async def _run(self, handle: FeedHandle, on_payload: PayloadCallback, on_status: StatusCallback):
        logger.info(f"Opening change feed on channel {handle.channel}")
        loop = asyncio.get_running_loop()
        connecting = loop.run_in_executor(None, self._listen, handle.channel)
        try:
            handle.conn = await asyncio.shield(connecting)
        except asyncio.CancelledError:
            connecting.add_done_callback(_close_abandoned)
            raise
        except psycopg2.OperationalError as e:
            message = str(e).strip()
            if "timeout" in message.lower():
                await on_status(FeedStatus.TIMED_OUT, message)
            else:
                await on_status(FeedStatus.CHANNEL_ERROR, message)
            return
        except psycopg2.Error as e:
            await on_status(FeedStatus.CHANNEL_ERROR, str(e).strip())
            return

        if handle.closed:
            handle.conn.close()
            return

        queue: asyncio.Queue = asyncio.Queue()
        loop.add_reader(handle.conn.fileno(), self._drain, handle, queue)
        await on_status(FeedStatus.SUBSCRIBED, None)

        try:
            while True:
                item = await queue.get()
                if isinstance(item, _ChannelFailed):
                    await on_status(FeedStatus.CHANNEL_ERROR, item.message)
                    break
                await on_payload(item)
        finally:
            self._release(handle, loop)

    def _drain(self, handle: FeedHandle, queue: asyncio.Queue):
        try:
            handle.conn.poll()
        except psycopg2.Error as e:
            logger.error(f"Change feed on {handle.channel} failed: {e}")
            asyncio.get_running_loop().remove_reader(handle.conn.fileno())
            queue.put_nowait(_ChannelFailed(str(e).strip()))
            return
        while handle.conn.notifies:
            notify = handle.conn.notifies.pop(0)
            try:
                payload = json.loads(notify.payload)
            except ValueError:
                logger.warning(f"Ignoring non-JSON notification on {handle.channel}: {notify.payload!r}")
                continue
            queue.put_nowait(payload)

    def _release(self, handle: FeedHandle, loop):
        conn = handle.conn
        if conn is None or conn.closed:
            return
        try:
            loop.remove_reader(conn.fileno())
        except (ValueError, OSError, psycopg2.Error):
            pass
        conn.close()

    async def unsubscribe(self, handle: FeedHandle):
        if handle.closed:
            return
        handle.closed = True
        self._handles.discard(handle)
        logger.info(f"Closing change feed on channel {handle.channel}")
        if handle.task is not None and not handle.task.done():
            handle.task.cancel()
            try:
                await handle.task
            except asyncio.CancelledError:
                pass
        self._release(handle, asyncio.get_running_loop())

    async def close(self):
        for handle in list(self._handles):
            await self.unsubscribe(handle)
