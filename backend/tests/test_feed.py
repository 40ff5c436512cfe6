"""Tests for the LISTEN/NOTIFY transport with psycopg2 stubbed out."""

import asyncio
import socket
import threading
from types import SimpleNamespace

import psycopg2
import pytest

from tracker.core.exceptions import TransportError
from tracker.realtime import feed as feed_module
from tracker.realtime.feed import FeedStatus, PostgresChangeFeed


class FakeCursor:
    def __init__(self, conn):
        self.conn = conn

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False

    def execute(self, statement):
        self.conn.executed.append(statement)


class FakeConnection:
    """Socket-backed connection so the event loop can watch it."""

    def __init__(self):
        self.reader, self.writer = socket.socketpair()
        self.reader.setblocking(False)
        self.notifies = []
        self.executed = []
        self.closed = 0
        self.fail_next_poll = False

    def set_isolation_level(self, level):
        self.isolation_level = level

    def cursor(self):
        return FakeCursor(self)

    def fileno(self):
        return self.reader.fileno()

    def poll(self):
        try:
            self.reader.recv(1024)
        except BlockingIOError:
            pass
        if self.fail_next_poll:
            raise psycopg2.OperationalError("server closed the connection unexpectedly")

    def push(self, payload):
        self.notifies.append(SimpleNamespace(channel="sarees_changes", payload=payload))
        self.writer.send(b"!")

    def close(self):
        self.closed = 1
        self.reader.close()
        self.writer.close()


class Recorder:
    def __init__(self):
        self.statuses = []
        self.payloads = []
        self.subscribed = asyncio.Event()

    async def on_status(self, status, message=None):
        self.statuses.append(status)
        if status == FeedStatus.SUBSCRIBED:
            self.subscribed.set()

    async def on_payload(self, payload):
        self.payloads.append(payload)


async def _until(predicate, attempts=100):
    for _ in range(attempts):
        if predicate():
            return
        await asyncio.sleep(0.01)


def test_notifications_arrive_in_order(monkeypatch):
    conn = FakeConnection()
    monkeypatch.setattr(feed_module.psycopg2, "connect", lambda *args, **kwargs: conn)

    async def scenario():
        recorder = Recorder()
        feed = PostgresChangeFeed("postgresql://localhost/store", timeout=1)
        handle = await feed.subscribe("sarees", recorder.on_payload, recorder.on_status)
        await asyncio.wait_for(recorder.subscribed.wait(), 5)

        conn.push('{"type": "INSERT", "n": 1}')
        conn.push("not json")
        conn.push('{"type": "DELETE", "n": 2}')
        await _until(lambda: len(recorder.payloads) == 2)

        await feed.unsubscribe(handle)
        await feed.unsubscribe(handle)
        return recorder

    recorder = asyncio.run(scenario())

    assert [p["n"] for p in recorder.payloads] == [1, 2]
    assert recorder.statuses == [FeedStatus.SUBSCRIBED]
    assert len(conn.executed) == 1
    assert conn.closed


def test_broken_channel_reports_error(monkeypatch):
    conn = FakeConnection()
    monkeypatch.setattr(feed_module.psycopg2, "connect", lambda *args, **kwargs: conn)

    async def scenario():
        recorder = Recorder()
        feed = PostgresChangeFeed("postgresql://localhost/store", timeout=1)
        handle = await feed.subscribe("stations", recorder.on_payload, recorder.on_status)
        await asyncio.wait_for(recorder.subscribed.wait(), 5)
        conn.fail_next_poll = True
        conn.writer.send(b"!")
        await asyncio.wait_for(handle.task, 5)
        return recorder

    recorder = asyncio.run(scenario())

    assert recorder.statuses == [FeedStatus.SUBSCRIBED, FeedStatus.CHANNEL_ERROR]
    assert conn.closed


@pytest.mark.parametrize(
    "message, expected",
    [
        ("timeout expired", FeedStatus.TIMED_OUT),
        ("could not connect to server: Connection refused", FeedStatus.CHANNEL_ERROR),
    ],
)
def test_connect_failures(monkeypatch, message, expected):
    def connect(*args, **kwargs):
        raise psycopg2.OperationalError(message)

    monkeypatch.setattr(feed_module.psycopg2, "connect", connect)

    async def scenario():
        recorder = Recorder()
        feed = PostgresChangeFeed("postgresql://localhost/store", timeout=1)
        handle = await feed.subscribe("sarees", recorder.on_payload, recorder.on_status)
        await asyncio.wait_for(handle.task, 5)
        return recorder

    assert asyncio.run(scenario()).statuses == [expected]


def test_rejects_unsafe_table_name():
    async def scenario():
        feed = PostgresChangeFeed("postgresql://localhost/store")
        await feed.subscribe("sarees; drop table x", None, None)

    with pytest.raises(TransportError):
        asyncio.run(scenario())


def test_unsubscribe_while_connecting_closes_late_connection(monkeypatch):
    conn = FakeConnection()
    release = threading.Event()

    def connect(*args, **kwargs):
        release.wait(5)
        return conn

    monkeypatch.setattr(feed_module.psycopg2, "connect", connect)

    async def scenario():
        recorder = Recorder()
        feed = PostgresChangeFeed("postgresql://localhost/store", timeout=1)
        handle = await feed.subscribe("sarees", recorder.on_payload, recorder.on_status)
        await asyncio.sleep(0.05)
        await feed.unsubscribe(handle)
        release.set()
        await _until(lambda: conn.closed)
        return recorder

    recorder = asyncio.run(scenario())

    assert conn.closed
    assert recorder.statuses == []
