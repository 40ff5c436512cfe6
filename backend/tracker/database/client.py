"""The store client handed to every component that talks to the hosted backend.

Reads go through SQLAlchemy sessions, auth goes through the backend's HTTP
auth API and change notifications come from the feed transport. The client is
built once by the application entry point and closed by it on shutdown.
"""
import asyncio
import logging
from typing import Callable, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from tracker.core.config import Settings
from tracker.core.exceptions import QueryError
from tracker.database.database import create_session_factory
from tracker.realtime.feed import PostgresChangeFeed
from tracker.services.auth_service import AuthService

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StoreClient:
    def __init__(self, session_factory: sessionmaker, auth: AuthService, feed):
        self.session_factory = session_factory
        self.auth = auth
        self.feed = feed
        self._closed = False

    def session(self) -> Session:
        return self.session_factory()

    def run(self, table: str, query: Callable[[Session], T]) -> T:
        """Run one store call in its own session, wrapping store errors as QueryError."""
        try:
            with self.session() as db:
                return query(db)
        except SQLAlchemyError as e:
            logger.error(f"Store call on {table} failed: {e}")
            raise QueryError(table, str(e)) from e

    async def arun(self, table: str, query: Callable[[Session], T]) -> T:
        return await asyncio.to_thread(self.run, table, query)

    async def close(self):
        if self._closed:
            return
        self._closed = True
        logger.info("Closing store client")
        await self.feed.close()
        self.auth.close()
        self.session_factory.kw["bind"].dispose()


def create_store_client(settings: Settings) -> StoreClient:
    session_factory = create_session_factory(settings.DATABASE_URL)
    auth = AuthService(settings.STORE_URL, settings.STORE_ANON_KEY)
    feed = PostgresChangeFeed(settings.REALTIME_DSN, timeout=settings.SUBSCRIBE_TIMEOUT)
    return StoreClient(session_factory, auth, feed)
