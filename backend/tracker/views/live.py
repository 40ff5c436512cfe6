"""Live views: a snapshot kept current by change-feed subscriptions.

A view is mounted once (snapshot + subscriptions armed together) and
unmounted when it is no longer served. Results that arrive after unmount are
discarded. Use ``async with view:`` to get unmount on every exit path.
"""
import asyncio
import logging
from typing import List, Optional

from tracker import schemas
from tracker.core.exceptions import QueryError
from tracker.realtime.reconciler import apply
from tracker.realtime.subscriber import ChangeFeedSubscriber
from tracker.utils.duration import as_utc
from tracker.utils.production import build_summary
from tracker.views import loader

logger = logging.getLogger(__name__)


class LiveView:
    name = "view"
    tables = ()

    def __init__(self, client, subscriber: ChangeFeedSubscriber = None):
        self.client = client
        self.subscriber = subscriber or ChangeFeedSubscriber(client)
        self.subscriptions = []
        self.items: list = []
        self.loading = False
        self.load_error: Optional[str] = None
        self.active = False

    @property
    def live(self) -> bool:
        return bool(self.subscriptions) and all(sub.connected for sub in self.subscriptions)

    @property
    def status(self) -> schemas.ViewStatus:
        return schemas.ViewStatus(
            view=self.name,
            live=self.live,
            load_error=self.load_error,
            subscriptions=[sub.status for sub in self.subscriptions]
        )

    def handlers(self, table: str) -> dict:
        return {
            "on_insert": self.on_change,
            "on_update": self.on_change,
            "on_delete": self.on_change,
        }

    async def on_change(self, event):
        if self.active:
            self.items = apply(self.items, event)

    async def load(self):
        raise NotImplementedError

    def seed(self, data):
        self.items = data

    async def refresh(self):
        self.loading = True
        try:
            data = await self.load()
        except QueryError as e:
            logger.error(f"Error fetching {self.name} data: {e}")
            if self.active:
                self.items = []
                self.load_error = f"Failed to load {self.name} data"
                self.loading = False
            return
        if not self.active:
            logger.debug(f"{self.name} snapshot arrived after unmount, ignoring")
            return
        self.seed(data)
        self.load_error = None
        self.loading = False

    async def _subscribe(self, table: str):
        sub = await self.subscriber.subscribe(table, **self.handlers(table))
        if self.active:
            self.subscriptions.append(sub)
        else:
            await sub.close()

    async def mount(self):
        logger.info(f"Mounting {self.name} view")
        self.active = True
        await asyncio.gather(
            self.refresh(),
            *(self._subscribe(table) for table in self.tables)
        )

    async def unmount(self):
        if not self.active and not self.subscriptions:
            return
        logger.info(f"Unmounting {self.name} view")
        self.active = False
        subscriptions, self.subscriptions = self.subscriptions, []
        for sub in subscriptions:
            await sub.close()

    async def __aenter__(self):
        await self.mount()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.unmount()


class TrackerView(LiveView):
    """Units, newest first, each with the time spent at its current station."""

    name = "tracker"
    tables = ("sarees",)

    async def load(self) -> List[schemas.UnitWithDuration]:
        return await loader.load_units(self.client)

    def handlers(self, table: str) -> dict:
        return {
            "on_insert": self.on_unit_written,
            "on_update": self.on_unit_written,
            "on_delete": self.on_change,
        }

    async def on_unit_written(self, event):
        if not self.active:
            return
        row = await loader.with_duration(self.client, event.row)
        if self.active:
            self.items = apply(self.items, type(event)(row))

    def search(self, term: str = "") -> List[schemas.UnitWithDuration]:
        if not term:
            return list(self.items)
        lowered = term.lower()
        return [
            unit for unit in self.items
            if term in unit.saree_id
            or lowered in unit.article_number.lower()
            or lowered in (unit.weaver_name or "").lower()
        ]


class TransactionsView(LiveView):
    name = "transactions"
    tables = ("transactions",)

    async def load(self) -> List[schemas.Movement]:
        return await loader.load_movements(self.client)

    def filtered(self, search: str = "", station: str = "all", ascending: bool = False) -> List[schemas.Movement]:
        lowered = search.lower()
        result = [
            movement for movement in self.items
            if (
                search in movement.saree_id
                or lowered in movement.from_station.lower()
                or lowered in movement.to_station.lower()
            )
            and (station == "all" or station in (movement.from_station, movement.to_station))
        ]
        return sorted(result, key=lambda m: as_utc(m.timestamp), reverse=not ascending)


class DashboardView(LiveView):
    """Station counts plus the production and throughput figures.

    Station rows are reconciled from their own feed; any unit or throughput
    change re-reads the two counters, keeping only the latest re-read issued.
    """

    name = "dashboard"
    tables = ("sarees", "stations", "through_put")

    def __init__(self, client, subscriber: ChangeFeedSubscriber = None):
        super().__init__(client, subscriber)
        self.unit_count = 0
        self.throughput_count = 0
        self._counts_seq = 0

    async def load(self):
        return await asyncio.gather(loader.load_stations(self.client), loader.load_counts(self.client))

    def seed(self, data):
        stations, (self.unit_count, self.throughput_count) = data
        self.items = stations

    def handlers(self, table: str) -> dict:
        if table == "stations":
            return super().handlers(table)
        return {
            "on_insert": self.on_counter_change,
            "on_update": self.on_counter_change,
            "on_delete": self.on_counter_change,
        }

    async def on_counter_change(self, event):
        if not self.active:
            return
        self._counts_seq += 1
        seq = self._counts_seq
        try:
            counts = await loader.load_counts(self.client)
        except QueryError as e:
            logger.error(f"Error refreshing dashboard counts: {e}")
            return
        if self.active and seq == self._counts_seq:
            self.unit_count, self.throughput_count = counts

    @property
    def summary(self) -> Optional[schemas.DashboardSummary]:
        if self.loading or self.load_error:
            return None
        return build_summary(self.items, self.unit_count, self.throughput_count, live=self.live)
