"""Error types shared by the store client, the change feed and the live views.

Hierarchy:
    TrackerError
    ├── AuthenticationError  (no session, or the auth API refused us)
    ├── TransportError       (change-feed connection could not be used)
    ├── QueryError           (a read against the store failed)
    └── NotFoundError        (a single-row read matched nothing)

None of these are fatal to the process. Subscriptions turn the first two into
connection state, live views turn QueryError into a "failed to load" state.
"""


class TrackerError(Exception):
    pass


class AuthenticationError(TrackerError):
    pass


class TransportError(TrackerError):
    def __init__(self, table: str, message: str):
        self.table = table
        super().__init__(message)


class QueryError(TrackerError):
    def __init__(self, table: str, message: str):
        self.table = table
        super().__init__(f"Query on {table} failed: {message}")


class NotFoundError(TrackerError):
    def __init__(self, table: str, key: str):
        self.table = table
        self.key = key
        super().__init__(f"No row in {table} for {key}")
