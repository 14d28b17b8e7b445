"""
Graph API Backend — Embedded Graph Database
============================================

What:  Owns the single KuzuDB connection used by the application.
How:   `GraphDatabase` lazily opens `kuzu.Database` + `kuzu.Connection` on
       first use and caches them. The application factory creates one
       instance per app and stores it on `app.state.graph_db`; handlers
       receive it through `api.dependencies.get_graph_db`.
When:  Opened during startup (`ensure_schema`), closed at shutdown.

Lifecycle:
    new ──get_connection()──▶ open ──close()──▶ closed
                                                   │
                             get_connection() ─────┘ raises DatabaseError

There is no pooling, retry, timeout or transaction handling. Engine calls
are synchronous and are made directly from async handlers, so only one runs
at a time on the event loop.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import kuzu

from api.exceptions import DatabaseError

logger = logging.getLogger(__name__)

LIVENESS_QUERY = "RETURN 1"


class GraphDatabase:
    """
    Lazily-opened, explicitly owned handle to an embedded KuzuDB file.

    Attributes:
        path: Database file location. Its parent directory is created on
              first connection if missing.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._database: Optional[kuzu.Database] = None
        self._connection: Optional[kuzu.Connection] = None
        self._closed = False

    @property
    def is_open(self) -> bool:
        return self._connection is not None

    def get_connection(self) -> kuzu.Connection:
        """
        Return the cached connection, opening it on first call.

        Every call after the first returns the identical handle. Nothing is
        cached when opening fails, so a later call tries again.

        Raises:
            DatabaseError: the directory could not be created, the engine
                refused to open the file, or the handle was already closed.
        """
        if self._closed:
            raise DatabaseError(
                "Database connection is closed",
                context={"path": str(self.path)},
            )
        if self._connection is not None:
            return self._connection

        logger.info("Initializing KuzuDB at %s", self.path)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            database = kuzu.Database(str(self.path))
            connection = kuzu.Connection(database)
        except Exception as e:
            logger.error("Failed to open KuzuDB at %s: %s", self.path, e)
            raise DatabaseError(
                context={"path": str(self.path), "error": str(e)},
            ) from e

        self._database = database
        self._connection = connection
        return connection

    def run_query(self, query: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Execute a Cypher query on the owned connection.

        The engine's result object is returned untouched. Failures are
        logged and re-raised as `DatabaseError`; nothing is retried.
        """
        connection = self.get_connection()
        try:
            if params:
                return connection.execute(query, params)
            return connection.execute(query)
        except Exception as e:
            logger.error("Database query error: %s (query=%r)", e, query)
            raise DatabaseError(
                context={"query": query, "error": str(e)},
            ) from e

    def ensure_schema(self) -> None:
        """
        Verify the database answers queries.

        Defines no tables, indexes or constraints; schema creation queries
        belong here once a data model exists.
        """
        try:
            self.run_query(LIVENESS_QUERY)
        except DatabaseError:
            logger.error("Error initializing database schema")
            raise
        logger.info("Database connection successful")

    def close(self) -> None:
        """Release the connection and database. Idempotent."""
        self._closed = True
        connection, database = self._connection, self._database
        self._connection = None
        self._database = None
        if connection is not None:
            connection.close()
        if database is not None:
            database.close()
        if connection is not None:
            logger.info("KuzuDB at %s closed", self.path)
