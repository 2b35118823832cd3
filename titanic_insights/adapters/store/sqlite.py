"""SQLite passenger store adapter.

Implements PassengerRepositoryPort using SQLite with aiosqlite for async
access. Zero operational overhead: the whole manifest lives in one file.
"""

import asyncio
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import aiosqlite

from titanic_insights.core.cancellation import CancellationToken
from titanic_insights.core.models import Passenger, Sex
from titanic_insights.core.ports import PassengerRepositoryPort

from .schema import COLUMNS, SELECT_COLUMNS, passenger_to_row, row_to_passenger

logger = logging.getLogger(__name__)


class SQLitePassengerStore(PassengerRepositoryPort):
    """SQLite-backed passenger store with connection pooling and async access."""

    def __init__(self, db_path: str, pool_size: int = 5):
        """Initialize SQLite store with connection pooling.

        Args:
            db_path: Path to SQLite database file.
            pool_size: Number of connections to keep in the pool.
        """
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._pool: list[aiosqlite.Connection] = []
        self._pool_lock = asyncio.Lock()
        self._pool_size = pool_size
        self._schema_lock = asyncio.Lock()
        self._schema_initialized = False

    async def _get_connection(self) -> aiosqlite.Connection:
        """Get a connection from the pool or open a new one."""
        async with self._pool_lock:
            if self._pool:
                return self._pool.pop()
        return await aiosqlite.connect(str(self.db_path))

    async def _return_connection(self, conn: aiosqlite.Connection) -> None:
        """Return a connection to the pool, closing it if the pool is full."""
        async with self._pool_lock:
            if len(self._pool) < self._pool_size:
                self._pool.append(conn)
                return
        await conn.close()

    async def close_pool(self) -> None:
        """Close all pooled connections."""
        async with self._pool_lock:
            for conn in self._pool:
                await conn.close()
            self._pool.clear()

    async def initialize(self) -> None:
        """Create the passengers table if it does not exist yet.

        Only runs once per instance. Subsequent calls are no-ops.
        """
        if self._schema_initialized:
            return

        async with self._schema_lock:
            if self._schema_initialized:
                return

            conn = await self._get_connection()
            try:
                await conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS passengers (
                        passenger_id INTEGER PRIMARY KEY,
                        name TEXT NOT NULL,
                        sex TEXT NOT NULL CHECK (sex IN ('male', 'female')),
                        age REAL,
                        pclass INTEGER NOT NULL CHECK (pclass IN (1, 2, 3)),
                        survived INTEGER NOT NULL,
                        sib_sp INTEGER,
                        parch INTEGER,
                        ticket TEXT,
                        fare REAL,
                        cabin TEXT,
                        embarked TEXT
                    )
                    """
                )
                await conn.execute(
                    "CREATE INDEX IF NOT EXISTS idx_survived ON passengers(survived)"
                )
                await conn.execute(
                    "CREATE INDEX IF NOT EXISTS idx_sex ON passengers(sex)"
                )
                await conn.commit()
                self._schema_initialized = True
            finally:
                await self._return_connection(conn)

    async def _fetch_all(
        self, sql: str, params: tuple[Any, ...], cancellation: CancellationToken
    ) -> list[tuple[Any, ...]]:
        cancellation.raise_if_cancelled()
        await self.initialize()

        conn = await self._get_connection()
        try:
            cursor = await conn.execute(sql, params)
            rows = await cursor.fetchall()
        finally:
            await self._return_connection(conn)

        cancellation.raise_if_cancelled()
        return list(rows)

    async def _fetch_scalar(
        self, sql: str, params: tuple[Any, ...], cancellation: CancellationToken
    ) -> Any:
        rows = await self._fetch_all(sql, params, cancellation)
        return rows[0][0] if rows else None

    async def get_all(self, cancellation: CancellationToken) -> list[Passenger]:
        """Return every passenger ordered by passenger_id."""
        rows = await self._fetch_all(
            f"SELECT {SELECT_COLUMNS} FROM passengers ORDER BY passenger_id",
            (),
            cancellation,
        )
        return [row_to_passenger(row) for row in rows]

    async def get_by_id(
        self, passenger_id: int, cancellation: CancellationToken
    ) -> Passenger | None:
        """Look up a passenger by identifier."""
        rows = await self._fetch_all(
            f"SELECT {SELECT_COLUMNS} FROM passengers WHERE passenger_id = ?",
            (passenger_id,),
            cancellation,
        )
        if not rows:
            return None
        return row_to_passenger(rows[0])

    async def get_filtered(
        self, survived: bool | None, cancellation: CancellationToken
    ) -> list[Passenger]:
        """Return passengers matching the survival filter (None = all)."""
        if survived is None:
            return await self.get_all(cancellation)

        rows = await self._fetch_all(
            f"SELECT {SELECT_COLUMNS} FROM passengers "
            "WHERE survived = ? ORDER BY passenger_id",
            (int(survived),),
            cancellation,
        )
        return [row_to_passenger(row) for row in rows]

    async def get_total_males(self, cancellation: CancellationToken) -> int:
        """Count male passengers."""
        return await self._count_sex(Sex.MALE, cancellation)

    async def get_total_females(self, cancellation: CancellationToken) -> int:
        """Count female passengers."""
        return await self._count_sex(Sex.FEMALE, cancellation)

    async def _count_sex(self, sex: Sex, cancellation: CancellationToken) -> int:
        count = await self._fetch_scalar(
            "SELECT COUNT(*) FROM passengers WHERE sex = ?",
            (sex.value,),
            cancellation,
        )
        return int(count or 0)

    async def count(self) -> int:
        """Total number of stored passengers."""
        count = await self._fetch_scalar(
            "SELECT COUNT(*) FROM passengers", (), CancellationToken.none()
        )
        return int(count or 0)

    async def add_many(self, passengers: Iterable[Passenger]) -> int:
        """Insert or replace passengers in a single transaction.

        Returns:
            Number of passengers written.
        """
        await self.initialize()
        rows = [passenger_to_row(p) for p in passengers]
        if not rows:
            return 0

        placeholders = ", ".join("?" for _ in COLUMNS)
        conn = await self._get_connection()
        try:
            await conn.executemany(
                f"INSERT OR REPLACE INTO passengers ({SELECT_COLUMNS}) "
                f"VALUES ({placeholders})",
                rows,
            )
            await conn.commit()
        finally:
            await self._return_connection(conn)

        logger.info(f"Stored {len(rows)} passengers in {self.db_path}")
        return len(rows)
