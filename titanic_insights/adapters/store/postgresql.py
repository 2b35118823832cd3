"""PostgreSQL passenger store adapter.

Implements PassengerRepositoryPort using PostgreSQL with asyncpg for async
access, for deployments that share the manifest between several readers.
"""

import asyncio
import logging
from collections.abc import Iterable
from typing import Any

import asyncpg

from titanic_insights.core.cancellation import CancellationToken
from titanic_insights.core.models import Passenger, Sex
from titanic_insights.core.ports import PassengerRepositoryPort

from .schema import COLUMNS, SELECT_COLUMNS, passenger_to_row, row_to_passenger

logger = logging.getLogger(__name__)


class PostgreSQLPassengerStore(PassengerRepositoryPort):
    """PostgreSQL-backed passenger store with connection pooling."""

    def __init__(
        self,
        host: str = "localhost",
        port: int = 5432,
        database: str = "titanic",
        user: str = "titanic",
        password: str = "",
        pool_size: int = 10,
    ):
        """Initialize PostgreSQL store with connection pooling.

        Args:
            host: PostgreSQL server hostname.
            port: PostgreSQL server port.
            database: Database name.
            user: Database user.
            password: Database password.
            pool_size: Maximum number of pooled connections.
        """
        self.host = host
        self.port = port
        self.database = database
        self.user = user
        self.password = password
        self._pool: asyncpg.Pool | None = None
        self._pool_size = pool_size
        self._schema_lock = asyncio.Lock()
        self._schema_initialized = False

    async def _init_pool(self) -> None:
        """Create the connection pool on first use."""
        if self._pool is not None:
            return

        self._pool = await asyncpg.create_pool(
            host=self.host,
            port=self.port,
            database=self.database,
            user=self.user,
            password=self.password,
            min_size=1,
            max_size=self._pool_size,
        )

    async def close_pool(self) -> None:
        """Close all pooled connections."""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None

    async def initialize(self) -> None:
        """Create the passengers table if it does not exist yet.

        Only runs once per instance. Subsequent calls are no-ops.
        """
        if self._schema_initialized:
            return

        async with self._schema_lock:
            if self._schema_initialized:
                return

            await self._init_pool()
            assert self._pool is not None

            async with self._pool.acquire() as conn:
                await conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS passengers (
                        passenger_id INTEGER PRIMARY KEY,
                        name TEXT NOT NULL,
                        sex TEXT NOT NULL CHECK (sex IN ('male', 'female')),
                        age DOUBLE PRECISION,
                        pclass SMALLINT NOT NULL CHECK (pclass IN (1, 2, 3)),
                        survived BOOLEAN NOT NULL,
                        sib_sp INTEGER,
                        parch INTEGER,
                        ticket TEXT,
                        fare DOUBLE PRECISION,
                        cabin TEXT,
                        embarked TEXT
                    )
                    """
                )
                await conn.execute(
                    "CREATE INDEX IF NOT EXISTS idx_passengers_survived "
                    "ON passengers(survived)"
                )
                await conn.execute(
                    "CREATE INDEX IF NOT EXISTS idx_passengers_sex ON passengers(sex)"
                )

            self._schema_initialized = True

    async def _fetch(
        self, sql: str, args: tuple[Any, ...], cancellation: CancellationToken
    ) -> list[Any]:
        cancellation.raise_if_cancelled()
        await self.initialize()
        assert self._pool is not None

        async with self._pool.acquire() as conn:
            rows = await conn.fetch(sql, *args)

        cancellation.raise_if_cancelled()
        return list(rows)

    async def _fetchval(
        self, sql: str, args: tuple[Any, ...], cancellation: CancellationToken
    ) -> Any:
        cancellation.raise_if_cancelled()
        await self.initialize()
        assert self._pool is not None

        async with self._pool.acquire() as conn:
            value = await conn.fetchval(sql, *args)

        cancellation.raise_if_cancelled()
        return value

    async def get_all(self, cancellation: CancellationToken) -> list[Passenger]:
        """Return every passenger ordered by passenger_id."""
        rows = await self._fetch(
            f"SELECT {SELECT_COLUMNS} FROM passengers ORDER BY passenger_id",
            (),
            cancellation,
        )
        return [row_to_passenger(tuple(row)) for row in rows]

    async def get_by_id(
        self, passenger_id: int, cancellation: CancellationToken
    ) -> Passenger | None:
        """Look up a passenger by identifier."""
        rows = await self._fetch(
            f"SELECT {SELECT_COLUMNS} FROM passengers WHERE passenger_id = $1",
            (passenger_id,),
            cancellation,
        )
        if not rows:
            return None
        return row_to_passenger(tuple(rows[0]))

    async def get_filtered(
        self, survived: bool | None, cancellation: CancellationToken
    ) -> list[Passenger]:
        """Return passengers matching the survival filter (None = all)."""
        if survived is None:
            return await self.get_all(cancellation)

        rows = await self._fetch(
            f"SELECT {SELECT_COLUMNS} FROM passengers "
            "WHERE survived = $1 ORDER BY passenger_id",
            (survived,),
            cancellation,
        )
        return [row_to_passenger(tuple(row)) for row in rows]

    async def get_total_males(self, cancellation: CancellationToken) -> int:
        """Count male passengers."""
        return await self._count_sex(Sex.MALE, cancellation)

    async def get_total_females(self, cancellation: CancellationToken) -> int:
        """Count female passengers."""
        return await self._count_sex(Sex.FEMALE, cancellation)

    async def _count_sex(self, sex: Sex, cancellation: CancellationToken) -> int:
        count = await self._fetchval(
            "SELECT COUNT(*) FROM passengers WHERE sex = $1",
            (sex.value,),
            cancellation,
        )
        return int(count or 0)

    async def count(self) -> int:
        """Total number of stored passengers."""
        count = await self._fetchval(
            "SELECT COUNT(*) FROM passengers", (), CancellationToken.none()
        )
        return int(count or 0)

    async def add_many(self, passengers: Iterable[Passenger]) -> int:
        """Upsert passengers inside one transaction.

        Returns:
            Number of passengers written.
        """
        await self.initialize()
        assert self._pool is not None

        rows = [passenger_to_row(p) for p in passengers]
        if not rows:
            return 0

        placeholders = ", ".join(f"${i}" for i in range(1, len(COLUMNS) + 1))
        updates = ", ".join(
            f"{column} = EXCLUDED.{column}" for column in COLUMNS[1:]
        )
        async with self._pool.acquire() as conn:
            async with conn.transaction():
                await conn.executemany(
                    f"INSERT INTO passengers ({SELECT_COLUMNS}) "
                    f"VALUES ({placeholders}) "
                    f"ON CONFLICT (passenger_id) DO UPDATE SET {updates}",
                    rows,
                )

        logger.info(f"Stored {len(rows)} passengers in PostgreSQL database {self.database}")
        return len(rows)
