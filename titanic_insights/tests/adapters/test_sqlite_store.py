"""Integration tests for the SQLite passenger store."""

import asyncio
from pathlib import Path

import pytest

from titanic_insights.adapters.store.sqlite import SQLitePassengerStore
from titanic_insights.core.cancellation import CancellationToken
from titanic_insights.core.models import Passenger, PassengerClass, Sex


@pytest.fixture
def passengers() -> list[Passenger]:
    """A few manifest rows, deliberately out of id order."""
    return [
        Passenger(
            passenger_id=3,
            name="Heikkinen, Miss. Laina",
            sex=Sex.FEMALE,
            passenger_class=PassengerClass.THIRD,
            survived=True,
            age=26.0,
            siblings_spouses=0,
            parents_children=0,
            ticket="STON/O2. 3101282",
            fare=7.925,
            embarked="S",
        ),
        Passenger(
            passenger_id=1,
            name="Braund, Mr. Owen Harris",
            sex=Sex.MALE,
            passenger_class=PassengerClass.THIRD,
            survived=False,
            age=22.0,
            siblings_spouses=1,
            parents_children=0,
            ticket="A/5 21171",
            fare=7.25,
            embarked="S",
        ),
        Passenger(
            passenger_id=2,
            name="Cumings, Mrs. John Bradley (Florence Briggs Thayer)",
            sex=Sex.FEMALE,
            passenger_class=PassengerClass.FIRST,
            survived=True,
            age=38.0,
            siblings_spouses=1,
            parents_children=0,
            ticket="PC 17599",
            fare=71.2833,
            cabin="C85",
            embarked="C",
        ),
        Passenger(
            passenger_id=6,
            name="Moran, Mr. James",
            sex=Sex.MALE,
            passenger_class=PassengerClass.THIRD,
            survived=False,
            ticket="330877",
            fare=8.4583,
            embarked="Q",
        ),
    ]


@pytest.fixture
async def store(tmp_path: Path):
    """Create a SQLite store in a temporary directory."""
    store = SQLitePassengerStore(str(tmp_path / "nested" / "passengers.db"))
    await store.initialize()
    yield store
    await store.close_pool()


@pytest.fixture
async def seeded_store(store: SQLitePassengerStore, passengers: list[Passenger]):
    await store.add_many(passengers)
    return store


@pytest.fixture
def token() -> CancellationToken:
    return CancellationToken()


class TestSchema:
    @pytest.mark.asyncio
    async def test_creates_parent_directory(self, tmp_path: Path) -> None:
        db_path = tmp_path / "a" / "b" / "passengers.db"

        store = SQLitePassengerStore(str(db_path))
        try:
            await store.initialize()
        finally:
            await store.close_pool()

        assert db_path.exists()

    @pytest.mark.asyncio
    async def test_initialize_is_idempotent(self, store: SQLitePassengerStore) -> None:
        await store.initialize()
        await store.initialize()

        assert await store.count() == 0

    @pytest.mark.asyncio
    async def test_concurrent_initialization(self, tmp_path: Path) -> None:
        """Parallel first calls create the schema exactly once without deadlock."""
        store = SQLitePassengerStore(str(tmp_path / "passengers.db"))
        try:
            await asyncio.wait_for(
                asyncio.gather(*(store.initialize() for _ in range(5))), timeout=5
            )
            assert await store.count() == 0
        finally:
            await store.close_pool()


class TestWrites:
    @pytest.mark.asyncio
    async def test_add_many_returns_written_count(
        self, store: SQLitePassengerStore, passengers: list[Passenger]
    ) -> None:
        written = await store.add_many(passengers)

        assert written == 4
        assert await store.count() == 4

    @pytest.mark.asyncio
    async def test_add_many_empty(self, store: SQLitePassengerStore) -> None:
        assert await store.add_many([]) == 0

    @pytest.mark.asyncio
    async def test_add_many_replaces_existing_ids(
        self,
        seeded_store: SQLitePassengerStore,
        token: CancellationToken,
    ) -> None:
        await seeded_store.add_many(
            [Passenger(1, "Renamed", Sex.MALE, PassengerClass.SECOND, True)]
        )

        passenger = await seeded_store.get_by_id(1, token)

        assert await seeded_store.count() == 4
        assert passenger is not None
        assert passenger.name == "Renamed"
        assert passenger.passenger_class == PassengerClass.SECOND


class TestReads:
    @pytest.mark.asyncio
    async def test_get_all_orders_by_id(
        self, seeded_store: SQLitePassengerStore, token: CancellationToken
    ) -> None:
        result = await seeded_store.get_all(token)

        assert [p.passenger_id for p in result] == [1, 2, 3, 6]

    @pytest.mark.asyncio
    async def test_round_trips_every_field(
        self,
        seeded_store: SQLitePassengerStore,
        passengers: list[Passenger],
        token: CancellationToken,
    ) -> None:
        result = await seeded_store.get_by_id(2, token)

        assert result == passengers[2]

    @pytest.mark.asyncio
    async def test_missing_age_stays_none(
        self, seeded_store: SQLitePassengerStore, token: CancellationToken
    ) -> None:
        result = await seeded_store.get_by_id(6, token)

        assert result is not None
        assert result.age is None
        assert result.cabin is None

    @pytest.mark.asyncio
    async def test_get_by_id_missing_returns_none(
        self, seeded_store: SQLitePassengerStore, token: CancellationToken
    ) -> None:
        assert await seeded_store.get_by_id(999, token) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        ("survived", "expected"),
        [(None, [1, 2, 3, 6]), (True, [2, 3]), (False, [1, 6])],
    )
    async def test_get_filtered(
        self,
        seeded_store: SQLitePassengerStore,
        token: CancellationToken,
        survived: bool | None,
        expected: list[int],
    ) -> None:
        result = await seeded_store.get_filtered(survived, token)

        assert [p.passenger_id for p in result] == expected
        if survived is not None:
            assert all(p.survived is survived for p in result)

    @pytest.mark.asyncio
    async def test_totals_by_sex(
        self, seeded_store: SQLitePassengerStore, token: CancellationToken
    ) -> None:
        assert await seeded_store.get_total_males(token) == 2
        assert await seeded_store.get_total_females(token) == 2

    @pytest.mark.asyncio
    async def test_totals_on_empty_store(
        self, store: SQLitePassengerStore, token: CancellationToken
    ) -> None:
        assert await store.get_total_males(token) == 0
        assert await store.get_total_females(token) == 0
        assert await store.get_all(token) == []


class TestCancellation:
    @pytest.mark.asyncio
    async def test_cancelled_token_raises(
        self, seeded_store: SQLitePassengerStore, token: CancellationToken
    ) -> None:
        token.cancel()

        with pytest.raises(asyncio.CancelledError):
            await seeded_store.get_all(token)

        with pytest.raises(asyncio.CancelledError):
            await seeded_store.get_total_males(token)


class TestConnectionPool:
    @pytest.mark.asyncio
    async def test_connections_are_reused(
        self, seeded_store: SQLitePassengerStore, token: CancellationToken
    ) -> None:
        await seeded_store.get_all(token)
        pooled = list(seeded_store._pool)

        await seeded_store.get_all(token)

        assert seeded_store._pool == pooled

    @pytest.mark.asyncio
    async def test_close_pool_empties_pool(
        self, seeded_store: SQLitePassengerStore, token: CancellationToken
    ) -> None:
        await seeded_store.get_all(token)

        await seeded_store.close_pool()

        assert seeded_store._pool == []
