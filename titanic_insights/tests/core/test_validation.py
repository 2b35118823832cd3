"""Unit tests for the concrete query validators."""

import asyncio

import pytest

from titanic_insights.core.cancellation import CancellationToken
from titanic_insights.core.models import ValidationFailure
from titanic_insights.core.queries import GetAllPassengersQuery, GetPassengerByIdQuery
from titanic_insights.core.validation import (
    GetAllPassengersValidator,
    GetPassengerByIdValidator,
)


@pytest.fixture
def token() -> CancellationToken:
    return CancellationToken()


class TestGetAllPassengersValidator:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("survived", [None, True, False])
    async def test_accepts_tri_state_filter(
        self, survived: bool | None, token: CancellationToken
    ) -> None:
        validator = GetAllPassengersValidator()

        failures = await validator.validate(GetAllPassengersQuery(survived), token)

        assert failures == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("survived", ["yes", 1, 0])
    async def test_rejects_non_boolean_filter(
        self, survived: object, token: CancellationToken
    ) -> None:
        """Truthy look-alikes are not accepted as a survival filter."""
        validator = GetAllPassengersValidator()

        failures = await validator.validate(
            GetAllPassengersQuery(survived),  # type: ignore[arg-type]
            token,
        )

        assert failures == [
            ValidationFailure("survived", "Survived must be true, false, or null.")
        ]

    @pytest.mark.asyncio
    async def test_cancelled_token_raises(self, token: CancellationToken) -> None:
        token.cancel()

        with pytest.raises(asyncio.CancelledError):
            await GetAllPassengersValidator().validate(GetAllPassengersQuery(), token)


class TestGetPassengerByIdValidator:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("passenger_id", [1, 42, 891, 10_000])
    async def test_accepts_positive_ids(
        self, passenger_id: int, token: CancellationToken
    ) -> None:
        failures = await GetPassengerByIdValidator().validate(
            GetPassengerByIdQuery(passenger_id), token
        )

        assert failures == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("passenger_id", [0, -1, -999])
    async def test_rejects_non_positive_ids(
        self, passenger_id: int, token: CancellationToken
    ) -> None:
        failures = await GetPassengerByIdValidator().validate(
            GetPassengerByIdQuery(passenger_id), token
        )

        assert failures == [
            ValidationFailure("passenger_id", "Passenger ID must be greater than 0.")
        ]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("passenger_id", ["1", 1.5, None, True])
    async def test_rejects_non_integer_ids(
        self, passenger_id: object, token: CancellationToken
    ) -> None:
        failures = await GetPassengerByIdValidator().validate(
            GetPassengerByIdQuery(passenger_id),  # type: ignore[arg-type]
            token,
        )

        assert failures == [
            ValidationFailure("passenger_id", "Passenger ID must be an integer.")
        ]

    @pytest.mark.asyncio
    async def test_cancelled_token_raises(self, token: CancellationToken) -> None:
        token.cancel("shutdown")

        with pytest.raises(asyncio.CancelledError):
            await GetPassengerByIdValidator().validate(GetPassengerByIdQuery(1), token)
