"""Validators for queries that carry caller-supplied fields.

Queries without fields (age ordering, class breakdown, survival rates)
have nothing to validate and their handlers take no validator.
"""

import logging

from .cancellation import CancellationToken
from .models import ValidationFailure
from .ports import QueryValidatorPort
from .queries import GetAllPassengersQuery, GetPassengerByIdQuery

logger = logging.getLogger(__name__)


class GetAllPassengersValidator(QueryValidatorPort[GetAllPassengersQuery]):
    """Rejects survival filters that are not True, False or None."""

    async def validate(
        self, query: GetAllPassengersQuery, cancellation: CancellationToken
    ) -> list[ValidationFailure]:
        cancellation.raise_if_cancelled()

        failures: list[ValidationFailure] = []
        if query.survived is not None and not isinstance(query.survived, bool):
            failures.append(
                ValidationFailure(
                    field="survived",
                    message="Survived must be true, false, or null.",
                )
            )

        if failures:
            logger.debug(
                f"GetAllPassengersQuery rejected with {len(failures)} failure(s)",
                extra={"survived": query.survived},
            )
        return failures


class GetPassengerByIdValidator(QueryValidatorPort[GetPassengerByIdQuery]):
    """Requires a positive integer passenger identifier."""

    async def validate(
        self, query: GetPassengerByIdQuery, cancellation: CancellationToken
    ) -> list[ValidationFailure]:
        cancellation.raise_if_cancelled()

        passenger_id = query.passenger_id
        # bool is an int subclass; True is not a passenger id
        if not isinstance(passenger_id, int) or isinstance(passenger_id, bool):
            return [
                ValidationFailure(
                    field="passenger_id",
                    message="Passenger ID must be an integer.",
                )
            ]
        if passenger_id <= 0:
            return [
                ValidationFailure(
                    field="passenger_id",
                    message="Passenger ID must be greater than 0.",
                )
            ]
        return []
