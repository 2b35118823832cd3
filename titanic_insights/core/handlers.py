"""Query handlers: one QueryHandlerPort implementation per use case.

Each handler composes calls to the passenger repository (and to a
validator where the query carries fields), shapes the records with the
functions in reporting.py and returns the result. Handlers keep no state
between invocations and never suppress downstream errors.
"""

import asyncio
import logging

from .cancellation import CancellationToken
from .errors import PassengerNotFoundError, QueryValidationError
from .models import (
    ClassBreakdown,
    MissingAgePolicy,
    Passenger,
    PassengerDetailsDto,
    SurvivalRates,
)
from .ports import PassengerRepositoryPort, QueryHandlerPort, QueryValidatorPort
from .queries import (
    GetAllPassengersQuery,
    GetByClassQuery,
    GetPassengerByIdQuery,
    GetPassengersByAgeQuery,
    GetSurvivalRatesQuery,
)
from .reporting import order_by_age, partition_by_class, survival_rates, to_details_dto

logger = logging.getLogger(__name__)


def _ensure_token(cancellation: CancellationToken | None) -> CancellationToken:
    if cancellation is None:
        return CancellationToken.none()
    return cancellation


class GetAllPassengersHandler(
    QueryHandlerPort[GetAllPassengersQuery, list[Passenger]]
):
    """Lists passengers, optionally filtered by survival."""

    def __init__(
        self,
        repository: PassengerRepositoryPort,
        validator: QueryValidatorPort[GetAllPassengersQuery],
    ):
        """Initialize the handler.

        Args:
            repository: PassengerRepositoryPort implementation.
            validator: Validator run before the repository is queried.
        """
        self.repository = repository
        self.validator = validator

    async def handle(
        self,
        query: GetAllPassengersQuery,
        cancellation: CancellationToken | None = None,
    ) -> list[Passenger]:
        """Return passengers matching the query's survival filter.

        Raises:
            QueryValidationError: If the validator reports any failure.
                The repository is not called in that case.
        """
        cancellation = _ensure_token(cancellation)

        failures = await self.validator.validate(query, cancellation)
        if failures:
            logger.warning(
                f"Rejected passenger list query: {len(failures)} validation failure(s)",
                extra={"failures": [str(f) for f in failures]},
            )
            raise QueryValidationError(failures)

        cancellation.raise_if_cancelled()
        passengers = await self.repository.get_filtered(query.survived, cancellation)

        logger.debug(
            "Listed passengers"
            + (f" with survived={query.survived}" if query.survived is not None else ""),
            extra={"count": len(passengers)},
        )
        return list(passengers)


class GetPassengerByIdHandler(
    QueryHandlerPort[GetPassengerByIdQuery, PassengerDetailsDto]
):
    """Fetches one passenger and projects it to a details DTO."""

    def __init__(
        self,
        repository: PassengerRepositoryPort,
        validator: QueryValidatorPort[GetPassengerByIdQuery],
    ):
        self.repository = repository
        self.validator = validator

    async def handle(
        self,
        query: GetPassengerByIdQuery,
        cancellation: CancellationToken | None = None,
    ) -> PassengerDetailsDto:
        """Return the requested passenger.

        Raises:
            QueryValidationError: If the identifier is rejected.
            PassengerNotFoundError: If no passenger has that identifier.
        """
        cancellation = _ensure_token(cancellation)

        failures = await self.validator.validate(query, cancellation)
        if failures:
            logger.warning(
                f"Rejected passenger lookup for ID {query.passenger_id!r}",
                extra={"failures": [str(f) for f in failures]},
            )
            raise QueryValidationError(failures)

        cancellation.raise_if_cancelled()
        passenger = await self.repository.get_by_id(query.passenger_id, cancellation)
        if passenger is None:
            logger.info(
                f"Passenger {query.passenger_id} not found",
                extra={"passenger_id": query.passenger_id},
            )
            raise PassengerNotFoundError(query.passenger_id)

        return to_details_dto(passenger)


class GetPassengersByAgeHandler(
    QueryHandlerPort[GetPassengersByAgeQuery, list[Passenger]]
):
    """Lists all passengers in ascending order of age."""

    def __init__(
        self,
        repository: PassengerRepositoryPort,
        missing_age_policy: MissingAgePolicy = MissingAgePolicy.LAST,
    ):
        """Initialize the handler.

        Args:
            repository: PassengerRepositoryPort implementation.
            missing_age_policy: Where passengers without a recorded age go.
                Defaults to after everyone with a known age.
        """
        self.repository = repository
        self.missing_age_policy = missing_age_policy

    async def handle(
        self,
        query: GetPassengersByAgeQuery,
        cancellation: CancellationToken | None = None,
    ) -> list[Passenger]:
        cancellation = _ensure_token(cancellation)
        cancellation.raise_if_cancelled()

        passengers = await self.repository.get_all(cancellation)
        ordered = order_by_age(passengers, self.missing_age_policy)

        logger.debug(
            f"Ordered {len(ordered)} passengers by age",
            extra={
                "policy": self.missing_age_policy.value,
                "dropped": len(passengers) - len(ordered),
            },
        )
        return ordered


class GetByClassHandler(QueryHandlerPort[GetByClassQuery, ClassBreakdown]):
    """Groups all passengers by ticket class."""

    def __init__(self, repository: PassengerRepositoryPort):
        self.repository = repository

    async def handle(
        self,
        query: GetByClassQuery,
        cancellation: CancellationToken | None = None,
    ) -> ClassBreakdown:
        cancellation = _ensure_token(cancellation)
        cancellation.raise_if_cancelled()

        passengers = await self.repository.get_all(cancellation)
        breakdown = partition_by_class(passengers)

        logger.debug(
            "Built class breakdown",
            extra={
                "first_class": len(breakdown.first_class),
                "second_class": len(breakdown.second_class),
                "third_class": len(breakdown.third_class),
            },
        )
        return breakdown


class GetSurvivalRatesHandler(
    QueryHandlerPort[GetSurvivalRatesQuery, SurvivalRates]
):
    """Computes survival and mortality percentages by sex.

    The male total, female total and passenger list are independent, so
    they are fetched concurrently and combined once all three complete.
    """

    def __init__(self, repository: PassengerRepositoryPort):
        self.repository = repository

    async def handle(
        self,
        query: GetSurvivalRatesQuery,
        cancellation: CancellationToken | None = None,
    ) -> SurvivalRates:
        """Return survived/perished rates for males and females.

        Raises:
            Exception: The first repository failure, unchanged. The other
                in-flight fetches are cancelled and awaited before it
                propagates.
        """
        cancellation = _ensure_token(cancellation)
        cancellation.raise_if_cancelled()

        tasks = [
            asyncio.create_task(self.repository.get_total_males(cancellation)),
            asyncio.create_task(self.repository.get_total_females(cancellation)),
            asyncio.create_task(self.repository.get_all(cancellation)),
        ]
        try:
            total_males, total_females, passengers = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        rates = survival_rates(passengers, total_males, total_females)

        logger.debug(
            "Computed survival rates",
            extra={
                "total_males": total_males,
                "total_females": total_females,
                "passengers": len(passengers),
            },
        )
        return rates
