"""Port interfaces for the Titanic Insights query system.

These abstract base classes define the boundaries between core
query logic and external adapters. Implementations live in the
adapters/ package (and in-memory fakes in tests/fakes/).

Port Interface Categories:

1. **Driven Ports** (core calls out to adapters)
   - PassengerRepositoryPort: Read passenger records and totals
   - QueryValidatorPort: Check a query before it is executed

2. **Driving Ports** (drivers call into core)
   - QueryHandlerPort: Execute one query type end to end
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from .cancellation import CancellationToken
from .models import Passenger, ValidationFailure
from .queries import Query

TQuery = TypeVar("TQuery", bound=Query)
TResult = TypeVar("TResult")


# ============================================================================
# DRIVEN PORTS (Core calls out to adapters)
# ============================================================================


class PassengerRepositoryPort(ABC):
    """Port for reading the passenger manifest from persistent storage.

    Adapters implementing this port return fully-built Passenger objects.
    Every method receives the request's CancellationToken and must raise
    asyncio.CancelledError without side effects once it is cancelled.

    Errors raised by the underlying store are propagated as-is; the core
    does not retry or translate them.
    """

    @abstractmethod
    async def get_all(self, cancellation: CancellationToken) -> list[Passenger]:
        """Retrieve every passenger.

        Args:
            cancellation: Token for the current request.

        Returns:
            All passengers ordered by passenger_id. Empty list if the
            store holds none.

        Raises:
            asyncio.CancelledError: If the token was cancelled.
            Exception: If the store is unavailable.
        """

    @abstractmethod
    async def get_by_id(
        self, passenger_id: int, cancellation: CancellationToken
    ) -> Passenger | None:
        """Retrieve a passenger by identifier.

        Args:
            passenger_id: Manifest identifier.
            cancellation: Token for the current request.

        Returns:
            The passenger, or None if no such passenger exists.

        Raises:
            asyncio.CancelledError: If the token was cancelled.
            Exception: If the store is unavailable.
        """

    @abstractmethod
    async def get_filtered(
        self, survived: bool | None, cancellation: CancellationToken
    ) -> list[Passenger]:
        """Retrieve passengers matching a survival filter.

        Args:
            survived: True for survivors, False for casualties, None for
                no filtering.
            cancellation: Token for the current request.

        Returns:
            Matching passengers ordered by passenger_id. Empty list if none
            match.

        Raises:
            asyncio.CancelledError: If the token was cancelled.
            Exception: If the store is unavailable.
        """

    @abstractmethod
    async def get_total_males(self, cancellation: CancellationToken) -> int:
        """Count male passengers.

        Raises:
            asyncio.CancelledError: If the token was cancelled.
            Exception: If the store is unavailable.
        """

    @abstractmethod
    async def get_total_females(self, cancellation: CancellationToken) -> int:
        """Count female passengers.

        Raises:
            asyncio.CancelledError: If the token was cancelled.
            Exception: If the store is unavailable.
        """


class QueryValidatorPort(ABC, Generic[TQuery]):
    """Port for validating a query before its handler touches the store."""

    @abstractmethod
    async def validate(
        self, query: TQuery, cancellation: CancellationToken
    ) -> list[ValidationFailure]:
        """Check a query.

        Args:
            query: The query to check.
            cancellation: Token for the current request.

        Returns:
            Every failure found. An empty list means the query is valid.

        Raises:
            asyncio.CancelledError: If the token was cancelled.
        """


# ============================================================================
# DRIVING PORTS (Drivers call into core)
# ============================================================================


class QueryHandlerPort(ABC, Generic[TQuery, TResult]):
    """Port for executing a single query type.

    Each query type has exactly one handler. Handlers have no side effects
    and keep no state between invocations.
    """

    @abstractmethod
    async def handle(
        self, query: TQuery, cancellation: CancellationToken | None = None
    ) -> TResult:
        """Execute the query and return its result.

        Args:
            query: The query to execute.
            cancellation: Token for the current request. A fresh,
                never-cancelled token is used when omitted.

        Returns:
            The handler-specific result.

        Raises:
            QueryValidationError: If the query fails validation.
            PassengerNotFoundError: If a required passenger is absent.
            asyncio.CancelledError: If the token was cancelled.
            Exception: Any storage error, unchanged.
        """
