"""Domain errors raised by query handlers.

Storage failures are not wrapped here: whatever the store adapter raises
reaches the caller unchanged.
"""

from collections.abc import Iterable

from .models import ValidationFailure


class PassengerQueryError(Exception):
    """Base class for errors a query handler raises on its own account."""


class QueryValidationError(PassengerQueryError):
    """A query was rejected by its validator before touching the store."""

    def __init__(self, failures: Iterable[ValidationFailure]):
        self.failures: tuple[ValidationFailure, ...] = tuple(failures)
        if not self.failures:
            raise ValueError("QueryValidationError requires at least one failure")
        details = "; ".join(str(failure) for failure in self.failures)
        super().__init__(f"Validation failed: {details}")


class PassengerNotFoundError(PassengerQueryError, LookupError):
    """No passenger exists with the requested identifier."""

    def __init__(self, passenger_id: int):
        self.passenger_id = passenger_id
        super().__init__(f"Passenger with ID {passenger_id} was not found.")
