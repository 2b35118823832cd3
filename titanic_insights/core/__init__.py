"""Core query logic for the Titanic Insights system.

This package contains zero external dependencies and represents
the pure business logic of the application. All storage and driver
integrations are handled by the adapters package.
"""

from .cancellation import CancellationToken
from .errors import PassengerNotFoundError, PassengerQueryError, QueryValidationError
from .models import (
    ClassBreakdown,
    MissingAgePolicy,
    Passenger,
    PassengerClass,
    PassengerDetailsDto,
    PassengerDto,
    Sex,
    SexRates,
    SurvivalRates,
    ValidationFailure,
)
from .queries import (
    GetAllPassengersQuery,
    GetByClassQuery,
    GetPassengerByIdQuery,
    GetPassengersByAgeQuery,
    GetSurvivalRatesQuery,
    Query,
)

__all__ = [
    "CancellationToken",
    "ClassBreakdown",
    "GetAllPassengersQuery",
    "GetByClassQuery",
    "GetPassengerByIdQuery",
    "GetPassengersByAgeQuery",
    "GetSurvivalRatesQuery",
    "MissingAgePolicy",
    "Passenger",
    "PassengerClass",
    "PassengerDetailsDto",
    "PassengerDto",
    "PassengerNotFoundError",
    "PassengerQueryError",
    "Query",
    "QueryValidationError",
    "Sex",
    "SexRates",
    "SurvivalRates",
    "ValidationFailure",
]
