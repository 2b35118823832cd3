"""Query objects: immutable descriptions of one read request each.

Queries carry filter parameters only. They are constructed by a driver
(CLI, tests), handed to exactly one handler and then discarded.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Query:
    """Base class for all queries."""


@dataclass(frozen=True)
class GetAllPassengersQuery(Query):
    """List passengers, optionally only survivors or only casualties.

    Attributes:
        survived: True for survivors, False for casualties, None for everyone.
    """

    survived: bool | None = None


@dataclass(frozen=True)
class GetPassengerByIdQuery(Query):
    """Fetch a single passenger by manifest identifier."""

    passenger_id: int


@dataclass(frozen=True)
class GetPassengersByAgeQuery(Query):
    """List all passengers in ascending order of age."""


@dataclass(frozen=True)
class GetByClassQuery(Query):
    """Group all passengers by ticket class."""


@dataclass(frozen=True)
class GetSurvivalRatesQuery(Query):
    """Compute survival and mortality percentages by sex."""
