"""Domain models for the Titanic Insights query system.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum


class Sex(Enum):
    """Recorded sex of a passenger, stored as text in the manifest."""

    MALE = "male"
    FEMALE = "female"


class PassengerClass(IntEnum):
    """Ticket class (1 = upper, 2 = middle, 3 = lower)."""

    FIRST = 1
    SECOND = 2
    THIRD = 3


class MissingAgePolicy(Enum):
    """Placement of passengers with no recorded age in age-ordered results.

    - FIRST: passengers without an age come before everyone else
    - LAST: passengers without an age come after everyone else
    - EXCLUDE: passengers without an age are dropped from the result

    In every case passengers without an age keep their input order.
    """

    FIRST = "first"
    LAST = "last"
    EXCLUDE = "exclude"


@dataclass(frozen=True)
class Passenger:
    """A single manifest record as held by the passenger store.

    Handlers never mutate these; they project them into DTOs.
    """

    passenger_id: int
    name: str
    sex: Sex
    passenger_class: PassengerClass
    survived: bool
    age: float | None = None
    siblings_spouses: int | None = None  # SibSp
    parents_children: int | None = None  # Parch
    ticket: str | None = None
    fare: float | None = None
    cabin: str | None = None
    embarked: str | None = None  # C, Q or S

    def __post_init__(self) -> None:
        """Validate passenger invariants on creation."""
        if self.passenger_id < 1:
            raise ValueError(
                f"passenger_id must be positive, got {self.passenger_id}"
            )
        if self.age is not None and self.age < 0:
            raise ValueError(f"age must be non-negative, got {self.age}")


@dataclass(frozen=True)
class PassengerDto:
    """Minimal passenger projection used in list-style responses."""

    id: int
    name: str


@dataclass(frozen=True)
class PassengerDetailsDto:
    """Passenger projection returned when a single passenger is requested."""

    id: int
    name: str
    age: float | None
    sex: Sex
    passenger_class: PassengerClass
    survived: bool


@dataclass(frozen=True)
class ClassBreakdown:
    """Passengers partitioned by ticket class.

    Every passenger lands in exactly one bucket and each bucket keeps the
    order in which the passengers were read.
    """

    first_class: tuple[PassengerDto, ...]
    second_class: tuple[PassengerDto, ...]
    third_class: tuple[PassengerDto, ...]

    @property
    def total(self) -> int:
        """Number of passengers across all three classes."""
        return len(self.first_class) + len(self.second_class) + len(self.third_class)


@dataclass(frozen=True)
class SexRates:
    """A pair of percentages (0-100), one per sex."""

    male: float
    female: float


@dataclass(frozen=True)
class SurvivalRates:
    """Survival and mortality rates by sex, relative to each sex's total."""

    survived: SexRates
    perished: SexRates


@dataclass(frozen=True)
class ValidationFailure:
    """A single field-level validation problem reported by a validator."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"
