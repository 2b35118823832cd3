"""Response shaping: pure functions from passenger records to responses.

Nothing here performs I/O. Handlers fetch records through the ports and
pass them through these functions.
"""

from collections.abc import Iterable

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
)


def to_dto(passenger: Passenger) -> PassengerDto:
    """Project a passenger to its list-style DTO."""
    return PassengerDto(id=passenger.passenger_id, name=passenger.name)


def to_details_dto(passenger: Passenger) -> PassengerDetailsDto:
    """Project a passenger to the single-passenger DTO."""
    return PassengerDetailsDto(
        id=passenger.passenger_id,
        name=passenger.name,
        age=passenger.age,
        sex=passenger.sex,
        passenger_class=passenger.passenger_class,
        survived=passenger.survived,
    )


def order_by_age(
    passengers: Iterable[Passenger],
    missing_age_policy: MissingAgePolicy = MissingAgePolicy.LAST,
) -> list[Passenger]:
    """Sort passengers by ascending age.

    The sort is stable: passengers of equal age keep their input order, as
    do passengers without an age, wherever the policy places them.
    """
    with_age: list[Passenger] = []
    without_age: list[Passenger] = []
    for passenger in passengers:
        if passenger.age is None:
            without_age.append(passenger)
        else:
            with_age.append(passenger)

    ordered = sorted(with_age, key=lambda p: p.age)

    if missing_age_policy == MissingAgePolicy.FIRST:
        return without_age + ordered
    if missing_age_policy == MissingAgePolicy.EXCLUDE:
        return ordered
    return ordered + without_age


def partition_by_class(passengers: Iterable[Passenger]) -> ClassBreakdown:
    """Split passengers into first/second/third class buckets of DTOs."""
    buckets: dict[PassengerClass, list[PassengerDto]] = {
        passenger_class: [] for passenger_class in PassengerClass
    }
    for passenger in passengers:
        buckets[passenger.passenger_class].append(to_dto(passenger))

    return ClassBreakdown(
        first_class=tuple(buckets[PassengerClass.FIRST]),
        second_class=tuple(buckets[PassengerClass.SECOND]),
        third_class=tuple(buckets[PassengerClass.THIRD]),
    )


def percentage(count: int, total: int) -> float:
    """Return count as a percentage of total, or 0.0 when total is zero."""
    if total == 0:
        return 0.0
    return count / total * 100


def survival_rates(
    passengers: Iterable[Passenger], total_males: int, total_females: int
) -> SurvivalRates:
    """Compute survived/perished percentages for each sex.

    Counts come from ``passengers``; denominators are the totals reported
    by the store, which are not required to match len(passengers).
    """
    survived = {Sex.MALE: 0, Sex.FEMALE: 0}
    perished = {Sex.MALE: 0, Sex.FEMALE: 0}
    for passenger in passengers:
        outcome = survived if passenger.survived else perished
        outcome[passenger.sex] += 1

    return SurvivalRates(
        survived=SexRates(
            male=percentage(survived[Sex.MALE], total_males),
            female=percentage(survived[Sex.FEMALE], total_females),
        ),
        perished=SexRates(
            male=percentage(perished[Sex.MALE], total_males),
            female=percentage(perished[Sex.FEMALE], total_females),
        ),
    )
