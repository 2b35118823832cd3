"""Column layout shared by the passenger store adapters.

Both SQLite and PostgreSQL keep one row per passenger in a ``passengers``
table with the columns below, in this order.
"""

from collections.abc import Sequence
from typing import Any

from titanic_insights.core.models import Passenger, PassengerClass, Sex

COLUMNS: tuple[str, ...] = (
    "passenger_id",
    "name",
    "sex",
    "age",
    "pclass",
    "survived",
    "sib_sp",
    "parch",
    "ticket",
    "fare",
    "cabin",
    "embarked",
)

SELECT_COLUMNS = ", ".join(COLUMNS)


def passenger_to_row(passenger: Passenger) -> tuple[Any, ...]:
    """Flatten a Passenger into column order for INSERT statements."""
    return (
        passenger.passenger_id,
        passenger.name,
        passenger.sex.value,
        passenger.age,
        int(passenger.passenger_class),
        passenger.survived,
        passenger.siblings_spouses,
        passenger.parents_children,
        passenger.ticket,
        passenger.fare,
        passenger.cabin,
        passenger.embarked,
    )


def row_to_passenger(row: Sequence[Any]) -> Passenger:
    """Build a Passenger from a row selected with SELECT_COLUMNS.

    Raises:
        ValueError: If the row is malformed or holds out-of-range values.
    """
    if row is None or len(row) != len(COLUMNS):
        raise ValueError(
            f"Invalid row length: expected {len(COLUMNS)}, "
            f"got {len(row) if row is not None else 0}"
        )

    (
        passenger_id,
        name,
        sex,
        age,
        pclass,
        survived,
        sib_sp,
        parch,
        ticket,
        fare,
        cabin,
        embarked,
    ) = row

    return Passenger(
        passenger_id=int(passenger_id),
        name=name,
        sex=Sex(sex),
        passenger_class=PassengerClass(int(pclass)),
        survived=bool(survived),
        age=float(age) if age is not None else None,
        siblings_spouses=sib_sp,
        parents_children=parch,
        ticket=ticket,
        fare=float(fare) if fare is not None else None,
        cabin=cabin,
        embarked=embarked,
    )
