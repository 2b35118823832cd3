"""Load the Titanic manifest from the Kaggle ``train.csv`` layout.

Reads the file with pandas and maps each row to a Passenger. Empty cells
(NaN) become None.
"""

import logging
from pathlib import Path
from typing import Any

import pandas as pd

from titanic_insights.core.models import Passenger, PassengerClass, Sex

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("PassengerId", "Survived", "Pclass", "Name", "Sex")
OPTIONAL_COLUMNS = ("Age", "SibSp", "Parch", "Ticket", "Fare", "Cabin", "Embarked")


def load_dataframe(csv_path: str | Path) -> pd.DataFrame:
    """Read the manifest CSV.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If any required column is missing.
    """
    path = Path(csv_path)
    if not path.exists():
        raise FileNotFoundError(f"Passenger manifest not found: {path}")

    df = pd.read_csv(path)
    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(
            f"Passenger manifest {path} is missing columns: {', '.join(missing)}"
        )
    return df


def _optional(row: pd.Series, column: str) -> Any:
    if column not in row.index:
        return None
    value = row[column]
    return value if pd.notna(value) else None


def _optional_int(row: pd.Series, column: str) -> int | None:
    value = _optional(row, column)
    return int(value) if value is not None else None


def _optional_float(row: pd.Series, column: str) -> float | None:
    value = _optional(row, column)
    return float(value) if value is not None else None


def _optional_str(row: pd.Series, column: str) -> str | None:
    value = _optional(row, column)
    return str(value) if value is not None else None


def row_to_passenger(row: pd.Series) -> Passenger:
    """Map one manifest row to a Passenger.

    Raises:
        ValueError: If a required cell is empty or holds an unknown value.
    """
    for column in REQUIRED_COLUMNS:
        if pd.isna(row[column]):
            raise ValueError(f"Required column {column} is empty")

    return Passenger(
        passenger_id=int(row["PassengerId"]),
        name=str(row["Name"]),
        sex=Sex(str(row["Sex"]).strip().lower()),
        passenger_class=PassengerClass(int(row["Pclass"])),
        survived=bool(int(row["Survived"])),
        age=_optional_float(row, "Age"),
        siblings_spouses=_optional_int(row, "SibSp"),
        parents_children=_optional_int(row, "Parch"),
        ticket=_optional_str(row, "Ticket"),
        fare=_optional_float(row, "Fare"),
        cabin=_optional_str(row, "Cabin"),
        embarked=_optional_str(row, "Embarked"),
    )


def load_passengers(csv_path: str | Path) -> list[Passenger]:
    """Read every passenger from a manifest CSV.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If a column is missing or a row cannot be mapped. The
            message names the offending PassengerId.
    """
    df = load_dataframe(csv_path)

    passengers: list[Passenger] = []
    for index, row in df.iterrows():
        try:
            passengers.append(row_to_passenger(row))
        except (ValueError, TypeError) as e:
            raise ValueError(
                f"Invalid manifest row {index} "
                f"(PassengerId={row.get('PassengerId')}): {e}"
            ) from e

    logger.info(
        f"Loaded {len(passengers)} passengers from {csv_path}",
        extra={"columns": list(df.columns)},
    )
    return passengers
