"""Tests for loading the passenger manifest from CSV."""

from pathlib import Path

import pandas as pd
import pytest

from titanic_insights.adapters.dataset.csv_loader import (
    load_dataframe,
    load_passengers,
    row_to_passenger,
)
from titanic_insights.core.models import PassengerClass, Sex

MANIFEST = """\
PassengerId,Survived,Pclass,Name,Sex,Age,SibSp,Parch,Ticket,Fare,Cabin,Embarked
1,0,3,"Braund, Mr. Owen Harris",male,22,1,0,A/5 21171,7.25,,S
2,1,1,"Cumings, Mrs. John Bradley (Florence Briggs Thayer)",female,38,1,0,PC 17599,71.2833,C85,C
6,0,3,"Moran, Mr. James",male,,0,0,330877,8.4583,,Q
62,1,1,"Icard, Miss. Amelie",female,38,0,0,113572,80,B28,
"""


@pytest.fixture
def manifest_path(tmp_path: Path) -> Path:
    path = tmp_path / "train.csv"
    path.write_text(MANIFEST, encoding="utf-8")
    return path


class TestLoadPassengers:
    def test_loads_every_row_in_file_order(self, manifest_path: Path) -> None:
        passengers = load_passengers(manifest_path)

        assert [p.passenger_id for p in passengers] == [1, 2, 6, 62]

    def test_maps_required_columns(self, manifest_path: Path) -> None:
        braund = load_passengers(manifest_path)[0]

        assert braund.name == "Braund, Mr. Owen Harris"
        assert braund.sex == Sex.MALE
        assert braund.passenger_class == PassengerClass.THIRD
        assert braund.survived is False

    def test_maps_optional_columns(self, manifest_path: Path) -> None:
        cumings = load_passengers(manifest_path)[1]

        assert cumings.age == 38.0
        assert cumings.siblings_spouses == 1
        assert cumings.parents_children == 0
        assert cumings.ticket == "PC 17599"
        assert cumings.fare == pytest.approx(71.2833)
        assert cumings.cabin == "C85"
        assert cumings.embarked == "C"

    def test_empty_cells_become_none(self, manifest_path: Path) -> None:
        passengers = load_passengers(manifest_path)

        assert passengers[2].age is None
        assert passengers[0].cabin is None
        assert passengers[3].embarked is None

    def test_accepts_string_path(self, manifest_path: Path) -> None:
        assert len(load_passengers(str(manifest_path))) == 4

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Passenger manifest not found"):
            load_passengers(tmp_path / "absent.csv")

    def test_missing_required_column_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.csv"
        path.write_text("PassengerId,Name,Sex\n1,A,male\n", encoding="utf-8")

        with pytest.raises(ValueError, match="missing columns: Survived, Pclass"):
            load_passengers(path)

    def test_invalid_row_names_passenger(self, tmp_path: Path) -> None:
        path = tmp_path / "bad_sex.csv"
        path.write_text(
            "PassengerId,Survived,Pclass,Name,Sex\n"
            "1,0,3,A,male\n"
            "7,1,2,B,unknown\n",
            encoding="utf-8",
        )

        with pytest.raises(ValueError, match=r"row 1 \(PassengerId=7\)"):
            load_passengers(path)

    def test_optional_columns_may_be_absent(self, tmp_path: Path) -> None:
        path = tmp_path / "minimal.csv"
        path.write_text(
            "PassengerId,Survived,Pclass,Name,Sex\n4,1,1,Futrelle,FEMALE\n",
            encoding="utf-8",
        )

        passenger = load_passengers(path)[0]

        assert passenger.sex == Sex.FEMALE
        assert passenger.age is None
        assert passenger.fare is None


class TestRowToPassenger:
    def test_empty_required_cell_raises(self) -> None:
        row = pd.Series(
            {"PassengerId": 1, "Survived": None, "Pclass": 3, "Name": "A", "Sex": "male"}
        )

        with pytest.raises(ValueError, match="Required column Survived is empty"):
            row_to_passenger(row)


def test_load_dataframe_returns_all_columns(manifest_path: Path) -> None:
    df = load_dataframe(manifest_path)

    assert len(df) == 4
    assert "Embarked" in df.columns
