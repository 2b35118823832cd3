"""CLI command implementations for querying the passenger manifest.

This adapter maps CLI commands (list, get, by-age, by-class,
survival-rates) to queries executed through the QueryDispatcher. It
handles CLI-specific formatting and error reporting.
"""

import logging
from collections.abc import Callable
from dataclasses import asdict, is_dataclass
from enum import Enum
from typing import Any

from titanic_insights.core.cancellation import CancellationToken
from titanic_insights.core.dispatcher import QueryDispatcher
from titanic_insights.core.errors import PassengerNotFoundError, QueryValidationError
from titanic_insights.core.models import (
    ClassBreakdown,
    Passenger,
    PassengerDetailsDto,
    SurvivalRates,
)
from titanic_insights.core.queries import (
    GetAllPassengersQuery,
    GetByClassQuery,
    GetPassengerByIdQuery,
    GetPassengersByAgeQuery,
    GetSurvivalRatesQuery,
)

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("json", "text")


def _primitive_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, tuple):
        return list(value)
    return value


def _primitive_factory(items: list[tuple[str, Any]]) -> dict[str, Any]:
    return {key: _primitive_value(value) for key, value in items}


def to_primitive(value: Any) -> Any:
    """Convert result dataclasses (and lists of them) into JSON-ready data."""
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value, dict_factory=_primitive_factory)
    if isinstance(value, (list, tuple)):
        return [to_primitive(item) for item in value]
    if isinstance(value, Enum):
        return value.value
    return value


class CLICommandHandler:
    """Handles CLI commands by dispatching queries.

    Validation and not-found errors become ``{"status": "error"}``
    results. Anything else (storage failures, cancellation) propagates.
    """

    def __init__(self, dispatcher: QueryDispatcher):
        """Initialize the CLI command handler.

        Args:
            dispatcher: QueryDispatcher with every query type registered.
        """
        self.dispatcher = dispatcher

    async def _run(
        self,
        operation: str,
        query: Any,
        output_format: str,
        formatter: Callable[[Any], str],
        cancellation: CancellationToken | None,
    ) -> dict[str, Any]:
        if output_format not in OUTPUT_FORMATS:
            return {
                "status": "error",
                "operation": operation,
                "message": f"Unsupported format: {output_format}",
            }

        try:
            result = await self.dispatcher.dispatch(query, cancellation)
        except QueryValidationError as e:
            logger.error(f"Invalid {operation} request: {e}")
            return {
                "status": "error",
                "operation": operation,
                "message": str(e),
                "failures": [
                    {"field": f.field, "message": f.message} for f in e.failures
                ],
            }
        except PassengerNotFoundError as e:
            logger.error(f"{operation} failed: {e}")
            return {
                "status": "error",
                "operation": operation,
                "passenger_id": e.passenger_id,
                "message": str(e),
            }

        data = formatter(result) if output_format == "text" else to_primitive(result)
        return {"status": "success", "operation": operation, "data": data}

    async def list_passengers(
        self,
        survived: bool | None = None,
        output_format: str = "json",
        cancellation: CancellationToken | None = None,
    ) -> dict[str, Any]:
        """List passengers, optionally only survivors or casualties."""
        return await self._run(
            "list",
            GetAllPassengersQuery(survived=survived),
            output_format,
            self._format_passengers_as_text,
            cancellation,
        )

    async def get_passenger(
        self,
        passenger_id: int,
        output_format: str = "json",
        cancellation: CancellationToken | None = None,
    ) -> dict[str, Any]:
        """Fetch one passenger by identifier."""
        return await self._run(
            "get",
            GetPassengerByIdQuery(passenger_id=passenger_id),
            output_format,
            self._format_details_as_text,
            cancellation,
        )

    async def passengers_by_age(
        self,
        output_format: str = "json",
        cancellation: CancellationToken | None = None,
    ) -> dict[str, Any]:
        """List passengers in ascending order of age."""
        return await self._run(
            "by-age",
            GetPassengersByAgeQuery(),
            output_format,
            self._format_passengers_as_text,
            cancellation,
        )

    async def class_breakdown(
        self,
        output_format: str = "json",
        cancellation: CancellationToken | None = None,
    ) -> dict[str, Any]:
        """Group passengers by ticket class."""
        return await self._run(
            "by-class",
            GetByClassQuery(),
            output_format,
            self._format_breakdown_as_text,
            cancellation,
        )

    async def survival_rates(
        self,
        output_format: str = "json",
        cancellation: CancellationToken | None = None,
    ) -> dict[str, Any]:
        """Survival and mortality percentages by sex."""
        return await self._run(
            "survival-rates",
            GetSurvivalRatesQuery(),
            output_format,
            self._format_rates_as_text,
            cancellation,
        )

    @staticmethod
    def _format_passengers_as_text(passengers: list[Passenger]) -> str:
        if not passengers:
            return "No passengers found."

        lines = []
        for p in passengers:
            age = f"{p.age:g}" if p.age is not None else "?"
            status = "survived" if p.survived else "perished"
            lines.append(
                f"{p.passenger_id:>4}  {p.name}  "
                f"(age {age}, {p.sex.value}, class {int(p.passenger_class)}, {status})"
            )
        lines.append(f"{len(passengers)} passenger(s)")
        return "\n".join(lines)

    @staticmethod
    def _format_details_as_text(details: PassengerDetailsDto) -> str:
        lines = [
            f"Passenger ID: {details.id}",
            f"Name: {details.name}",
            f"Age: {details.age if details.age is not None else 'unknown'}",
            f"Sex: {details.sex.value}",
            f"Class: {int(details.passenger_class)}",
            f"Survived: {'yes' if details.survived else 'no'}",
        ]
        return "\n".join(lines)

    @staticmethod
    def _format_breakdown_as_text(breakdown: ClassBreakdown) -> str:
        lines = []
        for label, bucket in (
            ("First class", breakdown.first_class),
            ("Second class", breakdown.second_class),
            ("Third class", breakdown.third_class),
        ):
            lines.append(f"{label} ({len(bucket)}):")
            for dto in bucket:
                lines.append(f"  - {dto.id}: {dto.name}")
            lines.append("")
        return "\n".join(lines)

    @staticmethod
    def _format_rates_as_text(rates: SurvivalRates) -> str:
        return "\n".join(
            [
                "Survived:",
                f"  Male:   {rates.survived.male:.2f}%",
                f"  Female: {rates.survived.female:.2f}%",
                "Perished:",
                f"  Male:   {rates.perished.male:.2f}%",
                f"  Female: {rates.perished.female:.2f}%",
            ]
        )


async def run_command(
    dispatcher: QueryDispatcher,
    command: str,
    args: dict[str, Any],
    cancellation: CancellationToken | None = None,
) -> dict[str, Any]:
    """Run a CLI command.

    Entry point for executing CLI commands. Maps command names to handler methods.

    Args:
        dispatcher: QueryDispatcher with every query type registered.
        command: Command name ('list', 'get', 'by-age', 'by-class',
            'survival-rates').
        args: Dictionary of command arguments.
        cancellation: Token for the request.

    Returns:
        Dictionary with command result.

    Raises:
        ValueError: If command is not recognized or a required argument
            is missing.
    """
    handler = CLICommandHandler(dispatcher)
    output_format = args.get("format", "json")

    if command == "list":
        return await handler.list_passengers(
            args.get("survived"), output_format, cancellation
        )

    elif command == "get":
        if "passenger_id" not in args:
            raise ValueError("Missing required parameter: passenger_id")
        return await handler.get_passenger(
            args["passenger_id"], output_format, cancellation
        )

    elif command == "by-age":
        return await handler.passengers_by_age(output_format, cancellation)

    elif command == "by-class":
        return await handler.class_breakdown(output_format, cancellation)

    elif command == "survival-rates":
        return await handler.survival_rates(output_format, cancellation)

    else:
        raise ValueError(f"Unknown command: {command}. Use 'help' for available commands.")
