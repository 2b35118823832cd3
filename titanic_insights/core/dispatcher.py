"""Query dispatcher: routes each query to the handler registered for its type.

Drivers (CLI, tests) depend on the dispatcher rather than on individual
handlers, so the composition root is the only place handlers are chosen.
"""

import logging
from typing import Any

from .cancellation import CancellationToken
from .ports import QueryHandlerPort
from .queries import Query

logger = logging.getLogger(__name__)


class QueryDispatcher:
    """Maps query types to their single handler."""

    def __init__(self) -> None:
        self._handlers: dict[type[Query], QueryHandlerPort[Any, Any]] = {}

    def register(
        self, query_type: type[Query], handler: QueryHandlerPort[Any, Any]
    ) -> None:
        """Register the handler for a query type.

        Raises:
            ValueError: If a handler is already registered for query_type.
        """
        if query_type in self._handlers:
            raise ValueError(
                f"Handler already registered for {query_type.__name__}"
            )
        self._handlers[query_type] = handler
        logger.debug(
            f"Registered {type(handler).__name__} for {query_type.__name__}"
        )

    def handler_for(self, query_type: type[Query]) -> QueryHandlerPort[Any, Any]:
        """Return the handler registered for a query type.

        Raises:
            ValueError: If nothing is registered for query_type.
        """
        handler = self._handlers.get(query_type)
        if handler is None:
            raise ValueError(f"No handler registered for {query_type.__name__}")
        return handler

    @property
    def registered_queries(self) -> tuple[type[Query], ...]:
        return tuple(self._handlers)

    async def dispatch(
        self, query: Query, cancellation: CancellationToken | None = None
    ) -> Any:
        """Execute a query with its registered handler.

        Errors raised by the handler propagate unchanged.

        Raises:
            ValueError: If no handler is registered for the query's type.
        """
        handler = self.handler_for(type(query))
        return await handler.handle(query, cancellation)
