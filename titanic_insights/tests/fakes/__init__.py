"""Fake implementations of core ports for testing.

These in-memory implementations allow core query logic to be tested
without external dependencies:

- FakePassengerRepository: In-memory passengers with call tracking
- FakeQueryValidator: Canned validation failures with call tracking
"""

from .repository import FakePassengerRepository
from .validator import FakeQueryValidator

__all__ = [
    "FakePassengerRepository",
    "FakeQueryValidator",
]
