"""Test suite for the Titanic Insights query system.

Organized into three categories:

1. core/: Unit tests for core query logic
   - Minimal dependencies, fast execution
   - Uses in-memory fakes for ports

2. adapters/: Integration tests for adapter implementations
   - SQLite against a temporary database file
   - PostgreSQL with a mocked asyncpg pool
   - CSV loading and CLI commands

3. fakes/: Port implementations for testing
   - In-memory implementations of PassengerRepositoryPort and QueryValidatorPort
   - Used by core unit tests
"""
