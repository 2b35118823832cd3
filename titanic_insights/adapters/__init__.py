"""External adapters for the Titanic Insights query system.

This package contains all external dependencies (SQLite, PostgreSQL,
pandas, the command line) and provides implementations of the core port
interfaces or drivers for the core handlers.

Adapter Organization:

- store/: Passenger repositories (SQLite, PostgreSQL)
- dataset/: Loading the passenger manifest from CSV
- cli/: Command-line interface for running queries
"""
