"""Command-line interface adapters.

Provides CLI commands for querying the manifest:
- list: Passengers, optionally filtered by survival
- get: One passenger by identifier
- by-age: Passengers ordered by age
- by-class: Passengers grouped by ticket class
- survival-rates: Survival and mortality percentages by sex
"""
