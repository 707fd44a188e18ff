"""
Airline records: customer, airplane, flight and reservation management.

This package provides the data layer of a small airline back-office tool:
- Pydantic value objects for the four record types
- An async SQLite store with version-stamped schema creation
- Generic data-access objects and validated repositories
- A Typer command line front end
"""

__version__ = "0.1.0"
