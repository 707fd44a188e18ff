#!/usr/bin/env python3
"""
Airline records command line interface.

Manage customers, airplanes, flights and reservations stored in the local
SQLite database. Uses Typer for the CLI and Rich for terminal output.

Usage:
    airline init                                      # Create the database
    airline customers list                            # Show all customers
    airline customers add --set first_name=Jane ...   # Missing fields are prompted
    airline airplanes update 3 --set passengers=180   # Replace fields of a record
    airline flights delete 7
    airline reservations for-customer 1
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Type, TypeVar

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from .database.config import Store
from .exceptions import NotFoundError, RepositoryError
from .models import EntityModel
from .repositories import (
    AirplaneRepository,
    CustomerRepository,
    FlightRepository,
    Repository,
    ReservationRepository,
)
from .utils.config import AppConfig, load_config
from .utils.logging_config import setup_logging

T = TypeVar("T")

# Initialize typer app and rich console
app = typer.Typer(
    help="Manage airline customers, airplanes, flights and reservations",
    add_completion=False,
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    database_url: Optional[str] = typer.Option(
        None, "--database-url", "-d", help="SQLite database URL (overrides DATABASE_URL)"
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (overrides AIRLINE_LOG_LEVEL)"
    ),
    echo_sql: bool = typer.Option(False, "--echo-sql", help="Log every SQL statement"),
):
    """Airline records management."""
    try:
        config = load_config(
            database_url=database_url,
            log_level=log_level,
            echo_sql=echo_sql or None,
        )
    except ValueError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=2)

    setup_logging(config.log_level)
    ctx.obj = config


def run_with_store(ctx: typer.Context, action: Callable[[Store], Awaitable[T]]) -> T:
    """
    Run one async action against a fresh store and close it afterwards.

    Repository errors are printed and turned into exit code 1.
    """
    config: AppConfig = ctx.obj

    async def _main() -> T:
        store = Store(config.store_config())
        try:
            return await action(store)
        finally:
            await store.close()

    try:
        return asyncio.run(_main())
    except RepositoryError as e:
        console.print(f"[bold red]Error:[/bold red] {e.message}")
        raise typer.Exit(code=1)


def parse_assignments(values: Iterable[str]) -> Dict[str, str]:
    """Turn ``field=value`` arguments into a dictionary."""
    assignments: Dict[str, str] = {}
    for item in values:
        field, sep, value = item.partition("=")
        if not sep or not field.strip():
            raise typer.BadParameter(f"Expected FIELD=VALUE, got '{item}'", param_hint="--set")
        assignments[field.strip()] = value
    return assignments


def record_fields(entity_type: Type[EntityModel]) -> List[str]:
    return [name for name in entity_type.model_fields if name != "id"]


def render_table(repository: Repository, records: List[EntityModel], title: str) -> Table:
    """Build a Rich table with one row per record."""
    fields = record_fields(repository.entity_type)
    table = Table(title=title, box=box.ROUNDED, show_lines=False)
    table.add_column("ID", justify="right", style="cyan")
    for field in fields:
        table.add_column(repository.field_label(field))
    for record in records:
        table.add_row(str(record.id), *(str(getattr(record, field)) for field in fields))
    return table


def build_entity_app(plural: str, repository_cls: Type[Repository]) -> typer.Typer:
    """Create the list/show/add/update/delete/count commands for one record type."""
    entity_app = typer.Typer(help=f"Manage {plural}", no_args_is_help=True)

    @entity_app.command("list")
    def list_records(ctx: typer.Context):
        """Show all records."""
        async def action(store: Store):
            repository = repository_cls(store)
            return repository, await repository.find_all()

        repository, records = run_with_store(ctx, action)
        if not records:
            console.print(f"[yellow]No {plural} found[/yellow]")
            return
        console.print(render_table(repository, records, title=plural.capitalize()))

    @entity_app.command("show")
    def show_record(ctx: typer.Context, record_id: int = typer.Argument(..., help="Record ID")):
        """Show one record."""
        async def action(store: Store):
            repository = repository_cls(store)
            record = await repository.find_by_id(record_id)
            if record is None:
                raise NotFoundError(repository.label, record_id)
            return repository, record

        repository, record = run_with_store(ctx, action)
        console.print(render_table(repository, [record], title=repository.label))

    @entity_app.command("add")
    def add_record(
        ctx: typer.Context,
        values: List[str] = typer.Option([], "--set", "-s", help="FIELD=VALUE, repeatable"),
    ):
        """Add a record. Fields not given with --set are prompted for."""
        data: Dict[str, Any] = parse_assignments(values)
        for field in record_fields(repository_cls.entity_type):
            if field not in data:
                data[field] = typer.prompt(repository_cls.field_label(field))

        async def action(store: Store):
            repository = repository_cls(store)
            return await repository.insert(repository.parse(data))

        record = run_with_store(ctx, action)
        console.print(f"[green]✓[/green] Added {type(record).__name__} with id {record.id}")

    @entity_app.command("update")
    def update_record(
        ctx: typer.Context,
        record_id: int = typer.Argument(..., help="Record ID"),
        values: List[str] = typer.Option(..., "--set", "-s", help="FIELD=VALUE, repeatable"),
    ):
        """Replace fields of an existing record."""
        changes = parse_assignments(values)

        async def action(store: Store):
            repository = repository_cls(store)
            current = await repository.find_by_id(record_id)
            if current is None:
                raise NotFoundError(repository.label, record_id)
            data = current.model_dump()
            data.update(changes)
            data["id"] = record_id
            await repository.update(repository.parse(data))
            return repository.label

        label = run_with_store(ctx, action)
        console.print(f"[green]✓[/green] Updated {label} {record_id}")

    @entity_app.command("delete")
    def delete_record(ctx: typer.Context, record_id: int = typer.Argument(..., help="Record ID")):
        """Delete a record. Deleting a missing record is not an error."""
        async def action(store: Store):
            repository = repository_cls(store)
            await repository.delete(record_id)
            return repository.label

        label = run_with_store(ctx, action)
        console.print(f"[green]✓[/green] Deleted {label} {record_id}")

    @entity_app.command("count")
    def count_records(ctx: typer.Context):
        """Print the number of records."""
        total = run_with_store(ctx, lambda store: repository_cls(store).count())
        console.print(f"{total} {plural}")

    return entity_app


customers_app = build_entity_app("customers", CustomerRepository)
airplanes_app = build_entity_app("airplanes", AirplaneRepository)
flights_app = build_entity_app("flights", FlightRepository)
reservations_app = build_entity_app("reservations", ReservationRepository)


@customers_app.command("search")
def search_customers(ctx: typer.Context, term: str = typer.Argument(..., help="Part of a name")):
    """Find customers by first, last or full name."""
    async def action(store: Store):
        repository = CustomerRepository(store)
        return repository, await repository.search(term)

    repository, customers = run_with_store(ctx, action)
    if not customers:
        console.print(f"[yellow]No customers match '{term}'[/yellow]")
        return
    console.print(render_table(repository, customers, title=f"Customers matching '{term}'"))


def _show_reservations(ctx: typer.Context, title: str, lookup: Callable[[ReservationRepository], Awaitable[list]]):
    async def action(store: Store):
        repository = ReservationRepository(store)
        return repository, await lookup(repository)

    repository, reservations = run_with_store(ctx, action)
    if not reservations:
        console.print("[yellow]No reservations found[/yellow]")
        return
    console.print(render_table(repository, reservations, title=title))


@reservations_app.command("for-customer")
def reservations_for_customer(ctx: typer.Context, customer_id: int = typer.Argument(..., help="Customer ID")):
    """Show the reservations of one customer."""
    _show_reservations(
        ctx, f"Reservations of customer {customer_id}",
        lambda repository: repository.find_by_customer(customer_id),
    )


@reservations_app.command("for-flight")
def reservations_for_flight(ctx: typer.Context, flight_id: int = typer.Argument(..., help="Flight ID")):
    """Show the reservations on one flight."""
    _show_reservations(
        ctx, f"Reservations on flight {flight_id}",
        lambda repository: repository.find_by_flight(flight_id),
    )


app.add_typer(customers_app, name="customers")
app.add_typer(airplanes_app, name="airplanes")
app.add_typer(flights_app, name="flights")
app.add_typer(reservations_app, name="reservations")


@app.command("init")
def init_database(ctx: typer.Context):
    """Create the database and its tables if they do not exist."""
    async def action(store: Store):
        await store.initialize()
        info = store.connection_info()
        info["schema_version"] = await store.schema_version()
        return info

    info = run_with_store(ctx, action)

    table = Table(title="Database", box=box.ROUNDED, show_header=False)
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    for key, value in info.items():
        table.add_row(key.replace("_", " "), str(value))
    console.print(table)


if __name__ == "__main__":
    app()
