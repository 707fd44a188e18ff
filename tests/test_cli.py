"""
Test suite for the command line interface.

Each test works on its own database file under pytest's tmp_path.
"""

import pytest
from typer.testing import CliRunner

from airline.cli import app

runner = CliRunner()

JANE = [
    "--set", "first_name=Jane",
    "--set", "last_name=Doe",
    "--set", "address=1 Main St",
    "--set", "date_of_birth=1990-05-01",
]
FLIGHT = [
    "--set", "departure_city=Ottawa",
    "--set", "destination_city=Toronto",
    "--set", "departure_time=08:00",
    "--set", "arrival_time=09:05",
]


@pytest.fixture
def cli(tmp_path):
    """Invoke the CLI against a private database file."""
    database_url = f"sqlite:///{tmp_path}/cli.db"

    def invoke(*args, **kwargs):
        return runner.invoke(app, ["--database-url", database_url, "--log-level", "WARNING", *args], **kwargs)

    return invoke


def test_init_creates_database(cli, tmp_path):
    result = cli("init")

    assert result.exit_code == 0, result.output
    assert "ready" in result.output
    assert (tmp_path / "cli.db").exists()


def test_add_list_and_count_customers(cli):
    result = cli("customers", "add", *JANE)
    assert result.exit_code == 0, result.output
    assert "Added Customer with id 1" in result.output

    result = cli("customers", "list")
    assert result.exit_code == 0
    assert "Jane" in result.output
    assert "Doe" in result.output

    result = cli("customers", "count")
    assert "1 customers" in result.output


def test_add_prompts_for_missing_fields(cli):
    result = cli(
        "flights", "add",
        "--set", "departure_city=Ottawa",
        "--set", "destination_city=Toronto",
        input="08:00\n09:05\n",
    )

    assert result.exit_code == 0, result.output
    assert "Departure time" in result.output
    assert "Added Flight with id 1" in result.output


def test_invalid_record_reports_error(cli):
    result = cli(
        "airplanes", "add",
        "--set", "airplane_type=",
        "--set", "passengers=100",
        "--set", "max_speed=500mph",
        "--set", "range_distance=1000mi",
    )

    assert result.exit_code == 1
    assert "Airplane type cannot be empty" in result.output
    assert "0 airplanes" in cli("airplanes", "count").output


def test_non_numeric_passengers_reports_error(cli):
    result = cli(
        "airplanes", "add",
        "--set", "airplane_type=B737",
        "--set", "passengers=lots",
        "--set", "max_speed=840",
        "--set", "range_distance=5600",
    )

    assert result.exit_code == 1
    assert "Passengers must be a whole number" in result.output


def test_update_and_show(cli):
    cli("customers", "add", *JANE)

    result = cli("customers", "update", "1", "--set", "address=2 Elm St")
    assert result.exit_code == 0, result.output

    result = cli("customers", "show", "1")
    assert "2 Elm St" in result.output


def test_show_missing_record(cli):
    result = cli("flights", "show", "5")

    assert result.exit_code == 1
    assert "Flight with id 5 not found" in result.output


def test_delete_missing_record_is_not_an_error(cli):
    cli("customers", "add", *JANE)

    result = cli("customers", "delete", "999")

    assert result.exit_code == 0
    assert "1 customers" in cli("customers", "count").output


def test_search_customers(cli):
    cli("customers", "add", *JANE)

    assert "Jane" in cli("customers", "search", "doe").output
    assert "No customers match" in cli("customers", "search", "smith").output


def test_reservation_requires_existing_customer(cli):
    cli("flights", "add", *FLIGHT)

    result = cli(
        "reservations", "add",
        "--set", "customer_id=1",
        "--set", "flight_id=1",
        "--set", "flight_date=2025-07-15",
        "--set", "reservation_name=Trip",
    )

    assert result.exit_code == 1
    assert "Customer 1 does not exist" in result.output


def test_reservations_for_customer(cli):
    cli("customers", "add", *JANE)
    cli("flights", "add", *FLIGHT)
    cli(
        "reservations", "add",
        "--set", "customer_id=1",
        "--set", "flight_id=1",
        "--set", "flight_date=2025-07-15",
        "--set", "reservation_name=Trip",
    )

    result = cli("reservations", "for-customer", "1")

    assert result.exit_code == 0
    assert "Trip" in result.output
    assert "No reservations found" in cli("reservations", "for-flight", "2").output


def test_bad_assignment_syntax(cli):
    result = cli("customers", "update", "1", "--set", "address")

    assert result.exit_code != 0


def test_unsupported_database_url():
    result = runner.invoke(app, ["--database-url", "postgresql://localhost/x", "customers", "count"])

    assert result.exit_code == 2
