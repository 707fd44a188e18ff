"""
Shared fixtures: a private in-memory store per test and sample records.
"""

import pytest
import pytest_asyncio

from airline.database.config import Store, StoreConfig
from airline.models import Airplane, Customer, Flight, Reservation
from airline.repositories import (
    AirplaneRepository,
    CustomerRepository,
    FlightRepository,
    ReservationRepository,
)


@pytest_asyncio.fixture
async def store():
    """Create an initialized in-memory store for testing."""
    store = Store(StoreConfig.in_memory())
    await store.initialize()
    yield store
    await store.close()


@pytest.fixture
def customer_repository(store):
    return CustomerRepository(store)


@pytest.fixture
def airplane_repository(store):
    return AirplaneRepository(store)


@pytest.fixture
def flight_repository(store):
    return FlightRepository(store)


@pytest.fixture
def reservation_repository(store):
    return ReservationRepository(store)


@pytest.fixture
def jane():
    return Customer(
        first_name="Jane",
        last_name="Doe",
        address="1 Main St",
        date_of_birth="1990-05-01",
    )


@pytest.fixture
def a350():
    return Airplane(
        airplane_type="Airbus A350",
        passengers=300,
        max_speed="945 km/h",
        range_distance="15000 km",
    )


@pytest.fixture
def ottawa_toronto():
    return Flight(
        departure_city="Ottawa",
        destination_city="Toronto",
        departure_time="08:00",
        arrival_time="09:05",
    )


@pytest.fixture
def trip():
    return Reservation(
        customer_id=1,
        flight_id=1,
        flight_date="2025-07-15",
        reservation_name="Trip",
    )
