"""
SQLAlchemy table models for the airline records database.

This module defines the persisted layout of the four record types:
- CustomerRow: customers with name, address and date of birth
- AirplaneRow: fleet aircraft with capacity, speed and range
- FlightRow: flights between two cities with departure/arrival times
- ReservationRow: bookings referencing a customer and a flight

Column names follow the original camelCase layout of the database file,
while Python attributes use snake_case so that rows load directly into the
matching value objects in ``airline.models``.
"""

from typing import Dict, Type

from sqlalchemy import Column, Integer, Text
from sqlalchemy.orm import declarative_base

from ..models import Airplane, Customer, EntityModel, Flight, Reservation

# Bumped only when the table layout changes; stamped into PRAGMA user_version.
SCHEMA_VERSION = 1

Base = declarative_base()


class CustomerRow(Base):
    """Customer table."""
    __tablename__ = "Customer"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column("id", Integer, primary_key=True, autoincrement=True)
    first_name = Column("firstName", Text, nullable=False)
    last_name = Column("lastName", Text, nullable=False)
    address = Column("address", Text, nullable=False)
    date_of_birth = Column("dateOfBirth", Text, nullable=False)

    def __repr__(self):
        return f"<CustomerRow(id={self.id}, name='{self.first_name} {self.last_name}')>"


class AirplaneRow(Base):
    """Airplane table."""
    __tablename__ = "Airplane"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column("id", Integer, primary_key=True, autoincrement=True)
    airplane_type = Column("airplaneType", Text, nullable=False)
    passengers = Column("passengers", Integer, nullable=False)
    max_speed = Column("maxSpeed", Text, nullable=False)
    range_distance = Column("rangeDistance", Text, nullable=False)

    def __repr__(self):
        return f"<AirplaneRow(id={self.id}, type='{self.airplane_type}', passengers={self.passengers})>"


class FlightRow(Base):
    """Flight table."""
    __tablename__ = "Flight"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column("id", Integer, primary_key=True, autoincrement=True)
    departure_city = Column("departureCity", Text, nullable=False)
    destination_city = Column("destinationCity", Text, nullable=False)
    departure_time = Column("departureTime", Text, nullable=False)
    arrival_time = Column("arrivalTime", Text, nullable=False)

    def __repr__(self):
        return f"<FlightRow(id={self.id}, route='{self.departure_city} -> {self.destination_city}')>"


class ReservationRow(Base):
    """
    Reservation table.

    customerId and flightId are plain integers, not declared foreign keys.
    """
    __tablename__ = "Reservation"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column("id", Integer, primary_key=True, autoincrement=True)
    customer_id = Column("customerId", Integer, nullable=False)
    flight_id = Column("flightId", Integer, nullable=False)
    flight_date = Column("flightDate", Text, nullable=False)
    reservation_name = Column("reservationName", Text, nullable=False)

    def __repr__(self):
        return f"<ReservationRow(id={self.id}, customer_id={self.customer_id}, flight_id={self.flight_id})>"


# Value object type -> table model
ENTITY_TABLES: Dict[Type[EntityModel], type] = {
    Customer: CustomerRow,
    Airplane: AirplaneRow,
    Flight: FlightRow,
    Reservation: ReservationRow,
}


def create_all_tables(connection) -> None:
    """
    Create all tables that do not exist yet.

    Args:
        connection: synchronous SQLAlchemy connection (use ``run_sync`` from async code)
    """
    Base.metadata.create_all(bind=connection)


def drop_all_tables(connection) -> None:
    """
    Drop all tables.

    Args:
        connection: synchronous SQLAlchemy connection (use ``run_sync`` from async code)
    """
    Base.metadata.drop_all(bind=connection)
