"""
Validated repositories for the four record types.
"""

from .base import Repository
from .customer import CustomerRepository
from .airplane import AirplaneRepository
from .flight import FlightRepository
from .reservation import ReservationRepository
from .validators import (
    FieldRule,
    validate,
    required_text,
    whole_number,
    positive_number,
    iso_date,
)

__all__ = [
    "Repository",
    "CustomerRepository",
    "AirplaneRepository",
    "FlightRepository",
    "ReservationRepository",
    "FieldRule",
    "validate",
    "required_text",
    "whole_number",
    "positive_number",
    "iso_date",
]
