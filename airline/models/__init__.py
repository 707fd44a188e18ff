"""
Record value objects for the airline data layer.

All four types are frozen Pydantic v2 models with structural equality and a
``copy_with`` helper for producing modified copies.
"""

from .base import EntityModel
from .customer import Customer
from .airplane import Airplane
from .flight import Flight
from .reservation import Reservation

__all__ = [
    "EntityModel",
    "Customer",
    "Airplane",
    "Flight",
    "Reservation",
]
