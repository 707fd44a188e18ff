"""
Flight repository.
"""

from ..models import Flight
from .base import Repository
from .validators import FLIGHT_RULES


class FlightRepository(Repository[Flight]):
    """Flights: departure and arrival cities and times required."""

    entity_type = Flight
    rules = FLIGHT_RULES
