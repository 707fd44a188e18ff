"""
Flight record.
"""

from pydantic import Field

from .base import EntityModel


class Flight(EntityModel):
    """A scheduled flight between two cities."""

    departure_city: str = Field(..., description="Departure city")
    destination_city: str = Field(..., description="Destination city")
    departure_time: str = Field(..., description="Departure time")
    arrival_time: str = Field(..., description="Arrival time")

    @property
    def route(self) -> str:
        return f"{self.departure_city} → {self.destination_city}"

    @property
    def schedule(self) -> str:
        return f"Depart: {self.departure_time} • Arrive: {self.arrival_time}"
