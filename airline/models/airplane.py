"""
Airplane record.
"""

from pydantic import Field

from .base import EntityModel


class Airplane(EntityModel):
    """
    An aircraft in the fleet.

    Speed and range are free text as entered by staff (e.g. ``"900 km/h"``).
    """

    airplane_type: str = Field(..., description="Aircraft type, e.g. Airbus A350")
    passengers: int = Field(..., description="Maximum passenger capacity")
    max_speed: str = Field(..., description="Maximum speed")
    range_distance: str = Field(..., description="Maximum flight range")

    @property
    def description(self) -> str:
        return f"{self.airplane_type} ({self.passengers} passengers)"
