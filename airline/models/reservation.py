"""
Reservation record linking a customer to a flight.
"""

from pydantic import Field

from .base import EntityModel


class Reservation(EntityModel):
    """
    A booking of one customer on one flight.

    ``customer_id`` and ``flight_id`` reference Customer.id and Flight.id.
    The schema does not declare them as foreign keys; ReservationRepository
    checks that both exist before writing.
    """

    customer_id: int = Field(..., description="Customer making the reservation")
    flight_id: int = Field(..., description="Reserved flight")
    flight_date: str = Field(..., description="Date of travel (YYYY-MM-DD)")
    reservation_name: str = Field(..., description="Name of the reservation")

    @property
    def summary(self) -> str:
        return f"{self.reservation_name} (Customer: {self.customer_id}, Flight: {self.flight_id})"
