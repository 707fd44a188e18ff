"""
Reservation repository.

Reservations reference a customer and a flight by id. The table does not
declare foreign keys, so this repository checks both references inside the
same transaction as every insert and update.
"""

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from ..database.models import CustomerRow, FlightRow
from ..exceptions import ValidationError
from ..models import Reservation
from .base import Repository
from .validators import RESERVATION_RULES


class ReservationRepository(Repository[Reservation]):
    """Reservations: text fields required, customer and flight must exist."""

    entity_type = Reservation
    rules = RESERVATION_RULES

    async def _check_references(self, session: AsyncSession, entity: Reservation) -> None:
        if await session.get(CustomerRow, entity.customer_id) is None:
            raise ValidationError(
                f"Customer {entity.customer_id} does not exist", field="customer_id"
            )
        if await session.get(FlightRow, entity.flight_id) is None:
            raise ValidationError(
                f"Flight {entity.flight_id} does not exist", field="flight_id"
            )

    async def find_by_customer(self, customer_id: int) -> List[Reservation]:
        """All reservations of one customer."""
        async with self._operation("find by customer"):
            dao = await self._get_dao()
            return await dao.find_by(customer_id=customer_id)

    async def find_by_flight(self, flight_id: int) -> List[Reservation]:
        """All reservations on one flight."""
        async with self._operation("find by flight"):
            dao = await self._get_dao()
            return await dao.find_by(flight_id=flight_id)
