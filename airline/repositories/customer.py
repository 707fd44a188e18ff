"""
Customer repository.
"""

from typing import List

from ..models import Customer
from .base import Repository
from .validators import CUSTOMER_RULES


class CustomerRepository(Repository[Customer]):
    """Customers: all fields required, date of birth as YYYY-MM-DD."""

    entity_type = Customer
    rules = CUSTOMER_RULES

    async def search(self, term: str) -> List[Customer]:
        """
        Case-insensitive search on first name, last name and full name.

        A blank term matches every customer.
        """
        customers = await self.find_all()
        needle = term.strip().lower()
        if not needle:
            return customers
        return [
            customer for customer in customers
            if needle in customer.first_name.lower()
            or needle in customer.last_name.lower()
            or needle in customer.full_name.lower()
        ]
