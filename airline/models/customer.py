"""
Customer record.
"""

from pydantic import Field

from .base import EntityModel


class Customer(EntityModel):
    """An airline customer. ``date_of_birth`` is kept as ``YYYY-MM-DD`` text."""

    first_name: str = Field(..., description="First name")
    last_name: str = Field(..., description="Last name")
    address: str = Field(..., description="Postal address")
    date_of_birth: str = Field(..., description="Date of birth (YYYY-MM-DD)")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
