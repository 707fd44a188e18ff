"""
Field validation rules for the record repositories.

A rule checks one field of a value object and yields an error message when
the value is unacceptable. Each repository declares its own list of rules.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

from ..exceptions import ValidationError
from ..models import EntityModel

logger = logging.getLogger(__name__)

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


@dataclass(frozen=True)
class FieldRule:
    """A single check on one field."""
    field: str
    label: str
    check: Callable[[Any], bool]
    message: str

    def __call__(self, entity: EntityModel) -> Optional[str]:
        """Return the error message, or None when the value passes."""
        value = getattr(entity, self.field)
        if self.check(value):
            return None
        return self.message.format(label=self.label)


def _is_whole_number(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def required_text(field: str, label: str) -> FieldRule:
    """Text that is not blank after stripping whitespace."""
    return FieldRule(
        field, label,
        lambda value: isinstance(value, str) and bool(value.strip()),
        "{label} cannot be empty",
    )


def whole_number(field: str, label: str) -> FieldRule:
    return FieldRule(field, label, _is_whole_number, "{label} must be a whole number")


def positive_number(field: str, label: str) -> FieldRule:
    """Whole number greater than zero."""
    return FieldRule(
        field, label,
        lambda value: _is_whole_number(value) and value > 0,
        "{label} must be greater than 0",
    )


def iso_date(field: str, label: str) -> FieldRule:
    """Text shaped like YYYY-MM-DD."""
    return FieldRule(
        field, label,
        lambda value: isinstance(value, str) and DATE_PATTERN.fullmatch(value) is not None,
        "{label} must be in YYYY-MM-DD format",
    )


def validate(entity: EntityModel, rules: Iterable[FieldRule]) -> None:
    """
    Apply rules in order and stop at the first failure.

    Raises:
        ValidationError: With the failing rule's message and field name
    """
    for rule in rules:
        message = rule(entity)
        if message is not None:
            logger.warning(f"Rejected {type(entity).__name__}: {message}")
            raise ValidationError(message, field=rule.field)


CUSTOMER_RULES = (
    required_text("first_name", "First name"),
    required_text("last_name", "Last name"),
    required_text("address", "Address"),
    required_text("date_of_birth", "Date of birth"),
    iso_date("date_of_birth", "Date of birth"),
)

AIRPLANE_RULES = (
    required_text("airplane_type", "Airplane type"),
    whole_number("passengers", "Passengers"),
    positive_number("passengers", "Passengers"),
    required_text("max_speed", "Maximum speed"),
    required_text("range_distance", "Range"),
)

FLIGHT_RULES = (
    required_text("departure_city", "Departure city"),
    required_text("destination_city", "Destination city"),
    required_text("departure_time", "Departure time"),
    required_text("arrival_time", "Arrival time"),
)

RESERVATION_RULES = (
    whole_number("customer_id", "Customer ID"),
    whole_number("flight_id", "Flight ID"),
    required_text("flight_date", "Flight date"),
    required_text("reservation_name", "Reservation name"),
)
