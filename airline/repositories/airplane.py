"""
Airplane repository.
"""

from ..models import Airplane
from .base import Repository
from .validators import AIRPLANE_RULES


class AirplaneRepository(Repository[Airplane]):
    """Airplanes: text fields required, passenger capacity above zero."""

    entity_type = Airplane
    rules = AIRPLANE_RULES
