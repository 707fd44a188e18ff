"""
Error types raised by the repository layer.

Every failure that leaves a repository is a RepositoryError, so callers only
need to distinguish success from RepositoryError and show ``error.message``.
"""

from typing import Optional


class RepositoryError(Exception):
    """Base class for all repository failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RepositoryError):
    """Input rejected before any store access."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class NotFoundError(RepositoryError):
    """A row addressed by identity does not exist."""

    def __init__(self, entity: str, entity_id: int):
        super().__init__(f"{entity} with id {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class StoreError(RepositoryError):
    """Underlying database or filesystem failure. The cause is chained."""
