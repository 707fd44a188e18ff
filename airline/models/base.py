"""
Shared base for the record value objects.
"""

from typing import Any, Dict, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

EntityT = TypeVar("EntityT", bound="EntityModel")


class EntityModel(BaseModel):
    """
    Immutable record with an optional store-assigned identity.

    ``id`` stays None until the record is first inserted. Equality compares
    every field, identity included.
    """
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: Optional[int] = None

    def copy_with(self: EntityT, **overrides: Any) -> EntityT:
        """Return a copy with the given fields replaced."""
        unknown = set(overrides) - set(type(self).model_fields)
        if unknown:
            raise TypeError(f"Unknown field(s) for {type(self).__name__}: {sorted(unknown)}")
        return self.model_copy(update=overrides)

    def to_record(self) -> Dict[str, Any]:
        """Persisted fields without the identity."""
        return self.model_dump(exclude={"id"})

    @property
    def is_persisted(self) -> bool:
        return self.id is not None
