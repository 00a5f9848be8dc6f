"""
Common response models and utilities.

Shared base model for camelCase wire payloads.

Dependencies: pydantic
System role: Common API response structures
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys, populated by either name."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        """Convert to a JSON-serializable dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
