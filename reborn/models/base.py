"""Shared pydantic configuration for every domain record"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def wire_name(field_name: str) -> str:
    """snake_case attribute -> camelCase wire key (``habit_id`` -> ``habitID``)"""
    camel = to_camel(field_name)
    if camel.endswith("Id"):
        camel = camel[:-2] + "ID"
    return camel


class DomainModel(BaseModel):
    """Closed, immutable record that accepts both snake_case and wire keys"""
    model_config = ConfigDict(
        alias_generator=wire_name,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    def to_wire(self) -> dict:
        """JSON-compatible dict keyed the way the client sends it"""
        return self.model_dump(mode="json", by_alias=True)
