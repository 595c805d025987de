"""Shared schema config: camelCase on the wire, unknown keys rejected."""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    # optional in a partial update, but an explicit null is refused
    not_nullable: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def _reject_explicit_nulls(self):
        nulled = [
            to_camel(name)
            for name in self.not_nullable
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if nulled:
            raise ValueError(f"{', '.join(nulled)} cannot be null")
        return self

    def sparse(self) -> dict:
        """Only the fields the client actually sent, keyed by their wire names."""
        return self.model_dump(by_alias=True, exclude_unset=True)
