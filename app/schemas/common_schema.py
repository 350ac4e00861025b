from typing import ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for response schemas: snake_case attributes, camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RequestModel(BaseModel):
    """Base for request bodies. Unknown fields are rejected."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        str_strip_whitespace=True,
    )


class PartialUpdateModel(RequestModel):
    """Base for PUT bodies where only the fields the client sent are applied.

    Presence is taken from ``model_fields_set`` so an explicit ``0``,
    ``false`` or ``null`` is still an update. Subclasses list the fields
    backed by NOT NULL columns in ``non_nullable_fields``; sending ``null``
    for one of those is rejected.
    """

    non_nullable_fields: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="after")
    def check_provided_fields(self):
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided")
        for name in self.non_nullable_fields:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be null")
        return self

    def changes(self) -> dict:
        """Return the explicitly provided fields keyed by attribute name."""
        return self.model_dump(include=self.model_fields_set)


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int


class Page(CamelModel, Generic[T]):
    """Schema for paginated list responses"""

    data: list[T]
    pagination: Pagination


class DataResponse(CamelModel, Generic[T]):
    data: T


class MessageResponse(BaseModel):
    message: str
