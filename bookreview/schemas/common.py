"""
Shared schema building blocks.

The API speaks camelCase JSON (publishedYear, averageRating, userId) while
the Python side keeps snake_case attributes. CamelModel generates the
aliases; populate_by_name lets request bodies use either spelling.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    """Plain confirmation or error body."""

    message: str = Field(..., description="Human readable message")
