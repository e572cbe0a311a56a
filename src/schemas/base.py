"""Base schema classes shared by request and response models."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Model serialized with camelCase keys, populated by either key style."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RequestModel(CamelModel):
    """Request body that rejects unknown fields."""

    model_config = ConfigDict(extra="forbid")


class MessageResponse(CamelModel):
    """Plain message response."""

    message: str
