"""Common response schemas."""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys; accepts either case on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ErrorResponse(BaseModel):
    """Error body returned by the exception handlers."""

    error: str
    code: str | None = None


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str
