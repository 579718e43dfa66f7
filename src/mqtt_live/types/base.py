"""Strict base model for channel values and configuration."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StrictBaseModel(BaseModel):
    """
    A strict, immutable pydantic model with camelCase aliases.

    The host exchanges query objects as JSON with camelCase keys, so a field
    such as `streaming_key` is read and written as `streamingKey`. Python code
    may still populate fields by their snake_case names.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_default=True,
        extra="forbid",
        frozen=True,
        strict=True,
    )
