"""Strict schema baselines with forbidden extras by default."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StrictModel(BaseModel):
    """Neutral strict base for response DTOs."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)


class CamelResponseModel(StrictModel):
    """Response DTO serialized with camelCase keys, populated by field name."""

    model_config = ConfigDict(
        **StrictModel.model_config,
        alias_generator=to_camel,
        populate_by_name=True,
    )
