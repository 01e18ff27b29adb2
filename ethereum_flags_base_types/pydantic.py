"""Base pydantic classes used to define the models of chain fixtures."""

from typing import TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

Model = TypeVar("Model", bound=BaseModel)


class FlagsBaseModel(BaseModel):
    """Base model for all models of the flag harness."""

    def serialize(self, *, by_alias: bool = True, exclude_none: bool = True) -> dict:
        """Serialize the model to a JSON compatible dictionary."""
        return self.model_dump(mode="json", by_alias=by_alias, exclude_none=exclude_none)


class CamelModel(FlagsBaseModel):
    """
    A base model that converts field names to camel case when serializing.

    For example, the field name `gas_limit` in a Python model will be represented
    as `gasLimit` when it is serialized to json.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_default=True,
    )
