"""Base model configuration for all Pydantic models."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class AdmissionBaseModel(BaseModel):
    """Base model with common configuration.

    Conventions:
    - Python attributes are lowercase snake_case
    - Wire names are camelCase, matching the orchestrator's object schema
    - Either form is accepted on input
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        use_enum_values=True,
        alias_generator=to_camel,
    )
