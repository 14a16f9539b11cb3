from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class EngineModel(BaseModel):
    """
    Base for all engine value types.

    Instances are frozen so a theme or layout shared across concurrent slide
    builds cannot be mutated. Attributes are snake_case in Python and camelCase
    on the JSON boundary (upstream theme payloads, the file writer).
    """
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )
