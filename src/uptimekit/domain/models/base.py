"""Base class for API wire models."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """JSON object exchanged with the API.

    Fields are snake_case in Python and camelCase on the wire; names the API
    spells irregularly carry an explicit alias. Unknown response fields are
    ignored so that additive API changes do not break decoding.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )
