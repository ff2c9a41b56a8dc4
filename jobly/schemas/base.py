from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    Base schema whose JSON field names are camelCase.

    Input accepts either ``numEmployees`` or ``num_employees``; responses are
    serialized with the camelCase aliases.
    """

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True  # Allows conversion from SQLAlchemy models
