from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """
    Base for every request/response body.

    The wire format is camelCase (the shape the web client and devices send);
    snake_case field names are accepted on input as well.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Message(ApiModel):
    message: str
