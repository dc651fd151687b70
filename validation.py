from typing import Annotated, Any, ClassVar, Dict, Optional

from pydantic import BaseModel, ConfigDict, StringConstraints, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

INVALID_INPUT = "invalid_input"
INVALID_REQUEST = "درخواست نامعتبر است"

Text = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
OptionalText = Optional[Annotated[str, StringConstraints(strip_whitespace=True)]]


class Input(BaseModel):
    """Request body. Blank strings count as missing; any failure becomes a single Persian message."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    # Message for a missing field; defaults to naming the field
    required_message: ClassVar[Optional[str]] = None
    # Per-field messages for present but invalid values
    messages: ClassVar[Dict[str, str]] = {}

    @field_validator("*", mode="before")
    @classmethod
    def blank_is_absent(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @model_validator(mode="wrap")
    @classmethod
    def single_message(cls, data: Any, handler):
        try:
            return handler(data)
        except PydanticValidationError as e:
            raise PydanticCustomError(INVALID_INPUT, cls.describe(e.errors()[0]))

    @classmethod
    def describe(cls, error: Dict[str, Any]) -> str:
        if error["type"] == INVALID_INPUT:
            return error["msg"]
        field = error["loc"][0] if error["loc"] else None
        if not isinstance(field, str):
            return INVALID_REQUEST
        if error["type"] == "missing" or error.get("input") is None:
            return cls.required_message or f"فیلد {field} الزامی است"
        return cls.messages.get(field) or cls.required_message or f"مقدار {field} نامعتبر است"


def split_lines(value: Any) -> Any:
    """Accepts a list or newline-separated text; empty entries are dropped."""
    if isinstance(value, str):
        value = value.split("\n")
    if isinstance(value, list):
        items = [str(item).strip() for item in value if str(item).strip()]
        return items or None
    return value


def invalid(message: str) -> PydanticCustomError:
    return PydanticCustomError(INVALID_INPUT, message)
