from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter, ValidationError

from method_guards.contracts import ValidationRule


@lru_cache(maxsize=128)
def _adapter_for(type_: Any) -> TypeAdapter:
    return TypeAdapter(type_)


def _type_name(type_: Any) -> str:
    return getattr(type_, "__name__", None) or repr(type_)


@dataclass(frozen=True)
class ConformsTo(ValidationRule):
    """
    The value must validate against `type_` (any type pydantic understands,
    including `BaseModel` subclasses). None passes.

    With `strict=False` pydantic's lax coercion applies, e.g. "3" conforms to int.
    """

    type_: Any
    strict: bool = False

    message_key = "conforms_to"
    default_message = "The field {name} must be a valid {type}."

    def is_valid(self, value: Any) -> bool:
        if value is None:
            return True
        try:
            _adapter_for(self.type_).validate_python(value, strict=self.strict)
        except ValidationError:
            return False
        return True

    def message_parameters(self) -> dict[str, Any]:
        return {"type": _type_name(self.type_)}
