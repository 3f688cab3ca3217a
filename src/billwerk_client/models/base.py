"""
Dataclass <-> JSON mapping for API models.
"""
from dataclasses import dataclass, field, fields
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Union, get_args, get_origin, get_type_hints


def json_field(name: str, default: Any = None, always: bool = False) -> Any:
    """Dataclass field whose JSON key differs from the attribute name.

    With ``always`` the key is sent even when the value is None (as null).
    """
    return field(default=default, metadata={"json": name, "always": always})


def _parse_datetime(value: str) -> datetime:
    # fromisoformat rejects a trailing Z before Python 3.11
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def decode_value(hint: Any, value: Any) -> Any:
    """Convert a parsed JSON value to the annotated Python type."""
    if value is None:
        return None

    origin = get_origin(hint)
    if origin is Union:
        args = [arg for arg in get_args(hint) if arg is not type(None)]
        return decode_value(args[0], value) if len(args) == 1 else value

    if origin is list:
        if not isinstance(value, list):
            raise TypeError(f"expected a JSON array, got {type(value).__name__}")
        (item_hint,) = get_args(hint) or (Any,)
        return [decode_value(item_hint, item) for item in value]

    if not isinstance(hint, type):
        return value

    if issubclass(hint, JSONModel):
        return hint.from_dict(value)
    if issubclass(hint, Enum):
        try:
            return hint(value)
        except ValueError:
            # values added to the API after this release stay plain strings
            return value
    if issubclass(hint, datetime):
        return _parse_datetime(value)
    if hint is float and isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    if hint in (str, int, float, bool) and not isinstance(value, hint):
        raise TypeError(f"expected {hint.__name__}, got {type(value).__name__}")
    if hint is int and isinstance(value, bool):
        raise TypeError("expected int, got bool")
    return value


def encode_value(value: Any) -> Any:
    """Convert a Python value to its JSON-ready form."""
    if isinstance(value, JSONModel):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [encode_value(item) for item in value]
    if isinstance(value, dict):
        return {key: encode_value(item) for key, item in value.items()}
    return value


def json_default(obj: Any) -> Any:
    """``default`` hook for json.dumps handling models, enums and dates."""
    if isinstance(obj, (JSONModel, Enum, datetime, date)):
        return encode_value(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


@dataclass
class JSONModel:
    """Base for models exchanged with the API as JSON objects.

    Attributes default to None; None-valued attributes are left out of the
    JSON body unless declared with json_field(..., always=True), everything
    else (including False and 0) is sent.
    Unknown keys in responses are ignored.
    """

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Any:
        if not isinstance(data, dict):
            raise TypeError(f"{cls.__name__} expects a JSON object, got {type(data).__name__}")

        hints = get_type_hints(cls)
        kwargs = {}
        for f in fields(cls):
            key = f.metadata.get("json", f.name)
            if data.get(key) is not None:
                kwargs[f.name] = decode_value(hints[f.name], data[key])
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None and not f.metadata.get("always"):
                continue
            result[f.metadata.get("json", f.name)] = encode_value(value)
        return result
