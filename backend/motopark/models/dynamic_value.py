"""Tagged union for loosely-typed JSON cells"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ..errors import UnrepresentableValueError


class ValueKind(Enum):
    """Kinds a decoded JSON token can take, in decode priority order"""
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    NULL = "null"


@dataclass(frozen=True)
class DynamicValue:
    """
    One cell of a positional row.

    Sequences are stored as tuples of DynamicValue and mappings as tuples of
    (key, DynamicValue) pairs so the value stays hashable and immutable.
    """
    kind: ValueKind
    value: Any = None

    @classmethod
    def null(cls) -> "DynamicValue":
        return cls(ValueKind.NULL, None)

    @property
    def is_null(self) -> bool:
        return self.kind is ValueKind.NULL

    def as_string(self) -> Optional[str]:
        return self.value if self.kind is ValueKind.STRING else None

    def as_int(self) -> Optional[int]:
        return self.value if self.kind is ValueKind.INTEGER else None

    def as_float(self) -> Optional[float]:
        return self.value if self.kind is ValueKind.FLOAT else None

    def as_bool(self) -> Optional[bool]:
        return self.value if self.kind is ValueKind.BOOLEAN else None

    def as_sequence(self) -> Optional[Tuple["DynamicValue", ...]]:
        return self.value if self.kind is ValueKind.SEQUENCE else None

    def as_mapping(self) -> Optional[Dict[str, "DynamicValue"]]:
        if self.kind is not ValueKind.MAPPING:
            return None
        return dict(self.value)


def _decode_string(token: Any) -> Optional[DynamicValue]:
    if isinstance(token, str):
        return DynamicValue(ValueKind.STRING, token)
    return None


def _decode_integer(token: Any) -> Optional[DynamicValue]:
    # bool is a subclass of int but a JSON true/false is never an integer
    if isinstance(token, int) and not isinstance(token, bool):
        return DynamicValue(ValueKind.INTEGER, token)
    return None


def _decode_float(token: Any) -> Optional[DynamicValue]:
    if isinstance(token, float):
        return DynamicValue(ValueKind.FLOAT, token)
    return None


def _decode_boolean(token: Any) -> Optional[DynamicValue]:
    if isinstance(token, bool):
        return DynamicValue(ValueKind.BOOLEAN, token)
    return None


def _decode_sequence(token: Any) -> Optional[DynamicValue]:
    if isinstance(token, (list, tuple)):
        return DynamicValue(ValueKind.SEQUENCE, tuple(decode(item) for item in token))
    return None


def _decode_mapping(token: Any) -> Optional[DynamicValue]:
    if isinstance(token, dict):
        items = []
        for key, item in token.items():
            if not isinstance(key, str):
                return None
            items.append((key, decode(item)))
        return DynamicValue(ValueKind.MAPPING, tuple(items))
    return None


def _decode_null(token: Any) -> Optional[DynamicValue]:
    if token is None:
        return DynamicValue.null()
    return None


# Order matters: a string of digits stays a string
_DECODERS = (
    _decode_string,
    _decode_integer,
    _decode_float,
    _decode_boolean,
    _decode_sequence,
    _decode_mapping,
    _decode_null,
)


def decode(token: Any) -> DynamicValue:
    """
    Decode a parsed JSON token into a DynamicValue.

    Raises UnrepresentableValueError when no kind accepts the token.
    """
    for decoder in _DECODERS:
        result = decoder(token)
        if result is not None:
            return result
    raise UnrepresentableValueError(f"Cannot decode value of type {type(token).__name__}")


def decode_row(tokens: List[Any]) -> List[DynamicValue]:
    """Decode one positional row"""
    return [decode(token) for token in tokens]


def encode(value: DynamicValue) -> Any:
    """Encode a DynamicValue back into plain JSON-compatible Python values"""
    if value.kind is ValueKind.SEQUENCE:
        return [encode(item) for item in value.value]
    if value.kind is ValueKind.MAPPING:
        return {key: encode(item) for key, item in value.value}
    return value.value
