"""Tests for dynamic value decoding"""
import json
import pytest

# Add parent directory to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from motopark.errors import UnrepresentableValueError
from motopark.models import DynamicValue, ValueKind, decode, decode_row, encode


class TestDecode:
    """Tests for decode priority"""

    def test_digit_string_stays_string(self):
        """A JSON string of digits decodes as a string, not an integer"""
        value = decode(json.loads('"42"'))
        assert value.kind is ValueKind.STRING
        assert value.as_string() == "42"
        assert value.as_int() is None

    def test_integer_and_float(self):
        """Integral and fractional JSON numbers decode to their own kinds"""
        assert decode(json.loads("7")).kind is ValueKind.INTEGER
        assert decode(json.loads("7.5")).kind is ValueKind.FLOAT
        assert decode(7).as_float() is None

    def test_boolean_is_not_integer(self):
        """JSON booleans must not be captured by the integer kind"""
        value = decode(json.loads("true"))
        assert value.kind is ValueKind.BOOLEAN
        assert value.as_bool() is True
        assert value.as_int() is None

    def test_null(self):
        """Null decodes to the null kind"""
        value = decode(None)
        assert value.is_null
        assert value == DynamicValue.null()

    def test_nested_sequence(self):
        """Sequences decode element by element"""
        value = decode(json.loads('[null, "37.79", "-122.42", null, false]'))
        items = value.as_sequence()
        assert value.kind is ValueKind.SEQUENCE
        assert len(items) == 5
        assert items[0].is_null
        assert items[1].as_string() == "37.79"
        assert items[4].as_bool() is False

    def test_mapping(self):
        """Objects decode to mappings of dynamic values"""
        value = decode({"a": 1, "b": [True]})
        mapping = value.as_mapping()
        assert set(mapping) == {"a", "b"}
        assert mapping["a"].as_int() == 1
        assert mapping["b"].as_sequence()[0].as_bool() is True

    def test_unrepresentable(self):
        """Values that are not JSON shaped raise"""
        with pytest.raises(UnrepresentableValueError):
            decode(object())
        with pytest.raises(UnrepresentableValueError):
            decode_row(["ok", {1, 2}])


class TestEncode:
    """Tests for encoding back to JSON values"""

    def test_scalars_round_trip(self):
        """Scalar kinds encode back to the same value"""
        for token in ["text", 3, 2.25, False, None]:
            assert encode(decode(token)) == token

    def test_containers_preserve_values(self):
        """Sequence and mapping elements survive encoding"""
        token = {"coords": [None, "37.7", "-122.4"], "count": 2}
        assert encode(decode(token)) == token


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
