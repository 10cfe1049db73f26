"""
Tests for JSON-safe serialization.
"""

import json
from decimal import Decimal
from enum import Enum

from hypothesis import given, strategies as st
from pydantic import BaseModel

from onchain_plugins.utils.serialization import (
    MAX_SAFE_INTEGER,
    safe_stringify,
    to_json_safe,
)


class Color(Enum):
    RED = "red"


class Receipt(BaseModel):
    block: int
    tx: bytes


class Opaque:
    def __str__(self):
        return "opaque"


class TestToJsonSafe:
    """Test suite for to_json_safe."""

    @given(st.integers(min_value=-MAX_SAFE_INTEGER, max_value=MAX_SAFE_INTEGER))
    def test_safe_integers_stay_numbers(self, value):
        assert to_json_safe(value) == value

    @given(st.integers(min_value=MAX_SAFE_INTEGER + 1))
    def test_large_integers_become_decimal_strings(self, value):
        assert to_json_safe(value) == str(value)
        assert to_json_safe(-value) == str(-value)

    @given(st.binary(max_size=64))
    def test_bytes_become_hex(self, value):
        assert to_json_safe(value) == "0x" + value.hex()

    def test_nested_structures(self):
        value = {
            "amount": 10**30,
            "items": [Decimal("1.5"), (1, 2)],
            "color": Color.RED,
            "flag": True,
            "none": None,
        }
        assert to_json_safe(value) == {
            "amount": str(10**30),
            "items": ["1.5", [1, 2]],
            "color": "red",
            "flag": True,
            "none": None,
        }

    def test_models_are_dumped(self):
        receipt = Receipt(block=2**60, tx=b"\x01\x02")
        assert to_json_safe(receipt) == {"block": str(2**60), "tx": "0x0102"}

    def test_unknown_objects_fall_back_to_str(self):
        assert to_json_safe(Opaque()) == "opaque"

    @given(st.floats(allow_nan=False, allow_infinity=False))
    def test_finite_floats_stay_numbers(self, value):
        assert to_json_safe(value) == value

    def test_non_finite_floats_become_strings(self):
        assert to_json_safe(float("nan")) == "nan"
        assert to_json_safe(float("inf")) == "inf"
        assert to_json_safe(float("-inf")) == "-inf"

    def test_mapping_keys_become_strings(self):
        assert to_json_safe({1: "a"}) == {"1": "a"}


class TestSafeStringify:
    """Test suite for safe_stringify."""

    def test_valid_json_with_big_ints(self):
        text = safe_stringify({"wei": 2**80})
        assert json.loads(text) == {"wei": str(2**80)}

    def test_indent(self):
        assert safe_stringify({"a": 1}, indent=2) == '{\n  "a": 1\n}'

    def test_non_finite_floats_produce_strict_json(self):
        def reject(token):
            raise ValueError(f"non-standard JSON constant {token}")

        text = safe_stringify({"x": float("nan"), "y": [float("inf")]})
        assert json.loads(text, parse_constant=reject) == {"x": "nan", "y": ["inf"]}
