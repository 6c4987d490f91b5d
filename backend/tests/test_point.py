"""
Tests for Point and field value coercion.
"""
import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from point import (
    FieldKind, Point, UnsupportedFieldValueError,
    coerce_field_value, field_kind, make_usable_point,
)


class TestFieldKind:
    """Tests for field_kind classification."""

    def test_small_int(self):
        assert field_kind(42) is FieldKind.INT

    def test_large_int_is_int64(self):
        assert field_kind(2 ** 40) is FieldKind.INT64
        assert field_kind(-(2 ** 63)) is FieldKind.INT64

    def test_float(self):
        assert field_kind(0.5) is FieldKind.FLOAT

    @pytest.mark.parametrize("value", ["ok", None, True, b"1", [1], 2 ** 64])
    def test_unsupported(self, value):
        """Strings, bools, containers and ints beyond 64 bits are unsupported."""
        assert field_kind(value) is None


class TestCoerceFieldValue:
    """Tests for coerce_field_value."""

    def test_int_becomes_float(self):
        value = coerce_field_value("usage_user", 42)
        assert value == 42.0
        assert isinstance(value, float)

    def test_float_passes_through(self):
        assert coerce_field_value("load1", 0.5) == 0.5

    def test_unsupported_raises_with_field_name(self):
        with pytest.raises(UnsupportedFieldValueError, match="Cannot convert field status with value type: str"):
            coerce_field_value("status", "up")

    def test_bool_rejected(self):
        """bool is not accepted as an integer."""
        with pytest.raises(UnsupportedFieldValueError):
            coerce_field_value("enabled", True)

    def test_error_is_type_error(self):
        assert issubclass(UnsupportedFieldValueError, TypeError)


class TestPoint:
    """Tests for the Point container."""

    def test_make_usable_point_is_empty(self):
        p = make_usable_point()
        assert p.measurement_name == ""
        assert p.timestamp is None
        assert p.field_keys == []
        assert p.field_values == []

    def test_append_field_keeps_keys_and_values_parallel(self):
        p = Point()
        p.append_field("a", 1)
        p.append_field("b", 2.0)
        assert p.field_keys == ["a", "b"]
        assert p.field_values == [1, 2.0]

    def test_reset(self):
        p = Point(measurement_name="cpu")
        p.append_field("a", 1)
        p.reset()
        assert p.measurement_name == ""
        assert p.field_keys == []
        assert p.field_values == []

    def test_points_do_not_share_lists(self):
        a = make_usable_point()
        b = make_usable_point()
        a.append_field("x", 1)
        assert b.field_keys == []
