"""Unit tests for typed field values."""

from __future__ import annotations

import pytest

from sqlitepp.domain.entities import Field
from sqlitepp.domain.errors import TypeMismatchError
from sqlitepp.domain.value_objects import FieldType


@pytest.mark.unit
class TestFieldConstruction:
    """Tests for building fields from driver values."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (42, FieldType.INTEGER),
            (2.5, FieldType.FLOAT),
            ("text", FieldType.TEXT),
            (b"\x00\x01", FieldType.BLOB),
            (None, FieldType.NULL),
        ],
    )
    def test_storage_class(self, value: object, expected: FieldType) -> None:
        """Each driver value gets its storage class."""
        assert Field.from_value(value).type is expected

    def test_bytearray_is_stored_as_bytes(self) -> None:
        """Blob values are normalized to immutable bytes."""
        field = Field.from_value(bytearray(b"abc"))

        assert field.value == b"abc"
        assert isinstance(field.value, bytes)

    def test_unsupported_value(self) -> None:
        """Values without a storage class are rejected."""
        with pytest.raises(TypeError):
            Field.from_value(object())


@pytest.mark.unit
class TestFieldNull:
    """Tests for NULL testing."""

    def test_null_is_null(self) -> None:
        assert Field.from_value(None).is_null()

    @pytest.mark.parametrize("value", [0, 0.0, "", b""])
    def test_zero_like_values_are_not_null(self, value: object) -> None:
        """Zero, empty text and empty blobs are values, not NULL."""
        assert not Field.from_value(value).is_null()

    @pytest.mark.parametrize("convert", [int, float, bytes])
    def test_null_does_not_convert(self, convert: type) -> None:
        """NULL never turns into a zero value."""
        with pytest.raises(TypeMismatchError):
            convert(Field.from_value(None))

    def test_null_as_text_fails(self) -> None:
        with pytest.raises(TypeMismatchError):
            Field.from_value(None).as_text()


@pytest.mark.unit
class TestFieldConversion:
    """Tests for lossless conversions."""

    def test_integer_conversions(self) -> None:
        field = Field.from_value(10)

        assert int(field) == 10
        assert float(field) == 10.0
        assert field.as_text() == "10"

    def test_integral_float_to_int(self) -> None:
        assert Field.from_value(3.0).as_int() == 3

    def test_fractional_float_to_int_fails(self) -> None:
        """Truncating 1.5 would lose data."""
        with pytest.raises(TypeMismatchError):
            int(Field.from_value(1.5))

    def test_large_integer_to_float_fails(self) -> None:
        """2**53 + 1 has no exact float representation."""
        with pytest.raises(TypeMismatchError):
            Field.from_value(2**53 + 1).as_float()

    def test_numeric_text(self) -> None:
        assert Field.from_value("1000").as_int() == 1000
        assert Field.from_value("3.1415").as_float() == pytest.approx(3.1415)

    def test_non_numeric_text_fails(self) -> None:
        with pytest.raises(TypeMismatchError):
            Field.from_value("abc").as_int()
        with pytest.raises(TypeMismatchError):
            Field.from_value("abc").as_float()

    @pytest.mark.parametrize("text", [" 42 ", "+7", "-0012"])
    def test_sql_integer_text(self, text: str) -> None:
        assert Field.from_value(text).as_int() == int(text)

    @pytest.mark.parametrize("text", ["1_000", "0x10", "1.5", "4e2", "١٢", ""])
    def test_text_outside_sql_integer_syntax_fails(self, text: str) -> None:
        """Python literal forms that SQL does not read as integers do not convert."""
        with pytest.raises(TypeMismatchError):
            Field.from_value(text).as_int()

    @pytest.mark.parametrize(
        ("text", "expected"),
        [("1.", 1.0), (".5", 0.5), ("-2.5e3", -2500.0), ("7", 7.0)],
    )
    def test_sql_real_text(self, text: str, expected: float) -> None:
        assert Field.from_value(text).as_float() == expected

    @pytest.mark.parametrize("text", ["nan", "inf", "-Infinity", "1e999", "1_0.5", "1e"])
    def test_non_finite_or_non_sql_real_text_fails(self, text: str) -> None:
        """Non-finite results and Python-only spellings are not lossless reads."""
        with pytest.raises(TypeMismatchError):
            Field.from_value(text).as_float()

    def test_blob_to_int_fails(self) -> None:
        """Blobs are never numeric."""
        with pytest.raises(TypeMismatchError):
            int(Field.from_value(b"\x01"))

    def test_blob_conversions(self) -> None:
        field = Field.from_value(bytes(range(30)))

        assert bytes(field) == bytes(range(30))
        assert field.as_blob() == bytes(range(30))

    def test_text_to_blob_is_utf8(self) -> None:
        assert Field.from_value("Grüße").as_blob() == "Grüße".encode("utf-8")

    def test_utf8_blob_to_text(self) -> None:
        assert Field.from_value("Grüße".encode("utf-8")).as_text() == "Grüße"

    def test_invalid_utf8_blob_to_text_fails(self) -> None:
        with pytest.raises(TypeMismatchError):
            Field.from_value(b"\xff\xfe").as_text()

    def test_number_to_blob_fails(self) -> None:
        with pytest.raises(TypeMismatchError):
            bytes(Field.from_value(5))

    def test_mismatch_is_a_type_error(self) -> None:
        """TypeMismatchError can be caught as TypeError."""
        with pytest.raises(TypeError):
            Field.from_value(b"x").as_float()


@pytest.mark.unit
class TestFieldDisplay:
    """Tests for str() display."""

    def test_display_never_raises(self) -> None:
        assert str(Field.from_value(None)) == "NULL"
        assert str(Field.from_value(b"\x00\xff")) == "00ff"
        assert str(Field.from_value(7)) == "7"
        assert str(Field.from_value(3.1415)) == "3.1415"
        assert str(Field.from_value("Test")) == "Test"

    def test_equality_includes_type(self) -> None:
        """An integer 1 and a float 1.0 are different fields."""
        assert Field.from_value(1) != Field.from_value(1.0)
        assert Field.from_value(1) == Field.from_value(1)
