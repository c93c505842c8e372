import pytest

from serviceshop.errors import ValidationError
from serviceshop.utils.fields import (
    FieldInput,
    FieldState,
    missing_fields,
    to_datetime,
    to_non_negative_int,
    to_number,
    to_string_list,
)


def test_field_input_states():
    payload = {"a": None, "b": "", "c": 0, "d": "x"}
    assert FieldInput.read(payload, "missing").state is FieldState.UNSET
    assert FieldInput.read(payload, "a").is_clear
    assert FieldInput.read(payload, "b").is_clear
    # 0 is a real value, not a clear
    c = FieldInput.read(payload, "c")
    assert c.has_value and c.value == 0
    assert FieldInput.read(payload, "d").value == "x"


def test_missing_fields_uses_truthiness():
    assert missing_fields({"a": "x", "b": "", "c": 0}, ["a", "b", "c", "d"]) == ["b", "c", "d"]


def test_to_number():
    assert to_number("12.5", "price") == 12.5
    assert to_number(" 3 ", "price") == 3.0
    assert to_number(7, "price") == 7.0
    for bad in ("abc", True, [1], "nan"):
        with pytest.raises(ValidationError) as exc:
            to_number(bad, "price")
        assert "price" in exc.value.errors


def test_to_non_negative_int():
    assert to_non_negative_int("4", "stock") == 4
    with pytest.raises(ValidationError):
        to_non_negative_int(2.5, "stock")
    with pytest.raises(ValidationError):
        to_non_negative_int(-1, "stock")
    with pytest.raises(ValidationError) as exc:
        to_non_negative_int(10**20, "stock")
    assert "stock" in exc.value.errors


def test_to_datetime():
    dt = to_datetime("2024-05-01T10:00:00Z")
    assert dt.year == 2024 and dt.utcoffset() is not None
    assert to_datetime("not a date") is None
    assert to_datetime(0).year == 1970


def test_to_string_list():
    assert to_string_list("a.png") == ["a.png"]
    assert to_string_list(["a.png", "b.png"]) == ["a.png", "b.png"]
    assert to_string_list(None) == []
    assert to_string_list("") == []
