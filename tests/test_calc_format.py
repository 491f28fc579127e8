import pytest

from calc_format import format_number, parse_operand


@pytest.mark.parametrize("value, expected", [
    (10.0, "10"),
    (-3.0, "-3"),
    (0.0, "0"),
    (-0.0, "0"),
    (0.25, "0.25"),
    (1 / 3, "0.3333333333"),
    (2 / 3, "0.6666666667"),
    (0.1 + 0.2, "0.3"),
    (1e-11, "0"),
    (-1e-11, "0"),
    (123.45600, "123.456"),
    (1e20, "100000000000000000000"),
])
def test_format_number(value, expected):
    assert format_number(value) == expected


def test_format_rounds_half_up():
    # 0.00000000005 в repr ровно на границе округления
    assert format_number(0.00000000005) == "0.0000000001"
    assert format_number(0.12345678905) == "0.1234567891"


def test_format_rejects_non_finite():
    with pytest.raises(ValueError):
        format_number(float("inf"))
    with pytest.raises(ValueError):
        format_number(float("nan"))


def test_parse_operand_accepts_comma():
    assert parse_operand("1,5") == 1.5
    assert parse_operand("0.") == 0.0
