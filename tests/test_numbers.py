import pytest

from bollette.services.rules.numbers import parse_number, round_half_up


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("1.234,56", 1234.56),
        ("39,10", 39.10),
        ("234.60", 234.60),
        ("1.234", 1234.0),
        ("12.345.678", 12345678.0),
        ("1,234.56", 1234.56),
        ("€ 78,52", 78.52),
        ("86", 86.0),
    ],
)
def test_parse_number_handles_italian_and_plain_notation(token: str, expected: float) -> None:
    assert parse_number(token) == pytest.approx(expected)


@pytest.mark.parametrize("token", ["", "abc", "1,2,3", "12..5", None])
def test_parse_number_rejects_malformed_tokens(token) -> None:
    assert parse_number(token) is None


def test_round_half_up_rounds_ties_away_from_zero() -> None:
    assert round_half_up(2.5) == 3.0
    assert round_half_up(0.125, 2) == 0.13
    assert round_half_up(39.1 * 12 / 2, 2) == 234.6
