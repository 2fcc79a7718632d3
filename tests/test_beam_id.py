import pytest

from beamtable.beam_id import parse_beam_id, BeamId
from beamtable.units import parse_number, mm_to_m


@pytest.mark.parametrize("text, expected", [
    ("B1 300 x 600", BeamId("B1", 300, 600)),
    ("B1 300 X 600", BeamId("B1", 300, 600)),
    ("B1 300x600", BeamId("B1", 300, 600)),
    ("B12 230X450", BeamId("B12", 230, 450)),
    ("RB3 (230x380)", BeamId("RB3", 230, 380)),
    ("B4 230 x450 LVL+3.00", BeamId("B4", 230, 450)),
    ("FB2  300\tx\t750", BeamId("FB2", 300, 750)),
])
def test_recovers_mark_and_size(text, expected):
    assert parse_beam_id(text) == expected


def test_no_size_gives_zero():
    assert parse_beam_id("B7") == BeamId("B7", 0, 0)
    assert parse_beam_id("B7 TYP") == BeamId("B7", 0, 0)


def test_malformed_numbers_around_x_are_zero():
    result = parse_beam_id("B1 abc x 600")
    assert result.mark == "B1"
    assert result.width == 0
    assert result.depth == 600


def test_trailing_x_falls_back_to_pattern_search():
    # "x" is the last token so it cannot split width/depth
    assert parse_beam_id("B5 230x300 x") == BeamId("B5", 230, 300)


def test_mark_keeps_its_case():
    assert parse_beam_id("BX1 300x600").mark == "BX1"


def test_empty_text():
    assert parse_beam_id("") == BeamId("")
    assert parse_beam_id(None) == BeamId("")


@pytest.mark.parametrize("token, value", [
    ("300", 300.0),
    ("1,200", 1200.0),
    ("+45.5", 45.5),
    ("3e2", 300.0),
    ("300.", 300.0),
    ("450-", -450.0),
    ("(450)", -450.0),
    ("-1,200.5", -1200.5),
    ("1e-", 0.0),
    ("-5-", 0.0),
    ("abc", 0.0),
    ("nan", 0.0),
    ("", 0.0),
])
def test_parse_number(token, value):
    assert parse_number(token) == value


def test_mm_to_m():
    assert mm_to_m(300) == "0.30"
    assert mm_to_m(1250, 1) == "1.2"
    assert mm_to_m(0) == "0.00"


def test_trailing_decimal_points_in_size():
    assert parse_beam_id("B1 300. x 600.") == BeamId("B1", 300, 600)
