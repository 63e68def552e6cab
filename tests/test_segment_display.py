import pytest

from cps.pi import Gpio
from cps.segment_display import (
    BLANK,
    LETTERS,
    NUMERALS,
    SegmentCode,
    char_to_segment_code,
    parse,
    write,
)
from cps.shift_register import ShiftRegister


class RecordingPi:
    def __init__(self):
        self.writes = []

    def set_mode(self, gpio, mode):
        pass

    def gpio_write(self, gpio, level):
        self.writes.append((gpio, level))


DS, SH, ST = Gpio(17), Gpio(22), Gpio(27)


def test_digits_use_numeral_table():
    assert [char_to_segment_code(str(d)) for d in range(10)] == list(NUMERALS)
    assert char_to_segment_code("0") == 0b1100_0000


def test_letters_case_insensitive():
    assert char_to_segment_code("a") == char_to_segment_code("A") == LETTERS[0]
    assert char_to_segment_code("z") == 0b1010_0100


@pytest.mark.parametrize(
    "char, expected",
    [(" ", 0b1111_1111), ("-", 0b1011_1111), ("_", 0b1111_0111), ("?", 0b1111_1111), ("é", 0b1111_1111)],
)
def test_symbols(char, expected):
    assert char_to_segment_code(char) == expected


def test_from_pair_rules():
    assert SegmentCode.from_pair(".", ".") == SegmentCode(".")
    assert SegmentCode.from_pair(".", "1") is None
    assert SegmentCode.from_pair("2", ".") == SegmentCode("2", dot=True)
    assert SegmentCode.from_pair("2", "3") == SegmentCode("2")


def test_dot_clears_top_bit():
    plain = SegmentCode("4").to_byte()
    dotted = SegmentCode("4", dot=True).to_byte()
    assert plain == NUMERALS[4]
    assert dotted == plain & 0x7F
    assert SegmentCode(".").to_byte() == BLANK


def test_parse_number_with_point():
    result = parse("21.50", 4)
    assert len(result) == 4
    assert result[0] == NUMERALS[2]
    assert result[1] == NUMERALS[1] & 0x7F
    assert result[2:] == bytes([NUMERALS[5], NUMERALS[0]])


def test_parse_pads_on_left():
    assert parse("7", 4) == bytes([BLANK, BLANK, BLANK, NUMERALS[7]])
    assert parse("", 3) == bytes([BLANK] * 3)


def test_parse_truncates_to_size():
    result = parse("123456", 4)
    assert result == bytes(NUMERALS[1:5])


def test_parse_accepts_non_strings():
    assert parse(42, 4) == parse("42", 4)


def test_write_pushes_and_latches():
    pi = RecordingPi()
    register = ShiftRegister(pi, DS, SH, ST, 4)
    write(register, "8.8")
    bits = [int(level) for gpio, level in pi.writes if gpio == DS]
    assert len(bits) == 32
    rebuilt = bytes(
        int("".join(map(str, bits[i : i + 8])), 2) for i in range(0, 32, 8)
    )
    assert rebuilt == parse("8.8", 4)
    assert [gpio for gpio, _ in pi.writes[-2:]] == [ST, ST]