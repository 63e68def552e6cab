"""Encoding text for common-anode seven-segment displays."""

from __future__ import annotations

from dataclasses import dataclass

from cps.shift_register import ShiftRegister

BLANK = 0b1111_1111
_DOT_MASK = 0b0111_1111

NUMERALS = (
    0b1100_0000,  # 0
    0b1111_1001,  # 1
    0b1010_0100,  # 2
    0b1011_0000,  # 3
    0b1001_1001,  # 4
    0b1001_0010,  # 5
    0b1000_0010,  # 6
    0b1111_1000,  # 7
    0b1000_0000,  # 8
    0b1001_1000,  # 9
)

LETTERS = (
    0b1000_1000,  # A
    0b1000_0011,  # B
    0b1100_0110,  # C
    0b1010_0001,  # D
    0b1000_0110,  # E
    0b1000_1110,  # F
    0b1100_0010,  # G
    0b1000_1001,  # H
    0b1100_1111,  # I
    0b1110_0001,  # J
    0b1000_1010,  # K
    0b1100_0111,  # L
    0b1110_1010,  # M
    0b1100_1000,  # N
    0b1100_0000,  # O
    0b1000_1100,  # P
    0b1001_0100,  # Q
    0b1100_1100,  # R
    0b1001_0010,  # S
    0b1000_0111,  # T
    0b1100_0001,  # U
    0b1100_0001,  # V
    0b1101_0101,  # W
    0b1000_1001,  # X
    0b1001_0001,  # Y
    0b1010_0100,  # Z
)

_SYMBOLS = {
    " ": 0b1111_1111,
    "-": 0b1011_1111,
    "_": 0b1111_0111,
}


def char_to_segment_code(char: str) -> int:
    """Segment byte for a single character; unknown characters are blank."""
    if char.isascii():
        if char.isdigit():
            return NUMERALS[ord(char) - ord("0")]
        if char.isalpha():
            return LETTERS[ord(char.upper()) - ord("A")]
    return _SYMBOLS.get(char, BLANK)


@dataclass(frozen=True)
class SegmentCode:
    """A character to show, optionally with the decimal point lit."""

    char: str
    dot: bool = False

    @classmethod
    def from_pair(cls, current: str, following: str) -> SegmentCode | None:
        if current == ".":
            return cls(".") if following == "." else None
        return cls(current, dot=following == ".")

    def to_byte(self) -> int:
        code = char_to_segment_code(self.char)
        return code & _DOT_MASK if self.dot else code


def parse(value: object, size: int) -> bytes:
    """Encode ``value``'s text as ``size`` segment bytes, blank-padded on the left."""
    text = f"{value}"
    following = text[1:] + text[:1]
    codes = (SegmentCode.from_pair(a, b) for a, b in zip(text, following))
    encoded = [code.to_byte() for code in codes if code is not None][:size]
    return bytes([BLANK] * (size - len(encoded)) + encoded)


def write(register: ShiftRegister, value: object) -> None:
    """Show ``value`` on the displays behind ``register``."""
    register.push_bytes(parse(value, register.size))
    register.save()