"""Command line: show a 1-Wire temperature on segment displays and log it."""

from __future__ import annotations

import argparse
import math
import sqlite3
import sys
from enum import Enum
from pathlib import Path

from cps.model import TemperatureStore, _format_f32, _to_f32
from cps.pi import Gpio, Pi, PiError, read_to_string
from cps.segment_display import write
from cps.shift_register import ShiftRegister

_DEVICES = Path("/sys/bus/w1/devices")
_DIGITS = 4


class Format(Enum):
    PLAIN_TEXT = "txt"
    COMMA_SEPARATED_VALUES = "csv"


def _gpio(text: str) -> Gpio:
    try:
        return Gpio.parse(text)
    except PiError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _count(text: str) -> int:
    try:
        value = int(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid count: {text!r}") from exc
    if value <= 0:
        raise argparse.ArgumentTypeError("number would be zero for non-zero type")
    return value


def _format(text: str) -> Format:
    try:
        return Format(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid format: {text!r}") from exc


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cps")
    parser.add_argument("address", help="Address of pigpio daemon")
    parser.add_argument("-p", "--port", default="8888", help="Port of pigpio daemon")
    parser.add_argument(
        "-i", "--input", type=_gpio, default=Gpio(17),
        help="Input pin of shift register",
    )
    parser.add_argument(
        "-s", "--shift", type=_gpio, default=Gpio(22),
        help="Shift pin of shift register",
    )
    parser.add_argument(
        "-l", "--latch", type=_gpio, default=Gpio(27),
        help="Latch pin of shift register",
    )
    parser.add_argument("-u", "--url", default=".sqlite.db", help="SQLite 3 database URL")
    parser.add_argument(
        "-d", "--device", default="10-000000000000", help="DS18S20 sensor ID"
    )
    parser.add_argument(
        "-c", "--count", type=_count, default=None, help="Stop after <COUNT> requests"
    )
    parser.add_argument(
        "-f", "--format", type=_format, default=Format.PLAIN_TEXT,
        metavar="{txt,csv}", help="Output format",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return _build_parser().parse_args(argv)


def parse_temperature(text: str) -> float:
    """Degrees Celsius from the sensor's millidegree reading on its first line."""
    line = text.split("\n", 1)[0]
    if line != line.strip() or "_" in line:
        raise ValueError(f"invalid float literal: {line!r}")
    try:
        raw = _to_f32(float(line))
    except ValueError as exc:
        raise ValueError(f"invalid float literal: {line!r}") from exc
    return _to_f32(raw / 1000.0)


def display_text(temperature: float) -> str:
    """The temperature with as many decimals as fit on four digits."""
    value = _to_f32(temperature)
    if not math.isfinite(value):
        return _format_f32(value)
    integral = _format_f32(value).partition(".")[0]
    width = _DIGITS - len(integral)
    if width < 0:
        raise ValueError(f"temperature does not fit the display: {value}")
    return f"{value:.{width}f}"


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    path = _DEVICES / args.device / "temperature"
    try:
        with Pi(args.address, args.port) as pi:
            register = ShiftRegister(pi, args.input, args.shift, args.latch, _DIGITS)
            with TemperatureStore(args.url) as store:
                done = 0
                while args.count is None or done < args.count:
                    temperature = parse_temperature(read_to_string(pi, path))
                    write(register, display_text(temperature))
                    row = store.insert(temperature)
                    if args.format is Format.PLAIN_TEXT:
                        print(row)
                    else:
                        print(row.to_csv())
                    done += 1
    except (PiError, sqlite3.Error, ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())