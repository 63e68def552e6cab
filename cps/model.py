"""Storing temperature readings in an SQLite database."""

from __future__ import annotations

import math
import sqlite3
import struct
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal

_SCHEMA = """
CREATE TABLE IF NOT EXISTS temperatures (
    created_at TIMESTAMP PRIMARY KEY NOT NULL DEFAULT CURRENT_TIMESTAMP,
    temperature FLOAT NOT NULL
)
"""

_RETRY_DELAY = 1.0


def _to_f32(value: float) -> float:
    """Round ``value`` to the nearest single-precision float."""
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _format_f32(value: float) -> str:
    """Shortest decimal text that reads back as the same single-precision float."""
    value = _to_f32(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    text = f"{value:.8e}"
    for digits in range(1, 10):
        candidate = f"{value:.{digits - 1}e}"
        if _to_f32(float(candidate)) == value:
            text = candidate
            break
    return format(Decimal(text), "f")


@dataclass(frozen=True)
class Temperature:
    """A stored reading: when it was taken and the value in degrees Celsius."""

    created_at: datetime
    temperature: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "temperature", _to_f32(self.temperature))

    def to_csv(self) -> str:
        """``<seconds since the epoch, UTC>,<temperature>``."""
        seconds = int(self.created_at.replace(tzinfo=timezone.utc).timestamp())
        return f"{seconds},{_format_f32(self.temperature)}"

    def __str__(self) -> str:
        return f"|{self.created_at}|{self.temperature:>6.3f}|"


class TemperatureStore:
    """The ``temperatures`` table of an SQLite database."""

    def __init__(self, url: str) -> None:
        self.connection = sqlite3.connect(url, uri=url.startswith("file:"))
        with self.connection:
            self.connection.execute(_SCHEMA)

    def _insert_once(self, temperature: float) -> Temperature:
        with self.connection:
            cursor = self.connection.execute(
                "INSERT INTO temperatures (temperature) VALUES (?)", (temperature,)
            )
            created_at, value = self.connection.execute(
                "SELECT created_at, temperature FROM temperatures WHERE rowid = ?",
                (cursor.lastrowid,),
            ).fetchone()
        return Temperature(datetime.fromisoformat(created_at), value)

    def insert(self, temperature: float) -> Temperature:
        """Store a reading, retrying once after a second if the first attempt fails."""
        value = _to_f32(temperature)
        try:
            return self._insert_once(value)
        except sqlite3.Error:
            time.sleep(_RETRY_DELAY)
            return self._insert_once(value)

    def close(self) -> None:
        self.connection.close()

    def __enter__(self) -> "TemperatureStore":
        return self

    def __exit__(self, *args) -> None:
        self.close()