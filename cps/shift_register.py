"""Driving a serial-in, parallel-out shift register over GPIO."""

from __future__ import annotations

from collections.abc import Iterable

from cps.pi import Gpio, GpioLevel, GpioMode, Pi


class ShiftRegister:
    """A chain of shift registers holding ``size`` bytes."""

    def __init__(
        self, pi: Pi, ds: Gpio, sh_cp: Gpio, st_cp: Gpio, size: int = 4
    ) -> None:
        self.pi = pi
        self.ds = ds
        self.sh_cp = sh_cp
        self.st_cp = st_cp
        self.size = size
        for gpio in (ds, sh_cp, st_cp):
            pi.set_mode(gpio, GpioMode.INPUT)

    def strobe(self, gpio: Gpio) -> None:
        self.pi.gpio_write(gpio, GpioLevel.LOW)
        self.pi.gpio_write(gpio, GpioLevel.HIGH)

    def shift(self) -> None:
        self.strobe(self.sh_cp)

    def save(self) -> None:
        self.strobe(self.st_cp)

    def push(self, byte: int) -> None:
        """Shift one byte in, most significant bit first."""
        if not 0 <= byte <= 0xFF:
            raise ValueError(f"byte out of range: {byte}")
        for bit in reversed(range(8)):
            level = GpioLevel.HIGH if (byte >> bit) & 1 else GpioLevel.LOW
            self.pi.gpio_write(self.ds, level)
            self.shift()

    def push_bytes(self, data: Iterable[int]) -> None:
        for byte in data:
            self.push(byte)

    def clear(self) -> None:
        self.push_bytes(bytes(self.size))