"""Client for the pigpio daemon's socket interface."""

from __future__ import annotations

import os
import socket
import struct
import threading
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path

PI_BAD_USER_GPIO = -2
PI_BAD_GPIO = -3
PI_BAD_MODE = -4
PI_BAD_LEVEL = -5
PIGIF_BAD_SEND = -2000
PIGIF_BAD_RECV = -2001
PIGIF_BAD_GETADDRINFO = -2002
PIGIF_BAD_CONNECT = -2003

_MESSAGES = {
    PI_BAD_USER_GPIO: "gpio not 0-31",
    PI_BAD_GPIO: "gpio not 0-53",
    PI_BAD_MODE: "mode not 0-7",
    PI_BAD_LEVEL: "level not 0-1",
    PIGIF_BAD_SEND: "failed to send to pigpiod",
    PIGIF_BAD_RECV: "failed to receive from pigpiod",
    PIGIF_BAD_GETADDRINFO: "failed to find address of pigpiod",
    PIGIF_BAD_CONNECT: "failed to connect to pigpiod",
}

_CMD_MODES = 0
_CMD_WRITE = 4
_CMD_FO = 83
_CMD_FC = 84
_CMD_FR = 85

_REQUEST = struct.Struct("<IIII")
_RESPONSE = struct.Struct("<IIIi")

MAX_GPIO = 53
DEFAULT_ADDRESS = "localhost"
DEFAULT_PORT = "8888"


class PiError(Exception):
    """An error reported by the daemon or raised while talking to it."""

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code

    @classmethod
    def from_code(cls, code: int) -> "PiError":
        return cls(_MESSAGES.get(code, "unknown error"), code)


class GpioMode(IntEnum):
    INPUT = 0
    OUTPUT = 1


class GpioLevel(IntEnum):
    LOW = 0
    HIGH = 1


class FileMode(IntEnum):
    READ = 1
    WRITE = 2
    RW = 3


@dataclass(frozen=True)
class Gpio:
    """A Broadcom GPIO number in the range 0-53."""

    number: int

    def __post_init__(self) -> None:
        if not 0 <= self.number <= MAX_GPIO:
            raise PiError.from_code(PI_BAD_GPIO)

    @classmethod
    def parse(cls, text: str) -> "Gpio":
        stripped = text.strip() if isinstance(text, str) else text
        if not isinstance(stripped, str) or not stripped.lstrip("+").isdigit() or stripped != text:
            raise PiError(f"invalid digit found in string: {text!r}")
        return cls(int(text))


def _check_nul(value: str) -> None:
    if "\0" in value:
        raise PiError("nul byte found in provided data")


class Pi:
    """A connection to a pigpio daemon."""

    def __init__(self, address: str | None = None, port: str | None = None) -> None:
        if address is None:
            address = os.environ.get("PIGPIO_ADDR") or DEFAULT_ADDRESS
        if port is None:
            port = os.environ.get("PIGPIO_PORT") or DEFAULT_PORT
        _check_nul(address)
        _check_nul(port)
        self._lock = threading.Lock()
        try:
            self._sock: socket.socket | None = socket.create_connection((address, port))
        except socket.gaierror as exc:
            raise PiError.from_code(PIGIF_BAD_GETADDRINFO) from exc
        except OSError as exc:
            raise PiError.from_code(PIGIF_BAD_CONNECT) from exc
        self._sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)

    def close(self) -> None:
        if self._sock is not None:
            self._sock.close()
            self._sock = None

    def __enter__(self) -> "Pi":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def _recv_exact(self, size: int) -> bytes:
        data = bytearray()
        while len(data) < size:
            chunk = self._sock.recv(size - len(data))
            if not chunk:
                raise PiError.from_code(PIGIF_BAD_RECV)
            data += chunk
        return bytes(data)

    def _command(
        self, cmd: int, p1: int = 0, p2: int = 0, extension: bytes = b""
    ) -> tuple[int, bytes]:
        with self._lock:
            if self._sock is None:
                raise PiError.from_code(PIGIF_BAD_SEND)
            try:
                self._sock.sendall(_REQUEST.pack(cmd, p1, p2, len(extension)) + extension)
            except OSError as exc:
                raise PiError.from_code(PIGIF_BAD_SEND) from exc
            try:
                *_, result = _RESPONSE.unpack(self._recv_exact(_RESPONSE.size))
                payload = b""
                if cmd == _CMD_FR and result > 0:
                    payload = self._recv_exact(result)
            except OSError as exc:
                raise PiError.from_code(PIGIF_BAD_RECV) from exc
        if result < 0:
            raise PiError.from_code(result)
        return result, payload

    def set_mode(self, gpio: Gpio, mode: GpioMode) -> None:
        self._command(_CMD_MODES, gpio.number, int(mode))

    def gpio_write(self, gpio: Gpio, level: GpioLevel) -> None:
        self._command(_CMD_WRITE, gpio.number, int(level))

    def open_file(self, path: str | os.PathLike, mode: FileMode) -> "PiFile":
        name = str(Path(path))
        _check_nul(name)
        handle, _ = self._command(
            _CMD_FO, int(mode), 0, name.encode("utf-8", errors="replace")
        )
        return PiFile(self, handle)

    def _file_read(self, handle: int, size: int) -> bytes:
        _, payload = self._command(_CMD_FR, handle, size)
        return payload

    def _file_close(self, handle: int) -> None:
        try:
            self._command(_CMD_FC, handle)
        except PiError:
            pass


class PiFile:
    """A file opened on the daemon's host."""

    def __init__(self, pi: Pi, handle: int) -> None:
        self._pi = pi
        self._handle: int | None = handle

    @property
    def closed(self) -> bool:
        return self._handle is None

    def read(self, size: int) -> bytes:
        if self._handle is None:
            raise PiError("file is closed")
        return self._pi._file_read(self._handle, size)

    def close(self) -> None:
        if self._handle is not None:
            self._pi._file_close(self._handle)
            self._handle = None

    def __enter__(self) -> "PiFile":
        return self

    def __exit__(self, *args) -> None:
        self.close()


_CHUNK_SIZE = 4096


def read_to_string(pi: Pi, path: str | os.PathLike) -> str:
    """Read a whole file on the daemon's host as UTF-8 text."""
    data = bytearray()
    with pi.open_file(path, FileMode.READ) as file:
        while chunk := file.read(_CHUNK_SIZE):
            data += chunk
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise PiError("stream did not contain valid UTF-8") from exc