import pytest

from cps.pi import Gpio, GpioLevel, GpioMode
from cps.shift_register import ShiftRegister


class RecordingPi:
    def __init__(self):
        self.modes = []
        self.writes = []

    def set_mode(self, gpio, mode):
        self.modes.append((gpio, mode))

    def gpio_write(self, gpio, level):
        self.writes.append((gpio, level))


DS, SH, ST = Gpio(17), Gpio(22), Gpio(27)


@pytest.fixture
def register():
    return ShiftRegister(RecordingPi(), DS, SH, ST, 4)


def data_bits(writes):
    return [int(level) for gpio, level in writes if gpio == DS]


def test_init_sets_modes(register):
    assert register.pi.modes == [
        (DS, GpioMode.INPUT),
        (SH, GpioMode.INPUT),
        (ST, GpioMode.INPUT),
    ]


def test_strobe_low_then_high(register):
    register.strobe(ST)
    assert register.pi.writes == [(ST, GpioLevel.LOW), (ST, GpioLevel.HIGH)]


def test_save_strobes_latch(register):
    register.save()
    assert [gpio for gpio, _ in register.pi.writes] == [ST, ST]


def test_push_msb_first(register):
    register.push(0b1010_0001)
    assert data_bits(register.pi.writes) == [1, 0, 1, 0, 0, 0, 0, 1]
    shifts = [w for w in register.pi.writes if w[0] == SH]
    assert len(shifts) == 16


def test_push_pattern_each_bit_followed_by_shift(register):
    register.push(0xFF)
    writes = register.pi.writes
    for index in range(0, len(writes), 3):
        assert writes[index] == (DS, GpioLevel.HIGH)
        assert writes[index + 1] == (SH, GpioLevel.LOW)
        assert writes[index + 2] == (SH, GpioLevel.HIGH)


def test_push_bytes_round_trip(register):
    data = bytes([0x12, 0xAB, 0x00, 0xFF])
    register.push_bytes(data)
    bits = data_bits(register.pi.writes)
    rebuilt = bytes(
        int("".join(map(str, bits[i : i + 8])), 2) for i in range(0, len(bits), 8)
    )
    assert rebuilt == data


def test_clear_pushes_zeros(register):
    register.clear()
    bits = data_bits(register.pi.writes)
    assert len(bits) == 32
    assert set(bits) == {0}


@pytest.mark.parametrize("value", [-1, 256])
def test_push_out_of_range(register, value):
    with pytest.raises(ValueError):
        register.push(value)