# cps

`cps` reads a DS18S20 temperature sensor, shows the reading on a
four-digit seven-segment display driven by a shift register and stores every
reading in an SQLite database.

Everything goes through a running pigpio daemon, spoken to over its socket
interface: the GPIO pins are driven with the daemon's commands, and the
sensor's value is read from the 1-Wire sysfs file
(`/sys/bus/w1/devices/<device>/temperature`) through the daemon's file
interface. The machine running `cps` therefore does not have to be the one
the hardware is attached to.

## Installation

```
pip install .
```

The package uses only the standard library. To run the tests:

```
pip install .[test]
pytest
```

## Usage

```
cps ADDRESS [options]
```

`ADDRESS` is the host name or IP address of the pigpio daemon.

| Option | Default | Meaning |
| --- | --- | --- |
| `-p`, `--port` | `8888` | port of the pigpio daemon |
| `-i`, `--input` | `17` | data (input) pin of the shift register |
| `-s`, `--shift` | `22` | shift clock pin of the shift register |
| `-l`, `--latch` | `27` | latch (storage clock) pin of the shift register |
| `-u`, `--url` | `.sqlite.db` | SQLite 3 database; a path, or a URI starting with `file:` |
| `-d`, `--device` | `10-000000000000` | 1-Wire ID of the DS18S20 sensor |
| `-c`, `--count` | unlimited | stop after this many readings |
| `-f`, `--format` | `txt` | output format, `txt` or `csv` |

GPIO numbers must lie between 0 and 53. The count, when given, must be a
positive whole number.

Example, taking ten readings and printing them as CSV:

```
cps 192.168.0.10 --device 10-000000000000 --count 10 --format csv
```

The sensor file's first line is read as millidegrees and divided by 1000.
The display shows the temperature with as many decimals as fit on four
digits (for example `21.37` or `5.125`). Each reading is then stored and
printed on its own line. In `txt` format a line looks like

```
|2024-06-01 12:00:00|21.375|
```

and in `csv` format it holds the UTC timestamp in seconds and the
temperature:

```
1717243200,21.375
```

The `temperatures` table (columns `created_at`, a timestamp filled in by the
database, and `temperature`, a float) is created if the database does not
have it yet. If an insert fails, it is tried once more a second later.

When the daemon cannot be reached, a pin or file command fails, the reading
cannot be parsed or does not fit the display, or the database reports an
error, `cps` prints `Error: <message>` to standard error and exits with
status 1.

## Using the library

- `cps.pi` — `Pi` (a connection to the daemon, usable as a context manager;
  address and port default to `PIGPIO_ADDR`/`PIGPIO_PORT` or
  `localhost:8888`), `Gpio` and `Gpio.parse`, `GpioMode`, `GpioLevel`,
  `FileMode`, `PiFile`, `read_to_string` and `PiError`.
- `cps.shift_register` — `ShiftRegister` with `push`, `push_bytes`, `shift`,
  `save`, `strobe` and `clear`; bytes are shifted in most significant bit
  first.
- `cps.segment_display` — `char_to_segment_code`, `SegmentCode`, `parse`
  and `write` for common-anode seven-segment displays.
- `cps.model` — `Temperature` and `TemperatureStore`.
- `cps.cli` — `parse_args`, `parse_temperature`, `display_text` and `main`.

```python
from cps.pi import Gpio, Pi
from cps.shift_register import ShiftRegister
from cps.segment_display import write

with Pi("192.168.0.10", "8888") as pi:
    register = ShiftRegister(pi, Gpio.parse("17"), Gpio.parse("22"), Gpio.parse("27"), 4)
    write(register, "21.37")
```

`cps.segment_display.parse(value, size)` turns any value into the bytes a
display of `size` digits would show: a decimal point is folded into the
digit before it, letters and digits have their own patterns, `-` and `_` are
shown, anything else is blank, and the result is padded with blanks on the
left.

## What it does not do

`cps` talks only to a pigpio daemon; it does not drive GPIO pins or read
the sensor directly on the local machine. It reads one sensor and drives
one four-digit display, and it only appends readings to the database: it
has no command for querying or exporting stored readings.