"""Runtime settings for the serial runner."""

import argparse
import os
from dataclasses import dataclass

from .constants import ProtocolConstants

DEFAULT_BAUDRATE = 57600
ENV_PREFIX = "VIRTUALFIRMATA_"

_TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class RuntimeConfig:
    port: str
    board: str
    baudrate: int = DEFAULT_BAUDRATE
    firmware_name: str = ProtocolConstants.FIRMWARE_NAME
    debug: bool = False

    def __post_init__(self):
        if not self.port:
            raise ValueError("A serial port is required")
        if not self.board:
            raise ValueError("A board (module:attribute) is required")
        if self.baudrate <= 0:
            raise ValueError("Baudrate must be positive, got {0}".format(self.baudrate))
        if not self.firmware_name or not self.firmware_name.isascii():
            raise ValueError("Firmware name must be non-empty ASCII")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="virtualfirmata",
        description="Expose an I/O backend as a Firmata device on a serial port.")
    parser.add_argument("--port", help="serial port, e.g. /dev/ttyS0 ({0}PORT)".format(ENV_PREFIX))
    parser.add_argument("--baudrate", type=int, help="baud rate ({0}BAUDRATE)".format(ENV_PREFIX))
    parser.add_argument("--board", help="backend as module:attribute ({0}BOARD)".format(ENV_PREFIX))
    parser.add_argument("--firmware-name", help="name reported to QUERY_FIRMWARE")
    parser.add_argument("--debug", action="store_true", default=None, help="log every frame")
    return parser


def _env_int(environ, name):
    raw = environ.get(ENV_PREFIX + name)
    if raw in (None, ""):
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError("{0}{1} must be an integer, got {2!r}".format(ENV_PREFIX, name, raw)) from None


def load_config(argv=None, environ=None, parser=None):
    """Build a RuntimeConfig from the environment, overridden by ``argv``."""
    if environ is None:
        environ = os.environ
    if parser is None:
        parser = build_parser()
    args = parser.parse_args(argv)

    values = {
        "port": environ.get(ENV_PREFIX + "PORT", ""),
        "board": environ.get(ENV_PREFIX + "BOARD", ""),
        "debug": environ.get(ENV_PREFIX + "DEBUG", "").lower() in _TRUE_VALUES,
    }
    baudrate = _env_int(environ, "BAUDRATE")
    if baudrate is not None:
        values["baudrate"] = baudrate

    if args.port:
        values["port"] = args.port
    if args.board:
        values["board"] = args.board
    if args.baudrate is not None:
        values["baudrate"] = args.baudrate
    if args.firmware_name:
        values["firmware_name"] = args.firmware_name
    if args.debug:
        values["debug"] = True

    return RuntimeConfig(**values)
