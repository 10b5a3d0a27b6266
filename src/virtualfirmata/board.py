"""Interface between the protocol engine and an I/O backend.

The engine never creates pins. It reads and updates the ``mode`` and
``value`` of the descriptors the backend exposes in ``board.pins``.

Required backend methods::

    pin_mode(pin, mode)
    digital_write(pin, value)
    analog_write(pin, value)
    analog_read(pin, callback)          # callback(value) for every sample
    report_analog_pin(pin, enable)
    report_digital_pin(pin, enable)
    query_capabilities(callback)        # callback() once pins are populated

Optional methods, looked up before each use::

    digital_read(pin, callback)
    query_analog_mapping(callback)
    set_sampling_interval(interval)
    servo_config(pin, min_pulse, max_pulse)
    i2c_config(delay)
    i2c_write(address, data)
    i2c_read_once(address, register, num_bytes, callback)   # callback(data)
    i2c_read(address, register, num_bytes, callback)        # continuous
    string_data(text)
    reset()
"""

import importlib
from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol, Sequence


class BoardError(Exception):
    """A backend could not be loaded."""


@dataclass
class Pin:
    """Pin descriptor owned by the backend."""

    mode: int = 0
    value: int = 0
    supported_modes: list = field(default_factory=list)
    analog_channel: Optional[int] = None


class Board(Protocol):
    """Required part of the backend interface."""

    pins: Sequence[Pin]

    def pin_mode(self, pin: int, mode: int) -> None: ...

    def digital_write(self, pin: int, value: int) -> None: ...

    def analog_write(self, pin: int, value: int) -> None: ...

    def analog_read(self, pin: int, callback: Callable[[int], None]) -> None: ...

    def report_analog_pin(self, pin: int, enable: int) -> None: ...

    def report_digital_pin(self, pin: int, enable: int) -> None: ...

    def query_capabilities(self, callback: Callable[..., None]) -> None: ...


def capability(board, name):
    """Return the backend method ``name``, or None if it is missing."""
    method = getattr(board, name, None)
    if callable(method):
        return method
    return None


def load_board(spec):
    """Import a backend from a ``package.module:attribute`` string.

    If the attribute is callable it is called with no arguments and the
    result is used as the board.
    """
    module_name, sep, attr = spec.partition(":")
    if not sep or not module_name or not attr:
        raise BoardError("Board must be given as module:attribute, got {0!r}".format(spec))
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise BoardError("Cannot import board module {0!r}: {1}".format(module_name, exc)) from exc
    try:
        target = getattr(module, attr)
    except AttributeError:
        raise BoardError("Module {0!r} has no attribute {1!r}".format(module_name, attr)) from None
    board = target() if callable(target) else target
    if not hasattr(board, "pins"):
        raise BoardError("Board {0!r} does not expose pins".format(spec))
    return board
