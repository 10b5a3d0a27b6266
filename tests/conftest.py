"""Shared fakes for protocol tests."""

import pytest

from virtualfirmata.board import Pin
from virtualfirmata.constants import ProtocolConstants as C
from virtualfirmata.protocol import ProtocolHandler


class FakeTransport:
    def __init__(self):
        self.writes = []

    def write(self, data):
        self.writes.append(bytes(data))

    @property
    def data(self):
        return b"".join(self.writes)


class FakeBoard:
    """Records every backend call as (method, args)."""

    def __init__(self, pins=None):
        self.pins = pins if pins is not None else []
        self.calls = []
        self.analog_callbacks = {}
        self.digital_callbacks = {}
        self.i2c_callbacks = []
        self.capability_callbacks = []

    def _record(self, name, *args):
        self.calls.append((name, args))

    def called(self, name):
        return [args for method, args in self.calls if method == name]

    def pin_mode(self, pin, mode):
        self._record("pin_mode", pin, mode)

    def digital_write(self, pin, value):
        self._record("digital_write", pin, value)

    def analog_write(self, pin, value):
        self._record("analog_write", pin, value)

    def analog_read(self, pin, callback):
        self._record("analog_read", pin)
        self.analog_callbacks[pin] = callback

    def digital_read(self, pin, callback):
        self._record("digital_read", pin)
        self.digital_callbacks[pin] = callback

    def report_analog_pin(self, pin, enable):
        self._record("report_analog_pin", pin, enable)

    def report_digital_pin(self, pin, enable):
        self._record("report_digital_pin", pin, enable)

    def query_capabilities(self, callback):
        self._record("query_capabilities")
        self.capability_callbacks.append(callback)

    def set_sampling_interval(self, interval):
        self._record("set_sampling_interval", interval)

    def servo_config(self, pin, min_pulse, max_pulse):
        self._record("servo_config", pin, min_pulse, max_pulse)

    def i2c_config(self, delay):
        self._record("i2c_config", delay)

    def i2c_write(self, address, data):
        self._record("i2c_write", address, list(data))

    def i2c_read_once(self, address, register, num_bytes, callback):
        self._record("i2c_read_once", address, register, num_bytes)
        self.i2c_callbacks.append(callback)

    def i2c_read(self, address, register, num_bytes, callback):
        self._record("i2c_read", address, register, num_bytes)
        self.i2c_callbacks.append(callback)

    def reset(self):
        self._record("reset")


class MinimalBoard:
    """Only the required backend methods."""

    def __init__(self, pins):
        self.pins = pins
        self.calls = []

    def pin_mode(self, pin, mode):
        self.calls.append(("pin_mode", pin, mode))

    def digital_write(self, pin, value):
        self.calls.append(("digital_write", pin, value))

    def analog_write(self, pin, value):
        self.calls.append(("analog_write", pin, value))

    def analog_read(self, pin, callback):
        self.calls.append(("analog_read", pin))

    def report_analog_pin(self, pin, enable):
        self.calls.append(("report_analog_pin", pin, enable))

    def report_digital_pin(self, pin, enable):
        self.calls.append(("report_digital_pin", pin, enable))

    def query_capabilities(self, callback):
        self.calls.append(("query_capabilities",))


def make_pins(count=20):
    pins = []
    for i in range(count):
        modes = [C.INPUT, C.OUTPUT]
        if i >= 14:
            modes.append(C.PIN_MODE_ANALOG)
        pins.append(Pin(supported_modes=modes, analog_channel=i - 14 if i >= 14 else None))
    return pins


@pytest.fixture
def board():
    return FakeBoard(make_pins())


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def protocol(board, transport):
    handler = ProtocolHandler(board)
    handler.connection_made(transport)
    return handler
