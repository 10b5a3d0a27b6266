"""Command handlers and the tables that route frames to them.

Every handler is called as ``handler(protocol, frame)``, where ``frame`` is
the complete command as received, including the command byte and, for
sysex, the START_SYSEX/END_SYSEX brackets.
"""

import logging
from types import MappingProxyType

from .board import capability
from .codec import (decode14, decode_14bit_pairs, decode_extended, encode14,
                    encode_ascii_as_7bit, encode_extended)
from .constants import ProtocolConstants, hexdump
from .pins import PINS_PER_PORT

logger = logging.getLogger(__name__)

C = ProtocolConstants

# register field of an I2C reply when the request named no register
I2C_REGISTER_NOT_SPECIFIED = 0x3FFF


def sysex(command, payload=b""):
    return bytes([C.START_SYSEX, command]) + bytes(payload) + bytes([C.END_SYSEX])


def optional_call(protocol, name, *args):
    method = capability(protocol.board, name)
    if method is None:
        logger.warning("Board does not support %s, ignoring request", name)
        return None
    return method(*args)


# MIDI-style commands

def report_version(protocol, frame):
    protocol.send(bytes([C.REPORT_VERSION,
                         C.FIRMATA_PROTOCOL_MAJOR_VERSION,
                         C.FIRMATA_PROTOCOL_MINOR_VERSION]))


def system_reset(protocol, frame):
    logger.info("System reset")
    optional_call(protocol, "reset")


def analog_message(protocol, frame):
    pin = frame[0] & 0x0F
    value = decode14(frame[1], frame[2])
    protocol.board.analog_write(pin, value)


def digital_message(protocol, frame):
    port = frame[0] & 0x0F
    protocol.pins.on_digital_port_report(port, decode14(frame[1], frame[2]))


def set_pin_mode(protocol, frame):
    protocol.pins.on_pin_mode_command(frame[1], frame[2])


def set_digital_pin_value(protocol, frame):
    index, value = frame[1], 1 if frame[2] else 0
    pin = protocol.pins.get_pin(index)
    if pin is None:
        logger.debug("Ignoring write to unknown pin %d", index)
        return
    pin.value = value
    protocol.board.digital_write(index, value)


def report_analog(protocol, frame):
    pin = frame[0] & 0x0F
    if frame[1]:
        protocol.pins.ensure_analog_subscription(pin)
    else:
        protocol.board.report_analog_pin(pin, 0)


def report_digital(protocol, frame):
    port = frame[0] & 0x0F
    first = port * PINS_PER_PORT
    pins = range(first, min(first + PINS_PER_PORT, len(protocol.board.pins)))
    if frame[1]:
        for index in pins:
            protocol.pins.ensure_digital_subscription(index)
    else:
        for index in pins:
            protocol.board.report_digital_pin(index, 0)


# sysex commands

def query_firmware(protocol, frame):
    payload = bytes([C.FIRMATA_PROTOCOL_MAJOR_VERSION, C.FIRMATA_PROTOCOL_MINOR_VERSION])
    payload += encode_ascii_as_7bit(protocol.firmware_name)
    version = bytes([C.REPORT_VERSION,
                     C.FIRMATA_PROTOCOL_MAJOR_VERSION,
                     C.FIRMATA_PROTOCOL_MINOR_VERSION])
    protocol.send(version + sysex(C.REPORT_FIRMWARE, payload))


def capability_response(pins):
    payload = bytearray()
    for pin in pins:
        modes = pin.supported_modes
        if C.OUTPUT in modes:
            payload += bytes([C.INPUT, C.RESOLUTION[C.INPUT], C.OUTPUT, C.RESOLUTION[C.OUTPUT]])
        for mode in (C.PIN_MODE_ANALOG, C.PIN_MODE_PWM, C.PIN_MODE_SERVO, C.PIN_MODE_I2C):
            if mode in modes:
                payload += bytes([mode, C.RESOLUTION[mode]])
        payload.append(C.CAPABILITY_PIN_END)
    return sysex(C.CAPABILITY_RESPONSE, payload)


def capability_query(protocol, frame):
    board = protocol.board

    def write_capabilities(*args):
        protocol.send(capability_response(board.pins))

    if board.pins:
        write_capabilities()
    else:
        board.query_capabilities(write_capabilities)


def analog_mapping_response(pins):
    payload = bytes(C.NO_ANALOG_CHANNEL if pin.analog_channel is None else pin.analog_channel & 0x7F
                    for pin in pins)
    return sysex(C.ANALOG_MAPPING_RESPONSE, payload)


def analog_mapping_query(protocol, frame):
    board = protocol.board

    def write_mappings(*args):
        protocol.send(analog_mapping_response(board.pins))

    query = capability(board, "query_analog_mapping")
    if query is not None:
        query(write_mappings)
    else:
        write_mappings()


def pin_state_query(protocol, frame):
    index = frame[2]
    pin = protocol.pins.get_pin(index)
    if pin is None:
        logger.debug("Pin state query for unknown pin %d", index)
        return
    value = max(int(pin.value or 0), 0)
    byte_count = max(1, (value.bit_length() + 6) // 7)
    payload = bytes([index, pin.mode]) + encode_extended(value, byte_count)
    protocol.send(sysex(C.PIN_STATE_RESPONSE, payload))


def extended_analog(protocol, frame):
    pin = frame[2]
    value = decode_extended(frame[3:-1])
    protocol.board.analog_write(pin, value)


def servo_config(protocol, frame):
    pin = frame[2]
    min_pulse = decode14(frame[3], frame[4])
    max_pulse = decode14(frame[5], frame[6])
    optional_call(protocol, "servo_config", pin, min_pulse, max_pulse)


def string_data(protocol, frame):
    text = "".join(chr(c) for c in decode_14bit_pairs(frame[2:-1])).replace("\0", "")
    logger.info("String data: %s", text)
    method = capability(protocol.board, "string_data")
    if method is not None:
        method(text)


def i2c_reply(address, register, data):
    payload = bytearray(encode14(address))
    payload += bytes(encode14(register))
    for b in data:
        payload += bytes(encode14(b))
    return sysex(C.I2C_REPLY, payload)


def i2c_request(protocol, frame):
    address = frame[2] | ((frame[3] & 0x07) << 7)
    mode = (frame[3] >> 3) & 0x03
    words = decode_14bit_pairs(frame[4:-1])

    if mode == C.I2C_WRITE:
        optional_call(protocol, "i2c_write", address, words)
        return

    if mode == C.I2C_STOP_READING:
        # No cancellation hook exists on the backend.
        logger.info("I2C stop reading for 0x%02X accepted", address)
        return

    if len(words) >= 2:
        register, num_bytes = words[0], words[1]
    elif words:
        register, num_bytes = None, words[0]
    else:
        logger.warning("I2C read request for 0x%02X without byte count", address)
        return

    reply_register = I2C_REGISTER_NOT_SPECIFIED if register is None else register

    def on_data(data):
        protocol.send(i2c_reply(address, reply_register, data))

    if mode == C.I2C_READ:
        optional_call(protocol, "i2c_read_once", address, register, num_bytes, on_data)
    else:
        optional_call(protocol, "i2c_read", address, register, num_bytes, on_data)


def i2c_reply_received(protocol, frame):
    address = decode14(frame[2], frame[3])
    register = decode14(frame[4], frame[5])
    data = decode_14bit_pairs(frame[6:-1])
    logger.debug("Ignoring I2C reply from 0x%02X register %d: %s", address, register, data)


def i2c_config(protocol, frame):
    delay = decode14(frame[2], frame[3]) if len(frame) > 4 else 0
    optional_call(protocol, "i2c_config", delay)


def sampling_interval(protocol, frame):
    optional_call(protocol, "set_sampling_interval", decode14(frame[2], frame[3]))


def not_implemented(name):
    def handler(protocol, frame):
        logger.info("%s not implemented: %s", name, hexdump(frame))
    handler.__name__ = name.lower()
    return handler


MIDI_HANDLERS = MappingProxyType({
    C.REPORT_VERSION: report_version,
    C.SYSTEM_RESET: system_reset,
    C.ANALOG_MESSAGE: analog_message,
    C.DIGITAL_MESSAGE: digital_message,
    C.SET_PIN_MODE: set_pin_mode,
    C.SET_DIGITAL_PIN_VALUE: set_digital_pin_value,
    C.REPORT_ANALOG: report_analog,
    C.REPORT_DIGITAL: report_digital,
})

SYSEX_HANDLERS = MappingProxyType({
    C.REPORT_FIRMWARE: query_firmware,
    C.CAPABILITY_QUERY: capability_query,
    C.ANALOG_MAPPING_QUERY: analog_mapping_query,
    C.PIN_STATE_QUERY: pin_state_query,
    C.EXTENDED_ANALOG: extended_analog,
    C.SERVO_CONFIG: servo_config,
    C.STRING_DATA: string_data,
    C.I2C_REQUEST: i2c_request,
    C.I2C_REPLY: i2c_reply_received,
    C.I2C_CONFIG: i2c_config,
    C.SAMPLING_INTERVAL: sampling_interval,
    C.STEPPER_DATA: not_implemented("STEPPER_DATA"),
    C.ONEWIRE_DATA: not_implemented("ONEWIRE_DATA"),
    C.PULSE_IN: not_implemented("PULSE_IN"),
})
