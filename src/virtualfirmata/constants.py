"""Firmata wire constants."""


def hexdump(data):
    return " ".join("{0:02X}".format(b) for b in data)


class ProtocolConstants:

    # Version reported to the host in REPORT_VERSION and QUERY_FIRMWARE replies.
    FIRMATA_PROTOCOL_MAJOR_VERSION = 2
    FIRMATA_PROTOCOL_MINOR_VERSION = 3

    FIRMWARE_NAME = "VirtualFirmata"

    # message command bytes (128-255/0x80-0xFF)
    DIGITAL_MESSAGE = 0x90 # send data for a digital port
    ANALOG_MESSAGE = 0xE0 # send data for an analog pin (or PWM)
    REPORT_ANALOG = 0xC0 # enable analog input by pin #
    REPORT_DIGITAL = 0xD0 # enable digital input by port pair

    SET_PIN_MODE = 0xF4 # set a pin to INPUT/OUTPUT/PWM/etc
    SET_DIGITAL_PIN_VALUE = 0xF5 # set value of an individual digital pin

    REPORT_VERSION = 0xF9 # report protocol version

    START_SYSEX = 0xF0 # start a MIDI Sysex message
    END_SYSEX = 0xF7 # end a MIDI Sysex message

    SYSTEM_RESET = 0xFF # reset from MIDI

    # extended command set using sysex (0-127/0x00-0x7F)
    ANALOG_MAPPING_QUERY = 0x69 # ask for mapping of analog to pin numbers
    ANALOG_MAPPING_RESPONSE = 0x6A # reply with mapping info
    CAPABILITY_QUERY = 0x6B # ask for supported modes and resolution of all pins
    CAPABILITY_RESPONSE = 0x6C # reply with supported modes and resolution
    PIN_STATE_QUERY = 0x6D # ask for a pin's current mode and value
    PIN_STATE_RESPONSE = 0x6E # reply with pin's current mode and value
    EXTENDED_ANALOG = 0x6F # analog write (PWM, Servo, etc) to any pin
    SERVO_CONFIG = 0x70 # set minPulse, maxPulse
    STRING_DATA = 0x71 # a string message with 14-bits per char
    STEPPER_DATA = 0x72 # control a stepper motor
    ONEWIRE_DATA = 0x73 # send an OneWire read/write/reset/select/skip/search request
    PULSE_IN = 0x74 # measure the length of a pulse
    I2C_REQUEST = 0x76 # send an I2C read/write request
    I2C_REPLY = 0x77 # a reply to an I2C read request
    I2C_CONFIG = 0x78 # config I2C settings such as delay times and power pins
    REPORT_FIRMWARE = 0x79 # report name and version of the firmware
    SAMPLING_INTERVAL = 0x7A # set the poll rate of the main loop

    # pin modes
    INPUT = 0x00
    OUTPUT = 0x01
    PIN_MODE_ANALOG = 0x02 # analog pin in analogInput mode
    PIN_MODE_PWM = 0x03 # digital pin in PWM output mode
    PIN_MODE_SERVO = 0x04 # digital pin in Servo output mode
    PIN_MODE_SHIFT = 0x05 # shiftIn/shiftOut mode
    PIN_MODE_I2C = 0x06 # pin included in I2C setup
    PIN_MODE_ONEWIRE = 0x07 # pin configured for 1-wire
    PIN_MODE_STEPPER = 0x08 # pin configured for stepper motor
    PIN_MODE_IGNORE = 0x7F # pin configured to be ignored by digitalWrite and capabilityResponse

    # resolution in bits advertised in the capability response
    RESOLUTION = {
        INPUT: 1,
        OUTPUT: 1,
        PIN_MODE_ANALOG: 10,
        PIN_MODE_PWM: 8,
        PIN_MODE_SERVO: 14,
        PIN_MODE_I2C: 1,
    }

    # analog mapping entry for pins without an analog channel
    NO_ANALOG_CHANNEL = 0x7F
    # terminates each pin's entry in the capability response
    CAPABILITY_PIN_END = 0x7F

    # I2C_REQUEST read/write mode, bits 3-4 of the second byte
    I2C_WRITE = 0x00
    I2C_READ = 0x01
    I2C_CONTINUOUS_READ = 0x02
    I2C_STOP_READING = 0x03
    I2C_10BIT_ADDRESS_MODE = 0x20

    # commands answered as soon as they open an inbound chunk
    ONE_BYTE_COMMANDS = (REPORT_VERSION, SYSTEM_RESET)

    MAX_SYSEX_BYTES = 1024 # longest inbound sysex frame, brackets included


def command_family(b):
    """Map a command byte to its dispatch key.

    Below 0xF0 the low nibble is a channel (pin or port), so only the high
    nibble selects the command.
    """
    if b < 0xF0:
        return b & 0xF0
    return b

