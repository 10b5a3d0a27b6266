"""7-bit encoding helpers.

Every data byte on a Firmata link keeps its top bit clear, so wider values
travel as groups of 7 bits, least significant group first.
"""


def encode14(value):
    return value & 0x7F, (value >> 7) & 0x7F


def decode14(low, high):
    return low | (high << 7)


def encode_extended(value, byte_count):
    """Split ``value`` into ``byte_count`` 7-bit groups."""
    return bytes((value >> (7 * i)) & 0x7F for i in range(byte_count))


def decode_extended(data):
    value = 0
    for i, b in enumerate(data):
        value |= (b & 0x7F) << (7 * i)
    return value


def encode_ascii_as_7bit(text):
    out = bytearray()
    for c in text:
        out.extend(encode14(ord(c)))
    return bytes(out)


def decode_14bit_pairs(data):
    """Reassemble (low, high) byte pairs; a trailing odd byte is dropped."""
    return [decode14(data[i], data[i + 1]) for i in range(0, len(data) - 1, 2)]
