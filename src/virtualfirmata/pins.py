import logging

from .board import capability
from .codec import encode14
from .constants import ProtocolConstants

logger = logging.getLogger(__name__)

PINS_PER_PORT = 8


class PinRegistry:
    """Pin modes, port writes and read subscriptions for one board.

    A backend read subscription is installed at most once per pin. Turning
    reporting off never removes it, so turning it back on is a no-op here.
    """

    def __init__(self, board, send):
        self.board = board
        self.send = send
        self.analog_subscriptions = {}
        self.digital_subscriptions = {}

    def get_pin(self, index):
        pins = self.board.pins
        if 0 <= index < len(pins):
            return pins[index]
        return None

    def on_pin_mode_command(self, index, mode):
        pin = self.get_pin(index)
        if pin is None:
            logger.debug("Ignoring mode 0x%02X for unknown pin %d", mode, index)
            return
        pin.mode = mode
        self.board.pin_mode(index, mode)

    def on_digital_port_report(self, port, bitmask):
        for i in range(PINS_PER_PORT):
            index = port * PINS_PER_PORT + i
            pin = self.get_pin(index)
            if pin is None:
                continue
            bit = (bitmask >> i) & 0x01
            if pin.value != bit:
                logger.debug("Writing pin %d = %d", index, bit)
                self.board.digital_write(index, bit)
            pin.value = bit

    def port_bitmask(self, port):
        mask = 0
        for i in range(PINS_PER_PORT):
            pin = self.get_pin(port * PINS_PER_PORT + i)
            if pin is not None and pin.value:
                mask |= 1 << i
        return mask

    def ensure_analog_subscription(self, index):
        if self.analog_subscriptions.get(index):
            return
        self.analog_subscriptions[index] = True

        def on_sample(value):
            self.send(bytes([ProtocolConstants.ANALOG_MESSAGE | (index & 0x0F)]) + bytes(encode14(value)))

        self.board.analog_read(index, on_sample)

    def ensure_digital_subscription(self, index):
        if self.digital_subscriptions.get(index):
            return
        self.digital_subscriptions[index] = True

        digital_read = capability(self.board, "digital_read")
        if digital_read is None:
            self.board.report_digital_pin(index, 1)
            return

        port = index // PINS_PER_PORT

        def on_sample(value):
            pin = self.get_pin(index)
            if pin is not None:
                pin.value = 1 if value else 0
            mask = self.port_bitmask(port)
            self.send(bytes([ProtocolConstants.DIGITAL_MESSAGE | (port & 0x0F)]) + bytes(encode14(mask)))

        digital_read(index, on_sample)
