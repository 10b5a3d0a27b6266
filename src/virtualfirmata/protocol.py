import logging
import threading

from serial.threaded import Protocol

from .constants import ProtocolConstants, command_family, hexdump
from .handlers import MIDI_HANDLERS, SYSEX_HANDLERS
from .pins import PinRegistry

logger = logging.getLogger(__name__)


class ProtocolHandler(Protocol):
    """Device side of the Firmata protocol.

    Reassembles inbound chunks into commands and dispatches them to the
    handler tables, which drive ``board``. Replies are written to the
    transport given to :meth:`connection_made`.
    """

    def __init__(self, board, transport=None, firmware_name=None):
        self.board = board
        self.transport = transport
        self.firmware_name = firmware_name or ProtocolConstants.FIRMWARE_NAME
        self.midi_handlers = MIDI_HANDLERS
        self.sysex_handlers = SYSEX_HANDLERS
        self.buffer = bytearray()
        self.pins = PinRegistry(board, self.send)
        self._write_lock = threading.Lock()

    def connection_made(self, transport):
        with self._write_lock:
            self.transport = transport
        logger.info("Connection established")

    def connection_lost(self, exc):
        if exc is not None:
            logger.error("Connection lost: %s", exc)
        else:
            logger.info("Connection closed")
        self.buffer.clear()
        with self._write_lock:
            self.transport = None

    def send(self, data):
        """Write one outbound frame; safe to call from backend threads."""
        data = bytes(data)
        with self._write_lock:
            transport = self.transport
            if transport is None:
                logger.warning("Dropping %d outbound bytes: no transport", len(data))
                return
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("out: %s", hexdump(data))
            transport.write(data)

    def data_received(self, data):
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("in: %s", hexdump(data))
        for position, b in enumerate(data):
            self.process_byte(b, position)

    def process_byte(self, b, position=None):
        buf = self.buffer
        if not buf and b == 0:
            return

        if position == 0 and b in ProtocolConstants.ONE_BYTE_COMMANDS:
            self.dispatch_one_byte(b)
            return

        buf.append(b)

        if buf[0] == ProtocolConstants.START_SYSEX:
            if len(buf) > 1 and buf[-1] == ProtocolConstants.END_SYSEX:
                self.dispatch_sysex()
            elif len(buf) >= ProtocolConstants.MAX_SYSEX_BYTES:
                logger.warning("Discarding unterminated sysex after %d bytes", len(buf))
                buf.clear()
            return

        cmd = command_family(buf[0])
        if cmd not in self.midi_handlers:
            # Monitoring only: the length checks below do the recovery.
            logger.debug("Out of sync: 0x%02X does not start a command", buf[0])

        if len(buf) == 2 and cmd in (ProtocolConstants.REPORT_ANALOG,
                                     ProtocolConstants.REPORT_DIGITAL):
            self.dispatch_midi(cmd)
        elif len(buf) == 3:
            if cmd in self.midi_handlers:
                self.dispatch_midi(cmd)
            else:
                logger.debug("Discarding unknown command: %s", hexdump(buf))
                buf.clear()

    def dispatch_one_byte(self, b):
        logger.debug("One byte command 0x%02X", b)
        try:
            self.midi_handlers[b](self, bytes([b]))
        except Exception:
            logger.exception("Error running one byte command 0x%02X", b)

    def dispatch_midi(self, cmd):
        frame = bytes(self.buffer)
        self.buffer.clear()
        try:
            self.midi_handlers[cmd](self, frame)
        except Exception:
            logger.exception("Error handling command 0x%02X: %s", cmd, hexdump(frame))

    def dispatch_sysex(self):
        frame = bytes(self.buffer)
        self.buffer.clear()
        subcommand = frame[1]
        handler = self.sysex_handlers.get(subcommand)
        if handler is None:
            logger.info("Unhandled sysex 0x%02X: %s", subcommand, hexdump(frame))
            return
        try:
            handler(self, frame)
        except Exception:
            logger.exception("Error handling sysex 0x%02X: %s", subcommand, hexdump(frame))
