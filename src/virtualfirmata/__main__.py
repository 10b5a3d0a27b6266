import logging
import signal
import sys
import threading

import serial
from serial.threaded import ReaderThread

from .board import BoardError, load_board
from .config import build_parser, load_config
from .logconfig import configure_logging
from .protocol import ProtocolHandler

logger = logging.getLogger("virtualfirmata")


def protocol_factory(board, firmware_name):
    def factory():
        return ProtocolHandler(board, firmware_name=firmware_name)
    return factory


def run(config, stop=None):
    """Serve ``config.board`` on ``config.port`` until ``stop`` is set or the port fails."""
    if stop is None:
        stop = threading.Event()
    board = load_board(config.board)
    ser = serial.Serial(config.port, config.baudrate)
    logger.info("Serving %s on %s at %d baud", config.board, config.port, config.baudrate)

    reader = ReaderThread(ser, protocol_factory(board, config.firmware_name))
    reader.start()
    try:
        while reader.alive and not stop.is_set():
            stop.wait(0.5)
    finally:
        reader.close()
    logger.info("Stopped")


def main(argv=None):
    parser = build_parser()
    try:
        config = load_config(argv, parser=parser)
    except ValueError as exc:
        parser.error(str(exc))
    configure_logging(config.debug)

    stop = threading.Event()

    def signal_handler(sig, frame):
        logger.info("Received signal %d, shutting down", sig)
        stop.set()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        run(config, stop)
    except BoardError as exc:
        logger.error("%s", exc)
        return 2
    except serial.SerialException as exc:
        logger.error("Serial port error: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
