"""Device-side Firmata emulation for arbitrary I/O backends."""

from .board import Board, BoardError, Pin, load_board
from .constants import ProtocolConstants
from .protocol import ProtocolHandler

__version__ = "0.1.0"

__all__ = ["Board", "BoardError", "Pin", "ProtocolConstants", "ProtocolHandler", "load_board"]
