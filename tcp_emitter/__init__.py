"""
Event emitter client that mirrors local listeners as subscriptions on a
delimiter-framed JSON event server.
"""

from .core import ConnectionState, EmitterClient, NetworkError, StreamTransport, create_client
from .protocol import DEFAULT_DELIMITER, FrameDecoder, ProtocolError

__version__ = "0.1.0"

__all__ = [
    "ConnectionState",
    "EmitterClient",
    "NetworkError",
    "StreamTransport",
    "create_client",
    "DEFAULT_DELIMITER",
    "FrameDecoder",
    "ProtocolError",
]
