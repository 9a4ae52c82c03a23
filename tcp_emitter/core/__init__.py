from .dispatch import InboundDispatcher, IntentKind, OutboundDispatcher
from .emitter import EmitterClient, create_client
from .lifecycle import ConnectionLifecycle, ConnectionState
from .network import NetworkError, StreamTransport, Transport
from .registry import ListenerEntry, ListenerRegistry

__all__ = [
    "EmitterClient",
    "create_client",
    "ConnectionLifecycle",
    "ConnectionState",
    "InboundDispatcher",
    "IntentKind",
    "OutboundDispatcher",
    "NetworkError",
    "StreamTransport",
    "Transport",
    "ListenerEntry",
    "ListenerRegistry",
]
