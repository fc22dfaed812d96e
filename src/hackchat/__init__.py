"""
hackchat Package

An asyncio client library for hack.chat: connect to a channel, iterate the
channel's events and send messages back.

Schemas are organized in the `schemas` subpackage by direction:
    - commands: Frames the client sends
    - events: Events decoded from frames the server sends
"""

from .chat_client import HACKCHAT_URL, ChatClient
from .exceptions import (
    ChatConnectionError,
    ConnectionLost,
    DecodeError,
    EncodingError,
    HackChatError,
    SendError,
)
from .keep_alive import KEEP_ALIVE_INTERVAL, KeepAlive
from .protocol import decode, encode
from .schemas import (
    # Base classes
    BaseRequest,
    ChatEvent,
    # Commands
    JoinRequest,
    PingRequest,
    SendMessageRequest,
    StatsRequest,
    WhisperRequest,
    # Events
    InfoEvent,
    JoinRoomEvent,
    LeaveRoomEvent,
    MessageEvent,
    OnlineSetEvent,
    UnknownEvent,
    WarnEvent,
    WhisperEvent,
)
from .session import CONNECT_TIMEOUT, Identity, SessionState, TransportSession
from .stream import EventStream

__all__ = [
    # Client classes
    "ChatClient",
    "TransportSession",
    "EventStream",
    "KeepAlive",
    "Identity",
    "SessionState",
    # Codec
    "encode",
    "decode",
    # Configuration defaults
    "HACKCHAT_URL",
    "CONNECT_TIMEOUT",
    "KEEP_ALIVE_INTERVAL",
    # Exceptions
    "HackChatError",
    "ChatConnectionError",
    "ConnectionLost",
    "SendError",
    "DecodeError",
    "EncodingError",
    # Base schema classes
    "BaseRequest",
    "ChatEvent",
    # Command schemas
    "JoinRequest",
    "SendMessageRequest",
    "WhisperRequest",
    "PingRequest",
    "StatsRequest",
    # Event schemas
    "MessageEvent",
    "JoinRoomEvent",
    "LeaveRoomEvent",
    "OnlineSetEvent",
    "InfoEvent",
    "WarnEvent",
    "WhisperEvent",
    "UnknownEvent",
]
