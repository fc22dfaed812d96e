"""
Schema Package

Wire schemas for the hack.chat protocol, organized by direction:
    - commands: Outbound commands sent by the client
    - events: Inbound events decoded from server frames
"""

from .base import BaseRequest, ChatEvent
from .commands import (
    JoinRequest,
    PingRequest,
    SendMessageRequest,
    StatsRequest,
    WhisperRequest,
)
from .events import (
    InfoEvent,
    JoinRoomEvent,
    LeaveRoomEvent,
    MessageEvent,
    OnlineSetEvent,
    UnknownEvent,
    WarnEvent,
    WhisperEvent,
)

__all__ = [
    # Base classes
    "BaseRequest",
    "ChatEvent",
    # Commands
    "JoinRequest",
    "SendMessageRequest",
    "WhisperRequest",
    "PingRequest",
    "StatsRequest",
    # Events
    "MessageEvent",
    "JoinRoomEvent",
    "LeaveRoomEvent",
    "OnlineSetEvent",
    "InfoEvent",
    "WarnEvent",
    "WhisperEvent",
    "UnknownEvent",
]
