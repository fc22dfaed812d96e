"""
Event Schema Definitions

This module defines the events decoded from inbound frames. Every event
that carries a server timestamp exposes it as ``timestamp`` in milliseconds,
or None when the frame had no ``time`` field.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from .base import (
    ChatEvent,
    optional_str,
    optional_time,
    require_str,
    require_str_list,
)


@dataclass(frozen=True)
class MessageEvent(ChatEvent):
    """
    A chat message posted to the channel.

    Attributes:
        nick: Nickname of the sender
        text: The message content
        trip: Sender's trip code, empty when the sender has none
        timestamp: Server time of the message
    """

    nick: str
    text: str
    trip: str = ""
    timestamp: Optional[int] = None

    @classmethod
    def _from_data(cls, data: Dict[str, Any]) -> "MessageEvent":
        """Create from frame data."""
        return cls(
            # Outbound chat frames carry no nick; the server fills it in.
            nick=optional_str(data, "nick"),
            text=require_str(data, "text"),
            trip=optional_str(data, "trip"),
            timestamp=optional_time(data),
        )


@dataclass(frozen=True)
class JoinRoomEvent(ChatEvent):
    """
    Someone joined the channel.

    Attributes:
        nick: Nickname of the new member
        timestamp: Server time of the join
    """

    nick: str
    timestamp: Optional[int] = None

    @classmethod
    def _from_data(cls, data: Dict[str, Any]) -> "JoinRoomEvent":
        """Create from frame data."""
        return cls(nick=require_str(data, "nick"), timestamp=optional_time(data))


@dataclass(frozen=True)
class LeaveRoomEvent(ChatEvent):
    """
    Someone left the channel.

    Attributes:
        nick: Nickname of the departed member
        timestamp: Server time of the departure
    """

    nick: str
    timestamp: Optional[int] = None

    @classmethod
    def _from_data(cls, data: Dict[str, Any]) -> "LeaveRoomEvent":
        """Create from frame data."""
        return cls(nick=require_str(data, "nick"), timestamp=optional_time(data))


@dataclass(frozen=True)
class OnlineSetEvent(ChatEvent):
    """
    Snapshot of the channel roster, sent once after the join completes.

    Attributes:
        nicks: Nicknames of everyone online, in server order
        timestamp: Server time of the snapshot
    """

    nicks: Tuple[str, ...]
    timestamp: Optional[int] = None

    @classmethod
    def _from_data(cls, data: Dict[str, Any]) -> "OnlineSetEvent":
        """Create from frame data."""
        return cls(
            nicks=tuple(require_str_list(data, "nicks")),
            timestamp=optional_time(data),
        )


@dataclass(frozen=True)
class InfoEvent(ChatEvent):
    """
    A notice from the server itself.

    Examples include the answer to a stats request or a user being banned.

    Attributes:
        text: The notice text
        timestamp: Server time of the notice
    """

    text: str
    timestamp: Optional[int] = None

    @classmethod
    def _from_data(cls, data: Dict[str, Any]) -> "InfoEvent":
        return cls(text=require_str(data, "text"), timestamp=optional_time(data))


@dataclass(frozen=True)
class WarnEvent(ChatEvent):
    """A warning from the server, e.g. rate limiting or a rejected nick."""

    text: str
    timestamp: Optional[int] = None

    @classmethod
    def _from_data(cls, data: Dict[str, Any]) -> "WarnEvent":
        return cls(text=require_str(data, "text"), timestamp=optional_time(data))


@dataclass(frozen=True)
class WhisperEvent(ChatEvent):
    """
    A private message.

    The server delivers whispers as info frames with ``"type": "whisper"``
    and the sender in ``from``; a bare ``whisper`` frame names the other
    party in ``nick``.

    Attributes:
        nick: The other party of the whisper
        text: The message content
        trip: Sender's trip code, empty when absent
        timestamp: Server time of the whisper
    """

    nick: str
    text: str
    trip: str = ""
    timestamp: Optional[int] = None

    @classmethod
    def _from_data(cls, data: Dict[str, Any]) -> "WhisperEvent":
        key = "from" if data.get("cmd") == "info" else "nick"
        return cls(
            nick=require_str(data, key),
            text=require_str(data, "text"),
            trip=optional_str(data, "trip"),
            timestamp=optional_time(data),
        )


@dataclass(frozen=True)
class UnknownEvent(ChatEvent):
    """
    A well-formed frame of a kind this client does not know.

    Attributes:
        cmd: The frame's command name
        data: The remaining fields of the frame, read-only. It is left out
            of the hash so events stay hashable.
    """

    cmd: str
    data: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "data", MappingProxyType(dict(self.data)))

    @classmethod
    def _from_data(cls, data: Dict[str, Any]) -> "UnknownEvent":
        payload = {key: value for key, value in data.items() if key != "cmd"}
        return cls(cmd=data["cmd"], data=payload)
