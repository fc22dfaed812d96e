"""
Frame Codec for the hack.chat Protocol

This module converts outbound commands into wire frames and inbound wire
frames into typed events.

Frame Format:
    Every frame is one WebSocket text message holding a flat JSON object
    whose "cmd" field is the discriminator:
    {"cmd": "chat", "nick": "alice", "text": "hi", "trip": "x9Y7", "time": 1}

Decoding is total over well-formed frames: a frame whose "cmd" is not
known decodes to UnknownEvent instead of being dropped, so each parsed
frame produces exactly one event.
"""

import json
import logging
from typing import Dict, Type, Union

from .exceptions import DecodeError, EncodingError
from .schemas import (
    BaseRequest,
    ChatEvent,
    InfoEvent,
    JoinRoomEvent,
    LeaveRoomEvent,
    MessageEvent,
    OnlineSetEvent,
    UnknownEvent,
    WarnEvent,
    WhisperEvent,
)

logger = logging.getLogger(__name__)

# Maps a frame's "cmd" to the event class that decodes it
EVENT_TYPES: Dict[str, Type[ChatEvent]] = {
    "chat": MessageEvent,
    "onlineAdd": JoinRoomEvent,
    "join": JoinRoomEvent,
    "onlineRemove": LeaveRoomEvent,
    "onlineSet": OnlineSetEvent,
    "info": InfoEvent,
    "warn": WarnEvent,
    "whisper": WhisperEvent,
}


def _reject_constant(name: str) -> None:
    # NaN and Infinity are accepted by json.loads but are not JSON
    raise ValueError(f"Invalid JSON constant {name}")


def encode(request: BaseRequest) -> str:
    """
    Serialize an outbound command into a wire frame.

    Args:
        request: The command to send

    Returns:
        The JSON text of the frame

    Raises:
        EncodingError: If a field is not a string or contains characters
            that cannot be sent as UTF-8 (such as lone surrogates)
    """
    frame = request.to_dict()
    for key, value in frame.items():
        if not isinstance(value, str):
            raise EncodingError(
                f"'{frame['cmd']}' field '{key}' must be a string, "
                f"got {type(value).__name__}"
            )
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise EncodingError(
                f"'{frame['cmd']}' field '{key}' is not valid UTF-8 text: {e}"
            ) from e

    return json.dumps(frame, ensure_ascii=False)


def decode(frame: Union[str, bytes]) -> ChatEvent:
    """
    Parse an inbound wire frame into an event.

    Args:
        frame: The raw frame, as text or UTF-8 bytes

    Returns:
        The decoded event; UnknownEvent for unrecognized commands

    Raises:
        DecodeError: If the frame is not a JSON object with a string "cmd",
            or a known command is missing a required field
    """
    if isinstance(frame, (bytes, bytearray)):
        try:
            frame = bytes(frame).decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Frame is not valid UTF-8: {e}") from e
    elif not isinstance(frame, str):
        raise DecodeError(f"Cannot decode frame of type {type(frame).__name__}")

    try:
        data = json.loads(frame, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        raise DecodeError(f"Frame is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise DecodeError("Frame must be a JSON object")

    cmd = data.get("cmd")
    if not isinstance(cmd, str):
        raise DecodeError("Frame has no string 'cmd' field")

    if cmd == "info" and data.get("type") == "whisper":
        event_type: Type[ChatEvent] = WhisperEvent
    else:
        event_type = EVENT_TYPES.get(cmd, UnknownEvent)

    if event_type is UnknownEvent:
        logger.debug("Unrecognized frame command: %s", cmd)

    return event_type.from_dict(data)
