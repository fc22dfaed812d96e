"""
Base Schema Classes

This module provides base classes for outbound commands and inbound events
with the common serialization and deserialization methods shared by every
hack.chat frame kind.

Frame Format:
    Every frame is a flat JSON object whose "cmd" field names its kind:
    {
        "cmd": "chat",
        "nick": "...",
        "text": "...",
        ...
    }
"""

import math
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, List, Optional, Type, TypeVar

from ..exceptions import DecodeError

T = TypeVar("T", bound="ChatEvent")


class BaseRequest:
    """
    Base class for outbound command schemas.

    Provides common serialization for converting command objects into the
    dictionary that is sent as a single wire frame.
    """

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Returns:
            Dictionary with the 'cmd' key followed by the command's fields.
            Commands without fields produce only the 'cmd' key.
        """
        frame: Dict[str, Any] = {"cmd": self._command}
        if hasattr(self, "__dataclass_fields__") and fields(self):
            frame.update(asdict(self))
        return frame

    @property
    def _command(self) -> str:
        """
        Command name placed in the frame's 'cmd' field.

        Should be overridden by subclasses to provide the specific command.
        """
        raise NotImplementedError("Subclasses must define _command")


@dataclass(frozen=True)
class ChatEvent:
    """
    Base class for decoded inbound events.

    Events are immutable and each one corresponds to exactly one frame.
    """

    @classmethod
    def from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
        """
        Create an event from a parsed frame.

        Args:
            data: The frame's JSON object, including its 'cmd' field.

        Returns:
            Instance of the event class.

        Raises:
            DecodeError: If a required field is missing or has the wrong type
        """
        return cls._from_data(data)

    @classmethod
    def _from_data(cls: Type[T], data: Dict[str, Any]) -> T:
        """
        Create an event from frame data.

        Should be overridden by subclasses for custom deserialization.
        """
        raise NotImplementedError("Subclasses must define _from_data")


def require_str(data: Dict[str, Any], key: str) -> str:
    """Return a required string field or raise DecodeError."""
    value = data.get(key)
    if not isinstance(value, str):
        raise DecodeError(
            f"'{data.get('cmd')}' frame requires string field '{key}'"
        )
    return value


def optional_str(data: Dict[str, Any], key: str) -> str:
    """Return an optional string field, empty when absent or null."""
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise DecodeError(
            f"'{data.get('cmd')}' frame field '{key}' must be a string"
        )
    return value


def optional_time(data: Dict[str, Any]) -> Optional[int]:
    """Return the server timestamp of a frame, if present."""
    value = data.get("time")
    if value is None:
        return None
    # bool is an int subclass but never a timestamp
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise DecodeError(f"'{data.get('cmd')}' frame has invalid 'time'")
    if isinstance(value, float) and not math.isfinite(value):
        raise DecodeError(f"'{data.get('cmd')}' frame has non-finite 'time'")
    return int(value)


def require_str_list(data: Dict[str, Any], key: str) -> List[str]:
    """Return a required list of strings or raise DecodeError."""
    value = data.get(key)
    if not isinstance(value, list) or not all(
        isinstance(item, str) for item in value
    ):
        raise DecodeError(
            f"'{data.get('cmd')}' frame requires a list of strings in '{key}'"
        )
    return value
