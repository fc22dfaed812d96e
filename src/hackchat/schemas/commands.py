"""
Command Schema Definitions

This module defines the outbound commands a client can send. Each command
maps to exactly one wire frame.
"""

from dataclasses import dataclass

from .base import BaseRequest


@dataclass(frozen=True)
class JoinRequest(BaseRequest):
    """
    Request to join a channel. Sent once, right after connecting.

    Attributes:
        nick: Nickname to use in the channel
        channel: Name of the channel to join
    """

    nick: str
    channel: str

    @property
    def _command(self) -> str:
        """Return the command for join requests."""
        return "join"


@dataclass(frozen=True)
class SendMessageRequest(BaseRequest):
    """
    Request to post a chat message to the joined channel.

    Attributes:
        text: The message content
    """

    text: str

    @property
    def _command(self) -> str:
        """Return the command for chat messages."""
        return "chat"


@dataclass(frozen=True)
class WhisperRequest(BaseRequest):
    """
    Request to send a private message to one user of the channel.

    Attributes:
        nick: Nickname of the recipient
        text: The message content
    """

    nick: str
    text: str

    @property
    def _command(self) -> str:
        return "whisper"


@dataclass(frozen=True)
class PingRequest(BaseRequest):
    """Keep-alive frame; carries no payload."""

    @property
    def _command(self) -> str:
        return "ping"


@dataclass(frozen=True)
class StatsRequest(BaseRequest):
    """
    Request for server statistics.

    The server answers with an info frame holding the number of connected
    IPs and channels.
    """

    @property
    def _command(self) -> str:
        return "stats"
