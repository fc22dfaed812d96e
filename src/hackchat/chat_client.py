"""
Chat Client for hack.chat

This module provides the ChatClient class, the entry point applications
use. It ties together the session, the event stream and the keep-alive
emitter for one nickname in one channel.

Architecture:
    - One TransportSession per client; a failed connect is final
    - One EventStream per client, consumed by a single task
    - Optional KeepAlive task sharing the session's send path

Usage:
    async with ChatClient("TestBot", "botDev") as chat:
        chat.start_keep_alive()
        async for event in chat:
            if isinstance(event, MessageEvent):
                print(f"<{event.nick}> {event.text}")
"""

import logging
from typing import Callable, Optional

from .exceptions import ChatConnectionError
from .keep_alive import KEEP_ALIVE_INTERVAL, KeepAlive
from .protocol import encode
from .schemas import (
    BaseRequest,
    SendMessageRequest,
    StatsRequest,
    WhisperRequest,
)
from .session import CONNECT_TIMEOUT, Identity, TransportSession
from .stream import EventStream

logger = logging.getLogger(__name__)

# Public hack.chat WebSocket endpoint
HACKCHAT_URL = "wss://hack.chat/chat-ws"


class ChatClient:
    """
    Client connected to one hack.chat channel under one nickname.

    Attributes:
        identity: Nickname and room this client joins as
        session: The underlying TransportSession
    """

    def __init__(
        self,
        nick: str,
        room: str,
        url: str = HACKCHAT_URL,
        websocket_factory: Optional[Callable] = None,
        connect_timeout: float = CONNECT_TIMEOUT,
    ):
        """
        Initialize the client without connecting.

        Args:
            nick: Nickname to join with
            room: Channel to join (the part after '?' in a hack.chat URL)
            url: WebSocket URL of the server
            websocket_factory: Optional factory for creating WebSocket
                             connections (for dependency injection/testing)
            connect_timeout: Seconds allowed for connect plus join handshake
        """
        self.identity = Identity(nickname=nick, room=room)
        self.session = TransportSession(
            url,
            websocket_factory=websocket_factory,
            connect_timeout=connect_timeout,
        )
        self._events = EventStream(self.session)
        self._keep_alive: Optional[KeepAlive] = None

        logger.info("ChatClient initialized for %s in ?%s", nick, room)

    @classmethod
    async def join(cls, nick: str, room: str, **kwargs) -> "ChatClient":
        """
        Create a client and connect it in one step.

        Args:
            nick: Nickname to join with
            room: Channel to join
            **kwargs: Passed to the constructor

        Returns:
            A connected ChatClient

        Raises:
            ChatConnectionError: If the connection or join fails
        """
        client = cls(nick, room, **kwargs)
        await client.connect()
        return client

    @property
    def nick(self) -> str:
        return self.identity.nickname

    @property
    def room(self) -> str:
        return self.identity.room

    @property
    def is_connected(self) -> bool:
        """Check if the client's session is open."""
        return self.session.is_open

    async def connect(self) -> None:
        """
        Connect to the server and join the channel.

        Raises:
            ChatConnectionError: If the connection or join fails, or the
                client was already connected once
        """
        await self.session.connect(self.identity)

    def start_keep_alive(self, interval: float = KEEP_ALIVE_INTERVAL) -> None:
        """
        Start sending periodic pings to keep the connection open.

        Only the first call starts the task; later calls do nothing.

        Args:
            interval: Seconds between pings

        Raises:
            ChatConnectionError: If the client is not connected
        """
        if self._keep_alive is not None:
            logger.debug("Keep-alive already started for %s", self.nick)
            return
        if not self.is_connected:
            raise ChatConnectionError("Not connected to a hack.chat server")

        self._keep_alive = KeepAlive(self.session, interval=interval)
        self._keep_alive.start()

    def iter(self) -> EventStream:
        """
        Return the client's event stream.

        Every call returns the same stream; events are consumed once.
        """
        return self._events

    def __aiter__(self) -> EventStream:
        return self._events

    async def send_message(self, text: str) -> None:
        """
        Post a chat message to the channel.

        Args:
            text: The message content

        Raises:
            EncodingError: If the text cannot be sent
            SendError: If the session is closed or the write fails
        """
        logger.info("Sending message to ?%s", self.room)
        await self._send(SendMessageRequest(text))

    async def send_whisper(self, nick: str, text: str) -> None:
        """
        Send a private message to one user of the channel.

        Args:
            nick: Nickname of the recipient
            text: The message content

        Raises:
            EncodingError: If the text cannot be sent
            SendError: If the session is closed or the write fails
        """
        logger.info("Sending whisper to %s", nick)
        await self._send(WhisperRequest(nick, text))

    async def send_stats_request(self) -> None:
        """
        Ask the server for statistics.

        The answer arrives on the event stream as an InfoEvent with the
        number of connected IPs and channels.
        """
        await self._send(StatsRequest())

    async def _send(self, request: BaseRequest) -> None:
        await self.session.send_frame(encode(request))

    async def close(self) -> None:
        """Close the connection and wait for the keep-alive task to end."""
        await self.session.close()
        if self._keep_alive is not None:
            await self._keep_alive.wait()

    async def __aenter__(self) -> "ChatClient":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
