"""
Transport Session for hack.chat

This module owns the single WebSocket connection of a client. It opens the
connection, performs the join handshake and exposes the two primitives the
rest of the library is built on: send one frame and receive the next frame.

Architecture:
    - State machine CONNECTING -> OPEN -> CLOSED; CLOSED is terminal
    - Writes are serialized by an asyncio.Lock so the application and the
      keep-alive task never interleave frames; reads take no lock
    - close() is idempotent and wakes a task blocked in receive_frame()
    - Supports dependency injection for the network layer (for testability)

There is no reconnection here: a session connects at most once and callers
decide on any retry.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union

import websockets
from websockets.exceptions import ConnectionClosed, ConnectionClosedOK

from .exceptions import ChatConnectionError, ConnectionLost, SendError
from .protocol import encode
from .schemas import JoinRequest

logger = logging.getLogger(__name__)

# Upper bound for opening the connection and sending the join frame
CONNECT_TIMEOUT = 10  # seconds


@dataclass(frozen=True)
class Identity:
    """
    Who the client joins as.

    Attributes:
        nickname: Nickname shown to the channel
        room: Channel to join
    """

    nickname: str
    room: str


class SessionState(Enum):
    """Lifecycle states of a TransportSession."""

    CONNECTING = "connecting"
    OPEN = "open"
    CLOSED = "closed"


class TransportSession:
    """
    One persistent WebSocket connection to a hack.chat server.

    Attributes:
        url: WebSocket URL of the server (e.g. wss://hack.chat/chat-ws)
        connect_timeout: Seconds allowed for connect plus join handshake
        state: Current SessionState
        close_reason: Why the session closed, None while not closed
    """

    def __init__(
        self,
        url: str,
        websocket_factory: Optional[Callable] = None,
        connect_timeout: float = CONNECT_TIMEOUT,
    ):
        """
        Initialize the session without connecting.

        Args:
            url: WebSocket URL of the server
            websocket_factory: Optional coroutine function creating the
                             connection (for dependency injection/testing)
            connect_timeout: Seconds allowed for connect plus join handshake
        """
        self.url = url
        self.connect_timeout = connect_timeout
        self._websocket_factory = websocket_factory or websockets.connect
        self._websocket = None
        self._state = SessionState.CONNECTING
        self._close_reason: Optional[str] = None
        self._send_lock = asyncio.Lock()
        self._closed = asyncio.Event()
        self._released = False
        self._connect_attempted = False

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def close_reason(self) -> Optional[str]:
        return self._close_reason

    @property
    def is_open(self) -> bool:
        """Check if frames can currently be exchanged."""
        return self._state is SessionState.OPEN

    @property
    def is_closed(self) -> bool:
        return self._state is SessionState.CLOSED

    async def connect(self, identity: Identity) -> None:
        """
        Open the connection and send the join frame for an identity.

        The join frame is always the first frame sent on the connection.

        Args:
            identity: Identity whose nickname and room are joined

        Raises:
            ChatConnectionError: If the session was already used, the
                connection fails, or the handshake times out
        """
        if self._connect_attempted:
            raise ChatConnectionError(
                f"Session already {self._state.value}; create a new one"
            )
        self._connect_attempted = True

        logger.info(
            "Connecting to %s as %s in ?%s",
            self.url,
            identity.nickname,
            identity.room,
        )
        try:
            await asyncio.wait_for(
                self._open_and_join(identity), timeout=self.connect_timeout
            )
        except asyncio.TimeoutError as e:
            logger.error("Timed out connecting to %s", self.url)
            await self.close(reason="connect timed out")
            raise ChatConnectionError(
                f"Timed out after {self.connect_timeout}s connecting to "
                f"{self.url}"
            ) from e
        except Exception as e:
            logger.error("Failed to connect to %s: %s", self.url, e)
            await self.close(reason=f"connect failed: {e}")
            raise ChatConnectionError(
                f"Could not connect to {self.url}: {e}"
            ) from e

        logger.info("Joined ?%s as %s", identity.room, identity.nickname)

    async def _open_and_join(self, identity: Identity) -> None:
        self._websocket = await self._websocket_factory(self.url)
        join_frame = encode(JoinRequest(identity.nickname, identity.room))
        async with self._send_lock:
            await self._websocket.send(join_frame)
        self._state = SessionState.OPEN

    async def send_frame(self, frame: str) -> None:
        """
        Write one frame to the connection.

        Safe to call from several tasks at once; frames are written whole
        and one at a time.

        Args:
            frame: Encoded frame text

        Raises:
            SendError: If the session is not open or the write fails
        """
        async with self._send_lock:
            if self._state is not SessionState.OPEN:
                raise SendError(
                    f"Cannot send on a {self._state.value} session"
                    + (f" ({self._close_reason})" if self._close_reason else "")
                )
            try:
                await self._websocket.send(frame)
            except (ConnectionClosed, OSError) as e:
                logger.warning("Send failed, closing session: %s", e)
                self._mark_closed(f"send failed: {e}")
                raise SendError(f"Failed to send frame: {e}") from e

        logger.debug("Sent frame: %s", frame)

    async def receive_frame(self) -> Optional[Union[str, bytes]]:
        """
        Wait for the next frame from the server.

        Returns:
            The raw frame, or None once the session has closed in an
            orderly way (server close or a local close())

        Raises:
            ChatConnectionError: If the session was never opened
            ConnectionLost: If the connection closed abnormally
        """
        if self._websocket is None:
            if self.is_closed:
                return None
            raise ChatConnectionError("Session is not connected")
        if self.is_closed:
            return None

        recv_task = asyncio.ensure_future(self._websocket.recv())
        closed_task = asyncio.ensure_future(self._closed.wait())
        try:
            done, _ = await asyncio.wait(
                {recv_task, closed_task}, return_when=asyncio.FIRST_COMPLETED
            )
        except asyncio.CancelledError:
            recv_task.cancel()
            raise
        finally:
            closed_task.cancel()

        if recv_task not in done:
            recv_task.cancel()
            logger.debug("Receive interrupted by close")
            return None

        try:
            frame = recv_task.result()
        except ConnectionClosedOK as e:
            logger.info("Connection closed by server")
            self._mark_closed(f"closed by server: {e}")
            return None
        except ConnectionClosed as e:
            code = e.rcvd.code if e.rcvd is not None else None
            logger.warning("Connection lost: %s", e)
            self._mark_closed(f"connection lost: {e}")
            raise ConnectionLost(str(e), code=code) from e

        logger.debug("Received frame: %s", frame)
        return frame

    async def wait_closed(self, timeout: Optional[float] = None) -> bool:
        """
        Wait until the session closes.

        Args:
            timeout: Seconds to wait, or None to wait indefinitely

        Returns:
            True if the session is closed, False if the timeout expired
        """
        try:
            await asyncio.wait_for(self._closed.wait(), timeout=timeout)
        except asyncio.TimeoutError:
            return False
        return True

    async def close(self, reason: str = "closed by client") -> None:
        """
        Close the session. Calling it again has no effect.

        Args:
            reason: Recorded as close_reason if the session was not
                    already closed
        """
        self._mark_closed(reason)
        if self._websocket is None or self._released:
            return
        self._released = True
        await self._websocket.close()
        logger.info("Session closed: %s", self._close_reason)

    def _mark_closed(self, reason: str) -> None:
        if self._state is SessionState.CLOSED:
            return
        self._state = SessionState.CLOSED
        self._close_reason = reason
        self._closed.set()
