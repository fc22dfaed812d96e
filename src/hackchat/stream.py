"""
Event Stream

An async iterator of decoded events backed by a TransportSession. Each
advance waits for the next frame and decodes it; nothing is read ahead.

    async for event in EventStream(session):
        ...

The stream ends when the session closes normally. If the connection is
lost or a frame fails to decode, the error is raised once and the stream
is over; frame order cannot be trusted past a bad frame, so it is not
skipped. A finished stream stays finished.
"""

import logging

from .exceptions import ChatConnectionError, HackChatError
from .protocol import decode
from .schemas import ChatEvent
from .session import SessionState, TransportSession

logger = logging.getLogger(__name__)


class EventStream:
    """
    Single-consumer async iterator of ChatEvent.

    Attributes:
        session: Session frames are pulled from
        events_received: Number of events yielded so far
    """

    def __init__(self, session: TransportSession):
        self.session = session
        self.events_received = 0
        self._finished = False

    @property
    def finished(self) -> bool:
        return self._finished

    def __aiter__(self) -> "EventStream":
        return self

    async def __anext__(self) -> ChatEvent:
        if self._finished:
            raise StopAsyncIteration

        try:
            frame = await self.session.receive_frame()
            if frame is None:
                self._finished = True
                logger.info(
                    "Event stream ended after %d events", self.events_received
                )
                raise StopAsyncIteration
            event = decode(frame)
        except HackChatError as e:
            if (
                isinstance(e, ChatConnectionError)
                and self.session.state is SessionState.CONNECTING
            ):
                # Advanced before connect(); the stream stays usable
                raise
            self._finished = True
            logger.error("Event stream failed: %s", e)
            raise

        self.events_received += 1
        return event
