"""
Keep-Alive Emitter

hack.chat drops connections that stay silent for too long. KeepAlive runs a
background task that sends a ping frame on the session at a fixed interval
until the session closes.

The emitter is started explicitly; deployments whose infrastructure already
keeps the connection warm can leave it off.
"""

import asyncio
import logging
from typing import Optional

from .exceptions import SendError
from .protocol import encode
from .schemas import PingRequest
from .session import TransportSession

logger = logging.getLogger(__name__)

# Interval between keep-alive pings
KEEP_ALIVE_INTERVAL = 60  # seconds


class KeepAlive:
    """
    Periodic ping sender for one TransportSession.

    Attributes:
        session: The session pings are sent on
        interval: Seconds between pings
        pings_sent: Number of pings written so far
    """

    def __init__(
        self, session: TransportSession, interval: float = KEEP_ALIVE_INTERVAL
    ):
        self.session = session
        self.interval = interval
        self.pings_sent = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        """Check if the background task is alive."""
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """
        Start the background task. Calling it again has no effect.

        Must be called from a running event loop.
        """
        if self._task is not None:
            logger.debug("Keep-alive already started")
            return
        self._task = asyncio.create_task(
            self._run(), name="hackchat-keep-alive"
        )

    async def stop(self) -> None:
        """Cancel the background task and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass

    async def wait(self) -> None:
        """Wait for the background task to end on its own."""
        if self._task is not None:
            await self._task

    async def _run(self) -> None:
        """
        Send a ping every interval until the session closes.

        Waiting on the session's close instead of a plain sleep lets the
        task end as soon as the session does.
        """
        logger.info("Starting keep-alive task (every %ss)", self.interval)
        frame = encode(PingRequest())

        try:
            while not await self.session.wait_closed(timeout=self.interval):
                try:
                    await self.session.send_frame(frame)
                except SendError as e:
                    # A failed send always leaves the session closed
                    logger.debug("Keep-alive send hit closed session: %s", e)
                    break
                self.pings_sent += 1
        except asyncio.CancelledError:
            logger.info("Keep-alive task cancelled")
            raise

        logger.info("Keep-alive task stopped: session closed")
