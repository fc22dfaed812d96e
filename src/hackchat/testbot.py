#!/usr/bin/env python3
"""
Test Bot for hack.chat

Joins a channel and prints every chat message it sees.

Usage:
    hackchat-testbot
    hackchat-testbot --nick RustBot --room botDev
    HACKCHAT_URL=ws://localhost:6060 hackchat-testbot --no-keep-alive
"""

import argparse
import asyncio
import logging
import os
import sys
from typing import Optional, Sequence

from .chat_client import HACKCHAT_URL, ChatClient
from .exceptions import HackChatError
from .schemas import MessageEvent

logger = logging.getLogger(__name__)


async def run_bot(
    nick: str,
    room: str,
    url: str = HACKCHAT_URL,
    keep_alive: bool = True,
) -> int:
    """
    Print the channel's chat messages until the connection closes.

    Args:
        nick: Nickname to join with
        room: Channel to join
        url: WebSocket URL of the server
        keep_alive: Whether to start the keep-alive task

    Returns:
        Number of chat messages printed
    """
    printed = 0
    async with ChatClient(nick, room, url=url) as chat:
        if keep_alive:
            chat.start_keep_alive()

        async for event in chat:
            if isinstance(event, MessageEvent):
                print(f"<{event.nick}> {event.text}", flush=True)
                printed += 1

    return printed


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments, defaulting from the environment."""
    parser = argparse.ArgumentParser(description="Print a hack.chat channel")
    parser.add_argument(
        "--nick",
        default=os.environ.get("HACKCHAT_NICK", "PyBot"),
        help="Nickname to join with",
    )
    parser.add_argument(
        "--room",
        default=os.environ.get("HACKCHAT_ROOM", "botDev"),
        help="Channel to join",
    )
    parser.add_argument(
        "--url",
        default=os.environ.get("HACKCHAT_URL", HACKCHAT_URL),
        help="WebSocket URL of the server",
    )
    parser.add_argument(
        "--no-keep-alive",
        dest="keep_alive",
        action="store_false",
        help="Do not send periodic pings",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("HACKCHAT_LOG_LEVEL", "WARNING"),
        help="Logging level (DEBUG, INFO, WARNING, ...)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point for the test bot."""
    args = parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        asyncio.run(run_bot(args.nick, args.room, args.url, args.keep_alive))
    except HackChatError as e:
        logger.error("Bot stopped: %s", e)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nExiting...")
        sys.exit(0)


if __name__ == "__main__":
    main()
