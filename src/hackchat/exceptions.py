"""
hackchat library exceptions.

This module defines all custom exceptions raised by the client.
"""

from typing import Optional


class HackChatError(Exception):
    """Base exception for hack.chat client errors"""
    pass


class ChatConnectionError(HackChatError, ConnectionError):
    """Raised when the connection or join handshake cannot be completed"""
    pass


class ConnectionLost(HackChatError):
    """
    Raised when the connection closes abnormally while receiving.

    Attributes:
        code: WebSocket close code, if one was received
        reason: Close reason reported by the transport
    """

    def __init__(self, reason: str, code: Optional[int] = None):
        super().__init__(reason)
        self.reason = reason
        self.code = code


class SendError(HackChatError):
    """Raised when a frame cannot be written to the connection"""
    pass


class DecodeError(HackChatError, ValueError):
    """Raised when an inbound frame is malformed"""
    pass


class EncodingError(HackChatError, ValueError):
    """Raised when an outbound intent cannot be represented on the wire"""
    pass
