"""
Tests for the Frame Codec

Tests for encoding commands and decoding frames including:
- Command serialization (join, chat, whisper, ping, stats)
- Decoding of every known frame kind
- Unknown frame kinds decoding to UnknownEvent
- Malformed frames raising DecodeError
- Commands that cannot be encoded raising EncodingError
"""

import json

import pytest

from hackchat import (
    DecodeError,
    EncodingError,
    InfoEvent,
    JoinRequest,
    JoinRoomEvent,
    LeaveRoomEvent,
    MessageEvent,
    OnlineSetEvent,
    PingRequest,
    SendMessageRequest,
    StatsRequest,
    UnknownEvent,
    WarnEvent,
    WhisperEvent,
    WhisperRequest,
    decode,
    encode,
)


# Encoding Tests


def test_join_request_encodes_nick_and_channel():
    """Test that JoinRequest produces a join frame."""
    frame = json.loads(encode(JoinRequest(nick="gkbrk", channel="botDev")))
    assert frame == {"cmd": "join", "nick": "gkbrk", "channel": "botDev"}


def test_send_message_request_encodes_chat_frame():
    """Test that SendMessageRequest produces a chat frame."""
    frame = json.loads(encode(SendMessageRequest("Hello there people")))
    assert frame == {"cmd": "chat", "text": "Hello there people"}


def test_whisper_request_encodes_recipient():
    """Test that WhisperRequest carries the recipient nick."""
    frame = json.loads(encode(WhisperRequest(nick="bob", text="psst")))
    assert frame == {"cmd": "whisper", "nick": "bob", "text": "psst"}


def test_payload_free_commands_encode_cmd_only():
    """Test that ping and stats frames contain only their cmd."""
    assert json.loads(encode(PingRequest())) == {"cmd": "ping"}
    assert json.loads(encode(StatsRequest())) == {"cmd": "stats"}


def test_encode_is_deterministic():
    """Test that the same command always encodes to the same text."""
    request = SendMessageRequest("same text")
    assert encode(request) == encode(request)


def test_encode_keeps_unicode_and_quotes_intact():
    """Test that text needing escapes is encoded without loss."""
    text = 'Say "hi" \\ to ünïcödé 🎉\nand newlines'
    frame = json.loads(encode(SendMessageRequest(text)))
    assert frame["text"] == text


def test_encode_rejects_lone_surrogate():
    """Test that text which is not valid UTF-8 raises EncodingError."""
    with pytest.raises(EncodingError):
        encode(SendMessageRequest("broken \ud800 text"))


def test_encode_rejects_non_string_field():
    """Test that non-string payloads raise EncodingError."""
    with pytest.raises(EncodingError):
        encode(SendMessageRequest(42))


# Decoding Tests


def test_decode_chat_frame():
    """Test decoding a chat frame with trip code and timestamp."""
    event = decode(
        json.dumps(
            {
                "cmd": "chat",
                "nick": "alice",
                "text": "hi all",
                "trip": "x9Y7aB",
                "time": 1700000000000,
            }
        )
    )
    assert event == MessageEvent(
        nick="alice", text="hi all", trip="x9Y7aB", timestamp=1700000000000
    )


def test_decode_chat_frame_without_trip():
    """Test that a missing or null trip decodes to an empty string."""
    event = decode('{"cmd": "chat", "nick": "alice", "text": "hi"}')
    assert event.trip == ""
    assert event.timestamp is None

    event = decode('{"cmd": "chat", "nick": "alice", "text": "hi", "trip": null}')
    assert event.trip == ""


def test_decode_online_add_and_remove():
    """Test that roster changes decode to join and leave events."""
    assert decode('{"cmd": "onlineAdd", "nick": "bob"}') == JoinRoomEvent("bob")
    assert decode('{"cmd": "onlineRemove", "nick": "bob"}') == LeaveRoomEvent(
        "bob"
    )


def test_decode_join_frame_as_join_event():
    """Test that a join frame decodes to JoinRoomEvent."""
    assert decode('{"cmd": "join", "nick": "gkbrk"}') == JoinRoomEvent("gkbrk")


def test_decode_online_set_keeps_order():
    """Test that the roster snapshot keeps the server's order."""
    event = decode('{"cmd": "onlineSet", "nicks": ["zed", "amy", "bob"]}')
    assert isinstance(event, OnlineSetEvent)
    assert event.nicks == ("zed", "amy", "bob")


def test_decode_info_and_warn():
    """Test decoding server notices."""
    info = decode('{"cmd": "info", "text": "42 unique IPs in 7 channels"}')
    assert info == InfoEvent(text="42 unique IPs in 7 channels")

    warn = decode('{"cmd": "warn", "text": "You are sending too much text."}')
    assert warn == WarnEvent(text="You are sending too much text.")


def test_decode_whisper_info_frame():
    """Test that whisper notices decode to WhisperEvent."""
    event = decode(
        json.dumps(
            {
                "cmd": "info",
                "type": "whisper",
                "from": "carol",
                "text": "carol whispered: hey",
                "trip": "abc123",
            }
        )
    )
    assert event == WhisperEvent(
        nick="carol", text="carol whispered: hey", trip="abc123"
    )


def test_decode_bytes_frame():
    """Test that UTF-8 bytes decode like text."""
    event = decode('{"cmd": "chat", "nick": "émile", "text": "ça va"}'.encode())
    assert event == MessageEvent(nick="émile", text="ça va")


def test_decode_own_messages_are_not_filtered():
    """Test that every chat frame yields an event, whoever sent it."""
    frame = '{"cmd": "chat", "nick": "gkbrk", "text": "Hey there!"}'
    assert decode(frame) == MessageEvent("gkbrk", "Hey there!", "")


# Unknown Frame Tests


@pytest.mark.parametrize(
    "frame",
    [
        {"cmd": "emote", "nick": "alice", "text": "waves"},
        {"cmd": "captcha", "text": "###"},
        {"cmd": "someFutureCommand"},
        {"cmd": ""},
    ],
)
def test_unknown_commands_decode_to_unknown_event(frame):
    """Test that unrecognized commands are kept, not dropped."""
    event = decode(json.dumps(frame))
    assert isinstance(event, UnknownEvent)
    assert event.cmd == frame["cmd"]
    assert event.data == {k: v for k, v in frame.items() if k != "cmd"}


def test_unknown_event_is_hashable_and_read_only():
    """Test that unknown events hash like other events and cannot be edited."""
    event = decode(json.dumps({"cmd": "emote", "nick": "bob", "text": "waves"}))

    assert hash(event) == hash(UnknownEvent(cmd="emote", data={"nick": "bob"}))
    assert len({event, event}) == 1
    with pytest.raises(TypeError):
        event.data["text"] = "edited"
    assert event.data == {"nick": "bob", "text": "waves"}


# Malformed Frame Tests


@pytest.mark.parametrize(
    "frame",
    [
        "",
        "not json at all",
        '{"cmd": "chat", "text": ',
        "[1, 2, 3]",
        '"just a string"',
        "null",
        '{"nick": "alice", "text": "no cmd"}',
        '{"cmd": 7}',
        b"\xff\xfe\xfa",
        '{"cmd": "chat", "nick": "bob", "text": "x", "time": 1e400}',
        '{"cmd": "chat", "nick": "bob", "text": "x", "time": -1e999}',
        '{"cmd": "chat", "nick": "bob", "text": "x", "time": NaN}',
        '{"cmd": "chat", "nick": "bob", "text": "x", "time": Infinity}',
    ],
)
def test_malformed_frames_raise_decode_error(frame):
    """Test that structurally broken frames raise DecodeError."""
    with pytest.raises(DecodeError):
        decode(frame)


@pytest.mark.parametrize(
    "frame",
    [
        {"cmd": "chat", "nick": "alice"},
        {"cmd": "chat", "nick": "alice", "text": ["list"]},
        {"cmd": "chat", "nick": 5, "text": "hi"},
        {"cmd": "onlineAdd"},
        {"cmd": "onlineRemove", "nick": None},
        {"cmd": "onlineSet", "nicks": "alice"},
        {"cmd": "onlineSet", "nicks": ["alice", 3]},
        {"cmd": "info"},
        {"cmd": "chat", "nick": "a", "text": "b", "time": "yesterday"},
    ],
)
def test_known_commands_missing_fields_raise_decode_error(frame):
    """Test that known frames never decode partially populated."""
    with pytest.raises(DecodeError):
        decode(json.dumps(frame))


def test_decode_error_is_a_value_error():
    """Test that DecodeError can be caught as ValueError."""
    with pytest.raises(ValueError):
        decode("{")


# Round Trip Tests


def test_chat_round_trip_keeps_text():
    """Test that an encoded chat frame decodes back to its text."""
    event = decode(encode(SendMessageRequest("round trip")))
    # The server assigns nick and time, so they are empty here.
    assert event == MessageEvent(nick="", text="round trip", trip="")


def test_join_round_trip_keeps_nick():
    """Test that an encoded join frame decodes to the joining nick."""
    event = decode(encode(JoinRequest(nick="gkbrk", channel="botDev")))
    assert event == JoinRoomEvent("gkbrk")


def test_whisper_round_trip_keeps_fields():
    """Test that an encoded whisper decodes to recipient and text."""
    event = decode(encode(WhisperRequest(nick="bob", text="psst")))
    assert event == WhisperEvent(nick="bob", text="psst")


def test_payload_free_round_trip_keeps_cmd():
    """Test that ping and stats frames decode to UnknownEvent."""
    assert decode(encode(PingRequest())) == UnknownEvent(cmd="ping")
    assert decode(encode(StatsRequest())) == UnknownEvent(cmd="stats")
