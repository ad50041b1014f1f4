"""Per-message marshal / unmarshal."""

import pytest
from pydantic import ValidationError

from honeywire import (
    EOF,
    EncodingOverflowError,
    Handshake,
    HandshakeResponse,
    Hello,
    Ping,
    ReadWrite,
    TagMismatchError,
    TruncatedBufferError,
)


@pytest.fixture
def messages(tcp4, tcp4_remote, udp6):
    return [
        Handshake(),
        HandshakeResponse(addresses=[tcp4, udp6]),
        HandshakeResponse(),
        Hello(token="s3cret", laddr=tcp4, raddr=tcp4_remote),
        Hello(),
        Ping(token="s3cret", laddr=udp6, raddr=udp6),
        EOF(laddr=tcp4, raddr=tcp4_remote),
        EOF(),
        ReadWrite(laddr=tcp4, raddr=tcp4_remote, payload=b"SSH-2.0-OpenSSH_8.9\r\n"),
        ReadWrite(laddr=tcp4, raddr=tcp4_remote, payload=b"\x00" * 70000),
    ]


class TestRoundTrip:
    def test_every_kind(self, messages):
        for message in messages:
            data = message.marshal_binary()
            assert data[0] == message.TYPE
            assert type(message).unmarshal_binary(data) == message

    def test_ping_decodes(self, tcp4, tcp4_remote):
        ping = Ping(token="t", laddr=tcp4, raddr=tcp4_remote)
        decoded = Ping.unmarshal_binary(ping.marshal_binary())
        assert isinstance(decoded, Ping)
        assert decoded.token == "t"
        assert decoded.laddr == tcp4
        assert decoded.raddr == tcp4_remote

    def test_empty_payload_is_empty_bytes(self, tcp4, tcp4_remote):
        decoded = ReadWrite.unmarshal_binary(ReadWrite(laddr=tcp4, raddr=tcp4_remote).marshal_binary())
        assert decoded.payload == b""
        assert isinstance(decoded.payload, bytes)


class TestWireLayout:
    def test_handshake(self):
        assert Handshake().marshal_binary() == b"\x02"
        assert Handshake.unmarshal_binary(b"\x02") == Handshake()

    def test_hello(self, tcp4):
        data = Hello(token="ab", laddr=tcp4).marshal_binary()
        assert data == b"\x00\x00\x02ab" + b"\x01\x04\x0a\x00\x00\x01\x00\x16" + b"\x00"

    def test_ping_differs_from_hello_only_in_tag(self, tcp4):
        hello = Hello(token="ab", laddr=tcp4).marshal_binary()
        ping = Ping(token="ab", laddr=tcp4).marshal_binary()
        assert ping[0] == 0x05
        assert ping[1:] == hello[1:]

    def test_eof(self):
        assert EOF().marshal_binary() == b"\x04\x00\x00\x00"

    def test_readwrite(self):
        assert ReadWrite(payload=b"xy").marshal_binary() == b"\x01\x00\x00\x00\x00\x00\x00\x02xy"

    def test_handshake_response_preserves_order(self, tcp4, udp6):
        data = HandshakeResponse(addresses=[udp6, tcp4]).marshal_binary()
        assert data[:2] == b"\x03\x02"
        assert HandshakeResponse.unmarshal_binary(data).addresses == [udp6, tcp4]


class TestTagEnforcement:
    def test_handshake_rejects_hello_tag(self):
        with pytest.raises(TagMismatchError, match="not a handshake packet"):
            Handshake.unmarshal_binary(b"\x00")

    def test_ping_rejects_hello(self, tcp4):
        data = Hello(token="ab", laddr=tcp4).marshal_binary()
        with pytest.raises(TagMismatchError) as exc:
            Ping.unmarshal_binary(data)
        assert exc.value.expected == 0x05
        assert exc.value.actual == 0x00

    def test_every_kind_rejects_the_others(self, messages):
        for message in messages:
            data = message.marshal_binary()
            for other in (Handshake, HandshakeResponse, Hello, Ping, EOF, ReadWrite):
                if other is type(message):
                    continue
                with pytest.raises(TagMismatchError, match=f"not a {other.KIND} packet"):
                    other.unmarshal_binary(data)


class TestTruncation:
    def test_every_prefix_fails(self, messages):
        for message in messages[:-1]:
            data = message.marshal_binary()
            for n in range(len(data)):
                with pytest.raises(TruncatedBufferError):
                    type(message).unmarshal_binary(data[:n])

    def test_large_payload_truncated(self, messages):
        data = messages[-1].marshal_binary()
        with pytest.raises(TruncatedBufferError):
            ReadWrite.unmarshal_binary(data[:-1])


class TestOverflow:
    def test_token_too_long(self):
        with pytest.raises(EncodingOverflowError):
            Hello(token="x" * 256).marshal_binary()
        with pytest.raises(EncodingOverflowError):
            Ping(token="x" * 256).marshal_binary()

    def test_too_many_addresses(self, tcp4):
        HandshakeResponse(addresses=[tcp4] * 255).marshal_binary()
        with pytest.raises(EncodingOverflowError):
            HandshakeResponse(addresses=[tcp4] * 256).marshal_binary()


def test_unknown_fields_rejected():
    with pytest.raises(ValidationError):
        ReadWrite(data=b"x")
