"""Connection settings and the fixed-size message framing shared by client and server."""

from __future__ import annotations

import socket

MAX = 256
SERVER_HOST = "localhost"
SERVER_IP = "127.0.0.1"
SERVER_PORT = 2000

SERVER_INFO_REQUEST = "returnServerFilesystemInformation"
ENCODING = "utf-8"


def tokenize(text: str, delimiters: str) -> list[str]:
    """Split ``text`` on any character of ``delimiters``, dropping empty tokens."""
    tokens: list[str] = []
    current: list[str] = []
    for char in text:
        if char in delimiters:
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(char)
    if current:
        tokens.append("".join(current))
    return tokens


def pack_message(text: str) -> bytes:
    """Encode ``text`` as one NUL-padded frame of exactly ``MAX`` bytes."""
    payload = text.encode(ENCODING)
    if b"\0" in payload:
        raise ValueError("message may not contain NUL characters")
    if len(payload) >= MAX:
        raise ValueError(f"message is {len(payload)} bytes; at most {MAX - 1} fit in a frame")
    return payload.ljust(MAX, b"\0")


def unpack_message(data: bytes) -> str:
    """Decode one frame back into the text it carries."""
    if len(data) != MAX:
        raise ValueError(f"frame must be {MAX} bytes, got {len(data)}")
    payload, _, _ = data.partition(b"\0")
    return payload.decode(ENCODING, errors="replace")


def send_message(sock: socket.socket, text: str) -> None:
    """Send ``text`` as a single frame."""
    sock.sendall(pack_message(text))


def recv_message(sock: socket.socket) -> str | None:
    """Receive one frame; return ``None`` if the peer closed before sending any of it."""
    buffer = bytearray()
    while len(buffer) < MAX:
        chunk = sock.recv(MAX - len(buffer))
        if not chunk:
            if not buffer:
                return None
            raise ConnectionError("connection closed in the middle of a message")
        buffer.extend(chunk)
    return unpack_message(bytes(buffer))