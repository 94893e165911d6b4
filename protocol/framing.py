"""Length-prefixed frames on byte streams.

A frame is a 4-byte unsigned little-endian length followed by exactly that
many payload bytes. The same layout is used in both directions.
"""

from __future__ import annotations

import logging
import struct
from typing import BinaryIO

from protocol.errors import NoDataError, NoPacketError

HEADER = struct.Struct("<I")


def encode_frame(payload: bytes) -> bytes:
    return HEADER.pack(len(payload)) + payload


def read_frame(stream: BinaryIO) -> bytes:
    """Read one whole frame and return its payload.

    Raises NoPacketError when the stream ends before the length prefix and
    NoDataError when it ends before the declared payload.
    """
    header = _read_exact(stream, HEADER.size)
    if len(header) < HEADER.size:
        raise NoPacketError(received=len(header))
    (length,) = HEADER.unpack(header)
    if length == 0:
        return b""
    data = _read_exact(stream, length)
    if len(data) < length:
        raise NoDataError(expected=length, received=len(data))
    return data


def write_frame(stream: BinaryIO, payload: bytes, logger: logging.Logger | None = None) -> None:
    frame = encode_frame(payload)
    if logger is not None:
        logger.info("<== %s %d", frame[: HEADER.size].hex().upper(), len(payload))
    stream.write(frame)
    stream.flush()


def _read_exact(stream: BinaryIO, n: int) -> bytes:
    """Read up to n bytes, stopping early only at end of stream."""
    buf = bytearray()
    while len(buf) < n:
        chunk = stream.read(n - len(buf))
        if not chunk:
            break
        buf.extend(chunk)
    return bytes(buf)
