from __future__ import annotations

import io
import logging
import unittest

from protocol.errors import NoDataError, NoPacketError
from protocol.framing import encode_frame, read_frame, write_frame


class _TrickleStream(io.RawIOBase):
    """Hands out at most one byte per read, like a slow pipe."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0

    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        if self._pos >= len(self._data):
            return b""
        chunk = self._data[self._pos : self._pos + 1]
        self._pos += 1
        return chunk


class FramingTest(unittest.TestCase):
    def test_round_trip_lengths(self) -> None:
        for length in (0, 1, 65536):
            payload = bytes(i % 251 for i in range(length))
            stream = io.BytesIO()
            write_frame(stream, payload)
            stream.seek(0)
            self.assertEqual(read_frame(stream), payload)
            self.assertEqual(stream.read(), b"")

    def test_length_prefix_is_little_endian(self) -> None:
        self.assertEqual(encode_frame(b"abc"), b"\x03\x00\x00\x00abc")
        self.assertEqual(encode_frame(b"x" * 258)[:4], b"\x02\x01\x00\x00")

    def test_empty_stream_raises_no_packet(self) -> None:
        with self.assertRaises(NoPacketError):
            read_frame(io.BytesIO(b""))

    def test_short_header_raises_no_packet(self) -> None:
        with self.assertRaises(NoPacketError) as ctx:
            read_frame(io.BytesIO(b"\x05\x00"))
        self.assertEqual(ctx.exception.received, 2)

    def test_truncated_payload_raises_no_data(self) -> None:
        stream = io.BytesIO(b"\x64\x00\x00\x00" + b"0123456789")
        with self.assertRaises(NoDataError) as ctx:
            read_frame(stream)
        self.assertEqual(ctx.exception.expected, 100)
        self.assertEqual(ctx.exception.received, 10)

    def test_zero_length_frame_is_empty_payload(self) -> None:
        stream = io.BytesIO(b"\x00\x00\x00\x00" + encode_frame(b"next"))
        self.assertEqual(read_frame(stream), b"")
        self.assertEqual(read_frame(stream), b"next")

    def test_reads_across_partial_chunks(self) -> None:
        stream = _TrickleStream(encode_frame(b'{"cmd":"exit"}'))
        self.assertEqual(read_frame(stream), b'{"cmd":"exit"}')

    def test_write_frame_logs_prefix_and_size(self) -> None:
        logger = logging.getLogger("tinyocr.test.framing")
        stream = io.BytesIO()
        with self.assertLogs(logger, level="INFO") as captured:
            write_frame(stream, b"hello", logger=logger)
        self.assertEqual(stream.getvalue(), b"\x05\x00\x00\x00hello")
        self.assertIn("<== 05000000 5", captured.output[0])


if __name__ == "__main__":
    unittest.main()
