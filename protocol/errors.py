from __future__ import annotations


class ProtocolError(RuntimeError):
    pass


class NoPacketError(ProtocolError):
    def __init__(self, received: int = 0) -> None:
        super().__init__(f"stream closed before a packet header (got {received} of 4 bytes)")
        self.received = received


class NoDataError(ProtocolError):
    def __init__(self, expected: int, received: int) -> None:
        super().__init__(f"stream closed before packet data (got {received} of {expected} bytes)")
        self.expected = expected
        self.received = received


class InvalidJSONError(ProtocolError):
    pass
