"""Packet server: framed JSON commands on stdin, framed text replies on stdout.

Packets are a 4-byte little-endian length followed by the data. Input data is
a JSON object with a "cmd" field:

    {"cmd": "file", "file": "path", "lang": ["en"]}  => recognized text
    {"cmd": "exit"}                                  => no response

A "file" reply may be zero length; clients must check the length rather than
wait for more. Malformed packets are logged and skipped, while a closed or
truncated input stream ends the session with an error.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import BinaryIO

from ocr.base import TextRecognizer
from protocol.commands import (
    Command,
    ExitCommand,
    FileCommand,
    MalformedCommand,
    UnknownCommand,
    decode_command,
)
from protocol.errors import InvalidJSONError
from protocol.framing import read_frame, write_frame


class ServerState(str, Enum):
    RUNNING = "RUNNING"
    STOPPED = "STOPPED"


class PacketServer:
    def __init__(
        self,
        recognizer: TextRecognizer,
        input_stream: BinaryIO,
        output_stream: BinaryIO,
        logger: logging.Logger,
    ) -> None:
        self.recognizer = recognizer
        self.input_stream = input_stream
        self.output_stream = output_stream
        self.logger = logger
        self.state = ServerState.RUNNING

    @property
    def running(self) -> bool:
        return self.state is ServerState.RUNNING

    def serve(self) -> None:
        """Process packets until an exit command arrives.

        NoPacketError, NoDataError and any unexpected error are logged and
        re-raised; the caller decides the process exit status.
        """
        if not self.recognizer.healthcheck():
            self.logger.warning("OCR engine %s is not available", self.recognizer.name)
        self.logger.info("tinyocr server started!")
        while self.running:
            try:
                self.step()
            except InvalidJSONError:
                self.logger.warning("invalid json!")
            except Exception as exc:
                self.logger.warning("%s", exc)
                raise
        self.logger.info("tinyocr server stopped!")

    def step(self) -> None:
        payload = read_frame(self.input_stream)
        command = decode_command(payload)
        response = self.handle(command)
        if response is not None:
            write_frame(self.output_stream, response, logger=self.logger)

    def handle(self, command: Command) -> bytes | None:
        if isinstance(command, MalformedCommand):
            if command.cmd is not None:
                self.logger.info("==> %s", command.cmd)
            self.logger.warning(command.reason)
            return None

        if isinstance(command, FileCommand):
            self.logger.info("==> %s", command.kind.value)
            languages = list(command.lang) if command.lang is not None else None
            text = self.recognizer.recognize(command.file, languages)
            return text.encode("utf-8")

        if isinstance(command, ExitCommand):
            self.logger.info("==> %s", command.kind.value)
            self.state = ServerState.STOPPED
            return None

        if isinstance(command, UnknownCommand):
            self.logger.info("==> %s", command.cmd)
            return None

        raise TypeError(f"unsupported command: {command!r}")
