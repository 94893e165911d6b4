from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from protocol.errors import InvalidJSONError


class CommandKind(str, Enum):
    FILE = "file"
    EXIT = "exit"
    UNKNOWN = "unknown"
    MALFORMED = "malformed"


@dataclass(frozen=True, slots=True)
class FileCommand:
    file: str
    lang: tuple[str, ...] | None = None
    kind: CommandKind = CommandKind.FILE


@dataclass(frozen=True, slots=True)
class ExitCommand:
    kind: CommandKind = CommandKind.EXIT


@dataclass(frozen=True, slots=True)
class UnknownCommand:
    cmd: str
    kind: CommandKind = CommandKind.UNKNOWN


@dataclass(frozen=True, slots=True)
class MalformedCommand:
    reason: str
    cmd: str | None = None
    kind: CommandKind = CommandKind.MALFORMED


Command = Union[FileCommand, ExitCommand, UnknownCommand, MalformedCommand]


def decode_command(payload: bytes) -> Command:
    try:
        packet = json.loads(payload.decode("utf-8"))
    except (UnicodeDecodeError, ValueError) as exc:
        raise InvalidJSONError(f"payload is not valid json: {exc}") from exc
    if not isinstance(packet, dict):
        raise InvalidJSONError(f"payload must be a json object, got {type(packet).__name__}")
    return command_from_packet(packet)


def command_from_packet(packet: dict[str, Any]) -> Command:
    cmd = packet.get("cmd")
    if not isinstance(cmd, str):
        return MalformedCommand(reason="unknown cmd packet")

    if cmd == CommandKind.FILE.value:
        file = packet.get("file")
        if not isinstance(file, str):
            return MalformedCommand(reason="no file in packet!", cmd=cmd)
        return FileCommand(file=file, lang=_string_list(packet.get("lang")))

    if cmd == CommandKind.EXIT.value:
        return ExitCommand()

    return UnknownCommand(cmd=cmd)


def _string_list(value: Any) -> tuple[str, ...] | None:
    if not isinstance(value, list):
        return None
    if not all(isinstance(item, str) for item in value):
        return None
    return tuple(value)
