from __future__ import annotations

import unittest

from protocol.commands import (
    CommandKind,
    ExitCommand,
    FileCommand,
    MalformedCommand,
    UnknownCommand,
    decode_command,
)
from protocol.errors import InvalidJSONError


class CommandDecoderTest(unittest.TestCase):
    def test_file_command_with_languages(self) -> None:
        command = decode_command(b'{"cmd": "file", "file": "/tmp/a.png", "lang": ["ja", "en"]}')
        self.assertEqual(command, FileCommand(file="/tmp/a.png", lang=("ja", "en")))
        self.assertEqual(command.kind, CommandKind.FILE)

    def test_file_command_without_languages(self) -> None:
        command = decode_command(b'{"cmd": "file", "file": "a.png"}')
        self.assertIsInstance(command, FileCommand)
        self.assertIsNone(command.lang)

    def test_file_command_ignores_non_string_languages(self) -> None:
        self.assertIsNone(decode_command(b'{"cmd": "file", "file": "a.png", "lang": "en"}').lang)
        self.assertIsNone(decode_command(b'{"cmd": "file", "file": "a.png", "lang": ["en", 1]}').lang)

    def test_file_command_missing_file_is_malformed(self) -> None:
        command = decode_command(b'{"cmd": "file", "lang": ["en"]}')
        self.assertIsInstance(command, MalformedCommand)
        self.assertEqual(command.cmd, "file")

    def test_file_command_non_string_file_is_malformed(self) -> None:
        self.assertIsInstance(decode_command(b'{"cmd": "file", "file": 3}'), MalformedCommand)

    def test_exit_command(self) -> None:
        self.assertEqual(decode_command(b'{"cmd": "exit"}'), ExitCommand())

    def test_unknown_command(self) -> None:
        self.assertEqual(decode_command(b'{"cmd": "ping"}'), UnknownCommand(cmd="ping"))

    def test_missing_or_non_string_cmd_is_malformed(self) -> None:
        for payload in (b"{}", b'{"file": "a.png"}', b'{"cmd": 1}', b'{"cmd": null}'):
            command = decode_command(payload)
            self.assertIsInstance(command, MalformedCommand)
            self.assertIsNone(command.cmd)

    def test_invalid_json_raises(self) -> None:
        for payload in (b"", b"{", b"not json", b"\xff\xfe", b'{"cmd": "exit"'):
            with self.assertRaises(InvalidJSONError):
                decode_command(payload)

    def test_non_object_json_raises(self) -> None:
        for payload in (b"[]", b'"exit"', b"42", b"null"):
            with self.assertRaises(InvalidJSONError):
                decode_command(payload)


if __name__ == "__main__":
    unittest.main()
