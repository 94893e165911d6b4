from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, BinaryIO, Sequence

import yaml

from app.config import load_config
from app.logging_config import build_logger
from app.server import PacketServer
from io_utils.image_loader import expand_inputs
from io_utils.word_list import load_words
from ocr.base import OCRAdapterError, TextRecognizer
from ocr.factory import create_ocr_adapter

SERVER_HELP = """\
server mode. interact by packet on stdin/stdout, stderr as log. files must not be given.
packet is 4 bytes length (little-endian), then data. input data is a json object,
eg: {"cmd": "file", "file": "path", "lang": ["en"]} => ocr text (may be zero length),
    {"cmd": "exit"} => no response
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tinyocr",
        description="Perform OCR on every image passed as an argument, output to stdout",
    )
    parser.add_argument(
        "--lang",
        action="append",
        default=None,
        metavar="TAG",
        help="Recognition language, repeatable (default: en)",
    )
    parser.add_argument("--words", default=None, help="Custom word list file, one word per line")
    parser.add_argument("--config", default=None, help="Path to config.yaml or config.json")
    parser.add_argument("--ocr-engine", default=None, help="OCR engine name (tesseract, mock)")
    parser.add_argument("--server", action="store_true", help=SERVER_HELP)
    parser.add_argument("files", nargs="*", help="Image files or directories of images")
    return parser


def _resolve_languages(args: argparse.Namespace, config: dict[str, Any]) -> list[str]:
    if args.lang:
        return list(args.lang)
    configured = config.get("recognition", {}).get("languages")
    if isinstance(configured, list) and configured:
        return [str(tag) for tag in configured]
    return ["en"]


def build_recognizer(
    args: argparse.Namespace,
    config: dict[str, Any],
    logger: logging.Logger,
) -> TextRecognizer:
    words_file = args.words or config.get("recognition", {}).get("words_file")
    words = load_words(words_file) if words_file else []
    return create_ocr_adapter(
        args.ocr_engine,
        config,
        languages=_resolve_languages(args, config),
        words=words,
        log=logger,
    )


def cmd_batch(args: argparse.Namespace, config: dict[str, Any], logger: logging.Logger) -> int:
    try:
        recognizer = build_recognizer(args, config, logger)
    except (OSError, OCRAdapterError) as exc:
        logger.error("batch failed: %s", exc)
        return 1
    try:
        for path in expand_inputs(args.files):
            print(recognizer.recognize(path))
    finally:
        recognizer.close()
    return 0


def cmd_server(
    args: argparse.Namespace,
    config: dict[str, Any],
    logger: logging.Logger,
    input_stream: BinaryIO | None = None,
    output_stream: BinaryIO | None = None,
) -> int:
    try:
        recognizer = build_recognizer(args, config, logger)
    except (OSError, OCRAdapterError) as exc:
        logger.error("server failed to start: %s", exc)
        return 1

    server = PacketServer(
        recognizer,
        input_stream=input_stream or sys.stdin.buffer,
        output_stream=output_stream or sys.stdout.buffer,
        logger=logger,
    )
    try:
        server.serve()
    except Exception as exc:  # noqa: BLE001
        logger.error("server failed: %s", exc)
        return 1
    finally:
        recognizer.close()
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logger = build_logger()
    try:
        config = load_config(args.config)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        logger.error("failed to load config %s: %s", args.config, exc)
        return 1

    if args.files:
        if args.server:
            logger.warning("files were given, ignoring --server")
        return cmd_batch(args, config, logger)
    if args.server:
        return cmd_server(args, config, logger)

    parser.print_help(sys.stderr)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
