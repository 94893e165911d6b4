from __future__ import annotations

import logging
from typing import Any, Sequence

from ocr.base import OCRAdapterError, TextRecognizer
from ocr.mock_adapter import MockOCRAdapter
from ocr.tesseract_adapter import TesseractAdapter


def _canonical_engine_name(name: str) -> str:
    lowered = name.strip().lower()
    if lowered in {"tesseract-ocr", "tesseract_ocr"}:
        return "tesseract"
    return lowered


def _assert_engine_available(name: str, ocr_config: dict[str, Any]) -> None:
    conf = ocr_config.get(name)
    if isinstance(conf, dict) and not bool(conf.get("enabled", False)):
        raise OCRAdapterError(f"OCR engine is disabled in config: {name}")


def create_ocr_adapter(
    engine_name: str | None,
    config: dict[str, Any],
    languages: Sequence[str] | None = None,
    words: Sequence[str] | None = None,
    log: logging.Logger | None = None,
) -> TextRecognizer:
    configured = str(config.get("ocr", {}).get("engine", "tesseract"))
    requested = engine_name or configured
    name = _canonical_engine_name(requested)
    ocr_config = config.get("ocr", {}).get("engines", {})
    default_languages = list(languages or config.get("recognition", {}).get("languages") or ["en"])

    if name == "mock":
        _assert_engine_available(name, ocr_config)
        mconf = ocr_config.get("mock", {})
        return MockOCRAdapter(
            fixture_dir=mconf.get("fixture_dir"),
            default_languages=default_languages,
            log=log,
        )

    if name == "tesseract":
        _assert_engine_available(name, ocr_config)
        tconf = ocr_config.get("tesseract", {})
        psm = tconf.get("psm")
        return TesseractAdapter(
            default_languages=default_languages,
            words=words,
            tesseract_cmd=tconf.get("cmd"),
            tessdata_dir=tconf.get("tessdata_dir"),
            psm=int(psm) if psm is not None else None,
            log=log,
        )

    raise OCRAdapterError(f"unsupported OCR engine: {requested}")
