from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Sequence

logger = logging.getLogger(__name__)


class MockOCRAdapter:
    """Returns text from `<image>.ocr.json` sidecar fixtures instead of running OCR."""

    name = "mock"
    version = "1.0.0"

    def __init__(
        self,
        fixture_dir: str | None = None,
        default_languages: Sequence[str] = ("en",),
        log: logging.Logger | None = None,
    ) -> None:
        self.fixture_dir = Path(fixture_dir) if fixture_dir else None
        self.default_languages = list(default_languages) or ["en"]
        self.log = log or logger

    def healthcheck(self) -> bool:
        return True

    def close(self) -> None:
        return None

    def recognize(self, image_path: str, languages: Sequence[str] | None = None) -> str:
        image = Path(image_path)
        if not image.is_file():
            return ""
        try:
            payload = self._load_sidecar(image)
        except (OSError, ValueError) as exc:
            # UnicodeDecodeError and JSONDecodeError are ValueErrors
            self.log.warning("unreadable sidecar for %s: %s", image_path, exc)
            return ""
        if payload is None:
            return ""
        return "\n".join(self._line_texts(payload))

    def _load_sidecar(self, image: Path) -> Any | None:
        candidates: list[Path] = []
        if self.fixture_dir:
            candidates.append(self.fixture_dir / f"{image.stem}.ocr.json")
        candidates.append(image.with_suffix(image.suffix + ".ocr.json"))
        candidates.append(image.with_name(f"{image.stem}.ocr.json"))

        for candidate in candidates:
            if not candidate.exists():
                continue
            text = candidate.read_text(encoding="utf-8")
            parsed = json.loads(text)
            if isinstance(parsed, dict) and "lines" in parsed:
                return parsed["lines"]
            return parsed
        return None

    @staticmethod
    def _line_texts(payload: Any) -> list[str]:
        if not isinstance(payload, list):
            return []
        texts: list[str] = []
        for row in payload:
            if isinstance(row, dict):
                text = str(row.get("text", "")).strip()
            else:
                text = str(row).strip()
            if text:
                texts.append(text)
        return texts
