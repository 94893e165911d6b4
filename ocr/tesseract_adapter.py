from __future__ import annotations

import logging
import os
import shlex
import tempfile
from pathlib import Path
from typing import Any, Sequence

from ocr.base import OCRAdapterError
from ocr.languages import to_tesseract_lang

logger = logging.getLogger(__name__)


class TesseractAdapter:
    name = "tesseract"
    version = "unknown"

    def __init__(
        self,
        default_languages: Sequence[str] = ("en",),
        words: Sequence[str] | None = None,
        tesseract_cmd: str | None = None,
        tessdata_dir: str | None = None,
        psm: int | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self.default_languages = list(default_languages) or ["en"]
        self.words = [w for w in (words or []) if w.strip()]
        self.tesseract_cmd = tesseract_cmd
        self.tessdata_dir = tessdata_dir
        self.psm = psm
        self.log = log or logger
        self._pytesseract: Any = None
        self._image_module: Any = None
        self._words_path: str | None = None
        self._load_dependency()
        if self.words:
            self._words_path = self._write_user_words(self.words)

    def _load_dependency(self) -> None:
        try:
            import pytesseract  # type: ignore
            from PIL import Image  # type: ignore
        except Exception as exc:
            raise OCRAdapterError(
                "tesseract adapter requires pytesseract and pillow. "
                "Install dependencies and Tesseract OCR binary."
            ) from exc
        self._pytesseract = pytesseract
        self._image_module = Image
        if self.tesseract_cmd:
            if not Path(self.tesseract_cmd).exists():
                raise OCRAdapterError(f"tesseract binary not found: {self.tesseract_cmd}")
            pytesseract.pytesseract.tesseract_cmd = self.tesseract_cmd
        if self.tessdata_dir:
            os.environ["TESSDATA_PREFIX"] = self.tessdata_dir

        try:
            self.version = str(pytesseract.get_tesseract_version())
        except Exception:
            self.version = "unknown"

    @staticmethod
    def _write_user_words(words: Sequence[str]) -> str:
        fd, path = tempfile.mkstemp(suffix=".user-words", prefix="tinyocr_")
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write("\n".join(words) + "\n")
        return path

    def close(self) -> None:
        if self._words_path and os.path.exists(self._words_path):
            try:
                os.unlink(self._words_path)
            except OSError:
                pass
        self._words_path = None

    def healthcheck(self) -> bool:
        if self._pytesseract is None:
            return False
        try:
            _ = self._pytesseract.get_tesseract_version()
            return True
        except Exception:
            return False

    def build_config(self) -> str:
        options: list[str] = []
        if self.psm is not None:
            options.append(f"--psm {int(self.psm)}")
        if self._words_path:
            options.append(f"--user-words {shlex.quote(self._words_path)}")
        return " ".join(options)

    def recognize(self, image_path: str, languages: Sequence[str] | None = None) -> str:
        path = Path(image_path)
        if not path.is_file():
            self.log.debug("image not reachable: %s", image_path)
            return ""

        lang = to_tesseract_lang(languages or self.default_languages)
        try:
            with self._image_module.open(path) as image:
                data = self._pytesseract.image_to_data(
                    image,
                    lang=lang,
                    config=self.build_config(),
                    output_type=self._pytesseract.Output.DICT,
                )
        except Exception as exc:  # noqa: BLE001
            # undecodable or oversized images and Tesseract failures all yield ""
            self.log.warning("recognition failed for %s: %s", image_path, exc)
            return ""
        return "\n".join(self._to_lines(data))

    @staticmethod
    def _to_lines(data: dict[str, list[Any]]) -> list[str]:
        lines: dict[tuple[int, int, int, int], list[str]] = {}
        count = len(data.get("text", []))

        for i in range(count):
            text = str(data["text"][i]).strip()
            if not text:
                continue

            key = (
                int(data.get("page_num", [1] * count)[i]),
                int(data.get("block_num", [0] * count)[i]),
                int(data.get("par_num", [0] * count)[i]),
                int(data.get("line_num", [i] * count)[i]),
            )
            lines.setdefault(key, []).append(text)

        return [" ".join(parts) for _, parts in sorted(lines.items())]
