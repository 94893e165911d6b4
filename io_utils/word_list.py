from __future__ import annotations

from pathlib import Path


def load_words(path: str | Path) -> list[str]:
    text = Path(path).read_text(encoding="utf-8")
    return [line.strip("\r") for line in text.split("\n") if line.strip()]
