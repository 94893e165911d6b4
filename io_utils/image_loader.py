from __future__ import annotations

from pathlib import Path
from typing import Iterable

SUPPORTED_IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".bmp", ".tiff", ".tif", ".webp"}


def list_images(input_dir: str) -> list[Path]:
    base = Path(input_dir)
    if not base.exists():
        return []
    files = [p for p in base.iterdir() if p.is_file() and p.suffix.lower() in SUPPORTED_IMAGE_EXTENSIONS]
    return sorted(files)


def expand_inputs(paths: Iterable[str]) -> list[str]:
    # non-directories are kept as given, missing ones included
    expanded: list[str] = []
    for raw in paths:
        if Path(raw).is_dir():
            expanded.extend(str(p) for p in list_images(raw))
        else:
            expanded.append(raw)
    return expanded
