from __future__ import annotations

from typing import Protocol, Sequence


class TextRecognizer(Protocol):
    name: str
    version: str

    def recognize(self, image_path: str, languages: Sequence[str] | None = None) -> str:
        ...

    def healthcheck(self) -> bool:
        ...

    def close(self) -> None:
        ...


class OCRAdapterError(RuntimeError):
    pass
