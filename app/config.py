from __future__ import annotations

from pathlib import Path
from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "ocr": {
        "engine": "tesseract",
        "engines": {
            "tesseract": {
                "enabled": True,
                "cmd": None,
                "tessdata_dir": None,
                "psm": None,
            },
            "mock": {
                "enabled": False,
                "fixture_dir": None,
            },
        },
    },
    "recognition": {
        "languages": ["en"],
        "words_file": None,
    },
}


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(config_path: str | None = None) -> dict[str, Any]:
    if not config_path:
        return DEFAULT_CONFIG

    path = Path(config_path)
    if not path.exists():
        return DEFAULT_CONFIG

    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return DEFAULT_CONFIG

    data: dict[str, Any] | None = None
    if path.suffix.lower() == ".json":
        import json

        loaded = json.loads(text)
        data = loaded if isinstance(loaded, dict) else {}
    else:
        import yaml

        loaded = yaml.safe_load(text)
        data = loaded if isinstance(loaded, dict) else {}

    return deep_merge(DEFAULT_CONFIG, data)
