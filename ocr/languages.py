from __future__ import annotations

from typing import Iterable

# Tags as accepted on the command line and in "lang" packets, mapped to
# Tesseract traineddata names. Unlisted tags are passed through untouched.
TESSERACT_CODES: dict[str, str] = {
    "ar": "ara",
    "cs": "ces",
    "da": "dan",
    "de": "deu",
    "el": "ell",
    "en": "eng",
    "es": "spa",
    "fi": "fin",
    "fr": "fra",
    "he": "heb",
    "hi": "hin",
    "hu": "hun",
    "id": "ind",
    "it": "ita",
    "ja": "jpn",
    "kk": "kaz",
    "ko": "kor",
    "nl": "nld",
    "no": "nor",
    "pl": "pol",
    "pt": "por",
    "ro": "ron",
    "ru": "rus",
    "sv": "swe",
    "th": "tha",
    "tr": "tur",
    "uk": "ukr",
    "vi": "vie",
    "zh": "chi_sim",
    "zh-hans": "chi_sim",
    "zh-cn": "chi_sim",
    "zh-hant": "chi_tra",
    "zh-tw": "chi_tra",
    "zh-hk": "chi_tra",
}


def to_tesseract_code(tag: str) -> str:
    parts = tag.strip().replace("_", "-").lower().split("-")
    # "zh-Hant-TW" tries "zh-hant-tw", then "zh-hant", then "zh"
    for end in range(len(parts), 0, -1):
        code = TESSERACT_CODES.get("-".join(parts[:end]))
        if code:
            return code
    return tag.strip()


def to_tesseract_lang(tags: Iterable[str]) -> str:
    codes: list[str] = []
    for tag in tags:
        if not str(tag).strip():
            continue
        code = to_tesseract_code(str(tag))
        if code not in codes:
            codes.append(code)
    return "+".join(codes)
