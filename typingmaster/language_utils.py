"""Language classes and script detection utilities."""

import unicodedata

SUPPORTED_LANGUAGES = ("english", "japanese")

# Hiragana, Katakana, CJK Unified Ideographs
JAPANESE_RANGES = (
    (0x3040, 0x309F),
    (0x30A0, 0x30FF),
    (0x4E00, 0x9FAF),
)


def get_language_code(language_name: str) -> str:
    """Map language names to ISO codes"""
    language_map = {
        'english': 'en',
        'japanese': 'ja',
    }
    return language_map.get(language_name.lower(), 'en')


def normalize_language(name) -> str:
    """Resolve a language name, code or alias to one of SUPPORTED_LANGUAGES"""
    if not isinstance(name, str) or not name.strip():
        raise ValueError(f"Unsupported language: {name!r}")

    aliases = {
        'english': 'english',
        'en': 'english',
        'latin': 'english',
        'japanese': 'japanese',
        'ja': 'japanese',
        'jp': 'japanese',
        '日本語': 'japanese',
    }
    language = aliases.get(name.strip().lower())
    if language is None:
        raise ValueError(f"Unsupported language: {name!r}")
    return language


def is_japanese_char(char: str) -> bool:
    code = ord(char)
    return any(low <= code <= high for low, high in JAPANESE_RANGES)


def contains_japanese(text: str) -> bool:
    """Check if text has at least one Hiragana, Katakana or Kanji character"""
    if not text:
        return False
    return any(is_japanese_char(c) for c in text)


def display_width(text):
    """Calculate the display width of text, accounting for Unicode characters"""
    width = 0
    for char in text:
        category = unicodedata.category(char)
        if category in ('Mn', 'Mc', 'Me'):  # Combining marks don't add width
            continue
        if 0xFE00 <= ord(char) <= 0xFE0F:  # Variation selectors
            continue

        # East Asian characters are typically full-width (2 columns)
        eaw = unicodedata.east_asian_width(char)
        if eaw in ('F', 'W'):
            width += 2
        elif category[0] == 'C':  # Control characters
            width += 0
        else:
            width += 1
    return width
