# yomilex/language/arabic.py
OPTIONAL_DIACRITICS = frozenset((
    'ؘ', 'ؙ', 'ؚ', 'ً', 'ٌ', 'ٍ', 'َ', 'ُ',
    'ِ', 'ّ', 'ْ', 'ٓ', 'ٔ', 'ٕ', 'ٖ', 'ٰ',
))


def strip_diacritics(text: str) -> str:
    return ''.join(c for c in text if c not in OPTIONAL_DIACRITICS)


def is_arabic_letter(c: str) -> bool:
    code = ord(c)
    return (0x0620 <= code <= 0x065F
            or 0x066E <= code <= 0x06D3
            or code == 0x06D5
            or 0x06EE <= code <= 0x06EF
            or 0x06FA <= code <= 0x06FC
            or code == 0x06FF)
