# yomilex/language/normalizer.py
from typing import List

from yomilex.language import arabic, japanese
from yomilex.language.languages import LOWERCASE_LANGUAGES, Language


def text_variants(text: str, language: Language) -> List[str]:
    """Spellings of text to deinflect alongside it, in a fixed order without repeats."""
    if language is Language.JAPANESE:
        hiragana = japanese.katakana_to_hiragana(text)
        variants = [text, hiragana, japanese.replace_prolonged_sound_mark(hiragana)]
    elif language is Language.ARABIC:
        variants = [text, arabic.strip_diacritics(text)]
    elif language in LOWERCASE_LANGUAGES:
        variants = [text, text.lower()]
    else:
        variants = [text]
    return list(dict.fromkeys(variants))
