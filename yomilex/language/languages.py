# yomilex/language/languages.py
import logging
from enum import Enum
from pathlib import Path
from typing import Dict, List

from yomilex.language import korean
from yomilex.language.transformer import LanguageTransformer

logger = logging.getLogger(__name__)

RULES_DIR = Path(__file__).parent / "rules"


class Language(Enum):
    JAPANESE = 'ja'
    ENGLISH = 'en'
    KOREAN = 'ko'
    CHINESE = 'zh'
    ARABIC = 'ar'
    SPANISH = 'es'
    FRENCH = 'fr'
    GERMAN = 'de'
    PORTUGUESE = 'pt'
    BULGARIAN = 'bg'
    CZECH = 'cs'
    DANISH = 'da'
    GREEK = 'el'
    ESTONIAN = 'et'
    PERSIAN = 'fa'
    FINNISH = 'fi'
    HEBREW = 'he'
    HINDI = 'hi'
    HUNGARIAN = 'hu'
    INDONESIAN = 'id'
    ITALIAN = 'it'
    LATIN = 'la'
    LAO = 'lo'
    LATVIAN = 'lv'
    GEORGIAN = 'ka'
    KANNADA = 'kn'
    KHMER = 'km'
    MONGOLIAN = 'mn'
    MALTESE = 'mt'
    DUTCH = 'nl'
    NORWEGIAN = 'no'
    POLISH = 'pl'
    ROMANIAN = 'ro'
    RUSSIAN = 'ru'
    SWEDISH = 'sv'
    THAI = 'th'
    TAGALOG = 'tl'
    TURKISH = 'tr'
    UKRAINIAN = 'uk'
    VIETNAMESE = 'vi'
    WELSH = 'cy'
    CANTONESE = 'yue'


RULE_FILES = {
    Language.JAPANESE: 'japanese.json',
    Language.ENGLISH: 'english.json',
    Language.KOREAN: 'korean.json',
    Language.ARABIC: 'arabic.json',
    Language.SPANISH: 'spanish.json',
    Language.FRENCH: 'french.json',
    Language.GERMAN: 'german.json',
    Language.PORTUGUESE: 'portuguese.json',
    Language.LATIN: 'latin.json',
    Language.TAGALOG: 'tagalog.json',
}

# Languages written in scripts with case; these get a lowercase variant and
# skip single-letter lookups.
LOWERCASE_LANGUAGES = frozenset((
    Language.ENGLISH, Language.SPANISH, Language.FRENCH, Language.GERMAN, Language.PORTUGUESE,
    Language.ITALIAN, Language.DUTCH, Language.NORWEGIAN, Language.SWEDISH, Language.DANISH,
    Language.FINNISH, Language.ESTONIAN, Language.LATVIAN, Language.ROMANIAN, Language.POLISH,
    Language.CZECH, Language.HUNGARIAN, Language.TURKISH, Language.INDONESIAN, Language.VIETNAMESE,
    Language.TAGALOG, Language.MALTESE, Language.WELSH, Language.BULGARIAN, Language.RUSSIAN,
    Language.UKRAINIAN, Language.GREEK, Language.LATIN, Language.MONGOLIAN,
))

IDEOGRAPHIC_LANGUAGES = frozenset((Language.JAPANESE, Language.CHINESE))


def load_transformer(language: Language) -> LanguageTransformer:
    filename = RULE_FILES.get(language)
    if filename is None:
        return LanguageTransformer.empty()
    transformer = LanguageTransformer.from_file(RULES_DIR / filename)
    logger.debug("Loaded %d transforms for %s.", len(transformer.transforms), language.name.lower())
    return transformer


class Deinflector:
    """One compiled transformer per language, built up front and shared read-only."""

    def __init__(self):
        self.transformers: Dict[Language, LanguageTransformer] = {
            language: load_transformer(language) for language in Language
        }

    def transformer(self, language: Language) -> LanguageTransformer:
        return self.transformers[language]

    def deinflect(self, language: Language, text: str) -> List[str]:
        transformer = self.transformers[language]
        if language is Language.KOREAN:
            return korean.deinflect(transformer, text)
        return transformer.deinflect_terms(text)
