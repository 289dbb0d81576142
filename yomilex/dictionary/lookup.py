# yomilex/dictionary/lookup.py
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Union

from yomilex.config.config import MAX_SCAN_LENGTH
from yomilex.dictionary.ranking import rank_entries
from yomilex.dictionary.store import StoredRecord, TermStore, decode_record
from yomilex.language.japanese import is_ideograph
from yomilex.language.languages import IDEOGRAPHIC_LANGUAGES, LOWERCASE_LANGUAGES, Deinflector, Language
from yomilex.language.normalizer import text_variants

logger = logging.getLogger(__name__)

SINGLE_LETTER_WORDS = ('a', 'i')


@dataclass(frozen=True)
class Candidate:
    word: str
    source_len: int
    reason: str


@dataclass
class RecordEntry:
    term: str
    reading: Optional[str]
    source: int
    span_bytes: Tuple[int, int]
    span_chars: Tuple[int, int]
    frequency: int
    record: dict
    term_tags: Optional[list] = None
    word: str = ''

    @property
    def match_length(self) -> int:
        return self.span_chars[1]


def snap_to_char_boundary(text: str, byte_offset: int) -> int:
    """Character index of the UTF-8 byte offset, moved back onto a character start.

    Returns len(text) when the offset is at or past the end.
    """
    if byte_offset <= 0:
        return 0
    consumed = 0
    for index, c in enumerate(text):
        width = len(c.encode('utf-8', 'surrogatepass'))
        if consumed + width > byte_offset:
            return index
        consumed += width
    return len(text)


def is_valid_candidate(source: str, candidate: str, language: Language) -> bool:
    """Japanese and Chinese candidates may only use ideographs already in source."""
    if source == candidate or language not in IDEOGRAPHIC_LANGUAGES:
        return True
    source_ideographs = {c for c in source if is_ideograph(c)}
    return all(c in source_ideographs for c in candidate if is_ideograph(c))


def _skip_single_character(substring: str, language: Language) -> bool:
    return (language in LOWERCASE_LANGUAGES
            and len(substring) < 2
            and substring.lower() not in SINGLE_LETTER_WORDS)


class Lookup:
    def __init__(self, registry, deinflector: Optional[Deinflector] = None,
                 decode: Callable[[bytes], StoredRecord] = decode_record):
        self.registry = registry
        self.deinflector = deinflector or Deinflector()
        self.decode = decode

    def search(self, store: TermStore, text: str, cursor_offset: int,
               language: Union[Language, str], max_length: int = MAX_SCAN_LENGTH) -> List[RecordEntry]:
        language = Language(language)
        start = snap_to_char_boundary(text, cursor_offset)
        if start >= len(text):
            return []

        window = text[start:start + max_length]
        dictionary_config = self.registry.snapshot()
        seen = set()
        results = []

        for length in range(len(window), 0, -1):
            substring = window[:length]
            if _skip_single_character(substring, language):
                continue

            for candidate in self.generate_candidates(substring, language):
                if not is_valid_candidate(substring, candidate.word, language):
                    continue
                if candidate.word in seen:
                    continue
                seen.add(candidate.word)
                results.extend(self._fetch(store, candidate, dictionary_config))

        ranked = rank_entries(results, dictionary_config)
        if ranked:
            logger.info("Found %d entries for '%s...'", len(ranked), window[:15])
        return ranked

    def generate_candidates(self, text: str, language: Language) -> List[Candidate]:
        source_len = len(text)
        candidates = [Candidate(text, source_len, "original")]
        for variant in text_variants(text, language):
            for word in self.deinflector.deinflect(language, variant):
                if word:
                    candidates.append(Candidate(word, source_len, "deinflect"))
        return candidates

    def _fetch(self, store: TermStore, candidate: Candidate, dictionary_config) -> List[RecordEntry]:
        entries = []
        try:
            rows = list(store.lookup_exact(candidate.word))
        except Exception:
            logger.warning("Store lookup failed for '%s'.", candidate.word, exc_info=True)
            return entries

        for dictionary_id, blob in rows:
            enabled, _ = dictionary_config.get(dictionary_id, (True, None))
            if not enabled:
                continue
            try:
                stored = self.decode(blob)
            except Exception as e:
                logger.warning("Skipping unreadable record for '%s' in dictionary %s: %s",
                               candidate.word, dictionary_id, e)
                continue
            entries.append(RecordEntry(
                term=stored.headword or candidate.word,
                reading=stored.reading,
                source=stored.dictionary_id,
                span_bytes=(0, len(candidate.word.encode('utf-8', 'surrogatepass'))),
                span_chars=(0, candidate.source_len),
                frequency=stored.frequency,
                record=stored.record,
                term_tags=stored.term_tags,
                word=candidate.word,
            ))
        return entries
