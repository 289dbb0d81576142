# yomilex/dictionary/grouping.py
import json
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

FREQUENCY_PREFIX = "Frequency: "
UNKNOWN = "Unknown"


@dataclass
class Definition:
    dictionary_name: str
    tags: List[str]
    content: object


@dataclass
class Frequency:
    dictionary_name: str
    value: str


@dataclass
class GroupedResult:
    headword: str
    reading: str
    furigana: List[Tuple[str, str]]
    definitions: List[Definition] = field(default_factory=list)
    frequencies: List[Frequency] = field(default_factory=list)
    forms: List[Tuple[str, str]] = field(default_factory=list)
    term_tags: list = field(default_factory=list)
    match_len: int = 0


def calculate_furigana(headword: str, reading: Optional[str]) -> List[Tuple[str, str]]:
    """Split headword into (text, ruby) parts; kana shared with the reading gets no ruby.

    >>> calculate_furigana('食べる', 'たべる')
    [('食', 'た'), ('べる', '')]
    """
    if not reading or headword == reading:
        return [(headword, '')]
    h_start, r_start = 0, 0
    h_end, r_end = len(headword), len(reading)
    while h_start < h_end and r_start < r_end and headword[h_start] == reading[r_start]:
        h_start += 1
        r_start += 1
    while h_end > h_start and r_end > r_start and headword[h_end - 1] == reading[r_end - 1]:
        h_end -= 1
        r_end -= 1

    parts = []
    if h_start > 0:
        parts.append((headword[:h_start], ''))
    if h_start < h_end:
        parts.append((headword[h_start:h_end], reading[r_start:r_end]))
    if h_end < len(headword):
        parts.append((headword[h_end:], ''))
    return parts


def _tag_names(tags) -> List[str]:
    names = []
    for tag in tags or ():
        if isinstance(tag, dict):
            names.append(str(tag.get('name', '')))
        else:
            names.append(str(tag))
    return names


def _frequency_value(record: dict) -> Optional[str]:
    """Display value when the record is a frequency entry, else None."""
    if record.get('type') == 'frequency':
        display = record.get('display')
        return str(display if display is not None else record.get('value', UNKNOWN))
    if record.get('type', 'glossary') != 'glossary':
        return None
    content = record.get('content') or []
    first = content[0] if isinstance(content, list) and content else None
    if isinstance(first, str) and first.startswith(FREQUENCY_PREFIX):
        return first[len(FREQUENCY_PREFIX):].strip()
    if isinstance(first, dict) and str(first.get('content', '')).startswith(FREQUENCY_PREFIX):
        return str(first['content'])[len(FREQUENCY_PREFIX):].strip()
    return None


def _definition(record: dict, dictionary_name: str) -> Definition:
    if record.get('type', 'glossary') == 'glossary':
        return Definition(dictionary_name, _tag_names(record.get('tags')), record.get('content', []))
    return Definition(dictionary_name, [], record)


def _same_definition(a: Definition, b: Definition) -> bool:
    return (a.dictionary_name == b.dictionary_name
            and json.dumps(a.content, sort_keys=True, ensure_ascii=False)
            == json.dumps(b.content, sort_keys=True, ensure_ascii=False))


def group_results(entries: Iterable, dictionary_names: Dict[int, str], grouped: bool = True) -> List[GroupedResult]:
    """Merge ranked entries into one result per (headword, reading), keeping rank order."""
    results: List[GroupedResult] = []
    by_form: Dict[Tuple[str, str], GroupedResult] = {}

    for entry in entries:
        headword = entry.term or ''
        reading = entry.reading or ''
        if not headword:
            continue
        dictionary_name = dictionary_names.get(entry.source, UNKNOWN)
        frequency_value = _frequency_value(entry.record)

        result = by_form.get((headword, reading)) if grouped else None
        if result is None:
            result = GroupedResult(
                headword=headword,
                reading=reading,
                furigana=calculate_furigana(headword, reading),
                forms=[(headword, reading)],
                term_tags=list(entry.term_tags or []) if frequency_value is None else [],
                match_len=entry.span_chars[1],
            )
            results.append(result)
            if grouped:
                by_form[(headword, reading)] = result

        if frequency_value is not None:
            result.frequencies.append(Frequency(dictionary_name, frequency_value))
            continue
        definition = _definition(entry.record, dictionary_name)
        if not any(_same_definition(definition, existing) for existing in result.definitions):
            result.definitions.append(definition)

    return results
