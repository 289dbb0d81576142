# yomilex/dictionary/ranking.py
from typing import Mapping, Optional, Sequence, Tuple

from yomilex.config.config import UNCONFIGURED_PRIORITY


def priority_of(config: Mapping[int, Tuple[bool, Optional[int]]], dictionary_id: int) -> int:
    _, priority = config.get(dictionary_id, (True, None))
    return UNCONFIGURED_PRIORITY if priority is None else priority


def sort_key(entry, config: Mapping[int, Tuple[bool, Optional[int]]]) -> Tuple[int, int, int]:
    """Longest match first, then lower priority number, then higher frequency."""
    return -entry.span_chars[1], priority_of(config, entry.source), -(entry.frequency or 0)


def rank_entries(entries: Sequence, config: Mapping[int, Tuple[bool, Optional[int]]]) -> list:
    # sorted() is stable, so full ties keep collection order
    return sorted(entries, key=lambda entry: sort_key(entry, config))
