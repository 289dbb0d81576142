from yomilex.dictionary.lookup import RecordEntry
from yomilex.dictionary.ranking import priority_of, rank_entries, sort_key


def _entry(label: str, source: int, length: int, frequency: int = 0) -> RecordEntry:
    return RecordEntry(
        term=label,
        reading=None,
        source=source,
        span_bytes=(0, length),
        span_chars=(0, length),
        frequency=frequency,
        record={},
    )


def test_length_then_priority_then_frequency() -> None:
    config = {1: (True, 1), 0: (True, 0)}
    first = _entry("prio 1", source=1, length=3, frequency=5)
    second = _entry("prio 0", source=0, length=3, frequency=9)
    third = _entry("short", source=42, length=2)
    ranked = rank_entries([first, second, third], config)
    assert [entry.term for entry in ranked] == ["prio 0", "prio 1", "short"]


def test_unconfigured_and_missing_priority_sort_last() -> None:
    config = {1: (True, 0), 2: (True, None)}
    assert priority_of(config, 1) == 0
    assert priority_of(config, 2) == 999
    assert priority_of(config, 3) == 999
    ranked = rank_entries([_entry("b", 2, 3, 100), _entry("c", 3, 3, 50), _entry("a", 1, 3)], config)
    assert [entry.term for entry in ranked] == ["a", "b", "c"]


def test_full_ties_keep_collection_order() -> None:
    entries = [_entry(str(i), source=1, length=2) for i in range(5)]
    assert rank_entries(entries, {1: (True, 0)}) == entries


def test_sort_key_treats_missing_frequency_as_zero() -> None:
    entry = _entry("x", source=1, length=2, frequency=None)
    assert sort_key(entry, {}) == (-2, 999, 0)
