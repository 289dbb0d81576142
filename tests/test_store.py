import gzip
import json

import pytest

from yomilex.dictionary.store import (
    MemoryTermStore,
    StoredRecord,
    TrieTermStore,
    decode_record,
    encode_record,
)


def test_codec_is_gzip_json() -> None:
    record = StoredRecord(3, {"type": "glossary", "content": ["to eat"]}, headword="食べる", reading="たべる",
                          term_tags=[{"name": "v1"}])
    blob = encode_record(record)
    assert json.loads(gzip.decompress(blob))["headword"] == "食べる"
    assert decode_record(blob) == record


def test_optional_fields_are_omitted() -> None:
    record = StoredRecord(1, {"type": "pitch", "pitches": [0]})
    assert record.to_dict() == {"dictionary_id": 1, "record": {"type": "pitch", "pitches": [0]}}


@pytest.mark.parametrize("record, expected", [
    ({"type": "glossary", "popularity": 12}, 12),
    ({"content": ["no type means glossary"], "popularity": 3}, 3),
    ({"type": "glossary"}, 0),
    ({"type": "frequency", "value": 1500}, 1500),
    ({"type": "frequency", "value": "1500"}, 0),
    ({"type": "kanji", "popularity": 7}, 0),
])
def test_frequency(record: dict, expected: int) -> None:
    assert StoredRecord(1, record).frequency == expected


def test_malformed_payloads_raise() -> None:
    with pytest.raises(KeyError):
        StoredRecord.from_dict({"dictionary_id": 1})
    with pytest.raises(ValueError):
        StoredRecord.from_dict({"dictionary_id": 1, "record": ["not", "an", "object"]})
    with pytest.raises(OSError):
        decode_record(b"plain bytes")


def test_memory_store_keeps_insertion_order() -> None:
    store = MemoryTermStore()
    store.add("cat", 2, b"b")
    store.add("cat", 1, b"a")
    assert store.lookup_exact("cat") == [(2, b"b"), (1, b"a")]
    assert store.lookup_exact("dog") == []


def test_trie_store_build_and_lookup(tmp_path) -> None:
    path = tmp_path / "terms.marisa"
    eat = encode_record(StoredRecord(1, {"type": "glossary", "content": ["to eat"]}, headword="食べる"))
    freq = encode_record(StoredRecord(2, {"type": "frequency", "value": 300}))
    count = TrieTermStore.build([("食べる", 1, eat), ("食べる", 2, freq), ("飲む", 1, eat)], path)
    assert count == 3

    store = TrieTermStore(path)
    assert sorted(store.lookup_exact("食べる")) == sorted([(1, eat), (2, freq)])
    assert store.lookup_exact("食べ") == []
    assert decode_record(dict(store.lookup_exact("食べる"))[2]).frequency == 300


def test_missing_trie_store_raises_with_hint(tmp_path) -> None:
    with pytest.raises(FileNotFoundError, match="TrieTermStore.build"):
        TrieTermStore(tmp_path / "missing.marisa")


def test_unlisted_record_types_still_decode() -> None:
    record = StoredRecord(4, {"type": "example-sentence", "content": ["猫がいる。"]})
    decoded = decode_record(encode_record(record))
    assert decoded.record_type == "example-sentence"
    assert decoded.frequency == 0
