# yomilex/dictionary/store.py
"""Term store: exact-match term -> (dictionary id, compressed record) rows.

The on-disk store is a marisa_trie.BytesTrie. Every value is a little-endian
int32 dictionary id followed by a gzip-compressed JSON record, so one term
maps to as many values as there are dictionaries defining it. The trie is
memory-mapped and never written after it is built.
"""
import gzip
import json
import logging
import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Protocol, Tuple

import marisa_trie

logger = logging.getLogger(__name__)

ID_FORMAT = "<i"
ID_SIZE = struct.calcsize(ID_FORMAT)


@dataclass
class StoredRecord:
    dictionary_id: int
    record: dict
    headword: Optional[str] = None
    reading: Optional[str] = None
    term_tags: Optional[list] = None

    @property
    def record_type(self) -> str:
        return self.record.get('type', 'glossary')

    @property
    def frequency(self) -> int:
        """Sort value for ranking; 0 when the record carries none."""
        if self.record_type == 'glossary':
            value = self.record.get('popularity', 0)
        elif self.record_type == 'frequency':
            value = self.record.get('value', 0)
        else:
            return 0
        return value if isinstance(value, int) and not isinstance(value, bool) else 0

    @classmethod
    def from_dict(cls, data: dict) -> 'StoredRecord':
        record = data['record']
        if not isinstance(record, dict):
            raise ValueError(f"record must be an object, got {type(record).__name__}")
        return cls(
            dictionary_id=int(data['dictionary_id']),
            record=record,
            headword=data.get('headword'),
            reading=data.get('reading'),
            term_tags=data.get('term_tags'),
        )

    def to_dict(self) -> dict:
        data = {'dictionary_id': self.dictionary_id, 'record': self.record}
        if self.headword is not None:
            data['headword'] = self.headword
        if self.reading is not None:
            data['reading'] = self.reading
        if self.term_tags is not None:
            data['term_tags'] = self.term_tags
        return data


def encode_record(record: StoredRecord) -> bytes:
    payload = json.dumps(record.to_dict(), ensure_ascii=False, separators=(',', ':'))
    return gzip.compress(payload.encode('utf-8'))


def decode_record(blob: bytes) -> StoredRecord:
    return StoredRecord.from_dict(json.loads(gzip.decompress(blob).decode('utf-8')))


class TermStore(Protocol):
    def lookup_exact(self, term: str) -> Iterable[Tuple[int, bytes]]:
        ...


@dataclass
class MemoryTermStore:
    """Dict-backed store, used when building and in tests."""
    rows: dict = field(default_factory=dict)

    def add(self, term: str, dictionary_id: int, blob: bytes):
        self.rows.setdefault(term, []).append((dictionary_id, blob))

    def add_record(self, term: str, record: StoredRecord):
        self.add(term, record.dictionary_id, encode_record(record))

    def lookup_exact(self, term: str) -> List[Tuple[int, bytes]]:
        return list(self.rows.get(term, []))


class TrieTermStore:
    def __init__(self, path):
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(
                f"Term store not found at {path}. "
                "Build one with TrieTermStore.build(rows, path)."
            )
        self.path = path
        self._trie = marisa_trie.BytesTrie()
        self._trie.mmap(str(path))
        logger.info("Mapped term store %s (%d keys).", path, len(self._trie))

    def lookup_exact(self, term: str) -> List[Tuple[int, bytes]]:
        rows = []
        for value in self._trie.get(term, []):
            (dictionary_id,) = struct.unpack_from(ID_FORMAT, value)
            rows.append((dictionary_id, value[ID_SIZE:]))
        return rows

    @staticmethod
    def build(rows: Iterable[Tuple[str, int, bytes]], path) -> int:
        """Write (term, dictionary_id, blob) rows to path. Returns the row count."""
        items = [(term, struct.pack(ID_FORMAT, dictionary_id) + blob) for term, dictionary_id, blob in rows]
        trie = marisa_trie.BytesTrie(items)
        trie.save(str(path))
        logger.info("Built term store %s with %d rows.", path, len(items))
        return len(items)
