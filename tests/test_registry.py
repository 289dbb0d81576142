import threading

from yomilex.dictionary.registry import DictionaryInfo, DictionaryRegistry


def test_add_assigns_ids_and_priorities() -> None:
    registry = DictionaryRegistry()
    first = registry.add("JMdict")
    second = registry.add("Frequency")
    assert (first.id, first.priority) == (1, 0)
    assert (second.id, second.priority) == (2, 1)
    assert registry.names() == {1: "JMdict", 2: "Frequency"}
    assert registry.snapshot() == {1: (True, 0), 2: (True, 1)}


def test_toggle_delete_and_clear() -> None:
    registry = DictionaryRegistry([DictionaryInfo(1, "A", True, 0), DictionaryInfo(2, "B", True, 1)])
    assert registry.toggle(1, False)
    assert registry.get(1).enabled is False
    assert not registry.toggle(99, False)
    assert registry.delete(2)
    assert not registry.delete(2)
    assert registry.snapshot() == {1: (False, 0)}
    registry.clear()
    assert registry.snapshot() == {}


def test_reorder_sets_priority_to_position() -> None:
    registry = DictionaryRegistry([
        DictionaryInfo(1, "A", True, 0),
        DictionaryInfo(2, "B", True, 1),
        DictionaryInfo(3, "C", True, 2),
    ])
    registry.reorder([3, 1, 404, 2])
    assert [info.id for info in registry.list()] == [3, 1, 2]
    assert registry.get(2).priority == 3


def test_list_puts_unconfigured_priority_last() -> None:
    registry = DictionaryRegistry([DictionaryInfo(1, "A", True, None), DictionaryInfo(2, "B", True, 5)])
    assert [info.id for info in registry.list()] == [2, 1]


def test_save_and_load_round_trip(tmp_path) -> None:
    path = tmp_path / "dictionaries.ini"
    registry = DictionaryRegistry([DictionaryInfo(1, "JMdict 100%", True, 0), DictionaryInfo(2, "Kanji", False, None)])
    registry.save(path)
    loaded = DictionaryRegistry.load(path)
    assert loaded.list() == registry.list()


def test_missing_file_loads_empty(tmp_path) -> None:
    assert DictionaryRegistry.load(tmp_path / "missing.ini").snapshot() == {}


def test_malformed_entries_default_conservatively(tmp_path) -> None:
    path = tmp_path / "dictionaries.ini"
    path.write_text(
        "[dictionary.1]\nname = Maybe\nenabled = perhaps\npriority = 0\n\n"
        "[dictionary.2]\nname = No priority\nenabled = true\npriority = first\n\n"
        "[dictionary.3]\nname = Bare\n\n"
        "[dictionary.x]\nname = Bad id\n\n"
        "[other]\nkey = value\n",
        encoding="utf-8",
    )
    registry = DictionaryRegistry.load(path)
    assert registry.snapshot() == {1: (False, 0), 2: (True, None), 3: (False, None)}


def test_readers_and_writers_interleave() -> None:
    registry = DictionaryRegistry([DictionaryInfo(i, str(i), True, i) for i in range(10)])
    errors = []

    def read():
        for _ in range(200):
            snapshot = registry.snapshot()
            if len(snapshot) != 10:
                errors.append(snapshot)

    def write():
        for n in range(200):
            registry.toggle(n % 10, bool(n % 2))
            registry.reorder(reversed(range(10)))

    threads = [threading.Thread(target=read) for _ in range(4)] + [threading.Thread(target=write)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10)
    assert not any(thread.is_alive() for thread in threads)
    assert errors == []
