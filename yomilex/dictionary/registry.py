# yomilex/dictionary/registry.py
import configparser
import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional, Tuple

from yomilex.config.config import UNCONFIGURED_PRIORITY
from yomilex.utils.rwlock import ReadWriteLock

logger = logging.getLogger(__name__)

SECTION_PREFIX = "dictionary."


@dataclass(frozen=True)
class DictionaryInfo:
    id: int
    name: str
    enabled: bool = True
    priority: Optional[int] = None

    @property
    def sort_priority(self) -> int:
        return UNCONFIGURED_PRIORITY if self.priority is None else self.priority


class DictionaryRegistry:
    """Live enable/priority table. Lookups read it, admin calls write it."""

    def __init__(self, dictionaries: Iterable[DictionaryInfo] = ()):
        self._lock = ReadWriteLock()
        self._dictionaries: Dict[int, DictionaryInfo] = {info.id: info for info in dictionaries}

    def snapshot(self) -> Dict[int, Tuple[bool, Optional[int]]]:
        with self._lock.read_locked():
            return {info.id: (info.enabled, info.priority) for info in self._dictionaries.values()}

    def names(self) -> Dict[int, str]:
        with self._lock.read_locked():
            return {info.id: info.name for info in self._dictionaries.values()}

    def list(self) -> List[DictionaryInfo]:
        with self._lock.read_locked():
            return sorted(self._dictionaries.values(), key=lambda info: (info.sort_priority, info.id))

    def get(self, dictionary_id: int) -> Optional[DictionaryInfo]:
        with self._lock.read_locked():
            return self._dictionaries.get(dictionary_id)

    def add(self, name: str, dictionary_id: Optional[int] = None, enabled: bool = True,
            priority: Optional[int] = None) -> DictionaryInfo:
        with self._lock.write_locked():
            if dictionary_id is None:
                dictionary_id = max(self._dictionaries, default=0) + 1
            if priority is None:
                priority = len(self._dictionaries)
            info = DictionaryInfo(dictionary_id, name, enabled, priority)
            self._dictionaries[dictionary_id] = info
        logger.info("Added dictionary '%s' (id %d).", name, dictionary_id)
        return info

    def toggle(self, dictionary_id: int, enabled: bool) -> bool:
        with self._lock.write_locked():
            info = self._dictionaries.get(dictionary_id)
            if info is None:
                return False
            self._dictionaries[dictionary_id] = replace(info, enabled=enabled)
        logger.info("Dictionary %d %s.", dictionary_id, "enabled" if enabled else "disabled")
        return True

    def delete(self, dictionary_id: int) -> bool:
        with self._lock.write_locked():
            removed = self._dictionaries.pop(dictionary_id, None)
        if removed is not None:
            logger.info("Deleted dictionary '%s' (id %d).", removed.name, dictionary_id)
        return removed is not None

    def reorder(self, order: Iterable[int]):
        """Priority becomes the position in order. Ids not listed keep their priority."""
        with self._lock.write_locked():
            for position, dictionary_id in enumerate(order):
                info = self._dictionaries.get(dictionary_id)
                if info is None:
                    logger.warning("Ignoring unknown dictionary id %s in reorder.", dictionary_id)
                    continue
                self._dictionaries[dictionary_id] = replace(info, priority=position)

    def clear(self):
        with self._lock.write_locked():
            self._dictionaries.clear()

    @classmethod
    def load(cls, path) -> 'DictionaryRegistry':
        parser = configparser.ConfigParser(interpolation=None)
        try:
            if not parser.read(path, encoding='utf-8'):
                logger.info(f"{path} not found, starting with no dictionaries.")
                return cls()
        except configparser.Error as e:
            logger.warning(f"Warning: Could not parse {path}. Starting with no dictionaries. Error: {e}")
            return cls()

        dictionaries = []
        for section in parser.sections():
            if not section.startswith(SECTION_PREFIX):
                continue
            try:
                dictionary_id = int(section[len(SECTION_PREFIX):])
            except ValueError:
                logger.warning(f"Skipping section [{section}]: id is not an integer.")
                continue
            entry = parser[section]
            try:
                enabled = entry.getboolean('enabled', fallback=False)
            except ValueError:
                logger.warning(f"Dictionary {dictionary_id}: invalid enabled value, treating as disabled.")
                enabled = False
            try:
                priority = entry.getint('priority', fallback=None)
            except ValueError:
                logger.warning(f"Dictionary {dictionary_id}: invalid priority, sorting it last.")
                priority = None
            dictionaries.append(DictionaryInfo(dictionary_id, entry.get('name', f"Dictionary {dictionary_id}"),
                                               enabled, priority))
        logger.info(f"Loaded {len(dictionaries)} dictionaries from {path}.")
        return cls(dictionaries)

    def save(self, path):
        parser = configparser.ConfigParser(interpolation=None)
        for info in self.list():
            section = {'name': info.name, 'enabled': str(info.enabled).lower()}
            if info.priority is not None:
                section['priority'] = str(info.priority)
            parser[f"{SECTION_PREFIX}{info.id}"] = section
        with open(path, 'w', encoding='utf-8') as configfile:
            parser.write(configfile)
        logger.info(f"Dictionary settings saved to {path}.")
