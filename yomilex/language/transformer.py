# yomilex/language/transformer.py
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from yomilex.language import english
from yomilex.language.arabic import is_arabic_letter

logger = logging.getLogger(__name__)

MAX_CONDITIONS = 32


class TransformerError(Exception):
    """Raised when a rule descriptor cannot be compiled."""


class ConditionCycleError(TransformerError):
    pass


class ConditionLimitError(TransformerError):
    pass


class UnknownConditionError(TransformerError):
    pass


class RuleDefinitionError(TransformerError):
    pass


# --- rule kinds ---
# Each kind returns the deinflected text, or None when the text is not inflected by it.

@dataclass(frozen=True)
class SuffixRule:
    inflected: str
    deinflected: str = ''

    def deinflect(self, text: str) -> Optional[str]:
        if not text.endswith(self.inflected):
            return None
        return text[:len(text) - len(self.inflected)] + self.deinflected


@dataclass(frozen=True)
class PrefixRule:
    inflected: str
    deinflected: str = ''

    def deinflect(self, text: str) -> Optional[str]:
        if not text.startswith(self.inflected):
            return None
        return self.deinflected + text[len(self.inflected):]


@dataclass(frozen=True)
class WholeWordRule:
    inflected: str
    deinflected: str = ''

    def deinflect(self, text: str) -> Optional[str]:
        return self.deinflected if text == self.inflected else None


@dataclass(frozen=True)
class AffixRule:
    inflected_prefix: str = ''
    deinflected_prefix: str = ''
    inflected_suffix: str = ''
    deinflected_suffix: str = ''
    initial_disallow: Optional[str] = None
    final_disallow: Optional[str] = None
    require_arabic_letters: bool = False

    def deinflect(self, text: str) -> Optional[str]:
        stem = self._stem(text)
        if stem is None:
            return None
        return self.deinflected_prefix + stem + self.deinflected_suffix

    def _stem(self, text: str) -> Optional[str]:
        if not text.startswith(self.inflected_prefix):
            return None
        rest = text[len(self.inflected_prefix):]
        if not rest.endswith(self.inflected_suffix):
            return None
        stem = rest[:len(rest) - len(self.inflected_suffix)]
        if self.require_arabic_letters and (not stem or not all(is_arabic_letter(c) for c in stem)):
            return None
        if self.initial_disallow is not None and stem[:1] == self.initial_disallow:
            return None
        if self.final_disallow is not None and stem[-1:] == self.final_disallow:
            return None
        return stem


@dataclass(frozen=True)
class PhrasalSuffixRule:
    inflected: str
    deinflected: str = ''

    def deinflect(self, text: str) -> Optional[str]:
        parts = english.split_phrasal_suffix(text, self.inflected)
        if parts is None:
            return None
        stem, particle = parts
        return f"{stem}{self.deinflected} {particle}"


@dataclass(frozen=True)
class PhrasalInterposedObjectRule:

    def deinflect(self, text: str) -> Optional[str]:
        return english.collapse_interposed_object(text)


def _parse_char(value: Optional[str], field: str) -> Optional[str]:
    if not value:
        return None
    if len(value) != 1:
        raise RuleDefinitionError(f"Expected single character for {field}, got {value!r}")
    return value


def _required(rule: dict, key: str) -> str:
    value = rule.get(key)
    if value is None:
        raise RuleDefinitionError(f"Missing {key} for {rule.get('type')} rule")
    return value


RULE_KINDS = {
    'suffix': lambda r: SuffixRule(_required(r, 'inflected'), r.get('deinflected') or ''),
    'prefix': lambda r: PrefixRule(_required(r, 'inflected'), r.get('deinflected') or ''),
    'wholeWord': lambda r: WholeWordRule(_required(r, 'inflected'), r.get('deinflected') or ''),
    'affix': lambda r: AffixRule(
        inflected_prefix=r.get('inflectedPrefix') or '',
        deinflected_prefix=r.get('deinflectedPrefix') or '',
        inflected_suffix=r.get('inflectedSuffix') or '',
        deinflected_suffix=r.get('deinflectedSuffix') or '',
        initial_disallow=_parse_char(r.get('initialDisallow'), 'initialDisallow'),
        final_disallow=_parse_char(r.get('finalDisallow'), 'finalDisallow'),
        require_arabic_letters=bool(r.get('requireArabicLetters', False)),
    ),
    'phrasalSuffix': lambda r: PhrasalSuffixRule(_required(r, 'inflected'), r.get('deinflected') or ''),
    'phrasalInterposedObject': lambda r: PhrasalInterposedObjectRule(),
}


# --- compiled structures ---

@dataclass(frozen=True)
class Rule:
    transform_id: str
    rule_index: int
    conditions_in: int
    conditions_out: int
    kind: object


@dataclass(frozen=True)
class Transform:
    id: str
    rules: Tuple[Rule, ...]


@dataclass(frozen=True)
class TransformedText:
    text: str
    conditions: int


@dataclass(frozen=True)
class TraceFrame:
    transform_id: str
    rule_index: int
    text: str  # the text the rule was applied to


@dataclass(frozen=True)
class TransformedTextTrace:
    text: str
    conditions: int
    trace: Tuple[TraceFrame, ...]

    @property
    def reasons(self) -> List[str]:
        return [frame.transform_id for frame in self.trace]


@dataclass(frozen=True)
class _Node:
    text: str
    conditions: int
    parent: Optional[int]
    rule: Optional[Rule]


def conditions_match(current: int, required: int) -> bool:
    """0 means no state is known yet and accepts every rule."""
    return current == 0 or (current & required) != 0


def _strict_flags(flags_map: Mapping[str, int], names: Iterable[str]) -> Optional[int]:
    flags = 0
    for name in names:
        flag = flags_map.get(name)
        if flag is None:
            return None
        flags |= flag
    return flags


def build_condition_flags(conditions: Mapping[str, Optional[Sequence[str]]]) -> Dict[str, int]:
    """Assign a bit to every leaf condition and OR together composites.

    Composites are resolved by repeated sweeps; a sweep that makes no progress
    means the remaining composites depend on each other.
    """
    for name, sub_conditions in conditions.items():
        for sub in sub_conditions or ():
            if sub not in conditions:
                raise UnknownConditionError(f"Condition {name!r} refers to unknown condition {sub!r}")

    flags_map: Dict[str, int] = {}
    next_flag_index = 0
    targets = list(conditions.items())
    while targets:
        remaining = []
        for name, sub_conditions in targets:
            if sub_conditions is None:
                if next_flag_index >= MAX_CONDITIONS:
                    raise ConditionLimitError(f"Maximum condition count exceeded ({MAX_CONDITIONS})")
                flags_map[name] = 1 << next_flag_index
                next_flag_index += 1
                continue
            flags = _strict_flags(flags_map, sub_conditions)
            if flags is None:
                remaining.append((name, sub_conditions))
            else:
                flags_map[name] = flags
        if len(remaining) == len(targets):
            names = ', '.join(name for name, _ in remaining)
            raise ConditionCycleError(f"Cycle in condition definitions: {names}")
        targets = remaining
    return flags_map


class LanguageTransformer:
    """Compiled, read-only rule set for one language."""

    def __init__(self, transforms: Sequence[Transform] = (), condition_flags: Optional[Mapping[str, int]] = None):
        self._transforms = tuple(transforms)
        self._rules = tuple(rule for transform in self._transforms for rule in transform.rules)
        self._condition_flags = MappingProxyType(dict(condition_flags or {}))

    @classmethod
    def empty(cls) -> 'LanguageTransformer':
        return cls()

    @classmethod
    def from_descriptor(cls, descriptor: dict) -> 'LanguageTransformer':
        conditions = {
            name: (definition or {}).get('subConditions')
            for name, definition in descriptor.get('conditions', {}).items()
        }
        flags_map = build_condition_flags(conditions)

        transforms = []
        for transform_def in descriptor.get('transforms', []):
            if not isinstance(transform_def, dict):
                raise RuleDefinitionError(f"Transform at position {len(transforms)} is not an object")
            transform_id = transform_def.get('id')
            if not transform_id:
                raise RuleDefinitionError(f"Transform at position {len(transforms)} has no id")
            rules = []
            for rule_index, rule_def in enumerate(transform_def.get('rules', [])):
                if not isinstance(rule_def, dict):
                    raise RuleDefinitionError(f"Transform {transform_id} rule {rule_index} is not an object")
                rule_type = rule_def.get('type')
                factory = RULE_KINDS.get(rule_type)
                if factory is None:
                    raise RuleDefinitionError(
                        f"Unsupported rule type {rule_type!r} in transform {transform_id} rule {rule_index}")
                try:
                    kind = factory(rule_def)
                except RuleDefinitionError as e:
                    raise RuleDefinitionError(f"Transform {transform_id} rule {rule_index}: {e}") from e
                rules.append(Rule(
                    transform_id=transform_id,
                    rule_index=rule_index,
                    conditions_in=cls._compile_conditions(flags_map, rule_def.get('conditionsIn', []),
                                                          'conditionsIn', transform_id, rule_index),
                    conditions_out=cls._compile_conditions(flags_map, rule_def.get('conditionsOut', []),
                                                           'conditionsOut', transform_id, rule_index),
                    kind=kind,
                ))
            transforms.append(Transform(transform_id, tuple(rules)))

        logger.debug("Compiled %d transforms over %d conditions.", len(transforms), len(flags_map))
        return cls(transforms, flags_map)

    @staticmethod
    def _compile_conditions(flags_map, names, field, transform_id, rule_index) -> int:
        flags = _strict_flags(flags_map, names)
        if flags is None:
            unknown = [name for name in names if name not in flags_map]
            raise UnknownConditionError(
                f"Invalid {field} for transform {transform_id} rule {rule_index}: unknown {unknown}")
        return flags

    @classmethod
    def from_json(cls, text: str) -> 'LanguageTransformer':
        return cls.from_descriptor(json.loads(text))

    @classmethod
    def from_file(cls, path) -> 'LanguageTransformer':
        return cls.from_json(Path(path).read_text(encoding='utf-8'))

    @property
    def transforms(self) -> Tuple[Transform, ...]:
        return self._transforms

    def transform(self, source_text: str) -> List[TransformedText]:
        return [TransformedText(item.text, item.conditions) for item in self.transform_with_trace(source_text)]

    def transform_with_trace(self, source_text: str) -> List[TransformedTextTrace]:
        """Every text the source could have been inflected from, the source itself first.

        Nodes are appended to a flat list and point at their parent, so a
        trace is rebuilt by walking parents: newest deinflection first, which
        is the order the inflections were applied to the dictionary form.
        """
        nodes = [_Node(source_text, 0, None, None)]
        i = 0
        while i < len(nodes):
            node = nodes[i]
            for rule in self._rules:
                if not conditions_match(node.conditions, rule.conditions_in):
                    continue
                deinflected = rule.kind.deinflect(node.text)
                if deinflected is None:
                    continue
                if self._already_applied(nodes, i, rule):
                    continue
                nodes.append(_Node(deinflected, rule.conditions_out, i, rule))
            i += 1

        return [
            TransformedTextTrace(node.text, node.conditions, self._trace(nodes, index))
            for index, node in enumerate(nodes)
        ]

    @staticmethod
    def _already_applied(nodes: List[_Node], index: int, rule: Rule) -> bool:
        text = nodes[index].text
        current = nodes[index]
        while current.rule is not None:
            parent = nodes[current.parent]
            if (current.rule.transform_id == rule.transform_id
                    and current.rule.rule_index == rule.rule_index
                    and parent.text == text):
                return True
            current = parent
        return False

    @staticmethod
    def _trace(nodes: List[_Node], index: int) -> Tuple[TraceFrame, ...]:
        frames = []
        current = nodes[index]
        while current.rule is not None:
            parent = nodes[current.parent]
            frames.append(TraceFrame(current.rule.transform_id, current.rule.rule_index, parent.text))
            current = parent
        return tuple(frames)

    def deinflect_terms(self, source_text: str) -> List[str]:
        return list(dict.fromkeys(item.text for item in self.transform(source_text)))

    def condition_flags_for_type(self, condition_type: str) -> Optional[int]:
        return self._condition_flags.get(condition_type)

    def condition_flags_for_types(self, condition_types: Iterable[str]) -> int:
        flags = 0
        for condition_type in condition_types:
            flags |= self._condition_flags.get(condition_type, 0)
        return flags

    conditions_match = staticmethod(conditions_match)
