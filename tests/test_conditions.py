import pytest

from yomilex.language.transformer import (
    ConditionCycleError,
    ConditionLimitError,
    UnknownConditionError,
    build_condition_flags,
    conditions_match,
)


def test_leaves_get_distinct_bits_and_composites_combine_them() -> None:
    flags = build_condition_flags({"a": None, "b": None, "ab": ["a", "b"]})
    assert flags == {"a": 1, "b": 2, "ab": 3}


def test_composite_declared_before_its_parts_resolves() -> None:
    flags = build_condition_flags({"top": ["mid"], "mid": ["leaf"], "leaf": None})
    assert flags["leaf"] == 1
    assert flags["mid"] == 1
    assert flags["top"] == 1


def test_cycle_between_composites_is_an_error() -> None:
    with pytest.raises(ConditionCycleError):
        build_condition_flags({"a": ["b"], "b": ["a"], "leaf": None})


def test_thirty_two_leaves_fit() -> None:
    flags = build_condition_flags({f"c{i}": None for i in range(32)})
    assert flags["c31"] == 1 << 31


def test_thirty_three_leaves_exceed_the_limit() -> None:
    with pytest.raises(ConditionLimitError):
        build_condition_flags({f"c{i}": None for i in range(33)})


def test_unknown_sub_condition_is_reported() -> None:
    with pytest.raises(UnknownConditionError, match="missing"):
        build_condition_flags({"a": ["missing"]})


def test_zero_conditions_match_everything() -> None:
    assert conditions_match(0, 0b100)
    assert conditions_match(0b110, 0b100)
    assert not conditions_match(0b001, 0b100)
    # a rule that requires nothing only fires on unconstrained text
    assert not conditions_match(0b001, 0)
