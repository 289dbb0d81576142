import pytest

from yomilex.language import korean
from yomilex.language.languages import Deinflector, Language


@pytest.fixture(scope="module")
def deinflector() -> Deinflector:
    return Deinflector()


def test_disassemble_splits_compound_vowels_and_clusters() -> None:
    assert korean.disassemble("닭") == "ㄷㅏㄹㄱ"
    assert korean.disassemble("과") == "ㄱㅗㅏ"
    assert korean.disassemble("먹다") == "ㅁㅓㄱㄷㅏ"


@pytest.mark.parametrize("text", ["먹었습니다", "닭고기", "읽다", "괜찮아요", "안녕하세요", "의사", "abc 먹다"])
def test_round_trip_without_rules(text: str) -> None:
    assert korean.assemble(korean.disassemble(text)) == text


def test_cluster_only_combines_before_a_consonant() -> None:
    # ㄹ ㄱ followed by a vowel: ㄱ opens the next syllable
    assert korean.assemble("ㅇㅣㄹㄱㅇㅓ") == "읽어"
    assert korean.assemble("ㅇㅣㄹㄱㅓ") == "일거"


def test_stray_jamo_are_kept() -> None:
    assert korean.assemble("ㅋㅋ") == "ㅋㅋ"
    assert korean.assemble("ㅏ") == "ㅏ"


@pytest.mark.parametrize("source, term", [
    ("먹었습니다", "먹다"),
    ("읽으세요", "읽다"),
    ("봤어요", "보다"),
    ("했어요", "하다"),
    ("갑니다", "가다"),
    ("먹지 않았어요", "먹다"),
])
def test_deinflection(deinflector: Deinflector, source: str, term: str) -> None:
    results = deinflector.deinflect(Language.KOREAN, source)
    assert results[0] == source
    assert term in results


@pytest.mark.parametrize("source", ["ㄱㅏ", "고ㅏ", "ㅋㅋ"])
def test_typed_jamo_are_not_merged_into_syllables(deinflector: Deinflector, source: str) -> None:
    results = deinflector.deinflect(Language.KOREAN, source)
    assert results == [source]


def test_typed_jamo_survive_next_to_inflected_words(deinflector: Deinflector) -> None:
    results = deinflector.deinflect(Language.KOREAN, "ㅋ먹었어요")
    assert results[0] == "ㅋ먹었어요"
    assert "ㅋ먹다" in results
