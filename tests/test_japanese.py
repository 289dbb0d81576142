from yomilex.language.japanese import (
    is_ideograph,
    katakana_to_hiragana,
    prolonged_vowel,
    replace_prolonged_sound_mark,
)
from yomilex.language.languages import Language, load_transformer
from yomilex.language.normalizer import text_variants


def test_polite_past_deinflects_with_trace_in_application_order() -> None:
    transformer = load_transformer(Language.JAPANESE)
    matches = [item for item in transformer.transform_with_trace("食べました") if item.text == "食べる"]
    assert matches
    assert any(item.reasons == ["polite", "polite past"] for item in matches)
    polite = next(item for item in matches if item.reasons == ["polite", "polite past"])
    assert [frame.text for frame in polite.trace] == ["食べます", "食べました"]
    assert polite.conditions == transformer.condition_flags_for_type("v1")


def test_verb_composite_covers_every_verb_class() -> None:
    transformer = load_transformer(Language.JAPANESE)
    verb = transformer.condition_flags_for_type("v")
    for name in ("v1", "v5", "vk", "vs", "vz"):
        assert verb & transformer.condition_flags_for_type(name)
    assert not verb & transformer.condition_flags_for_type("adj-i")


def test_katakana_to_hiragana() -> None:
    assert katakana_to_hiragana("カタカナ") == "かたかな"
    assert katakana_to_hiragana("ヴァ") == "ゔぁ"
    # the prolonged sound mark and kanji are outside the remapped range
    assert katakana_to_hiragana("スーパー漢字") == "すーぱー漢字"


def test_prolonged_sound_mark_uses_previous_row() -> None:
    assert replace_prolonged_sound_mark("すーぱー") == "すうぱあ"
    assert replace_prolonged_sound_mark("とー") == "とう"
    assert replace_prolonged_sound_mark("けーき") == "けえき"
    assert replace_prolonged_sound_mark("すーー") == "すうう"


def test_prolonged_sound_mark_without_a_kana_before_it_is_kept() -> None:
    assert replace_prolonged_sound_mark("ーあ") == "ーあ"
    assert replace_prolonged_sound_mark("漢ー") == "漢ー"
    assert prolonged_vowel("ん") is None


def test_is_ideograph() -> None:
    assert is_ideograph("食")
    assert not is_ideograph("た")
    assert not is_ideograph("タ")
    assert not is_ideograph("a")


def test_japanese_variants_in_fixed_order() -> None:
    assert text_variants("スーパー", Language.JAPANESE) == ["スーパー", "すーぱー", "すうぱあ"]
    assert text_variants("たべる", Language.JAPANESE) == ["たべる"]


def test_other_script_variants() -> None:
    assert text_variants("Hello", Language.ENGLISH) == ["Hello", "hello"]
    assert text_variants("hello", Language.ENGLISH) == ["hello"]
    assert text_variants("كَتَبَ", Language.ARABIC) == ["كَتَبَ", "كتب"]
    assert text_variants("你好", Language.CHINESE) == ["你好"]
