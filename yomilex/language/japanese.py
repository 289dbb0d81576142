# yomilex/language/japanese.py
KATAKANA_SMALL_A = 0x30A1
KATAKANA_SMALL_KE = 0x30F6
KATAKANA_OFFSET = 0x60
PROLONGED_SOUND_MARK = 'ー'

# row of the preceding kana -> vowel a following ー stands for
_PROLONGED_VOWELS = (
    ('ぁあかがさざただなはばぱまやゃらわゎ', 'あ'),
    ('ぃいきぎしじちぢにひびぴみりゐ', 'い'),
    ('ぅうくぐすずつづぬふぶぷむゆゅる', 'う'),
    ('ぇえけげせぜてでねへべぺめれゑ', 'え'),
    ('ぉおこごそぞとどのほぼぽもよょろを', 'う'),
)


def katakana_to_hiragana(text: str) -> str:
    return ''.join(
        chr(ord(c) - KATAKANA_OFFSET) if KATAKANA_SMALL_A <= ord(c) <= KATAKANA_SMALL_KE else c
        for c in text
    )


def prolonged_vowel(kana: str):
    for row, vowel in _PROLONGED_VOWELS:
        if kana in row:
            return vowel
    return None


def replace_prolonged_sound_mark(text: str) -> str:
    """Expand ー into the vowel of the kana before it. Expects hiragana input.

    The substituted vowel becomes the new previous character, so a run like
    'すーー' expands to 'すうう'.
    """
    result = []
    previous = None
    for c in text:
        if c == PROLONGED_SOUND_MARK and previous is not None:
            vowel = prolonged_vowel(previous)
            if vowel is not None:
                result.append(vowel)
                previous = vowel
                continue
        result.append(c)
        previous = c
    return ''.join(result)


def is_ideograph(c: str) -> bool:
    return '一' <= c <= '鿿'
