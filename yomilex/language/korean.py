# yomilex/language/korean.py
"""Hangul syllable <-> jamo conversion.

Korean rules are written over disassembled text: every syllable block is
split into compatibility jamo, with compound vowels and trailing consonant
clusters split into their parts (닭 -> ㄷㅏㄹㄱ, 과 -> ㄱㅗㅏ).
Jamo that were typed as standalone characters are shielded during
deinflection so they are never merged into a syllable.
"""
from typing import List

HANGUL_FIRST = 0xAC00
HANGUL_LAST = 0xD7A3
VOWEL_COUNT = 21
TRAILING_COUNT = 28
COMPAT_JAMO_FIRST = 0x3131
COMPAT_JAMO_LAST = 0x318E
SHIELD_OFFSET = 0xF000 - COMPAT_JAMO_FIRST

LEADING = 'ㄱㄲㄴㄷㄸㄹㅁㅂㅃㅅㅆㅇㅈㅉㅊㅋㅌㅍㅎ'
VOWELS = 'ㅏㅐㅑㅒㅓㅔㅕㅖㅗㅘㅙㅚㅛㅜㅝㅞㅟㅠㅡㅢㅣ'
TRAILING = ('', 'ㄱ', 'ㄲ', 'ㄳ', 'ㄴ', 'ㄵ', 'ㄶ', 'ㄷ', 'ㄹ', 'ㄺ', 'ㄻ', 'ㄼ', 'ㄽ', 'ㄾ',
            'ㄿ', 'ㅀ', 'ㅁ', 'ㅂ', 'ㅄ', 'ㅅ', 'ㅆ', 'ㅇ', 'ㅈ', 'ㅊ', 'ㅋ', 'ㅌ', 'ㅍ', 'ㅎ')

COMPOUND_VOWELS = {
    'ㅘ': 'ㅗㅏ', 'ㅙ': 'ㅗㅐ', 'ㅚ': 'ㅗㅣ', 'ㅝ': 'ㅜㅓ', 'ㅞ': 'ㅜㅔ', 'ㅟ': 'ㅜㅣ', 'ㅢ': 'ㅡㅣ',
}
CONSONANT_CLUSTERS = {
    'ㄳ': 'ㄱㅅ', 'ㄵ': 'ㄴㅈ', 'ㄶ': 'ㄴㅎ', 'ㄺ': 'ㄹㄱ', 'ㄻ': 'ㄹㅁ', 'ㄼ': 'ㄹㅂ',
    'ㄽ': 'ㄹㅅ', 'ㄾ': 'ㄹㅌ', 'ㄿ': 'ㄹㅍ', 'ㅀ': 'ㄹㅎ', 'ㅄ': 'ㅂㅅ',
}

_LEADING_INDEX = {c: i for i, c in enumerate(LEADING)}
_VOWEL_INDEX = {c: i for i, c in enumerate(VOWELS)}
_TRAILING_INDEX = {c: i for i, c in enumerate(TRAILING) if c}
_COMBINE_VOWELS = {parts: vowel for vowel, parts in COMPOUND_VOWELS.items()}
_COMBINE_CLUSTERS = {parts: cluster for cluster, parts in CONSONANT_CLUSTERS.items()}


def is_syllable(c: str) -> bool:
    return HANGUL_FIRST <= ord(c) <= HANGUL_LAST


def disassemble(text: str) -> str:
    jamo = []
    for c in text:
        if not is_syllable(c):
            jamo.append(c)
            continue
        index = ord(c) - HANGUL_FIRST
        trailing = index % TRAILING_COUNT
        vowel = (index // TRAILING_COUNT) % VOWEL_COUNT
        leading = index // TRAILING_COUNT // VOWEL_COUNT
        jamo.append(LEADING[leading])
        jamo.append(COMPOUND_VOWELS.get(VOWELS[vowel], VOWELS[vowel]))
        if trailing:
            jamo.append(CONSONANT_CLUSTERS.get(TRAILING[trailing], TRAILING[trailing]))
    return ''.join(jamo)


def _compose(leading: str, vowel: str, trailing: str) -> str:
    index = (_LEADING_INDEX[leading] * VOWEL_COUNT + _VOWEL_INDEX[vowel]) * TRAILING_COUNT
    return chr(HANGUL_FIRST + index + (_TRAILING_INDEX[trailing] if trailing else 0))


def _starts_syllable(jamo: List[str], i: int) -> bool:
    """A consonant followed by a vowel opens the next syllable instead of closing this one."""
    return i + 1 < len(jamo) and jamo[i + 1] in _VOWEL_INDEX


def assemble(text: str) -> str:
    jamo = list(text)
    result = []
    i = 0
    while i < len(jamo):
        leading = jamo[i]
        if leading not in _LEADING_INDEX or i + 1 >= len(jamo) or jamo[i + 1] not in _VOWEL_INDEX:
            result.append(leading)
            i += 1
            continue
        vowel = jamo[i + 1]
        i += 2
        if i < len(jamo) and vowel + jamo[i] in _COMBINE_VOWELS:
            vowel = _COMBINE_VOWELS[vowel + jamo[i]]
            i += 1
        trailing = ''
        if i < len(jamo) and jamo[i] in _TRAILING_INDEX and not _starts_syllable(jamo, i):
            trailing = jamo[i]
            i += 1
            if (i < len(jamo) and trailing + jamo[i] in _COMBINE_CLUSTERS
                    and not _starts_syllable(jamo, i)):
                trailing = _COMBINE_CLUSTERS[trailing + jamo[i]]
                i += 1
        result.append(_compose(leading, vowel, trailing))
    return ''.join(result)


def _shield_jamo(text: str) -> str:
    """Move jamo typed as-is into the private use area so assemble leaves them apart."""
    return ''.join(chr(ord(c) + SHIELD_OFFSET) if COMPAT_JAMO_FIRST <= ord(c) <= COMPAT_JAMO_LAST else c
                   for c in text)


def _unshield_jamo(text: str) -> str:
    first, last = COMPAT_JAMO_FIRST + SHIELD_OFFSET, COMPAT_JAMO_LAST + SHIELD_OFFSET
    return ''.join(chr(ord(c) - SHIELD_OFFSET) if first <= ord(c) <= last else c for c in text)


def deinflect(transformer, text: str) -> List[str]:
    """Only jamo that came out of syllable blocks are recomposed; ㄱㅏ stays ㄱㅏ."""
    jamo = disassemble(_shield_jamo(text))
    words = (_unshield_jamo(assemble(term)) for term in transformer.deinflect_terms(jamo))
    return list(dict.fromkeys(words))
