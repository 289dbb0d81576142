# yomilex/language/english.py
from typing import Optional, Tuple

PHRASAL_PARTICLES = (
    'aboard', 'about', 'above', 'across', 'ahead', 'alongside', 'apart', 'around', 'aside', 'astray',
    'away', 'back', 'before', 'behind', 'below', 'beneath', 'besides', 'between', 'beyond', 'by',
    'close', 'down', 'east', 'west', 'north', 'south', 'eastward', 'westward', 'northward',
    'southward', 'forward', 'backward', 'backwards', 'forwards', 'home', 'in', 'inside', 'instead',
    'near', 'off', 'on', 'opposite', 'out', 'outside', 'over', 'overhead', 'past', 'round', 'since',
    'through', 'throughout', 'together', 'under', 'underneath', 'up', 'within', 'without',
)

PHRASAL_PREPOSITIONS = (
    'aback', 'about', 'above', 'across', 'after', 'against', 'ahead', 'along', 'among', 'apart',
    'around', 'as', 'aside', 'at', 'away', 'back', 'before', 'behind', 'below', 'between', 'beyond',
    'by', 'down', 'even', 'for', 'forth', 'forward', 'from', 'in', 'into', 'of', 'off', 'on', 'onto',
    'open', 'out', 'over', 'past', 'round', 'through', 'to', 'together', 'toward', 'towards', 'under',
    'up', 'upon', 'way', 'with', 'without',
)

_PARTICLE_SET = frozenset(PHRASAL_PARTICLES)
PHRASAL_WORDS = _PARTICLE_SET | frozenset(PHRASAL_PREPOSITIONS)


def split_phrasal_suffix(text: str, inflected: str) -> Optional[Tuple[str, str]]:
    """'looked up' with inflected 'ed' -> ('look', 'up'); None unless exactly verb + particle."""
    words = text.split()
    if len(words) != 2:
        return None
    verb, particle = words
    if particle not in PHRASAL_WORDS or not verb.endswith(inflected):
        return None
    return verb[:len(verb) - len(inflected)], particle


def collapse_interposed_object(text: str) -> Optional[str]:
    """'look it up' -> 'look up'. The words between verb and particle must not be particles themselves."""
    words = text.split()
    if len(words) < 3:
        return None
    particle = words[-1]
    if particle not in _PARTICLE_SET:
        return None
    if any(word in PHRASAL_WORDS for word in words[1:-1]):
        return None
    return f"{words[0]} {particle}"
