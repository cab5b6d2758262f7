'''Various utility functions for other modules of ranktally.

There should normally be no need to use these functions directly.
'''

import operator
from typing import Any, List, Tuple, Dict, Hashable, Iterable
from numbers import Number

COLLATION_ORDER = (
    ' _-,;:!?.\'"()[]{}@*/\\&#%`^+<=>|~$'
    '0123456789abcdefghijklmnopqrstuvwxyz'
)
'''Primary order of ASCII characters in the Unicode root collation.'''

_PRIMARY_WEIGHTS = {char: i for i, char in enumerate(COLLATION_ORDER)}


def sorted_votes(votes: Dict[Any, Number],
                 descending: bool = True,
                 ) -> List[Tuple[Any, Number]]:
    '''Return votes items sorted by value.

    The sort is stable, so equal values keep the order of the input mapping.
    '''
    return list(sorted(
        votes.items(),
        key=operator.itemgetter(1),
        reverse=descending
    ))


def extreme_keys(votes: Dict[Any, Number],
                 highest: bool = True,
                 ) -> List[Any]:
    '''Return all keys sharing the highest (or lowest) value.

    Keys are listed in the order of the input mapping. An empty mapping gives
    an empty list.
    '''
    if not votes:
        return []
    extreme = (max if highest else min)(votes.values())
    return [key for key, value in votes.items() if value == extreme]


def zero_counts(keys: Iterable[Hashable]) -> Dict[Hashable, int]:
    '''Return a counter dictionary with all given keys present at zero.'''
    return {key: 0 for key in keys}


def collation_key(identifier: Any
                  ) -> Tuple[Tuple[int, ...], Tuple[int, ...], str]:
    '''Return a sort key ordering identifiers the way web clients do.

    Poll clients order candidate identifiers by locale-aware comparison
    under the Unicode root collation, not by code points: letters compare
    case-insensitively first (``a < B < c``), with lowercase ahead of
    uppercase only between otherwise equal identifiers, and punctuation
    sorts before digits, which sort before letters. The key reproduces this
    for ASCII identifiers independently of the current locale. Other
    characters sort after all ASCII ones, by code point.

    Identifiers that are not strings are compared by their string form.
    '''
    text = str(identifier)
    primary = tuple(
        _PRIMARY_WEIGHTS.get(char.lower(), len(_PRIMARY_WEIGHTS) + ord(char))
        for char in text
    )
    tertiary = tuple(int(char.isupper()) for char in text)
    return primary, tertiary, text
