"""Delimiter classification — which mask characters are literals."""
from typing import Iterable, FrozenSet

# Characters that are never replaced and are skipped by the cursor
DEFAULT_DELIMITERS = '/\\|:-.()[]{}<>'


class DelimiterMatcher:
    """Compiled membership test for a set of delimiter characters.

    Every character is matched literally, so pattern metacharacters
    such as '.', '*' or '(' need no escaping.
    """

    __slots__ = ('_chars',)

    def __init__(self, delimiters: Iterable[str] = ''):
        chars = set()
        for item in delimiters or '':
            # Accept both a plain string and a sequence of strings
            chars.update(item)
        self._chars: FrozenSet[str] = frozenset(chars)

    @property
    def chars(self) -> FrozenSet[str]:
        return self._chars

    def is_delimiter(self, char: str) -> bool:
        return char in self._chars

    __contains__ = is_delimiter

    def __len__(self):
        return len(self._chars)

    def __eq__(self, other):
        if isinstance(other, DelimiterMatcher):
            return self._chars == other._chars
        return NotImplemented

    def __hash__(self):
        return hash(self._chars)

    def __repr__(self):
        return f"DelimiterMatcher({''.join(sorted(self._chars))!r})"


def compile_delimiters(delimiters: Iterable[str] = DEFAULT_DELIMITERS) -> DelimiterMatcher:
    """Build a matcher from a string or sequence of delimiter characters."""
    return DelimiterMatcher(delimiters)


def replaceable_chars(mask: str | None, matcher: DelimiterMatcher) -> FrozenSet[str]:
    """Characters of the mask that are fillable slots (not delimiters)."""
    if not mask:
        return frozenset()
    return frozenset(c for c in mask if not matcher.is_delimiter(c))
