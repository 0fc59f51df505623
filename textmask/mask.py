"""Mask model — the template string and its delimiter set."""
import enum
import logging
from typing import Callable, List, Optional

from textmask.delimiters import (
    DEFAULT_DELIMITERS, DelimiterMatcher, compile_delimiters, replaceable_chars,
)

logger = logging.getLogger(__name__)


class Slot(enum.Enum):
    DELIMITER = 'delimiter'
    REPLACEABLE = 'replaceable'


class MaskModel:
    """Holds the current mask and delimiter set.

    The replaceable-character set is derived from both and is recomputed
    whenever either one changes, so it is never stale. Listeners registered
    with on_change() are called after every reconfiguration.
    """

    def __init__(self, mask: Optional[str] = None, delimiters=DEFAULT_DELIMITERS):
        self._mask = mask or ''
        self._matcher = compile_delimiters(delimiters)
        self._replaceable = replaceable_chars(self._mask, self._matcher)
        self._listeners: List[Callable[['MaskModel'], None]] = []

    @property
    def mask(self) -> str:
        return self._mask

    @property
    def matcher(self) -> DelimiterMatcher:
        return self._matcher

    @property
    def delimiters(self) -> str:
        return ''.join(sorted(self._matcher.chars))

    @property
    def replaceable(self):
        return self._replaceable

    @property
    def is_empty(self) -> bool:
        return not self._mask

    def __len__(self):
        return len(self._mask)

    def on_change(self, callback: Callable[['MaskModel'], None]):
        self._listeners.append(callback)

    def set_delimiters(self, delimiters):
        """Replace the delimiter set. Live text is left untouched."""
        self._matcher = compile_delimiters(delimiters)
        self._recompute()
        logger.info("Delimiters set to %r", self.delimiters)

    def set_mask(self, mask: Optional[str]):
        """Replace the mask. Resetting live text is up to the host."""
        self._mask = mask or ''
        self._recompute()
        logger.info("Mask set to %r (%d positions)", self._mask, len(self._mask))

    def _recompute(self):
        self._replaceable = replaceable_chars(self._mask, self._matcher)
        for callback in list(self._listeners):
            callback(self)

    def classify(self, position: int) -> Slot:
        if not 0 <= position < len(self._mask):
            raise IndexError(f"position {position} outside mask of length {len(self._mask)}")
        if self._matcher.is_delimiter(self._mask[position]):
            return Slot.DELIMITER
        return Slot.REPLACEABLE

    def replaceable_positions(self) -> List[int]:
        return [i for i, c in enumerate(self._mask) if not self._matcher.is_delimiter(c)]

    def fits(self, text: str) -> bool:
        """True if text has the mask's length and keeps every delimiter in place."""
        if len(text) != len(self._mask):
            return False
        return all(
            text[i] == c
            for i, c in enumerate(self._mask)
            if self._matcher.is_delimiter(c)
        )

    def __repr__(self):
        return f"MaskModel(mask={self._mask!r}, delimiters={self.delimiters!r})"
