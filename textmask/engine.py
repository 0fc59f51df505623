"""Edit engine — the masking state machine.

Typed characters overwrite the next replaceable slot, deletions restore
the mask's own characters, and the text always keeps the mask's length.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from textmask.errors import ConfigurationError
from textmask.mask import MaskModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InsertEdit:
    index: int
    text: str


@dataclass(frozen=True)
class DeleteEdit:
    start: int
    end: int


Edit = Union[InsertEdit, DeleteEdit]


@dataclass(frozen=True)
class EditResult:
    text: str
    cursor: int
    changed: bool = True


def backspace_range(cursor: int, selection: Optional[Tuple[int, int]] = None) -> Tuple[int, int]:
    """Range a Backspace key press should delete."""
    if selection and selection[0] != selection[1]:
        return min(selection), max(selection)
    if cursor <= 0:
        return 0, 0
    return cursor - 1, cursor


def forward_delete_range(cursor: int, length: int,
                         selection: Optional[Tuple[int, int]] = None) -> Tuple[int, int]:
    """Range a Delete key press should delete."""
    if selection and selection[0] != selection[1]:
        return min(selection), max(selection)
    return cursor, min(cursor + 1, length)


class EditEngine:
    """Applies insert/delete intents to mask-shaped text.

    Besides the text itself the engine keeps one "filled" flag per
    position: set when a character is typed into the slot, cleared when
    the slot is deleted or the text is reset.
    """

    def __init__(self, model: MaskModel, text: Optional[str] = None):
        self._model = model
        self._text = model.mask
        self._filled: List[bool] = [False] * len(model)
        self._cursor = 0
        if text is not None:
            self.set_text(text)

    @property
    def model(self) -> MaskModel:
        return self._model

    @property
    def text(self) -> str:
        return self._text

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def filled(self) -> Tuple[bool, ...]:
        return tuple(self._filled)

    def reset(self):
        """Reset the text to the bare mask."""
        self._text = self._model.mask
        self._filled = [False] * len(self._model)
        self._cursor = 0

    def set_text(self, text: str):
        """Replace the whole text. Filled flags are derived from what differs from the mask."""
        if not self._model.fits(text):
            raise ConfigurationError(
                f"text {text!r} does not fit mask {self._model.mask!r}")
        mask = self._model.mask
        matcher = self._model.matcher
        self._text = text
        self._filled = [
            not matcher.is_delimiter(m) and t != m
            for t, m in zip(text, mask)
        ]
        self._cursor = min(self._cursor, len(text))

    def _check_shape(self):
        if len(self._text) != len(self._model):
            raise ConfigurationError(
                f"text length {len(self._text)} differs from mask length {len(self._model)}; "
                "reset the text after changing the mask")

    def next_replaceable_position(self, start: int) -> int:
        """First position at or after start that is not a delimiter, or the end."""
        mask = self._model.mask
        matcher = self._model.matcher
        length = len(mask)
        pos = start
        while pos < length and matcher.is_delimiter(mask[pos]):
            pos += 1
        return pos

    def insert(self, index: int, text: str) -> EditResult:
        """Write the first character of text into the next fillable slot."""
        if index < 0:
            raise IndexError(f"insertion index {index} is negative")
        length = len(self._model)
        if index >= length or not text:
            return EditResult(self._text, min(index, length), changed=False)
        self._check_shape()

        target = self.next_replaceable_position(index)
        if target >= length:
            # Only delimiters remain after index
            self._cursor = length
            return EditResult(self._text, length, changed=False)

        char = text[0]
        self._text = self._text[:target] + char + self._text[target + 1:]
        self._filled[target] = True
        self._cursor = self.next_replaceable_position(target + 1)
        logger.debug("Insert %r at %d (requested %d), cursor → %d", char, target, index, self._cursor)
        return EditResult(self._text, self._cursor)

    def paste(self, index: int, text: str) -> EditResult:
        """Insert every character of text, one slot each, until the mask is full."""
        if index < 0:
            raise IndexError(f"insertion index {index} is negative")
        length = len(self._model)
        if index >= length or not text:
            return EditResult(self._text, min(index, length), changed=False)
        self._check_shape()

        before = self._text
        pos = index
        for char in text:
            if pos >= length:
                break
            pos = self.insert(pos, char).cursor
        return EditResult(self._text, self._cursor, changed=self._text != before)

    def delete(self, start: int, end: int) -> EditResult:
        """Restore the mask's characters over [start, end); cursor goes to start."""
        length = len(self._model)
        if self._model.is_empty:
            return EditResult(self._text, 0, changed=False)
        if start > end:
            raise IndexError(f"inverted range [{start}, {end})")
        if start < 0 or end > length:
            raise IndexError(f"range [{start}, {end}) outside [0, {length}]")
        self._check_shape()

        before = self._text
        self._text = self._text[:start] + self._model.mask[start:end] + self._text[end:]
        self._filled[start:end] = [False] * (end - start)
        self._cursor = start
        logger.debug("Delete [%d, %d), cursor → %d", start, end, start)
        return EditResult(self._text, start, changed=self._text != before)

    def apply(self, edit: Edit) -> EditResult:
        if isinstance(edit, InsertEdit):
            return self.paste(edit.index, edit.text)
        if isinstance(edit, DeleteEdit):
            return self.delete(edit.start, edit.end)
        raise TypeError(f"unsupported edit: {edit!r}")
