"""Masked field — the host-facing facade tying the masking core together.

A host widget forwards raw edit gestures to handle(), applies the
returned text and cursor to its own buffer, and listens for text and
completion notifications.
"""
import logging
from contextlib import contextmanager
from typing import Callable, List, Optional

from textmask.completion import CompletionTracker, PlaceholderPolicy
from textmask.delimiters import DEFAULT_DELIMITERS
from textmask.engine import DeleteEdit, Edit, EditEngine, EditResult, InsertEdit
from textmask.errors import ConfigurationError, ReentrantEditError
from textmask.mask import MaskModel
from textmask.style import StyleConfig, StyleProjector

logger = logging.getLogger(__name__)


class MaskedField:
    """One masked input: mask model, edit engine, completion and styling."""

    def __init__(self, mask: Optional[str] = None, delimiters=DEFAULT_DELIMITERS,
                 policy=PlaceholderPolicy.POSITION, notify_unchanged: bool = True,
                 style: Optional[StyleConfig] = None):
        self.model = MaskModel(mask, delimiters)
        self.engine = EditEngine(self.model)
        self.tracker = CompletionTracker(self.model, policy, notify_unchanged)
        self.projector = StyleProjector(self.model, policy, style)
        self._text_listeners: List[Callable[[str], None]] = []
        self._dispatching = False
        self._batch_depth = 0
        self._pending_text = False
        self._pending_complete = False
        self.model.on_change(lambda model: self._recompute())
        self._recompute()

    # --- state -------------------------------------------------------

    @property
    def mask(self) -> str:
        return self.model.mask

    @property
    def delimiters(self) -> str:
        return self.model.delimiters

    @property
    def text(self) -> str:
        return self.engine.text

    @property
    def cursor(self) -> int:
        return self.engine.cursor

    @property
    def is_complete(self) -> bool:
        return self.tracker.is_complete

    @property
    def policy(self) -> PlaceholderPolicy:
        return self.tracker.policy

    @policy.setter
    def policy(self, value):
        self.tracker.policy = value
        self.projector.policy = self.tracker.policy
        self._changed(text_changed=False)

    def raw_value(self) -> str:
        """Only the characters typed into replaceable slots."""
        text = self.engine.text
        filled = self.engine.filled
        return ''.join(text[i] for i in self.model.replaceable_positions() if filled[i])

    # --- observers ---------------------------------------------------

    def on_text_changed(self, callback: Callable[[str], None]):
        self._text_listeners.append(callback)

    def on_complete_changed(self, callback: Callable[[bool], None]):
        self.tracker.on_change(callback)

    # --- configuration -----------------------------------------------

    def set_mask(self, mask: Optional[str], reset: bool = True):
        """Replace the mask; by default the text is reset to the new mask."""
        self._guard()
        new_len = len(mask or '')
        if not reset and new_len != len(self.engine.text):
            raise ConfigurationError(
                f"new mask has {new_len} positions but the text has {len(self.engine.text)}; "
                "pass reset=True")
        self.model.set_mask(mask)
        if reset:
            self.engine.reset()
        self._changed(text_changed=reset)

    def set_delimiters(self, delimiters):
        """Replace the delimiter set; the text is kept as is."""
        self._guard()
        self.model.set_delimiters(delimiters)
        self._changed(text_changed=False)

    # --- edits -------------------------------------------------------

    def handle(self, edit: Edit) -> EditResult:
        """Apply one edit intent; the result fully replaces the raw edit."""
        self._guard()
        result = self.engine.apply(edit)
        self._changed(text_changed=result.changed)
        return result

    def on_edit_intent(self, kind: str, start: int, end_or_text) -> EditResult:
        """Untyped entry point: kind is 'insert' or 'delete'."""
        kind = kind.lower()
        if kind == 'insert':
            return self.handle(InsertEdit(start, end_or_text))
        if kind == 'delete':
            return self.handle(DeleteEdit(start, end_or_text))
        raise ValueError(f"unknown edit kind: {kind!r}")

    def insert(self, index: int, text: str) -> EditResult:
        return self.handle(InsertEdit(index, text))

    def delete(self, start: int, end: int) -> EditResult:
        return self.handle(DeleteEdit(start, end))

    def type_text(self, text: str, index: Optional[int] = None) -> EditResult:
        """Type characters one at a time starting at index (default: cursor)."""
        pos = self.cursor if index is None else index
        result = EditResult(self.text, pos, changed=False)
        with self.batch():
            for char in text:
                result = self.insert(pos, char)
                pos = result.cursor
        return result

    def set_text(self, text: str, silent: bool = False):
        """Assign the whole text. A silent write fires no notifications."""
        self._guard()
        self.engine.set_text(text)
        if silent:
            self._recompute()
            return
        self._changed()

    def reset(self):
        self._guard()
        self.engine.reset()
        self._changed()

    # --- styling -----------------------------------------------------

    def styled(self):
        return self.projector.project(self.text, self.engine.filled)

    def style_runs(self):
        return self.projector.runs(self.text, self.engine.filled)

    # --- notification plumbing ---------------------------------------

    @contextmanager
    def batch(self):
        """Collapse notifications raised inside the block into one on exit."""
        self._batch_depth += 1
        try:
            yield self
        finally:
            self._batch_depth -= 1
            if self._batch_depth == 0:
                text_pending, self._pending_text = self._pending_text, False
                complete_pending, self._pending_complete = self._pending_complete, False
                if text_pending:
                    self._dispatch_text()
                if complete_pending:
                    self._dispatch(self.tracker.notify)

    def _guard(self):
        if self._dispatching:
            raise ReentrantEditError("edit dispatched from inside a change notification")

    def _text_changed(self):
        if self._batch_depth:
            self._pending_text = True
            return
        self._dispatch_text()

    def _dispatch_text(self):
        text = self.text
        self._dispatch(lambda: [callback(text) for callback in list(self._text_listeners)])

    def _recompute(self):
        self.tracker.update(self.text, self.engine.filled, notify=False)

    def _changed(self, text_changed: bool = True):
        # Completion is brought up to date before any observer runs
        self._recompute()
        if text_changed:
            self._text_changed()
        self._notify_completion()

    def _notify_completion(self):
        if self._batch_depth:
            self._pending_complete = True
            return
        self._dispatch(self.tracker.notify)

    def _dispatch(self, fire):
        self._dispatching = True
        try:
            fire()
        finally:
            self._dispatching = False

    def __repr__(self):
        return f"MaskedField(mask={self.mask!r}, text={self.text!r}, complete={self.is_complete})"
