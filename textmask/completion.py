"""Completion tracking — has every replaceable slot been filled?"""
import enum
import logging
from typing import Callable, List, Optional, Sequence

from textmask.errors import ConfigurationError
from textmask.mask import MaskModel

logger = logging.getLogger(__name__)


class PlaceholderPolicy(enum.Enum):
    """How an unfilled slot is recognised.

    POSITION uses the per-position filled flags kept by the edit engine.
    VALUE treats any character from the mask's replaceable set as unfilled,
    so typing a placeholder symbol itself is indistinguishable from a gap.
    """
    POSITION = 'position'
    VALUE = 'value'

    @classmethod
    def parse(cls, value) -> 'PlaceholderPolicy':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ConfigurationError(f"unknown placeholder policy: {value!r}") from None


def is_complete_by_value(text: str, model: MaskModel) -> bool:
    if not text:
        return False
    replaceable = model.replaceable
    return not any(c in replaceable for c in text)


def is_complete_by_position(text: str, model: MaskModel, filled: Sequence[bool]) -> bool:
    if not text:
        return False
    matcher = model.matcher
    for i, c in enumerate(model.mask):
        if matcher.is_delimiter(c):
            continue
        if i >= len(filled) or not filled[i]:
            return False
    return True


class CompletionTracker:
    """Observable completion flag.

    update() recomputes the flag and notifies listeners. With
    notify_unchanged=True every notification is delivered, otherwise only
    those whose value differs from the last one delivered. Recomputing
    with notify=False never loses a transition: the next notify() reports it.
    """

    def __init__(self, model: MaskModel, policy=PlaceholderPolicy.POSITION,
                 notify_unchanged: bool = True):
        self._model = model
        self._policy = PlaceholderPolicy.parse(policy)
        self._notify_unchanged = notify_unchanged
        self._complete = False
        self._notified = False
        self._listeners: List[Callable[[bool], None]] = []

    @property
    def policy(self) -> PlaceholderPolicy:
        return self._policy

    @policy.setter
    def policy(self, value):
        self._policy = PlaceholderPolicy.parse(value)

    @property
    def notify_unchanged(self) -> bool:
        return self._notify_unchanged

    @property
    def is_complete(self) -> bool:
        return self._complete

    def on_change(self, callback: Callable[[bool], None]):
        self._listeners.append(callback)

    def evaluate(self, text: str, filled: Optional[Sequence[bool]] = None) -> bool:
        """Completion of text under the current policy, without side effects."""
        if self._policy is PlaceholderPolicy.VALUE or filled is None:
            return is_complete_by_value(text, self._model)
        return is_complete_by_position(text, self._model, filled)

    def update(self, text: str, filled: Optional[Sequence[bool]] = None, notify: bool = True) -> bool:
        previous = self._complete
        self._complete = self.evaluate(text, filled)
        if previous != self._complete:
            logger.debug("Completion changed: %s → %s", previous, self._complete)
        if notify:
            self.notify()
        return self._complete

    def notify(self):
        if not self._notify_unchanged and self._complete == self._notified:
            return
        self._notified = self._complete
        for callback in list(self._listeners):
            callback(self._complete)
