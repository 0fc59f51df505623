"""Qt line edit that routes every edit through a MaskedField."""
import dataclasses
import logging

from PyQt5.QtCore import QCoreApplication, Qt, pyqtProperty, pyqtSignal
from PyQt5.QtGui import (
    QBrush, QColor, QGuiApplication, QInputMethodEvent, QKeySequence, QTextCharFormat,
)
from PyQt5.QtWidgets import QLineEdit

from textmask.completion import PlaceholderPolicy
from textmask.delimiters import DEFAULT_DELIMITERS
from textmask.engine import DeleteEdit, InsertEdit, backspace_range, forward_delete_range
from textmask.errors import ConfigurationError, MaskError
from textmask.field import MaskedField
from textmask.style import StyleConfig

logger = logging.getLogger(__name__)


class MaskedLineEdit(QLineEdit):
    """QLineEdit whose text always keeps the shape of its mask.

    Raw key presses are captured before QLineEdit applies them; the field
    computes the corrected text and cursor, which replace the raw edit.
    Unfilled slots are painted with maskColor at maskAlpha opacity.
    """

    isCompleteChanged = pyqtSignal(bool)

    def __init__(self, mask=None, delimiters=DEFAULT_DELIMITERS,
                 policy=PlaceholderPolicy.POSITION, style: StyleConfig = None,
                 notify_unchanged: bool = True, parent=None):
        super().__init__(parent)
        self._field = MaskedField(mask, delimiters, policy, notify_unchanged, style)
        self._applying = False
        self._styling = False
        self._pending_complete = []
        self._field.on_complete_changed(self._pending_complete.append)

        self.setAcceptDrops(False)
        self.textChanged.connect(self._on_text_changed)
        self.cursorPositionChanged.connect(self._on_cursor_moved)
        self._apply(self._field.text, 0)

    @property
    def field(self) -> MaskedField:
        return self._field

    # --- properties --------------------------------------------------

    def getTextMask(self):
        return self._field.mask

    def setTextMask(self, mask):
        self._field.set_mask(mask)
        self._apply(self._field.text, 0)

    textMask = pyqtProperty(str, fget=getTextMask, fset=setTextMask)

    def getDelimiters(self):
        return self._field.delimiters

    def setDelimiters(self, delimiters):
        self._field.set_delimiters(delimiters)
        self._apply(self._field.text, self.cursorPosition())

    delimiters = pyqtProperty(str, fget=getDelimiters, fset=setDelimiters)

    def getIsComplete(self):
        return self._field.is_complete

    isComplete = pyqtProperty(bool, fget=getIsComplete, notify=isCompleteChanged)

    def getMaskColor(self):
        return self._field.projector.config.mask_color

    def setMaskColor(self, color):
        # Normalised to #rrggbb so named colors are accepted too
        self._set_style(mask_color=QColor(color).name())

    maskColor = pyqtProperty(str, fget=getMaskColor, fset=setMaskColor)

    def getMaskAlpha(self):
        return self._field.projector.config.mask_alpha

    def setMaskAlpha(self, alpha):
        self._set_style(mask_alpha=float(alpha))

    maskAlpha = pyqtProperty(float, fget=getMaskAlpha, fset=setMaskAlpha)

    def _set_style(self, **changes):
        self._field.projector.config = dataclasses.replace(self._field.projector.config, **changes)
        self._apply_styles()

    # --- input capture -----------------------------------------------

    def keyPressEvent(self, event):
        if self.isReadOnly():
            super().keyPressEvent(event)
            return

        selection = self._selection()
        cursor = self.cursorPosition()

        if event.matches(QKeySequence.Paste):
            self._type(QGuiApplication.clipboard().text(), selection)
            return
        if event.matches(QKeySequence.Cut):
            if selection:
                self.copy()
                self._edit(DeleteEdit(*selection))
            return
        if event.key() == Qt.Key_Backspace:
            self._edit(DeleteEdit(*backspace_range(cursor, selection)))
            return
        if event.key() == Qt.Key_Delete:
            self._edit(DeleteEdit(*forward_delete_range(cursor, len(self.text()), selection)))
            return

        text = event.text()
        modifiers = event.modifiers() & (Qt.ControlModifier | Qt.AltModifier | Qt.MetaModifier)
        if text and text.isprintable() and not modifiers:
            self._type(text, selection)
            return

        # Navigation, copy, select-all and the like
        super().keyPressEvent(event)

    def inputMethodEvent(self, event):
        commit = event.commitString()
        if commit:
            self._type(commit, self._selection())
            event.accept()
            return
        super().inputMethodEvent(event)

    def _selection(self):
        if not self.hasSelectedText():
            return None
        start = self.selectionStart()
        return start, start + len(self.selectedText())

    def _type(self, text, selection):
        if not text:
            return
        start = selection[0] if selection else self.cursorPosition()
        try:
            with self._field.batch():
                if selection:
                    self._field.handle(DeleteEdit(*selection))
                result = self._field.handle(InsertEdit(start, text))
        except (IndexError, MaskError) as e:
            logger.debug("Rejected input %r at %d: %s", text, start, e)
            return
        self._apply(result.text, result.cursor)

    def _edit(self, edit):
        try:
            result = self._field.handle(edit)
        except (IndexError, MaskError) as e:
            logger.debug("Rejected %r: %s", edit, e)
            return
        self._apply(result.text, result.cursor)

    # --- applying results --------------------------------------------

    def _apply(self, text, cursor):
        """Silent set: write the field's text without feeding it back."""
        self._applying = True
        try:
            if self.text() != text:
                self.setText(text)
            self.setCursorPosition(cursor)
        finally:
            self._applying = False
        self._apply_styles()
        self._flush_complete()

    def _flush_complete(self):
        pending = list(self._pending_complete)
        self._pending_complete.clear()
        for value in pending:
            self.isCompleteChanged.emit(value)

    def _on_text_changed(self, text):
        if self._applying:
            return
        # Text assigned from outside (setText, clear, context-menu paste)
        if not text:
            self._field.reset()
        else:
            try:
                self._field.set_text(text)
            except ConfigurationError as e:
                logger.debug("Restoring masked text: %s", e)
        self._apply(self._field.text, min(self.cursorPosition(), len(self._field.text)))

    def _on_cursor_moved(self, old, new):
        if not self._applying:
            self._apply_styles()

    def _apply_styles(self):
        """Paint placeholder runs through input-method text formats."""
        if self._styling:
            return
        config = self._field.projector.config
        r, g, b, alpha = config.rgba()
        color = QColor(r, g, b)
        color.setAlphaF(alpha)
        fmt = QTextCharFormat()
        fmt.setForeground(QBrush(color))

        cursor = self.cursorPosition()
        attributes = [
            QInputMethodEvent.Attribute(
                QInputMethodEvent.TextFormat, run.start - cursor, run.length, fmt)
            for run in self._field.style_runs()
            if run.placeholder
        ]
        self._styling = True
        try:
            QCoreApplication.sendEvent(self, QInputMethodEvent('', attributes))
        finally:
            self._styling = False
