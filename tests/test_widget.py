"""Tests for the Qt line edit, on the offscreen platform."""
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')

import pytest

pytest.importorskip('PyQt5.QtWidgets')

from PyQt5.QtCore import Qt
from PyQt5.QtTest import QTest
from PyQt5.QtWidgets import QApplication

from textmask.widget import MaskedLineEdit

_app = QApplication.instance() or QApplication([])


def test_initial_text_is_mask():
    edit = MaskedLineEdit('##/##/####')
    assert edit.text() == '##/##/####'
    assert edit.isComplete is False
    assert edit.textMask == '##/##/####'


def test_typing_skips_delimiters():
    edit = MaskedLineEdit('##/##/####')
    QTest.keyClicks(edit, '12')
    assert edit.text() == '12/##/####'
    assert edit.cursorPosition() == 3


def test_backspace_restores_mask():
    edit = MaskedLineEdit('##/##/####')
    QTest.keyClicks(edit, '12')
    QTest.keyClick(edit, Qt.Key_Backspace)
    assert edit.text() == '12/##/####'
    assert edit.cursorPosition() == 2
    QTest.keyClick(edit, Qt.Key_Backspace)
    assert edit.text() == '1#/##/####'
    assert edit.cursorPosition() == 1


def test_completion_signal():
    edit = MaskedLineEdit('####', notify_unchanged=False)
    states = []
    edit.isCompleteChanged.connect(states.append)
    QTest.keyClicks(edit, '1234')
    assert edit.text() == '1234'
    assert states == [True]
    assert edit.isComplete is True


def test_external_set_text():
    edit = MaskedLineEdit('##/##')
    edit.setText('01/02')
    assert edit.field.text == '01/02'
    assert edit.isComplete is True
    edit.setText('garbage')
    assert edit.text() == '01/02'
    edit.clear()
    assert edit.text() == '##/##'


def test_reconfigure():
    edit = MaskedLineEdit('##')
    edit.textMask = '***-**'
    assert edit.text() == '***-**'
    edit.maskColor = '#ff0000'
    edit.maskAlpha = 0.5
    assert edit.field.projector.config.mask_color == '#ff0000'
    assert edit.maskAlpha == 0.5
    edit.maskColor = 'red'
    assert edit.maskColor == '#ff0000'


if __name__ == '__main__':
    sys.exit(pytest.main([__file__]))
