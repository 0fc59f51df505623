"""Tests for the mask model."""
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest

from textmask.mask import MaskModel, Slot


def test_classify():
    model = MaskModel('##/##')
    assert model.classify(0) is Slot.REPLACEABLE
    assert model.classify(2) is Slot.DELIMITER
    assert model.classify(4) is Slot.REPLACEABLE
    assert model.replaceable_positions() == [0, 1, 3, 4]


def test_classify_out_of_range():
    model = MaskModel('##')
    with pytest.raises(IndexError):
        model.classify(2)
    with pytest.raises(IndexError):
        model.classify(-1)


def test_set_delimiters_recomputes_replaceable():
    model = MaskModel('##-##')
    assert model.replaceable == frozenset('#')
    model.set_delimiters('')
    assert model.replaceable == frozenset('#-')
    assert model.classify(2) is Slot.REPLACEABLE
    model.set_delimiters('#')
    assert model.replaceable == frozenset('-')


def test_empty_mask():
    model = MaskModel(None)
    assert model.mask == ''
    assert model.is_empty
    assert model.replaceable == frozenset()
    with pytest.raises(IndexError):
        model.classify(0)


def test_set_mask_notifies_listeners():
    model = MaskModel('##')
    seen = []
    model.on_change(lambda m: seen.append(m.mask))
    model.set_mask('###')
    model.set_delimiters('/')
    assert seen == ['###', '###']
    assert len(model) == 3


def test_fits():
    model = MaskModel('##/##')
    assert model.fits('12/34')
    assert model.fits('##/##')
    assert not model.fits('12-34')
    assert not model.fits('12/345')


if __name__ == '__main__':
    test_classify()
    test_classify_out_of_range()
    test_set_delimiters_recomputes_replaceable()
    test_empty_mask()
    test_set_mask_notifies_listeners()
    test_fits()
    print("All mask tests passed.")
