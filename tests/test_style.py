"""Tests for style projection."""
import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest

from textmask.completion import PlaceholderPolicy
from textmask.engine import EditEngine
from textmask.errors import ConfigurationError
from textmask.mask import MaskModel
from textmask.style import StyleConfig, StyledChar, StyleProjector, StyleRun


@pytest.mark.parametrize('policy', list(PlaceholderPolicy))
def test_projecting_mask_marks_replaceable_positions(policy):
    model = MaskModel('##/##/####')
    engine = EditEngine(model)
    projector = StyleProjector(model, policy)
    styled = projector.project(model.mask, engine.filled)
    expected = [model.classify(i).value == 'replaceable' for i in range(len(model))]
    assert [s.placeholder for s in styled] == expected
    assert ''.join(s.char for s in styled) == model.mask


def test_value_policy_styles_typed_placeholder():
    model = MaskModel('####')
    engine = EditEngine(model)
    engine.insert(0, '#')
    value = StyleProjector(model, PlaceholderPolicy.VALUE).project(engine.text, engine.filled)
    position = StyleProjector(model, PlaceholderPolicy.POSITION).project(engine.text, engine.filled)
    assert value[0] == StyledChar('#', True)
    assert position[0] == StyledChar('#', False)


def test_project_is_restartable():
    model = MaskModel('##/##')
    projector = StyleProjector(model)
    first = projector.project('1#/##', [True, False, False, False, False])
    second = projector.project('1#/##', [True, False, False, False, False])
    assert first == second
    assert [s.placeholder for s in first] == [False, True, False, True, True]


def test_runs():
    model = MaskModel('##/##')
    projector = StyleProjector(model)
    assert projector.runs('##/##') == [
        StyleRun(0, 2, True), StyleRun(2, 1, False), StyleRun(3, 2, True),
    ]
    assert projector.runs('') == []


def test_empty_mask_styles_nothing():
    projector = StyleProjector(MaskModel(''))
    assert projector.project('ab') == [StyledChar('a', False), StyledChar('b', False)]


def test_style_config():
    config = StyleConfig()
    assert config.mask_color == '#000000'
    assert config.mask_alpha == 0.3
    assert StyleConfig(mask_color='#fff').rgba() == (255, 255, 255, 0.3)
    assert StyleConfig(mask_color='336699', mask_alpha=1).rgba() == (0x33, 0x66, 0x99, 1.0)
    with pytest.raises(ConfigurationError):
        StyleConfig(mask_alpha=1.5)
    with pytest.raises(ConfigurationError):
        StyleConfig(mask_color='red').rgba()


if __name__ == '__main__':
    sys.exit(pytest.main([__file__]))
