"""Tests for the headless command-line mode."""
import sys
import os
import io
import argparse
import tempfile
from pathlib import Path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from textmask.config import Config
from textmask.main import run_headless


def run(text, mask='##/##/####', delimiters=None, policy=None):
    args = argparse.Namespace(mask=mask, delimiters=delimiters, policy=policy, type=text)
    out = io.StringIO()
    with tempfile.TemporaryDirectory() as tmp:
        code = run_headless(Config(Path(tmp) / 'config.json'), args, out)
    return code, out.getvalue()


def test_complete_date():
    code, output = run('12311999')
    assert code == 0
    assert 'text:     12/31/1999' in output
    assert 'complete: True' in output
    assert 'value:    12311999' in output


def test_partial_date():
    code, output = run('12')
    assert code == 1
    assert 'text:     12/##/####' in output
    assert 'cursor:   3' in output
    assert 'styled:   12/__/____' in output


def test_no_delimiters():
    code, output = run('AB', mask='bbbb', delimiters='')
    assert code == 1
    assert 'text:     ABbb' in output


if __name__ == '__main__':
    test_complete_date()
    test_partial_date()
    test_no_delimiters()
    print("All main tests passed.")
