from __future__ import annotations

import io

import pytest

from sensor_calibrator.models import CalibrationStore
from sensor_calibrator.prompts import Prompter


class ScriptedInput:
    """Feeds canned lines to a Prompter; raises EOFError when they run out."""

    def __init__(self, lines):
        self.lines = list(lines)
        self.prompts = []

    def __call__(self, prompt: str = "") -> str:
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)


@pytest.fixture
def store():
    return CalibrationStore()


@pytest.fixture
def make_prompter():
    def _make(lines, max_retries=None, pause=False):
        scripted = ScriptedInput(lines)
        out = io.StringIO()
        prompter = Prompter(input_func=scripted, output=out, max_retries=max_retries, pause=pause)
        return prompter, scripted, out

    return _make


@pytest.fixture
def scripted_input():
    return ScriptedInput
