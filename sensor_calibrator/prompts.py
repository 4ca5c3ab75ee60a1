import logging
import math
import re
import sys
from typing import Callable, Optional

from .errors import MalformedInputError

logger = logging.getLogger(__name__)

# plain decimal notation only: no nan/inf, no digit separators
FLOAT_PATTERN = r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
_FLOAT = re.compile(FLOAT_PATTERN, re.ASCII)
_INT = re.compile(r"[+-]?\d+", re.ASCII)


def _first_token(text: str) -> str:
    parts = text.split()
    if not parts:
        raise ValueError("empty input")
    return parts[0]


def parse_int(text: str) -> int:
    token = _first_token(text)
    if not _INT.fullmatch(token):
        raise ValueError(f"not an integer: {token!r}")
    return int(token)


def parse_float(text: str) -> float:
    token = _first_token(text)
    if not _FLOAT.fullmatch(token):
        raise ValueError(f"not a number: {token!r}")
    value = float(token)
    if not math.isfinite(value):
        raise ValueError(f"out of range: {token!r}")
    return value


class Prompter:
    """
    Console I/O for the interactive session.

    Numeric prompts re-ask until the line parses. max_retries=None means no
    limit; otherwise MalformedInputError is raised once the limit is hit.
    """

    def __init__(self, input_func: Optional[Callable[[str], str]] = None, output=None,
                 max_retries: Optional[int] = None, pause: bool = True):
        self.input_func = input_func or input
        self.output = output
        self.max_retries = max_retries
        self.pause_enabled = pause

    def write(self, text: str = ""):
        print(text, file=self.output or sys.stdout)

    def ask(self, prompt: str) -> str:
        return self.input_func(prompt)

    def ask_until_valid(self, prompt: str, parse: Callable[[str], object], error_message: str):
        attempts = 0
        while True:
            text = self.ask(prompt)
            try:
                return parse(text)
            except ValueError:
                attempts += 1
                logger.debug(f"Rejected input {text!r} for prompt {prompt!r} (attempt {attempts})")
                self.write(error_message)
                if self.max_retries is not None and attempts >= self.max_retries:
                    raise MalformedInputError(f"No valid input after {attempts} attempts.")

    def ask_int(self, prompt: str, minimum: Optional[int] = None, error_message: str = None) -> int:
        if error_message is None:
            error_message = "Invalid input. Enter an integer." if minimum is None \
                else f"Invalid input. Enter an integer >= {minimum}."

        def parse(text):
            value = parse_int(text)
            if minimum is not None and value < minimum:
                raise ValueError(f"{value} < {minimum}")
            return value

        return self.ask_until_valid(prompt, parse, error_message)

    def ask_float(self, prompt: str, error_message: str = "Invalid input. Enter a number.") -> float:
        return self.ask_until_valid(prompt, parse_float, error_message)

    def ask_text(self, prompt: str, default: Optional[str] = None) -> str:
        text = self.ask(prompt).strip()
        if not text and default is not None:
            return default
        return text

    def ask_yes_no(self, prompt: str) -> bool:
        """Only an answer starting with 'y' or 'Y' counts as yes."""
        answer = self.ask(prompt).strip()
        return answer[:1].lower() == "y"

    def pause(self):
        if self.pause_enabled:
            self.ask("\nPress Enter to continue...")
