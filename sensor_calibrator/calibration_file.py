"""
Plain-text calibration file
Format: slope on the first line, offset on the second, fixed-point with
10 decimals. The loader only needs two whitespace-separated numbers in
that order; anything after the second number is ignored.
"""

import logging
import math
import re
from pathlib import Path

from .config import config
from .errors import FileOpenError, FileWriteError, NoCalibrationError, ParseError
from .models import Calibration, CalibrationStore
from .prompts import FLOAT_PATTERN

logger = logging.getLogger(__name__)

# leading number of a token, like `stream >> double`
_NUMBER = re.compile(r"\s*(" + FLOAT_PATTERN + ")", re.ASCII)


def format_calibration(calibration: Calibration, decimals: int = None) -> str:
    if decimals is None:
        decimals = config.SAVE_DECIMALS
    return f"{calibration.slope:.{decimals}f}\n{calibration.offset:.{decimals}f}\n"


def parse_calibration(text: str, filename=None) -> Calibration:
    values = []
    pos = 0
    for field in ("slope", "offset"):
        match = _NUMBER.match(text, pos)
        if match is None:
            raise ParseError(field, filename)
        value = float(match.group(1))
        if not math.isfinite(value):
            raise ParseError(field, filename)
        values.append(value)
        pos = match.end()
    return Calibration(*values)


def save_calibration(store: CalibrationStore, path) -> Path:
    if not store.is_valid():
        raise NoCalibrationError()

    path = Path(path)
    content = format_calibration(store.get())
    try:
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        logger.error(f"Failed to write calibration to {path}: {e}")
        raise FileWriteError(path, e.strerror or str(e)) from e

    logger.info(f"Saved calibration to {path}")
    return path


def load_calibration(store: CalibrationStore, path) -> Calibration:
    path = Path(path)
    try:
        with open(path, "rb") as f:
            data = f.read()
    except FileNotFoundError as e:
        logger.error(f"Calibration file not found: {path}")
        raise FileOpenError(path, "file does not exist") from e
    except OSError as e:
        logger.error(f"Failed to open calibration file {path}: {e}")
        raise FileOpenError(path, e.strerror or str(e)) from e

    # only the two numbers have to be text; later bytes may be anything
    text = data.decode("ascii", errors="replace")

    try:
        calibration = parse_calibration(text, path)
    except ParseError:
        logger.error(f"Malformed calibration file {path}")
        raise

    store.set(calibration.slope, calibration.offset)
    logger.info(f"Loaded calibration from {path}: slope={calibration.slope} offset={calibration.offset}")
    return store.get()
