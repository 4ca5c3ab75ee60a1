#!/usr/bin/env python3
"""
Sensor Calibration Tool
-----------------------
- Fits Real Value = Slope x Raw Reading + Offset by least squares over
  reference/raw pairs typed in at the prompt
- Saves and loads the two coefficients as a plain-text file
- Converts raw readings with the active calibration

Settings come from the environment or a .env file, see config.py.
"""

import logging
import sys

from .config import config
from .prompts import Prompter
from .session import CalibrationSession


def setup_logger(level: str = "WARNING", log_file: str = None):
    lvl = getattr(logging, str(level).upper(), None)
    if not isinstance(lvl, int):
        lvl = logging.WARNING
    kwargs = {}
    if log_file:
        kwargs["filename"] = log_file
    logging.basicConfig(
        level=lvl,
        format="%(asctime)s %(levelname)s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        **kwargs,
    )


def main() -> int:
    setup_logger(config.LOG_LEVEL, config.LOG_FILE)
    prompter = Prompter(max_retries=config.INPUT_MAX_RETRIES, pause=config.PAUSE_AFTER_COMMAND)
    session = CalibrationSession(prompter)
    return session.run()


if __name__ == "__main__":
    sys.exit(main())
