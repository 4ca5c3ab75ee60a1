"""
Configuration for the Sensor Calibrator
Values can be overridden through environment variables or a local .env file
"""

import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() not in ('0', 'false', 'no', 'off')


def _env_int(name: str):
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return int(value)


class Config:
    BANNER_TITLE = "SENSOR CALIBRATION TOOL"

    # Calibration file
    DEFAULT_CALIBRATION_FILE = os.getenv('CALIBRATION_FILE', 'calibration.txt')
    SAVE_DECIMALS = 10  # fixed-point digits written to file

    # Regression
    MIN_POINTS = 2
    DEGENERATE_EPSILON = 1e-10  # absolute bound on the normal-equation denominator

    # Console
    DISPLAY_DECIMALS = 4
    INPUT_MAX_RETRIES = _env_int('CALIBRATION_INPUT_MAX_RETRIES')  # None = retry forever
    PAUSE_AFTER_COMMAND = _env_flag('CALIBRATION_PAUSE', True)

    # Logging
    LOG_LEVEL = os.getenv('CALIBRATION_LOG_LEVEL', 'WARNING')
    LOG_FILE = os.getenv('CALIBRATION_LOG_FILE')  # None = stderr

# Create global config instance
config = Config()
