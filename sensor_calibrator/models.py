from typing import NamedTuple, Optional

from .errors import NotCalibratedError


class Calibration(NamedTuple):
    slope: float
    offset: float


class DataPoint(NamedTuple):
    reference_value: float
    raw_reading: float


def convert(calibration: Calibration, raw_value: float) -> float:
    """Real Value = Slope x Raw Reading + Offset"""
    return calibration.slope * raw_value + calibration.offset


class CalibrationStore:
    """
    Holds the active slope/offset pair.
    Starts empty; every regression or file load replaces the pair as a whole.
    """

    def __init__(self):
        self._calibration: Optional[Calibration] = None

    def set(self, slope: float, offset: float) -> Calibration:
        self._calibration = Calibration(float(slope), float(offset))
        return self._calibration

    def get(self) -> Calibration:
        if self._calibration is None:
            raise NotCalibratedError()
        return self._calibration

    def is_valid(self) -> bool:
        return self._calibration is not None

    def convert(self, raw_value: float) -> float:
        return convert(self.get(), raw_value)
