import pytest

from sensor_calibrator.errors import NotCalibratedError
from sensor_calibrator.models import Calibration, CalibrationStore, convert


def test_store_starts_invalid(store):
    assert not store.is_valid()
    with pytest.raises(NotCalibratedError):
        store.get()
    with pytest.raises(NotCalibratedError):
        store.convert(1.0)


def test_set_replaces_whole_calibration(store):
    store.set(2.0, 1.0)
    store.set(-0.5, 7.25)
    assert store.is_valid()
    assert store.get() == Calibration(-0.5, 7.25)


@pytest.mark.parametrize("raw", [0.0, 5.0, -3.5, 1e6])
def test_convert_is_affine(raw):
    calibration = Calibration(slope=0.0007717730334784052, offset=-67.27574018734285)
    assert convert(calibration, raw) == calibration.slope * raw + calibration.offset


def test_store_convert_uses_active_calibration():
    store = CalibrationStore()
    store.set(2.0, 0.0)
    assert store.convert(5.0) == pytest.approx(10.0)
