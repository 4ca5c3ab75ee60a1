import numpy as np
import pytest

from sensor_calibrator.errors import DegenerateInputError
from sensor_calibrator.models import DataPoint
from sensor_calibrator.regression import fit_points, linreg


def test_two_point_fit():
    fit = linreg(raw=[0.0, 10.0], reference=[0.0, 20.0])
    assert fit["slope"] == pytest.approx(2.0)
    assert fit["offset"] == pytest.approx(0.0)
    assert fit["n_points"] == 2
    assert fit["r2"] == pytest.approx(1.0)
    assert fit["rmse"] == pytest.approx(0.0, abs=1e-12)


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_matches_normal_equations(seed):
    rng = np.random.default_rng(seed)
    x = rng.uniform(-100, 100, size=25)
    y = 3.2 * x - 7.5 + rng.normal(0, 2.0, size=25)

    fit = linreg(x, y)

    A = np.column_stack([x, np.ones_like(x)])
    (slope, offset), *_ = np.linalg.lstsq(A, y, rcond=None)
    assert fit["slope"] == pytest.approx(slope, abs=1e-9)
    assert fit["offset"] == pytest.approx(offset, abs=1e-9)


def test_load_cell_points():
    points = [(87366, 0), (642572, 429), (1051450, 744)]
    fit = linreg([p[0] for p in points], [p[1] for p in points])
    slope, offset = np.polyfit([p[0] for p in points], [p[1] for p in points], 1)
    assert fit["slope"] == pytest.approx(slope, rel=1e-9)
    assert fit["offset"] == pytest.approx(offset, rel=1e-6)
    assert fit["max_abs"] >= fit["mae"] >= 0.0


def test_identical_raw_readings_are_degenerate():
    with pytest.raises(DegenerateInputError):
        linreg(raw=[5.0, 5.0, 5.0], reference=[1.0, 2.0, 3.0])


def test_degenerate_threshold_is_absolute():
    # denominator = 2 * (a^2 + b^2) - (a + b)^2 = (a - b)^2 = 1e-12
    with pytest.raises(DegenerateInputError):
        linreg(raw=[0.0, 1e-6], reference=[0.0, 1.0])
    fit = linreg(raw=[0.0, 1e-4], reference=[0.0, 1.0])
    assert fit["slope"] == pytest.approx(1e4)


def test_constant_reference_has_undefined_r2():
    fit = linreg(raw=[1.0, 2.0, 3.0], reference=[4.0, 4.0, 4.0])
    assert fit["slope"] == pytest.approx(0.0)
    assert fit["offset"] == pytest.approx(4.0)
    assert np.isnan(fit["r2"])


def test_rejects_bad_shapes():
    with pytest.raises(ValueError):
        linreg([1.0, 2.0], [1.0])
    with pytest.raises(ValueError):
        linreg([1.0], [1.0])


def test_fit_points_splits_reference_and_raw():
    points = [DataPoint(reference_value=0.0, raw_reading=0.0), DataPoint(reference_value=20.0, raw_reading=10.0)]
    fit = fit_points(points)
    assert fit["slope"] == pytest.approx(2.0)
    assert fit["offset"] == pytest.approx(0.0)
