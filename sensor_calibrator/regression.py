import logging
import math

import numpy as np

from .config import config
from .errors import DegenerateInputError

logger = logging.getLogger(__name__)


def linreg(raw, reference, epsilon: float = None) -> dict:
    """
    Least squares fit of reference = slope * raw + offset.

    slope  = (n * sum_xy - sum_x * sum_y) / (n * sum_x2 - sum_x^2)
    offset = (sum_y - slope * sum_x) / n

    Raises DegenerateInputError when |denominator| < epsilon (all raw
    readings effectively identical).

    Returns:
        dict(slope, offset, n_points, r2, rmse, mae, max_abs)
    """
    if epsilon is None:
        epsilon = config.DEGENERATE_EPSILON

    x = np.asarray(raw, dtype=float)
    y = np.asarray(reference, dtype=float)
    if x.ndim != 1 or x.shape != y.shape:
        raise ValueError(f"raw and reference must be 1-D and the same length, got {x.shape} and {y.shape}")
    if x.size < config.MIN_POINTS:
        raise ValueError(f"At least {config.MIN_POINTS} points are required, got {x.size}")

    n = float(x.size)
    sum_x = float(x.sum())
    sum_y = float(y.sum())
    sum_xy = float((x * y).sum())
    sum_x2 = float((x * x).sum())

    numerator = n * sum_xy - sum_x * sum_y
    denominator = n * sum_x2 - sum_x * sum_x

    if abs(denominator) < epsilon:
        logger.warning(f"Degenerate calibration data: denominator={denominator!r} over {int(n)} points")
        raise DegenerateInputError(denominator)

    slope = numerator / denominator
    offset = (sum_y - slope * sum_x) / n

    yhat = slope * x + offset
    resid = y - yhat
    ss_res = float((resid**2).sum())
    ss_tot = float(((y - y.mean())**2).sum())
    r2 = 1.0 - (ss_res / ss_tot if ss_tot > 0 else float("nan"))
    rmse = math.sqrt(float((resid**2).mean()))
    mae = float(np.abs(resid).mean())
    max_abs = float(np.abs(resid).max())

    logger.info(f"Fitted slope={slope:.10f} offset={offset:.10f} (n={int(n)}, R2={r2:.5f}, RMSE={rmse:.4g})")
    return dict(slope=slope, offset=offset, n_points=int(n), r2=r2, rmse=rmse, mae=mae, max_abs=max_abs)


def fit_points(points, epsilon: float = None) -> dict:
    """Fit a list of DataPoint records."""
    raw = [p.raw_reading for p in points]
    reference = [p.reference_value for p in points]
    return linreg(raw, reference, epsilon=epsilon)
