from __future__ import annotations
import math
from typing import Sequence, Tuple

import numpy as np


def linear_trend(values: Sequence[float]) -> Tuple[float, float]:
    """
    Ordinary least squares line through (index, value) for index = 0..n-1.

    returns:
    - (slope, intercept): tuple[float, float]

    notes:
    - Closed form, no outlier rejection. A zero denominator (n <= 1) or a
      non-finite slope gives a flat line through the mean.
    """
    n = len(values)
    if n == 0:
        return 0.0, 0.0

    y = np.asarray(values, dtype=float)
    x = np.arange(n, dtype=float)
    sum_x = float(x.sum())
    sum_y = float(y.sum())
    sum_xy = float((x * y).sum())
    sum_xx = float((x * x).sum())

    denom = n * sum_xx - sum_x * sum_x
    slope = (n * sum_xy - sum_x * sum_y) / denom if denom != 0 else 0.0
    if not math.isfinite(slope):
        slope = 0.0
    intercept = (sum_y - slope * sum_x) / n
    return slope, intercept
