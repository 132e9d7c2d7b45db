"""Base functions of the continuous problems.

All functions take the shifted, scaled and rotated vector `z`, and have their
global minimum at `z = 0`.
"""

from __future__ import annotations

from math import sqrt
from typing import TYPE_CHECKING, Final

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import NDArray

_SCHWEFEL_OFFSET: Final = 420.9687462275036
_SCHWEFEL_CONSTANT: Final = 418.9828872724338


def bent_cigar(z: NDArray[np.float64]) -> float:
    return float(z[0] ** 2 + 1e6 * np.sum(z[1:] ** 2))


def ellipsoid(z: NDArray[np.float64]) -> float:
    if z.size == 1:
        return float(z[0] ** 2)
    exponents = 6.0 * np.arange(z.size) / (z.size - 1)
    return float(np.sum(10.0**exponents * z**2))


def rastrigin(z: NDArray[np.float64]) -> float:
    return float(np.sum(z**2 - 10.0 * np.cos(2.0 * np.pi * z) + 10.0))


def rosenbrock(z: NDArray[np.float64]) -> float:
    y = z + 1.0
    return float(
        np.sum(100.0 * (y[:-1] ** 2 - y[1:]) ** 2 + (y[:-1] - 1.0) ** 2)
    )


def griewank(z: NDArray[np.float64]) -> float:
    divisors = np.sqrt(np.arange(1, z.size + 1))
    return float(np.sum(z**2) / 4000.0 - np.prod(np.cos(z / divisors)) + 1.0)


def ackley(z: NDArray[np.float64]) -> float:
    mean_square = np.mean(z**2)
    mean_cos = np.mean(np.cos(2.0 * np.pi * z))
    return float(
        -20.0 * np.exp(-0.2 * np.sqrt(mean_square)) - np.exp(mean_cos) + 20.0 + np.e
    )


def hgbat(z: NDArray[np.float64]) -> float:
    w = z - 1.0
    sum_squares = np.sum(w**2)
    total = np.sum(w)
    return float(
        np.sqrt(np.abs(sum_squares**2 - total**2))
        + (0.5 * sum_squares + total) / z.size
        + 0.5
    )


def schwefel(z: NDArray[np.float64]) -> float:
    """Evaluate the modified Schwefel function.

    The argument is offset such that the optimum lies at `z = 0`. Outside of
    `[-500, 500]` the function is folded back into the range, and a quadratic
    penalty is added.
    """
    y = z + _SCHWEFEL_OFFSET
    result = _SCHWEFEL_CONSTANT * y.size
    for value in y:
        if abs(value) <= 500.0:  # noqa: PLR2004
            result -= value * np.sin(np.sqrt(abs(value)))
        elif value > 500.0:  # noqa: PLR2004
            folded = 500.0 - np.fmod(value, 500.0)
            result -= folded * np.sin(np.sqrt(folded))
            result += (value - 500.0) ** 2 / (10000.0 * y.size)
        else:
            folded = np.fmod(abs(value), 500.0) - 500.0
            result -= folded * np.sin(np.sqrt(abs(folded)))
            result += (value + 500.0) ** 2 / (10000.0 * y.size)
    return float(result)


def lunacek_bi_rastrigin(z: NDArray[np.float64]) -> float:
    """Evaluate the Lunacek bi-Rastrigin function.

    The function combines two spheres, centered at `mu0` and `mu1`, with a
    Rastrigin term. The argument is offset such that the optimum lies at
    `z = 0`.
    """
    size = z.size
    mu0 = 2.5
    d = 1.0
    s = 1.0 - 1.0 / (2.0 * sqrt(size + 20.0) - 8.2)
    mu1 = -sqrt((mu0**2 - d) / s)
    y = z + mu0
    first = np.sum((y - mu0) ** 2)
    second = d * size + s * np.sum((y - mu1) ** 2)
    return float(min(first, second) + 10.0 * np.sum(1.0 - np.cos(2.0 * np.pi * z)))


def expanded_griewank_rosenbrock(z: NDArray[np.float64]) -> float:
    """Evaluate the expanded Griewank plus Rosenbrock function.

    The two-dimensional Rosenbrock function is evaluated on all pairs of
    consecutive variables, wrapping around at the end, and fed into the
    one-dimensional Griewank function.
    """
    y = z + 1.0
    following = np.roll(y, -1)
    rosen = 100.0 * (y**2 - following) ** 2 + (y - 1.0) ** 2
    return float(np.sum(rosen**2 / 4000.0 - np.cos(rosen) + 1.0))
