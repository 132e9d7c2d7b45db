"""Transforms of real-valued candidate solutions."""

from __future__ import annotations

from math import ceil
from typing import TYPE_CHECKING

import numpy as np

from landbench.config.utils import is_permutation

from .base import VariableTransform

if TYPE_CHECKING:
    from collections.abc import Sequence

    from numpy.typing import ArrayLike, NDArray

    from landbench.config import InstanceParameters


def shift_scale_rotate(
    values: NDArray[np.float64],
    params: InstanceParameters,
    shrink_rate: float = 1.0,
) -> NDArray[np.float64]:
    """Shift, scale and rotate a vector.

    The shift is subtracted if `params.shift_enabled` is set, the result is
    multiplied by `shrink_rate`, and finally multiplied by the rotation matrix
    if `params.rotate_enabled` is set. If rotation is disabled, no matrix
    product is computed.

    Args:
        values:      The vector to transform.
        params:      The instance parameters.
        shrink_rate: The scaling factor.

    Returns:
        The transformed vector.
    """
    result = np.asarray(values, dtype=np.float64)
    if params.shift_enabled:
        result = result - params.shift
    result = shrink_rate * result
    if params.rotate_enabled:
        assert params.rotation is not None
        result = params.rotation @ result
    return result


def permute(
    values: NDArray[np.float64], permutation: ArrayLike
) -> NDArray[np.float64]:
    """Reorder a vector.

    Element `i` of the result is element `permutation[i]` of `values`.

    Args:
        values:      The vector to reorder.
        permutation: The permutation.

    Returns:
        The reordered vector.
    """
    return np.asarray(values)[np.asarray(permutation, dtype=np.intp)]


def split_by_proportions(size: int, proportions: Sequence[float]) -> list[int]:
    """Split a number of variables into parts of given proportions.

    All parts but the last receive `ceil(proportion * size)` variables, the
    last part receives the remainder. Parts may be empty for small sizes.

    Args:
        size:        The number of variables.
        proportions: The proportions of the parts, summing to one.

    Returns:
        The sizes of the parts.
    """
    sizes: list[int] = []
    remaining = size
    for proportion in proportions[:-1]:
        part = min(ceil(proportion * size), remaining)
        sizes.append(part)
        remaining -= part
    sizes.append(remaining)
    return sizes


def composition_weights(
    values: NDArray[np.float64],
    shifts: NDArray[np.float64],
    sigmas: ArrayLike,
) -> NDArray[np.float64]:
    r"""Compute the weights of the components of a composition function.

    The weight of component $i$ is given by:

    $$
    w_i = \frac{1}{\sqrt{d_i}} \exp\left(-\frac{d_i}{2 N \sigma_i^2}\right),
    \quad d_i = \lVert x - o_i \rVert^2
    $$

    where $o_i$ is the shift of the component. If any $d_i$ is zero, only
    the components at zero distance receive a (unit) weight. If all weights
    vanish numerically, all components receive the same weight.

    Args:
        values: The candidate solution $x$.
        shifts: The shifts of the components, one per row.
        sigmas: The bias ranges $\sigma_i$ of the components.

    Returns:
        The un-normalized weights.
    """
    distances = np.sum((values[np.newaxis, :] - shifts) ** 2, axis=-1)
    zero = distances == 0.0
    if np.any(zero):
        return zero.astype(np.float64)
    sigmas = np.asarray(sigmas, dtype=np.float64)
    weights = np.exp(-distances / (2.0 * values.size * sigmas**2)) / np.sqrt(
        distances
    )
    if not np.any(weights > 0.0):
        return np.ones_like(weights)
    return weights


def compose(
    values: ArrayLike,
    weights: ArrayLike,
    lambdas: ArrayLike,
    biases: ArrayLike,
) -> float:
    r"""Combine the values of the components of a composition function.

    Computes $\sum_i \frac{w_i}{\sum_j w_j} (\lambda_i g_i + b_i)$.

    Args:
        values:  The component values $g_i$.
        weights: The weights $w_i$.
        lambdas: The scaling factors $\lambda_i$.
        biases:  The component biases $b_i$.

    Returns:
        The composed value.
    """
    weights = np.asarray(weights, dtype=np.float64)
    scaled = np.asarray(lambdas) * np.asarray(values) + np.asarray(biases)
    return float(np.sum(weights * scaled) / np.sum(weights))


class ShiftScaleRotate(VariableTransform):
    """The shift, scale and rotation transform of continuous problems.

    See [`shift_scale_rotate`][landbench.transforms.shift_scale_rotate].
    """

    def __init__(self, params: InstanceParameters, shrink_rate: float = 1.0) -> None:
        """Initialize the transform.

        Args:
            params:      The instance parameters.
            shrink_rate: The scaling factor.

        Raises:
            ValueError: If the shrink rate is zero.
        """
        if shrink_rate == 0.0:
            msg = "The shrink rate must not be zero."
            raise ValueError(msg)
        self._params = params
        self._shrink_rate = shrink_rate

    @property
    def params(self) -> InstanceParameters:
        """The instance parameters of the transform."""
        return self._params

    @property
    def shrink_rate(self) -> float:
        """The scaling factor of the transform."""
        return self._shrink_rate

    def forward(self, values: NDArray[np.float64]) -> NDArray[np.float64]:
        """Shift, scale and rotate a candidate solution.

        Args:
            values: The candidate solution.

        Returns:
            The transformed vector.
        """
        return shift_scale_rotate(values, self._params, self._shrink_rate)

    def inverse(self, values: NDArray[np.float64]) -> NDArray[np.float64]:
        """Undo the rotation, the scaling and the shift.

        Args:
            values: A vector in the landscape domain.

        Returns:
            The corresponding candidate solution.
        """
        result = np.asarray(values, dtype=np.float64)
        if self._params.rotate_enabled:
            assert self._params.rotation is not None
            result = self._params.rotation.T @ result
        result = result / self._shrink_rate
        if self._params.shift_enabled:
            result = result + self._params.shift
        return result


class PermuteVariables(VariableTransform):
    """Reorder the variables with a fixed permutation.

    Used to shuffle the variables of hybrid functions, and to permute the bits
    of pseudo-Boolean problem instances.
    """

    def __init__(self, permutation: ArrayLike) -> None:
        """Initialize the transform.

        Args:
            permutation: The permutation.

        Raises:
            ValueError: If the permutation is not a bijection.
        """
        permutation = np.asarray(permutation, dtype=np.intp)
        if not is_permutation(permutation, permutation.size):
            msg = "Invalid permutation."
            raise ValueError(msg)
        self._permutation = permutation

    def forward(self, values: NDArray[np.float64]) -> NDArray[np.float64]:
        """Apply the permutation."""
        return permute(values, self._permutation)

    def inverse(self, values: NDArray[np.float64]) -> NDArray[np.float64]:
        """Apply the inverse permutation."""
        values = np.asarray(values)
        result = np.empty_like(values)
        result[self._permutation] = values
        return result
