"""Deterministic generation of instance parameters."""

from __future__ import annotations

from math import floor

import numpy as np
from numpy.typing import NDArray

from landbench.config import InstanceParameters

_ROTATION_SEED_OFFSET = 1_000_000
_SHUFFLE_SEED_OFFSET = 2_000_000
_COMPONENT_SEED_OFFSET = 3_000_000
_LAST_FLIP_INSTANCE = 50
_LAST_PERMUTATION_INSTANCE = 100


def seed_of(function_id: int, instance: int) -> int:
    """Return the random seed of a problem instance.

    Args:
        function_id: The function identifier.
        instance:    The instance number.

    Returns:
        The seed used to derive the instance parameters.
    """
    return function_id + 10_000 * instance


def uniform(n: int, seed: float) -> NDArray[np.float64]:
    """Generate `n` uniform numbers in (0, 1] from a seed.

    This is the lagged Park-Miller generator of the BBOB-2009 testbed. It does
    not depend on the numpy random state, hence the same seed produces the same
    numbers on every platform.

    Args:
        n:    The number of values.
        seed: The seed, values smaller than one are replaced by one.

    Returns:
        An array of `n` values.
    """
    seed = max(abs(seed), 1.0)

    table = 32 * [0.0]
    current = seed
    for i in range(39, -1, -1):
        tmp = floor(current / 127773.0)
        current = 16807.0 * (current - tmp * 127773.0) - 2836.0 * tmp
        if current < 0:
            current += 2147483647.0
        if i < 32:
            table[i] = current
    value = table[0]

    result = np.zeros(n, dtype=np.float64)
    for i in range(n):
        tmp = floor(current / 127773.0)
        current = 16807.0 * (current - tmp * 127773.0) - 2836.0 * tmp
        if current < 0:
            current += 2147483647.0
        idx = int(floor(value / 67108865.0))
        value = table[idx]
        table[idx] = current
        result[i] = value / 2.147483647e9
    result[result == 0.0] = 1e-99
    return result


def gaussian(n: int, seed: float) -> NDArray[np.float64]:
    """Generate `n` standard normal numbers from a seed.

    Uses the Box-Muller transform on `2 * n` values from
    [`uniform`][landbench.instances.uniform].

    Args:
        n:    The number of values.
        seed: The seed.

    Returns:
        An array of `n` values.
    """
    values = uniform(2 * n, seed)
    result = np.sqrt(-2.0 * np.log(values[:n])) * np.cos(2.0 * np.pi * values[n:])
    result[result == 0.0] = 1e-99
    return result


def random_shift(seed: float, dimension: int, bound: float) -> NDArray[np.float64]:
    """Generate a shift vector in `[-bound, bound)`.

    The entries are rounded to four digits, but never to zero.

    Args:
        seed:      The seed.
        dimension: The length of the vector.
        bound:     The bound on the absolute values.

    Returns:
        The shift vector.
    """
    shift = 2.0 * bound * np.floor(1e4 * uniform(dimension, seed)) / 1e4 - bound
    shift[shift == 0.0] = -1e-5
    return shift


def random_rotation(seed: float, dimension: int) -> NDArray[np.float64]:
    """Generate an orthogonal matrix.

    The rows of a matrix of standard normal values are orthonormalized with the
    Gram-Schmidt procedure.

    Args:
        seed:      The seed.
        dimension: The number of rows and columns.

    Returns:
        The orthogonal matrix.
    """
    basis = np.reshape(gaussian(dimension * dimension, seed), (dimension, dimension))
    for i in range(dimension):
        for j in range(i):
            basis[i] = basis[i] - np.dot(basis[i], basis[j]) * basis[j]
        basis[i] = basis[i] / np.sqrt(np.sum(basis[i] ** 2))
    return basis


def random_permutation(seed: float, dimension: int) -> NDArray[np.intc]:
    """Generate a permutation of `range(dimension)`.

    Args:
        seed:      The seed.
        dimension: The number of elements.

    Returns:
        The permutation.
    """
    return np.argsort(uniform(dimension, seed), kind="stable").astype(np.intc)


def generate_parameters(  # noqa: PLR0913
    function_id: int,
    instance: int,
    dimension: int,
    *,
    shift_bound: float = 80.0,
    shift_enabled: bool = True,
    rotate_enabled: bool = True,
    shuffle: bool = False,
    bias: float = 0.0,
    component: int = 0,
) -> InstanceParameters:
    """Generate the parameters of a continuous problem instance.

    The shift, rotation and shuffle are derived from the seed returned by
    [`seed_of`][landbench.instances.seed_of]. Different `component` numbers
    produce independent parameter sets for the same instance, which are used
    by composition functions.

    Args:
        function_id:    The function identifier.
        instance:       The instance number.
        dimension:      The dimension.
        shift_bound:    The bound on the shift values.
        shift_enabled:  Whether the shift is applied.
        rotate_enabled: Whether the rotation is applied.
        shuffle:        Whether to generate a shuffle permutation.
        bias:           The objective bias.
        component:      The component number.

    Returns:
        The instance parameters.
    """
    seed = seed_of(function_id, instance) + _COMPONENT_SEED_OFFSET * component
    return InstanceParameters(
        shift=random_shift(seed, dimension, shift_bound),
        rotation=(
            random_rotation(seed + _ROTATION_SEED_OFFSET, dimension)
            if rotate_enabled
            else None
        ),
        permutation=(
            random_permutation(seed + _SHUFFLE_SEED_OFFSET, dimension)
            if shuffle
            else None
        ),
        bias=bias,
        shift_enabled=shift_enabled,
        rotate_enabled=rotate_enabled,
    )


def random_bits(seed: float, size: int) -> NDArray[np.bool_]:
    """Generate a pseudo-random bit mask.

    Args:
        seed: The seed.
        size: The number of bits.

    Returns:
        A boolean array, where each entry is set with probability one half.
    """
    return np.floor(2.0 * uniform(size, seed)) >= 1.0


def generate_bit_parameters(instance: int, dimension: int) -> InstanceParameters:
    """Generate the parameters of a pseudo-Boolean problem instance.

    Instance 1 is the untransformed base problem. Instances 2 to 50 invert a
    pseudo-random subset of the bits, and instances 51 to 100 permute the bits.
    Higher instances leave the bits unchanged. All instances above 1 transform
    the objective as `scale * y + bias`, with `scale` in `[0.2, 5)` and `bias`
    in `[-1000, 1000)`. The instance number is used as the seed, hence all
    functions share the same transformation for a given instance.

    Shift and rotation do not apply to bit strings, and are disabled.

    Args:
        instance:  The instance number.
        dimension: The number of bits.

    Returns:
        The instance parameters.
    """
    flip_mask = None
    permutation = None
    objective_scale = 1.0
    bias = 0.0
    if instance > 1:
        if instance <= _LAST_FLIP_INSTANCE:
            flip_mask = random_bits(instance, dimension)
        elif instance <= _LAST_PERMUTATION_INSTANCE:
            permutation = random_permutation(instance, dimension)
        values = uniform(2, instance)
        objective_scale = float(4.8 * values[0] + 0.2)
        bias = float(2000.0 * values[1] - 1000.0)
    return InstanceParameters(
        shift=np.zeros(dimension, dtype=np.float64),
        permutation=permutation,
        flip_mask=flip_mask,
        bias=bias,
        objective_scale=objective_scale,
        shift_enabled=False,
        rotate_enabled=False,
    )
