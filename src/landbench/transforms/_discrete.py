"""Transforms of bit strings and of their objective values.

The transforms in this module implement the building blocks of the
pseudo-Boolean problems: dummy variables, neutrality, epistasis and
ruggedness, together with the instance transforms that flip or permute bits.
"""

from __future__ import annotations

from math import ceil, floor
from typing import TYPE_CHECKING, Final, Literal

import numpy as np

from landbench.instances import random_bits, random_permutation, uniform

from .base import ObjectiveTransform, VariableTransform

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray

DUMMY_SEED: Final = 10000


def dummy_positions(
    size: int, select_rate: float, seed: int = DUMMY_SEED
) -> NDArray[np.intp]:
    """Select a pseudo-random subset of variable positions.

    `floor(size * select_rate)` positions are selected by a partial random
    shuffle, and returned in ascending order. The remaining positions are
    dummy variables that do not influence the objective.

    Args:
        size:        The number of variables.
        select_rate: The fraction of variables to select.
        seed:        The random seed.

    Returns:
        The sorted selected positions.
    """
    count = floor(size * select_rate)
    positions = np.arange(size, dtype=np.intp)
    for idx, value in enumerate(uniform(count, seed)):
        other = int(floor(value * size))
        positions[idx], positions[other] = positions[other], positions[idx]
    return np.sort(positions[:count])


def epistasis(values: NDArray[np.intc], block_size: int) -> NDArray[np.intc]:
    """Remap blocks of adjacent bits.

    The bits are divided into consecutive blocks of `block_size` bits, where
    the remaining bits form a final shorter block. Within a block, output bit
    `i` is the exclusive or of the input bits `0..i` of the block. Each block
    is thereby mapped through a fixed bijection, and changing a single input
    bit flips all following output bits of its block.

    Args:
        values:     The bit string.
        block_size: The number of bits per block.

    Returns:
        The remapped bit string.
    """
    values = np.asarray(values)
    result = np.empty_like(values)
    for start in range(0, values.size, block_size):
        block = values[start : start + block_size]
        result[start : start + block.size] = np.bitwise_xor.accumulate(block)
    return result


def _inverse_epistasis(values: NDArray[np.intc], block_size: int) -> NDArray[np.intc]:
    values = np.asarray(values)
    result = values.copy()
    for start in range(0, values.size, block_size):
        block = values[start : start + block_size]
        result[start + 1 : start + block.size] = block[1:] ^ block[:-1]
    return result


def neutrality(values: NDArray[np.intc], mu: int) -> NDArray[np.intc]:
    """Collapse groups of bits into single bits.

    Each group of `mu` consecutive bits is replaced by the majority value of
    the group. Trailing bits that do not form a complete group are dropped.

    Args:
        values: The bit string.
        mu:     The number of bits per group.

    Returns:
        A bit string of `len(values) // mu` bits.
    """
    values = np.asarray(values)
    count = values.size // mu
    groups = values[: count * mu].reshape(count, mu)
    return (2 * groups.sum(axis=-1) > mu).astype(values.dtype)


def ruggedness1(value: float, size: int) -> float:
    """Apply the first ruggedness mapping to an objective value.

    Pairs of adjacent objective values are merged, which introduces small
    plateaus in the landscape.

    Args:
        value: The objective value, an integer in `[0, size]`.
        size:  The maximum objective value.

    Returns:
        The mapped value.
    """
    if value == size:
        return ceil(value / 2) + 1
    if size % 2 == 0:
        return floor(value / 2) + 1
    return ceil(value / 2) + 1


def ruggedness2(value: float, size: int) -> float:
    """Apply the second ruggedness mapping to an objective value.

    Below the maximum, values with the same parity as `size` are increased by
    one, and the other values are decreased by one. This swaps adjacent
    objective values and creates local optima, while `size - 1` never reaches
    the maximum.

    Args:
        value: The objective value, an integer in `[0, size]`.
        size:  The maximum objective value.

    Returns:
        The mapped value.
    """
    if value == size:
        return value
    if (int(value) - size) % 2 == 0:
        return value + 1
    return max(value - 1, 0)


def ruggedness3_table(size: int) -> NDArray[np.float64]:
    """Compute the table of the third ruggedness mapping.

    Below the maximum, the objective values are divided into blocks of five
    consecutive values, counted down from the maximum, and the order within
    each block is reversed. The values below the last complete block are
    reversed as well. The maximum is mapped to itself.

    Args:
        size: The maximum objective value.

    Returns:
        An array of `size + 1` entries, where entry `y` holds the mapped value.
    """
    table = np.zeros(size + 1, dtype=np.float64)
    blocks = size // 5
    for block in range(1, blocks + 1):
        start = size - 5 * block
        table[start : start + 5] = np.arange(start + 4, start - 1, -1)
    remainder = size - 5 * blocks
    table[:remainder] = np.arange(remainder - 1, -1, -1)
    table[size] = size
    return table


def xor_bits(values: NDArray[np.intc], seed: int) -> NDArray[np.intc]:
    """Flip a pseudo-random subset of bits.

    Args:
        values: The bit string.
        seed:   The random seed.

    Returns:
        The bit string with the bits marked by
        [`random_bits`][landbench.instances.random_bits] inverted.
    """
    values = np.asarray(values)
    return values ^ random_bits(seed, values.size).astype(values.dtype)


def permute_bits(values: NDArray[np.intc], seed: int) -> NDArray[np.intc]:
    """Permute bits in a pseudo-random order.

    Args:
        values: The bit string.
        seed:   The random seed.

    Returns:
        The permuted bit string.
    """
    values = np.asarray(values)
    return values[random_permutation(seed, values.size)]


class FlipBits(VariableTransform):
    """Invert the bits marked by a mask."""

    def __init__(self, mask: ArrayLike) -> None:
        """Initialize the transform.

        Args:
            mask: A boolean mask of the bits to invert.
        """
        self._mask = np.asarray(mask, dtype=np.bool_)

    def forward(self, values: NDArray[np.float64]) -> NDArray[np.float64]:
        """Invert the masked bits."""
        values = np.asarray(values)
        return values ^ self._mask.astype(values.dtype)

    def inverse(self, values: NDArray[np.float64]) -> NDArray[np.float64]:
        """Invert the masked bits, which undoes the forward transform."""
        return self.forward(values)


class SelectPositions(VariableTransform):
    """Keep only the variables at the given positions.

    The other variables are dummy variables. The inverse transform sets them
    to `fill`.
    """

    def __init__(self, positions: ArrayLike, size: int, fill: int = 1) -> None:
        """Initialize the transform.

        Args:
            positions: The positions of the variables to keep.
            size:      The number of input variables.
            fill:      The value of the dummy variables in the inverse.
        """
        self._positions = np.asarray(positions, dtype=np.intp)
        self._size = size
        self._fill = fill

    @property
    def positions(self) -> NDArray[np.intp]:
        """The positions of the selected variables."""
        return self._positions

    def forward(self, values: NDArray[np.float64]) -> NDArray[np.float64]:
        """Select the variables."""
        return np.asarray(values)[self._positions]

    def inverse(self, values: NDArray[np.float64]) -> NDArray[np.float64]:
        """Place the variables at their positions, and fill the others."""
        values = np.asarray(values)
        result = np.full(self._size, self._fill, dtype=values.dtype)
        result[self._positions] = values
        return result

    def output_size(self, size: int) -> int:  # noqa: ARG002
        """Return the number of selected positions."""
        return int(self._positions.size)


class Neutrality(VariableTransform):
    """Collapse groups of bits by majority vote.

    See [`neutrality`][landbench.transforms.neutrality].
    """

    def __init__(self, mu: int, size: int, fill: int = 1) -> None:
        """Initialize the transform.

        Args:
            mu:   The number of bits per group.
            size: The number of input bits.
            fill: The value of the dropped trailing bits in the inverse.

        Raises:
            ValueError: If `size` is smaller than `mu`.
        """
        if size < mu:
            msg = f"Neutrality with groups of {mu} bits requires at least {mu} bits."
            raise ValueError(msg)
        self._mu = mu
        self._size = size
        self._fill = fill

    def forward(self, values: NDArray[np.float64]) -> NDArray[np.float64]:
        """Collapse the groups of bits."""
        return neutrality(values, self._mu)

    def inverse(self, values: NDArray[np.float64]) -> NDArray[np.float64]:
        """Repeat each bit over its group, and fill the trailing bits."""
        values = np.asarray(values)
        result = np.full(self._size, self._fill, dtype=values.dtype)
        result[: values.size * self._mu] = np.repeat(values, self._mu)
        return result

    def output_size(self, size: int) -> int:
        """Return the number of complete groups."""
        return size // self._mu


class Epistasis(VariableTransform):
    """Remap blocks of adjacent bits.

    See [`epistasis`][landbench.transforms.epistasis].
    """

    def __init__(self, block_size: int) -> None:
        """Initialize the transform.

        Args:
            block_size: The number of bits per block.
        """
        self._block_size = block_size

    def forward(self, values: NDArray[np.float64]) -> NDArray[np.float64]:
        """Remap the blocks."""
        return epistasis(values, self._block_size)

    def inverse(self, values: NDArray[np.float64]) -> NDArray[np.float64]:
        """Apply the inverse remapping of the blocks."""
        return _inverse_epistasis(values, self._block_size)


class Ruggedness(ObjectiveTransform):
    """Reorder objective values with one of three ruggedness mappings.

    The objective values of the base landscape must be integers in
    `[0, size]`. Under all mappings, `size` keeps the unique best value.
    """

    def __init__(self, kind: Literal[1, 2, 3], size: int) -> None:
        """Initialize the transform.

        Args:
            kind: The mapping to apply.
            size: The maximum objective value.
        """
        self._kind = kind
        self._size = size
        self._table = ruggedness3_table(size) if kind == 3 else None  # noqa: PLR2004

    def forward(self, value: float) -> float:
        """Map an objective value.

        Args:
            value: The objective value.

        Returns:
            The mapped value.
        """
        if self._table is not None:
            return float(self._table[int(value)])
        if self._kind == 1:
            return float(ruggedness1(value, self._size))
        return float(ruggedness2(value, self._size))
