"""Loading of instance parameters from static tables."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from landbench.config import InstanceParameters
from landbench.exceptions import DataFileUnavailable, TruncatedData

if TYPE_CHECKING:
    from pathlib import Path

    from landbench.config import StaticDataConfig

_logger = logging.getLogger(__name__)


class StaticDataLoader:
    """Load transformation parameters from static tables.

    The loader reads the tables described by a
    [`StaticDataConfig`][landbench.config.StaticDataConfig] object. Each file
    is read until the expected number of values is found, or until the end of
    the file. Values beyond the expected count are ignored.

    Missing or unreadable files raise a
    [`DataFileUnavailable`][landbench.exceptions.DataFileUnavailable] error.
    Files holding too few values raise a
    [`TruncatedData`][landbench.exceptions.TruncatedData] error, unless the
    configuration allows proceeding, in which case a warning is logged and the
    table is padded with zeros.

    Loading happens once, when a problem is constructed, never during
    evaluation.
    """

    def __init__(self, config: StaticDataConfig) -> None:
        """Initialize the loader.

        Args:
            config: The static data configuration.
        """
        self._config = config

    @property
    def config(self) -> StaticDataConfig:
        """The configuration of the loader."""
        return self._config

    def matrix_path(self, function_id: int, dimension: int) -> Path:
        """Return the path of the rotation matrix file."""
        return self._config.directory / f"M_{function_id}_D{dimension}.txt"

    def shift_path(self, function_id: int) -> Path:
        """Return the path of the shift vector file."""
        return self._config.directory / f"shift_data_{function_id}.txt"

    def shuffle_path(self, function_id: int, dimension: int) -> Path:
        """Return the path of the shuffle permutation file."""
        return self._config.directory / f"shuffle_data_{function_id}_D{dimension}.txt"

    def load_matrix(
        self, function_id: int, dimension: int, components: int = 1
    ) -> tuple[NDArray[np.float64], bool]:
        """Load rotation matrices.

        The file holds `components` consecutive matrices in row-major order.

        Args:
            function_id: The function identifier.
            dimension:   The dimension.
            components:  The number of matrices.

        Returns:
            An array of shape `(components, dimension, dimension)`, and a flag
            that is `False` if the file was truncated.
        """
        path = self.matrix_path(function_id, dimension)
        expected = components * dimension * dimension
        values = _parse(path, _read_text(path).split()[:expected])
        values, complete = self._check_count(path, values, expected)
        return values.reshape(components, dimension, dimension), complete

    def load_shift(
        self, function_id: int, dimension: int, components: int = 1
    ) -> tuple[NDArray[np.float64], bool]:
        """Load shift vectors.

        A single shift vector is read from the start of the file, regardless of
        line breaks. Multiple vectors are read from the first `dimension`
        values of consecutive lines, since the tables store one vector of the
        maximum supported dimension per line.

        Args:
            function_id: The function identifier.
            dimension:   The dimension.
            components:  The number of vectors.

        Returns:
            An array of shape `(components, dimension)`, and a flag that is
            `False` if the file was truncated.
        """
        path = self.shift_path(function_id)
        text = _read_text(path)
        expected = components * dimension
        if components == 1:
            values = _parse(path, text.split()[:dimension])
            values, complete = self._check_count(path, values, expected)
            return values.reshape(1, dimension), complete

        lines = [line.split() for line in text.splitlines() if line.strip()]
        rows = [_parse(path, line[:dimension]) for line in lines[:components]]
        found = np.concatenate(rows) if rows else np.zeros(0, dtype=np.float64)
        if found.size < expected:
            self._handle_truncated(path, found, expected)
        shifts = np.zeros((components, dimension), dtype=np.float64)
        for idx, row in enumerate(rows):
            shifts[idx, : row.size] = row
        return shifts, found.size == expected

    def load_shuffle(
        self, function_id: int, dimension: int
    ) -> tuple[NDArray[np.intc], bool]:
        """Load a shuffle permutation.

        The file stores one-based indices, which are converted to zero-based
        indices. A truncated permutation is completed by appending the missing
        indices in ascending order.

        Args:
            function_id: The function identifier.
            dimension:   The dimension.

        Returns:
            The permutation, and a flag that is `False` if the file was
            truncated.
        """
        path = self.shuffle_path(function_id, dimension)
        values = _parse(path, _read_text(path).split()[:dimension])
        permutation = values.astype(np.intc) - 1
        if permutation.size < dimension:
            self._handle_truncated(path, values, dimension)
            missing = np.setdiff1d(np.arange(dimension), permutation)
            permutation = np.concatenate([permutation, missing]).astype(np.intc)
            return permutation, False
        return permutation, True

    def load_parameters(  # noqa: PLR0913
        self,
        function_id: int,
        dimension: int,
        *,
        components: int = 1,
        shuffle: bool = False,
        shift_enabled: bool = True,
        rotate_enabled: bool = True,
        bias: float = 0.0,
    ) -> list[InstanceParameters]:
        """Load the instance parameters of a function.

        Args:
            function_id:    The function identifier.
            dimension:      The dimension.
            components:     The number of parameter sets to load.
            shuffle:        Whether to load a shuffle permutation.
            shift_enabled:  Whether the shift is applied.
            rotate_enabled: Whether the rotation is applied.
            bias:           The objective bias.

        Returns:
            A list of `components` parameter sets.
        """
        shifts, complete = self.load_shift(function_id, dimension, components)
        matrices: NDArray[np.float64] | None = None
        if rotate_enabled:
            matrices, matrices_complete = self.load_matrix(
                function_id, dimension, components
            )
            complete = complete and matrices_complete
        permutation: NDArray[np.intc] | None = None
        if shuffle:
            permutation, shuffle_complete = self.load_shuffle(function_id, dimension)
            complete = complete and shuffle_complete

        return [
            InstanceParameters.model_validate(
                {
                    "shift": shifts[idx],
                    "rotation": None if matrices is None else matrices[idx],
                    "permutation": permutation,
                    "bias": bias,
                    "shift_enabled": shift_enabled,
                    "rotate_enabled": rotate_enabled,
                },
                context={"check_orthogonal": complete},
            )
            for idx in range(components)
        ]

    def _check_count(
        self, path: Path, values: NDArray[np.float64], expected: int
    ) -> tuple[NDArray[np.float64], bool]:
        if values.size == expected:
            return values, True
        self._handle_truncated(path, values, expected)
        return np.pad(values, (0, expected - values.size)), False

    def _handle_truncated(
        self, path: Path, values: NDArray[np.float64], expected: int
    ) -> None:
        if self._config.on_truncated == "raise":
            raise TruncatedData(path, expected, values)
        _logger.warning(
            "Truncated data in %s: expected %d values, found %d, padding",
            path,
            expected,
            values.size,
        )


def _read_text(path: Path) -> str:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as err:
        msg = f"Cannot read static data file: {path}"
        raise DataFileUnavailable(msg) from err
    _logger.debug("Read static data from %s", path)
    return text


def _parse(path: Path, tokens: list[str]) -> NDArray[np.float64]:
    try:
        return np.array(tokens, dtype=np.float64)
    except ValueError as err:
        msg = f"Invalid numerical data in static data file: {path}"
        raise DataFileUnavailable(msg) from err
