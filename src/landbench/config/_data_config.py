"""Configuration class for static parameter tables."""

from __future__ import annotations

from pathlib import Path  # noqa: TC003
from typing import Literal

from pydantic import BaseModel, ConfigDict


class StaticDataConfig(BaseModel):
    """Configuration class for loading static transformation parameters.

    Some suites define their instances by fixed tables of shift vectors,
    rotation matrices and shuffle permutations, rather than by generating them.
    These tables are stored as whitespace-separated text files below
    `data_root/suite_version`, following this naming convention:

    - `M_<fn>_D<dim>.txt`: rotation matrices, row-major.
    - `shift_data_<fn>.txt`: shift vectors, one per line.
    - `shuffle_data_<fn>_D<dim>.txt`: one-based shuffle permutations.

    The `on_truncated` field determines what happens if a file holds fewer
    values than required: `"raise"` raises a
    [`TruncatedData`][landbench.exceptions.TruncatedData] error, `"warn"` logs
    a warning and pads the table with zeros.

    Attributes:
        data_root:     The root directory of the static data.
        suite_version: The name of the sub-directory of the suite version.
        on_truncated:  How to handle truncated files.
    """

    data_root: Path
    suite_version: str = "cec2021"
    on_truncated: Literal["raise", "warn"] = "raise"

    model_config = ConfigDict(
        extra="forbid",
        str_min_length=1,
        str_strip_whitespace=True,
        frozen=True,
    )

    @property
    def directory(self) -> Path:
        """The directory holding the tables of the suite version."""
        return self.data_root / self.suite_version
