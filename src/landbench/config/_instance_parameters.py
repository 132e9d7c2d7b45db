"""Configuration class for instance parameters."""

from __future__ import annotations

from typing import Self

import numpy as np
from pydantic import ConfigDict, ValidationInfo, model_validator

from landbench.config.utils import ImmutableBaseModel, immutable_array, is_permutation
from landbench.config.validated_types import (  # noqa: TC001
    Array1D,
    Array1DBool,
    Array1DInt,
    Array2D,
)

_ORTHOGONALITY_TOLERANCE = 1e-8


class InstanceParameters(ImmutableBaseModel):
    r"""Parameters of the transformations of one problem instance.

    An `InstanceParameters` object holds everything that turns a canonical base
    landscape into a specific instance of a problem. It is derived
    deterministically from the function identifier, the instance number and the
    dimension, either by the generators in
    [`landbench.instances`][landbench.instances] or by loading static tables.

    The dimension $N$ is given by the length of the `shift` vector. The
    `rotation` field holds an $N \times N$ matrix, which may also be given as
    a flattened row-major sequence of $N^2$ values. It is required when
    `rotate_enabled` is set, and must then be orthogonal. This check can be
    disabled by passing `{"check_orthogonal": False}` as the validation
    context, which is used for matrices read from truncated static tables.

    The optional `permutation` must be a bijection on $[0, N)$. The optional
    `flip_mask` marks bits that are inverted by instances of pseudo-Boolean
    problems.

    Objective values are transformed as $y' = \textrm{objective\_scale} \times
    y + \textrm{bias}$.

    Attributes:
        shift:           The shift vector.
        rotation:        The rotation matrix.
        permutation:     An optional permutation of the variables.
        flip_mask:       An optional mask of bits to invert.
        bias:            The additive objective bias.
        objective_scale: The multiplicative objective factor.
        shift_enabled:   Whether the shift is applied.
        rotate_enabled:  Whether the rotation is applied.
    """

    shift: Array1D
    rotation: Array2D | None = None
    permutation: Array1DInt | None = None
    flip_mask: Array1DBool | None = None
    bias: float = 0.0
    objective_scale: float = 1.0
    shift_enabled: bool = True
    rotate_enabled: bool = True

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        extra="forbid",
        validate_default=True,
    )

    @model_validator(mode="after")
    def _check_shapes(self, info: ValidationInfo) -> Self:
        self._mutable()

        size = self.shift.size
        if size == 0:
            msg = "The shift vector must not be empty."
            raise ValueError(msg)

        if self.rotation is not None:
            if self.rotation.size != size * size:
                msg = f"The rotation matrix must have {size * size} entries."
                raise ValueError(msg)
            if self.rotation.shape != (size, size):
                self.rotation = immutable_array(self.rotation.reshape(size, size))
        elif self.rotate_enabled:
            msg = "A rotation matrix is required if rotation is enabled."
            raise ValueError(msg)

        check_orthogonal = (
            info.context.get("check_orthogonal", True)
            if isinstance(info.context, dict)
            else True
        )
        if (
            check_orthogonal
            and self.rotate_enabled
            and self.rotation is not None
            and not np.allclose(
                self.rotation @ self.rotation.T,
                np.eye(size),
                rtol=0.0,
                atol=_ORTHOGONALITY_TOLERANCE,
            )
        ):
            msg = "The rotation matrix is not orthogonal."
            raise ValueError(msg)

        if self.permutation is not None and not is_permutation(self.permutation, size):
            msg = f"The permutation is not a bijection on [0, {size})."
            raise ValueError(msg)

        if self.flip_mask is not None and self.flip_mask.size != size:
            msg = f"The flip mask must have {size} entries."
            raise ValueError(msg)

        self._immutable()

        return self

    @property
    def dimension(self) -> int:
        """The dimension of the instance."""
        return int(self.shift.size)
