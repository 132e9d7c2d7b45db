"""Transforms of objective values."""

from __future__ import annotations

from .base import ObjectiveTransform


class ObjectiveBias(ObjectiveTransform):
    """Add a constant bias to objective values."""

    def __init__(self, bias: float) -> None:
        """Initialize the transform.

        Args:
            bias: The bias to add.
        """
        self._bias = bias

    @property
    def bias(self) -> float:
        """The bias added to objective values."""
        return self._bias

    def forward(self, value: float) -> float:
        """Add the bias.

        Args:
            value: The objective value.

        Returns:
            The biased value.
        """
        return value + self._bias


class ObjectiveScaleShift(ObjectiveTransform):
    r"""Apply an affine transformation to objective values.

    Computes $y' = a y + b$, where $a$ is the `scale` and $b$ the `shift`. The
    scale must be positive, so that the ordering of solutions is preserved.
    """

    def __init__(self, scale: float, shift: float) -> None:
        """Initialize the transform.

        Args:
            scale: The multiplicative factor.
            shift: The additive offset.

        Raises:
            ValueError: If the scale is not positive.
        """
        if scale <= 0.0:
            msg = "The objective scale must be positive."
            raise ValueError(msg)
        self._scale = scale
        self._shift = shift

    def forward(self, value: float) -> float:
        """Scale and shift an objective value."""
        return self._scale * value + self._shift
