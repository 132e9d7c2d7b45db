"""Configuration classes for the histogram logger."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal, Self

from pydantic import BaseModel, ConfigDict, PositiveInt, model_validator

from landbench.enums import ScaleDomain, ScaleKind

if TYPE_CHECKING:
    from landbench.logger import HistogramLogger, Scale


class ScaleConfig(BaseModel):
    """Configuration class for a discretization scale.

    The `domain` and `kind` fields select one of the six
    [`Scale`][landbench.logger.Scale] classes, which divide the range from
    `min` to `max` into `size` bins. Integer scales require integral bounds.

    Attributes:
        domain: The value domain of the scale (`real` or `integer`).
        kind:   The growth of the bins (`linear`, `log2` or `log10`).
        min:    The lower bound of the range.
        max:    The upper bound of the range.
        size:   The number of bins.
    """

    domain: ScaleDomain = ScaleDomain.REAL
    kind: ScaleKind = ScaleKind.LINEAR
    min: float
    max: float
    size: PositiveInt

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
    )

    @model_validator(mode="after")
    def _check_range(self) -> Self:
        if self.min >= self.max:
            msg = "The minimum of a scale must be smaller than its maximum."
            raise ValueError(msg)
        if self.domain == ScaleDomain.INTEGER and not (
            float(self.min).is_integer() and float(self.max).is_integer()
        ):
            msg = "Integer scales require integer bounds."
            raise ValueError(msg)
        return self

    def create(self) -> Scale:
        """Create the configured scale.

        Returns:
            A new scale object.
        """
        from landbench.logger import scales  # noqa: PLC0415

        scale_class = scales.SCALE_CLASSES[(self.domain, self.kind)]
        if self.domain == ScaleDomain.INTEGER:
            return scale_class(int(self.min), int(self.max), self.size)
        return scale_class(self.min, self.max, self.size)


class HistogramConfig(BaseModel):
    """Configuration class for a histogram logger.

    The `x_scale` discretizes the evaluation count, the `y_scale` the measured
    quality. The `measure` field selects whether the objective value itself or
    the regret (the distance to the optimal value) is discretized.

    Attributes:
        x_scale: The scale of the time axis.
        y_scale: The scale of the quality axis.
        measure: The measured quality.
    """

    x_scale: ScaleConfig
    y_scale: ScaleConfig
    measure: Literal["objective", "regret"] = "objective"

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
    )

    def create(self) -> HistogramLogger:
        """Create a histogram logger with the configured scales.

        Returns:
            A new histogram logger.
        """
        from landbench.logger import HistogramLogger  # noqa: PLC0415

        return HistogramLogger(
            self.x_scale.create(), self.y_scale.create(), measure=self.measure
        )
