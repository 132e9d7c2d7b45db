import numpy as np
import pytest
from pydantic import ValidationError

from landbench.config import HistogramConfig, ScaleConfig
from landbench.enums import ScaleDomain, ScaleKind
from landbench.logger import (
    HistogramLogger,
    IntegerScale,
    LinearIntegerScale,
    LinearRealScale,
    Log2IntegerScale,
    Log2RealScale,
    Log10IntegerScale,
    Log10RealScale,
    Scale,
)

_ALL_SCALES = [
    LinearRealScale(0.0, 100.0, 10),
    LinearRealScale(-1.5, 2.5, 7),
    Log2RealScale(0.0, 1e6, 20),
    Log10RealScale(10.0, 1e4, 15),
    LinearIntegerScale(0, 100, 10),
    LinearIntegerScale(1, 1000, 7),
    Log2IntegerScale(0, 1000, 10),
    Log10IntegerScale(1, 100000, 25),
    Log2IntegerScale(0, 30, 30),
]


@pytest.mark.parametrize("scale", _ALL_SCALES, ids=repr)
def test_index_of_lower_bound(scale: Scale) -> None:
    for idx in range(scale.size):
        lower, upper = scale.bounds(idx)
        assert lower < upper
        assert scale.index(lower) == idx


@pytest.mark.parametrize("scale", _ALL_SCALES, ids=repr)
def test_edges(scale: Scale) -> None:
    edges = scale.edges
    assert edges.size == scale.size + 1
    assert edges[0] == scale.min
    assert edges[-1] == scale.max
    assert np.all(np.diff(edges) > 0.0)
    with pytest.raises(ValueError, match="read-only"):
        edges[0] = 1.0


@pytest.mark.parametrize("scale", _ALL_SCALES, ids=repr)
def test_index_is_clamped(scale: Scale) -> None:
    assert scale.index(scale.min - 1.0) == 0
    assert scale.index(scale.max) == scale.size - 1
    assert scale.index(scale.max + 1.0) == scale.size - 1


def test_linear_real_scale() -> None:
    scale = LinearRealScale(0.0, 100.0, 10)
    assert scale.index(55.0) == 5
    assert scale.bounds(5) == (50.0, 60.0)
    assert scale.step() == 10.0
    assert scale.length == 100.0
    assert repr(scale) == "LinearRealScale(min=0.0, max=100.0, size=10)"


def test_linear_integer_scale() -> None:
    scale = LinearIntegerScale(0, 105, 10)
    assert scale.step() == 10
    assert scale.bounds(0) == (0, 10)
    assert scale.bounds(9) == (90, 105)
    assert isinstance(scale.bounds(3)[0], int)
    assert scale.index(104) == 9


def test_log_scales_grow() -> None:
    scale = Log2RealScale(0.0, 1e6, 20)
    widths = np.diff(scale.edges)
    assert np.all(np.diff(widths) > 0.0)
    assert np.allclose(scale.edges, Log10RealScale(0.0, 1e6, 20).edges)


def test_log_integer_scale_edges_are_integers() -> None:
    scale = Log10IntegerScale(1, 100000, 25)
    assert np.array_equal(scale.edges, np.round(scale.edges))


@pytest.mark.parametrize("i", [-1, 10, 11])
def test_bounds_out_of_range(i: int) -> None:
    with pytest.raises(IndexError, match="out of range"):
        LinearRealScale(0.0, 100.0, 10).bounds(i)


def test_invalid_scales() -> None:
    with pytest.raises(ValueError, match="smaller than its maximum"):
        LinearRealScale(1.0, 1.0, 10)
    with pytest.raises(ValueError, match="must be positive"):
        LinearRealScale(0.0, 1.0, 0)
    with pytest.raises(ValueError, match="too small"):
        LinearIntegerScale(0, 5, 10)
    with pytest.raises(ValueError, match="integer bounds"):
        Log2IntegerScale(0.5, 10, 2)  # type: ignore[arg-type]


def test_narrow_log_scale_is_rejected() -> None:
    with pytest.raises(ValueError, match="not strictly increasing"):
        Log2RealScale(0.0, 1e-15, 100)
    scale = Log2RealScale(0.0, 1e-3, 100)
    assert all(scale.index(scale.bounds(i)[0]) == i for i in range(scale.size))


@pytest.mark.parametrize(
    ("domain", "kind", "scale_class"),
    [
        (ScaleDomain.REAL, ScaleKind.LINEAR, LinearRealScale),
        (ScaleDomain.REAL, ScaleKind.LOG2, Log2RealScale),
        (ScaleDomain.REAL, ScaleKind.LOG10, Log10RealScale),
        (ScaleDomain.INTEGER, ScaleKind.LINEAR, LinearIntegerScale),
        (ScaleDomain.INTEGER, ScaleKind.LOG2, Log2IntegerScale),
        (ScaleDomain.INTEGER, ScaleKind.LOG10, Log10IntegerScale),
    ],
)
def test_scale_config(
    domain: ScaleDomain, kind: ScaleKind, scale_class: type[Scale]
) -> None:
    config = ScaleConfig.model_validate(
        {"domain": domain, "kind": kind, "min": 0, "max": 1000, "size": 10}
    )
    scale = config.create()
    assert type(scale) is scale_class
    assert scale.size == 10
    assert scale.max == 1000
    if domain == ScaleDomain.INTEGER:
        assert isinstance(scale, IntegerScale)
        assert isinstance(scale.min, int)


def test_scale_config_errors() -> None:
    with pytest.raises(ValidationError, match="smaller than its maximum"):
        ScaleConfig.model_validate({"min": 10, "max": 0, "size": 5})
    with pytest.raises(ValidationError, match="integer bounds"):
        ScaleConfig.model_validate(
            {"domain": "integer", "min": 0.5, "max": 10, "size": 5}
        )
    with pytest.raises(ValidationError):
        ScaleConfig.model_validate({"min": 0, "max": 10, "size": 0})
    with pytest.raises(ValidationError):
        ScaleConfig.model_validate({"kind": "log3", "min": 0, "max": 10, "size": 5})


def test_histogram_config() -> None:
    config = HistogramConfig.model_validate(
        {
            "x_scale": {"domain": "integer", "min": 0, "max": 100, "size": 10},
            "y_scale": {"kind": "log10", "min": 0, "max": 1e4, "size": 8},
            "measure": "regret",
        }
    )
    logger = config.create()
    assert isinstance(logger, HistogramLogger)
    assert isinstance(logger.x_scale, LinearIntegerScale)
    assert isinstance(logger.y_scale, Log10RealScale)
    assert logger.measure == "regret"
    assert logger.grid.shape == (10, 8)
