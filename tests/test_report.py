from pathlib import Path

import numpy as np
import pytest

from landbench.enums import ContinuousFunction
from landbench.events import EvaluationDispatcher
from landbench.instances import uniform
from landbench.logger import (
    HistogramLogger,
    LinearIntegerScale,
    LinearRealScale,
    RunHistogram,
)
from landbench.problems import create_continuous_problem
from landbench.report import attainment


@pytest.fixture(name="logger")
def logger_fixture(
    scales: tuple[LinearIntegerScale, LinearRealScale],
) -> HistogramLogger:
    problem = create_continuous_problem(ContinuousFunction.LUNACEK_BI_RASTRIGIN, 1, 2)
    logger = HistogramLogger(*scales, measure="regret")
    dispatcher = EvaluationDispatcher(problem)
    dispatcher.attach(logger)
    for seed in range(1, 4):
        dispatcher.new_run()
        for x in uniform(2 * 40, seed).reshape(40, 2) * 20.0 - 10.0:
            dispatcher(problem.optimum.x + x)
    dispatcher.stop()
    return logger


def test_attainment_single_run() -> None:
    grid = np.zeros((3, 4), dtype=np.int64)
    grid[1, 2] = 1
    result = attainment([grid])
    expected = np.zeros((3, 4))
    expected[1:, 2:] = 1.0
    assert np.array_equal(result, expected)

    result = attainment([grid], maximize=True)
    expected = np.zeros((3, 4))
    expected[1:, :3] = 1.0
    assert np.array_equal(result, expected)


def test_attainment_fractions() -> None:
    first = np.zeros((2, 2), dtype=np.int64)
    first[0, 0] = 3
    second = np.zeros((2, 2), dtype=np.int64)
    second[1, 1] = 1
    result = attainment(
        [RunHistogram(0, None, None, None, first), RunHistogram(1, None, None, None, second)]
    )
    assert result.tolist() == [[0.5, 0.5], [0.5, 1.0]]


def test_attainment_is_monotone(logger: HistogramLogger) -> None:
    result = attainment(logger.runs)
    assert result.shape == logger.grid.shape
    assert np.all(np.diff(result, axis=0) >= 0.0)
    assert np.all(np.diff(result, axis=1) >= 0.0)
    assert np.all((result >= 0.0) & (result <= 1.0))
    assert result[-1, -1] == 1.0


def test_attainment_errors() -> None:
    with pytest.raises(ValueError, match="At least one"):
        attainment([])
    with pytest.raises(ValueError, match="same shape"):
        attainment([np.zeros((2, 2)), np.zeros((2, 3))])


def test_data_frame(logger: HistogramLogger) -> None:
    pytest.importorskip("pandas")
    from landbench.report import HistogramDataFrame  # noqa: PLC0415

    report = HistogramDataFrame.from_logger(logger)
    frame = report.frame
    assert list(frame.index.names) == ["run_id", "x_bin", "y_bin"]
    assert frame["count"].sum() == 120
    assert set(frame.index.get_level_values("run_id")) == {0, 1, 2}
    assert set(frame["problem_id"]) == {3}
    row = frame.iloc[0]
    assert row["x_upper"] - row["x_lower"] == 10
    assert row["y_upper"] - row["y_lower"] == pytest.approx(50.0)


def test_data_frame_add_run(
    scales: tuple[LinearIntegerScale, LinearRealScale],
) -> None:
    pytest.importorskip("pandas")
    from landbench.report import HistogramDataFrame  # noqa: PLC0415

    report = HistogramDataFrame(*scales)
    empty = RunHistogram(0, 1, 1, 2, np.zeros((10, 20), dtype=np.int64))
    assert not report.add_run(empty)
    assert report.frame.empty
    with pytest.raises(ValueError, match="does not match"):
        report.add_run(RunHistogram(0, 1, 1, 2, np.zeros((3, 3), dtype=np.int64)))


def test_format_histogram(scales: tuple[LinearIntegerScale, LinearRealScale]) -> None:
    pytest.importorskip("tabulate")
    from landbench.report import format_histogram  # noqa: PLC0415

    x_scale, y_scale = scales
    grid = np.zeros((10, 20), dtype=np.int64)
    grid[0, 3] = 7
    text = format_histogram(grid, x_scale, y_scale)
    lines = text.splitlines()
    assert lines[0].startswith("evaluations")
    assert "[150, 200)" in lines[0]
    assert lines[2].startswith("[0, 10)")
    assert "7" in lines[2]
    assert len(lines) == 12
    with pytest.raises(ValueError, match="does not match"):
        format_histogram(grid.T, x_scale, y_scale)


def test_histogram_table(logger: HistogramLogger, tmp_path: Path) -> None:
    pytest.importorskip("pandas")
    pytest.importorskip("tabulate")
    from landbench.report import HistogramTable  # noqa: PLC0415

    path = tmp_path / "reports" / "histogram.txt"
    table = HistogramTable(logger.x_scale, logger.y_scale, path)
    table.save()
    assert not path.exists()
    for histogram in logger.runs:
        table.add_run(histogram)
    table.save()
    lines = path.read_text().splitlines()
    assert lines[0].split()[:3] == ["run_id", "x_bin", "y_bin"]
    assert len(lines) == 2 + len(table.frame)
