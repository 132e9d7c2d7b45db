import logging
from pathlib import Path
from typing import Any, Callable

import numpy as np
import pytest

from landbench.config import StaticDataConfig
from landbench.enums import ProblemClass
from landbench.exceptions import DataFileUnavailable, TruncatedData
from landbench.instances import StaticDataLoader, random_rotation
from landbench.problems import default_registry

_DIM = 10


@pytest.fixture(name="data_config")
def data_config_fixture(
    tmp_path: Path, write_table: Callable[[Any, Any], None]
) -> StaticDataConfig:
    config = StaticDataConfig(data_root=tmp_path)
    directory = config.directory
    for function_id in range(1, 11):
        components = 5
        shifts = np.arange(components * 100, dtype=np.float64).reshape(components, 100)
        write_table(directory / f"shift_data_{function_id}.txt", shifts / 100.0)
        matrices = np.vstack(
            [random_rotation(function_id + 7 * idx, _DIM) for idx in range(components)]
        )
        write_table(directory / f"M_{function_id}_D{_DIM}.txt", matrices)
        write_table(
            directory / f"shuffle_data_{function_id}_D{_DIM}.txt",
            [np.arange(_DIM, 0, -1)],
        )
    return config


def test_paths(tmp_path: Path) -> None:
    loader = StaticDataLoader(
        StaticDataConfig(data_root=tmp_path, suite_version="suite")
    )
    assert loader.matrix_path(3, 10) == tmp_path / "suite" / "M_3_D10.txt"
    assert loader.shift_path(3) == tmp_path / "suite" / "shift_data_3.txt"
    assert loader.shuffle_path(3, 10) == tmp_path / "suite" / "shuffle_data_3_D10.txt"


def test_load_matrix(data_config: StaticDataConfig) -> None:
    matrices, complete = StaticDataLoader(data_config).load_matrix(1, _DIM, 3)
    assert complete
    assert matrices.shape == (3, _DIM, _DIM)
    assert np.allclose(matrices[1], random_rotation(8, _DIM))


def test_load_shift_single(data_config: StaticDataConfig) -> None:
    shifts, complete = StaticDataLoader(data_config).load_shift(1, _DIM)
    assert complete
    assert np.allclose(shifts, np.arange(_DIM) / 100.0)


def test_load_shift_components(data_config: StaticDataConfig) -> None:
    shifts, complete = StaticDataLoader(data_config).load_shift(1, _DIM, 3)
    assert complete
    assert shifts.shape == (3, _DIM)
    assert np.allclose(shifts[2], np.arange(200, 200 + _DIM) / 100.0)


def test_load_shuffle_is_zero_based(data_config: StaticDataConfig) -> None:
    permutation, complete = StaticDataLoader(data_config).load_shuffle(1, _DIM)
    assert complete
    assert permutation.tolist() == list(range(_DIM - 1, -1, -1))


def test_missing_file(tmp_path: Path) -> None:
    loader = StaticDataLoader(StaticDataConfig(data_root=tmp_path))
    with pytest.raises(DataFileUnavailable, match="Cannot read"):
        loader.load_shift(1, _DIM)


def test_invalid_data(tmp_path: Path) -> None:
    config = StaticDataConfig(data_root=tmp_path)
    path = config.directory / "shift_data_1.txt"
    path.parent.mkdir(parents=True)
    path.write_text("1.0 foo 3.0\n", encoding="utf-8")
    with pytest.raises(DataFileUnavailable, match="Invalid numerical data"):
        StaticDataLoader(config).load_shift(1, 3)


def test_truncated_matrix_raises(
    tmp_path: Path, write_table: Callable[[Any, Any], None]
) -> None:
    config = StaticDataConfig(data_root=tmp_path)
    write_table(config.directory / "M_1_D10.txt", [np.ones(50)])
    with pytest.raises(TruncatedData, match="expected 100 values, found 50") as err:
        StaticDataLoader(config).load_matrix(1, _DIM)
    assert err.value.expected == 100
    assert err.value.found == 50
    assert err.value.data.size == 50


def test_truncated_matrix_warns(
    tmp_path: Path,
    write_table: Callable[[Any, Any], None],
    caplog: pytest.LogCaptureFixture,
) -> None:
    config = StaticDataConfig(data_root=tmp_path, on_truncated="warn")
    write_table(config.directory / "M_1_D10.txt", [np.ones(50)])
    with caplog.at_level(logging.WARNING):
        matrices, complete = StaticDataLoader(config).load_matrix(1, _DIM)
    assert not complete
    assert "Truncated data" in caplog.text
    assert matrices.shape == (1, _DIM, _DIM)
    assert np.all(matrices[0, :5] == 1.0)
    assert np.all(matrices[0, 5:] == 0.0)


def test_truncated_shuffle_is_completed(
    tmp_path: Path, write_table: Callable[[Any, Any], None]
) -> None:
    config = StaticDataConfig(data_root=tmp_path, on_truncated="warn")
    write_table(config.directory / "shuffle_data_5_D10.txt", [[3, 1, 2]])
    permutation, complete = StaticDataLoader(config).load_shuffle(5, _DIM)
    assert not complete
    assert permutation.tolist()[:3] == [2, 0, 1]
    assert sorted(permutation.tolist()) == list(range(_DIM))


def test_truncated_shift_components(
    tmp_path: Path, write_table: Callable[[Any, Any], None]
) -> None:
    config = StaticDataConfig(data_root=tmp_path)
    write_table(config.directory / "shift_data_8.txt", [np.ones(_DIM)])
    with pytest.raises(TruncatedData):
        StaticDataLoader(config).load_shift(8, _DIM, 3)


def test_extra_values_are_ignored(
    tmp_path: Path, write_table: Callable[[Any, Any], None]
) -> None:
    config = StaticDataConfig(data_root=tmp_path)
    write_table(config.directory / "shift_data_1.txt", [np.arange(100)])
    shifts, complete = StaticDataLoader(config).load_shift(1, 4)
    assert complete
    assert shifts.tolist() == [[0.0, 1.0, 2.0, 3.0]]


def test_load_parameters(data_config: StaticDataConfig) -> None:
    params = StaticDataLoader(data_config).load_parameters(
        5, _DIM, components=2, shuffle=True, bias=1700.0
    )
    assert len(params) == 2
    assert params[0].bias == 1700.0
    assert params[0].permutation is not None
    assert params[0].rotation is not None
    assert np.allclose(params[1].shift, np.arange(100, 100 + _DIM) / 100.0)


def test_load_parameters_without_rotation(tmp_path: Path) -> None:
    config = StaticDataConfig(data_root=tmp_path)
    path = config.directory / "shift_data_2.txt"
    path.parent.mkdir(parents=True)
    path.write_text("1 2 3 4 5\n", encoding="utf-8")
    (params,) = StaticDataLoader(config).load_parameters(
        2, 5, rotate_enabled=False
    )
    assert params.rotation is None
    assert params.shift.tolist() == [1.0, 2.0, 3.0, 4.0, 5.0]


def test_registry_with_static_data(data_config: StaticDataConfig) -> None:
    registry = default_registry(ProblemClass.REAL, data_config)
    for problem_id in registry.enumerate():
        problem = registry.create(problem_id, 1, _DIM)
        assert problem(problem.optimum.x) == problem.optimum.y
        other = registry.create(problem_id, 2, _DIM)
        assert np.array_equal(problem.params.shift, other.params.shift)


def test_registry_with_missing_static_data(tmp_path: Path) -> None:
    registry = default_registry(
        ProblemClass.REAL, StaticDataConfig(data_root=tmp_path)
    )
    with pytest.raises(DataFileUnavailable):
        registry.create(1, 1, _DIM)
