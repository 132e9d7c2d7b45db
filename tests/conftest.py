from typing import Any, Callable, Sequence

import numpy as np
import pytest

from landbench.enums import ProblemClass
from landbench.logger import LinearIntegerScale, LinearRealScale
from landbench.problems import Registry, default_registry


def pytest_addoption(parser: Any) -> Any:
    parser.addoption(
        "--run-slow", action="store_true", default=False, help="run slow tests"
    )


def pytest_collection_modifyitems(config: Any, items: Sequence[Any]) -> None:
    if not config.getoption("--run-slow"):
        skip_slow = pytest.mark.skip(reason="need --run-slow option to run")
        for item in items:
            if "slow" in item.keywords:
                item.add_marker(skip_slow)


@pytest.fixture(name="real_registry", scope="session")
def real_registry_fixture() -> Registry:
    return default_registry(ProblemClass.REAL)


@pytest.fixture(name="integer_registry", scope="session")
def integer_registry_fixture() -> Registry:
    return default_registry(ProblemClass.INTEGER)


@pytest.fixture(name="scales")
def scales_fixture() -> tuple[LinearIntegerScale, LinearRealScale]:
    return LinearIntegerScale(0, 100, 10), LinearRealScale(0.0, 1000.0, 20)


@pytest.fixture(scope="session")
def write_table() -> Callable[[Any, Any], None]:
    def _write_table(path: Any, rows: Any) -> None:
        lines = [
            " ".join(f"{value:.16e}" for value in np.atleast_1d(row)) for row in rows
        ]
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    return _write_table
