import numpy as np
import pytest
from numpy.typing import NDArray

from landbench.enums import ContinuousFunction, DiscreteFunction, ProblemClass
from landbench.exceptions import InvalidDimension
from landbench.instances import generate_parameters, uniform
from landbench.problems import (
    BIASES,
    Evaluable,
    Problem,
    Registry,
    check_dimension,
    create_continuous_problem,
    create_discrete_problem,
)
from landbench.transforms import ObjectiveBias, ProblemTransforms, ShiftScaleRotate


class Sphere(Evaluable):
    def evaluate(self, values: NDArray[np.float64]) -> float:
        return float(np.sum(values**2))

    def optimal_solution(self, dimension: int) -> NDArray[np.float64]:
        return np.zeros(dimension, dtype=np.float64)


def _sphere_problem(dimension: int = 3) -> Problem:
    params = generate_parameters(99, 1, dimension)
    return Problem(
        99,
        "Sphere",
        instance=1,
        dimension=dimension,
        landscape=Sphere(),
        params=params,
        bounds=(-5.0, 5.0),
        transforms=ProblemTransforms(
            variables=[ShiftScaleRotate(params, 2.0)],
            objectives=[ObjectiveBias(10.0)],
        ),
    )


def test_check_dimension() -> None:
    check_dimension(5)
    check_dimension(10, {10, 20})
    with pytest.raises(InvalidDimension, match="must be positive"):
        check_dimension(0)
    with pytest.raises(InvalidDimension, match="at least 3"):
        check_dimension(2, minimum=3)
    with pytest.raises(InvalidDimension, match="must be one of: 10, 20"):
        check_dimension(5, {20, 10})


def test_custom_problem() -> None:
    problem = _sphere_problem()
    assert np.allclose(problem.optimum.x, problem.params.shift)
    assert problem.optimum.y == pytest.approx(10.0)
    assert problem(problem.optimum.x) == problem.optimum.y
    assert not problem.maximize
    assert problem.problem_class == ProblemClass.REAL
    lower, upper = problem.bounds
    assert lower.tolist() == [-5.0, -5.0, -5.0]
    assert upper.tolist() == [5.0, 5.0, 5.0]
    assert repr(problem) == "Problem(id=99, name='Sphere', instance=1, dimension=3)"


def test_custom_problem_dimension_mismatch() -> None:
    with pytest.raises(InvalidDimension, match="expected 4"):
        Problem(
            99,
            "Sphere",
            instance=1,
            dimension=4,
            landscape=Sphere(),
            params=generate_parameters(99, 1, 3),
            bounds=(-5.0, 5.0),
        )


def test_evaluation_state() -> None:
    problem = _sphere_problem()
    shift = problem.params.shift
    assert problem.eval_count == 0
    assert problem.best_so_far is None

    far = problem.evaluate(shift + 1.0)
    assert far.evaluations == 1
    assert far.best_so_far == far.y
    assert far.regret == pytest.approx(far.y - problem.optimum.y)
    assert far.regret > 0.0

    near = problem.evaluate(shift + 0.1)
    assert near.evaluations == 2
    assert near.y < far.y
    assert near.best_so_far == near.y

    again = problem.evaluate(shift + 1.0)
    assert again.best_so_far == near.y
    assert problem.eval_count == 3

    problem.reset()
    assert problem.eval_count == 0
    assert problem.best_so_far is None
    assert problem.evaluate(shift).evaluations == 1


def test_observation_fields() -> None:
    problem = _sphere_problem()
    observation = problem.evaluate([0.0, 0.0, 0.0])
    assert observation.problem_id == 99
    assert observation.instance == 1
    assert observation.dimension == 3
    assert observation.x.tolist() == [0.0, 0.0, 0.0]


@pytest.mark.parametrize("x", [[0.0, 0.0], [0.0, 0.0, 0.0, 0.0], [[0.0, 0.0, 0.0]]])
def test_evaluate_wrong_dimension(x: list[float]) -> None:
    problem = _sphere_problem()
    with pytest.raises(InvalidDimension, match="dimension 3"):
        problem.evaluate(x)
    assert problem.eval_count == 0


def test_optimum_is_read_only() -> None:
    problem = _sphere_problem()
    with pytest.raises(ValueError, match="read-only"):
        problem.optimum.x[0] = 0.0


@pytest.mark.parametrize("instance", [1, 5])
def test_real_optimum(real_registry: Registry, instance: int) -> None:
    for problem_id in real_registry.enumerate():
        problem = real_registry.create(problem_id, instance, 10)
        assert problem(problem.optimum.x) == problem.optimum.y
        assert problem.optimum.y == pytest.approx(
            BIASES[ContinuousFunction(problem_id)], abs=1e-2
        )
        for seed in range(1, 6):
            x = 200.0 * uniform(10, seed) - 100.0
            assert problem.evaluate(x).regret >= 0.0


@pytest.mark.parametrize("instance", [1, 2, 51, 101])
@pytest.mark.parametrize("dimension", [7, 16])
def test_integer_optimum(
    integer_registry: Registry, instance: int, dimension: int
) -> None:
    for problem_id in integer_registry.enumerate():
        problem = integer_registry.create(problem_id, instance, dimension)
        assert problem.maximize
        assert problem(problem.optimum.x) == problem.optimum.y
        for seed in range(1, 6):
            x = np.floor(2.0 * uniform(dimension, seed))
            assert problem.evaluate(x).regret >= 0.0


@pytest.mark.slow
def test_real_optimum_all_instances(real_registry: Registry) -> None:
    for problem_id in real_registry.enumerate():
        for instance in range(1, 16):
            for dimension in (10, 20):
                problem = real_registry.create(problem_id, instance, dimension)
                assert problem(problem.optimum.x) == problem.optimum.y


def test_real_problems_are_deterministic() -> None:
    x = np.linspace(-50.0, 50.0, 10)
    for function_id in ContinuousFunction:
        first = create_continuous_problem(function_id, 3, 10)
        second = create_continuous_problem(function_id, 3, 10)
        assert first(x) == second(x)
        assert first(x) != create_continuous_problem(function_id, 4, 10)(x)


@pytest.mark.parametrize(
    ("function_id", "dimension"),
    [
        (ContinuousFunction.BENT_CIGAR, 5),
        (ContinuousFunction.HYBRID_FUNCTION_1, 2),
        (ContinuousFunction.COMPOSITION_FUNCTION_3, 30),
    ],
)
def test_real_unsupported_dimension(
    function_id: ContinuousFunction, dimension: int
) -> None:
    with pytest.raises(InvalidDimension, match="Unsupported dimension"):
        create_continuous_problem(function_id, 1, dimension)


def test_real_problem_attributes() -> None:
    problem = create_continuous_problem(ContinuousFunction.SCHWEFEL, 1, 2)
    assert problem.problem_id == 2
    assert problem.name == "Schwefel"
    assert problem.dimension == 2
    assert problem.params.bias == 1100.0
    lower, upper = problem.bounds
    assert np.all(lower == -100.0)
    assert np.all(upper == 100.0)
    assert np.all(np.abs(problem.optimum.x) <= 80.0)


@pytest.mark.parametrize(
    ("function_id", "x", "expected"),
    [
        (DiscreteFunction.ONE_MAX, [1, 0, 1, 0, 1], 3.0),
        (DiscreteFunction.LEADING_ONES, [1, 1, 0, 1, 1], 2.0),
        (DiscreteFunction.LINEAR, [1, 0, 1, 0, 0], 4.0),
        (DiscreteFunction.ONE_MAX_RUGGEDNESS1, [1, 1, 1, 1, 1], 4.0),
        (DiscreteFunction.ONE_MAX_RUGGEDNESS2, [1, 1, 1, 1, 0], 3.0),
    ],
)
def test_discrete_values(
    function_id: DiscreteFunction, x: list[int], expected: float
) -> None:
    problem = create_discrete_problem(function_id, 1, 5)
    assert problem(x) == expected


def test_discrete_optimum_values() -> None:
    assert create_discrete_problem(DiscreteFunction.ONE_MAX, 1, 8).optimum.y == 8.0
    assert create_discrete_problem(DiscreteFunction.LINEAR, 1, 4).optimum.y == 10.0
    assert create_discrete_problem(
        DiscreteFunction.ONE_MAX_DUMMY1, 1, 10
    ).optimum.y == 5.0
    problem = create_discrete_problem(DiscreteFunction.ONE_MAX, 2, 8)
    params = problem.params
    assert problem.optimum.y == pytest.approx(
        params.objective_scale * 8.0 + params.bias
    )


def test_discrete_instance_flips_bits() -> None:
    problem = create_discrete_problem(DiscreteFunction.ONE_MAX, 2, 20)
    assert problem.params.flip_mask is not None
    assert np.array_equal(problem.optimum.x, ~problem.params.flip_mask)


def test_discrete_rejects_non_bits() -> None:
    problem = create_discrete_problem(DiscreteFunction.ONE_MAX, 1, 3)
    with pytest.raises(ValueError, match="bit string"):
        problem([0, 2, 1])
    assert problem.problem_class == ProblemClass.INTEGER


@pytest.mark.parametrize(
    ("function_id", "dimension"),
    [
        (DiscreteFunction.ONE_MAX_NEUTRALITY, 2),
        (DiscreteFunction.LEADING_ONES_EPISTASIS, 3),
        (DiscreteFunction.ONE_MAX, 0),
    ],
)
def test_discrete_minimum_dimension(
    function_id: DiscreteFunction, dimension: int
) -> None:
    with pytest.raises(InvalidDimension):
        create_discrete_problem(function_id, 1, dimension)
