import numpy as np
import pytest

from diffevo.benchmarks import BENCHMARKS, BenchmarkFunctions, get_benchmark


@pytest.mark.parametrize(
    "name,x,expected",
    [
        ("sphere", [0.0, 0.0, 0.0], 0.0),
        ("rosenbrock", [1.0, 1.0, 1.0, 1.0], 0.0),
        ("rastrigin", [0.0, 0.0], 0.0),
        ("ackley", [0.0, 0.0, 0.0], 0.0),
        ("griewank", [0.0, 0.0], 0.0),
        ("branin", [np.pi, 2.275], 0.397887),
        ("six_hump_camel", [0.0898, -0.7126], -1.0316),
    ],
)
def test_known_minima(name: str, x: list, expected: float) -> None:
    np.testing.assert_allclose(BENCHMARKS[name](np.array(x)), expected, atol=1e-4)


def test_sphere_value() -> None:
    assert BenchmarkFunctions.sphere(np.array([1.0, -2.0, 3.0])) == 14.0


def test_free_dimension_bounds() -> None:
    bounds = BENCHMARKS["rastrigin"].bounds(3)
    assert bounds == [(-5.12, 5.12)] * 3
    with pytest.raises(ValueError):
        BENCHMARKS["rastrigin"].bounds()
    with pytest.raises(ValueError):
        BENCHMARKS["rosenbrock"].bounds(1)


def test_fixed_dimension_bounds() -> None:
    branin = BENCHMARKS["branin"]
    assert branin.n_dim == 2
    assert branin.bounds(7) == [(-5.0, 10.0), (0.0, 15.0)]
    assert branin.with_dimension(7) is branin


def test_with_dimension_pins_free_functions() -> None:
    pinned = BENCHMARKS["ackley"].with_dimension(5)
    assert pinned.n_dim == 5
    assert BENCHMARKS["ackley"].n_dim is None


def test_get_benchmark() -> None:
    assert get_benchmark("Six-Hump_Camel") is BENCHMARKS["six_hump_camel"]
    with pytest.raises(KeyError):
        get_benchmark("himmelblau")
