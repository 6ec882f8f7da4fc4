import mpmath
import numpy as np
import pytest
import scipy.special as spc

from gammakit.error import DomainError, NoRootFoundError
from gammakit.gamma import GammaRegularizedP, GammaRegularizedPInverse

INVERSE = GammaRegularizedPInverse()
P = GammaRegularizedP()


@pytest.mark.parametrize("s", [0.1, 1.0, 2.0, 50.0])
def test_end_points(s):
    assert INVERSE.evaluate(s, 0) == 0.0
    assert INVERSE.evaluate(s, 1) == np.inf


@pytest.mark.parametrize("s, u", [(0, 0.5), (-1, 0.5), (1, -0.1), (1, 1.1), (np.nan, 0.5)])
def test_domain(s, u):
    with pytest.raises(DomainError):
        INVERSE.evaluate(s, u)


def test_half_shape():
    assert INVERSE.evaluate(0.5, 0.5) == pytest.approx(0.2274682115597864, abs=1e-14)


def test_negative_lambda_is_solved_numerically():
    assert INVERSE.evaluate(3.5 / 2, 0.000001) == pytest.approx(
        0.0004891465812788407, abs=1e-13
    )


def test_large_shape():
    assert INVERSE.evaluate(2000, 0.000001) == pytest.approx(1794.57165888084, abs=1e-8)


@pytest.mark.parametrize(
    "u, expected",
    [
        (0.1, 0.531811608389612),
        (0.3, 1.097349210703492),
        (0.5, 1.678346990016661),
        (0.7, 2.439216483280204),
        (0.9, 3.88972016986743),
    ],
)
def test_shape_two(u, expected):
    assert INVERSE.evaluate(2, u) == pytest.approx(expected, abs=1e-13)


def test_evaluate_by_approximation():
    assert INVERSE.evaluate_by_approximation(0.5, 0.5) == pytest.approx(
        0.227468092579000, abs=1e-12
    )


def test_evaluate_by_asymptotic_inversion():
    assert INVERSE.evaluate_by_asymptotic_inversion(1, 0.5) == pytest.approx(
        np.log(2), abs=1e-2
    )
    assert INVERSE.evaluate_by_asymptotic_inversion(2, 0.5) == pytest.approx(
        1.67842, abs=1e-4
    )


@pytest.mark.parametrize("s", [0.3, 0.5, 1.0, 2.0, 5.0, 20.0, 150.0])
@pytest.mark.parametrize("u", [0.05, 0.3, 0.5, 0.8])
def test_against_scipy(s, u):
    assert INVERSE.evaluate(s, u) == pytest.approx(spc.gammaincinv(s, u), rel=1e-10)


@pytest.mark.parametrize("s, x", [(0.7, 0.2), (1.3, 2.0), (4.0, 3.5), (60.0, 55.0)])
def test_round_trip(s, x):
    assert INVERSE.evaluate(s, P.evaluate(s, x)) == pytest.approx(x, rel=1e-10)


def test_iteration_budget_exhausted():
    inverse = GammaRegularizedPInverse(max_iterations=1)
    with pytest.raises(NoRootFoundError):
        inverse.evaluate(2, 0.3)


@pytest.mark.parametrize("s, u", [(0.01, 1e-3), (0.1, 1e-20), (0.05, 1e-8)])
def test_tiny_roots_against_scipy(s, u):
    # (u Gamma(s + 1))^(1/s) is far below the float range of its base
    result = INVERSE.evaluate(s, u)
    assert result > 0
    assert result == pytest.approx(spc.gammaincinv(s, u), rel=1e-9)


def test_tiny_root_of_tiny_shape():
    s, u = 0.001, 0.5
    with mpmath.workdps(30):
        expected = float(
            mpmath.exp((mpmath.log(u) + mpmath.loggamma(mpmath.mpf(s) + 1)) / s)
        )
    assert INVERSE.evaluate(s, u) == pytest.approx(expected, rel=1e-10)


def test_root_below_float_range_is_zero():
    assert INVERSE.evaluate(0.001, 1e-3) == 0.0
    assert INVERSE.evaluate_by_approximation(0.001, 1e-3) == 0.0


@pytest.mark.parametrize(
    "s, u, expected",
    [(1.0, 1e-20, 1e-20), (0.5, 0.00000123, 1.18822888140494e-12)],
)
def test_small_probabilities_keep_leading_term(s, u, expected):
    assert INVERSE.evaluate(s, u) == pytest.approx(expected, rel=1e-10)
