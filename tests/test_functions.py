import numpy as np
import pytest
import scipy.special as spc

import gammakit
from gammakit import functions
from gammakit.error import DomainError, UndefinedInputError


def test_scalars_return_floats():
    for value in [
        functions.gamma(4.0),
        functions.log_gamma(4.0),
        functions.digamma(4.0),
        functions.trigamma(4.0),
        functions.regularized_gamma_p(2.0, 1.0),
        functions.regularized_gamma_q(2.0, 1.0),
        functions.regularized_gamma_p_inverse(2.0, 0.5),
        functions.lower_incomplete_gamma(2.0, 1.0),
        functions.upper_incomplete_gamma(2.0, 1.0),
    ]:
        assert isinstance(value, float)


def test_array_input():
    x = np.array([0.5, 1.5, 2.5, 7.0])
    np.testing.assert_allclose(functions.gamma(x), spc.gamma(x), rtol=1e-13)
    np.testing.assert_allclose(functions.log_gamma(x), spc.gammaln(x), rtol=1e-13)
    np.testing.assert_allclose(
        functions.digamma(x), spc.digamma(x), rtol=1e-13, atol=1e-14
    )
    np.testing.assert_allclose(functions.trigamma(x), spc.polygamma(1, x), rtol=1e-13)


def test_broadcasting():
    s = np.array([[0.5], [2.0], [9.0]])
    x = np.array([0.1, 1.0, 4.0, 12.0])
    p = functions.regularized_gamma_p(s, x)
    q = functions.regularized_gamma_q(s, x)
    assert p.shape == (3, 4)
    np.testing.assert_allclose(p, spc.gammainc(s, x), rtol=1e-10, atol=1e-14)
    np.testing.assert_allclose(p + q, np.ones((3, 4)), atol=1e-14)


def test_inverse_round_trip():
    s = np.array([0.4, 1.0, 3.0, 25.0])
    u = np.array([0.1, 0.5, 0.6, 0.95])
    x = functions.regularized_gamma_p_inverse(s, u)
    np.testing.assert_allclose(functions.regularized_gamma_p(s, x), u, rtol=1e-12)


def test_incomplete_functions():
    s, x = 3.0, 2.0
    assert functions.lower_incomplete_gamma(s, x) == pytest.approx(
        2 - 10 * np.exp(-2), rel=1e-13
    )
    assert functions.upper_incomplete_gamma(s, x) == pytest.approx(
        10 * np.exp(-2), rel=1e-13
    )


def test_errors_propagate():
    with pytest.raises(DomainError):
        functions.log_gamma(np.array([1.0, -1.0]))
    with pytest.raises(DomainError):
        functions.regularized_gamma_q(-1.0, 1.0)
    with pytest.raises(UndefinedInputError):
        functions.digamma(np.nan)


def test_package_exports():
    assert gammakit.gamma_function(5.0) == pytest.approx(24.0, rel=1e-14)
    assert gammakit.log_gamma is functions.log_gamma
    assert isinstance(gammakit.__version__, str)
