import numpy as np
import pytest
import scipy.special as spc

from gammakit.error import UndefinedInputError
from gammakit.gamma import Digamma

EULER_GAMMA = 0.5772156649015329


def test_special_values():
    digamma = Digamma()
    assert digamma.evaluate(1) == pytest.approx(-EULER_GAMMA, abs=1e-14)
    assert digamma.evaluate(0.5) == pytest.approx(
        -EULER_GAMMA - 2 * np.log(2), abs=1e-14
    )
    assert digamma.evaluate(1.5) == pytest.approx(0.03648997397857652, abs=1e-14)
    assert digamma.evaluate(0) == -np.inf


@pytest.mark.parametrize("x", [0.01, 0.7, 3.3, 9.5, 10.0, 25.0])
def test_recurrence(x):
    digamma = Digamma()
    assert digamma.evaluate(x + 1) == pytest.approx(
        digamma.evaluate(x) + 1 / x, rel=1e-13, abs=1e-14
    )


def test_digamma_against_scipy():
    x = np.concatenate([
        np.array([1e-8, 1e-4, 0.05]),
        np.linspace(0.1, 30, 61),
        np.array([123.4, 1e4, 1e8]),
        -np.array([0.25, 0.5, 1.5, 2.75, 7.1]),
    ])
    digamma = Digamma()
    result = np.array([digamma.evaluate(v) for v in x])
    assert np.allclose(result, spc.digamma(x), rtol=1e-12, atol=1e-13)


def test_nan_is_undefined():
    with pytest.raises(UndefinedInputError):
        Digamma().evaluate(np.nan)
