import dataclasses
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import mpmath
import numpy as np
import pytest

from gammakit.error import DomainError
from gammakit.gamma import DEFAULT_LANCZOS, LogGamma, derive_lanczos_tables
from gammakit.types import LanczosParameters, PrecisionMode

# Published coefficients for g = 607/128, n = 15, derived with 60 digits.
REFERENCE_P = np.array([
    2.506628274630993212690713212902981043778231317934961102626888,
    143.269436391524834116310803080216408071593930149543550005657892,
    -149.389932537372300003892850647534301566462333369222299900934464,
    35.43394287644168623842616582313594168798594642709681523807824,
    -1.23304508011192900199205019045366385661386664593871973232992,
    0.00008521195083811379200391668425813572876701246542111017928,
    0.000116617443706980676361066723073155328757336705967386186176,
    -0.000246588241301200230325289044382556220863229632130949798112,
    0.000396269613403314676853385056732651422831369418070840216,
    -0.00052705479477514357592036799545594766914055170516840566356,
    0.00054504029479255910923352122293918539567195705680611877216,
    -0.000411884411878881395461043822782626553775540910172677774048,
    0.000211605107132058147537083645155915068665362000457772105024,
    -0.0000656506960736953574742190938202579770853525892573352756,
    0.00000924925345651558838630300519322709590667494407211468,
])


@pytest.fixture(scope="module")
def small_tables():
    return derive_lanczos_tables(LanczosParameters(g=5.0, n=7, scale=14))


def test_matrix_b(small_tables):
    expected = np.array([
        [1, 1, 1, 1, 1, 1, 1],
        [0, 1, -2, 3, -4, 5, -6],
        [0, 0, 1, -4, 10, -20, 35],
        [0, 0, 0, 1, -6, 21, -56],
        [0, 0, 0, 0, 1, -8, 36],
        [0, 0, 0, 0, 0, 1, -10],
        [0, 0, 0, 0, 0, 0, 1],
    ])
    np.testing.assert_array_equal(small_tables.B.astype(float), expected)


def test_matrix_c(small_tables):
    expected = np.array([
        [0.5, 0, 0, 0, 0, 0, 0],
        [-1, 2, 0, 0, 0, 0, 0],
        [1, -8, 8, 0, 0, 0, 0],
        [-1, 18, -48, 32, 0, 0, 0],
        [1, -32, 160, -256, 128, 0, 0],
        [-1, 50, -400, 1120, -1280, 512, 0],
        [1, -72, 840, -3584, 6912, -6144, 2048],
    ])
    np.testing.assert_array_equal(small_tables.C.astype(float), expected)


def test_matrix_d(small_tables):
    expected = np.diag([1, -1, -6, -30, -140, -630, -2772])
    np.testing.assert_array_equal(small_tables.D.astype(float), expected)


def test_z_vector(small_tables):
    # Z at z = 1, i.e. x = 2
    expected = np.array([1, 1 / 2, 1 / 3, 1 / 4, 1 / 5, 1 / 6, 1 / 7])
    assert np.allclose(small_tables.Z(2).astype(float), expected, rtol=1e-14, atol=0)


def test_default_coefficients_match_reference():
    assert DEFAULT_LANCZOS.n == 15
    assert DEFAULT_LANCZOS.g == 607 / 128
    assert DEFAULT_LANCZOS.P_fast.dtype == np.float64
    assert np.allclose(DEFAULT_LANCZOS.P_fast, REFERENCE_P, rtol=1e-13, atol=0)


def test_tables_are_read_only():
    with pytest.raises(ValueError):
        DEFAULT_LANCZOS.P_fast[0] = 1.0
    with pytest.raises(ValueError):
        DEFAULT_LANCZOS.P[0] = 1.0
    with pytest.raises(dataclasses.FrozenInstanceError):
        DEFAULT_LANCZOS.parameters = LanczosParameters()


@pytest.mark.parametrize(
    "parameters",
    [{"n": 0}, {"scale": 0}, {"g": 0.0}, {"g": -1.0}],
)
def test_invalid_parameters(parameters):
    with pytest.raises(DomainError):
        LanczosParameters(**parameters)


@pytest.mark.parametrize(
    "x, expected",
    [
        (3, 0.6931471805599453),
        (0.5, 0.5723649429247001),
        (1.5, -0.1207822376352452),
        (2.5, 0.2846828704729192),
        (3.5, 1.2009736023470743),
        (1.1234, -0.0593998178558785),
        (0.123456789, 2.032442066798749),
    ],
)
def test_log_gamma_quick(x, expected):
    assert DEFAULT_LANCZOS.log_gamma_quick(x) == pytest.approx(expected, abs=1e-14)


def test_log_gamma_quick_tiny_argument():
    assert DEFAULT_LANCZOS.log_gamma_quick(1e-10) == pytest.approx(
        23.02585092988274, abs=1e-6
    )


@pytest.mark.parametrize(
    "x, expected, tolerance",
    [
        (1e-10, 23.02585092988274, 1e-14),
        (1e-15, 34.53877639491068, 1e-14),
        (1e-25, 57.56462732485114, 1e-14),
        (1e-46, 105.9189142777261, 1e-13),
        (1e-66, 151.970616137607, 1e-12),
        (1, 0.0, 1e-15),
        (2, 0.0, 1e-15),
        (4, 1.791759469228055, 1e-14),
        (9.23, 11.10003103605538, 1e-13),
    ],
)
def test_log_gamma_precise(x, expected, tolerance):
    assert DEFAULT_LANCZOS.log_gamma(x) == pytest.approx(expected, abs=tolerance)


@pytest.mark.parametrize("x", [50.0, 423.0, 1423.123456789, 91423.123456789])
def test_log_gamma_precise_large_arguments(x):
    with mpmath.workdps(40):
        expected = float(mpmath.loggamma(mpmath.mpf(x)))
    assert DEFAULT_LANCZOS.log_gamma(x) == pytest.approx(expected, rel=1e-14)


def test_log_gamma_precise_from_decimal_string():
    result = DEFAULT_LANCZOS.log_gamma_precise("0.0000000001")
    assert isinstance(result, mpmath.mpf)
    with mpmath.workdps(60):
        expected = mpmath.mpf(
            "23.025850929882736333885856799734780123049919531443746715288998"
        )
        assert abs(result - expected) < 1e-14
    assert DEFAULT_LANCZOS.log_gamma_precise(Decimal("0.0000000001")) == result


def test_log_gamma_precise_very_large_argument():
    result = DEFAULT_LANCZOS.log_gamma_precise("91423123456789")
    with mpmath.workdps(50):
        expected = mpmath.loggamma(mpmath.mpf("91423123456789"))
        assert abs(result - expected) < 1e-6


def test_log_gamma_precise_leaves_global_precision_alone():
    dps = mpmath.mp.dps
    result = DEFAULT_LANCZOS.log_gamma_precise("2.5")
    assert mpmath.mp.dps == dps
    # The result carries the digits of the tables, not the global 15
    assert mpmath.libmp.bitcount(result.man) > 53


@pytest.mark.parametrize("x", [0.0, -1.0, -0.5, np.nan])
def test_log_gamma_rejects_non_positive(x):
    with pytest.raises(DomainError):
        DEFAULT_LANCZOS.log_gamma(x)
    with pytest.raises(DomainError):
        DEFAULT_LANCZOS.log_gamma_quick(x)


@pytest.mark.parametrize("x", [0.01, 0.3, 1.7, 6.2, 42.0, 1234.5])
def test_quick_and_precise_agree(x):
    quick = LogGamma(mode=PrecisionMode.QUICK).evaluate(x)
    precise = LogGamma(mode=PrecisionMode.PRECISE).evaluate(x)
    assert quick == pytest.approx(precise, rel=1e-13, abs=1e-14)


def test_custom_parameters_remain_accurate():
    tables = derive_lanczos_tables(LanczosParameters(g=5.0, n=7, scale=20))
    assert tables.log_gamma(4.5) == pytest.approx(np.log(11.631728396567448), rel=1e-8)


def test_shared_tables_across_threads():
    xs = [0.25 + 0.5 * i for i in range(40)]
    expected = [DEFAULT_LANCZOS.log_gamma(x) for x in xs]
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(DEFAULT_LANCZOS.log_gamma, xs))
    assert results == expected
