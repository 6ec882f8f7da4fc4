import numpy as np

import gammakit
from gammakit.gamma import (
    GammaGergoNemes,
    GammaLanczos,
    GammaRegularizedPInverse,
    derive_lanczos_tables,
)
from gammakit.types import LanczosParameters

np.set_printoptions(precision=6, suppress=True)
print(gammakit.__version__)


## The vectorized functions

# The functions in `gammakit.functions` accept scalars and numpy arrays
# and evaluate in float64 with the default Lanczos coefficients.

x = np.array([0.5, 1.5, 4.0, 10.25])
print("gamma   ", gammakit.gamma_function(x))
print("lgamma  ", gammakit.log_gamma(x))
print("digamma ", gammakit.digamma(x))
print("trigamma", gammakit.trigamma(x))


## Incomplete gamma functions and the inverse of P

s = np.array([[0.5], [2.0], [25.0]])
u = np.array([0.05, 0.5, 0.95])
q = gammakit.regularized_gamma_p_inverse(s, u)
print("quantiles of the gamma distribution with shape s:")
print(q)
print("back to probabilities:")
print(gammakit.regularized_gamma_p(s, q))


## Precise log-gamma

# Derived tables carry their own arbitrary precision context. Strings are
# parsed at that precision, so arguments do not lose digits to float64.

print("############################ Lanczos ##########################")
tables = derive_lanczos_tables(LanczosParameters(g=607 / 128, n=15, scale=50))
print(tables.P_fast)
print(tables.log_gamma_precise("0.0000000001"))
print(tables.log_gamma_precise("91423123456789"))


## Comparing evaluators

print("############################ Gamma ##########################")
for evaluator in [GammaLanczos(lanczos=tables), GammaGergoNemes()]:
    print(type(evaluator).__name__, [evaluator.evaluate(v) for v in x])

inverse = GammaRegularizedPInverse(max_iterations=100)
print(inverse.evaluate(1.75, 1e-6))
