import numpy as np

# Machine epsilon of float64, the default convergence threshold of the
# series and continued fraction evaluators.
EPSILON = float(np.finfo(np.float64).eps)

# Replaces exact zeros in the modified Lentz recurrences; must stay far below
# EPSILON times any partial denominator.
SMALL_NUMBER = 1e-200
