# -*- coding: utf-8 -*-

# Global settings

# Tolerance for near-zero year fractions and coupons
TINY = 1e-10

# Model time is measured in (actual days / 365) from the base date
DAYS_PER_YEAR = 365.0

# Exercise boundary solver
MAX_NEWTON_ITERATIONS = 10
ROOT_RESIDUAL_TOLERANCE = 1e-8  # |F(y*)| relative to sum of |terms|, above which a lane is not treated as solved

# Order of the Gauss-Hermite rule used by the numerical integration fallback
GAUSS_HERMITE_ORDER = 30

# Monte Carlo
MAX_SIMULATIONS_PER_LOOP = 100_000_000  # Maximum number of total random numbers per loop
DEFAULT_NB_SIMULATIONS = 10_000
