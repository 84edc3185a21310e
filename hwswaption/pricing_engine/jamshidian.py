# -*- coding: utf-8 -*-
import logging
import warnings
import numpy as np
from typing import Tuple

from hwswaption.enums import PayerReceiver
from hwswaption.pricing_engine.black76 import black76_price
from hwswaption.utils.settings import TINY, MAX_NEWTON_ITERATIONS, ROOT_RESIDUAL_TOLERANCE
from hwswaption.utils.vector_math import MAX_FLOAT, safe_exp_multiply

logger = logging.getLogger(__name__)

# Jamshidian decomposition of a swaption into options on zero coupon bonds.
# All arrays are of shape (nb_dates, nb_scenarios) unless stated otherwise; the value of the underlying
# (receive fixed) swap at expiry, per unit of the expiry discount factor, as a function of the standard
# normal factor y is
#     F(y) = Σᵢ Cᵢ fᵢ exp(-vᵢ y)
#
# References:
# [1] Jamshidian, F. (1989) An exact bond option formula. Journal of Finance 44(1).
# [2] Leif B.G. Andersen, Vladimir V. Piterbarg - Interest Rate Modeling, Volume II, Section 10.1


def solve_y_star(coupon: np.array,
                 coefficient: np.array,
                 std_dev: np.array,
                 max_iterations: int=MAX_NEWTON_ITERATIONS) -> Tuple[np.array, np.array]:
    """
    Solves F(y*) = 0 per scenario by Newton-Raphson, starting from the first order solution
        y₀ = Σᵢ Cᵢ fᵢ / Σᵢ Cᵢ fᵢ vᵢ

    Iteration stops after 'max_iterations' steps, or once the largest absolute step over all scenarios is exactly 0.
    A scenario whose step is not finite (e.g. a zero derivative) is frozen at its last finite iterate.

    Returns
    -------
    tuple of np.array
        (y_star, is_solved), each of shape (nb_scenarios,). 'is_solved' is False where the relative residual
        |F(y*)| / Σᵢ |Cᵢ fᵢ exp(-vᵢ y*)| exceeds ROOT_RESIDUAL_TOLERANCE, or where y* has diverged so far that
        a term of F is clamped to the largest float.
    """
    if coupon is None or coefficient is None or std_dev is None:
        raise ValueError('Swap quantities are required to solve for the exercise boundary')

    cf = coupon * coefficient

    with np.errstate(divide='ignore', invalid='ignore'):
        y = cf.sum(axis=0) / (cf * std_dev).sum(axis=0)
    y = np.where(np.isfinite(y), y, 0.0)

    is_frozen = np.zeros(y.shape, dtype=bool)
    for _ in range(max_iterations):
        terms = safe_exp_multiply(-std_dev * y, cf)
        value = terms.sum(axis=0)
        derivative = -(std_dev * terms).sum(axis=0)

        with np.errstate(divide='ignore', invalid='ignore'):
            step = value / derivative
        is_frozen |= ~np.isfinite(step)
        step = np.where(is_frozen, 0.0, step)

        y = y - step
        if np.max(np.abs(step)) == 0.0:
            break

    terms = safe_exp_multiply(-std_dev * y, cf)
    with np.errstate(over='ignore'):
        scale = np.abs(terms).sum(axis=0)
    # Clamped terms mean the iterate has diverged, the residual is then meaningless
    is_diverged = ~np.isfinite(y) | ~np.isfinite(scale) | (np.abs(terms) >= MAX_FLOAT).any(axis=0)

    if (is_frozen | is_diverged).any():
        warnings.warn(f"Newton-Raphson did not converge for {(is_frozen | is_diverged).sum()} scenario(s); "
                      f"these are valued by numerical integration", RuntimeWarning)

    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        residual = np.where(scale > 0.0, np.abs(terms.sum(axis=0)) / scale, 0.0)
    is_solved = (residual <= ROOT_RESIDUAL_TOLERANCE) & ~is_frozen & ~is_diverged

    logger.debug('Exercise boundary solved for %d of %d scenarios', is_solved.sum(), is_solved.size)
    return y, is_solved


def is_solution_unique(coupon: np.array,
                       coefficient: np.array,
                       std_dev: np.array,
                       y_star: np.array) -> np.array:
    """
    Sufficient (not necessary) condition for y* being the only root of F.

    Starting from the first date's term, the terms of the later dates are added, in reverse date order, once a
    negative coupon has been passed (i.e. the positive terms that precede a negative coupon). If the total is
    not positive, F has a single sign change and y* is unique.

    Returns
    -------
    np.array
        Boolean array of shape (nb_scenarios,).
    """
    terms = safe_exp_multiply(-std_dev * y_star, coupon * coefficient)

    total = terms[0].copy()
    have_negative = np.zeros(total.shape, dtype=bool)
    for i in range(len(coupon) - 1, 0, -1):
        have_negative |= coupon[i] <= -TINY
        total += np.maximum(0.0, np.where(have_negative, terms[i], 0.0))

    return total <= 0.0


def price_analytic(coupon: np.array,
                   coefficient: np.array,
                   std_dev: np.array,
                   discount_factor: np.array,
                   df_expiry: np.array,
                   y_star: np.array,
                   payer_receiver: PayerReceiver) -> np.array:
    """
    Jamshidian price: the sum over the schedule dates of Cᵢ × a Black option with forward D(t,T) fᵢ exp(-vᵢ y*),
    strike D(t,Tᵢ) and total standard deviation vᵢ. The options are calls for a payer swaption and puts for a
    receiver swaption.

    Only meaningful for scenarios where y* is the unique root of F.
    """
    price = df_expiry * safe_exp_multiply(-std_dev * y_star, coefficient)
    component = black76_price(F=price, K=discount_factor, std_dev=std_dev, cp=payer_receiver.multiplier)['price']
    return (coupon * component).sum(axis=0)
