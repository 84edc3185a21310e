# -*- coding: utf-8 -*-
import numpy as np
from dataclasses import dataclass
from typing import Optional

from hwswaption.term_structures.zero_curve import ZeroCurve


@dataclass
class HullWhiteScenarioCurve:
    """
    Discount curve implied by the Hull-White 1 factor model along simulated paths of its driving state.

    Given the state x(t) (a driftless Gaussian with variance Zeta(0,t)), the time t zero coupon bond price is:
        P(t,T) = P(0,T)/P(0,t) · exp(-(H(T) - H(t)) x(t) - ½ (H(T) - H(t))² Zeta(0,t)),    H(T) = B(0,T)

    References:
    [1] Hagan, P. (2002) Evaluating and hedging exotic swap instruments via LGM.
    """
    zero_curve: ZeroCurve
    model_parameters: object  # HullWhite1FactorModelParameters
    years_grid: np.array
    state: np.array  # shape (len(years_grid), nb_simulations)
    currency: Optional[str] = None

    def __post_init__(self):
        self.years_grid = np.atleast_1d(np.asarray(self.years_grid, dtype=np.float64))
        self.state = np.asarray(self.state, dtype=np.float64)
        assert self.state.ndim == 2 and self.state.shape[0] == len(self.years_grid), self.state.shape
        if self.currency is None:
            self.currency = self.zero_curve.currency

    @property
    def nb_scenarios(self):
        return self.state.shape[1]

    @property
    def curve_date(self):
        return self.zero_curve.curve_date

    def get_state(self, t_value) -> np.array:
        if t_value == 0:
            return np.zeros(self.nb_scenarios)
        mask = np.isclose(self.years_grid, t_value, rtol=0.0, atol=1e-12)
        if not mask.any():
            raise ValueError(f"No simulated state at time {t_value}")
        return self.state[np.argmax(mask)]

    def get_discount_factors(self, t_value, t_pay) -> np.array:
        x = self.get_state(t_value)
        ΔH = self.model_parameters.calc_b(0.0, t_pay) - self.model_parameters.calc_b(0.0, t_value)
        zeta = self.model_parameters.calc_zeta(0.0, t_value)
        forward_df = self.zero_curve.get_discount_factors(t_value, t_pay)
        return forward_df * np.exp(-ΔH * x - 0.5 * ΔH**2 * zeta)
